"""Finite-volume hydrodynamics with WENO and Gaussian-process reconstruction."""

__version__ = "0.1.0"

__all__ = [
    "cholesky",
    "cli",
    "config",
    "domain",
    "eos",
    "gp_kernel",
    "hd_cell",
    "reconstruction",
    "riemann",
]