"""Run parameters and index conventions for the 1D relativistic solver."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

# Conserved variable rows.
DENS = 0
MOMX = 1
MOMY = 2
MOMZ = 3
ENER = 4

# Primitive variable rows.
DENSP = 0
VELX = 1
VELY = 2
VELZ = 3
PRES = 4

# Face sides.
LEFT = 0
RIGHT = 1

NDIMS = 1
NUM_VAR = 5
NGC = 3


class SpaceMethod(IntEnum):
    """Spatial reconstruction schemes."""

    WENO = 1
    FOG = 2
    GPR1 = 3
    GPR2 = 4
    MOOD531 = 5


class TestProblem(IntEnum):
    """Built-in initial value problems."""

    __test__ = False

    SHUOSHER = 1
    SHOCKTUBE = 2


@dataclass(frozen=True)
class Parameters:
    """Grid, physics and run settings of a simulation."""

    nx: int = 400
    x0: float = 0.0
    xn: float = 1.0

    rho_left: float = 1.0
    rho_right: float = 1.0
    p_left: float = 1000.0
    p_right: float = 0.01
    vel_left: tuple[float, float, float] = (0.0, 0.0, 0.0)
    vel_right: tuple[float, float, float] = (0.0, 0.99, 0.0)

    t0: float = 0.0
    tn: float = 0.4

    space_method: SpaceMethod = SpaceMethod.WENO
    test_problem: TestProblem = TestProblem.SHOCKTUBE
    cfl: float = 0.8
    rk_method: int = 3
    ell: float = 6.0
    mood_order: int = 5
    slow_start: bool = True
    gamma: float = 5.0 / 3.0

    ngc: int = NGC
    num_var: int = NUM_VAR

    def __post_init__(self) -> None:
        if self.nx <= 0:
            raise ValueError("nx must be positive")
        if self.xn <= self.x0:
            raise ValueError("xn must be greater than x0")
        if self.tn < self.t0:
            raise ValueError("tn must not precede t0")
        if self.rk_method not in (1, 3):
            raise ValueError(f"unsupported Runge-Kutta order: {self.rk_method}")
        if self.ell <= 0.0:
            raise ValueError("ell must be positive")
        if self.cfl <= 0.0:
            raise ValueError("cfl must be positive")
        if self.gamma <= 1.0:
            raise ValueError("gamma must exceed 1")
        if self.ngc < 3:
            raise ValueError("at least three guard cells are required")
        if len(self.vel_left) != 3 or len(self.vel_right) != 3:
            raise ValueError("velocities must have three components")
        object.__setattr__(self, "space_method", SpaceMethod(self.space_method))
        object.__setattr__(self, "test_problem", TestProblem(self.test_problem))

    @property
    def dx(self) -> float:
        """Cell width."""
        return (self.xn - self.x0) / self.nx

    @property
    def xdim(self) -> int:
        """Number of cells including guard cells."""
        return 2 * self.ngc + self.nx

    @property
    def x_start(self) -> int:
        """Index of the first interior cell."""
        return self.ngc

    @property
    def x_end(self) -> int:
        """Index one past the last interior cell."""
        return self.xdim - self.ngc