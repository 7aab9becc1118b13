"""Gaussian-process prediction weights for face values of cell averages."""

from __future__ import annotations

import math

import numpy as np

from .cholesky import cholesky_backsub, cholesky_decomposition


def _sigdel(ell: float) -> float:
    return ell * math.sqrt(2.0)


def quad_exact(y: float, x: float, ell: float) -> float:
    """Squared-exponential kernel integrated over two unit cells centred at y and x."""
    sigdel = _sigdel(ell)
    yxp = (x - y + 1.0) / sigdel
    yxn = (x - y) / sigdel
    yxm = (x - y - 1.0) / sigdel
    inv_sqrt_pi = 1.0 / math.sqrt(math.pi)
    return (
        math.sqrt(math.pi)
        * ell
        * ell
        * (
            yxp * math.erf(yxp)
            + yxm * math.erf(yxm)
            - 2.0 * (yxn * math.erf(yxn) + inv_sqrt_pi * math.exp(-yxn * yxn))
            + inv_sqrt_pi * (math.exp(-yxp * yxp) + math.exp(-yxm * yxm))
        )
    )


def quad_cross(x: float, t: float, ell: float) -> float:
    """Kernel between the point t and the unit cell centred at x."""
    sigdel = _sigdel(ell)
    integrand = math.erf((t - x + 0.5) / sigdel) - math.erf((t - x - 0.5) / sigdel)
    return ell * math.sqrt(0.5 * math.pi) * integrand


def prediction_vectors(radius: int, ell: float) -> tuple[np.ndarray, np.ndarray]:
    """Normalised weights predicting the +1/2 and -1/2 face values.

    The first array evaluates the face at +1/2, the second the face at -1/2,
    over a stencil of ``2 * radius + 1`` cells.
    """
    if radius < 1:
        raise ValueError("radius must be at least 1")
    if ell <= 0.0:
        raise ValueError("ell must be positive")
    stencil = [float(i - radius) for i in range(2 * radius + 1)]
    covariance = np.array([[quad_exact(si, sj, ell) for sj in stencil] for si in stencil])
    targets = np.array(
        [
            [quad_cross(s, 0.5, ell) for s in stencil],
            [quad_cross(s, -0.5, ell) for s in stencil],
        ]
    )
    weights = cholesky_backsub(cholesky_decomposition(covariance), targets)
    weights /= weights.sum(axis=1, keepdims=True)
    return weights[0].copy(), weights[1].copy()


class GPKernel:
    """Holds the radius-1 and radius-2 prediction weights for one length scale."""

    def __init__(self, ell: float) -> None:
        if ell <= 0.0:
            raise ValueError("ell must be positive")
        self.ell = ell
        self.r1_left = np.zeros(3)
        self.r1_right = np.zeros(3)
        self.r2_left = np.zeros(5)
        self.r2_right = np.zeros(5)

    def calculate_preds(self, radius: int) -> tuple[np.ndarray, np.ndarray]:
        """Compute and store the weights for radius 1 or 2; return them."""
        if radius not in (1, 2):
            raise ValueError(f"unsupported stencil radius: {radius}")
        left, right = prediction_vectors(radius, self.ell)
        if radius == 1:
            self.r1_left, self.r1_right = left, right
        else:
            self.r2_left, self.r2_right = left, right
        return left, right