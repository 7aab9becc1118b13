"""Face-value reconstruction of cell averages: WENO, first order and GP."""

from __future__ import annotations

import numpy as np


def _prepare(cons, start: int, stop: int, reach: int) -> np.ndarray:
    values = np.asarray(cons, dtype=float)
    if values.ndim != 2:
        raise ValueError("cons must be a (variables, cells) array")
    if start > stop:
        raise ValueError("start must not exceed stop")
    if start < reach or stop + reach > values.shape[1]:
        raise ValueError(f"the range [{start}, {stop}) needs {reach} neighbouring cells on each side")
    return values


def _shifted(values: np.ndarray, start: int, stop: int, offset: int) -> np.ndarray:
    return values[:, start + offset : stop + offset]


def weno(cons, start: int, stop: int) -> tuple[np.ndarray, np.ndarray]:
    """Fifth-order WENO left and right face values for cells start..stop-1.

    Returns arrays shaped like ``cons``; columns outside the range are zero.
    """
    u = _prepare(cons, start, stop, 2)
    um2, um1, u0, up1, up2 = (_shifted(u, start, stop, k) for k in range(-2, 3))

    p1l = (-1.0 / 6.0) * um2 + (5.0 / 6.0) * um1 + (1.0 / 3.0) * u0
    p1r = (1.0 / 3.0) * um2 + (-7.0 / 6.0) * um1 + (11.0 / 6.0) * u0
    p2l = (1.0 / 3.0) * um1 + (5.0 / 6.0) * u0 + (-1.0 / 6.0) * up1
    p2r = (-1.0 / 6.0) * um1 + (5.0 / 6.0) * u0 + (1.0 / 3.0) * up1
    p3l = (11.0 / 6.0) * u0 + (-7.0 / 6.0) * up1 + (1.0 / 3.0) * up2
    p3r = (1.0 / 3.0) * u0 + (5.0 / 6.0) * up1 + (-1.0 / 6.0) * up2

    beta1 = (13.0 / 12.0) * (um2 - 2.0 * um1 + u0) ** 2 + 0.25 * (um2 - 4.0 * um1 + 3.0 * u0) ** 2
    beta2 = (13.0 / 12.0) * (um1 - 2.0 * u0 + up1) ** 2 + 0.25 * (um1 - up1) ** 2
    beta3 = (13.0 / 12.0) * (u0 - 2.0 * up1 + up2) ** 2 + 0.25 * (3.0 * u0 - 4.0 * up1 + up2) ** 2

    eps = 1.0e-36
    w1l, w2l, w3l = 0.3 / (eps + beta1), 0.6 / (eps + beta2), 0.1 / (eps + beta3)
    w1r, w2r, w3r = 0.1 / (eps + beta1), 0.6 / (eps + beta2), 0.3 / (eps + beta3)
    sum_l = w1l + w2l + w3l
    sum_r = w1r + w2r + w3r

    face_left = np.zeros_like(u)
    face_right = np.zeros_like(u)
    face_left[:, start:stop] = (w1l * p1l + w2l * p2l + w3l * p3l) / sum_l
    face_right[:, start:stop] = (w1r * p1r + w2r * p2r + w3r * p3r) / sum_r
    return face_left, face_right


def fog(cons, start: int, stop: int) -> tuple[np.ndarray, np.ndarray]:
    """First-order (piecewise constant) face values for cells start..stop-1."""
    u = _prepare(cons, start, stop, 0)
    face_left = np.zeros_like(u)
    face_right = np.zeros_like(u)
    face_left[:, start:stop] = u[:, start:stop]
    face_right[:, start:stop] = u[:, start:stop]
    return face_left, face_right


def gp_reconstruct(cons, start: int, stop: int, left_weights, right_weights) -> tuple[np.ndarray, np.ndarray]:
    """Gaussian-process face values from stencil weights.

    The left face takes ``right_weights`` and the right face ``left_weights``,
    matching the orientation of :func:`gpfvm.gp_kernel.prediction_vectors`.
    """
    wl = np.asarray(left_weights, dtype=float)
    wr = np.asarray(right_weights, dtype=float)
    if wl.ndim != 1 or wl.shape != wr.shape or wl.size % 2 == 0:
        raise ValueError("weights must be two vectors of the same odd length")
    radius = wl.size // 2
    u = _prepare(cons, start, stop, radius)
    stencil = np.stack([_shifted(u, start, stop, k) for k in range(-radius, radius + 1)], axis=-1)

    face_left = np.zeros_like(u)
    face_right = np.zeros_like(u)
    face_left[:, start:stop] = stencil @ wr
    face_right[:, start:stop] = stencil @ wl
    return face_left, face_right