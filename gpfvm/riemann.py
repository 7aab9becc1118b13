"""HLL approximate Riemann solver for special-relativistic hydrodynamics."""

from __future__ import annotations

import logging

import numpy as np

from .config import DENS, ENER, MOMX, MOMY, MOMZ, NUM_VAR, PRES, VELX
from .eos import ConversionError, cons_to_prims, signal_speeds, sound_speed_squared

log = logging.getLogger(__name__)


def _pair(prims, cons) -> tuple[np.ndarray, np.ndarray]:
    p = np.asarray(prims, dtype=float)
    c = np.asarray(cons, dtype=float)
    if p.shape != c.shape or p.ndim == 0 or p.shape[0] != NUM_VAR:
        raise ValueError(f"primitive and conserved states must both have {NUM_VAR} rows and match")
    return p, c


def sr_flux(prims, cons) -> np.ndarray:
    """Physical x-flux of one state or a (5, n) stack of states."""
    p, c = _pair(prims, cons)
    vx = p[VELX]
    flux = np.empty_like(c)
    flux[DENS] = c[DENS] * vx
    flux[MOMX] = c[MOMX] * vx + p[PRES]
    flux[MOMY] = c[MOMY] * vx
    flux[MOMZ] = c[MOMZ] * vx
    flux[ENER] = c[MOMX]
    return flux


def sr_hll_flux(prims_left, cons_left, prims_right, cons_right, sl, sr) -> np.ndarray:
    """HLL flux between a left and a right state for wave speeds sl < sr."""
    flux_left = sr_flux(prims_left, cons_left)
    flux_right = sr_flux(prims_right, cons_right)
    cl = np.asarray(cons_left, dtype=float)
    cr = np.asarray(cons_right, dtype=float)
    if cl.shape != cr.shape:
        raise ValueError("left and right states must have the same shape")
    sl = np.asarray(sl, dtype=float)
    sr = np.asarray(sr, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        return (sr * flux_left - sl * flux_right + sl * sr * (cr - cl)) / (sr - sl)


def _face_prims(face: np.ndarray, cons: np.ndarray, i: int, gamma: float) -> np.ndarray:
    """Primitives of one face value, falling back to the cell average on failure."""
    try:
        return cons_to_prims(face[:, i], gamma)
    except ConversionError as exc:
        log.warning("face state at cell %d is unphysical (%s); using the cell average", i, exc)
        face[:, i] = cons[:, i]
        return cons_to_prims(face[:, i], gamma)


def hll(cons, face_left, face_right, start: int, stop: int, gamma: float, limit: bool = False) -> np.ndarray:
    """Interface fluxes for interfaces start..stop-1.

    Interface i lies between the right face of cell i and the left face of
    cell i+1, so the face arrays must be valid for cells start..stop. With
    ``limit`` set, a cell whose face values do not bracket its average has its
    left face reset to the average. The inputs are left untouched; the result
    is shaped like ``cons`` with zeros outside the range.
    """
    u = np.asarray(cons, dtype=float)
    fl = np.array(face_left, dtype=float)
    fr = np.array(face_right, dtype=float)
    if u.ndim != 2 or u.shape[0] != NUM_VAR:
        raise ValueError(f"cons must be a ({NUM_VAR}, cells) array")
    if fl.shape != u.shape or fr.shape != u.shape:
        raise ValueError("face arrays must have the shape of cons")
    if start < 0 or start > stop or stop + 1 > u.shape[1]:
        raise ValueError(f"interfaces [{start}, {stop}) do not fit in {u.shape[1]} cells")

    prims_left = np.zeros_like(u)
    prims_right = np.zeros_like(u)
    cells = range(start, stop + 1)
    for i in cells:
        prims_left[:, i] = _face_prims(fl, u, i, gamma)
        prims_right[:, i] = _face_prims(fr, u, i, gamma)

    if limit:
        for i in cells:
            cell = u[:, i]
            if np.any((fr[:, i] - cell) * (cell - fl[:, i]) < 0.0):
                fl[:, i] = cell
                prims_left[:, i] = cons_to_prims(fl[:, i], gamma)

    left_cons = fr[:, start:stop]
    left_prims = prims_right[:, start:stop]
    right_cons = fl[:, start + 1 : stop + 1]
    right_prims = prims_left[:, start + 1 : stop + 1]

    left_minus, left_plus = signal_speeds(left_prims, sound_speed_squared(left_prims, gamma))
    right_minus, right_plus = signal_speeds(right_prims, sound_speed_squared(right_prims, gamma))
    sl = np.fmin(left_minus, right_minus)
    sr = np.fmax(left_plus, right_plus)

    upwind_left = sr_flux(left_prims, left_cons)
    upwind_right = sr_flux(right_prims, right_cons)
    middle = sr_hll_flux(left_prims, left_cons, right_prims, right_cons, sl, sr)

    flux = np.zeros_like(u)
    flux[:, start:stop] = np.where(0.0 <= sl, upwind_left, np.where(0.0 <= sr, middle, upwind_right))
    return flux