"""Ideal-gas equation of state for special-relativistic hydrodynamics.

Conserved states are ordered (D, Mx, My, Mz, E) and primitive states
(rho, vx, vy, vz, p), as defined in :mod:`gpfvm.config`.
"""

from __future__ import annotations

import logging

import numpy as np

from .config import DENS, DENSP, ENER, NUM_VAR, PRES, VELX, VELZ

log = logging.getLogger(__name__)

MIN_DENSITY = 1.0e-5
MIN_PRESSURE = 1.0e-9

NO_SOLUTION = 1
NEGATIVE_PRESSURE = 2
NOT_CONVERGED = 3
NAN_PRESSURE = 4

_INVERTER_MAX_ITER = 20
_INVERTER_TOL = 1.0e-9
_FIX_MAX_ITER = 20
_NEWTON_MAX_COUNT = 30


class ConversionError(ValueError):
    """A conserved state could not be turned into primitive variables."""

    def __init__(self, message: str, code: int = NOT_CONVERGED, index: int | None = None):
        super().__init__(message)
        self.code = code
        self.index = index


def _cell(state) -> np.ndarray:
    cell = np.asarray(state, dtype=float)
    if cell.shape != (NUM_VAR,):
        raise ValueError(f"expected a state of {NUM_VAR} values, got shape {cell.shape}")
    return cell


def _stack(state) -> np.ndarray:
    values = np.asarray(state, dtype=float)
    if values.ndim == 0 or values.shape[0] != NUM_VAR:
        raise ValueError(f"expected {NUM_VAR} variables along the first axis")
    return values


def lorentz(prims) -> float:
    """Lorentz factor of a single primitive state; the speed must be below 1."""
    vel = _cell(prims)[VELX : VELZ + 1]
    norm = float(vel @ vel)
    if norm >= 1.0:
        raise ValueError(f"velocity exceeds the speed of light: |v|^2 = {norm}")
    return (1.0 - norm) ** -0.5


def enthalpy(prims, gamma: float):
    """Specific enthalpy of an ideal gas for one state or a stack of states."""
    p = _stack(prims)
    return 1.0 + (gamma / (gamma - 1.0)) * p[PRES] / p[DENSP]


def prims_to_cons(prims, gamma: float) -> np.ndarray:
    """Conserved variables from primitive ones, for one state or a (5, n) stack."""
    p = _stack(prims)
    rho, vel, pres = p[DENSP], p[VELX : VELZ + 1], p[PRES]
    v2 = np.sum(vel * vel, axis=0)
    if np.any(v2 >= 1.0):
        raise ValueError("velocity exceeds the speed of light")
    lor = 1.0 / np.sqrt(1.0 - v2)
    h = enthalpy(p, gamma)
    alpha = rho * h * lor * lor

    cons = np.empty_like(p)
    cons[DENS] = rho * lor
    cons[VELX : VELZ + 1] = vel * alpha
    cons[ENER] = alpha - pres
    return cons


def energy_inverter(cons, gamma: float) -> np.ndarray:
    """Recover the primitive state of one cell by Newton iteration on pressure.

    Raises ConversionError with a code telling why no acceptable solution was
    found, and ValueError if the Lorentz factor becomes unphysical.
    """
    c = _cell(cons)
    with np.errstate(all="ignore"):
        d = np.float64(c[DENS])
        e = np.float64(c[ENER])
        mom = c[VELX : VELZ + 1]
        m2 = np.float64(mom @ mom)

        if e - np.sqrt(m2 + d * d) < 0.0:
            raise ConversionError("the equation does not admit a solution", NO_SOLUTION)

        gam = gamma / (gamma - 1.0)
        m = np.sqrt(m2)
        d1 = 1.0 / d
        pmin = np.sqrt(m2 / (1.0 - 1.0e-12)) - e
        p = max(max(m - e, np.float64(0.0)), pmin)

        yp = np.float64(0.0)
        converged = False
        for _ in range(_INVERTER_MAX_ITER):
            alpha = e + p
            alpha2 = alpha * alpha
            lor2 = 1.0 / (1.0 - m2 / alpha2)
            if lor2 < 1.0:
                raise ValueError(f"invalid Lorentz factor squared: {lor2}")
            lor = np.sqrt(lor2)
            tau = lor * d1
            h = 1.0 + gam * p * tau
            dh_dp = gam * tau
            dh_dtau = gam * p

            yp = d * h * lor - e - p
            dyp = d * lor * dh_dp - m2 * lor2 * lor / (alpha2 * alpha) * (lor * dh_dtau + d * h) - 1.0
            dp = yp / dyp
            p -= dp
            if p < pmin:
                p = pmin
            if abs(dp) < _INVERTER_TOL * e:
                converged = True
                break

        if p < 0.0:
            raise ConversionError("negative pressure", NEGATIVE_PRESSURE)
        if np.isnan(p):
            raise ConversionError("pressure is NaN", NAN_PRESSURE)
        if not converged or abs(yp / (e + p)) > 1.0e-4 or p < m - e:
            raise ConversionError("pressure iteration did not converge", NOT_CONVERGED)

        alpha2 = (e + p) ** 2
        lor = np.sqrt(alpha2 / (alpha2 - m2))
        tau = lor * d1
        vel = mom / (e + p)
        return np.array([1.0 / tau, *vel, p], dtype=float)


def pressure_fix(cons, gamma: float) -> tuple[np.ndarray, float]:
    """Primitive state with pressure pinned to MIN_PRESSURE.

    Returns the primitives and the total energy consistent with them.
    """
    c = _cell(cons)
    p = MIN_PRESSURE
    alpha = gamma / (gamma - 1.0)
    with np.errstate(all="ignore"):
        d = np.float64(c[DENS])
        mom = c[VELX : VELZ + 1]
        m = np.sqrt(np.float64(mom @ mom))
        umax = m / d
        u0 = umax
        dh = d + p * np.sqrt(1.0 + u0 * u0) * alpha
        f0 = m / dh - u0
        u1 = (-d + np.sqrt(d * d + 4.0 * m * alpha * p)) / (2.0 * alpha * p)

        done = False
        for _ in range(1, _FIX_MAX_ITER):
            dh = d + p * np.sqrt(1.0 + u1 * u1) * alpha
            f1 = m / dh - u1
            if done:
                break
            du = (u1 - u0) / (f1 - f0) * f1
            u0, f0 = u1, f1
            u1 = np.fmax(np.fmin(u1 - du, umax), 0.0)
            if abs(f1) < 1.0e-9:
                done = True
        else:
            raise ConversionError("pressure fix did not converge", NEGATIVE_PRESSURE)

        lor = np.sqrt(1.0 + u1 * u1)
        dh = d + p * lor * alpha
        energy = dh * lor - p
        vel = mom / (dh * lor)
        return np.array([d / lor, *vel, p], dtype=float), float(energy)


def _lorentz_from_p(c: np.ndarray, pres) -> np.float64:
    mom = c[VELX : VELZ + 1]
    return 1.0 / np.sqrt(1.0 - (mom @ mom) / (c[ENER] + pres) ** 2)


def _newton_step(c: np.ndarray, pres, gamma: float):
    gam = gamma / (gamma - 1.0)
    d, e = c[DENS], c[ENER]
    mom = c[VELX : VELZ + 1]
    lor = _lorentz_from_p(c, pres)
    tau = lor / d
    h = 1.0 + gam * pres * tau
    f = d * h * lor - e - pres
    df = d * lor * gam * tau - (mom @ mom) * lor**3 / (e + pres) ** 3 * (lor * gam * pres + d * h) - 1.0
    nxt = pres - f / df
    return nxt if nxt > 0.0 else np.float64(1.0e-10)


def newton_pressure(cons, gamma: float) -> float:
    """Pressure of one cell by plain Newton iteration from p = 0.1."""
    c = _cell(cons)
    with np.errstate(all="ignore"):
        pres = np.float64(0.1)
        for count in range(1, _NEWTON_MAX_COUNT + 1):
            last = pres
            pres = _newton_step(c, pres, gamma)
            if count == _NEWTON_MAX_COUNT:
                raise ConversionError("Newton iteration count exceeded", NO_SOLUTION)
            if not abs(last - pres) > 1.0e-9:
                break
    return float(pres)


def naive_newton(cons, gamma: float) -> np.ndarray:
    """Primitive state of one cell using :func:`newton_pressure`."""
    c = _cell(cons)
    pres = newton_pressure(c, gamma)
    if pres < 0.0:
        raise ConversionError("negative pressure", NO_SOLUTION)
    with np.errstate(all="ignore"):
        lor = _lorentz_from_p(c, pres)
        vel = c[VELX : VELZ + 1] / (c[ENER] + pres)
        return np.array([c[DENS] / lor, *vel, pres], dtype=float)


def cons_to_prims(cons, gamma: float) -> np.ndarray:
    """Primitive variables for one state or a (5, n) stack of states.

    Negative densities are floored at MIN_DENSITY and, where the energy
    inversion fails, the pressure fix redefines the energy. When ``cons`` is a
    float ndarray these corrections are written back into it.
    """
    values = np.asarray(cons, dtype=float)
    single = values.ndim == 1
    cells = _stack(values).reshape(NUM_VAR, -1)
    prims = np.empty_like(cells)

    for i, column in enumerate(cells.T):
        if column[DENS] < 0.0:
            log.warning("negative density at cell %d, flooring to %g", i, MIN_DENSITY)
            column[DENS] = MIN_DENSITY
        try:
            prims[:, i] = energy_inverter(column, gamma)
        except ConversionError as exc:
            log.warning("energy inversion failed at cell %d (%s); trying the pressure fix", i, exc)
            try:
                fixed, energy = pressure_fix(column, gamma)
            except ConversionError as fix_exc:
                raise ConversionError(
                    f"pressure fix failed at cell {i}", fix_exc.code, index=i
                ) from fix_exc
            column[ENER] = energy
            prims[:, i] = fixed

    return prims[:, 0] if single else prims


def sound_speed_squared(prims, gamma: float):
    """Squared relativistic sound speed of an ideal gas."""
    p = _stack(prims)
    return gamma * p[PRES] / (enthalpy(p, gamma) * p[DENSP])


def signal_speeds(prims, cs2):
    """Slowest and fastest signal speeds in x as a (left, right) pair."""
    p = _stack(prims)
    vx, vy, vz = p[VELX], p[VELX + 1], p[VELZ]
    cs2 = np.asarray(cs2, dtype=float)
    v2 = vx * vx + vy * vy + vz * vz
    with np.errstate(invalid="ignore"):
        sroot = np.sqrt(cs2 * (1.0 - vx * vx - (vy + vy + vz * vz) * cs2 * (1.0 - v2)))
    denom = 1.0 - v2 * cs2
    base = vx * (1.0 - cs2)
    return (base - sroot) / denom, (base + sroot) / denom