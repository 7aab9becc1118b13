"""One-dimensional special-relativistic hydrodynamics on a uniform grid."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from .config import DENS, DENSP, NDIMS, NUM_VAR, PRES, VELX, VELY, VELZ, Parameters, SpaceMethod, TestProblem
from .eos import ConversionError, cons_to_prims, prims_to_cons, signal_speeds, sound_speed_squared
from .gp_kernel import GPKernel
from .reconstruction import fog, gp_reconstruct, weno
from .riemann import hll

log = logging.getLogger(__name__)

_OUTPUT_FILES = (
    ("Density.dat", DENSP),
    ("VelocityX.dat", VELX),
    ("VelocityY.dat", VELY),
    ("VelocityZ.dat", VELZ),
    ("Pressure.dat", PRES),
)


class Domain:
    """Grid state, time integration and boundary handling of one simulation."""

    def __init__(self, params: Parameters | None = None) -> None:
        self.params = params if params is not None else Parameters()
        p = self.params
        if p.space_method is SpaceMethod.MOOD531:
            raise ValueError("MOOD reconstruction is not supported")

        self.cons = np.zeros((NUM_VAR, p.xdim))
        self.prims = np.zeros((NUM_VAR, p.xdim))
        self.t = p.t0
        self.dt = 0.0
        self.dt_sim = 1.0e-10

        self.kernel: GPKernel | None = None
        self._weights: tuple[np.ndarray, np.ndarray] | None = None
        if p.space_method in (SpaceMethod.GPR1, SpaceMethod.GPR2):
            self.kernel = GPKernel(p.ell)
            radius = 1 if p.space_method is SpaceMethod.GPR1 else 2
            self._weights = self.kernel.calculate_preds(radius)

    def shock_tube_ic(self) -> None:
        """Two constant states split at x = 0.5."""
        p = self.params
        centres = (np.arange(p.xdim) - p.ngc) * p.dx + 0.5 * p.dx
        left = centres < 0.5
        self.prims[DENSP] = np.where(left, p.rho_left, p.rho_right)
        self.prims[PRES] = np.where(left, p.p_left, p.p_right)
        self.prims[VELX : VELZ + 1] = np.where(
            left[None, :], np.asarray(p.vel_left, dtype=float)[:, None], np.asarray(p.vel_right, dtype=float)[:, None]
        )
        self.cons = prims_to_cons(self.prims, p.gamma)

    def shu_osher_ic(self) -> None:
        """Shock running into a sinusoidal density field."""
        p = self.params
        offsets = p.dx * (np.arange(p.xdim) - p.x_start)
        left = offsets <= 0.5
        self.prims[:] = 0.0
        self.prims[DENSP] = np.where(left, 3.857143, 1.0 + 0.2 * np.sin(5.0 * (-4.5 + (p.dx * 0.5 + offsets))))
        self.prims[VELX] = np.where(left, 2.629369, 0.0)
        self.prims[PRES] = np.where(left, 10.33333, 1.0)
        self.cons = prims_to_cons(self.prims, p.gamma)

    def neumann_bc(self) -> None:
        """Copy the outermost interior cells into the guard cells."""
        p = self.params
        self.cons[:, : p.ngc] = self.cons[:, [p.x_start]]
        self.cons[:, p.x_end :] = self.cons[:, [p.x_end - 1]]

    def shu_osher_bc(self) -> None:
        """Hold the guard-cell density at the outermost guard values."""
        p = self.params
        for var in range(NDIMS):
            self.cons[var, 1 : p.ngc] = self.cons[var, 0]
            self.cons[var, p.x_end :] = self.cons[var, -1]

    def apply_ic(self) -> None:
        """Set the initial condition of the configured test problem."""
        if self.params.test_problem is TestProblem.SHUOSHER:
            self.shu_osher_ic()
        else:
            self.shock_tube_ic()

    def apply_bc(self) -> None:
        """Apply the boundary condition of the configured test problem."""
        self.shu_osher_bc()

    def find_dt(self) -> float:
        """Compute, store and return the next CFL-limited time step."""
        p = self.params
        lo, hi = p.x_start - 1, p.x_end + 1
        try:
            prims = cons_to_prims(self.cons[:, lo:hi], p.gamma)
        except ConversionError as exc:
            raise ConversionError(
                f"conversion failure while finding the time step: {exc}", exc.code, exc.index
            ) from exc
        self.prims[:, lo:hi] = prims

        slow, fast = signal_speeds(prims, sound_speed_squared(prims, p.gamma))
        with np.errstate(divide="ignore", invalid="ignore"):
            limits = p.dx / np.fmax(np.abs(slow), np.abs(fast))
        limits = np.where(np.isnan(limits), np.inf, limits)
        dt = min(1.0e10, float(np.min(limits))) * p.cfl

        if self.t + dt > p.tn:
            dt = p.tn - self.t
        if p.slow_start and dt > self.dt_sim:
            dt = self.dt_sim
            self.dt_sim *= 2.0
        self.dt = dt
        return dt

    def reconstruct(self, start: int, stop: int) -> tuple[np.ndarray, np.ndarray]:
        """Left and right face values for cells start..stop-1."""
        method = self.params.space_method
        if method is SpaceMethod.WENO:
            return weno(self.cons, start, stop)
        if method is SpaceMethod.FOG:
            return fog(self.cons, start, stop)
        left_weights, right_weights = self._weights
        return gp_reconstruct(self.cons, start, stop, left_weights, right_weights)

    def update(self, flux, start: int, stop: int) -> None:
        """Advance cells start..stop-1 by the flux difference over one step."""
        flux = np.asarray(flux, dtype=float)
        if flux.shape != self.cons.shape:
            raise ValueError("flux must have the shape of the conserved array")
        if start < 1 or stop > self.cons.shape[1] or start > stop:
            raise ValueError(f"invalid update range [{start}, {stop})")
        dx = self.params.dx
        self.cons[:, start:stop] -= self.dt * (flux[:, start:stop] - flux[:, start - 1 : stop - 1]) / dx

    def forward_euler(self) -> None:
        """One first-order stage: reconstruct, solve Riemann problems, update."""
        p = self.params
        face_left, face_right = self.reconstruct(p.x_start - 1, p.x_end + 1)
        flux = hll(
            self.cons,
            face_left,
            face_right,
            p.x_start - 1,
            p.x_end,
            p.gamma,
            limit=p.space_method is SpaceMethod.WENO,
        )
        self.update(flux, p.x_start, p.x_end)
        self.apply_bc()

    def rk3(self) -> None:
        """Strong-stability-preserving third-order Runge-Kutta step."""
        saved = self.cons.copy()
        self.forward_euler()
        self.forward_euler()
        self.cons = 0.25 * self.cons + 0.75 * saved
        self.forward_euler()
        self.cons = (2.0 / 3.0) * self.cons + (1.0 / 3.0) * saved

    def step(self) -> float:
        """Take one time step and return its size."""
        dt = self.find_dt()
        self.t += dt
        if dt < 0.0:
            raise RuntimeError(f"time step broke at time {self.t}")
        if self.params.rk_method == 1:
            self.forward_euler()
        else:
            self.rk3()
        log.info("time %g, dt %g", self.t, dt)
        return dt

    def run(self) -> int:
        """Step until the final time is reached; return the number of steps."""
        steps = 0
        while True:
            self.step()
            steps += 1
            if self.t >= self.params.tn:
                return steps

    def primitives(self) -> np.ndarray:
        """Primitive variables of the current conserved state."""
        return cons_to_prims(self.cons.copy(), self.params.gamma)

    def write_results(self, directory="OutputData") -> list[Path]:
        """Write interior primitive profiles, one file per variable."""
        out = Path(directory)
        out.mkdir(parents=True, exist_ok=True)
        prims = self.primitives()
        interior = slice(self.params.x_start, self.params.x_end)
        paths = []
        for name, row in _OUTPUT_FILES:
            path = out / name
            line = "".join(f"{value:.9g} " for value in prims[row, interior])
            path.write_text(line + "\n")
            paths.append(path)
        return paths