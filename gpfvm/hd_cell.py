"""Cell-based finite-volume update for the non-relativistic Euler equations.

Conserved states are ordered (density, x-momentum, y-momentum, energy).
A cell owns four flux walls: 0 is its right (+x) face, 1 its left (-x) face,
2 its top (+y) face and 3 its bottom (-y) face.
"""

from __future__ import annotations

import math

import numpy as np

RIGHT_WALL = 0
LEFT_WALL = 1
TOP_WALL = 2
BOTTOM_WALL = 3

_VAR_DENS = 0
_VAR_MOMX = 1
_VAR_MOMY = 2
_VAR_ENER = 3

State = tuple[float, float, float, float]


def find_flux(dens, momx, momy, energy, pres, direction) -> State:
    """Physical flux of a conserved state; direction 0 is x, anything else y."""
    if direction == 0:
        vel = momx / dens
        return (momx, momx * vel + pres, momy * vel, vel * (energy + pres))
    vel = momy / dens
    return (momy, momx * vel, momy * vel + pres, vel * (energy + pres))


def hll_flux(left, right, sl, sr, pres_left, pres_right, direction) -> State:
    """HLL flux between two conserved states for wave speeds sl < sr."""
    if len(left) != 4 or len(right) != 4:
        raise ValueError("states must have four components")
    if sr == sl:
        raise ValueError("wave speeds must differ")
    flux_left = find_flux(*left, pres_left, direction)
    flux_right = find_flux(*right, pres_right, direction)
    return tuple(
        (sr * fl - sl * fr + sr * sl * (ur - ul)) / (sr - sl)
        for fl, fr, ul, ur in zip(flux_left, flux_right, left, right)
    )


def _pressure(state, gamma: float) -> float:
    dens, momx, momy, energy = state
    return (gamma - 1.0) * (energy - 0.5 * (momx * momx + momy * momy) / dens)


def _sound_speed(pres: float, dens: float, gamma: float) -> float:
    ratio = gamma * pres / dens
    if ratio < 0.0:
        raise ValueError(f"negative pressure or density in face state: p={pres}, rho={dens}")
    return math.sqrt(ratio)


class FluxWall:
    """Face values (and later fluxes) of the four variables at each quadrature point."""

    def __init__(self, nqp: int) -> None:
        if nqp < 1:
            raise ValueError("at least one quadrature point is required")
        self.values = np.zeros((4, nqp))

    @property
    def nqp(self) -> int:
        return self.values.shape[1]

    @property
    def dens(self) -> np.ndarray:
        return self.values[_VAR_DENS]

    @property
    def momx(self) -> np.ndarray:
        return self.values[_VAR_MOMX]

    @property
    def momy(self) -> np.ndarray:
        return self.values[_VAR_MOMY]

    @property
    def energy(self) -> np.ndarray:
        return self.values[_VAR_ENER]


class Cell:
    """One grid cell holding its state, its neighbours and its face walls."""

    def __init__(self, x, y, dens, momx, momy, energy, gamma, dx, dt, nqp=1) -> None:
        if dx <= 0.0:
            raise ValueError("dx must be positive")
        if gamma <= 1.0:
            raise ValueError("gamma must exceed 1")
        self.x = x
        self.y = y
        self.dens = float(dens)
        self.momx = float(momx)
        self.momy = float(momy)
        self.energy = float(energy)
        self.pres = 0.0
        self.xvel = 0.0
        self.yvel = 0.0
        self.cs = 0.0
        self.gamma = gamma
        self.dx = dx
        self.dt = dt
        self.nqp = nqp
        self.walls = [FluxWall(nqp) for _ in range(4)]
        self.left: Cell | None = None
        self.right: Cell | None = None
        self.top: Cell | None = None
        self.bottom: Cell | None = None
        self.updated: State | None = None

    def _conserved(self) -> State:
        return (self.dens, self.momx, self.momy, self.energy)

    def assign(self, name: str, value: float) -> None:
        """Set a primitive quantity by name: DENS, PRES, XVEL or YVEL."""
        attrs = {"DENS": "dens", "PRES": "pres", "XVEL": "xvel", "YVEL": "yvel"}
        try:
            attr = attrs[name]
        except KeyError:
            raise ValueError(f"unknown variable name: {name!r}") from None
        setattr(self, attr, float(value))

    def pressure(self) -> float:
        """Compute, store and return the pressure from the conserved state."""
        self.pres = _pressure(self._conserved(), self.gamma)
        return self.pres

    def cons_to_prims(self) -> None:
        """Set velocities and pressure from the conserved state."""
        self.xvel = self.momx / self.dens
        self.yvel = self.momy / self.dens
        self.pressure()

    def prims_to_cons(self) -> None:
        """Set momenta and energy from density, velocities and pressure."""
        self.momx = self.dens * self.xvel
        self.momy = self.dens * self.yvel
        self.energy = self.pres / (self.gamma - 1.0) + 0.5 * self.dens * (
            self.xvel * self.xvel + self.yvel * self.yvel
        )

    def stencil(self) -> np.ndarray:
        """(4, 5) array: each variable over this, left, top, right and bottom cells."""
        neighbours = (self.left, self.top, self.right, self.bottom)
        if any(n is None for n in neighbours):
            raise ValueError(f"cell ({self.x}, {self.y}) lacks a neighbour")
        cells = (self, *neighbours)
        return np.array([c._conserved() for c in cells]).T

    def gp_reconstruction(self) -> None:
        """Fill every wall with the cell average at every quadrature point."""
        centre = np.array(self._conserved())
        for wall in self.walls:
            wall.values[:] = centre[:, None]

    def riemann_solver(self) -> None:
        """Solve the HLL problems on the right and top faces at each quadrature point.

        The resulting flux is written into this cell's wall and the matching
        wall of the neighbour.
        """
        if self.right is None or self.top is None:
            raise ValueError(f"cell ({self.x}, {self.y}) needs right and top neighbours")
        for direction in (0, 2):
            own = self.walls[direction]
            if direction == 0:
                other = self.right.walls[LEFT_WALL]
                vel_var = _VAR_MOMX
            else:
                other = self.top.walls[BOTTOM_WALL]
                vel_var = _VAR_MOMY
            for q in range(self.nqp):
                left = tuple(float(v) for v in own.values[:, q])
                right = tuple(float(v) for v in other.values[:, q])
                vel_left = left[vel_var] / left[_VAR_DENS]
                vel_right = right[vel_var] / right[_VAR_DENS]
                pres_left = _pressure(left, self.gamma)
                pres_right = _pressure(right, self.gamma)
                cs_left = _sound_speed(pres_left, left[_VAR_DENS], self.gamma)
                cs_right = _sound_speed(pres_right, right[_VAR_DENS], self.gamma)
                sl = min(vel_left - cs_left, vel_right - cs_right)
                sr = max(vel_left + cs_left, vel_right + cs_right)

                if 0.0 <= sl:
                    flux = find_flux(*left, pres_left, direction)
                elif 0.0 <= sr:
                    flux = hll_flux(left, right, sl, sr, pres_left, pres_right, direction)
                else:
                    flux = find_flux(*right, pres_right, direction)
                own.values[:, q] = flux
                other.values[:, q] = flux

    def flux_recon(self) -> State:
        """Compute the updated conserved state from the wall fluxes and store it."""
        diff = (self.walls[RIGHT_WALL].values[:, 0] - self.walls[TOP_WALL].values[:, 0]) / self.dx
        self.updated = tuple(
            float(u - self.dt * d) for u, d in zip(self._conserved(), diff)
        )
        return self.updated

    def accept_update(self) -> None:
        """Replace the conserved state with the one from :meth:`flux_recon`."""
        if self.updated is None:
            raise RuntimeError("no update has been computed")
        self.dens, self.momx, self.momy, self.energy = self.updated