# gpfvm

A small finite-volume toolkit for one-dimensional special-relativistic
hydrodynamics, with a Newtonian cell model alongside it.

It provides:

- **Reconstruction** of face values: fifth-order WENO (`weno`), first-order
  piecewise-constant values (`fog`) and Gaussian-process reconstruction from
  stencil weights (`gp_reconstruct`), all in `gpfvm.reconstruction`.
- **Gaussian-process prediction weights** for radius 1 or 2 stencils
  (`gpfvm.gp_kernel`), built with the Cholesky routines in `gpfvm.cholesky`.
- **Equation of state and variable conversion** for an ideal gas in special
  relativity: `prims_to_cons`, `cons_to_prims` (a Newton energy inverter with
  a pressure-fix fallback), sound speed and signal speeds (`gpfvm.eos`).
- **An HLL Riemann solver** for relativistic fluxes (`gpfvm.riemann`).
- **A domain driver** (`gpfvm.domain.Domain`) with shock-tube and Shu–Osher
  initial conditions, guard-cell boundary conditions, CFL time-step selection
  with an optional slow start, and forward-Euler or third-order Runge–Kutta
  stepping.
- **A Newtonian cell model** (`gpfvm.hd_cell`) with flux walls, an HLL
  solver on a cell's right and top faces, and a flux update.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running a simulation

The `gpfvm` command sets up the chosen problem (by default the relativistic
shock tube with WENO reconstruction), steps it to the final time, printing the
time and step size after each step, and writes the primitive variables of the
interior cells:

```
gpfvm
gpfvm --method gpr2 --problem shuosher --nx 200 --tn 0.2 --output results
```

Options:

- `--nx` number of interior cells
- `--tn` final time
- `--cfl` CFL number
- `--method` one of `weno`, `fog`, `gpr1`, `gpr2`
- `--problem` one of `shuosher`, `shocktube`
- `--rk` Runge–Kutta order, 1 or 3
- `--no-slow-start` do not ramp up the first time steps
- `--output` directory for the result files (default `OutputData`)

The files `Density.dat`, `VelocityX.dat`, `VelocityY.dat`, `VelocityZ.dat`
and `Pressure.dat` each hold one line of values. The command exits with
status 1 and a message on standard error if a state cannot be converted or a
file cannot be written.

## Using the library

```python
from gpfvm.config import Parameters
from gpfvm.domain import Domain

params = Parameters(nx=200, tn=0.2)
domain = Domain(params)
domain.apply_ic()
domain.apply_bc()
steps = domain.run()

prims = domain.primitives()          # rows: density, vx, vy, vz, pressure
domain.write_results("OutputData")   # returns the paths written
```

`Parameters` is a frozen dataclass holding the grid size and extent, the
left and right shock-tube states, start and end time, CFL number, adiabatic
index, GP length scale `ell`, the reconstruction method (`SpaceMethod`), the
test problem (`TestProblem`) and the Runge–Kutta order. Invalid settings
raise `ValueError`. The derived grid quantities are properties:
`params.dx`, `params.xdim`, `params.x_start` and `params.x_end`.

`Domain.step()` takes a single step and returns its size; `find_dt`,
`reconstruct`, `update`, `forward_euler` and `rk3` expose the individual
stages.

### Gaussian-process weights

```python
from gpfvm.gp_kernel import GPKernel, prediction_vectors

kernel = GPKernel(6.0)
left, right = kernel.calculate_preds(2)   # also stored as r2_left, r2_right

plus_half, minus_half = prediction_vectors(1, 6.0)
```

Each set of weights is normalised to sum to one, so constant data is
reconstructed exactly.

### Variable conversion

```python
from gpfvm.eos import prims_to_cons, cons_to_prims

gamma = 5.0 / 3.0
cons = prims_to_cons([1.0, 0.5, 0.0, 0.0, 1.0], gamma)
prims = cons_to_prims(cons, gamma)
```

Both accept a single state of five values or a `(5, n)` array. When a
conserved state cannot be inverted, even with the pressure fix,
`ConversionError` is raised. Warnings about floored densities and pressure
fixes go to the standard `logging` module.

### Newtonian cells

```python
from gpfvm.hd_cell import Cell

cell = Cell(0, 0, dens=1.0, momx=0.0, momy=0.0, energy=2.5,
            gamma=1.4, dx=0.01, dt=1e-3)
cell.pressure()   # 1.0
```

Cells are linked through their `left`, `right`, `top` and `bottom`
attributes; `gp_reconstruction`, `riemann_solver`, `flux_recon` and
`accept_update` then carry out one update.

## Limitations

- MOOD reconstruction is not available; a `Domain` configured with
  `SpaceMethod.MOOD531` raises `ValueError`.
- The Newtonian model is a single-cell building block: there is no grid
  driver, initial condition or command for it.
- Results are written as plain text only; there is no plotting.