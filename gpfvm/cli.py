"""Command line entry point running a one-dimensional simulation."""

from __future__ import annotations

import argparse
import sys

from .config import Parameters, SpaceMethod, TestProblem
from .domain import Domain
from .eos import ConversionError

_METHODS = [m.name.lower() for m in SpaceMethod if m is not SpaceMethod.MOOD531]
_PROBLEMS = [p.name.lower() for p in TestProblem]


def _parser() -> argparse.ArgumentParser:
    defaults = Parameters()
    parser = argparse.ArgumentParser(prog="gpfvm", description="Run a 1D relativistic hydrodynamics problem.")
    parser.add_argument("--nx", type=int, default=defaults.nx, help="number of interior cells")
    parser.add_argument("--tn", type=float, default=defaults.tn, help="final time")
    parser.add_argument("--cfl", type=float, default=defaults.cfl, help="CFL number")
    parser.add_argument("--method", choices=_METHODS, default=defaults.space_method.name.lower())
    parser.add_argument("--problem", choices=_PROBLEMS, default=defaults.test_problem.name.lower())
    parser.add_argument("--rk", type=int, choices=(1, 3), default=defaults.rk_method, help="Runge-Kutta order")
    parser.add_argument("--no-slow-start", action="store_true", help="do not ramp up the first time steps")
    parser.add_argument("--output", default="OutputData", help="directory for the result files")
    return parser


def main(argv=None) -> int:
    parser = _parser()
    args = parser.parse_args(argv)
    try:
        params = Parameters(
            nx=args.nx,
            tn=args.tn,
            cfl=args.cfl,
            space_method=SpaceMethod[args.method.upper()],
            test_problem=TestProblem[args.problem.upper()],
            rk_method=args.rk,
            slow_start=not args.no_slow_start,
        )
    except ValueError as exc:
        parser.error(str(exc))

    try:
        solver = Domain(params)
        solver.apply_ic()
        solver.apply_bc()
        while True:
            try:
                dt = solver.step()
            except RuntimeError:
                print(f"dt broke at Time: {solver.t:g}")
                break
            print(f"The time is: {solver.t:g} dt = {dt:g}")
            if solver.t >= params.tn:
                break
        solver.write_results(args.output)
    except (ConversionError, ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())