import dataclasses

import pytest

from gpfvm.config import Parameters, SpaceMethod, TestProblem


def test_default_grid_layout_is_consistent():
    p = Parameters()
    assert p.x_end - p.x_start == p.nx
    assert p.xdim == p.x_end + p.ngc
    assert p.x_start == p.ngc
    assert p.dx * p.nx == pytest.approx(p.xn - p.x0)


def test_defaults_match_shock_tube_setup():
    p = Parameters()
    assert p.nx == 400
    assert p.test_problem is TestProblem.SHOCKTUBE
    assert p.space_method is SpaceMethod.WENO
    assert p.vel_right[1] == 0.99


def test_custom_grid():
    p = Parameters(nx=10, x0=0.0, xn=9.0, ngc=4)
    assert p.xdim == 18
    assert p.x_start == 4
    assert p.x_end == 14
    assert p.dx == pytest.approx(0.9)


def test_int_space_method_is_coerced():
    p = Parameters(space_method=3, test_problem=1)
    assert p.space_method is SpaceMethod.GPR1
    assert p.test_problem is TestProblem.SHUOSHER


def test_parameters_are_immutable():
    p = Parameters()
    with pytest.raises(dataclasses.FrozenInstanceError):
        p.nx = 5  # type: ignore[misc]
    assert p.nx == 400
    assert p.x_end - p.x_start == 400


def test_replace_recomputes_derived_values():
    p = dataclasses.replace(Parameters(), nx=200)
    assert p.x_end - p.x_start == 200


@pytest.mark.parametrize(
    "kwargs",
    [
        {"nx": 0},
        {"xn": -1.0},
        {"rk_method": 2},
        {"ell": 0.0},
        {"cfl": -0.1},
        {"gamma": 1.0},
        {"ngc": 2},
        {"tn": -1.0},
        {"vel_left": (0.0, 0.0)},
    ],
)
def test_invalid_parameters_raise(kwargs):
    with pytest.raises(ValueError):
        Parameters(**kwargs)


def test_invalid_space_method_raises():
    with pytest.raises(ValueError):
        Parameters(space_method=42)