import numpy as np
import pytest

from gpfvm.eos import (
    MIN_DENSITY,
    MIN_PRESSURE,
    NO_SOLUTION,
    ConversionError,
    cons_to_prims,
    energy_inverter,
    enthalpy,
    lorentz,
    naive_newton,
    newton_pressure,
    pressure_fix,
    prims_to_cons,
    signal_speeds,
    sound_speed_squared,
)

GAMMA = 5.0 / 3.0
PRIMS = np.array([1.0, 0.3, 0.1, 0.0, 1.0])


def test_lorentz_at_rest():
    assert lorentz([1.0, 0.0, 0.0, 0.0, 1.0]) == 1.0


def test_lorentz_superluminal_raises():
    with pytest.raises(ValueError):
        lorentz([1.0, 0.8, 0.7, 0.0, 1.0])


def test_enthalpy_cold_gas():
    assert enthalpy([2.0, 0.0, 0.0, 0.0, 0.0], GAMMA) == 1.0


def test_prims_to_cons_at_rest_energy():
    cons = prims_to_cons([2.0, 0.0, 0.0, 0.0, 3.0], GAMMA)
    assert cons[0] == pytest.approx(2.0)
    assert np.allclose(cons[1:4], 0.0)
    assert cons[4] - cons[0] == pytest.approx(3.0 / (GAMMA - 1.0))


def test_prims_to_cons_stack_matches_single():
    other = np.array([0.5, -0.2, 0.0, 0.4, 2.0])
    stack = np.column_stack([PRIMS, other])
    result = prims_to_cons(stack, GAMMA)
    assert np.allclose(result[:, 0], prims_to_cons(PRIMS, GAMMA))
    assert np.allclose(result[:, 1], prims_to_cons(other, GAMMA))


def test_prims_to_cons_superluminal_raises():
    with pytest.raises(ValueError):
        prims_to_cons([1.0, 1.0, 0.0, 0.0, 1.0], GAMMA)


def test_energy_inverter_round_trip():
    cons = prims_to_cons(PRIMS, GAMMA)
    assert np.allclose(energy_inverter(cons, GAMMA), PRIMS, rtol=1e-7, atol=1e-9)


def test_energy_inverter_no_solution():
    with pytest.raises(ConversionError) as info:
        energy_inverter([1.0, 0.5, 0.0, 0.0, 1.0], GAMMA)
    assert info.value.code == NO_SOLUTION


def test_pressure_fix_is_consistent():
    cons = np.array([1.0, 0.5, 0.0, 0.0, 1.0])
    prims, energy = pressure_fix(cons, GAMMA)
    assert prims[4] == MIN_PRESSURE
    rebuilt = prims_to_cons(prims, GAMMA)
    assert np.allclose(rebuilt[:4], cons[:4], rtol=1e-6)
    assert rebuilt[4] == pytest.approx(energy, rel=1e-6)


def test_newton_pressure_matches_inverter():
    cons = prims_to_cons(PRIMS, GAMMA)
    assert newton_pressure(cons, GAMMA) == pytest.approx(energy_inverter(cons, GAMMA)[4], rel=1e-6)


def test_naive_newton_round_trip():
    cons = prims_to_cons(PRIMS, GAMMA)
    assert np.allclose(naive_newton(cons, GAMMA), PRIMS, rtol=1e-6)


def test_cons_to_prims_stack_round_trip():
    stack = np.column_stack([PRIMS, [0.5, -0.2, 0.0, 0.4, 2.0], [3.0, 0.0, 0.9, 0.0, 0.1]])
    cons = prims_to_cons(stack, GAMMA)
    assert np.allclose(cons_to_prims(cons, GAMMA), stack, rtol=1e-6, atol=1e-9)


def test_cons_to_prims_floors_density():
    cons = np.array([-1.0, 0.0, 0.0, 0.0, 1.0])
    prims = cons_to_prims(cons, GAMMA)
    assert cons[0] == MIN_DENSITY
    assert prims[0] == pytest.approx(MIN_DENSITY)


def test_cons_to_prims_falls_back_to_pressure_fix():
    cons = np.array([[1.0], [0.5], [0.0], [0.0], [1.0]])
    prims = cons_to_prims(cons, GAMMA)
    assert prims[4, 0] == MIN_PRESSURE
    assert prims_to_cons(prims, GAMMA)[4, 0] == pytest.approx(cons[4, 0], rel=1e-6)
    assert cons[4, 0] < 1.0


def test_sound_speed_bounds():
    cs2 = sound_speed_squared(PRIMS, GAMMA)
    assert 0.0 < cs2 < GAMMA - 1.0


def test_signal_speeds_at_rest_are_symmetric():
    prims = [1.0, 0.0, 0.0, 0.0, 1.0]
    cs2 = sound_speed_squared(prims, GAMMA)
    left, right = signal_speeds(prims, cs2)
    assert right == pytest.approx(np.sqrt(cs2))
    assert left == pytest.approx(-right)


def test_signal_speeds_mirror():
    cs2 = 0.3
    left, right = signal_speeds([1.0, 0.4, 0.0, 0.0, 1.0], cs2)
    mleft, mright = signal_speeds([1.0, -0.4, 0.0, 0.0, 1.0], cs2)
    assert mleft == pytest.approx(-right)
    assert mright == pytest.approx(-left)


def test_signal_speeds_subluminal():
    left, right = signal_speeds([1.0, 0.5, 0.0, 0.0, 1.0], 0.4)
    assert -1.0 < left < right < 1.0