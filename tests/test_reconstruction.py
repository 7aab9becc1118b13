import numpy as np
import pytest

from gpfvm.gp_kernel import prediction_vectors
from gpfvm.reconstruction import fog, gp_reconstruct, weno


def _linear(n=12):
    return np.tile(np.arange(n, dtype=float), (5, 1))


def test_weno_constant_state():
    cons = np.full((5, 10), 2.5)
    left, right = weno(cons, 2, 8)
    assert np.allclose(left[:, 2:8], 2.5)
    assert np.allclose(right[:, 2:8], 2.5)


def test_weno_exact_for_linear_data():
    cons = _linear()
    left, right = weno(cons, 2, 10)
    cells = np.arange(2, 10, dtype=float)
    assert np.allclose(left[0, 2:10], cells - 0.5)
    assert np.allclose(right[0, 2:10], cells + 0.5)


def test_weno_leaves_outside_columns_zero():
    left, right = weno(_linear(), 3, 6)
    assert left.shape == (5, 12)
    np.testing.assert_array_equal(left[:, :3], np.zeros((5, 3)))
    np.testing.assert_array_equal(left[:, 6:], np.zeros((5, 6)))
    np.testing.assert_array_equal(right[:, :3], np.zeros((5, 3)))
    np.testing.assert_allclose(left[0, 3:6], [2.5, 3.5, 4.5])


def test_weno_range_needs_neighbours():
    with pytest.raises(ValueError):
        weno(_linear(), 1, 5)
    with pytest.raises(ValueError):
        weno(_linear(), 2, 11)


def test_fog_copies_cells():
    cons = np.random.default_rng(0).random((5, 8))
    left, right = fog(cons, 1, 7)
    assert np.array_equal(left[:, 1:7], cons[:, 1:7])
    assert np.array_equal(right[:, 1:7], cons[:, 1:7])
    assert np.all(left[:, 0] == 0.0)


def test_gp_faces_follow_weight_orientation():
    cons = _linear()
    left, right = gp_reconstruct(cons, 1, 11, [1.0, 0.0, 0.0], [0.0, 0.0, 1.0])
    cells = np.arange(1, 11, dtype=float)
    assert np.allclose(left[0, 1:11], cells + 1.0)
    assert np.allclose(right[0, 1:11], cells - 1.0)


@pytest.mark.parametrize("radius", [1, 2])
def test_gp_preserves_constants(radius):
    wl, wr = prediction_vectors(radius, 6.0)
    cons = np.full((5, 12), 4.0)
    left, right = gp_reconstruct(cons, radius, 12 - radius, wl, wr)
    assert np.allclose(left[:, radius : 12 - radius], 4.0)
    assert np.allclose(right[:, radius : 12 - radius], 4.0)


def test_gp_rejects_mismatched_weights():
    with pytest.raises(ValueError):
        gp_reconstruct(_linear(), 2, 8, [0.2, 0.6, 0.2], [0.1, 0.2, 0.4, 0.2, 0.1])