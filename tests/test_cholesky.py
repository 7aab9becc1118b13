import numpy as np
import pytest

from gpfvm.cholesky import cholesky_backsub, cholesky_decomposition


@pytest.fixture
def spd():
    rng = np.random.default_rng(7)
    m = rng.normal(size=(5, 5))
    return m @ m.T + 5 * np.eye(5)


def test_factor_reproduces_matrix(spd):
    u = cholesky_decomposition(spd)
    np.testing.assert_allclose(u.T @ u, spd, rtol=1e-12, atol=1e-12)


def test_factor_is_upper_triangular_with_positive_diagonal(spd):
    u = cholesky_decomposition(spd)
    assert u.shape == (5, 5)
    np.testing.assert_array_equal(np.tril(u, -1), np.zeros((5, 5)))
    assert float(np.diag(u).min()) > 0.0


def test_factor_does_not_modify_input(spd):
    original = spd.copy()
    cholesky_decomposition(spd)
    np.testing.assert_array_equal(spd, original)


def test_identity_factor_is_identity():
    np.testing.assert_allclose(cholesky_decomposition(np.eye(4)), np.eye(4))


def test_backsub_solves_each_row(spd):
    u = cholesky_decomposition(spd)
    b = np.arange(10, dtype=float).reshape(2, 5)
    x = cholesky_backsub(u, b)
    assert x.shape == (2, 5)
    for row_x, row_b in zip(x, b):
        np.testing.assert_allclose(spd @ row_x, row_b, atol=1e-10)


def test_backsub_single_vector(spd):
    u = cholesky_decomposition(spd)
    b = np.ones(5)
    x = cholesky_backsub(u, b)
    assert x.shape == (5,)
    np.testing.assert_allclose(x, np.linalg.solve(spd, b), atol=1e-10)


def test_backsub_does_not_modify_rhs(spd):
    u = cholesky_decomposition(spd)
    b = np.ones((3, 5))
    cholesky_backsub(u, b)
    np.testing.assert_array_equal(b, np.ones((3, 5)))


def test_not_positive_definite_raises():
    with pytest.raises(ValueError):
        cholesky_decomposition(np.array([[1.0, 2.0], [2.0, 1.0]]))


def test_non_square_raises():
    with pytest.raises(ValueError):
        cholesky_decomposition(np.ones((2, 3)))


def test_backsub_size_mismatch_raises(spd):
    u = cholesky_decomposition(spd)
    with pytest.raises(ValueError):
        cholesky_backsub(u, np.ones(4))