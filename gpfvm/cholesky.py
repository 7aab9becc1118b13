"""Cholesky factorisation and the matching two-sided substitution."""

from __future__ import annotations

import numpy as np


def cholesky_decomposition(a) -> np.ndarray:
    """Return the upper-triangular U with ``a == U.T @ U``.

    Raises ValueError if ``a`` is not square or not positive definite.
    """
    a = np.asarray(a, dtype=float)
    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise ValueError("matrix must be square")
    n = a.shape[0]
    u = np.zeros_like(a)
    for i in range(n):
        column = u[:i, i]
        pivot = a[i, i] - column @ column
        if not pivot > 0.0:
            raise ValueError("matrix is not positive definite")
        u[i, i] = np.sqrt(pivot)
        u[i, i + 1 :] = (a[i, i + 1 :] - column @ u[:i, i + 1 :]) / u[i, i]
    return u


def cholesky_backsub(a, b) -> np.ndarray:
    """Solve ``U.T @ U @ x = b`` for each row of ``b``.

    ``a`` is the upper factor from :func:`cholesky_decomposition`; ``b`` is a
    single right-hand side or a stack of them, one per row.
    """
    u = np.asarray(a, dtype=float)
    if u.ndim != 2 or u.shape[0] != u.shape[1]:
        raise ValueError("factor must be square")
    rhs = np.asarray(b, dtype=float)
    single = rhs.ndim == 1
    rows = np.atleast_2d(rhs).copy()
    n = u.shape[0]
    if rows.shape[1] != n:
        raise ValueError("right-hand side does not match the factor size")

    for j in range(n):
        rows[:, j] = (rows[:, j] - rows[:, :j] @ u[:j, j]) / u[j, j]
    for j in reversed(range(n)):
        rows[:, j] = (rows[:, j] - rows[:, j + 1 :] @ u[j, j + 1 :]) / u[j, j]

    return rows[0] if single else rows