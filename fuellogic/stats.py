"""Small dense linear algebra and vector statistics used by the regression.

The systems solved here are at most 3x3 normal equations, so Cramer's rule
is used directly instead of a general factorisation; a near-zero determinant
is reported as ``None`` rather than raising.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np

from . import canon, exceptions


def sum(values: Sequence[float]) -> float:  # noqa: A001
    """Sum of a numeric sequence; 0.0 when empty."""
    arr = np.asarray(values, dtype=float)
    return float(arr.sum()) if arr.size else 0.0


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean; 0.0 when empty."""
    arr = np.asarray(values, dtype=float)
    return float(arr.mean()) if arr.size else 0.0


def dot_product(a: Sequence[float], b: Sequence[float]) -> float:
    a_arr = np.asarray(a, dtype=float)
    b_arr = np.asarray(b, dtype=float)
    exceptions.require(
        a_arr.shape == b_arr.shape,
        f"Vectors must have equal length, got {a_arr.size} and {b_arr.size}.",
        exceptions.StatsError,
    )
    return float(np.dot(a_arr, b_arr)) if a_arr.size else 0.0


def solve_2x2(
    a00: float,
    a01: float,
    a10: float,
    a11: float,
    b0: float,
    b1: float,
) -> Optional[Tuple[float, float]]:
    """
    Solve [[a00, a01], [a10, a11]] · x = [b0, b1] by Cramer's rule.
    Returns (x0, x1), or None when |det| < 1e-12.
    """
    det = a00 * a11 - a01 * a10
    if abs(det) < canon.SINGULAR_EPS:
        return None
    return (
        (a11 * b0 - a01 * b1) / det,
        (a00 * b1 - a10 * b0) / det,
    )


def _det3(m: np.ndarray) -> float:
    # cofactor expansion along the first row
    return float(
        m[0, 0] * (m[1, 1] * m[2, 2] - m[1, 2] * m[2, 1])
        - m[0, 1] * (m[1, 0] * m[2, 2] - m[1, 2] * m[2, 0])
        + m[0, 2] * (m[1, 0] * m[2, 1] - m[1, 1] * m[2, 0])
    )


def solve_3x3(
    a: Sequence[Sequence[float]],
    b: Sequence[float],
) -> Optional[Tuple[float, float, float]]:
    """
    Solve a 3x3 system a · x = b by Cramer's rule.
    Returns (x0, x1, x2), or None when |det(a)| < 1e-12.
    """
    m = np.asarray(a, dtype=float)
    rhs = np.asarray(b, dtype=float)
    exceptions.require(
        m.shape == (3, 3) and rhs.shape == (3,),
        f"Expected a 3x3 matrix and length-3 vector, got {m.shape} and {rhs.shape}.",
        exceptions.StatsError,
    )
    det_a = _det3(m)
    if abs(det_a) < canon.SINGULAR_EPS:
        return None

    def _replace_col(col: int) -> np.ndarray:
        out = m.copy()
        out[:, col] = rhs
        return out

    x0, x1, x2 = (_det3(_replace_col(c)) / det_a for c in range(3))
    return (x0, x1, x2)


def r_squared(observed: Sequence[float], fitted: Sequence[float]) -> float:
    """
    Coefficient of determination 1 - SS_res/SS_tot, clamped to [0, 1].
    Returns 0.0 when the observations have no variance.
    """
    y = np.asarray(observed, dtype=float)
    yhat = np.asarray(fitted, dtype=float)
    exceptions.require(
        y.shape == yhat.shape,
        "Observed and fitted values must have equal length.",
        exceptions.StatsError,
    )
    if y.size == 0:
        return 0.0
    ss_tot = float(np.sum((y - y.mean()) ** 2))
    ss_res = float(np.sum((y - yhat) ** 2))
    if ss_tot == 0:
        return 0.0
    return float(min(1.0, max(0.0, 1.0 - ss_res / ss_tot)))


def residual_std_error(residuals: Sequence[float], n_params: int = 2) -> float:
    """sqrt(SS_res / (n - p)), with the divisor floored at 1."""
    r = np.asarray(residuals, dtype=float)
    if r.size == 0:
        return 0.0
    return float(np.sqrt(np.sum(r**2) / max(1, r.size - n_params)))
