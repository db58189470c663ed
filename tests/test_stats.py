"""Linear algebra kernel: reductions, small solvers and R²."""

import pytest

from fuellogic import stats, exceptions


def test_reductions_on_empty_are_zero():
    assert stats.sum([]) == 0.0
    assert stats.mean([]) == 0.0
    assert stats.dot_product([], []) == 0.0


def test_reductions_basic():
    assert stats.sum([1, 2, 3.5]) == pytest.approx(6.5)
    assert stats.mean([2, 4, 6]) == pytest.approx(4.0)
    assert stats.dot_product([1, 2, 3], [4, 5, 6]) == pytest.approx(32.0)


def test_dot_product_rejects_unequal_lengths():
    with pytest.raises(exceptions.StatsError):
        stats.dot_product([1, 2], [1, 2, 3])


def test_solve_2x2_round_trip():
    """Build b from known (x0, x1) and recover them."""
    x0, x1 = 1.75, -3.2
    a00, a01, a10, a11 = 4.0, 1.5, -2.0, 3.0
    b0 = a00 * x0 + a01 * x1
    b1 = a10 * x0 + a11 * x1
    sol = stats.solve_2x2(a00, a01, a10, a11, b0, b1)
    assert sol is not None
    assert sol[0] == pytest.approx(x0)
    assert sol[1] == pytest.approx(x1)


def test_solve_2x2_proportional_rows_is_singular():
    assert stats.solve_2x2(1.0, 2.0, 2.0, 4.0, 3.0, 6.0) is None


def test_solve_3x3_round_trip():
    a = [[2.0, 1.0, -1.0], [-3.0, -1.0, 2.0], [-2.0, 1.0, 2.0]]
    x = (2.0, 3.0, -1.0)
    b = [sum(a[i][j] * x[j] for j in range(3)) for i in range(3)]
    sol = stats.solve_3x3(a, b)
    assert sol is not None
    assert sol == pytest.approx(x)


def test_solve_3x3_proportional_rows_is_singular():
    a = [[1.0, 2.0, 3.0], [2.0, 4.0, 6.0], [0.0, 1.0, 5.0]]
    assert stats.solve_3x3(a, [1.0, 2.0, 3.0]) is None


def test_solve_3x3_rejects_bad_shape():
    with pytest.raises(exceptions.StatsError):
        stats.solve_3x3([[1.0, 0.0], [0.0, 1.0]], [1.0, 1.0])


def test_r_squared_perfect_fit_is_one():
    obs = [3.0, 7.0, 4.5, 10.0]
    assert stats.r_squared(obs, obs) == 1.0


def test_r_squared_mean_prediction_is_zero():
    obs = [3.0, 7.0, 4.5, 10.0]
    m = stats.mean(obs)
    assert stats.r_squared(obs, [m] * len(obs)) == 0.0


def test_r_squared_clamped_and_degenerate():
    """Worse-than-mean fits clamp to 0; zero observed variance yields 0."""
    assert stats.r_squared([1.0, 2.0, 3.0], [10.0, -5.0, 20.0]) == 0.0
    assert stats.r_squared([5.0, 5.0, 5.0], [5.0, 5.0, 5.0]) == 0.0


def test_residual_std_error():
    # sqrt((1 + 4 + 4 + 1) / (4 - 2))
    assert stats.residual_std_error([1.0, -2.0, 2.0, -1.0]) == pytest.approx(5.0**0.5)
    assert stats.residual_std_error([]) == 0.0
    # divisor floored at 1
    assert stats.residual_std_error([3.0]) == pytest.approx(3.0)
