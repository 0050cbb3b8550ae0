import math

import numpy as np
import pytest
from scipy.integrate import quad
from scipy.stats import norm

from xalib.interpolation import MonotoneCubicInterpolator
from xalib.math import (
    GaussKronrodIntegral,
    IntegrationError,
    PiecewiseIntegral,
    RootFindingError,
    SimpsonIntegral,
    brent_solve,
    cumulative_normal,
    gaussian_polynomial_integral,
    gaussian_shifted_polynomial_integral,
)
from xalib.math.comparison import close_enough
from xalib.math.integrals import Integrator


class CountingIntegrator(Integrator):
    def __init__(self):
        self.intervals = []

    def integrate(self, f, a, b):
        self.intervals.append((a, b))
        return b - a


def step(x):
    return 1.0 if x < 1.0 else 2.0


def test_piecewise_integral_of_step_function():
    integrator = PiecewiseIntegral(GaussKronrodIntegral(), [1.0])
    assert integrator(step, 0.0, 2.0) == pytest.approx(3.0, abs=1e-10)


def test_piecewise_integral_never_crosses_critical_points():
    counting = CountingIntegrator()
    integrator = PiecewiseIntegral(counting, [2.0, 1.0])
    result = integrator.integrate(lambda x: 1.0, 0.0, 3.0)

    assert len(counting.intervals) == 3
    assert result == pytest.approx(3.0, abs=1e-12)
    for a, b in counting.intervals:
        assert not (a < 1.0 < b)
        assert not (a < 2.0 < b)


def test_piecewise_integral_empty_interval():
    integrator = PiecewiseIntegral(CountingIntegrator(), [1.0])
    assert integrator.integrate(step, 0.5, 0.5) == 0.0


def test_piecewise_integral_removes_close_critical_points():
    integrator = PiecewiseIntegral(GaussKronrodIntegral(), [1.0, 1.0 + 1e-17, 2.0, 0.5])
    assert integrator.critical_points == (0.5, 1.0, 2.0)


def test_piecewise_integral_without_critical_points():
    integrator = PiecewiseIntegral(GaussKronrodIntegral(), [])
    assert integrator.integrate(lambda x: x, 0.0, 2.0) == pytest.approx(2.0)


def test_close_enough():
    assert close_enough(1.0, 1.0 + 1e-15)
    assert not close_enough(1.0, 1.0 + 1e-10)
    assert close_enough(0.0, 0.0)


def test_simpson_integral():
    simpson = SimpsonIntegral(1e-10, 50)
    assert simpson.integrate(lambda x: x * x, 0.0, 1.0) == pytest.approx(1.0 / 3.0, abs=1e-10)
    assert simpson.integrate(math.sin, 0.0, math.pi) == pytest.approx(2.0, abs=1e-8)


def test_simpson_integral_reversed_bounds():
    simpson = SimpsonIntegral(1e-10, 50)
    assert simpson.integrate(lambda x: x, 1.0, 0.0) == pytest.approx(-0.5, abs=1e-10)


def test_simpson_integral_iteration_limit():
    simpson = SimpsonIntegral(1e-10, 3)
    with pytest.raises(IntegrationError, match="max number of iterations"):
        simpson.integrate(lambda x: x * x, 0.0, 1.0)


def test_simpson_rejects_non_positive_accuracy():
    with pytest.raises(ValueError, match="tolerance"):
        SimpsonIntegral(0.0, 10)


@pytest.mark.parametrize(
    "coefficients, y0, y1",
    [
        ((0.0, 0.0, 0.0, 0.0, 1.0), -1.0, 1.0),
        ((1.0, -2.0, 0.5, 3.0, -1.0), -2.0, 0.5),
        ((0.3, 0.1, -0.7, 0.2, 0.05), 0.0, 4.0),
    ],
)
def test_gaussian_polynomial_integral(coefficients, y0, y1):
    a, b, c, d, e = coefficients

    def integrand(y):
        return (a * y ** 4 + b * y ** 3 + c * y ** 2 + d * y + e) * norm.pdf(y)

    expected, _ = quad(integrand, y0, y1, epsabs=1e-13, epsrel=1e-13)
    assert gaussian_polynomial_integral(a, b, c, d, e, y0, y1) == pytest.approx(
        expected, abs=1e-12
    )


def test_gaussian_shifted_polynomial_integral():
    a, b, c, d, e, h = 0.2, -0.4, 1.1, 0.3, 0.7, 0.6

    def integrand(y):
        x = y - h
        return (a * x ** 4 + b * x ** 3 + c * x ** 2 + d * x + e) * norm.pdf(y)

    expected, _ = quad(integrand, -1.5, 2.5, epsabs=1e-13, epsrel=1e-13)
    assert gaussian_shifted_polynomial_integral(a, b, c, d, e, h, -1.5, 2.5) == pytest.approx(
        expected, abs=1e-12
    )


def test_cumulative_normal():
    assert cumulative_normal(0.0) == pytest.approx(0.5)
    assert cumulative_normal(1.0) == pytest.approx(norm.cdf(1.0), abs=1e-15)


def test_brent_solve():
    result = brent_solve(lambda x: x * x - 2.0, 1e-12, 1.0, 0.5)
    assert result.converged
    assert result.root == pytest.approx(math.sqrt(2.0), abs=1e-10)


def test_brent_solve_decreasing_function():
    result = brent_solve(lambda x: 3.0 - math.exp(x), 1e-12, 0.0, 0.01)
    assert result.root == pytest.approx(math.log(3.0), abs=1e-10)


def test_brent_solve_cannot_bracket():
    with pytest.raises(RootFindingError, match="unable to bracket"):
        brent_solve(lambda x: x * x + 1.0, 1e-8, 0.0, 0.1)


def test_brent_solve_argument_checks():
    with pytest.raises(ValueError, match="accuracy"):
        brent_solve(lambda x: x, 0.0, 0.0, 0.1)
    with pytest.raises(ValueError, match="step"):
        brent_solve(lambda x: x, 1e-8, 0.0, 0.0)


def test_monotone_cubic_reproduces_cubic():
    x = np.arange(1.0, 7.0)
    spline = MonotoneCubicInterpolator(x, x ** 3)
    assert not spline.monotonicity_adjustments.any()
    assert spline(2.5) == pytest.approx(2.5 ** 3, rel=1e-10)
    assert spline.coefficients.shape == (4, 5)


def test_monotone_cubic_does_not_overshoot_kink():
    x = np.arange(10.0)
    y = np.maximum(x - 4.5, 0.0)
    spline = MonotoneCubicInterpolator(x, y)
    assert spline.monotonicity_adjustments.any()

    values = np.array([spline(t) for t in np.linspace(0.0, 9.0, 901)])
    assert values.min() >= -1e-15
    assert np.all(np.diff(values) >= -1e-14)
    assert spline(2.0) == 0.0
