"""
Closed-form integrals of polynomials against the standard normal density.
"""

import math

from scipy.special import erf, ndtr

M_SQRT2 = math.sqrt(2.0)
M_SQRTPI = math.sqrt(math.pi)


def cumulative_normal(x: float) -> float:
    """Standard normal distribution function."""
    return float(ndtr(x))


def gaussian_polynomial_integral(
    a: float, b: float, c: float, d: float, e: float, y0: float, y1: float
) -> float:
    """
    Integral of ``(a y^4 + b y^3 + c y^2 + d y + e) * phi(y)`` over ``[y0, y1]``.

    ``phi`` is the standard normal density. The antiderivative is written in
    ``x = y / sqrt(2)`` and evaluated with ``erf`` and ``exp`` only.
    """
    aa = 4.0 * a
    ba = 2.0 * M_SQRT2 * b
    ca = 2.0 * c
    da = M_SQRT2 * d
    x0 = y0 / M_SQRT2
    x1 = y1 / M_SQRT2

    def antiderivative(x: float) -> float:
        return 0.125 * (3.0 * aa + 2.0 * ca + 4.0 * e) * float(erf(x)) - 1.0 / (
            4.0 * M_SQRTPI
        ) * math.exp(-x * x) * (
            2.0 * aa * x * x * x
            + 3.0 * aa * x
            + 2.0 * ba * (x * x + 1.0)
            + 2.0 * ca * x
            + 2.0 * da
        )

    return antiderivative(x1) - antiderivative(x0)


def gaussian_shifted_polynomial_integral(
    a: float, b: float, c: float, d: float, e: float, h: float, x0: float, x1: float
) -> float:
    """
    Integral of ``(a (y-h)^4 + b (y-h)^3 + c (y-h)^2 + d (y-h) + e) * phi(y)``
    over ``[x0, x1]``.

    Spline segments are stored in powers of ``y - h``; expanding around zero
    reduces this to :func:`gaussian_polynomial_integral`.
    """
    return gaussian_polynomial_integral(
        a,
        -4.0 * a * h + b,
        6.0 * a * h * h - 3.0 * b * h + c,
        -4.0 * a * h * h * h + 3.0 * b * h * h - 2.0 * c * h + d,
        a * h * h * h * h - b * h * h * h + c * h * h - d * h + e,
        x0,
        x1,
    )
