"""
Factory for creating interpolators by method name.
"""
from typing import Sequence

from .base import Interpolator
from .linear import BackwardFlatInterpolator, LinearInterpolator, LogLinearInterpolator

INTERPOLATION_METHODS = {
    "LINEAR": LinearInterpolator,
    "LOGLINEAR": LogLinearInterpolator,
    "BACKWARD_FLAT": BackwardFlatInterpolator,
}


def create_interpolator(
    method: str, pillars: Sequence[float], values: Sequence[float]
) -> Interpolator:
    """
    Create an interpolator based on method name.

    Args:
        method: One of LINEAR, LOGLINEAR, BACKWARD_FLAT
        pillars: Time points
        values: Values to interpolate

    Returns:
        Configured interpolator
    """
    method_upper = method.upper()
    if method_upper not in INTERPOLATION_METHODS:
        raise ValueError(
            f"Unknown interpolation method: {method}. "
            f"Available: {', '.join(INTERPOLATION_METHODS)}"
        )
    return INTERPOLATION_METHODS[method_upper](pillars, values)
