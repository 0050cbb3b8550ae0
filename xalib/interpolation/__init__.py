"""
Interpolation methods for discount curves and piecewise model parameters.
"""

from .base import Interpolator
from .cubic import MonotoneCubicInterpolator
from .factory import INTERPOLATION_METHODS, create_interpolator
from .linear import BackwardFlatInterpolator, LinearInterpolator, LogLinearInterpolator

__all__ = [
    "Interpolator",
    "LinearInterpolator",
    "LogLinearInterpolator",
    "BackwardFlatInterpolator",
    "MonotoneCubicInterpolator",
    "INTERPOLATION_METHODS",
    "create_interpolator",
]
