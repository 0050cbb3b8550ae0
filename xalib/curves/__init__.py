"""
Yield curves: the discount-factor and time conventions every model and
engine in the package reads from.
"""

from .base import YieldCurve
from .discount import InterpolatedDiscountCurve
from .flat import FlatForwardCurve, create_flat_curve

__all__ = [
    "YieldCurve",
    "InterpolatedDiscountCurve",
    "FlatForwardCurve",
    "create_flat_curve",
]
