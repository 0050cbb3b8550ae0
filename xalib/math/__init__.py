"""
Numerical building blocks: tolerant comparison, integration, Gaussian
polynomial integrals and root finding.
"""

from .comparison import QL_EPSILON, close_enough
from .gaussian import (
    cumulative_normal,
    gaussian_polynomial_integral,
    gaussian_shifted_polynomial_integral,
)
from .integrals import GaussKronrodIntegral, IntegrationError, Integrator, SimpsonIntegral
from .piecewise_integral import PiecewiseIntegral
from .rootfinding import RootFindingError, RootResult, brent_solve

__all__ = [
    "QL_EPSILON",
    "close_enough",
    "cumulative_normal",
    "gaussian_polynomial_integral",
    "gaussian_shifted_polynomial_integral",
    "Integrator",
    "SimpsonIntegral",
    "GaussKronrodIntegral",
    "IntegrationError",
    "PiecewiseIntegral",
    "RootFindingError",
    "RootResult",
    "brent_solve",
]
