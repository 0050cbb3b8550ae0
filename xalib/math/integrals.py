"""
One-dimensional integrators.

All integrators share the ``integrate(f, a, b)`` interface so they can be
wrapped by :class:`~xalib.math.piecewise_integral.PiecewiseIntegral`.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable

from scipy.integrate import quad

logger = logging.getLogger(__name__)

Integrand = Callable[[float], float]


class IntegrationError(RuntimeError):
    """Raised when an integrator does not reach the requested accuracy."""


class Integrator(ABC):
    """Integrates a scalar function over a finite interval."""

    def __call__(self, f: Integrand, a: float, b: float) -> float:
        return self.integrate(f, a, b)

    @abstractmethod
    def integrate(self, f: Integrand, a: float, b: float) -> float:
        """Integral of ``f`` over ``[a, b]``."""


class SimpsonIntegral(Integrator):
    """
    Iterative Simpson rule.

    Trapezoid sums are refined by halving the step, and each pair of
    successive sums is combined by Richardson extrapolation. Converges
    when two successive extrapolations agree within ``accuracy`` after
    at least five refinements.
    """

    def __init__(self, accuracy: float, max_iterations: int):
        if accuracy <= 0.0:
            raise ValueError(f"required tolerance ({accuracy}) not allowed")
        self.accuracy = accuracy
        self.max_iterations = max_iterations
        self.evaluations = 0

    def integrate(self, f: Integrand, a: float, b: float) -> float:
        if a == b:
            return 0.0
        if a > b:
            return -self.integrate(f, b, a)

        n = 1
        step = b - a
        integral = step * (f(a) + f(b)) * 0.5
        self.evaluations = 2
        adjusted = integral
        i = 1
        while i <= self.max_iterations:
            x = a + step / 2.0
            total = 0.0
            while x < b:
                total += f(x)
                x += step
                self.evaluations += 1
            new_integral = (integral + step * total) / 2.0
            new_adjusted = (4.0 * new_integral - integral) / 3.0
            if abs(adjusted - new_adjusted) <= self.accuracy and i > 5:
                return new_adjusted
            integral = new_integral
            adjusted = new_adjusted
            step /= 2.0
            n *= 2
            i += 1
        raise IntegrationError(
            f"max number of iterations reached ({self.max_iterations}) "
            f"integrating on [{a}, {b}]"
        )


class GaussKronrodIntegral(Integrator):
    """Adaptive Gauss-Kronrod quadrature (QUADPACK via ``scipy.integrate.quad``)."""

    def __init__(self, abs_accuracy: float = 1e-10, rel_accuracy: float = 1e-10, limit: int = 200):
        self.abs_accuracy = abs_accuracy
        self.rel_accuracy = rel_accuracy
        self.limit = limit

    def integrate(self, f: Integrand, a: float, b: float) -> float:
        if a == b:
            return 0.0
        value, error = quad(
            f, a, b, epsabs=self.abs_accuracy, epsrel=self.rel_accuracy, limit=self.limit
        )
        logger.debug("quad on [%s, %s]: %s (error estimate %s)", a, b, value, error)
        return value
