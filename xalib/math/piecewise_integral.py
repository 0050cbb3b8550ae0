"""
Integration of functions with known kinks or jumps.
"""

from bisect import bisect_left
from typing import Callable, Iterable, List, Tuple

from .comparison import QL_EPSILON, close_enough
from .integrals import Integrator


class PiecewiseIntegral:
    """
    Splits an integral at a fixed set of critical points.

    Piecewise constant model parameters make integrands discontinuous at
    their step times; the base integrator is therefore never called across
    one of them. With ``avoid_critical_points`` the sub-interval edges are
    moved off the critical points by a relative ``1 + eps`` so that the
    integrand is evaluated on the correct side of each jump.
    """

    def __init__(
        self,
        integrator: Integrator,
        critical_points: Iterable[float],
        avoid_critical_points: bool = True,
    ):
        self.integrator = integrator
        self.avoid_critical_points = avoid_critical_points
        self._eps = 1.0 + QL_EPSILON if avoid_critical_points else 1.0

        points: List[float] = []
        for x in sorted(critical_points):
            if not points or not close_enough(points[-1], x):
                points.append(x)
        self._critical_points: Tuple[float, ...] = tuple(points)

    @property
    def critical_points(self) -> Tuple[float, ...]:
        return self._critical_points

    def __call__(self, f: Callable[[float], float], a: float, b: float) -> float:
        return self.integrate(f, a, b)

    def _integrate_h(self, f: Callable[[float], float], a: float, b: float) -> float:
        if close_enough(a, b):
            return 0.0
        return self.integrator.integrate(f, a, b)

    def integrate(self, f: Callable[[float], float], a: float, b: float) -> float:
        """Integral of ``f`` over ``[a, b]``, summed piece by piece."""
        cp = self._critical_points
        eps = self._eps
        a0 = bisect_left(cp, a)
        b0 = bisect_left(cp, b)

        if a0 == len(cp):
            if cp and close_enough(a, cp[-1]):
                return self._integrate_h(f, a * eps, b)
            return self._integrate_h(f, a, b)

        result = 0.0
        if not close_enough(a, cp[a0]):
            result += self._integrate_h(f, a, min(cp[a0] / eps, b))

        if b0 == len(cp):
            b0 -= 1
            if not close_enough(cp[b0], b):
                result += self._integrate_h(f, cp[b0] * eps, b)

        for x in range(a0, b0):
            result += self._integrate_h(f, cp[x] * eps, min(cp[x + 1] / eps, b))

        return result
