"""
Linear Gauss Markov model.

State ``x`` is a driftless Gaussian martingale with variance ``zeta(t)``
under the LGM measure; the numeraire and zero bonds are exponential
affine in ``x``.
"""

import math
from typing import Optional

from xalib.conventions.types import OptionType
from xalib.curves.base import YieldCurve
from xalib.math.gaussian import cumulative_normal
from xalib.observable import Observable, Observer

from .parametrization import IrLgm1fParametrization


class LgmStateProcess:
    """Transition moments of the LGM state."""

    def __init__(self, parametrization: IrLgm1fParametrization):
        self.parametrization = parametrization

    def x0(self) -> float:
        return 0.0

    def expectation(self, t0: float, x0: float, dt: float) -> float:
        return x0

    def variance(self, t0: float, x0: float, dt: float) -> float:
        return self.parametrization.zeta(t0 + dt) - self.parametrization.zeta(t0)

    def std_deviation(self, t0: float, x0: float, dt: float) -> float:
        return math.sqrt(max(self.variance(t0, x0, dt), 0.0))


class LinearGaussMarkovModel(Observable, Observer):
    """One-factor LGM in a single currency."""

    def __init__(self, parametrization: IrLgm1fParametrization):
        Observable.__init__(self)
        self.parametrization = parametrization
        self.state_process = LgmStateProcess(parametrization)
        self.register_with(parametrization)
        self.register_with(parametrization.term_structure)

    def update(self) -> None:
        self.notify_observers()

    @property
    def term_structure(self) -> YieldCurve:
        return self.parametrization.term_structure

    def _curve(self, discount_curve: Optional[YieldCurve]) -> YieldCurve:
        return self.parametrization.term_structure if discount_curve is None else discount_curve

    def numeraire(self, t: float, x: float, discount_curve: Optional[YieldCurve] = None) -> float:
        if t < 0.0:
            raise ValueError(f"t ({t}) must not be negative")
        p = self.parametrization
        ht = p.H(t)
        return math.exp(ht * x + 0.5 * ht * ht * p.zeta(t)) / self._curve(discount_curve).df(t)

    def discount_bond(
        self, t: float, T: float, x: float, discount_curve: Optional[YieldCurve] = None
    ) -> float:
        if math.isclose(t, T, rel_tol=0.0, abs_tol=1e-14):
            return 1.0
        if not T >= t >= 0.0:
            raise ValueError(f"T ({T}) must be greater or equal to t ({t}) >= 0")
        p = self.parametrization
        curve = self._curve(discount_curve)
        ht, hT = p.H(t), p.H(T)
        return (
            curve.df(T)
            / curve.df(t)
            * math.exp(-(hT - ht) * x - 0.5 * (hT * hT - ht * ht) * p.zeta(t))
        )

    def reduced_discount_bond(
        self, t: float, T: float, x: float, discount_curve: Optional[YieldCurve] = None
    ) -> float:
        if math.isclose(t, T, rel_tol=0.0, abs_tol=1e-14):
            return 1.0 / self.numeraire(t, x, discount_curve)
        if not T >= t >= 0.0:
            raise ValueError(f"T ({T}) must be greater or equal to t ({t}) >= 0")
        p = self.parametrization
        hT = p.H(T)
        return self._curve(discount_curve).df(T) * math.exp(-hT * x - 0.5 * hT * hT * p.zeta(t))

    def discount_bond_option(
        self,
        option_type: OptionType,
        strike: float,
        t: float,
        S: float,
        T: float,
        discount_curve: Optional[YieldCurve] = None,
    ) -> float:
        """Price at time 0 of an option expiring at ``t`` on a bond from ``S`` to ``T``."""
        if not T > S >= t >= 0.0:
            raise ValueError(f"T ({T}) > S ({S}) >= t ({t}) >= 0 required")
        p = self.parametrization
        curve = self._curve(discount_curve)
        w = 1.0 if option_type is OptionType.CALL else -1.0
        p_s = curve.df(S)
        p_t = curve.df(T)
        sigma = math.sqrt(p.zeta(t)) * (p.H(T) - p.H(S))
        dp = math.log(p_t / (strike * p_s)) / sigma + 0.5 * sigma
        dm = dp - sigma
        return w * (p_t * cumulative_normal(w * dp) - p_s * strike * cumulative_normal(w * dm))

    def __repr__(self) -> str:
        return f"LinearGaussMarkovModel({self.parametrization!r})"
