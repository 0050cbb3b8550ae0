"""
Black-Scholes parametrizations of FX rates and equities in the cross
asset model.
"""

import math
from abc import abstractmethod
from typing import Optional, Sequence

import numpy as np

from xalib.conventions.types import AssetType
from xalib.curves.base import YieldCurve
from xalib.market.quotes import SimpleQuote

from .parametrization import Parametrization
from .piecewise_constant import PiecewiseConstantFunction


class BsParametrization(Parametrization):
    """Log-normal component with deterministic volatility."""

    @abstractmethod
    def variance(self, t: float) -> float:
        """Accumulated variance; ``variance(0) = 0`` and non-decreasing."""

    def sigma(self, t: float) -> float:
        return math.sqrt(max(self.variance(self.tr(t)) - self.variance(self.tl(t)), 0.0) / self.h)

    def std_deviation(self, t: float) -> float:
        return math.sqrt(self.variance(t))


class _ConstantSigma:
    def _init_sigma(self, sigma: float) -> None:
        if sigma < 0.0:
            raise ValueError(f"sigma ({sigma}) must be non-negative")
        self._sigma = sigma

    def set_sigma(self, sigma: float) -> None:
        self._init_sigma(sigma)
        self.notify_observers()

    def variance(self, t: float) -> float:
        return self._sigma * self._sigma * t

    def sigma(self, t: float) -> float:
        return self._sigma


class _PiecewiseConstantSigma:
    def _init_sigma(self, times: Sequence[float], sigmas: Sequence[float]) -> None:
        if any(s < 0.0 for s in sigmas):
            raise ValueError("sigmas must be non-negative")
        self._sigma = PiecewiseConstantFunction(times, sigmas)

    def set_sigmas(self, sigmas: Sequence[float]) -> None:
        self._sigma.set_values(sigmas)
        self.notify_observers()

    def parameter_times(self, i: int) -> np.ndarray:
        if i != 0:
            raise ValueError(f"parameter {i} does not exist, only have 0..0")
        return self._sigma.times

    def variance(self, t: float) -> float:
        return self._sigma.integral_of_square(t)

    def sigma(self, t: float) -> float:
        return self._sigma(t)


class FxBsParametrization(BsParametrization):
    """
    FX rate in units of domestic currency per unit of ``foreign_currency``.

    The spot is as of today.
    """

    asset_type = AssetType.FX

    def __init__(self, foreign_currency: str, fx_spot_today: SimpleQuote):
        super().__init__(foreign_currency)
        self.fx_spot_today = fx_spot_today
        fx_spot_today.register_observer(self)

    def update(self) -> None:
        self.notify_observers()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.currency!r})"


class FxBsConstantParametrization(_ConstantSigma, FxBsParametrization):
    def __init__(self, foreign_currency: str, fx_spot_today: SimpleQuote, sigma: float):
        FxBsParametrization.__init__(self, foreign_currency, fx_spot_today)
        self._init_sigma(sigma)


class FxBsPiecewiseConstantParametrization(_PiecewiseConstantSigma, FxBsParametrization):
    def __init__(
        self,
        foreign_currency: str,
        fx_spot_today: SimpleQuote,
        times: Sequence[float],
        sigmas: Sequence[float],
    ):
        FxBsParametrization.__init__(self, foreign_currency, fx_spot_today)
        self._init_sigma(times, sigmas)


class EqBsParametrization(BsParametrization):
    """
    Equity in its own currency.

    ``ir_curve`` forecasts the equity forward together with the dividend
    curve ``div_curve``; the spots are as of today.
    """

    asset_type = AssetType.EQ

    def __init__(
        self,
        currency: str,
        eq_name: str,
        eq_spot_today: SimpleQuote,
        ir_curve: YieldCurve,
        div_curve: YieldCurve,
        fx_spot_today: Optional[SimpleQuote] = None,
    ):
        super().__init__(currency)
        self.eq_name = eq_name
        self.eq_spot_today = eq_spot_today
        self.fx_spot_today = fx_spot_today
        self.ir_curve = ir_curve
        self.div_curve = div_curve
        for observable in (eq_spot_today, fx_spot_today, ir_curve, div_curve):
            if observable is not None:
                observable.register_observer(self)

    def update(self) -> None:
        self.notify_observers()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.eq_name!r}, {self.currency!r})"


class EqBsConstantParametrization(_ConstantSigma, EqBsParametrization):
    def __init__(
        self,
        currency: str,
        eq_name: str,
        eq_spot_today: SimpleQuote,
        ir_curve: YieldCurve,
        div_curve: YieldCurve,
        sigma: float,
        fx_spot_today: Optional[SimpleQuote] = None,
    ):
        EqBsParametrization.__init__(
            self, currency, eq_name, eq_spot_today, ir_curve, div_curve, fx_spot_today
        )
        self._init_sigma(sigma)


class EqBsPiecewiseConstantParametrization(_PiecewiseConstantSigma, EqBsParametrization):
    def __init__(
        self,
        currency: str,
        eq_name: str,
        eq_spot_today: SimpleQuote,
        ir_curve: YieldCurve,
        div_curve: YieldCurve,
        times: Sequence[float],
        sigmas: Sequence[float],
        fx_spot_today: Optional[SimpleQuote] = None,
    ):
        EqBsParametrization.__init__(
            self, currency, eq_name, eq_spot_today, ir_curve, div_curve, fx_spot_today
        )
        self._init_sigma(times, sigmas)
