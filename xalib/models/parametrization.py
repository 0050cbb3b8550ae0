"""
Model parametrizations.

A parametrization carries the time-dependent model parameters of one
component of a (cross asset) Gaussian model together with the market
objects it is anchored to. Derivatives are taken numerically with the
adjusted central difference stencils below unless a subclass knows them
in closed form.
"""

import math
from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np

from xalib.conventions.types import AssetType
from xalib.curves.base import YieldCurve
from xalib.observable import Observable

from .piecewise_constant import PiecewiseConstantFunction


class Parametrization(Observable, ABC):
    """Base class for all model component parametrizations."""

    asset_type: AssetType

    h = 1.0e-6
    h2 = 1.0e-4

    def __init__(self, currency: str):
        super().__init__()
        self.currency = currency

    def parameter_times(self, i: int) -> np.ndarray:
        """Step times of parameter ``i`` (empty for constant parameters)."""
        return np.array([])

    def tr(self, t: float) -> float:
        return t + 0.5 * self.h if t > 0.5 * self.h else self.h

    def tl(self, t: float) -> float:
        return max(t - 0.5 * self.h, 0.0)

    def tr2(self, t: float) -> float:
        return t + self.h2 if t > self.h2 else 2.0 * self.h2

    def tm2(self, t: float) -> float:
        return t if t > self.h2 else self.h2

    def tl2(self, t: float) -> float:
        return max(t - self.h2, 0.0)


class IrLgm1fParametrization(Parametrization):
    """
    One-factor LGM parametrization.

    ``zeta`` must satisfy ``zeta(0) = 0`` and be non-decreasing; ``H'``
    must not change sign. ``shift`` and ``scaling`` apply the usual model
    invariances: ``H -> scaling * H + shift`` and ``zeta -> zeta / scaling^2``.
    """

    asset_type = AssetType.IR

    def __init__(
        self,
        currency: str,
        term_structure: YieldCurve,
        shift: float = 0.0,
        scaling: float = 1.0,
    ):
        super().__init__(currency)
        if scaling == 0.0:
            raise ValueError("scaling must not be zero")
        self.term_structure = term_structure
        self._shift = shift
        self._scaling = scaling

    @property
    def shift(self) -> float:
        return self._shift

    @shift.setter
    def shift(self, value: float) -> None:
        self._shift = value
        self.notify_observers()

    @property
    def scaling(self) -> float:
        return self._scaling

    @scaling.setter
    def scaling(self, value: float) -> None:
        if value == 0.0:
            raise ValueError("scaling must not be zero")
        self._scaling = value
        self.notify_observers()

    @abstractmethod
    def _zeta_impl(self, t: float) -> float:
        """Unscaled accumulated variance."""

    @abstractmethod
    def _H_impl(self, t: float) -> float:
        """Unscaled, unshifted H."""

    def zeta(self, t: float) -> float:
        return self._zeta_impl(t) / (self._scaling * self._scaling)

    def H(self, t: float) -> float:
        return self._scaling * self._H_impl(t) + self._shift

    def alpha(self, t: float) -> float:
        return math.sqrt(max(self.zeta(self.tr(t)) - self.zeta(self.tl(t)), 0.0) / self.h)

    def Hprime(self, t: float) -> float:
        return (self.H(self.tr(t)) - self.H(self.tl(t))) / self.h

    def Hprime2(self, t: float) -> float:
        return (
            self.H(self.tr2(t)) - 2.0 * self.H(self.tm2(t)) + self.H(self.tl2(t))
        ) / (self.h2 * self.h2)

    def hull_white_sigma(self, t: float) -> float:
        return self.Hprime(t) * self.alpha(t)

    def kappa(self, t: float) -> float:
        return -self.Hprime2(t) / self.Hprime(t)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.currency!r})"


class Lgm1fConstantParametrization(IrLgm1fParametrization):
    """LGM with constant ``alpha`` and mean reversion ``kappa``."""

    zero_cutoff = 1.0e-6

    def __init__(
        self,
        currency: str,
        term_structure: YieldCurve,
        alpha: float,
        kappa: float,
        shift: float = 0.0,
        scaling: float = 1.0,
    ):
        super().__init__(currency, term_structure, shift, scaling)
        self._alpha = alpha
        self._kappa = kappa

    def set_params(self, alpha: float, kappa: float) -> None:
        self._alpha = alpha
        self._kappa = kappa
        self.notify_observers()

    def _zeta_impl(self, t: float) -> float:
        return self._alpha * self._alpha * t

    def _H_impl(self, t: float) -> float:
        if abs(self._kappa) < self.zero_cutoff:
            return t
        return (1.0 - math.exp(-self._kappa * t)) / self._kappa

    def alpha(self, t: float) -> float:
        return self._alpha / self._scaling

    def Hprime(self, t: float) -> float:
        return self._scaling * math.exp(-self._kappa * t)

    def Hprime2(self, t: float) -> float:
        return -self._scaling * self._kappa * math.exp(-self._kappa * t)

    def kappa(self, t: float) -> float:
        return self._kappa


class Lgm1fPiecewiseConstantParametrization(IrLgm1fParametrization):
    """LGM with piecewise constant ``alpha`` and ``kappa``."""

    def __init__(
        self,
        currency: str,
        term_structure: YieldCurve,
        alpha_times: Sequence[float],
        alphas: Sequence[float],
        kappa_times: Sequence[float],
        kappas: Sequence[float],
        shift: float = 0.0,
        scaling: float = 1.0,
    ):
        super().__init__(currency, term_structure, shift, scaling)
        self._alpha = PiecewiseConstantFunction(alpha_times, alphas)
        self._kappa = PiecewiseConstantFunction(kappa_times, kappas)

    def parameter_times(self, i: int) -> np.ndarray:
        if i not in (0, 1):
            raise ValueError(f"parameter {i} does not exist, only have 0..1")
        return self._alpha.times if i == 0 else self._kappa.times

    def set_alphas(self, alphas: Sequence[float]) -> None:
        self._alpha.set_values(alphas)
        self.notify_observers()

    def set_kappas(self, kappas: Sequence[float]) -> None:
        self._kappa.set_values(kappas)
        self.notify_observers()

    def _zeta_impl(self, t: float) -> float:
        return self._alpha.integral_of_square(t)

    def _H_impl(self, t: float) -> float:
        return self._kappa.integral_of_exp_minus_integral(t)

    def alpha(self, t: float) -> float:
        return self._alpha(t) / self._scaling

    def kappa(self, t: float) -> float:
        return self._kappa(t)

    def Hprime(self, t: float) -> float:
        return self._scaling * self._kappa.exp_minus_integral(t)

    def Hprime2(self, t: float) -> float:
        return -self._scaling * self._kappa(t) * self._kappa.exp_minus_integral(t)
