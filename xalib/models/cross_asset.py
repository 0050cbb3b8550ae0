"""
Cross asset model: LGM interest rates, Black-Scholes FX and equity.

Components are ordered IR (the first one is the domestic currency), then
one FX rate per foreign currency, then equities. The correlation matrix
uses the same ordering.
"""

import logging
from typing import Callable, List, Optional, Sequence, Union

import numpy as np

from xalib.conventions.types import AssetType, OptionType
from xalib.curves.base import YieldCurve
from xalib.math.integrals import Integrator, SimpsonIntegral
from xalib.math.piecewise_integral import PiecewiseIntegral
from xalib.observable import Observable, Observer

from .fxeq_parametrization import EqBsParametrization, FxBsParametrization
from .lgm import LinearGaussMarkovModel
from .parametrization import IrLgm1fParametrization

logger = logging.getLogger(__name__)


class CrossAssetModel(Observable, Observer):
    """
    Multi-currency LGM model with FX and equity components.

    Args:
        ir: LGM models or parametrizations, domestic currency first
        fx: FX parametrizations, one per foreign currency in ``ir[1:]`` order
        correlation: Correlation matrix over all components
            (identity if omitted)
        eq: Equity parametrizations; their currencies must be modelled
    """

    def __init__(
        self,
        ir: Sequence[Union[LinearGaussMarkovModel, IrLgm1fParametrization]],
        fx: Sequence[FxBsParametrization] = (),
        correlation: Optional[np.ndarray] = None,
        eq: Sequence[EqBsParametrization] = (),
    ):
        Observable.__init__(self)
        if not ir:
            raise ValueError("at least one IR component required")
        self._lgm: List[LinearGaussMarkovModel] = [
            m if isinstance(m, LinearGaussMarkovModel) else LinearGaussMarkovModel(m)
            for m in ir
        ]
        self._fx = list(fx)
        self._eq = list(eq)
        if len(self._fx) != len(self._lgm) - 1:
            raise ValueError(
                f"there must be n-1 fx for n ir components, got {len(self._fx)} fx "
                f"for {len(self._lgm)} ir"
            )
        for i, fx_param in enumerate(self._fx):
            if fx_param.currency != self._lgm[i + 1].parametrization.currency:
                raise ValueError(
                    f"fx parametrization #{i} must be for currency of ir "
                    f"parametrization #{i + 1}, but they are "
                    f"{fx_param.currency} and {self._lgm[i + 1].parametrization.currency}"
                )
        currencies = [m.parametrization.currency for m in self._lgm]
        if len(set(currencies)) != len(currencies):
            raise ValueError(f"duplicate IR currencies: {currencies}")
        for eq_param in self._eq:
            if eq_param.currency not in currencies:
                raise ValueError(
                    f"currency {eq_param.currency} of equity {eq_param.eq_name} "
                    "not present in cross asset model"
                )

        n = self.dimension
        if correlation is None:
            correlation = np.eye(n)
        self._rho = np.array(correlation, dtype=float)
        self._check_correlation()

        for component in [*self._lgm, *self._fx, *self._eq]:
            self.register_with(component)
        self.set_integration_policy(SimpsonIntegral(1.0e-8, 100), True)

    def update(self) -> None:
        self.notify_observers()

    def _check_correlation(self) -> None:
        n = self.dimension
        rho = self._rho
        if rho.shape != (n, n):
            raise ValueError(f"correlation matrix is {rho.shape} but must be ({n}, {n})")
        if not np.allclose(rho, rho.T, rtol=0.0, atol=1e-12):
            raise ValueError("correlation matrix is not symmetric")
        if not np.allclose(np.diag(rho), 1.0, rtol=0.0, atol=1e-12):
            raise ValueError("correlation matrix must have unit diagonal")
        if np.any(rho < -1.0) or np.any(rho > 1.0):
            raise ValueError("correlation matrix entries must be in [-1, 1]")

    # components

    def components(self, asset_type: AssetType) -> int:
        if asset_type is AssetType.IR:
            return len(self._lgm)
        if asset_type is AssetType.FX:
            return len(self._fx)
        if asset_type is AssetType.EQ:
            return len(self._eq)
        raise ValueError(f"asset class {asset_type} not known")

    @property
    def dimension(self) -> int:
        return len(self._lgm) + len(self._fx) + len(self._eq)

    def idx(self, asset_type: AssetType, i: int) -> int:
        """Position of component ``i`` of ``asset_type`` in the correlation matrix."""
        n = self.components(asset_type)
        if not 0 <= i < n:
            raise IndexError(
                f"{asset_type.value.lower()} index ({i}) must be in 0...{n - 1}"
            )
        if asset_type is AssetType.IR:
            return i
        if asset_type is AssetType.FX:
            return len(self._lgm) + i
        return len(self._lgm) + len(self._fx) + i

    def lgm(self, ccy: int) -> LinearGaussMarkovModel:
        return self._lgm[self.idx(AssetType.IR, ccy)]

    def irlgm1f(self, ccy: int) -> IrLgm1fParametrization:
        return self.lgm(ccy).parametrization

    def fxbs(self, ccy: int) -> FxBsParametrization:
        return self._fx[self.idx(AssetType.FX, ccy) - len(self._lgm)]

    def eqbs(self, name: int) -> EqBsParametrization:
        return self._eq[self.idx(AssetType.EQ, name) - len(self._lgm) - len(self._fx)]

    def ccy_index(self, currency: str) -> int:
        for i, model in enumerate(self._lgm):
            if model.parametrization.currency == currency:
                return i
        raise ValueError(f"currency {currency} not present in cross asset model")

    def eq_index(self, name: str) -> int:
        for i, param in enumerate(self._eq):
            if param.eq_name == name:
                return i
        raise ValueError(f"equity {name} not present in cross asset model")

    # correlations

    @property
    def correlation_matrix(self) -> np.ndarray:
        return self._rho.copy()

    def correlation(self, s: AssetType, i: int, t: AssetType, j: int) -> float:
        return float(self._rho[self.idx(s, i), self.idx(t, j)])

    def set_correlation(self, s: AssetType, i: int, t: AssetType, j: int, value: float) -> None:
        row = self.idx(s, i)
        column = self.idx(t, j)
        if row == column and value != 1.0:
            raise ValueError(f"correlation must be 1 at ({row},{column})")
        if not -1.0 <= value <= 1.0:
            raise ValueError(f"correlation must be in [-1,1] at ({row},{column})")
        self._rho[row, column] = self._rho[column, row] = value
        self.notify_observers()

    # integration

    def set_integration_policy(
        self, integrator: Integrator, use_piecewise_integration: bool = True
    ) -> None:
        """Integrator used for all analytic moments; split at all parameter step times."""
        if not use_piecewise_integration:
            self._integrator = integrator
            return
        all_times: List[float] = []
        for model in self._lgm:
            all_times.extend(model.parametrization.parameter_times(0))
            all_times.extend(model.parametrization.parameter_times(1))
        for param in [*self._fx, *self._eq]:
            all_times.extend(param.parameter_times(0))
        self._integrator = PiecewiseIntegral(integrator, all_times, True)
        logger.debug("Cross asset model integrates piecewise at %d times", len(all_times))

    @property
    def integrator(self):
        return self._integrator

    def integrate(self, f: Callable[[float], float], a: float, b: float) -> float:
        return self._integrator.integrate(f, a, b)

    # pricing delegated to the currency models

    def numeraire(
        self, ccy: int, t: float, x: float, discount_curve: Optional[YieldCurve] = None
    ) -> float:
        return self.lgm(ccy).numeraire(t, x, discount_curve)

    def discount_bond(
        self, ccy: int, t: float, T: float, x: float, discount_curve: Optional[YieldCurve] = None
    ) -> float:
        return self.lgm(ccy).discount_bond(t, T, x, discount_curve)

    def reduced_discount_bond(
        self, ccy: int, t: float, T: float, x: float, discount_curve: Optional[YieldCurve] = None
    ) -> float:
        return self.lgm(ccy).reduced_discount_bond(t, T, x, discount_curve)

    def discount_bond_option(
        self,
        ccy: int,
        option_type: OptionType,
        strike: float,
        t: float,
        S: float,
        T: float,
        discount_curve: Optional[YieldCurve] = None,
    ) -> float:
        return self.lgm(ccy).discount_bond_option(option_type, strike, t, S, T, discount_curve)

    def __repr__(self) -> str:
        return (
            f"CrossAssetModel(ir={len(self._lgm)}, fx={len(self._fx)}, eq={len(self._eq)})"
        )
