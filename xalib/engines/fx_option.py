"""
Analytic FX option engine for the cross asset LGM model.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

import QuantLib as ql

from xalib.conventions.types import ExerciseType
from xalib.instruments.base import Results
from xalib.instruments.option import OptionArguments
from xalib.models.analytics import P, Hz, az, integral, rzx, rzz, sx, vx, zetaz
from xalib.models.cross_asset import CrossAssetModel

from .base import PricingEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _CachedIntegrals:
    t0: float
    t: float
    version: int
    value: float


class AnalyticCcLgmFxOptionEngine(PricingEngine):
    """
    European FX option on the FX component ``foreign_currency`` of a cross
    asset model, priced with Black on the model implied FX variance.

    The pure interest rate part of the variance only depends on the
    integration bounds and the model parameters; it is cached across calls
    unless the cache is disabled.

    Args:
        model: Cross asset model, domestic currency first
        foreign_currency: FX component index (IR component ``foreign_currency + 1``)
    """

    def __init__(self, model: CrossAssetModel, foreign_currency: int):
        super().__init__()
        self.model = model
        self.foreign_currency = foreign_currency
        self._cache_enabled = True
        self._cache: Optional[_CachedIntegrals] = None
        self.register_with(model)

    def enable_cache(self, enabled: bool = True) -> None:
        self._cache_enabled = enabled
        if not enabled:
            self._cache = None

    @property
    def cache_enabled(self) -> bool:
        return self._cache_enabled

    def _ir_integrals(self, t0: float, t: float) -> float:
        model = self.model
        cached = self._cache
        if (
            self._cache_enabled
            and cached is not None
            and cached.t0 == t0
            and cached.t == t
            and cached.version == model.version
        ):
            logger.debug("FX option integrals cache hit for (%s, %s)", t0, t)
            return cached.value

        logger.debug("FX option integrals cache miss for (%s, %s)", t0, t)
        i = self.foreign_currency + 1
        H0 = Hz(0)(model, t)
        Hi = Hz(i)(model, t)

        def _int(*exprs) -> float:
            return integral(model, P(*exprs), t0, t)

        value = (
            H0 * H0 * (zetaz(0)(model, t) - zetaz(0)(model, t0))
            - 2.0 * H0 * _int(Hz(0), az(0), az(0))
            + _int(Hz(0), Hz(0), az(0), az(0))
            + Hi * Hi * (zetaz(i)(model, t) - zetaz(i)(model, t0))
            - 2.0 * Hi * _int(Hz(i), az(i), az(i))
            + _int(Hz(i), Hz(i), az(i), az(i))
            - 2.0
            * (
                H0 * Hi * _int(rzz(0, i), az(0), az(i))
                - H0 * _int(rzz(0, i), Hz(i), az(0), az(i))
                - Hi * _int(rzz(0, i), Hz(0), az(0), az(i))
                + _int(rzz(0, i), Hz(0), Hz(i), az(0), az(i))
            )
        )
        if self._cache_enabled:
            self._cache = _CachedIntegrals(t0, t, model.version, value)
        return value

    def variance(self, t0: float, t: float) -> float:
        """Variance of the log FX rate between ``t0`` and ``t``."""
        model = self.model
        k = self.foreign_currency
        i = k + 1
        H0 = Hz(0)(model, t)
        Hi = Hz(i)(model, t)

        def _int(*exprs) -> float:
            return integral(model, P(*exprs), t0, t)

        return (
            self._ir_integrals(t0, t)
            + 2.0 * (H0 * _int(rzx(0, k), az(0), sx(k)) - _int(rzx(0, k), Hz(0), az(0), sx(k)))
            - 2.0 * (Hi * _int(rzx(i, k), az(i), sx(k)) - _int(rzx(i, k), Hz(i), az(i), sx(k)))
            + vx(k)(model, t)
            - vx(k)(model, t0)
        )

    def calculate(self, arguments: OptionArguments) -> Results:
        if arguments.exercise.type is not ExerciseType.EUROPEAN:
            raise ValueError("only european options are allowed")

        model = self.model
        domestic = model.irlgm1f(0).term_structure
        foreign = model.irlgm1f(self.foreign_currency + 1).term_structure
        expiry = arguments.exercise.last_date()
        if expiry <= domestic.reference_date:
            return Results(value=0.0)

        t = domestic.time_from_reference(expiry)
        spot = model.fxbs(self.foreign_currency).fx_spot_today.value()
        domestic_discount = domestic.df(expiry)
        forward = spot * foreign.df(expiry) / domestic_discount
        std_dev = math.sqrt(max(self.variance(0.0, t), 0.0))

        payoff = arguments.payoff
        value = ql.blackFormula(
            payoff.option_type.ql_type, payoff.strike, forward, std_dev, domestic_discount
        )
        return Results(value=value)
