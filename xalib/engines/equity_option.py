"""
Analytic equity option engine for the cross asset LGM model.
"""

import math

import QuantLib as ql

from xalib.conventions.types import ExerciseType
from xalib.instruments.base import Results
from xalib.instruments.option import OptionArguments
from xalib.models.analytics import P, Hz, az, integral, rzs, ss, vs, zetaz
from xalib.models.cross_asset import CrossAssetModel

from .base import PricingEngine


class AnalyticXAssetLgmEquityOptionEngine(PricingEngine):
    """
    European option on equity component ``eq_index`` of a cross asset model.

    The equity variance combines the equity volatility with the LGM factor
    of the equity currency ``ccy_index``. The option is discounted on that
    currency's model curve.
    """

    def __init__(self, model: CrossAssetModel, eq_index: int, ccy_index: int):
        super().__init__()
        self.model = model
        self.eq_index = eq_index
        self.ccy_index = ccy_index
        self.register_with(model)

    def variance(self, t0: float, t: float) -> float:
        model = self.model
        i = self.ccy_index
        k = self.eq_index
        H_i_t = Hz(i)(model, t)

        def _int(*exprs) -> float:
            return integral(model, P(*exprs), t0, t)

        return (
            H_i_t * H_i_t * (zetaz(i)(model, t) - zetaz(i)(model, t0))
            - 2.0 * H_i_t * _int(Hz(i), az(i), az(i))
            + _int(Hz(i), Hz(i), az(i), az(i))
            + 2.0 * H_i_t * _int(rzs(i, k), az(i), ss(k))
            - 2.0 * _int(rzs(i, k), Hz(i), az(i), ss(k))
            + vs(k)(model, t)
            - vs(k)(model, t0)
        )

    def calculate(self, arguments: OptionArguments) -> Results:
        if arguments.exercise.type is not ExerciseType.EUROPEAN:
            raise ValueError("only european options are allowed")

        eq = self.model.eqbs(self.eq_index)
        ccy_curve = self.model.irlgm1f(self.ccy_index).term_structure
        expiry = arguments.exercise.last_date()
        if expiry <= ccy_curve.reference_date:
            return Results(value=0.0)

        t = ccy_curve.time_from_reference(expiry)
        forward = eq.eq_spot_today.value() * eq.div_curve.df(expiry) / eq.ir_curve.df(expiry)
        discount = ccy_curve.df(expiry)
        std_dev = math.sqrt(max(self.variance(0.0, t), 0.0))

        payoff = arguments.payoff
        value = ql.blackFormula(
            payoff.option_type.ql_type, payoff.strike, forward, std_dev, discount
        )
        return Results(value=value)
