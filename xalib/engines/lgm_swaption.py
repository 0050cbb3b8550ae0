"""
Analytic LGM swaption engine.

Prices a European swaption as an option on the coupon bond formed by the
fixed leg, the final notional and the float leg start. Float spreads and
non-flat Ibor coupons are mapped onto the fixed coupons as amount
corrections before the bond option is solved in closed form.
"""

import logging
import math
from bisect import bisect_left
from enum import Enum
from typing import List, Optional, Union

from xalib.conventions.types import OptionType, SettlementType, SwapType
from xalib.curves.base import YieldCurve
from xalib.instruments.base import Results
from xalib.instruments.swaption import SwaptionArguments
from xalib.math.gaussian import cumulative_normal
from xalib.math.rootfinding import RootFindingError, brent_solve
from xalib.models.cross_asset import CrossAssetModel
from xalib.models.lgm import LinearGaussMarkovModel
from xalib.models.parametrization import IrLgm1fParametrization

from .base import PricingEngine

logger = logging.getLogger(__name__)

Y_STAR_ACCURACY = 1.0e-6
Y_STAR_GUESS = 0.0
Y_STAR_STEP = 0.01


class FloatSpreadMapping(Enum):
    """How a floating coupon correction is split onto the fixed coupons."""

    NEXT_COUPON = "NEXT_COUPON"
    PRO_RATA = "PRO_RATA"


class AnalyticLgmSwaptionEngine(PricingEngine):
    """
    European swaption engine for the one-factor LGM.

    Args:
        model: LGM model, bare LGM parametrization, or cross asset model
        ccy: IR component to use when ``model`` is a cross asset model
        discount_curve: Discount curve; defaults to the parametrization curve
        float_spread_mapping: Mapping of float corrections onto fixed coupons
    """

    def __init__(
        self,
        model: Union[LinearGaussMarkovModel, IrLgm1fParametrization, CrossAssetModel],
        ccy: int = 0,
        discount_curve: Optional[YieldCurve] = None,
        float_spread_mapping: FloatSpreadMapping = FloatSpreadMapping.PRO_RATA,
    ):
        super().__init__()
        if isinstance(model, CrossAssetModel):
            self.parametrization = model.irlgm1f(ccy)
            self.register_with(model)
        elif isinstance(model, LinearGaussMarkovModel):
            self.parametrization = model.parametrization
            self.register_with(model)
        else:
            self.parametrization = model
            self.register_with(model)
        self.discount_curve = discount_curve
        self.float_spread_mapping = float_spread_mapping
        self.register_with(discount_curve)

    def calculate(self, arguments: SwaptionArguments) -> Results:
        if arguments.settlement_type is not SettlementType.PHYSICAL:
            raise ValueError("cash-settled swaptions are not supported")

        p = self.parametrization
        ts = p.term_structure
        reference = ts.reference_date
        expiry = arguments.exercise_dates[-1]
        if expiry <= reference:
            return Results(value=0.0)

        swap = arguments.swap
        option_type = OptionType.CALL if swap.type is SwapType.PAYER else OptionType.PUT
        fixed_dates = list(swap.fixed_schedule.dates)
        float_dates = list(swap.floating_schedule.dates)
        j1 = bisect_left(fixed_dates, expiry)
        k1 = bisect_left(float_dates, expiry)
        n_fixed = len(swap.fixed_coupons)
        n_float = len(swap.floating_accrual_times)
        if j1 >= n_fixed or k1 >= n_float:
            return Results(value=0.0)

        c = self.discount_curve if self.discount_curve is not None else ts
        nominal = swap.nominal
        flat_ibor = swap.ibor_index.clone(c)

        ratio = int((n_float - k1) / (n_fixed - j1) + 0.5)
        if ratio < 1:
            raise ValueError(
                "floating leg's payment frequency must be equal to or higher than "
                f"fixed leg's payment frequency, got ratio {ratio}"
            )

        S: List[float] = [0.0] * (n_fixed - j1)
        S_m1 = 0.0
        k = k1
        for j in range(j1, n_fixed):
            sum1 = 0.0
            sum2 = 0.0
            rr = 0
            while rr < ratio and k < n_float:
                pay_df = c.df(swap.floating_pay_dates[k])
                amount = swap.floating_coupons[k]
                if amount is not None:
                    flat_amount = (
                        flat_ibor.fixing(swap.floating_fixing_dates[k])
                        * swap.floating_accrual_times[k]
                        * nominal
                    )
                    correction = (amount - flat_amount) * pay_df
                else:
                    correction = (
                        nominal
                        * swap.floating_spreads[k]
                        * swap.floating_accrual_times[k]
                        * pay_df
                    )
                if self.float_spread_mapping is FloatSpreadMapping.PRO_RATA:
                    lambda2 = (rr + 1) / ratio
                    lambda1 = 1.0 - lambda2
                else:
                    lambda1, lambda2 = 0.0, 1.0
                sum1 += lambda1 * correction
                sum2 += lambda2 * correction
                rr += 1
                k += 1
            if j > j1:
                S[j - j1 - 1] += sum1 / c.df(swap.fixed_pay_dates[j - 1])
            else:
                S_m1 += sum1 / c.df(swap.floating_reset_dates[k1])
            S[j - j1] += sum2 / c.df(swap.fixed_pay_dates[j])

        w = -1.0 if option_type is OptionType.CALL else 1.0
        u = 1.0 if p.Hprime(0.0) > 0.0 else -1.0

        zetaex = p.zeta(ts.time_from_reference(expiry))
        H0 = p.H(ts.time_from_reference(swap.floating_reset_dates[k1]))
        D0 = c.df(swap.floating_reset_dates[k1])
        Hj = [p.H(ts.time_from_reference(d)) for d in swap.fixed_pay_dates[j1:]]
        Dj = [c.df(d) for d in swap.fixed_pay_dates[j1:]]
        coupons = swap.fixed_coupons[j1:]

        def bond_minus_strike(y: float) -> float:
            total = 0.0
            for cj, sj, hj, dj in zip(coupons, S, Hj, Dj):
                dh = hj - H0
                total += (cj - sj) * dj * math.exp(-dh * y - 0.5 * dh * dh * zetaex)
            dh = Hj[-1] - H0
            total += nominal * Dj[-1] * math.exp(-dh * y - 0.5 * dh * dh * zetaex)
            return total - (nominal + S_m1) * D0

        try:
            y_star = brent_solve(
                bond_minus_strike, Y_STAR_ACCURACY, Y_STAR_GUESS, Y_STAR_STEP
            ).root
        except RootFindingError as exc:
            raise RootFindingError(
                f"AnalyticLgmSwaptionEngine failed to compute yStar: {exc}"
            ) from exc
        logger.debug("yStar %s for expiry %s", y_star, expiry)

        sqrt_zeta = math.sqrt(zetaex)
        value = 0.0
        for cj, sj, hj, dj in zip(coupons, S, Hj, Dj):
            value += w * (cj - sj) * dj * cumulative_normal(
                u * w * (y_star + (hj - H0) * zetaex) / sqrt_zeta
            )
        value += w * nominal * Dj[-1] * cumulative_normal(
            u * w * (y_star + (Hj[-1] - H0) * zetaex) / sqrt_zeta
        )
        value -= w * (nominal + S_m1) * D0 * cumulative_normal(u * w * y_star / sqrt_zeta)

        return Results(
            value=value,
            additional_results={
                "fixedAmountCorrectionSettlement": S_m1,
                "fixedAmountCorrections": list(S),
            },
        )
