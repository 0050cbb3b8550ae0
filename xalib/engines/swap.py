"""
Vanilla swap discounting engine.
"""

from datetime import date
from typing import Optional

from xalib.cashflows import analysis
from xalib.cashflows.analysis import BASIS_POINT
from xalib.curves.base import YieldCurve
from xalib.instruments.swap import SwapArguments, SwapResults

from .base import PricingEngine


class DiscountingSwapEngine(PricingEngine):
    """Discounts both swap legs on one curve and backs out the fair fixed rate."""

    def __init__(
        self,
        discount_curve: YieldCurve,
        include_settlement_date_flows: Optional[bool] = None,
        settlement_date: Optional[date] = None,
        npv_date: Optional[date] = None,
    ):
        super().__init__()
        self.discount_curve = discount_curve
        self.include_settlement_date_flows = include_settlement_date_flows
        self.settlement_date = settlement_date
        self.npv_date = npv_date
        self.register_with(discount_curve)

    def calculate(self, arguments: SwapArguments) -> SwapResults:
        curve = self.discount_curve
        npv_date = self.npv_date or curve.reference_date
        settlement_date = self.settlement_date or npv_date

        leg_npv = []
        leg_bps = []
        for leg, payer in zip(arguments.legs, arguments.payer):
            npv, bps = analysis.npvbps(
                leg, curve, self.include_settlement_date_flows, settlement_date, npv_date
            )
            leg_npv.append(npv * payer)
            leg_bps.append(bps * payer)
        value = sum(leg_npv)

        fair_rate = None
        if leg_bps[0] != 0.0:
            fair_rate = arguments.fixed_rate - value / (leg_bps[0] / BASIS_POINT)
        return SwapResults(
            value=value,
            valuation_date=npv_date,
            leg_npv=leg_npv,
            leg_bps=leg_bps,
            fair_rate=fair_rate,
        )
