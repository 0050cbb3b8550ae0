"""
Two-currency swap discounting engine.
"""

import logging
from datetime import date
from typing import List, Optional

from xalib.cashflows import analysis
from xalib.curves.base import YieldCurve
from xalib.instruments.currency_swap import CrossCcySwapResults, CurrencySwapArguments
from xalib.market.quotes import SimpleQuote

from .base import LegValuationError, PricingEngine, ordinal

logger = logging.getLogger(__name__)


class CrossCcySwapEngine(PricingEngine):
    """
    Discounts each leg on the curve of its currency and converts legs in
    ``ccy2`` to ``ccy1`` at ``spot_fx`` (units of ``ccy1`` per ``ccy2``).

    The total value is in ``ccy1``.
    """

    def __init__(
        self,
        ccy1: str,
        ccy1_discount_curve: YieldCurve,
        ccy2: str,
        ccy2_discount_curve: YieldCurve,
        spot_fx: SimpleQuote,
        include_settlement_date_flows: Optional[bool] = None,
        settlement_date: Optional[date] = None,
        npv_date: Optional[date] = None,
    ):
        super().__init__()
        self.ccy1 = ccy1
        self.ccy1_discount_curve = ccy1_discount_curve
        self.ccy2 = ccy2
        self.ccy2_discount_curve = ccy2_discount_curve
        self.spot_fx = spot_fx
        self.include_settlement_date_flows = include_settlement_date_flows
        self.settlement_date = settlement_date
        self.npv_date = npv_date
        for observable in (ccy1_discount_curve, ccy2_discount_curve, spot_fx):
            self.register_with(observable)

    def _curve(self, currency: str) -> YieldCurve:
        if currency == self.ccy1:
            return self.ccy1_discount_curve
        if currency == self.ccy2:
            return self.ccy2_discount_curve
        raise ValueError(
            f"leg ccy ({currency}) must be ccy1 ({self.ccy1}) or ccy2 ({self.ccy2})"
        )

    def calculate(self, arguments: CurrencySwapArguments) -> CrossCcySwapResults:
        curve1 = self.ccy1_discount_curve
        curve2 = self.ccy2_discount_curve
        if curve1 is None or curve2 is None:
            raise ValueError("empty discounting term structure")
        if not self.spot_fx.is_valid():
            raise ValueError("empty spot FX quote")

        npv_date = self.npv_date or curve1.reference_date
        settlement_date = self.settlement_date or npv_date

        n = len(arguments.legs)
        results = CrossCcySwapResults(
            value=0.0,
            valuation_date=npv_date,
            leg_npv=[0.0] * n,
            leg_bps=[0.0] * n,
            in_ccy_leg_npv=[0.0] * n,
            in_ccy_leg_bps=[0.0] * n,
            start_discounts=[None] * n,
            end_discounts=[None] * n,
            npv_date_discount=curve1.df(npv_date),
            npv_date_discounts=[0.0] * n,
        )
        for leg_no, (leg, payer, currency) in enumerate(
            zip(arguments.legs, arguments.payer, arguments.currencies)
        ):
            try:
                curve = self._curve(currency)
                results.npv_date_discounts[leg_no] = curve.df(npv_date)

                npv, bps = analysis.npvbps(
                    leg, curve, self.include_settlement_date_flows, settlement_date, npv_date
                )
                npv *= payer
                bps *= payer
                results.in_ccy_leg_npv[leg_no] = npv
                results.in_ccy_leg_bps[leg_no] = bps

                if leg:
                    results.start_discounts[leg_no] = self._discount_after_reference(
                        curve, analysis.start_date(leg)
                    )
                    results.end_discounts[leg_no] = self._discount_after_reference(
                        curve, analysis.maturity_date(leg)
                    )

                if currency != self.ccy1:
                    npv *= self.spot_fx.value()
                    bps *= self.spot_fx.value()
                results.leg_npv[leg_no] = npv
                results.leg_bps[leg_no] = bps
                results.value += npv
            except Exception as exc:
                raise LegValuationError(f"{ordinal(leg_no + 1)} leg: {exc}") from exc

        logger.debug("Cross currency swap valued at %s %s", results.value, self.ccy1)
        return results

    @staticmethod
    def _discount_after_reference(curve: YieldCurve, d: date) -> Optional[float]:
        if d < curve.reference_date:
            return None
        return curve.df(d)
