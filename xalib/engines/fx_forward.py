"""
FX forward discounting engine.
"""

from datetime import date
from typing import Optional

from xalib.cashflows.base import SimpleCashFlow
from xalib.curves.base import YieldCurve
from xalib.instruments.fx_forward import FxForwardArguments, FxForwardResults
from xalib.market.quotes import SimpleQuote

from .base import PricingEngine


class DiscountingFxForwardEngine(PricingEngine):
    """
    Values an FX forward in ``ccy1`` off two discount curves and the spot
    rate ``spot_fx`` in units of ``ccy1`` per unit of ``ccy2``.

    Both curves must share their reference date. The instrument may quote
    its currencies in either order.
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

    def calculate(self, arguments: FxForwardArguments) -> FxForwardResults:
        curve1 = self.ccy1_discount_curve
        curve2 = self.ccy2_discount_curve
        if curve1 is None or curve2 is None:
            raise ValueError("empty discounting term structure")
        if curve1.reference_date != curve2.reference_date:
            raise ValueError(
                f"discount curve reference dates differ: {curve1.reference_date} "
                f"vs {curve2.reference_date}"
            )
        reference = curve1.reference_date
        if arguments.maturity_date < reference:
            raise ValueError(
                f"maturity date ({arguments.maturity_date}) before reference date ({reference})"
            )

        if arguments.currency1 == self.ccy1:
            if arguments.currency2 != self.ccy2:
                raise ValueError(
                    f"mismatched currencies: instrument {arguments.currency1}/"
                    f"{arguments.currency2}, engine {self.ccy1}/{self.ccy2}"
                )
            nominal1, nominal2 = arguments.nominal1, arguments.nominal2
            pay_currency1 = arguments.pay_currency1
        else:
            if arguments.currency1 != self.ccy2 or arguments.currency2 != self.ccy1:
                raise ValueError(
                    f"mismatched currencies: instrument {arguments.currency1}/"
                    f"{arguments.currency2}, engine {self.ccy1}/{self.ccy2}"
                )
            nominal1, nominal2 = arguments.nominal2, arguments.nominal1
            pay_currency1 = not arguments.pay_currency1

        npv_date = self.npv_date or reference
        settlement_date = self.settlement_date or npv_date

        value = 0.0
        fair_forward_rate = nominal1 / nominal2
        maturity = SimpleCashFlow(0.0, arguments.maturity_date)
        if not maturity.has_occurred(settlement_date, self.include_settlement_date_flows):
            d1_near = curve1.df(npv_date)
            d1_far = curve1.df(arguments.maturity_date)
            d2_near = curve2.df(npv_date)
            d2_far = curve2.df(arguments.maturity_date)
            fx_forward = d1_near / d1_far * d2_far / d2_near * self.spot_fx.value()
            sign = -1.0 if pay_currency1 else 1.0
            value = sign * d1_far / d1_near * (nominal1 - nominal2 * fx_forward)
            fair_forward_rate = fx_forward

        return FxForwardResults(
            value=value,
            valuation_date=npv_date,
            npv_currency=self.ccy1,
            fair_forward_rate=fair_forward_rate,
        )
