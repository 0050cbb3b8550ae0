"""
Equity forward discounting engine.
"""

from datetime import date
from typing import Optional

from xalib.cashflows.base import SimpleCashFlow
from xalib.curves.base import YieldCurve
from xalib.instruments.base import Results
from xalib.instruments.equity_forward import EquityForwardArguments
from xalib.market.quotes import SimpleQuote

from .base import PricingEngine


class DiscountingEquityForwardEngine(PricingEngine):
    """
    Forward price from the equity spot, its forecasting curve and dividend
    curve; the payoff is discounted on ``discount_curve``.
    """

    def __init__(
        self,
        equity_ir_curve: YieldCurve,
        dividend_curve: YieldCurve,
        equity_spot: SimpleQuote,
        discount_curve: YieldCurve,
        include_settlement_date_flows: Optional[bool] = None,
        settlement_date: Optional[date] = None,
        npv_date: Optional[date] = None,
    ):
        super().__init__()
        self.equity_ir_curve = equity_ir_curve
        self.dividend_curve = dividend_curve
        self.equity_spot = equity_spot
        self.discount_curve = discount_curve
        self.include_settlement_date_flows = include_settlement_date_flows
        self.settlement_date = settlement_date
        self.npv_date = npv_date
        for observable in (equity_ir_curve, dividend_curve, equity_spot, discount_curve):
            self.register_with(observable)

    def calculate(self, arguments: EquityForwardArguments) -> Results:
        npv_date = self.npv_date or self.dividend_curve.reference_date
        settlement_date = self.settlement_date or npv_date
        maturity = arguments.maturity_date

        value = 0.0
        if not SimpleCashFlow(0.0, maturity).has_occurred(
            settlement_date, self.include_settlement_date_flows
        ):
            forward = (
                self.equity_spot.value()
                * self.dividend_curve.df(maturity)
                / self.equity_ir_curve.df(maturity)
            )
            value = (
                arguments.long_short.value
                * arguments.quantity
                * (forward - arguments.strike)
                * self.discount_curve.df(maturity)
                / self.discount_curve.df(npv_date)
            )
        return Results(value=value, valuation_date=npv_date)
