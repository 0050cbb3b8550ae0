"""
Deposit discounting engine.
"""

from datetime import date
from typing import Optional

from xalib.cashflows import analysis
from xalib.curves.base import YieldCurve
from xalib.instruments.deposit import DepositArguments, DepositResults

from .base import PricingEngine


class DepositEngine(PricingEngine):
    """
    Values the deposit leg on a discount curve; the fair rate is the
    deposit index forecast on that same curve.

    Args:
        discount_curve: Curve to discount and forecast on
        include_settlement_date_flows: Whether flows on the settlement date count
        settlement_date: Defaults to the curve reference date
        npv_date: Date the value is expressed at; defaults to the curve reference date
    """

    def __init__(
        self,
        discount_curve: YieldCurve,
        include_settlement_date_flows: Optional[bool] = None,
        settlement_date: Optional[date] = None,
        npv_date: Optional[date] = None,
    ):
        super().__init__()
        if discount_curve is None:
            raise ValueError("empty discounting term structure")
        self.discount_curve = discount_curve
        self.include_settlement_date_flows = include_settlement_date_flows
        self.settlement_date = settlement_date
        self.npv_date = npv_date
        self.register_with(discount_curve)

    def calculate(self, arguments: DepositArguments) -> DepositResults:
        curve = self.discount_curve
        reference = curve.reference_date

        settlement_date = self.settlement_date or reference
        if settlement_date < reference:
            raise ValueError(
                f"settlement date ({settlement_date}) before discount curve "
                f"reference date ({reference})"
            )
        npv_date = self.npv_date or reference
        if npv_date < reference:
            raise ValueError(
                f"npv date ({npv_date}) before discount curve reference date ({reference})"
            )

        value = analysis.npv(
            arguments.leg,
            curve,
            self.include_settlement_date_flows,
            settlement_date,
            npv_date,
        )
        index = arguments.index.clone(curve)
        accrual = index.day_count.year_fraction(arguments.start_date, arguments.maturity_date)
        fair_rate = index.forecast_fixing_period(
            arguments.start_date, arguments.maturity_date, accrual
        )
        return DepositResults(value=value, valuation_date=npv_date, fair_rate=fair_rate)
