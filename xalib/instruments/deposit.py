"""
Deposit: notional out on the start date, notional plus fixed interest back
at maturity.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from xalib.cashflows.base import FixedRateCoupon, Leg, SimpleCashFlow
from xalib.conventions.calendars import Calendar
from xalib.conventions.daycount import DayCountConvention
from xalib.conventions.types import BusinessDayAdjustment, Tenor
from xalib.market.indexes import IborIndex

from .base import Instrument, Results


@dataclass
class DepositArguments:
    index: IborIndex
    leg: Leg
    start_date: date
    maturity_date: date

    def validate(self) -> None:
        if len(self.leg) != 3:
            raise ValueError(
                "deposit arguments: unexpected number of cash flows "
                f"({len(self.leg)}), should be 3"
            )


@dataclass
class DepositResults(Results):
    fair_rate: Optional[float] = None


class Deposit(Instrument):
    """
    Term deposit settled ``fixing_days`` after the trade date.

    Long deposits lend the notional (pay at start, receive at maturity).
    """

    def __init__(
        self,
        nominal: float,
        rate: float,
        tenor: Union[Tenor, str],
        fixing_days: int,
        calendar: Calendar,
        convention: BusinessDayAdjustment,
        end_of_month: bool,
        day_count: DayCountConvention,
        trade_date: date,
        is_long: bool = True,
        forward_start: Optional[Union[Tenor, str]] = None,
    ):
        super().__init__()
        self.nominal = nominal
        self.rate = rate
        self.index = IborIndex(
            "deposit-helper-index",
            tenor,
            fixing_days,
            "",
            calendar,
            convention,
            end_of_month,
            day_count,
        )
        reference_date = calendar.adjust(trade_date)
        start_date = self.index.value_date(reference_date)
        if forward_start is not None:
            start_date = calendar.advance(start_date, forward_start, convention, end_of_month)
        self.start_date = start_date
        self.fixing_date = self.index.fixing_date(start_date)
        self.maturity_date = self.index.maturity_date(start_date)

        w = 1.0 if is_long else -1.0
        self.leg: Leg = [
            SimpleCashFlow(-w * nominal, self.start_date),
            FixedRateCoupon(
                self.maturity_date,
                w * nominal,
                rate,
                self.start_date,
                self.maturity_date,
                day_count,
            ),
            SimpleCashFlow(w * nominal, self.maturity_date),
        ]

    def is_expired(self) -> bool:
        return self.leg[-1].has_occurred()

    def _expired_results(self) -> DepositResults:
        return DepositResults(value=0.0, error_estimate=0.0)

    def arguments(self) -> DepositArguments:
        args = DepositArguments(self.index, self.leg, self.start_date, self.maturity_date)
        args.validate()
        return args

    def fair_rate(self) -> Optional[float]:
        return self.results.fair_rate
