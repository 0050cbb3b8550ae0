"""
Core data structures for schedule generation.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterator, List, Optional

from xalib.conventions.calendars import Calendar
from xalib.conventions.daycount import DayCountConvention
from xalib.conventions.types import BusinessDayAdjustment, Tenor


@dataclass
class SchedulePeriod:
    """Represents a single period in a payment schedule."""

    accrual_start: date
    accrual_end: date
    payment_date: date
    year_fraction: float
    is_stub: bool = False

    @property
    def accrual_days(self) -> int:
        """Number of calendar days in accrual period."""
        return (self.accrual_end - self.accrual_start).days


class Schedule:
    """Ordered, adjusted schedule dates together with their generation rules."""

    def __init__(
        self,
        dates: List[date],
        calendar: Calendar,
        convention: BusinessDayAdjustment,
        tenor: Optional[Tenor] = None,
        termination_convention: Optional[BusinessDayAdjustment] = None,
        end_of_month: bool = False,
    ):
        if any(d1 >= d2 for d1, d2 in zip(dates[:-1], dates[1:])):
            raise ValueError("Schedule dates must be strictly increasing")
        self.dates = list(dates)
        self.calendar = calendar
        self.convention = convention
        self.tenor = tenor
        self.termination_convention = termination_convention or convention
        self.end_of_month = end_of_month

    def __len__(self) -> int:
        return len(self.dates)

    def __getitem__(self, i):
        return self.dates[i]

    def __iter__(self) -> Iterator[date]:
        return iter(self.dates)

    @property
    def start_date(self) -> date:
        return self.dates[0]

    @property
    def end_date(self) -> date:
        return self.dates[-1]

    def periods(
        self,
        day_count: DayCountConvention,
        payment_calendar: Optional[Calendar] = None,
        payment_adjustment: BusinessDayAdjustment = BusinessDayAdjustment.FOLLOWING,
    ) -> List[SchedulePeriod]:
        """Accrual periods between consecutive dates, paid at the period end."""
        pay_calendar = payment_calendar or self.calendar
        result = []
        for start, end in zip(self.dates[:-1], self.dates[1:]):
            result.append(
                SchedulePeriod(
                    accrual_start=start,
                    accrual_end=end,
                    payment_date=pay_calendar.adjust(end, payment_adjustment),
                    year_fraction=day_count.year_fraction(start, end),
                )
            )
        return result

    def __repr__(self) -> str:
        if not self.dates:
            return "Schedule([])"
        return f"Schedule({self.dates[0]} -> {self.dates[-1]}, {len(self.dates)} dates)"
