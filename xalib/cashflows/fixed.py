"""
Fixed rate leg builder.
"""

from typing import List, Optional

from xalib.conventions.calendars import Calendar
from xalib.conventions.daycount import DayCountConvention
from xalib.conventions.types import BusinessDayAdjustment
from xalib.schedule.core import Schedule

from .base import FixedRateCoupon, Leg, as_list, value_at


class FixedRateLeg:
    """Builds one :class:`FixedRateCoupon` per schedule period."""

    def __init__(self, schedule: Schedule):
        self.schedule = schedule
        self._notionals: List[float] = []
        self._rates: List[float] = []
        self._day_count: Optional[DayCountConvention] = None
        self._payment_adjustment = BusinessDayAdjustment.FOLLOWING
        self._payment_calendar: Optional[Calendar] = None

    def with_notionals(self, notionals) -> "FixedRateLeg":
        self._notionals = as_list(notionals)
        return self

    def with_coupon_rates(self, rates, day_count: DayCountConvention) -> "FixedRateLeg":
        self._rates = as_list(rates)
        self._day_count = day_count
        return self

    def with_payment_adjustment(self, convention: BusinessDayAdjustment) -> "FixedRateLeg":
        self._payment_adjustment = convention
        return self

    def with_payment_calendar(self, calendar: Calendar) -> "FixedRateLeg":
        self._payment_calendar = calendar
        return self

    def build(self) -> Leg:
        if not self._notionals:
            raise ValueError("No notional given for fixed rate leg.")
        if not self._rates or self._day_count is None:
            raise ValueError("No coupon rates given for fixed rate leg.")
        calendar = self._payment_calendar or self.schedule.calendar
        leg: Leg = []
        for i, (start, end) in enumerate(zip(self.schedule[:-1], self.schedule[1:])):
            leg.append(
                FixedRateCoupon(
                    calendar.adjust(end, self._payment_adjustment),
                    value_at(self._notionals, i),
                    value_at(self._rates, i),
                    start,
                    end,
                    self._day_count,
                )
            )
        return leg
