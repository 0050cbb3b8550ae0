"""
Ibor coupons and leg builder.
"""

from datetime import date
from typing import List, Optional

from xalib.conventions.calendars import Calendar
from xalib.conventions.daycount import DayCountConvention
from xalib.conventions.types import BusinessDayAdjustment
from xalib.market.indexes import IborIndex
from xalib.schedule.core import Schedule

from .base import FloatingRateCoupon, Leg, as_list, value_at
from .dispatch import register_pricer, set_coupon_pricer
from .pricers import IborCouponPricer


class IborCoupon(FloatingRateCoupon):
    """Coupon fixing on a term index at the start of its accrual period."""

    kind = "ibor"

    def __init__(
        self,
        payment_date: date,
        nominal: float,
        accrual_start_date: date,
        accrual_end_date: date,
        fixing_days: int,
        index: IborIndex,
        gearing: float = 1.0,
        spread: float = 0.0,
        day_count: Optional[DayCountConvention] = None,
    ):
        super().__init__(
            payment_date,
            nominal,
            accrual_start_date,
            accrual_end_date,
            fixing_days,
            index,
            gearing,
            spread,
            day_count,
        )


register_pricer(IborCoupon.kind, IborCouponPricer)


class IborLeg:
    """Builds one :class:`IborCoupon` per schedule period."""

    def __init__(self, schedule: Schedule, index: IborIndex):
        self.schedule = schedule
        self.index = index
        self._notionals: List[float] = []
        self._payment_day_count: Optional[DayCountConvention] = None
        self._payment_adjustment = BusinessDayAdjustment.FOLLOWING
        self._payment_calendar: Optional[Calendar] = None
        self._fixing_days: Optional[int] = None
        self._gearings: List[float] = []
        self._spreads: List[float] = []

    def with_notionals(self, notionals) -> "IborLeg":
        self._notionals = as_list(notionals)
        return self

    def with_payment_day_counter(self, day_count: DayCountConvention) -> "IborLeg":
        self._payment_day_count = day_count
        return self

    def with_payment_adjustment(self, convention: BusinessDayAdjustment) -> "IborLeg":
        self._payment_adjustment = convention
        return self

    def with_payment_calendar(self, calendar: Calendar) -> "IborLeg":
        self._payment_calendar = calendar
        return self

    def with_fixing_days(self, fixing_days: int) -> "IborLeg":
        self._fixing_days = fixing_days
        return self

    def with_gearings(self, gearings) -> "IborLeg":
        self._gearings = as_list(gearings)
        return self

    def with_spreads(self, spreads) -> "IborLeg":
        self._spreads = as_list(spreads)
        return self

    def build(self) -> Leg:
        if not self._notionals:
            raise ValueError("No notional given for Ibor leg.")
        calendar = self._payment_calendar or self.schedule.calendar
        fixing_days = self.index.fixing_days if self._fixing_days is None else self._fixing_days
        leg: Leg = []
        for i, (start, end) in enumerate(zip(self.schedule[:-1], self.schedule[1:])):
            leg.append(
                IborCoupon(
                    calendar.adjust(end, self._payment_adjustment),
                    value_at(self._notionals, i),
                    start,
                    end,
                    fixing_days,
                    self.index,
                    value_at(self._gearings, i, 1.0),
                    value_at(self._spreads, i, 0.0),
                    self._payment_day_count or self.index.day_count,
                )
            )
        set_coupon_pricer(leg, IborCouponPricer())
        return leg
