"""
Arithmetic average overnight coupons.

The coupon accrues the simple average of daily overnight fixings over its
accrual period. With a rate cut-off of ``n`` days the last fixing observed
before the cut-off is repeated for the final ``n`` periods.
"""

import logging
import math
from datetime import date
from enum import Enum
from typing import List, Optional

from xalib.config import settings
from xalib.conventions.calendars import Calendar
from xalib.conventions.daycount import DayCountConvention
from xalib.conventions.types import BusinessDayAdjustment
from xalib.market.fixings import index_manager
from xalib.market.indexes import MissingTermStructureError, OvernightIndex
from xalib.schedule.core import Schedule
from xalib.schedule.generator import business_day_schedule

from .base import DegenerateScheduleError, FloatingRateCoupon, Leg, as_list, value_at
from .dispatch import PricerCompatibilityError, register_pricer
from .pricers import RateOnlyCouponPricer

logger = logging.getLogger(__name__)


class AverageONIndexedCoupon(FloatingRateCoupon):
    """Coupon paying the average of daily overnight fixings."""

    kind = "average_on"

    def __init__(
        self,
        payment_date: date,
        nominal: float,
        accrual_start_date: date,
        accrual_end_date: date,
        overnight_index: OvernightIndex,
        gearing: float = 1.0,
        spread: float = 0.0,
        rate_cutoff: int = 0,
        day_count: Optional[DayCountConvention] = None,
    ):
        super().__init__(
            payment_date,
            nominal,
            accrual_start_date,
            accrual_end_date,
            overnight_index.fixing_days,
            overnight_index,
            gearing,
            spread,
            day_count,
        )
        if rate_cutoff < 0:
            raise ValueError(f"rate cutoff ({rate_cutoff}) must not be negative")
        self.rate_cutoff = rate_cutoff

        schedule = business_day_schedule(
            accrual_start_date, accrual_end_date, overnight_index.fixing_calendar
        )
        self.value_dates: List[date] = list(schedule.dates)
        if len(self.value_dates) - rate_cutoff < 2:
            raise DegenerateScheduleError("degenerate schedule")

        n_periods = len(self.value_dates) - 1
        if overnight_index.fixing_days == 0:
            self.fixing_dates: List[date] = self.value_dates[:-1]
        else:
            self.fixing_dates = [
                overnight_index.fixing_date(d) for d in self.value_dates[:-1]
            ]
        self.dt: List[float] = [
            self.day_count.year_fraction(self.value_dates[i], self.value_dates[i + 1])
            for i in range(n_periods)
        ]

    @property
    def fixing_date(self) -> date:
        """Last fixing date observed before the cut-off."""
        return self.fixing_dates[len(self.fixing_dates) - 1 - self.rate_cutoff]

    def index_fixings(self) -> List[float]:
        """Fixings per daily period, the cut-off periods repeating the last observed one."""
        n_periods = len(self.dt)
        observed = n_periods - self.rate_cutoff
        fixings = [self.index.fixing(self.fixing_dates[i]) for i in range(observed)]
        fixings.extend([fixings[-1]] * self.rate_cutoff)
        return fixings


class AverageONApproximation(Enum):
    TAKADA = "TAKADA"
    NONE = "NONE"


class AverageONIndexedCouponPricer(RateOnlyCouponPricer):
    """
    Rate of an average overnight coupon.

    ``TAKADA`` uses the known fixings up to today and approximates the
    remaining daily fixings by the log ratio of discount factors on the
    index forwarding curve. ``NONE`` sums every daily fixing as returned
    by the index, forecasting those that are not yet known.
    """

    def __init__(self, approximation: AverageONApproximation = AverageONApproximation.TAKADA):
        super().__init__()
        self.approximation = approximation

    def initialize(self, coupon) -> None:
        if not isinstance(coupon, AverageONIndexedCoupon):
            raise PricerCompatibilityError("AverageONIndexedCoupon required")
        if not isinstance(coupon.index, OvernightIndex):
            raise PricerCompatibilityError("OvernightIndex required")
        self.coupon = coupon
        self._index = coupon.index
        self._gearing = coupon.gearing
        self._spread = coupon.spread
        self._accrual_period = coupon.accrual_period

    def swaplet_rate(self) -> float:
        if self.approximation is AverageONApproximation.TAKADA:
            accumulated = self._takada_accumulated()
        elif self.approximation is AverageONApproximation.NONE:
            fixings = self.coupon.index_fixings()
            accumulated = sum(f * dt for f, dt in zip(fixings, self.coupon.dt))
        else:
            raise ValueError(f"Invalid approximation {self.approximation}")
        return self._gearing * accumulated / self._accrual_period + self._spread

    def _takada_accumulated(self) -> float:
        fixing_dates = self.coupon.fixing_dates
        dt = self.coupon.dt
        n_periods = len(dt)
        today = settings.evaluation_date

        accumulated = 0.0
        i = 0
        while i < n_periods and fixing_dates[i] < today:
            accumulated += self._index.fixing(fixing_dates[i]) * dt[i]
            i += 1

        # today's fixing counts only once published
        if i < n_periods and fixing_dates[i] == today:
            todays_fixing = index_manager.get_fixing(self._index.name, today)
            if todays_fixing is not None and not math.isnan(todays_fixing):
                accumulated += todays_fixing * dt[i]
                i += 1

        if i < n_periods:
            curve = self._index.forwarding_curve
            if curve is None:
                raise MissingTermStructureError(
                    f"Null term structure set to this instance of {self._index.name}"
                )
            start_discount = curve.df(self.coupon.value_dates[i])
            end_discount = curve.df(self.coupon.value_dates[n_periods])
            accumulated += math.log(start_discount / end_discount)
        return accumulated


register_pricer(AverageONIndexedCoupon.kind, AverageONIndexedCouponPricer)


class AverageONLeg:
    """
    Builds one :class:`AverageONIndexedCoupon` per schedule period.

    Without an explicit pricer the coupons get a Takada pricer.
    """

    def __init__(self, schedule: Schedule, overnight_index: OvernightIndex):
        self.schedule = schedule
        self.overnight_index = overnight_index
        self._notionals: List[float] = []
        self._payment_day_count: Optional[DayCountConvention] = None
        self._payment_adjustment = BusinessDayAdjustment.FOLLOWING
        self._payment_calendar: Optional[Calendar] = None
        self._gearings: List[float] = []
        self._spreads: List[float] = []
        self._rate_cutoff = 0
        self._pricer: Optional[AverageONIndexedCouponPricer] = None

    def with_notional(self, notional: float) -> "AverageONLeg":
        self._notionals = [notional]
        return self

    def with_notionals(self, notionals) -> "AverageONLeg":
        self._notionals = as_list(notionals)
        return self

    def with_payment_day_counter(self, day_count: DayCountConvention) -> "AverageONLeg":
        self._payment_day_count = day_count
        return self

    def with_payment_adjustment(self, convention: BusinessDayAdjustment) -> "AverageONLeg":
        self._payment_adjustment = convention
        return self

    def with_gearing(self, gearing: float) -> "AverageONLeg":
        self._gearings = [gearing]
        return self

    def with_gearings(self, gearings) -> "AverageONLeg":
        self._gearings = as_list(gearings)
        return self

    def with_spread(self, spread: float) -> "AverageONLeg":
        self._spreads = [spread]
        return self

    def with_spreads(self, spreads) -> "AverageONLeg":
        self._spreads = as_list(spreads)
        return self

    def with_rate_cutoff(self, rate_cutoff: int) -> "AverageONLeg":
        self._rate_cutoff = rate_cutoff
        return self

    def with_payment_calendar(self, calendar: Calendar) -> "AverageONLeg":
        self._payment_calendar = calendar
        return self

    def with_pricer(self, pricer: AverageONIndexedCouponPricer) -> "AverageONLeg":
        self._pricer = pricer
        return self

    def build(self) -> Leg:
        if not self._notionals:
            raise ValueError("No notional given for average overnight leg.")
        calendar = self._payment_calendar or self.schedule.calendar
        pricer = self._pricer or AverageONIndexedCouponPricer()
        leg: Leg = []
        for i, (start, end) in enumerate(zip(self.schedule[:-1], self.schedule[1:])):
            coupon = AverageONIndexedCoupon(
                calendar.adjust(end, self._payment_adjustment),
                value_at(self._notionals, i),
                start,
                end,
                self.overnight_index,
                value_at(self._gearings, i, 1.0),
                value_at(self._spreads, i, 0.0),
                self._rate_cutoff,
                self._payment_day_count,
            )
            coupon.set_pricer(pricer)
            leg.append(coupon)
        logger.debug("Built average overnight leg with %d coupons", len(leg))
        return leg
