"""
Sub-period coupons: one coupon period made of several index periods whose
fixings are compounded or averaged, e.g. a 6M coupon on a 3M index.
"""

import logging
from datetime import date
from enum import Enum
from typing import List, Optional

from xalib.conventions.calendars import Calendar
from xalib.conventions.daycount import DayCountConvention
from xalib.conventions.types import BusinessDayAdjustment
from xalib.market.indexes import InterestRateIndex
from xalib.schedule.core import Schedule
from xalib.schedule.generator import make_schedule

from .base import DegenerateScheduleError, FloatingRateCoupon, Leg, as_list, value_at
from .dispatch import PricerCompatibilityError, register_pricer, set_coupon_pricer
from .pricers import RateOnlyCouponPricer

logger = logging.getLogger(__name__)


class SubPeriodsType(Enum):
    AVERAGING = "AVERAGING"
    COMPOUNDING = "COMPOUNDING"


class SubPeriodsCoupon(FloatingRateCoupon):
    """
    Coupon over sub-periods of the index tenor, generated backwards from
    the accrual end on the index fixing calendar.

    ``include_spread`` adds the spread to each sub-period fixing rather
    than to the resulting rate.
    """

    kind = "sub_periods"

    def __init__(
        self,
        payment_date: date,
        nominal: float,
        accrual_start_date: date,
        accrual_end_date: date,
        index: InterestRateIndex,
        type: SubPeriodsType,
        convention: BusinessDayAdjustment,
        spread: float = 0.0,
        day_count: Optional[DayCountConvention] = None,
        include_spread: bool = False,
        gearing: float = 1.0,
    ):
        super().__init__(
            payment_date,
            nominal,
            accrual_start_date,
            accrual_end_date,
            index.fixing_days,
            index,
            gearing,
            spread,
            day_count,
        )
        self.type = type
        self.include_spread = include_spread

        schedule = make_schedule(
            accrual_start_date,
            accrual_end_date,
            index.tenor,
            index.fixing_calendar,
            convention,
            convention,
            backwards=True,
        )
        self.value_dates: List[date] = list(schedule.dates)
        if len(self.value_dates) < 2:
            raise DegenerateScheduleError("Degenerate schedule.")

        if index.fixing_days == 0:
            self.fixing_dates: List[date] = self.value_dates[:-1]
        else:
            self.fixing_dates = [index.fixing_date(d) for d in self.value_dates[:-1]]
        self.accrual_fractions: List[float] = [
            self.day_count.year_fraction(start, end)
            for start, end in zip(self.value_dates[:-1], self.value_dates[1:])
        ]

    @property
    def fixing_date(self) -> date:
        return self.fixing_dates[-1]

    def index_fixings(self) -> List[float]:
        return [self.index.fixing(d) for d in self.fixing_dates]


class SubPeriodsCouponPricer(RateOnlyCouponPricer):
    """Compounds or averages the sub-period fixings of a :class:`SubPeriodsCoupon`."""

    def initialize(self, coupon) -> None:
        if not isinstance(coupon, SubPeriodsCoupon):
            raise PricerCompatibilityError("SubPeriodsCoupon required")
        if not isinstance(coupon.index, InterestRateIndex):
            raise PricerCompatibilityError("InterestRateIndex required")
        self.coupon = coupon
        self._gearing = coupon.gearing
        self._spread = coupon.spread
        self._accrual_period = coupon.accrual_period
        self._type = coupon.type
        self._include_spread = coupon.include_spread

    def swaplet_rate(self) -> float:
        fractions = self.coupon.accrual_fractions
        inc_spread = self._spread if self._include_spread else 0.0
        exc_spread = 0.0 if self._include_spread else self._spread
        fixings = self.coupon.index_fixings()

        if self._type is SubPeriodsType.AVERAGING:
            accumulated = 0.0
            for fixing, tau in zip(fixings, fractions):
                accumulated += (fixing + inc_spread) * tau
            return self._gearing * accumulated / self._accrual_period + exc_spread
        if self._type is SubPeriodsType.COMPOUNDING:
            accumulated = 1.0
            for fixing, tau in zip(fixings, fractions):
                accumulated *= 1.0 + (fixing + inc_spread) * tau
            return self._gearing * (accumulated - 1.0) / self._accrual_period + exc_spread
        raise ValueError("Invalid sub-period coupon type")


register_pricer(SubPeriodsCoupon.kind, SubPeriodsCouponPricer)


class SubPeriodsLeg:
    """
    Builds one :class:`SubPeriodsCoupon` per schedule period.

    A period too short to hold a sub-period is merged into the following
    coupon, whose accrual then starts at the skipped period's start.
    """

    def __init__(self, schedule: Schedule, index: InterestRateIndex):
        self.schedule = schedule
        self.index = index
        self._notionals: List[float] = [1.0]
        self._payment_day_count: Optional[DayCountConvention] = None
        self._payment_adjustment = BusinessDayAdjustment.FOLLOWING
        self._payment_calendar: Optional[Calendar] = None
        self._gearings: List[float] = []
        self._spreads: List[float] = []
        self._type = SubPeriodsType.COMPOUNDING
        self._include_spread = False

    def with_notional(self, notional: float) -> "SubPeriodsLeg":
        self._notionals = [notional]
        return self

    def with_notionals(self, notionals) -> "SubPeriodsLeg":
        self._notionals = as_list(notionals)
        return self

    def with_payment_day_counter(self, day_count: DayCountConvention) -> "SubPeriodsLeg":
        self._payment_day_count = day_count
        return self

    def with_payment_adjustment(self, convention: BusinessDayAdjustment) -> "SubPeriodsLeg":
        self._payment_adjustment = convention
        return self

    def with_gearing(self, gearing: float) -> "SubPeriodsLeg":
        self._gearings = [gearing]
        return self

    def with_gearings(self, gearings) -> "SubPeriodsLeg":
        self._gearings = as_list(gearings)
        return self

    def with_spread(self, spread: float) -> "SubPeriodsLeg":
        self._spreads = [spread]
        return self

    def with_spreads(self, spreads) -> "SubPeriodsLeg":
        self._spreads = as_list(spreads)
        return self

    def with_payment_calendar(self, calendar: Calendar) -> "SubPeriodsLeg":
        self._payment_calendar = calendar
        return self

    def with_type(self, type: SubPeriodsType) -> "SubPeriodsLeg":
        self._type = type
        return self

    def with_include_spread(self, include_spread: bool) -> "SubPeriodsLeg":
        self._include_spread = include_spread
        return self

    def build(self) -> Leg:
        leg: Leg = []
        calendar = self._payment_calendar or self.schedule.calendar
        if len(self.schedule) < 2:
            return leg

        start = self.schedule[0]
        for i in range(len(self.schedule) - 1):
            end = self.schedule[i + 1]
            try:
                coupon = SubPeriodsCoupon(
                    calendar.adjust(end, self._payment_adjustment),
                    value_at(self._notionals, i),
                    start,
                    end,
                    self.index,
                    self._type,
                    self._payment_adjustment,
                    value_at(self._spreads, i, 0.0),
                    self._payment_day_count,
                    self._include_spread,
                    value_at(self._gearings, i, 1.0),
                )
            except DegenerateScheduleError:
                logger.warning(
                    "Sub-periods coupon %s -> %s is degenerate, merging it into the next period",
                    start,
                    end,
                )
                continue
            leg.append(coupon)
            start = end

        set_coupon_pricer(leg, SubPeriodsCouponPricer())
        return leg
