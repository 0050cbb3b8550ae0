"""
Vanilla fixed-for-floating swap.
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from xalib.cashflows.base import FloatingRateCoupon, Leg
from xalib.cashflows.fixed import FixedRateLeg
from xalib.cashflows.ibor import IborLeg
from xalib.config import settings
from xalib.conventions.daycount import DayCountConvention
from xalib.conventions.types import BusinessDayAdjustment, SwapType
from xalib.curves.base import YieldCurve
from xalib.market.indexes import (
    IborIndex,
    MissingTermStructureError,
    OvernightIndexedSwapIndex,
    SwapIndex,
)
from xalib.schedule.core import Schedule
from xalib.schedule.generator import make_schedule

from .base import Instrument, Results


@dataclass
class SwapArguments:
    """Terms of a vanilla swap as seen by an engine."""

    type: SwapType
    nominal: float
    fixed_rate: float
    fixed_reset_dates: List[date]
    fixed_pay_dates: List[date]
    fixed_coupons: List[float]
    floating_reset_dates: List[date]
    floating_fixing_dates: List[date]
    floating_pay_dates: List[date]
    floating_accrual_times: List[float]
    floating_spreads: List[float]
    floating_coupons: List[Optional[float]]
    fixed_schedule: Schedule
    floating_schedule: Schedule
    ibor_index: IborIndex
    payment_convention: BusinessDayAdjustment
    legs: List[Leg]
    payer: List[float]


@dataclass
class SwapResults(Results):
    leg_npv: Optional[List[float]] = None
    leg_bps: Optional[List[float]] = None
    fair_rate: Optional[float] = None


class VanillaSwap(Instrument):
    """
    Fixed leg against an Ibor leg on the same nominal.

    ``SwapType.PAYER`` pays the fixed leg and receives the floating leg.
    """

    def __init__(
        self,
        type: SwapType,
        nominal: float,
        fixed_schedule: Schedule,
        fixed_rate: float,
        fixed_day_count: DayCountConvention,
        floating_schedule: Schedule,
        ibor_index: IborIndex,
        spread: float = 0.0,
        floating_day_count: Optional[DayCountConvention] = None,
        payment_convention: Optional[BusinessDayAdjustment] = None,
    ):
        super().__init__()
        self.type = type
        self.nominal = nominal
        self.fixed_schedule = fixed_schedule
        self.fixed_rate = fixed_rate
        self.fixed_day_count = fixed_day_count
        self.floating_schedule = floating_schedule
        self.ibor_index = ibor_index
        self.spread = spread
        self.floating_day_count = floating_day_count or ibor_index.day_count
        self.payment_convention = payment_convention or floating_schedule.convention

        self.fixed_leg = (
            FixedRateLeg(fixed_schedule)
            .with_notionals(nominal)
            .with_coupon_rates(fixed_rate, fixed_day_count)
            .with_payment_adjustment(self.payment_convention)
            .build()
        )
        self.floating_leg = (
            IborLeg(floating_schedule, ibor_index)
            .with_notionals(nominal)
            .with_payment_day_counter(self.floating_day_count)
            .with_payment_adjustment(self.payment_convention)
            .with_spreads(spread)
            .build()
        )
        self.payer = [-1.0, 1.0] if type is SwapType.PAYER else [1.0, -1.0]
        for cashflow in self.fixed_leg + self.floating_leg:
            self.register_with(cashflow)

    @property
    def legs(self) -> List[Leg]:
        return [self.fixed_leg, self.floating_leg]

    def is_expired(self) -> bool:
        return all(cf.has_occurred() for cf in self.fixed_leg + self.floating_leg)

    def arguments(self) -> SwapArguments:
        fixed_coupons = self.fixed_leg
        floating_coupons: List[Optional[float]] = []
        for coupon in self.floating_leg:
            try:
                floating_coupons.append(coupon.amount())
            except MissingTermStructureError:
                floating_coupons.append(None)
        return SwapArguments(
            type=self.type,
            nominal=self.nominal,
            fixed_rate=self.fixed_rate,
            fixed_reset_dates=[c.accrual_start_date for c in fixed_coupons],
            fixed_pay_dates=[c.date for c in fixed_coupons],
            fixed_coupons=[c.amount() for c in fixed_coupons],
            floating_reset_dates=[c.accrual_start_date for c in self.floating_leg],
            floating_fixing_dates=[c.fixing_date for c in self.floating_leg],
            floating_pay_dates=[c.date for c in self.floating_leg],
            floating_accrual_times=[c.accrual_period for c in self.floating_leg],
            floating_spreads=[c.spread for c in self.floating_leg],
            floating_coupons=floating_coupons,
            fixed_schedule=self.fixed_schedule,
            floating_schedule=self.floating_schedule,
            ibor_index=self.ibor_index,
            payment_convention=self.payment_convention,
            legs=self.legs,
            payer=list(self.payer),
        )

    def _projected_amount(self, coupon: FloatingRateCoupon, forwarding: YieldCurve) -> float:
        """Coupon amount, forecasting future fixings as par rates over the accrual period."""
        if coupon.fixing_date <= settings.evaluation_date:
            return coupon.amount()
        tau = coupon.accrual_period
        start, end = coupon.accrual_start_date, coupon.accrual_end_date
        forward = (forwarding.df(start) / forwarding.df(end) - 1.0) / tau
        return (coupon.gearing * forward + coupon.spread) * tau * coupon.nominal

    def fair_rate_on(self, forwarding: YieldCurve, discounting: YieldCurve) -> float:
        """Fixed rate that sets the swap value to zero on the given curves."""
        ref = discounting.reference_date
        annuity = 0.0
        for coupon in self.fixed_leg:
            if not coupon.has_occurred(ref):
                annuity += coupon.nominal * coupon.accrual_period * discounting.df(coupon.date)
        if annuity == 0.0:
            raise ValueError("fixed leg annuity is zero, cannot compute fair rate")
        floating_value = 0.0
        for coupon in self.floating_leg:
            if not coupon.has_occurred(ref):
                floating_value += self._projected_amount(coupon, forwarding) * discounting.df(
                    coupon.date
                )
        return floating_value / annuity

    def fair_rate(self) -> float:
        result = self.results
        if getattr(result, "fair_rate", None) is None:
            raise ValueError("fair rate not provided")
        return result.fair_rate

    def __repr__(self) -> str:
        return (
            f"VanillaSwap({self.type.value}, {self.nominal}, "
            f"{self.fixed_schedule.start_date} -> {self.fixed_schedule.end_date})"
        )


def make_index_swap(swap_index: SwapIndex, fixing_date: date) -> VanillaSwap:
    """
    Spot-starting payer swap underlying a swap index fixing, with zero fixed rate.

    For an overnight indexed swap index the floating leg pays on the fixed
    leg schedule.
    """
    value_date = swap_index.value_date(fixing_date)
    maturity = swap_index.maturity_date(value_date)
    fixed_schedule = make_schedule(
        value_date,
        maturity,
        swap_index.fixed_leg_tenor,
        swap_index.fixing_calendar,
        swap_index.fixed_leg_convention,
        swap_index.fixed_leg_convention,
        backwards=True,
    )
    ibor = swap_index.ibor_index
    if isinstance(swap_index, OvernightIndexedSwapIndex):
        floating_schedule = fixed_schedule
    else:
        floating_schedule = make_schedule(
            value_date,
            maturity,
            ibor.tenor,
            ibor.fixing_calendar,
            ibor.convention,
            ibor.convention,
            backwards=True,
            end_of_month=ibor.end_of_month,
        )
    return VanillaSwap(
        SwapType.PAYER,
        1.0,
        fixed_schedule,
        0.0,
        swap_index.day_count,
        floating_schedule,
        ibor,
        0.0,
        ibor.day_count,
        ibor.convention,
    )
