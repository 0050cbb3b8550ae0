"""
Cashflows, coupons, coupon pricers and leg builders.

A leg is a plain list of :class:`CashFlow` objects. Floating coupons are
priced by the pricer attached through :func:`set_coupon_pricer`.
"""

from .analysis import bps, maturity_date, npv, npvbps, start_date
from .average_on import (
    AverageONApproximation,
    AverageONIndexedCoupon,
    AverageONIndexedCouponPricer,
    AverageONLeg,
)
from .base import (
    CashFlow,
    Coupon,
    DegenerateScheduleError,
    FixedRateCoupon,
    FloatingRateCoupon,
    Leg,
    SimpleCashFlow,
)
from .dispatch import (
    PricerCompatibilityError,
    register_pricer,
    set_coupon_pricer,
    set_coupon_pricers,
)
from .fixed import FixedRateLeg
from .fx_linked import FloatingRateFXLinkedNotionalCoupon, FXLinkedCashFlow
from .ibor import IborCoupon, IborLeg
from .pricers import (
    FloatingRateCouponPricer,
    IborCouponPricer,
    RateOnlyCouponPricer,
    UnsupportedOperationError,
)
from .sub_periods import (
    SubPeriodsCoupon,
    SubPeriodsCouponPricer,
    SubPeriodsLeg,
    SubPeriodsType,
)

__all__ = [
    "AverageONApproximation",
    "AverageONIndexedCoupon",
    "AverageONIndexedCouponPricer",
    "AverageONLeg",
    "CashFlow",
    "Coupon",
    "DegenerateScheduleError",
    "FixedRateCoupon",
    "FixedRateLeg",
    "FloatingRateCoupon",
    "FloatingRateCouponPricer",
    "FloatingRateFXLinkedNotionalCoupon",
    "FXLinkedCashFlow",
    "IborCoupon",
    "IborCouponPricer",
    "IborLeg",
    "Leg",
    "PricerCompatibilityError",
    "RateOnlyCouponPricer",
    "SimpleCashFlow",
    "SubPeriodsCoupon",
    "SubPeriodsCouponPricer",
    "SubPeriodsLeg",
    "SubPeriodsType",
    "UnsupportedOperationError",
    "bps",
    "maturity_date",
    "npv",
    "npvbps",
    "register_pricer",
    "set_coupon_pricer",
    "set_coupon_pricers",
    "start_date",
]
