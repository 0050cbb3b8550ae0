"""
Leg analytics: NPV and basis point sensitivity by discounting.
"""

from datetime import date
from typing import Optional, Sequence, Tuple

from xalib.config import settings
from xalib.curves.base import YieldCurve

from .base import CashFlow, Coupon

BASIS_POINT = 1.0e-4


def _dates(settlement_date: Optional[date], npv_date: Optional[date]) -> Tuple[date, date]:
    if settlement_date is None:
        settlement_date = settings.evaluation_date
    if npv_date is None:
        npv_date = settlement_date
    return settlement_date, npv_date


def npv(
    leg: Sequence[CashFlow],
    discount_curve: YieldCurve,
    include_settlement_date_flows: Optional[bool] = None,
    settlement_date: Optional[date] = None,
    npv_date: Optional[date] = None,
) -> float:
    """
    Discounted value of the cashflows not yet paid at ``settlement_date``,
    expressed as of ``npv_date``.
    """
    if not leg:
        return 0.0
    settlement_date, npv_date = _dates(settlement_date, npv_date)
    total = 0.0
    for cashflow in leg:
        if cashflow.has_occurred(settlement_date, include_settlement_date_flows):
            continue
        total += cashflow.amount() * discount_curve.df(cashflow.date)
    return total / discount_curve.df(npv_date)


def bps(
    leg: Sequence[CashFlow],
    discount_curve: YieldCurve,
    include_settlement_date_flows: Optional[bool] = None,
    settlement_date: Optional[date] = None,
    npv_date: Optional[date] = None,
) -> float:
    """Value change of the leg for a one basis point move of its coupon rates."""
    if not leg:
        return 0.0
    settlement_date, npv_date = _dates(settlement_date, npv_date)
    total = 0.0
    for cashflow in leg:
        if not isinstance(cashflow, Coupon):
            continue
        if cashflow.has_occurred(settlement_date, include_settlement_date_flows):
            continue
        total += cashflow.nominal * cashflow.accrual_period * discount_curve.df(cashflow.date)
    return BASIS_POINT * total / discount_curve.df(npv_date)


def npvbps(
    leg: Sequence[CashFlow],
    discount_curve: YieldCurve,
    include_settlement_date_flows: Optional[bool] = None,
    settlement_date: Optional[date] = None,
    npv_date: Optional[date] = None,
) -> Tuple[float, float]:
    """``(npv, bps)`` in one pass over the leg."""
    if not leg:
        return 0.0, 0.0
    settlement_date, npv_date = _dates(settlement_date, npv_date)
    npv_total = 0.0
    bps_total = 0.0
    for cashflow in leg:
        if cashflow.has_occurred(settlement_date, include_settlement_date_flows):
            continue
        df = discount_curve.df(cashflow.date)
        npv_total += cashflow.amount() * df
        if isinstance(cashflow, Coupon):
            bps_total += cashflow.nominal * cashflow.accrual_period * df
    npv_df = discount_curve.df(npv_date)
    return npv_total / npv_df, BASIS_POINT * bps_total / npv_df


def start_date(leg: Sequence[CashFlow]) -> date:
    if not leg:
        raise ValueError("empty leg")
    return min(
        cf.accrual_start_date if isinstance(cf, Coupon) else cf.date for cf in leg
    )


def maturity_date(leg: Sequence[CashFlow]) -> date:
    if not leg:
        raise ValueError("empty leg")
    return max(cf.accrual_end_date if isinstance(cf, Coupon) else cf.date for cf in leg)
