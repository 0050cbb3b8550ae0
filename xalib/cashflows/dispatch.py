"""
Pricer assignment over legs.

Each coupon class that accepts a pricer declares a ``kind`` tag; coupon
modules register which pricer classes can price that kind. Cashflows
without a tag (fixed coupons, notional exchanges, FX-linked flows) are
left alone.
"""

import logging
from typing import Dict, List, Sequence, Tuple, Type

from .base import CashFlow
from .pricers import FloatingRateCouponPricer

logger = logging.getLogger(__name__)


class PricerCompatibilityError(ValueError):
    """Pricer cannot price the coupon it is being attached to."""


_COMPATIBLE_PRICERS: Dict[str, Tuple[Type[FloatingRateCouponPricer], ...]] = {}

_KIND_LABELS = {
    "average_on": "Average ON Indexed coupon",
    "sub_periods": "sub-periods coupon",
    "ibor": "Ibor coupon",
}


def register_pricer(kind: str, pricer_class: Type[FloatingRateCouponPricer]) -> None:
    """Declare ``pricer_class`` able to price coupons tagged ``kind``."""
    _COMPATIBLE_PRICERS[kind] = _COMPATIBLE_PRICERS.get(kind, ()) + (pricer_class,)


def compatible_pricers(kind: str) -> Tuple[Type[FloatingRateCouponPricer], ...]:
    return _COMPATIBLE_PRICERS.get(kind, ())


def _assign(cashflow: CashFlow, pricer: FloatingRateCouponPricer) -> None:
    kind = cashflow.kind
    if kind is None:
        return
    if not isinstance(pricer, compatible_pricers(kind)):
        label = _KIND_LABELS.get(kind, f"{kind} coupon")
        raise PricerCompatibilityError(f"Pricer not compatible with {label}")
    cashflow.set_pricer(pricer)


def set_coupon_pricer(leg: Sequence[CashFlow], pricer: FloatingRateCouponPricer) -> None:
    """Attach ``pricer`` to every tagged coupon of ``leg``."""
    for cashflow in leg:
        _assign(cashflow, pricer)


def set_coupon_pricers(
    leg: Sequence[CashFlow], pricers: List[FloatingRateCouponPricer]
) -> None:
    """
    Attach pricers by position; the last pricer is reused for the
    remaining cashflows.

    Raises:
        ValueError: If the leg is empty, no pricer is given or there are
            more pricers than cashflows
        PricerCompatibilityError: If a pricer does not fit its coupon
    """
    n_cashflows = len(leg)
    if n_cashflows == 0:
        raise ValueError("No cashflows")
    n_pricers = len(pricers)
    if n_pricers == 0 or n_cashflows < n_pricers:
        raise ValueError(
            f"Mismatch between leg size ({n_cashflows}) and number of pricers ({n_pricers})"
        )
    for i, cashflow in enumerate(leg):
        _assign(cashflow, pricers[min(i, n_pricers - 1)])
    logger.debug("Assigned %d pricers over %d cashflows", n_pricers, n_cashflows)
