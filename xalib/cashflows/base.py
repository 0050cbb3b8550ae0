"""
Cashflow and coupon base classes.

A leg is a plain ``list`` of cashflows. Coupons that can be priced by more
than one pricer carry a ``kind`` tag; pricers are attached through
:mod:`xalib.cashflows.dispatch`, which checks the tag against the pricer
class.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional, Sequence

from xalib.config import settings
from xalib.conventions.daycount import DayCountConvention
from xalib.observable import Observable, Observer

Leg = List["CashFlow"]


class CashFlow(Observable, Observer, ABC):
    """Amount paid on a date."""

    kind: Optional[str] = None

    def __init__(self, payment_date: date):
        Observable.__init__(self)
        self.date = payment_date

    def update(self) -> None:
        self.notify_observers()

    @abstractmethod
    def amount(self) -> float:
        """Undiscounted amount paid on :attr:`date`."""

    def has_occurred(
        self,
        ref_date: Optional[date] = None,
        include_ref_date: Optional[bool] = None,
    ) -> bool:
        """
        Whether the cashflow is paid before ``ref_date``.

        ``ref_date`` defaults to the evaluation date and
        ``include_ref_date`` to ``settings.include_reference_date_events``;
        a flow on ``ref_date`` itself has occurred only if it is not
        included.
        """
        if ref_date is None:
            ref_date = settings.evaluation_date
        if include_ref_date is None:
            include_ref_date = settings.include_reference_date_events
        if include_ref_date:
            return self.date < ref_date
        return self.date <= ref_date

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.date})"


class SimpleCashFlow(CashFlow):
    """Fixed amount, e.g. a notional exchange."""

    def __init__(self, amount: float, payment_date: date):
        super().__init__(payment_date)
        self._amount = amount

    def amount(self) -> float:
        return self._amount


class Coupon(CashFlow):
    """Cashflow accruing on a nominal over an accrual period."""

    def __init__(
        self,
        payment_date: date,
        nominal: float,
        accrual_start_date: date,
        accrual_end_date: date,
        day_count: DayCountConvention,
    ):
        super().__init__(payment_date)
        self.nominal = nominal
        self.accrual_start_date = accrual_start_date
        self.accrual_end_date = accrual_end_date
        self.day_count = day_count

    @property
    def accrual_period(self) -> float:
        return self.day_count.year_fraction(self.accrual_start_date, self.accrual_end_date)

    @property
    def accrual_days(self) -> int:
        return (self.accrual_end_date - self.accrual_start_date).days

    @abstractmethod
    def rate(self) -> float:
        """Accrual rate of the coupon."""


class FixedRateCoupon(Coupon):
    """Coupon paying a simply compounded fixed rate."""

    def __init__(
        self,
        payment_date: date,
        nominal: float,
        rate: float,
        accrual_start_date: date,
        accrual_end_date: date,
        day_count: DayCountConvention,
    ):
        super().__init__(payment_date, nominal, accrual_start_date, accrual_end_date, day_count)
        self._rate = rate

    def rate(self) -> float:
        return self._rate

    def amount(self) -> float:
        return self.nominal * self._rate * self.accrual_period


class FloatingRateCoupon(Coupon):
    """
    Coupon paying ``gearing * index-based rate + spread``.

    The rate comes from the attached pricer; a coupon without a pricer
    cannot be priced.
    """

    def __init__(
        self,
        payment_date: date,
        nominal: float,
        accrual_start_date: date,
        accrual_end_date: date,
        fixing_days: int,
        index,
        gearing: float = 1.0,
        spread: float = 0.0,
        day_count: Optional[DayCountConvention] = None,
    ):
        super().__init__(
            payment_date,
            nominal,
            accrual_start_date,
            accrual_end_date,
            day_count or index.day_count,
        )
        if gearing == 0.0:
            raise ValueError("Null gearing not allowed")
        self.fixing_days = fixing_days
        self.index = index
        self.gearing = gearing
        self.spread = spread
        self.pricer = None
        self.register_with(index)
        self.register_with(settings)

    def set_pricer(self, pricer) -> None:
        self.unregister_with(self.pricer)
        self.pricer = pricer
        self.register_with(pricer)
        self.update()

    @property
    def fixing_date(self) -> date:
        return self.index.fixing_date(self.accrual_start_date)

    def index_fixing(self) -> float:
        return self.index.fixing(self.fixing_date)

    def rate(self) -> float:
        if self.pricer is None:
            raise ValueError(f"pricer not set for {self!r}")
        self.pricer.initialize(self)
        return self.pricer.swaplet_rate()

    def amount(self) -> float:
        return self.rate() * self.accrual_period * self.nominal

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.accrual_start_date} -> "
            f"{self.accrual_end_date}, {self.index.name})"
        )


class DegenerateScheduleError(ValueError):
    """Accrual period too short to hold a single sub-period."""


def value_at(values: Sequence[float], i: int, default: Optional[float] = None) -> float:
    """``values[i]``, the last value past the end, ``default`` if empty."""
    if not values:
        if default is None:
            raise ValueError("no values given")
        return default
    return values[min(i, len(values) - 1)]


def as_list(values) -> List[float]:
    """A scalar as a one-element list; sequences copied."""
    if isinstance(values, (int, float)):
        return [float(values)]
    return list(values)
