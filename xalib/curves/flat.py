"""
Flat forward curves, used as model curves and in tests.
"""
import math
from datetime import date
from typing import Union

from xalib.market.quotes import SimpleQuote

from .base import YieldCurve


class FlatForwardCurve(YieldCurve):
    """Curve with a constant continuously compounded zero rate.

    The rate may be a :class:`SimpleQuote`; the curve then follows it and
    notifies its own observers whenever the quote moves.
    """

    def __init__(
        self,
        reference_date: date,
        rate: Union[float, SimpleQuote],
        name: str = "",
        time_day_count: str = "ACT/365F",
    ):
        super().__init__(reference_date, name, time_day_count)
        self._quote = rate if isinstance(rate, SimpleQuote) else SimpleQuote(rate)
        self._quote.register_observer(self)

    @property
    def rate(self) -> float:
        return self._quote.value()

    def update(self) -> None:
        self.notify_observers()

    def _discount_impl(self, t: float) -> float:
        return math.exp(-self.rate * t)

    def __repr__(self) -> str:
        return f"FlatForwardCurve({self.reference_date}, {self._quote.value()!r})"


def create_flat_curve(
    reference_date: date,
    flat_rate: Union[float, SimpleQuote],
    name: str = "FLAT",
    time_day_count: str = "ACT/365F",
) -> FlatForwardCurve:
    """Flat continuously compounded curve."""
    return FlatForwardCurve(reference_date, flat_rate, name, time_day_count)
