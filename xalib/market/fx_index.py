"""
FX fixing index.
"""

from datetime import date
from typing import Optional

from xalib.config import settings
from xalib.conventions.calendars import Calendar
from xalib.conventions.types import Tenor, TimeUnit
from xalib.curves.base import YieldCurve

from .indexes import Index, MissingTermStructureError
from .quotes import SimpleQuote


class FxIndex(Index):
    """
    Exchange rate fixing, quoted as units of target currency per unit of
    source currency.

    Future fixings are forecast from the spot quote by covered interest
    parity between the source and target curves. The spot is taken to
    settle on today's value date.
    """

    def __init__(
        self,
        family_name: str,
        fixing_days: int,
        source_currency: str,
        target_currency: str,
        fixing_calendar: Calendar,
        fx_spot: Optional[SimpleQuote] = None,
        source_curve: Optional[YieldCurve] = None,
        target_curve: Optional[YieldCurve] = None,
    ):
        super().__init__(fixing_calendar)
        self.family_name = family_name
        self.fixing_days = fixing_days
        self.source_currency = source_currency
        self.target_currency = target_currency
        self.fx_spot = fx_spot
        self.source_curve = source_curve
        self.target_curve = target_curve
        self._name = f"{family_name} {source_currency}/{target_currency}"
        self.register_with(settings)
        self._register_with_history()
        self.register_with(fx_spot)
        self.register_with(source_curve)
        self.register_with(target_curve)

    @property
    def name(self) -> str:
        return self._name

    def fixing_date(self, value_date: date) -> date:
        return self.fixing_calendar.advance(value_date, Tenor(-self.fixing_days, TimeUnit.DAYS))

    def value_date(self, fixing_date: date) -> date:
        if not self.is_valid_fixing_date(fixing_date):
            raise ValueError(f"{fixing_date} is not a valid fixing date")
        return self.fixing_calendar.advance(fixing_date, Tenor(self.fixing_days, TimeUnit.DAYS))

    def forecast_fixing(self, fixing_date: date) -> float:
        if self.source_curve is None or self.target_curve is None:
            raise MissingTermStructureError(
                f"null term structure set to this instance of {self.name}"
            )
        if self.fx_spot is None:
            raise ValueError(f"no FX spot quote set for {self.name}")
        rate = self.fx_spot.value()

        ref_value_date = self.value_date(
            self.fixing_calendar.adjust(settings.evaluation_date)
        )
        fixing_value_date = self.value_date(fixing_date)
        if fixing_value_date < ref_value_date:
            raise ValueError(
                f"value date for requested fixing as of {fixing_date} "
                f"({fixing_value_date}) must be greater or equal to today's "
                f"fixing value date ({ref_value_date})"
            )
        return (
            rate
            * self.source_curve.df(fixing_value_date)
            * self.target_curve.df(ref_value_date)
            / (self.source_curve.df(ref_value_date) * self.target_curve.df(fixing_value_date))
        )

    def __repr__(self) -> str:
        return f"FxIndex({self.name!r})"
