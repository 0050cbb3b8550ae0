"""
QuantLib-backed business calendars.

Schedules, indexes and payment adjustments go through :class:`Calendar`,
which wraps a ``ql.Calendar`` and speaks Python ``date`` on both sides.
"""

from datetime import date, datetime
from typing import Dict, Union

import QuantLib as ql

from .dates import from_ql_date, to_ql_date
from .types import BusinessDayAdjustment, Tenor, TimeUnit


class Calendar:
    """Business-day calendar for adjustments and date arithmetic."""

    def __init__(self, name: str, ql_calendar: ql.Calendar):
        self.name = name
        self._ql_calendar = ql_calendar

    @property
    def ql_calendar(self) -> ql.Calendar:
        return self._ql_calendar

    def is_business_day(self, dt: Union[date, datetime]) -> bool:
        """Check if date is a business day (not weekend or holiday)."""
        return self._ql_calendar.isBusinessDay(to_ql_date(dt))

    def is_holiday(self, dt: Union[date, datetime]) -> bool:
        return self._ql_calendar.isHoliday(to_ql_date(dt))

    def adjust(
        self,
        dt: Union[date, datetime],
        adjustment: BusinessDayAdjustment = BusinessDayAdjustment.FOLLOWING,
    ) -> date:
        """Roll a date onto a business day."""
        ql_result = self._ql_calendar.adjust(to_ql_date(dt), adjustment.ql_convention)
        return from_ql_date(ql_result)

    def advance(
        self,
        dt: Union[date, datetime],
        tenor: Union[Tenor, str],
        adjustment: BusinessDayAdjustment = BusinessDayAdjustment.FOLLOWING,
        end_of_month: bool = False,
    ) -> date:
        """Move a date by a tenor; day tenors count business days."""
        if isinstance(tenor, str):
            tenor = Tenor.parse(tenor)
        ql_result = self._ql_calendar.advance(
            to_ql_date(dt), tenor.to_ql(), adjustment.ql_convention, end_of_month
        )
        return from_ql_date(ql_result)

    def add_business_days(self, start_date: Union[date, datetime], days: int) -> date:
        """Add (or subtract, if negative) business days to a date."""
        return self.advance(start_date, Tenor(days, TimeUnit.DAYS))

    def business_days_between(
        self, start: Union[date, datetime], end: Union[date, datetime]
    ) -> int:
        """Count business days in ``[start, end)``."""
        return self._ql_calendar.businessDaysBetween(
            to_ql_date(start), to_ql_date(end), True, False
        )

    def __eq__(self, other) -> bool:
        return isinstance(other, Calendar) and other.name == self.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"Calendar({self.name!r})"


TARGET = Calendar("TARGET", ql.TARGET())
WEEKEND_ONLY = Calendar("WEEKEND", ql.WeekendsOnly())
UK = Calendar("UK", ql.UnitedKingdom())
US = Calendar("US", ql.UnitedStates(ql.UnitedStates.GovernmentBond))
JAPAN = Calendar("JP", ql.Japan())
NULL_CALENDAR = Calendar("NULL", ql.NullCalendar())

CALENDARS: Dict[str, Calendar] = {
    "TARGET": TARGET,
    "EUR": TARGET,
    "WEEKEND": WEEKEND_ONLY,
    "UK": UK,
    "GBP": UK,
    "US": US,
    "USD": US,
    "JP": JAPAN,
    "JPY": JAPAN,
    "NULL": NULL_CALENDAR,
}


def get_calendar(name: str) -> Calendar:
    """Get a calendar by name ("TARGET", "UK", "US", "JP", "WEEKEND", ...)."""
    key = name.upper()
    if key not in CALENDARS:
        raise ValueError(
            f"Unknown calendar: {name}. Available: {list(CALENDARS.keys())}"
        )
    return CALENDARS[key]
