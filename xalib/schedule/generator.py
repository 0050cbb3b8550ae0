"""
Schedule generation from start, end and tenor.
"""

from datetime import date, datetime
from typing import List, Optional, Union

from xalib.conventions.calendars import NULL_CALENDAR, Calendar
from xalib.conventions.dates import to_date
from xalib.conventions.types import BusinessDayAdjustment, Tenor

from .core import Schedule


def _shift(seed: date, tenor: Tenor, periods: int, end_of_month: bool) -> date:
    """Unadjusted ``seed + periods * tenor``."""
    return NULL_CALENDAR.advance(
        seed,
        Tenor(periods * tenor.length, tenor.unit),
        BusinessDayAdjustment.NO_ADJUSTMENT,
        end_of_month,
    )


def _unadjusted_dates(
    start: date, end: date, tenor: Tenor, backwards: bool, end_of_month: bool
) -> List[date]:
    """Regular dates rolled from one end, with a stub at the other."""
    if backwards:
        dates = [end]
        periods = 1
        while True:
            candidate = _shift(end, tenor, -periods, end_of_month)
            if candidate <= start:
                break
            dates.insert(0, candidate)
            periods += 1
        dates.insert(0, start)
    else:
        dates = [start]
        periods = 1
        while True:
            candidate = _shift(start, tenor, periods, end_of_month)
            if candidate >= end:
                break
            dates.append(candidate)
            periods += 1
        dates.append(end)
    return dates


def make_schedule(
    start_date: Union[date, datetime],
    end_date: Union[date, datetime],
    tenor: Union[Tenor, str],
    calendar: Calendar,
    convention: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
    termination_convention: Optional[BusinessDayAdjustment] = None,
    backwards: bool = True,
    end_of_month: bool = False,
) -> Schedule:
    """
    Generate an adjusted schedule.

    Dates are rolled by whole multiples of ``tenor`` from the end date
    (``backwards``) or from the start date, then adjusted on ``calendar``.
    Dates that collapse onto the same business day are kept once.

    Args:
        start_date: Unadjusted effective date
        end_date: Unadjusted termination date
        tenor: Period length, e.g. ``"6M"`` or ``"1D"``
        calendar: Calendar used for adjustment
        convention: Adjustment of intermediate dates
        termination_convention: Adjustment of the first and last date
            (defaults to ``convention``)
        backwards: Generate from the end date, giving a front stub
        end_of_month: Apply the end-of-month roll rule

    Returns:
        Schedule with strictly increasing dates
    """
    start = to_date(start_date)
    end = to_date(end_date)
    if start >= end:
        raise ValueError(f"Schedule start {start} must be before end {end}")
    if isinstance(tenor, str):
        tenor = Tenor.parse(tenor)
    if tenor.length <= 0:
        raise ValueError(f"Schedule tenor must be positive: {tenor}")
    termination_convention = termination_convention or convention

    unadjusted = _unadjusted_dates(start, end, tenor, backwards, end_of_month)
    last = len(unadjusted) - 1
    adjusted: List[date] = []
    for i, dt in enumerate(unadjusted):
        rule = termination_convention if i in (0, last) else convention
        adj = calendar.adjust(dt, rule)
        if adjusted and adj <= adjusted[-1]:
            if i == last:
                adjusted[-1] = adj
            continue
        adjusted.append(adj)

    return Schedule(
        adjusted,
        calendar=calendar,
        convention=convention,
        tenor=tenor,
        termination_convention=termination_convention,
        end_of_month=end_of_month,
    )


def business_day_schedule(
    start_date: Union[date, datetime],
    end_date: Union[date, datetime],
    calendar: Calendar,
) -> Schedule:
    """Daily schedule: the adjusted start, every business day in between, the adjusted end."""
    return make_schedule(
        start_date,
        end_date,
        Tenor.parse("1D"),
        calendar,
        BusinessDayAdjustment.FOLLOWING,
        BusinessDayAdjustment.FOLLOWING,
        backwards=True,
    )
