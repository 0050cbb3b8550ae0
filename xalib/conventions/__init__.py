"""
Market conventions: day counts, calendars, tenors and enums.
"""

from .calendars import (
    CALENDARS,
    JAPAN,
    NULL_CALENDAR,
    TARGET,
    UK,
    US,
    WEEKEND_ONLY,
    Calendar,
    get_calendar,
)
from .dates import from_ql_date, to_date, to_ql_date
from .daycount import (
    ACT_360,
    ACT_365F,
    ACT_ACT,
    THIRTY_360E,
    THIRTY_360U,
    DayCountConvention,
    get_day_count_convention,
)
from .types import (
    AssetType,
    BusinessDayAdjustment,
    ExerciseType,
    Frequency,
    OptionType,
    PositionType,
    SettlementType,
    SwapType,
    Tenor,
    TimeUnit,
)

__all__ = [
    "Calendar",
    "CALENDARS",
    "TARGET",
    "UK",
    "US",
    "JAPAN",
    "WEEKEND_ONLY",
    "NULL_CALENDAR",
    "get_calendar",
    "DayCountConvention",
    "ACT_360",
    "ACT_365F",
    "ACT_ACT",
    "THIRTY_360E",
    "THIRTY_360U",
    "get_day_count_convention",
    "to_date",
    "to_ql_date",
    "from_ql_date",
    "AssetType",
    "BusinessDayAdjustment",
    "ExerciseType",
    "Frequency",
    "OptionType",
    "PositionType",
    "SettlementType",
    "SwapType",
    "Tenor",
    "TimeUnit",
]
