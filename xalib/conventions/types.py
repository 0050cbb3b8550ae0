"""
Basic types and enums used across conventions, schedules and pricing.
"""

import re
from dataclasses import dataclass
from enum import Enum

import QuantLib as ql


class BusinessDayAdjustment(Enum):
    """Business day adjustment rules."""

    NO_ADJUSTMENT = "NO_ADJUSTMENT"
    FOLLOWING = "FOLLOWING"
    MODIFIED_FOLLOWING = "MODIFIED_FOLLOWING"
    PRECEDING = "PRECEDING"
    MODIFIED_PRECEDING = "MODIFIED_PRECEDING"

    @property
    def ql_convention(self) -> int:
        return _QL_CONVENTIONS[self]


_QL_CONVENTIONS = {
    BusinessDayAdjustment.NO_ADJUSTMENT: ql.Unadjusted,
    BusinessDayAdjustment.FOLLOWING: ql.Following,
    BusinessDayAdjustment.MODIFIED_FOLLOWING: ql.ModifiedFollowing,
    BusinessDayAdjustment.PRECEDING: ql.Preceding,
    BusinessDayAdjustment.MODIFIED_PRECEDING: ql.ModifiedPreceding,
}


class TimeUnit(Enum):
    """Units of a tenor."""

    DAYS = "D"
    WEEKS = "W"
    MONTHS = "M"
    YEARS = "Y"

    @property
    def ql_unit(self) -> int:
        return _QL_UNITS[self]


_QL_UNITS = {
    TimeUnit.DAYS: ql.Days,
    TimeUnit.WEEKS: ql.Weeks,
    TimeUnit.MONTHS: ql.Months,
    TimeUnit.YEARS: ql.Years,
}

_TENOR_PATTERN = re.compile(r"^\s*(\d+)\s*([DWMY])\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class Tenor:
    """A period such as 1D, 3M or 10Y."""

    length: int
    unit: TimeUnit

    @classmethod
    def parse(cls, text: str) -> "Tenor":
        match = _TENOR_PATTERN.match(text)
        if match is None:
            raise ValueError(f"Cannot parse tenor: {text!r}")
        return cls(int(match.group(1)), TimeUnit(match.group(2).upper()))

    def to_ql(self) -> ql.Period:
        return ql.Period(self.length, self.unit.ql_unit)

    def __str__(self) -> str:
        return f"{self.length}{self.unit.value}"


class Frequency(Enum):
    """Payment frequencies, as number of periods per year."""

    ANNUAL = 1
    SEMIANNUAL = 2
    QUARTERLY = 4
    MONTHLY = 12

    def tenor(self) -> Tenor:
        return Tenor(12 // self.value, TimeUnit.MONTHS)


class OptionType(Enum):
    CALL = 1
    PUT = -1

    @property
    def ql_type(self) -> int:
        return ql.Option.Call if self is OptionType.CALL else ql.Option.Put


class SwapType(Enum):
    """Direction of a vanilla swap from the fixed-leg point of view."""

    PAYER = "PAYER"
    RECEIVER = "RECEIVER"


class SettlementType(Enum):
    PHYSICAL = "PHYSICAL"
    CASH = "CASH"


class ExerciseType(Enum):
    EUROPEAN = "EUROPEAN"
    BERMUDAN = "BERMUDAN"
    AMERICAN = "AMERICAN"


class PositionType(Enum):
    LONG = 1
    SHORT = -1


class AssetType(Enum):
    """Component types of the cross asset model."""

    IR = "IR"
    FX = "FX"
    EQ = "EQ"
