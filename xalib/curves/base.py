"""
Base yield curve class.

Curves are observables: anything priced off a curve registers with it and
is invalidated when the curve changes.
"""

import math
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Union

from xalib.conventions.daycount import DayCountConvention, get_day_count_convention
from xalib.observable import Observable

TimeLike = Union[datetime, date, float, int]


class YieldCurve(Observable, ABC):
    """Discount curve anchored at a reference date."""

    def __init__(
        self,
        reference_date: date,
        name: str = "",
        time_day_count: Union[str, DayCountConvention] = "ACT/365F",
    ):
        """
        Args:
            reference_date: Curve reference/valuation date
            name: Optional curve name for identification
            time_day_count: Day-count convention to convert dates to curve times
        """
        super().__init__()
        self.reference_date = reference_date
        self.name = name
        if isinstance(time_day_count, DayCountConvention):
            self.day_count = time_day_count
        else:
            self.day_count = get_day_count_convention(time_day_count)

    def time_from_reference(self, dt: TimeLike) -> float:
        """Curve time of a date (negative before the reference date); floats pass through."""
        if isinstance(dt, (int, float)):
            return float(dt)
        if isinstance(dt, datetime):
            dt = dt.date()
        return self.day_count.year_fraction(self.reference_date, dt)

    def df(self, t: TimeLike) -> float:
        """Discount factor at a date or curve time."""
        time_frac = self.time_from_reference(t)
        if time_frac < -1e-12:
            raise ValueError(
                f"{self}: negative time ({time_frac}) given, "
                f"reference date is {self.reference_date}"
            )
        if time_frac <= 0.0:
            return 1.0
        return self._discount_impl(time_frac)

    @abstractmethod
    def _discount_impl(self, t: float) -> float:
        """Discount factor for a positive curve time."""

    def zero(self, t: TimeLike) -> float:
        """Continuously compounded zero rate."""
        time_frac = self.time_from_reference(t)
        if time_frac <= 0:
            time_frac = 1e-4
        df_val = self.df(time_frac)
        if df_val <= 0:
            raise ValueError(f"Non-positive discount factor: {df_val}")
        return -math.log(df_val) / time_frac

    def forward(
        self,
        start: Union[date, datetime],
        end: Union[date, datetime],
        day_count: Union[str, DayCountConvention],
    ) -> float:
        """Simply compounded forward rate between two dates."""
        if isinstance(day_count, str):
            day_count = get_day_count_convention(day_count)
        alpha = day_count.year_fraction(start, end)
        if alpha <= 0:
            raise ValueError("Forward period must be positive")
        return (self.df(start) / self.df(end) - 1.0) / alpha

    def __str__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.name})"
            if self.name
            else self.__class__.__name__
        )
