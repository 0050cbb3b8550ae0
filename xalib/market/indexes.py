"""
Interest rate indexes.

An index knows its fixing calendar and conventions, reads past fixings from
the :data:`~xalib.market.fixings.index_manager` and forecasts future
fixings off an optional forwarding curve.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, Optional, Union

import pandas as pd

from xalib.config import settings
from xalib.conventions.calendars import Calendar
from xalib.conventions.daycount import DayCountConvention
from xalib.conventions.types import BusinessDayAdjustment, Tenor, TimeUnit
from xalib.curves.base import YieldCurve
from xalib.observable import Observable, Observer

from .fixings import index_manager


class MissingFixingError(ValueError):
    """A fixing that must be known is not in the history."""


class MissingTermStructureError(ValueError):
    """A forecast was requested from an index without a curve."""


class Index(Observable, Observer, ABC):
    """Anything with a fixing history and a fixing calendar."""

    def __init__(self, fixing_calendar: Calendar):
        Observable.__init__(self)
        self.fixing_calendar = fixing_calendar

    def _register_with_history(self) -> None:
        self.register_with(index_manager.notifier(self.name))

    @property
    @abstractmethod
    def name(self) -> str:
        """Name under which the fixing history is stored."""

    def update(self) -> None:
        self.notify_observers()

    def is_valid_fixing_date(self, fixing_date: date) -> bool:
        return self.fixing_calendar.is_business_day(fixing_date)

    def fixing(self, fixing_date: date, forecast_todays_fixing: bool = False) -> float:
        """
        Fixing for a date: forecast if in the future, historic if in the past.

        Today's fixing is read from the history when present and forecast
        otherwise, unless ``settings.enforce_todays_historic_fixings`` is set.

        Raises:
            ValueError: If ``fixing_date`` is not a valid fixing date
            MissingFixingError: If a required historic fixing is missing
        """
        if not self.is_valid_fixing_date(fixing_date):
            raise ValueError(f"Fixing date {fixing_date} is not valid for {self.name}")
        today = settings.evaluation_date
        if fixing_date > today or (fixing_date == today and forecast_todays_fixing):
            return self.forecast_fixing(fixing_date)

        result = self.past_fixing(fixing_date)
        if fixing_date < today or settings.enforce_todays_historic_fixings:
            if result is None:
                raise MissingFixingError(f"Missing {self.name} fixing for {fixing_date}")
            return result
        if result is None:
            return self.forecast_fixing(fixing_date)
        return result

    def past_fixing(self, fixing_date: date) -> Optional[float]:
        return index_manager.get_fixing(self.name, fixing_date)

    @abstractmethod
    def forecast_fixing(self, fixing_date: date) -> float:
        """Projected fixing for a future date."""

    def add_fixing(self, fixing_date: date, value: float, force_overwrite: bool = False) -> None:
        index_manager.add_fixing(self.name, fixing_date, value, force_overwrite)

    def add_fixings(
        self,
        fixings: Union[pd.Series, Iterable[date]],
        values: Optional[Iterable[float]] = None,
        force_overwrite: bool = False,
    ) -> None:
        """Add a ``pd.Series`` of fixings, or parallel dates and values."""
        if isinstance(fixings, pd.Series):
            dates, values = list(fixings.index), list(fixings.values)
        else:
            dates = list(fixings)
        if values is None:
            raise ValueError("Fixing values are required")
        index_manager.add_fixings(self.name, dates, values, force_overwrite)

    def time_series(self) -> pd.Series:
        return index_manager.get_history(self.name)

    def clear_fixings(self) -> None:
        index_manager.clear_history(self.name)


class InterestRateIndex(Index):
    """Index with a tenor, settlement lag and accrual convention."""

    def __init__(
        self,
        family_name: str,
        tenor: Union[Tenor, str],
        fixing_days: int,
        currency: str,
        fixing_calendar: Calendar,
        day_count: DayCountConvention,
    ):
        super().__init__(fixing_calendar)
        self.family_name = family_name
        self.tenor = Tenor.parse(tenor) if isinstance(tenor, str) else tenor
        self.fixing_days = fixing_days
        self.currency = currency
        self.day_count = day_count
        self.register_with(settings)
        self._register_with_history()

    @property
    def name(self) -> str:
        if self.tenor == Tenor(1, TimeUnit.DAYS):
            label = "ON"
        else:
            label = str(self.tenor)
        return f"{self.family_name}{label} {self.day_count.name}"

    def fixing_date(self, value_date: date) -> date:
        return self.fixing_calendar.advance(value_date, Tenor(-self.fixing_days, TimeUnit.DAYS))

    def value_date(self, fixing_date: date) -> date:
        if not self.is_valid_fixing_date(fixing_date):
            raise ValueError(f"{fixing_date} is not a valid fixing date for {self.name}")
        return self.fixing_calendar.advance(fixing_date, Tenor(self.fixing_days, TimeUnit.DAYS))

    @abstractmethod
    def maturity_date(self, value_date: date) -> date:
        """End of the deposit period starting at ``value_date``."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"


class IborIndex(InterestRateIndex):
    """Term deposit index forecast as a simple forward rate on its curve."""

    def __init__(
        self,
        family_name: str,
        tenor: Union[Tenor, str],
        fixing_days: int,
        currency: str,
        fixing_calendar: Calendar,
        convention: BusinessDayAdjustment,
        end_of_month: bool,
        day_count: DayCountConvention,
        forwarding_curve: Optional[YieldCurve] = None,
    ):
        super().__init__(family_name, tenor, fixing_days, currency, fixing_calendar, day_count)
        self.convention = convention
        self.end_of_month = end_of_month
        self.forwarding_curve = forwarding_curve
        self.register_with(forwarding_curve)

    def maturity_date(self, value_date: date) -> date:
        return self.fixing_calendar.advance(
            value_date, self.tenor, self.convention, self.end_of_month
        )

    def forecast_fixing(self, fixing_date: date) -> float:
        value_date = self.value_date(fixing_date)
        end_date = self.maturity_date(value_date)
        accrual = self.day_count.year_fraction(value_date, end_date)
        if accrual <= 0.0:
            raise ValueError(f"Cannot compute {self.name} forecast fixing: accrual {accrual}")
        return self.forecast_fixing_period(value_date, end_date, accrual)

    def forecast_fixing_period(self, value_date: date, end_date: date, accrual: float) -> float:
        if self.forwarding_curve is None:
            raise MissingTermStructureError(
                f"null term structure set to this instance of {self.name}"
            )
        disc1 = self.forwarding_curve.df(value_date)
        disc2 = self.forwarding_curve.df(end_date)
        return (disc1 / disc2 - 1.0) / accrual

    def clone(self, forwarding_curve: Optional[YieldCurve]) -> "IborIndex":
        """Same index forecasting off another curve (shares the fixing history)."""
        return IborIndex(
            self.family_name,
            self.tenor,
            self.fixing_days,
            self.currency,
            self.fixing_calendar,
            self.convention,
            self.end_of_month,
            self.day_count,
            forwarding_curve,
        )


class OvernightIndex(IborIndex):
    """Overnight index: 1D tenor, rolled on the following business day."""

    def __init__(
        self,
        family_name: str,
        fixing_days: int,
        currency: str,
        fixing_calendar: Calendar,
        day_count: DayCountConvention,
        forwarding_curve: Optional[YieldCurve] = None,
    ):
        super().__init__(
            family_name,
            Tenor(1, TimeUnit.DAYS),
            fixing_days,
            currency,
            fixing_calendar,
            BusinessDayAdjustment.FOLLOWING,
            False,
            day_count,
            forwarding_curve,
        )

    def clone(self, forwarding_curve: Optional[YieldCurve]) -> "OvernightIndex":
        return OvernightIndex(
            self.family_name,
            self.fixing_days,
            self.currency,
            self.fixing_calendar,
            self.day_count,
            forwarding_curve,
        )


class SwapIndex(InterestRateIndex):
    """
    Par swap rate index.

    The fixing is the fair fixed rate of a spot-starting swap of the index
    tenor against ``ibor_index``. A separate ``discounting_curve`` may be
    given; otherwise forwarding and discounting share the Ibor curve.
    """

    def __init__(
        self,
        family_name: str,
        tenor: Union[Tenor, str],
        fixing_days: int,
        currency: str,
        fixing_calendar: Calendar,
        fixed_leg_tenor: Union[Tenor, str],
        fixed_leg_convention: BusinessDayAdjustment,
        fixed_leg_day_count: DayCountConvention,
        ibor_index: IborIndex,
        discounting_curve: Optional[YieldCurve] = None,
    ):
        super().__init__(
            family_name, tenor, fixing_days, currency, fixing_calendar, fixed_leg_day_count
        )
        if isinstance(fixed_leg_tenor, str):
            fixed_leg_tenor = Tenor.parse(fixed_leg_tenor)
        self.fixed_leg_tenor = fixed_leg_tenor
        self.fixed_leg_convention = fixed_leg_convention
        self.ibor_index = ibor_index
        self.discounting_curve = discounting_curve
        self.register_with(ibor_index)
        self.register_with(discounting_curve)

    @property
    def forwarding_curve(self) -> Optional[YieldCurve]:
        return self.ibor_index.forwarding_curve

    @property
    def exogenous_discount(self) -> bool:
        return self.discounting_curve is not None

    def maturity_date(self, value_date: date) -> date:
        return self.fixing_calendar.advance(value_date, self.tenor, self.fixed_leg_convention)

    def underlying_swap(self, fixing_date: date):
        """Spot-starting swap of the index tenor fixed at ``fixing_date``."""
        from xalib.instruments.swap import make_index_swap

        return make_index_swap(self, fixing_date)

    def forecast_fixing(self, fixing_date: date) -> float:
        swap = self.underlying_swap(fixing_date)
        forwarding = self.forwarding_curve
        if forwarding is None:
            raise MissingTermStructureError(
                f"null term structure set to this instance of {self.name}"
            )
        discounting = self.discounting_curve or forwarding
        return swap.fair_rate_on(forwarding, discounting)

    def with_tenor(self, tenor: Union[Tenor, str]) -> "SwapIndex":
        """Same index family and curves with another swap tenor."""
        return SwapIndex(
            self.family_name,
            tenor,
            self.fixing_days,
            self.currency,
            self.fixing_calendar,
            self.fixed_leg_tenor,
            self.fixed_leg_convention,
            self.day_count,
            self.ibor_index,
            self.discounting_curve,
        )

    def clone(
        self,
        forwarding_curve: Optional[YieldCurve],
        discounting_curve: Optional[YieldCurve] = None,
    ) -> "SwapIndex":
        return self.__class__(
            self.family_name,
            self.tenor,
            self.fixing_days,
            self.currency,
            self.fixing_calendar,
            self.fixed_leg_tenor,
            self.fixed_leg_convention,
            self.day_count,
            self.ibor_index.clone(forwarding_curve),
            discounting_curve,
        )


class OvernightIndexedSwapIndex(SwapIndex):
    """Swap index whose floating leg compounds an overnight index."""

    def __init__(
        self,
        family_name: str,
        tenor: Union[Tenor, str],
        fixing_days: int,
        currency: str,
        overnight_index: OvernightIndex,
        fixed_leg_tenor: Union[Tenor, str] = "1Y",
        fixed_leg_convention: BusinessDayAdjustment = BusinessDayAdjustment.MODIFIED_FOLLOWING,
        fixed_leg_day_count: Optional[DayCountConvention] = None,
        discounting_curve: Optional[YieldCurve] = None,
    ):
        super().__init__(
            family_name,
            tenor,
            fixing_days,
            currency,
            overnight_index.fixing_calendar,
            fixed_leg_tenor,
            fixed_leg_convention,
            fixed_leg_day_count or overnight_index.day_count,
            overnight_index,
            discounting_curve,
        )

    def clone(
        self,
        forwarding_curve: Optional[YieldCurve],
        discounting_curve: Optional[YieldCurve] = None,
    ) -> "OvernightIndexedSwapIndex":
        return OvernightIndexedSwapIndex(
            self.family_name,
            self.tenor,
            self.fixing_days,
            self.currency,
            self.ibor_index.clone(forwarding_curve),
            self.fixed_leg_tenor,
            self.fixed_leg_convention,
            self.day_count,
            discounting_curve,
        )

    def with_tenor(self, tenor: Union[Tenor, str]) -> "OvernightIndexedSwapIndex":
        return OvernightIndexedSwapIndex(
            self.family_name,
            tenor,
            self.fixing_days,
            self.currency,
            self.ibor_index,
            self.fixed_leg_tenor,
            self.fixed_leg_convention,
            self.day_count,
            self.discounting_curve,
        )
