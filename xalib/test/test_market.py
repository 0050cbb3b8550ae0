import math
from datetime import date

import pandas as pd
import pytest

from xalib.config import Settings, settings
from xalib.conventions.calendars import TARGET, get_calendar
from xalib.conventions.daycount import ACT_360, ACT_365F, get_day_count_convention
from xalib.conventions.types import BusinessDayAdjustment, Tenor, TimeUnit
from xalib.curves.discount import InterpolatedDiscountCurve
from xalib.curves.flat import create_flat_curve
from xalib.market.fixings import index_manager
from xalib.market.fx_index import FxIndex
from xalib.market.indexes import MissingFixingError, MissingTermStructureError
from xalib.market.quotes import SimpleQuote
from xalib.observable import Observer
from xalib.schedule import Schedule, business_day_schedule, make_schedule

from .market_data import EVALUATION_DATE, make_euribor


class Recorder(Observer):
    def __init__(self):
        self.updates = 0

    def update(self):
        self.updates += 1


def test_tenor_parse():
    assert Tenor.parse("6M") == Tenor(6, TimeUnit.MONTHS)
    assert Tenor.parse(" 10y ") == Tenor(10, TimeUnit.YEARS)
    assert str(Tenor(1, TimeUnit.DAYS)) == "1D"
    with pytest.raises(ValueError, match="Cannot parse tenor"):
        Tenor.parse("6X")


def test_calendar_adjustments():
    # 2024-06-01 is a Saturday, 2024-08-31 a Saturday at month end
    assert TARGET.adjust(date(2024, 6, 1)) == date(2024, 6, 3)
    assert TARGET.adjust(date(2024, 6, 1), BusinessDayAdjustment.PRECEDING) == date(2024, 5, 31)
    assert TARGET.adjust(
        date(2024, 8, 31), BusinessDayAdjustment.MODIFIED_FOLLOWING
    ) == date(2024, 8, 30)
    assert TARGET.advance(date(2024, 5, 31), "2D") == date(2024, 6, 4)
    assert not TARGET.is_business_day(date(2024, 5, 1))
    assert get_calendar("eur") is TARGET
    with pytest.raises(ValueError, match="Unknown calendar"):
        get_calendar("MARS")


def test_day_counts():
    start, end = date(2024, 1, 1), date(2024, 7, 1)
    assert ACT_360.year_fraction(start, end) == pytest.approx(182 / 360)
    assert ACT_365F.year_fraction(start, end) == pytest.approx(182 / 365)
    assert get_day_count_convention("act/360") is ACT_360


def test_make_schedule():
    schedule = make_schedule(date(2024, 1, 15), date(2025, 1, 15), "6M", TARGET)
    assert schedule.dates == [date(2024, 1, 15), date(2024, 7, 15), date(2025, 1, 15)]
    assert schedule.tenor == Tenor(6, TimeUnit.MONTHS)


def test_make_schedule_front_stub():
    schedule = make_schedule(date(2024, 3, 15), date(2025, 1, 15), "6M", TARGET)
    assert schedule.dates == [date(2024, 3, 15), date(2024, 7, 15), date(2025, 1, 15)]


def test_make_schedule_rejects_empty_period():
    with pytest.raises(ValueError, match="must be before"):
        make_schedule(date(2024, 1, 15), date(2024, 1, 15), "6M", TARGET)


def test_schedule_requires_increasing_dates():
    with pytest.raises(ValueError, match="strictly increasing"):
        Schedule(
            [date(2024, 1, 2), date(2024, 1, 2)], TARGET, BusinessDayAdjustment.FOLLOWING
        )


def test_business_day_schedule_collapses_weekend():
    schedule = business_day_schedule(date(2024, 5, 30), date(2024, 6, 4), TARGET)
    assert schedule.dates == [
        date(2024, 5, 30),
        date(2024, 5, 31),
        date(2024, 6, 3),
        date(2024, 6, 4),
    ]


def test_schedule_periods():
    schedule = make_schedule(date(2024, 1, 15), date(2025, 1, 15), "6M", TARGET)
    periods = schedule.periods(ACT_360)
    assert len(periods) == 2
    assert periods[0].accrual_days == 182
    assert periods[0].year_fraction == pytest.approx(182 / 360)


def test_flat_curve_follows_quote():
    quote = SimpleQuote(0.02)
    curve = create_flat_curve(EVALUATION_DATE, quote)
    recorder = Recorder()
    curve.register_observer(recorder)

    t = curve.time_from_reference(date(2025, 6, 3))
    assert curve.df(date(2025, 6, 3)) == pytest.approx(math.exp(-0.02 * t))
    quote.set_value(0.03)
    assert recorder.updates == 1
    assert curve.df(t) == pytest.approx(math.exp(-0.03 * t))


def test_curve_rejects_dates_before_reference():
    curve = create_flat_curve(EVALUATION_DATE, 0.02)
    with pytest.raises(ValueError, match="negative time"):
        curve.df(date(2024, 1, 2))


def test_interpolated_discount_curve_reprices_pillars():
    curve = InterpolatedDiscountCurve(
        EVALUATION_DATE, [date(2025, 6, 3), date(2026, 6, 3)], [0.97, 0.94]
    )
    assert curve.df(date(2025, 6, 3)) == pytest.approx(0.97)
    assert curve.df(date(2026, 6, 3)) == pytest.approx(0.94)
    assert curve.df(EVALUATION_DATE) == 1.0


def test_interpolated_discount_curve_extrapolates_last_zero_rate():
    curve = InterpolatedDiscountCurve(
        EVALUATION_DATE, [1.0, 2.0], [0.97, 0.94], interpolation_method="LINEAR"
    )
    assert curve.df(4.0) == pytest.approx(0.94 ** 2, rel=1e-14)


def test_interpolated_discount_curve_needs_pillar_after_reference():
    with pytest.raises(ValueError, match="after the reference date"):
        InterpolatedDiscountCurve(EVALUATION_DATE, [EVALUATION_DATE], [1.0], "LINEAR")


def test_simple_quote():
    quote = SimpleQuote()
    assert not quote.is_valid()
    with pytest.raises(ValueError, match="no value set"):
        quote.value()
    assert quote.set_value(1.5) == 0.0
    assert quote.set_value(2.0) == pytest.approx(0.5)


def test_index_name_and_dates(euribor6m):
    assert euribor6m.name == "EURIBOR6M ACT/360"
    assert euribor6m.value_date(date(2024, 6, 3)) == date(2024, 6, 5)
    assert euribor6m.fixing_date(date(2024, 6, 5)) == date(2024, 6, 3)
    assert euribor6m.maturity_date(date(2024, 6, 5)) == date(2024, 12, 5)


def test_ibor_forecast(euribor6m, eur_curve):
    fixing = euribor6m.fixing(date(2024, 9, 2))
    start, end = date(2024, 9, 4), date(2025, 3, 4)
    expected = (eur_curve.df(start) / eur_curve.df(end) - 1.0) / ACT_360.year_fraction(start, end)
    assert fixing == pytest.approx(expected, rel=1e-12)


def test_ibor_without_curve_cannot_forecast():
    index = make_euribor("6M")
    with pytest.raises(MissingTermStructureError, match="null term structure"):
        index.fixing(date(2024, 9, 2))


def test_past_fixings(euribor6m):
    with pytest.raises(MissingFixingError, match="Missing EURIBOR6M ACT/360 fixing"):
        euribor6m.fixing(date(2024, 5, 2))

    euribor6m.add_fixing(date(2024, 5, 2), 0.035)
    assert euribor6m.fixing(date(2024, 5, 2)) == 0.035
    # histories are shared by name between index instances
    assert make_euribor("6M").fixing(date(2024, 5, 2)) == 0.035


def test_invalid_fixing_date(euribor6m):
    with pytest.raises(ValueError, match="not valid"):
        euribor6m.fixing(date(2024, 6, 1))


def test_todays_fixing(euribor6m):
    forecast = euribor6m.fixing(EVALUATION_DATE)
    assert forecast == pytest.approx(euribor6m.forecast_fixing(EVALUATION_DATE))

    settings.enforce_todays_historic_fixings = True
    with pytest.raises(MissingFixingError):
        euribor6m.fixing(EVALUATION_DATE)
    euribor6m.add_fixing(EVALUATION_DATE, 0.037)
    assert euribor6m.fixing(EVALUATION_DATE) == 0.037


def test_duplicated_fixings(euribor6m):
    euribor6m.add_fixing(date(2024, 5, 2), 0.035)
    euribor6m.add_fixing(date(2024, 5, 2), 0.035)
    with pytest.raises(ValueError, match="duplicated fixing"):
        euribor6m.add_fixing(date(2024, 5, 2), 0.036)
    euribor6m.add_fixing(date(2024, 5, 2), 0.036, force_overwrite=True)
    assert euribor6m.fixing(date(2024, 5, 2)) == 0.036


def test_add_fixings_from_series(euribor6m):
    series = pd.Series(
        [0.031, 0.032],
        index=pd.DatetimeIndex([pd.Timestamp("2024-05-02"), pd.Timestamp("2024-05-03")]),
    )
    euribor6m.add_fixings(series)
    assert len(euribor6m.time_series()) == 2
    assert index_manager.get_fixing(euribor6m.name, date(2024, 5, 3)) == 0.032
    assert index_manager.get_fixing(euribor6m.name, date(2024, 5, 6)) is None


def test_adding_fixings_notifies_index(euribor6m):
    recorder = Recorder()
    euribor6m.register_observer(recorder)
    euribor6m.add_fixing(date(2024, 5, 2), 0.035)
    assert recorder.updates == 1


def test_fx_index_forecast(eur_curve, usd_curve):
    fx_index = FxIndex("ECB", 2, "USD", "EUR", TARGET, SimpleQuote(0.92), usd_curve, eur_curve)
    spot_value_date = date(2024, 6, 5)
    value_date = date(2025, 6, 5)
    expected = (
        0.92
        * usd_curve.df(value_date)
        * eur_curve.df(spot_value_date)
        / (usd_curve.df(spot_value_date) * eur_curve.df(value_date))
    )
    assert fx_index.name == "ECB USD/EUR"
    assert fx_index.fixing(date(2025, 6, 3)) == pytest.approx(expected, rel=1e-12)


def test_settings_notify_on_new_evaluation_date():
    recorder = Recorder()
    settings.register_observer(recorder)
    settings.evaluation_date = date(2024, 6, 4)
    settings.evaluation_date = date(2024, 6, 4)
    assert recorder.updates == 1


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("XALIB_EVALUATION_DATE", "2023-01-02")
    monkeypatch.setenv("XALIB_ENFORCE_TODAYS_HISTORIC_FIXINGS", "yes")
    monkeypatch.delenv("XALIB_INCLUDE_REFERENCE_DATE_EVENTS", raising=False)
    loaded = Settings.from_env()
    assert loaded.evaluation_date == date(2023, 1, 2)
    assert loaded.enforce_todays_historic_fixings
    assert not loaded.include_reference_date_events


def test_settings_from_env_rejects_bad_date(monkeypatch):
    monkeypatch.setenv("XALIB_EVALUATION_DATE", "02/01/2023")
    with pytest.raises(ValueError, match="ISO date"):
        Settings.from_env()
