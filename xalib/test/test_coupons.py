import logging
import math
from datetime import date

import pytest

from xalib.cashflows import (
    AverageONApproximation,
    AverageONIndexedCoupon,
    AverageONIndexedCouponPricer,
    AverageONLeg,
    DegenerateScheduleError,
    FixedRateLeg,
    FloatingRateFXLinkedNotionalCoupon,
    FXLinkedCashFlow,
    IborCoupon,
    IborCouponPricer,
    IborLeg,
    PricerCompatibilityError,
    SimpleCashFlow,
    SubPeriodsLeg,
    SubPeriodsType,
    UnsupportedOperationError,
    bps,
    maturity_date,
    npv,
    npvbps,
    set_coupon_pricer,
    set_coupon_pricers,
    start_date,
)
from xalib.config import settings
from xalib.conventions.calendars import TARGET
from xalib.conventions.daycount import ACT_360
from xalib.conventions.types import BusinessDayAdjustment
from xalib.market.fx_index import FxIndex
from xalib.market.indexes import MissingTermStructureError, OvernightIndex
from xalib.schedule import Schedule, make_schedule

FOLLOWING = BusinessDayAdjustment.FOLLOWING


def past_average_on_coupon(estr, rate_cutoff=0, gearing=2.0, spread=0.001):
    return AverageONIndexedCoupon(
        date(2024, 5, 16),
        1.0,
        date(2024, 5, 2),
        date(2024, 5, 16),
        estr,
        gearing,
        spread,
        rate_cutoff,
    )


@pytest.mark.parametrize(
    "approximation", [AverageONApproximation.NONE, AverageONApproximation.TAKADA]
)
def test_average_on_coupon_on_known_fixings(estr, approximation):
    coupon = past_average_on_coupon(estr)
    estr.add_fixings(coupon.fixing_dates, [0.03] * len(coupon.fixing_dates))
    coupon.set_pricer(AverageONIndexedCouponPricer(approximation))
    assert coupon.rate() == pytest.approx(2.0 * 0.03 + 0.001, rel=1e-12)


def test_average_on_none_approximation_weights_by_accrual(estr):
    coupon = past_average_on_coupon(estr)
    fixings = [0.03 + 0.002 * i for i in range(len(coupon.fixing_dates))]
    estr.add_fixings(coupon.fixing_dates, fixings)
    coupon.set_pricer(AverageONIndexedCouponPricer(AverageONApproximation.NONE))

    # Friday fixings accrue over the weekend
    assert coupon.dt[1] == pytest.approx(3.0 / 360.0, rel=1e-14)
    weighted = sum(f * dt for f, dt in zip(fixings, coupon.dt)) / coupon.accrual_period
    assert coupon.rate() == pytest.approx(2.0 * weighted + 0.001, rel=1e-12)
    assert weighted != pytest.approx(sum(fixings) / len(fixings), rel=1e-6)


def test_average_on_daily_schedule(estr):
    coupon = past_average_on_coupon(estr)
    assert coupon.value_dates[0] == date(2024, 5, 2)
    assert coupon.value_dates[-1] == date(2024, 5, 16)
    assert len(coupon.value_dates) == 11
    assert coupon.fixing_dates == coupon.value_dates[:-1]
    assert sum(coupon.dt) == pytest.approx(coupon.accrual_period, rel=1e-14)


def test_average_on_rate_cutoff(estr):
    coupon = past_average_on_coupon(estr, rate_cutoff=2)
    fixings = [0.03 + 0.001 * i for i in range(len(coupon.fixing_dates))]
    estr.add_fixings(coupon.fixing_dates, fixings)

    observed = coupon.index_fixings()
    assert observed[:-2] == fixings[:-2]
    assert observed[-2:] == [fixings[-3], fixings[-3]]
    assert coupon.fixing_date == coupon.fixing_dates[-3]


def test_average_on_degenerate_schedule(estr):
    with pytest.raises(DegenerateScheduleError, match="degenerate schedule"):
        AverageONIndexedCoupon(
            date(2024, 6, 4), 1.0, date(2024, 6, 3), date(2024, 6, 4), estr, rate_cutoff=1
        )


def test_average_on_leg_defaults_to_takada(estr, eur_curve):
    schedule = Schedule([date(2024, 7, 1), date(2024, 10, 1)], TARGET, FOLLOWING)
    leg = AverageONLeg(schedule, estr).with_notional(1.0).build()
    assert len(leg) == 1
    coupon = leg[0]
    assert coupon.pricer.approximation is AverageONApproximation.TAKADA

    expected = math.log(
        eur_curve.df(date(2024, 7, 1)) / eur_curve.df(date(2024, 10, 1))
    ) / ACT_360.year_fraction(date(2024, 7, 1), date(2024, 10, 1))
    assert coupon.rate() == pytest.approx(expected, rel=1e-12)


def test_average_on_none_approximation_close_to_takada(estr):
    schedule = Schedule([date(2024, 7, 1), date(2024, 10, 1)], TARGET, FOLLOWING)
    takada = AverageONLeg(schedule, estr).with_notional(1.0).build()[0]
    compounded_daily = (
        AverageONLeg(schedule, estr)
        .with_notional(1.0)
        .with_pricer(AverageONIndexedCouponPricer(AverageONApproximation.NONE))
        .build()[0]
    )
    # daily simple forwards sum slightly above the log discount ratio
    assert compounded_daily.rate() > takada.rate()
    assert compounded_daily.rate() == pytest.approx(takada.rate(), rel=1e-4)


def test_average_on_takada_requires_curve():
    estr = OvernightIndex("ESTR", 0, "EUR", TARGET, ACT_360)
    schedule = Schedule([date(2024, 7, 1), date(2024, 10, 1)], TARGET, FOLLOWING)
    coupon = AverageONLeg(schedule, estr).with_notional(1.0).build()[0]
    with pytest.raises(MissingTermStructureError, match="term structure"):
        coupon.rate()


def test_average_on_leg_requires_notional(estr):
    schedule = Schedule([date(2024, 7, 1), date(2024, 10, 1)], TARGET, FOLLOWING)
    with pytest.raises(ValueError, match="No notional given"):
        AverageONLeg(schedule, estr).build()


def test_average_on_todays_fixing(estr, eur_curve):
    coupon = AverageONIndexedCoupon(
        date(2024, 6, 6), 1.0, date(2024, 5, 30), date(2024, 6, 6), estr
    )
    past = [d for d in coupon.fixing_dates if d < settings.evaluation_date]
    estr.add_fixings(past, [0.03] * len(past))
    coupon.set_pricer(AverageONIndexedCouponPricer())
    without_today = coupon.rate()

    estr.add_fixing(settings.evaluation_date, 0.05)
    assert coupon.rate() > without_today


def test_sub_periods_single_period_is_index_fixing(euribor3m):
    schedule = Schedule([date(2024, 7, 1), date(2024, 10, 1)], TARGET, FOLLOWING)
    leg = SubPeriodsLeg(schedule, euribor3m).build()
    assert len(leg) == 1
    coupon = leg[0]
    assert coupon.fixing_date == date(2024, 6, 27)
    assert coupon.rate() == pytest.approx(euribor3m.fixing(date(2024, 6, 27)), rel=1e-12)


def test_sub_periods_compounding_above_averaging(euribor3m):
    schedule = Schedule([date(2024, 10, 1), date(2025, 4, 1)], TARGET, FOLLOWING)
    compounded = SubPeriodsLeg(schedule, euribor3m).build()[0]
    averaged = SubPeriodsLeg(schedule, euribor3m).with_type(SubPeriodsType.AVERAGING).build()[0]

    assert compounded.value_dates == [date(2024, 10, 1), date(2025, 1, 2), date(2025, 4, 1)]
    assert compounded.rate() > averaged.rate()
    assert compounded.rate() == pytest.approx(averaged.rate(), rel=1e-2)


def test_sub_periods_spread_inside_or_outside(euribor3m):
    schedule = Schedule([date(2024, 7, 1), date(2024, 10, 1)], TARGET, FOLLOWING)
    fixing = euribor3m.fixing(date(2024, 6, 27))
    outside = SubPeriodsLeg(schedule, euribor3m).with_spread(0.01).build()[0]
    inside = (
        SubPeriodsLeg(schedule, euribor3m)
        .with_spread(0.01)
        .with_include_spread(True)
        .build()[0]
    )
    assert outside.rate() == pytest.approx(fixing + 0.01, rel=1e-12)
    assert inside.rate() == pytest.approx(fixing + 0.01, rel=1e-12)


def test_sub_periods_leg_merges_degenerate_period(euribor3m, caplog):
    schedule = Schedule(
        [date(2024, 6, 1), date(2024, 6, 2), date(2024, 9, 2)], TARGET, FOLLOWING
    )
    with caplog.at_level(logging.WARNING, logger="xalib.cashflows.sub_periods"):
        leg = SubPeriodsLeg(schedule, euribor3m).build()
    assert len(leg) == 1
    assert leg[0].accrual_start_date == date(2024, 6, 1)
    assert leg[0].accrual_end_date == date(2024, 9, 2)
    assert "merging it into the next period" in caplog.text


def test_pricer_compatibility(estr):
    schedule = Schedule([date(2024, 7, 1), date(2024, 10, 1)], TARGET, FOLLOWING)
    leg = AverageONLeg(schedule, estr).with_notional(1.0).build()
    with pytest.raises(
        PricerCompatibilityError, match="Pricer not compatible with Average ON Indexed coupon"
    ):
        set_coupon_pricer(leg, IborCouponPricer())


def test_fixed_coupons_ignore_pricers():
    schedule = make_schedule(date(2024, 7, 1), date(2025, 7, 1), "6M", TARGET)
    leg = FixedRateLeg(schedule).with_notionals(100.0).with_coupon_rates(0.03, ACT_360).build()
    set_coupon_pricer(leg, IborCouponPricer())
    assert all(getattr(c, "pricer", None) is None for c in leg)


def test_set_coupon_pricers_by_position(estr):
    schedule = Schedule(
        [date(2024, 7, 1), date(2024, 10, 1), date(2025, 1, 2)], TARGET, FOLLOWING
    )
    leg = AverageONLeg(schedule, estr).with_notional(1.0).build()
    takada = AverageONIndexedCouponPricer()
    set_coupon_pricers(leg, [takada])
    assert leg[0].pricer is takada
    assert leg[1].pricer is takada

    none = AverageONIndexedCouponPricer(AverageONApproximation.NONE)
    set_coupon_pricers(leg, [takada, none])
    assert leg[1].pricer is none


def test_set_coupon_pricers_errors(estr):
    with pytest.raises(ValueError, match="No cashflows"):
        set_coupon_pricers([], [IborCouponPricer()])

    schedule = Schedule([date(2024, 7, 1), date(2024, 10, 1)], TARGET, FOLLOWING)
    leg = AverageONLeg(schedule, estr).with_notional(1.0).build()
    pricer = AverageONIndexedCouponPricer()
    with pytest.raises(ValueError, match=r"leg size \(1\) and number of pricers \(2\)"):
        set_coupon_pricers(leg, [pricer, pricer])


def test_rate_only_pricer_has_no_prices():
    pricer = AverageONIndexedCouponPricer()
    with pytest.raises(UnsupportedOperationError, match="capletPrice not available"):
        pricer.caplet_price(0.05)
    with pytest.raises(UnsupportedOperationError):
        pricer.swaplet_price()


def test_coupon_without_pricer(euribor6m):
    coupon = IborCoupon(
        date(2025, 3, 4),
        100.0,
        date(2024, 9, 4),
        date(2025, 3, 4),
        2,
        euribor6m,
    )
    with pytest.raises(ValueError, match="pricer not set"):
        coupon.rate()


def test_null_gearing(estr):
    with pytest.raises(ValueError, match="Null gearing"):
        past_average_on_coupon(estr, gearing=0.0)


def test_ibor_leg(euribor6m):
    schedule = make_schedule(date(2024, 9, 4), date(2025, 9, 4), "6M", TARGET)
    leg = (
        IborLeg(schedule, euribor6m)
        .with_notionals(100.0)
        .with_gearings(2.0)
        .with_spreads(0.001)
        .build()
    )
    first = leg[0]
    assert first.fixing_date == date(2024, 9, 2)
    expected = (2.0 * euribor6m.fixing(date(2024, 9, 2)) + 0.001) * first.accrual_period * 100.0
    assert first.amount() == pytest.approx(expected, rel=1e-12)


def test_fx_linked_cashflow():
    fx_index = FxIndex("ECB", 2, "USD", "EUR", TARGET)
    fx_index.add_fixing(date(2024, 5, 2), 0.92)
    direct = FXLinkedCashFlow(date(2024, 6, 10), date(2024, 5, 2), 100.0, fx_index)
    inverted = FXLinkedCashFlow(date(2024, 6, 10), date(2024, 5, 2), 100.0, fx_index, True)
    assert direct.amount() == pytest.approx(92.0)
    assert inverted.amount() == pytest.approx(100.0 / 0.92)


def test_fx_linked_notional_coupon(euribor6m):
    fx_index = FxIndex("ECB", 2, "USD", "EUR", TARGET)
    fx_index.add_fixing(date(2024, 5, 2), 0.92)
    coupon = FloatingRateFXLinkedNotionalCoupon(
        100.0,
        date(2024, 5, 2),
        fx_index,
        False,
        date(2025, 3, 4),
        date(2024, 9, 4),
        date(2025, 3, 4),
        2,
        euribor6m,
    )
    set_coupon_pricer([coupon], IborCouponPricer())
    expected = euribor6m.fixing(date(2024, 9, 2)) * coupon.accrual_period * 92.0
    assert coupon.nominal == 0.0
    assert coupon.amount() == pytest.approx(expected, rel=1e-12)


def test_has_occurred_on_reference_date():
    flow = SimpleCashFlow(1.0, settings.evaluation_date)
    assert flow.has_occurred()
    assert not flow.has_occurred(include_ref_date=True)
    settings.include_reference_date_events = True
    assert not flow.has_occurred()


def test_leg_analysis(eur_curve):
    schedule = make_schedule(date(2024, 1, 15), date(2026, 1, 15), "6M", TARGET)
    leg = FixedRateLeg(schedule).with_notionals(100.0).with_coupon_rates(0.03, ACT_360).build()
    leg.append(SimpleCashFlow(100.0, date(2026, 1, 15)))
    leg.append(SimpleCashFlow(-5.0, date(2024, 5, 2)))

    expected_npv = sum(cf.amount() * eur_curve.df(cf.date) for cf in leg[:-1])
    expected_bps = 1e-4 * sum(c.nominal * c.accrual_period * eur_curve.df(c.date) for c in leg[:4])

    assert npv(leg, eur_curve) == pytest.approx(expected_npv, rel=1e-12)
    assert bps(leg, eur_curve) == pytest.approx(expected_bps, rel=1e-12)
    value, basis_point = npvbps(leg, eur_curve)
    assert value == pytest.approx(expected_npv, rel=1e-12)
    assert basis_point == pytest.approx(expected_bps, rel=1e-12)
    assert npv([], eur_curve) == 0.0

    assert start_date(leg) == date(2024, 1, 15)
    assert maturity_date(leg) == date(2026, 1, 15)
