from datetime import date

import pytest

from xalib.conventions.calendars import TARGET
from xalib.conventions.daycount import THIRTY_360U
from xalib.conventions.types import OptionType, SettlementType, SwapType
from xalib.engines import AnalyticLgmSwaptionEngine, FloatSpreadMapping
from xalib.instruments import EuropeanExercise, Swaption, VanillaSwap
from xalib.math.rootfinding import RootFindingError
from xalib.models import CrossAssetModel
from xalib.schedule import make_schedule

from .market_data import EVALUATION_DATE, make_euribor

START = date(2025, 6, 3)
END = date(2030, 6, 3)
EXPIRY = date(2025, 5, 30)
NOMINAL = 100.0
FIXED_RATE = 0.025


def make_swap(swap_type, ibor, end=END, spread=0.0, fixed_rate=FIXED_RATE):
    fixed_schedule = make_schedule(START, end, "1Y", TARGET)
    float_schedule = make_schedule(START, end, ibor.tenor, TARGET)
    return VanillaSwap(
        swap_type,
        NOMINAL,
        fixed_schedule,
        fixed_rate,
        THIRTY_360U,
        float_schedule,
        ibor,
        spread,
    )


def make_swaption(swap, engine, expiry=EXPIRY):
    swaption = Swaption(swap, EuropeanExercise(expiry))
    swaption.set_pricing_engine(engine)
    return swaption


def test_payer_receiver_parity(lgm_eur, eur_curve):
    ibor = make_euribor("6M")
    engine = AnalyticLgmSwaptionEngine(lgm_eur)
    payer_swap = make_swap(SwapType.PAYER, ibor)
    payer = make_swaption(payer_swap, engine).npv()
    receiver = make_swaption(make_swap(SwapType.RECEIVER, ibor), engine).npv()

    fixed_leg = payer_swap.fixed_leg
    annuity = sum(c.amount() * eur_curve.df(c.date) for c in fixed_leg)
    forward_value = NOMINAL * (eur_curve.df(START) - eur_curve.df(fixed_leg[-1].date)) - annuity

    assert payer > 0.0
    assert receiver > 0.0
    assert payer - receiver == pytest.approx(forward_value, abs=1e-10)


def test_single_period_swaption_is_bond_option(lgm_eur, eur_curve):
    swap = make_swap(SwapType.PAYER, make_euribor("6M"), end=date(2026, 6, 3))
    engine = AnalyticLgmSwaptionEngine(lgm_eur)
    value = make_swaption(swap, engine).npv()

    coupon = swap.fixed_leg[0]
    c = coupon.amount()
    t = eur_curve.time_from_reference(EXPIRY)
    S = eur_curve.time_from_reference(START)
    T = eur_curve.time_from_reference(coupon.date)
    expected = (NOMINAL + c) * lgm_eur.discount_bond_option(
        OptionType.PUT, NOMINAL / (NOMINAL + c), t, S, T
    )
    assert value == pytest.approx(expected, rel=1e-7)


def test_engine_accepts_cross_asset_model_and_parametrization(lgm_eur):
    swap = make_swap(SwapType.PAYER, make_euribor("6M"))
    reference = make_swaption(swap, AnalyticLgmSwaptionEngine(lgm_eur)).npv()
    via_model = make_swaption(swap, AnalyticLgmSwaptionEngine(CrossAssetModel([lgm_eur]))).npv()
    via_param = make_swaption(swap, AnalyticLgmSwaptionEngine(lgm_eur.parametrization)).npv()
    assert via_model == pytest.approx(reference, rel=1e-14)
    assert via_param == pytest.approx(reference, rel=1e-14)


def test_cash_settlement_not_supported(lgm_eur):
    swaption = Swaption(
        make_swap(SwapType.PAYER, make_euribor("6M")),
        EuropeanExercise(EXPIRY),
        SettlementType.CASH,
    )
    swaption.set_pricing_engine(AnalyticLgmSwaptionEngine(lgm_eur))
    with pytest.raises(ValueError, match="cash-settled swaptions are not supported"):
        swaption.npv()


def test_expiry_today_is_worthless(lgm_eur):
    swap = make_swap(SwapType.PAYER, make_euribor("6M"))
    assert make_swaption(swap, AnalyticLgmSwaptionEngine(lgm_eur), EVALUATION_DATE).npv() == 0.0


def test_expired_swaption(lgm_eur):
    swap = make_swap(SwapType.PAYER, make_euribor("6M"))
    swaption = make_swaption(swap, AnalyticLgmSwaptionEngine(lgm_eur), date(2024, 5, 31))
    assert swaption.is_expired()
    assert swaption.npv() == 0.0


def test_spread_corrections(lgm_eur, eur_curve, euribor6m):
    spread = 0.001
    swap = make_swap(SwapType.PAYER, euribor6m, spread=spread)

    next_coupon = make_swaption(
        swap,
        AnalyticLgmSwaptionEngine(lgm_eur, float_spread_mapping=FloatSpreadMapping.NEXT_COUPON),
    )
    assert next_coupon.result("fixedAmountCorrectionSettlement") == 0.0
    corrections = next_coupon.result("fixedAmountCorrections")
    assert len(corrections) == len(swap.fixed_leg)

    first = swap.floating_leg[0]
    second = swap.floating_leg[1]
    expected_first = (
        NOMINAL
        * spread
        * (
            first.accrual_period * eur_curve.df(first.date)
            + second.accrual_period * eur_curve.df(second.date)
        )
        / eur_curve.df(swap.fixed_leg[0].date)
    )
    assert corrections[0] == pytest.approx(expected_first, rel=1e-10)

    pro_rata = make_swaption(
        swap,
        AnalyticLgmSwaptionEngine(lgm_eur, float_spread_mapping=FloatSpreadMapping.PRO_RATA),
    )
    expected_settlement = (
        0.5 * NOMINAL * spread * first.accrual_period
        * eur_curve.df(first.date) / eur_curve.df(START)
    )
    assert pro_rata.result("fixedAmountCorrectionSettlement") == pytest.approx(
        expected_settlement, rel=1e-10
    )


def test_spread_makes_payer_swaption_cheaper(lgm_eur, euribor6m):
    engine = AnalyticLgmSwaptionEngine(lgm_eur)
    without = make_swaption(make_swap(SwapType.PAYER, euribor6m), engine).npv()
    with_spread = make_swaption(make_swap(SwapType.PAYER, euribor6m, spread=-0.002), engine).npv()
    assert with_spread < without


def test_swaption_follows_model_parameters(lgm_eur):
    swap = make_swap(SwapType.PAYER, make_euribor("6M"))
    swaption = make_swaption(swap, AnalyticLgmSwaptionEngine(lgm_eur))
    before = swaption.npv()
    lgm_eur.parametrization.set_params(0.02, 0.02)
    assert swaption.npv() > before


def test_root_finding_failure(lgm_eur):
    # a fixed rate of -200% leaves the coupon bond below the strike for every state
    swap = make_swap(SwapType.PAYER, make_euribor("6M"), fixed_rate=-2.0)
    swaption = make_swaption(swap, AnalyticLgmSwaptionEngine(lgm_eur))
    with pytest.raises(RootFindingError, match="failed to compute yStar: unable to bracket"):
        swaption.npv()


@pytest.mark.parametrize(
    "mapping", [FloatSpreadMapping.NEXT_COUPON, FloatSpreadMapping.PRO_RATA]
)
def test_spread_corrections_with_quarterly_float_leg(lgm_eur, eur_curve, euribor3m, mapping):
    spread = 0.001
    swap = make_swap(SwapType.PAYER, euribor3m, end=date(2027, 6, 3), spread=spread)
    assert len(swap.floating_leg) == 4 * len(swap.fixed_leg)

    swaption = make_swaption(
        swap, AnalyticLgmSwaptionEngine(lgm_eur, float_spread_mapping=mapping)
    )
    corrections = swaption.result("fixedAmountCorrections")
    mapped = swaption.result("fixedAmountCorrectionSettlement") * eur_curve.df(START) + sum(
        s * eur_curve.df(c.date) for s, c in zip(corrections, swap.fixed_leg)
    )
    expected = sum(
        NOMINAL * spread * c.accrual_period * eur_curve.df(c.date) for c in swap.floating_leg
    )
    assert mapped == pytest.approx(expected, rel=1e-10)
