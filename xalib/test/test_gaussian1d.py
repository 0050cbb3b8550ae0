import math
from datetime import date

import numpy as np
import pytest

from xalib.conventions.types import AssetType, OptionType
from xalib.market.quotes import SimpleQuote
from xalib.models import (
    CrossAssetModel,
    FxBsConstantParametrization,
    Gaussian1dCrossAssetAdaptor,
    Lgm1fConstantParametrization,
    LinearGaussMarkovModel,
)
from xalib.models.analytics import ir_ir_covariance

from .market_data import make_euribor, make_swap_index

EXPIRY = date(2025, 6, 3)
MATURITY = date(2030, 6, 3)


@pytest.fixture
def model(lgm_eur):
    return Gaussian1dCrossAssetAdaptor(lgm_eur)


def test_unconditional_grid(model):
    assert np.allclose(model.y_grid(3.0, 4), np.linspace(-3.0, 3.0, 9))


def test_conditional_grid(model):
    grid = model.y_grid(3.0, 4, T=1.0, t=0.5, y=0.5)
    h = 3.0 / 4
    expected = [math.sqrt(0.5) * (0.5 + j * h) for j in range(-4, 5)]
    assert np.allclose(grid, expected, rtol=0.0, atol=1e-12)


def test_zerobond_matches_curve(model, eur_curve, usd_curve):
    assert model.zerobond(MATURITY) == pytest.approx(eur_curve.df(MATURITY), rel=1e-12)
    assert model.zerobond(MATURITY, yts=usd_curve) == pytest.approx(
        usd_curve.df(MATURITY), rel=1e-12
    )


def test_numeraire_today_is_one(model):
    assert model.numeraire(0.0) == pytest.approx(1.0, rel=1e-14)


def test_zerobond_moves_with_state(model):
    # H(T) > H(t) > 0, so a higher state means lower bond prices
    up = model.zerobond(MATURITY, EXPIRY, 1.0)
    down = model.zerobond(MATURITY, EXPIRY, -1.0)
    assert up < down


def test_forward_rate_matches_index(model, euribor6m):
    fixing = date(2024, 9, 2)
    assert model.forward_rate(fixing, ibor_index=euribor6m) == pytest.approx(
        euribor6m.fixing(fixing), rel=1e-10
    )


def test_forward_rate_uses_historic_fixing(model, euribor6m):
    euribor6m.add_fixing(date(2024, 5, 2), 0.035)
    assert model.forward_rate(date(2024, 5, 2), ibor_index=euribor6m) == 0.035


def test_forward_rate_requires_index(model):
    with pytest.raises(ValueError, match="no ibor index"):
        model.forward_rate(date(2024, 9, 2))


def test_swap_rate_matches_index_fixing(model, euribor6m):
    swap_index = make_swap_index("5Y", euribor6m)
    fixing = date(2025, 6, 2)
    assert model.swap_rate(fixing, "5Y", swap_index=swap_index) == pytest.approx(
        swap_index.fixing(fixing), rel=1e-10
    )


def test_swap_rate_without_index_curves(model, euribor6m):
    fixing = date(2025, 6, 2)
    on_model_curve = model.swap_rate(fixing, "5Y", swap_index=make_swap_index("5Y", euribor6m))
    telescoped = model.swap_rate(
        fixing, "5Y", swap_index=make_swap_index("5Y", make_euribor("6M"))
    )
    assert telescoped == pytest.approx(on_model_curve, rel=1e-12)


def test_swap_annuity(model, euribor6m):
    swap_index = make_swap_index("2Y", euribor6m)
    fixing = date(2025, 6, 2)
    swap = model.underlying_swap(swap_index, fixing, "2Y")
    expected = sum(
        c.accrual_period * model.zerobond(c.date) for c in swap.fixed_leg
    )
    assert model.swap_annuity(fixing, "2Y", swap_index=swap_index) == pytest.approx(
        expected, rel=1e-12
    )


def test_underlying_swap_is_cached(model, euribor6m):
    swap_index = make_swap_index("5Y", euribor6m)
    fixing = date(2025, 6, 2)
    first = model.underlying_swap(swap_index, fixing, "2Y")
    assert model.underlying_swap(swap_index, fixing, "2Y") is first
    assert first.fixed_schedule.end_date == date(2027, 6, 4)


def test_deep_in_the_money_call(model, eur_curve):
    strike = 0.5
    price = model.zerobond_option(OptionType.CALL, EXPIRY, EXPIRY, MATURITY, strike)
    intrinsic = eur_curve.df(MATURITY) - strike * eur_curve.df(EXPIRY)
    assert price == pytest.approx(intrinsic, rel=1e-6)


def test_zerobond_option_put_call_parity(model, eur_curve):
    strike = eur_curve.df(MATURITY) / eur_curve.df(EXPIRY)
    call = model.zerobond_option(OptionType.CALL, EXPIRY, EXPIRY, MATURITY, strike)
    put = model.zerobond_option(OptionType.PUT, EXPIRY, EXPIRY, MATURITY, strike)
    assert call > 0.0
    assert put > 0.0
    assert call - put == pytest.approx(0.0, abs=2e-5)


def test_zerobond_option_matches_closed_form(model, lgm_eur, eur_curve):
    strike = eur_curve.df(MATURITY) / eur_curve.df(EXPIRY)
    t = eur_curve.time_from_reference(EXPIRY)
    T = eur_curve.time_from_reference(MATURITY)
    closed_form = lgm_eur.discount_bond_option(OptionType.CALL, strike, t, t, T)
    price = model.zerobond_option(OptionType.CALL, EXPIRY, EXPIRY, MATURITY, strike)
    assert price == pytest.approx(closed_form, rel=1e-3)


@pytest.mark.parametrize(
    "option_type, moneyness", [(OptionType.CALL, 1.02), (OptionType.PUT, 0.98)]
)
def test_out_of_the_money_zerobond_option(model, lgm_eur, eur_curve, option_type, moneyness):
    strike = moneyness * eur_curve.df(MATURITY) / eur_curve.df(EXPIRY)
    t = eur_curve.time_from_reference(EXPIRY)
    T = eur_curve.time_from_reference(MATURITY)
    closed_form = lgm_eur.discount_bond_option(option_type, strike, t, t, T)
    price = model.zerobond_option(option_type, EXPIRY, EXPIRY, MATURITY, strike)
    assert price == pytest.approx(closed_form, rel=3e-3)


def test_flat_payoff_extrapolation_is_close(model, eur_curve):
    strike = eur_curve.df(MATURITY) / eur_curve.df(EXPIRY)
    spline = model.zerobond_option(OptionType.CALL, EXPIRY, EXPIRY, MATURITY, strike)
    flat = model.zerobond_option(
        OptionType.CALL, EXPIRY, EXPIRY, MATURITY, strike, flat_payoff_extrapolation=True
    )
    assert flat == pytest.approx(spline, rel=1e-6)


def test_adaptor_on_cross_asset_component(lgm_eur, lgm_usd):
    model = CrossAssetModel(
        [lgm_eur, lgm_usd], [FxBsConstantParametrization("USD", SimpleQuote(0.9), 0.1)]
    )
    adaptor = Gaussian1dCrossAssetAdaptor(1, model)
    assert adaptor.lgm is lgm_usd
    assert adaptor.term_structure is lgm_usd.term_structure
    with pytest.raises(ValueError, match="cross asset model required"):
        Gaussian1dCrossAssetAdaptor(1)


def test_cross_asset_model_components(lgm_eur, lgm_usd):
    model = CrossAssetModel(
        [lgm_eur, lgm_usd], [FxBsConstantParametrization("USD", SimpleQuote(0.9), 0.1)]
    )
    assert model.dimension == 3
    assert model.idx(AssetType.FX, 0) == 2
    assert model.ccy_index("USD") == 1
    with pytest.raises(IndexError, match="index"):
        model.idx(AssetType.IR, 2)

    model.set_correlation(AssetType.IR, 0, AssetType.FX, 0, -0.3)
    assert model.correlation(AssetType.FX, 0, AssetType.IR, 0) == -0.3
    with pytest.raises(ValueError, match="must be 1"):
        model.set_correlation(AssetType.IR, 1, AssetType.IR, 1, 0.5)


def test_cross_asset_model_validation(lgm_eur, lgm_usd):
    with pytest.raises(ValueError, match="n-1 fx"):
        CrossAssetModel([lgm_eur, lgm_usd])
    with pytest.raises(ValueError, match="not symmetric"):
        CrossAssetModel(
            [lgm_eur, lgm_usd],
            [FxBsConstantParametrization("USD", SimpleQuote(0.9), 0.1)],
            np.array([[1.0, 0.2, 0.0], [0.1, 1.0, 0.0], [0.0, 0.0, 1.0]]),
        )
    with pytest.raises(ValueError, match="must be for currency"):
        CrossAssetModel(
            [lgm_eur, lgm_usd], [FxBsConstantParametrization("GBP", SimpleQuote(0.9), 0.1)]
        )


def test_cross_asset_model_follows_parameters(lgm_eur, eur_curve):
    param = Lgm1fConstantParametrization("GBP", eur_curve, 0.01, 0.0)
    model = CrossAssetModel(
        [lgm_eur, LinearGaussMarkovModel(param)],
        [FxBsConstantParametrization("GBP", SimpleQuote(1.15), 0.1)],
    )
    version = model.version
    param.set_params(0.02, 0.01)
    assert model.version > version


def test_ir_ir_covariance_constant_alpha(lgm_eur):
    model = CrossAssetModel([lgm_eur])
    assert ir_ir_covariance(model, 0, 0, 0.5, 2.0) == pytest.approx(0.01 ** 2 * 2.0, rel=1e-8)
