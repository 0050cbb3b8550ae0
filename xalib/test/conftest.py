import pytest

from xalib.config import settings
from xalib.conventions.calendars import TARGET
from xalib.conventions.daycount import ACT_360
from xalib.curves.flat import create_flat_curve
from xalib.market.fixings import index_manager
from xalib.market.indexes import OvernightIndex
from xalib.models.lgm import LinearGaussMarkovModel
from xalib.models.parametrization import Lgm1fConstantParametrization

from .market_data import EUR_FLAT_RATE, EVALUATION_DATE, USD_FLAT_RATE, make_euribor


@pytest.fixture(autouse=True)
def evaluation_date():
    settings.evaluation_date = EVALUATION_DATE
    yield EVALUATION_DATE
    settings.reset()
    index_manager.clear_histories()


@pytest.fixture
def eur_curve():
    return create_flat_curve(EVALUATION_DATE, EUR_FLAT_RATE, name="EUR")


@pytest.fixture
def usd_curve():
    return create_flat_curve(EVALUATION_DATE, USD_FLAT_RATE, name="USD")


@pytest.fixture
def euribor6m(eur_curve):
    return make_euribor("6M", eur_curve)


@pytest.fixture
def euribor3m(eur_curve):
    return make_euribor("3M", eur_curve)


@pytest.fixture
def estr(eur_curve):
    return OvernightIndex("ESTR", 0, "EUR", TARGET, ACT_360, eur_curve)


@pytest.fixture
def lgm_eur(eur_curve):
    return LinearGaussMarkovModel(Lgm1fConstantParametrization("EUR", eur_curve, 0.01, 0.02))


@pytest.fixture
def lgm_usd(usd_curve):
    return LinearGaussMarkovModel(Lgm1fConstantParametrization("USD", usd_curve, 0.008, 0.03))
