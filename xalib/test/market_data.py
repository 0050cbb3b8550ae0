"""Hard-coded market setup shared by the tests (evaluation date 2024-06-03)."""

from datetime import date
from typing import Optional

from xalib.conventions.calendars import TARGET
from xalib.conventions.daycount import ACT_360, THIRTY_360U
from xalib.conventions.types import BusinessDayAdjustment
from xalib.curves.base import YieldCurve
from xalib.market.indexes import IborIndex, SwapIndex

EVALUATION_DATE = date(2024, 6, 3)

EUR_FLAT_RATE = 0.02
USD_FLAT_RATE = 0.03


def make_euribor(tenor: str, curve: Optional[YieldCurve] = None) -> IborIndex:
    return IborIndex(
        "EURIBOR",
        tenor,
        2,
        "EUR",
        TARGET,
        BusinessDayAdjustment.MODIFIED_FOLLOWING,
        False,
        ACT_360,
        curve,
    )


def make_swap_index(tenor: str, ibor: IborIndex) -> SwapIndex:
    """Annual 30/360 fixed leg against ``ibor``."""
    return SwapIndex(
        "EURSWAP",
        tenor,
        2,
        "EUR",
        TARGET,
        "1Y",
        BusinessDayAdjustment.MODIFIED_FOLLOWING,
        THIRTY_360U,
        ibor,
    )
