"""
Instruments priced by the engines in :mod:`xalib.engines`.
"""

from .base import Instrument, Results
from .currency_swap import (
    CrossCcySwap,
    CrossCcySwapResults,
    CrossCurrencySwap,
    CurrencySwap,
    CurrencySwapArguments,
    CurrencySwapResults,
)
from .deposit import Deposit, DepositArguments, DepositResults
from .equity_forward import EquityForward, EquityForwardArguments
from .fx_forward import FxForward, FxForwardArguments, FxForwardResults
from .option import (
    BermudanExercise,
    EuropeanExercise,
    Exercise,
    OptionArguments,
    PlainVanillaPayoff,
    VanillaOption,
)
from .swap import SwapArguments, SwapResults, VanillaSwap, make_index_swap
from .swaption import Swaption, SwaptionArguments

__all__ = [
    "BermudanExercise",
    "CrossCcySwap",
    "CrossCcySwapResults",
    "CrossCurrencySwap",
    "CurrencySwap",
    "CurrencySwapArguments",
    "CurrencySwapResults",
    "Deposit",
    "DepositArguments",
    "DepositResults",
    "EquityForward",
    "EquityForwardArguments",
    "EuropeanExercise",
    "Exercise",
    "FxForward",
    "FxForwardArguments",
    "FxForwardResults",
    "Instrument",
    "OptionArguments",
    "PlainVanillaPayoff",
    "Results",
    "SwapArguments",
    "SwapResults",
    "Swaption",
    "SwaptionArguments",
    "VanillaOption",
    "VanillaSwap",
    "make_index_swap",
]
