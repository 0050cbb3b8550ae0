"""
Pricing engines.

Each engine turns an instrument's arguments into results; the closed-form
model engines read a calibrated LGM or cross asset model, the discounting
engines read curves and quotes.
"""

from .base import LegValuationError, PricingEngine
from .cross_ccy_swap import CrossCcySwapEngine
from .currency_swap import DiscountingCurrencySwapEngine
from .deposit import DepositEngine
from .equity_forward import DiscountingEquityForwardEngine
from .equity_option import AnalyticXAssetLgmEquityOptionEngine
from .fx_forward import DiscountingFxForwardEngine
from .fx_option import AnalyticCcLgmFxOptionEngine
from .lgm_swaption import AnalyticLgmSwaptionEngine, FloatSpreadMapping
from .swap import DiscountingSwapEngine

__all__ = [
    "AnalyticCcLgmFxOptionEngine",
    "AnalyticLgmSwaptionEngine",
    "AnalyticXAssetLgmEquityOptionEngine",
    "CrossCcySwapEngine",
    "DepositEngine",
    "DiscountingCurrencySwapEngine",
    "DiscountingEquityForwardEngine",
    "DiscountingFxForwardEngine",
    "DiscountingSwapEngine",
    "FloatSpreadMapping",
    "LegValuationError",
    "PricingEngine",
]
