"""
Market data: quotes, fixing histories and indexes.
"""

from .fixings import IndexManager, index_manager
from .quotes import SimpleQuote
from .indexes import (
    IborIndex,
    Index,
    InterestRateIndex,
    MissingFixingError,
    MissingTermStructureError,
    OvernightIndex,
    OvernightIndexedSwapIndex,
    SwapIndex,
)
from .fx_index import FxIndex

__all__ = [
    "IndexManager",
    "index_manager",
    "SimpleQuote",
    "Index",
    "InterestRateIndex",
    "IborIndex",
    "OvernightIndex",
    "SwapIndex",
    "OvernightIndexedSwapIndex",
    "FxIndex",
    "MissingFixingError",
    "MissingTermStructureError",
]
