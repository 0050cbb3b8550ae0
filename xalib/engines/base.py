"""
Pricing engine base class.
"""

from abc import ABC, abstractmethod

from xalib.instruments.base import Results
from xalib.observable import Observable, Observer


class LegValuationError(RuntimeError):
    """Valuation of one leg of a multi-leg instrument failed."""


class PricingEngine(Observable, Observer, ABC):
    """
    Computes results from instrument arguments.

    Engines register with the market objects they read; a change there is
    forwarded to the instruments using the engine.
    """

    def __init__(self):
        Observable.__init__(self)

    def update(self) -> None:
        self.notify_observers()

    @abstractmethod
    def calculate(self, arguments) -> Results:
        """Price the given arguments."""


def ordinal(n: int) -> str:
    """``1st``, ``2nd``, ``3rd``, ``4th`` ... as used in leg error messages."""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"
