"""
Equity forward.
"""

from dataclasses import dataclass
from datetime import date

from xalib.config import settings
from xalib.conventions.types import PositionType

from .base import Instrument


@dataclass
class EquityForwardArguments:
    name: str
    currency: str
    long_short: PositionType
    quantity: float
    maturity_date: date
    strike: float

    def validate(self) -> None:
        if self.quantity <= 0:
            raise ValueError(f"quantity should be positive: {self.quantity}")
        if self.strike <= 0:
            raise ValueError(f"strike should be positive: {self.strike}")


class EquityForward(Instrument):
    """Buy (long) or sell ``quantity`` units of an equity at ``strike`` on maturity."""

    def __init__(
        self,
        name: str,
        currency: str,
        long_short: PositionType,
        quantity: float,
        maturity_date: date,
        strike: float,
    ):
        super().__init__()
        self.name = name
        self.currency = currency
        self.long_short = long_short
        self.quantity = quantity
        self.maturity_date = maturity_date
        self.strike = strike

    def is_expired(self) -> bool:
        return self.maturity_date < settings.evaluation_date

    def arguments(self) -> EquityForwardArguments:
        args = EquityForwardArguments(
            self.name,
            self.currency,
            self.long_short,
            self.quantity,
            self.maturity_date,
            self.strike,
        )
        args.validate()
        return args
