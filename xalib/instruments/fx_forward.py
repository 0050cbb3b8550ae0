"""
FX forward: exchange of two nominals in different currencies at maturity.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from xalib.config import settings
from xalib.market.quotes import SimpleQuote

from .base import Instrument, Results


@dataclass
class FxForwardArguments:
    nominal1: float
    currency1: str
    nominal2: float
    currency2: str
    maturity_date: date
    pay_currency1: bool

    def validate(self) -> None:
        if self.nominal1 <= 0.0:
            raise ValueError(f"nominal1 should be positive: {self.nominal1}")
        if self.nominal2 <= 0.0:
            raise ValueError(f"nominal2 should be positive: {self.nominal2}")


@dataclass
class FxForwardResults(Results):
    npv_currency: Optional[str] = None
    # units of npv_currency per unit of the other currency
    fair_forward_rate: Optional[float] = None


class FxForward(Instrument):
    """
    Pays (``pay_currency1``) or receives ``nominal1`` of ``currency1``
    against ``nominal2`` of ``currency2`` on ``maturity_date``.
    """

    def __init__(
        self,
        nominal1: float,
        currency1: str,
        nominal2: float,
        currency2: str,
        maturity_date: date,
        pay_currency1: bool,
    ):
        super().__init__()
        self.nominal1 = nominal1
        self.currency1 = currency1
        self.nominal2 = nominal2
        self.currency2 = currency2
        self.maturity_date = maturity_date
        self.pay_currency1 = pay_currency1

    @classmethod
    def from_forward_quote(
        cls,
        nominal1: float,
        currency1: str,
        fx_forward_quote: SimpleQuote,
        currency2: str,
        maturity_date: date,
        selling_nominal: bool,
    ) -> "FxForward":
        """Second nominal from a forward quote in units of ``currency1`` per ``currency2``."""
        if not fx_forward_quote.is_valid():
            raise ValueError("The FX Forward quote is not valid.")
        return cls(
            nominal1,
            currency1,
            nominal1 / fx_forward_quote.value(),
            currency2,
            maturity_date,
            selling_nominal,
        )

    def is_expired(self) -> bool:
        return self.maturity_date < settings.evaluation_date

    def _expired_results(self) -> FxForwardResults:
        return FxForwardResults(value=0.0, error_estimate=0.0)

    def arguments(self) -> FxForwardArguments:
        args = FxForwardArguments(
            self.nominal1,
            self.currency1,
            self.nominal2,
            self.currency2,
            self.maturity_date,
            self.pay_currency1,
        )
        args.validate()
        return args

    def fair_forward_rate(self) -> Optional[float]:
        return self.results.fair_forward_rate
