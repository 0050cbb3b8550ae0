"""
Instrument base class.

An instrument is a lazy object: it hands its arguments to an attached
pricing engine the first time a result is requested and keeps the
engine's results until the instrument, the engine or any market object
they depend on changes.
"""

import logging
from abc import abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Optional

from xalib.config import settings
from xalib.observable import LazyObject

logger = logging.getLogger(__name__)


@dataclass
class Results:
    """Engine output common to all instruments."""

    value: float = 0.0
    error_estimate: Optional[float] = None
    valuation_date: Optional[date] = None
    additional_results: Dict[str, Any] = field(default_factory=dict)


class Instrument(LazyObject):
    """Something that can be priced by an engine."""

    def __init__(self):
        super().__init__()
        self._engine = None
        self._results: Optional[Results] = None
        self.register_with(settings)

    @property
    def engine(self):
        return self._engine

    def set_pricing_engine(self, engine) -> None:
        self.unregister_with(self._engine)
        self._engine = engine
        self.register_with(engine)
        self.update()

    @abstractmethod
    def arguments(self):
        """Snapshot of the terms handed to the engine."""

    def is_expired(self) -> bool:
        return False

    def _expired_results(self) -> Results:
        return Results(value=0.0, error_estimate=0.0)

    def perform_calculations(self) -> None:
        if self.is_expired():
            self._results = self._expired_results()
            return
        if self._engine is None:
            raise ValueError(f"null pricing engine for {self.__class__.__name__}")
        self._results = self._engine.calculate(self.arguments())
        logger.debug("%s priced, value %s", self.__class__.__name__, self._results.value)

    @property
    def results(self) -> Results:
        self.calculate()
        return self._results

    def npv(self) -> float:
        return self.results.value

    def error_estimate(self) -> Optional[float]:
        return self.results.error_estimate

    def valuation_date(self) -> Optional[date]:
        return self.results.valuation_date

    def result(self, name: str) -> Any:
        """Additional result reported by the engine under ``name``."""
        additional = self.results.additional_results
        if name not in additional:
            raise KeyError(f"{name} not provided")
        return additional[name]
