"""
Process-wide evaluation settings.

Defaults are read from the environment so that batch runs can pin the
evaluation date without code changes:

- ``XALIB_EVALUATION_DATE``: ISO date (``YYYY-MM-DD``), defaults to today
- ``XALIB_ENFORCE_TODAYS_HISTORIC_FIXINGS``: truthy flag, default off
- ``XALIB_INCLUDE_REFERENCE_DATE_EVENTS``: truthy flag, default off
"""

import logging
import os
from datetime import date
from typing import Optional

from xalib.observable import Observable

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _env_date(name: str) -> Optional[date]:
    raw = os.getenv(name)
    if not raw:
        return None
    try:
        return date.fromisoformat(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an ISO date, got {raw!r}") from exc


class Settings(Observable):
    """Evaluation date and fixing policies shared by indexes, models and engines."""

    def __init__(
        self,
        evaluation_date: Optional[date] = None,
        enforce_todays_historic_fixings: bool = False,
        include_reference_date_events: bool = False,
    ):
        super().__init__()
        self._evaluation_date = evaluation_date
        self.enforce_todays_historic_fixings = enforce_todays_historic_fixings
        self.include_reference_date_events = include_reference_date_events

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            evaluation_date=_env_date("XALIB_EVALUATION_DATE"),
            enforce_todays_historic_fixings=_env_flag(
                "XALIB_ENFORCE_TODAYS_HISTORIC_FIXINGS"
            ),
            include_reference_date_events=_env_flag(
                "XALIB_INCLUDE_REFERENCE_DATE_EVENTS"
            ),
        )

    @property
    def evaluation_date(self) -> date:
        """The evaluation date; today's date unless set explicitly."""
        if self._evaluation_date is None:
            return date.today()
        return self._evaluation_date

    @evaluation_date.setter
    def evaluation_date(self, value: Optional[date]) -> None:
        if value != self._evaluation_date:
            logger.debug("Evaluation date set to %s", value)
            self._evaluation_date = value
            self.notify_observers()

    def reset(self) -> None:
        """Restore the defaults (evaluation date floating with today)."""
        self.enforce_todays_historic_fixings = False
        self.include_reference_date_events = False
        self.evaluation_date = None


settings = Settings.from_env()
