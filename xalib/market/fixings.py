"""
Historic index fixings.

One ``pandas.Series`` per index name, indexed by fixing date. Indexes
read their past fixings from here and observe the per-name notifier so
that adding a fixing invalidates everything priced off that index.
"""

import logging
from datetime import date
from typing import Dict, Iterable, Optional

import numpy as np
import pandas as pd

from xalib.observable import Observable

logger = logging.getLogger(__name__)


class IndexManager:
    """Registry of fixing histories keyed by upper-cased index name."""

    def __init__(self):
        self._histories: Dict[str, pd.Series] = {}
        self._notifiers: Dict[str, Observable] = {}

    @staticmethod
    def _key(name: str) -> str:
        return name.upper()

    def notifier(self, name: str) -> Observable:
        """Observable notified whenever the history of ``name`` changes."""
        key = self._key(name)
        if key not in self._notifiers:
            self._notifiers[key] = Observable()
        return self._notifiers[key]

    def has_history(self, name: str) -> bool:
        return self._key(name) in self._histories

    def get_history(self, name: str) -> pd.Series:
        """Fixings of ``name`` sorted by date (empty series if none)."""
        return self._histories.get(self._key(name), pd.Series(dtype=float))

    def set_history(self, name: str, history: pd.Series) -> None:
        key = self._key(name)
        self._histories[key] = history.sort_index()
        self.notifier(key).notify_observers()

    def add_fixings(
        self,
        name: str,
        dates: Iterable[date],
        values: Iterable[float],
        force_overwrite: bool = False,
    ) -> None:
        """
        Merge fixings into the history of ``name``.

        Raises:
            ValueError: If a date already carries a different fixing and
                ``force_overwrite`` is false, or a value is not finite
        """
        new = pd.Series(
            list(values), index=pd.DatetimeIndex([pd.Timestamp(d) for d in dates]),
            dtype=float,
        )
        if not np.all(np.isfinite(new.values)):
            raise ValueError(f"Non-finite fixing given for {name}")
        if new.index.has_duplicates:
            raise ValueError(f"Duplicated fixing dates given for {name}")

        current = self.get_history(name)
        if current.empty:
            merged = new
        elif force_overwrite:
            merged = new.combine_first(current)
        else:
            common = current.index.intersection(new.index)
            clash = ~np.isclose(current[common].values, new[common].values)
            if clash.any():
                first = common[clash][0]
                raise ValueError(
                    f"At least one duplicated fixing provided: {name}, "
                    f"{first.date()}, {new[first]} while {current[first]} "
                    f"value is already present"
                )
            merged = current.combine_first(new)
        logger.debug("Added %d fixings for %s", len(new), name)
        self.set_history(name, merged)

    def add_fixing(
        self, name: str, fixing_date: date, value: float, force_overwrite: bool = False
    ) -> None:
        self.add_fixings(name, [fixing_date], [value], force_overwrite)

    def get_fixing(self, name: str, fixing_date: date) -> Optional[float]:
        """Stored fixing for ``fixing_date``, or ``None``."""
        history = self.get_history(name)
        key = pd.Timestamp(fixing_date)
        if key in history.index:
            return float(history[key])
        return None

    def clear_history(self, name: str) -> None:
        key = self._key(name)
        if self._histories.pop(key, None) is not None:
            self.notifier(key).notify_observers()

    def clear_histories(self) -> None:
        for key in list(self._histories):
            self.clear_history(key)


index_manager = IndexManager()
