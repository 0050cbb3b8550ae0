"""Market quotes."""

import math
from typing import Optional

from xalib.observable import Observable


class SimpleQuote(Observable):
    """A scalar market value that notifies its observers when it moves."""

    def __init__(self, value: Optional[float] = None):
        super().__init__()
        self._value = value

    def value(self) -> float:
        if self._value is None:
            raise ValueError("invalid SimpleQuote: no value set")
        return self._value

    def is_valid(self) -> bool:
        return self._value is not None and not math.isnan(self._value)

    def set_value(self, value: Optional[float]) -> float:
        """Set a new value; returns the change (0.0 when previously unset)."""
        diff = 0.0
        if value != self._value:
            if value is not None and self._value is not None:
                diff = value - self._value
            self._value = value
            self.notify_observers()
        return diff

    def __repr__(self) -> str:
        return f"SimpleQuote({self._value!r})"
