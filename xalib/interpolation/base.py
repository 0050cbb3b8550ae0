"""
Base class for one-dimensional curve interpolation.
"""
from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np


class Interpolator(ABC):
    """Interpolates values given on sorted, distinct pillars; flat outside."""

    def __init__(self, pillars: Sequence[float], values: Sequence[float]):
        """
        Args:
            pillars: Pillar times (in years)
            values: Values at the pillars (discount factors, zero rates, ...)
        """
        if len(pillars) != len(values):
            raise ValueError("Pillars and values must have same length")
        if len(pillars) < 2:
            raise ValueError("Need at least 2 points for interpolation")

        order = np.argsort(pillars)
        self.pillars = np.asarray(pillars, dtype=float)[order]
        self.values = np.asarray(values, dtype=float)[order]

        if np.any(np.diff(self.pillars) <= 0.0):
            raise ValueError("Duplicate pillars not allowed")

    def __call__(self, t: float) -> float:
        return self.interpolate(t)

    @abstractmethod
    def interpolate(self, t: float) -> float:
        """Interpolate value at time t."""

    def _segment(self, t: float) -> int:
        """Index i such that pillars[i] <= t < pillars[i + 1]."""
        i = int(np.searchsorted(self.pillars, t, side="right")) - 1
        return min(max(i, 0), len(self.pillars) - 2)
