"""
Linear-type interpolation methods for discount curves.
"""
import math

import numpy as np

from .base import Interpolator


class LinearInterpolator(Interpolator):
    """Linear interpolation, flat extrapolation."""

    def interpolate(self, t: float) -> float:
        if t <= self.pillars[0]:
            return float(self.values[0])
        if t >= self.pillars[-1]:
            return float(self.values[-1])
        i = self._segment(t)
        t1, t2 = self.pillars[i], self.pillars[i + 1]
        weight = (t - t1) / (t2 - t1)
        return float(self.values[i] + weight * (self.values[i + 1] - self.values[i]))


class LogLinearInterpolator(Interpolator):
    """Linear interpolation of log values.

    On discount factors this is the piecewise flat forward curve. Outside the
    pillars the last log-slope is continued, so discount factors keep decaying.
    """

    def __init__(self, pillars, values):
        super().__init__(pillars, values)
        if np.any(self.values <= 0.0):
            raise ValueError("Log-linear interpolation requires positive values")
        self.log_values = np.log(self.values)

    def interpolate(self, t: float) -> float:
        i = self._segment(t)
        t1, t2 = self.pillars[i], self.pillars[i + 1]
        slope = (self.log_values[i + 1] - self.log_values[i]) / (t2 - t1)
        return math.exp(self.log_values[i] + slope * (t - t1))


class BackwardFlatInterpolator(Interpolator):
    """Value of the right pillar on each segment (step function)."""

    def interpolate(self, t: float) -> float:
        if t <= self.pillars[0]:
            return float(self.values[0])
        if t >= self.pillars[-1]:
            return float(self.values[-1])
        i = int(np.searchsorted(self.pillars, t, side="left"))
        return float(self.values[i])
