"""
Piecewise constant functions and their integrals.

A step function is given by ``n`` strictly increasing positive times and
``n + 1`` values; value ``i`` applies on ``[t_{i-1}, t_i)`` with
``t_{-1} = 0``, the last value beyond the last time. Cumulative integrals
at the step times are kept so that each evaluation is a single
``searchsorted`` plus one partial segment.
"""

import math
from bisect import bisect_right
from typing import Sequence

import numpy as np

ZERO_CUTOFF = 1.0e-6


def check_times(times: Sequence[float]) -> np.ndarray:
    t = np.asarray(times, dtype=float)
    if t.size == 0:
        return t
    if t[0] <= 0.0:
        raise ValueError(f"first time ({t[0]}) must be positive")
    bad = np.nonzero(np.diff(t) <= 0.0)[0]
    if bad.size:
        i = int(bad[0])
        raise ValueError(
            f"times must be strictly increasing, entries at ({i},{i + 1}) "
            f"are ({t[i]},{t[i + 1]})"
        )
    return t


class PiecewiseConstantFunction:
    """Step function ``y`` with ``int_0^t y^2`` in closed form."""

    def __init__(self, times: Sequence[float], values: Sequence[float]):
        self.times = check_times(times)
        self.set_values(values)

    def set_values(self, values: Sequence[float]) -> None:
        values = np.asarray(values, dtype=float)
        if values.size != self.times.size + 1:
            raise ValueError(
                f"{self.times.size + 1} values required for {self.times.size} times, "
                f"got {values.size}"
            )
        self.values = values
        widths = np.diff(np.concatenate(([0.0], self.times)))
        self._int_sqr = np.cumsum(values[:-1] ** 2 * widths)
        self._int = np.cumsum(values[:-1] * widths)

    def _locate(self, t: float):
        i = bisect_right(self.times, t)
        t0 = self.times[i - 1] if i >= 1 else 0.0
        return i, t0

    def __call__(self, t: float) -> float:
        return float(self.values[bisect_right(self.times, t)])

    def integral(self, t: float) -> float:
        """``int_0^t y(s) ds``."""
        if t < 0.0:
            return 0.0
        i, t0 = self._locate(t)
        res = self._int[i - 1] if i >= 1 else 0.0
        return float(res + self.values[i] * (t - t0))

    def integral_of_square(self, t: float) -> float:
        """``int_0^t y(s)^2 ds``."""
        if t < 0.0:
            return 0.0
        i, t0 = self._locate(t)
        res = self._int_sqr[i - 1] if i >= 1 else 0.0
        return float(res + self.values[i] ** 2 * (t - t0))

    def exp_minus_integral(self, t: float) -> float:
        """``exp(-int_0^t y(s) ds)``."""
        if t < 0.0:
            return 1.0
        return math.exp(-self.integral(t))

    def integral_of_exp_minus_integral(self, t: float) -> float:
        """``int_0^t exp(-int_0^s y(u) du) ds``."""
        if t < 0.0:
            return 0.0
        i_end, _ = self._locate(t)
        res = 0.0
        lower = 0.0
        for i in range(i_end + 1):
            upper = t if i == i_end else self.times[i]
            width = upper - lower
            decay = math.exp(-self.integral(lower))
            a = self.values[i]
            if abs(a) < ZERO_CUTOFF:
                res += decay * width
            else:
                res += decay * -math.expm1(-a * width) / a
            lower = upper
        return res
