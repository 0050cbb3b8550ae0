"""
Monotonicity preserving cubic spline.

End slopes follow the Lagrange boundary condition (slope of the cubic
through the four outermost points). The node derivatives of the resulting
clamped spline are then limited with Hyman's filter, so the interpolant
never overshoots monotone data, e.g. next to the kink of an option payoff.
"""
from typing import Sequence, Tuple

import numpy as np
from scipy.interpolate import CubicHermiteSpline, CubicSpline

from .base import Interpolator


def lagrange_end_slopes(x: np.ndarray, y: np.ndarray) -> Tuple[float, float]:
    """Slopes at both ends of the polynomials through the outermost points."""
    m = min(len(x), 4)
    left = np.polyder(np.polyfit(x[:m], y[:m], m - 1))
    right = np.polyder(np.polyfit(x[-m:], y[-m:], m - 1))
    return float(np.polyval(left, x[0])), float(np.polyval(right, x[-1]))


def hyman_filter(
    x: np.ndarray, y: np.ndarray, dydx: np.ndarray
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Limit node derivatives so that the Hermite cubic stays monotone wherever
    the data is.

    Returns:
        ``(filtered derivatives, mask of the nodes that were adjusted)``
    """
    n = len(x)
    dx = np.diff(x)
    S = np.diff(y) / dx
    filtered = np.array(dydx, dtype=float)
    adjusted = np.zeros(n, dtype=bool)

    for i in range(n):
        d = filtered[i]
        if i == 0 or i == n - 1:
            s = S[0] if i == 0 else S[n - 2]
            correction = np.sign(d) * min(abs(d), abs(3.0 * s)) if d * s > 0.0 else 0.0
        else:
            pm = (S[i - 1] * dx[i] + S[i] * dx[i - 1]) / (dx[i - 1] + dx[i])
            M = 3.0 * min(abs(S[i - 1]), abs(S[i]), abs(pm))
            if i > 1 and (S[i - 1] - S[i - 2]) * (S[i] - S[i - 1]) > 0.0:
                pd = (S[i - 1] * (2.0 * dx[i - 1] + dx[i - 2]) - S[i - 2] * dx[i - 1]) / (
                    dx[i - 2] + dx[i - 1]
                )
                if pm * pd > 0.0 and pm * (S[i - 1] - S[i - 2]) > 0.0:
                    M = max(M, 1.5 * min(abs(pm), abs(pd)))
            if i < n - 2 and (S[i] - S[i - 1]) * (S[i + 1] - S[i]) > 0.0:
                pu = (S[i] * (2.0 * dx[i] + dx[i + 1]) - S[i + 1] * dx[i]) / (dx[i] + dx[i + 1])
                if pm * pu > 0.0 and -pm * (S[i] - S[i - 1]) > 0.0:
                    M = max(M, 1.5 * min(abs(pm), abs(pu)))
            correction = np.sign(d) * min(abs(d), M) if d * pm > 0.0 else 0.0
        if correction != d:
            filtered[i] = correction
            adjusted[i] = True
    return filtered, adjusted


class MonotoneCubicInterpolator(Interpolator):
    """Lagrange-clamped cubic spline with Hyman's monotonicity filter; flat outside."""

    def __init__(self, pillars: Sequence[float], values: Sequence[float]):
        super().__init__(pillars, values)
        x, y = self.pillars, self.values
        left, right = lagrange_end_slopes(x, y)
        spline = CubicSpline(x, y, bc_type=((1, left), (1, right)))
        derivatives, self.monotonicity_adjustments = hyman_filter(x, y, spline(x, 1))
        self._spline = CubicHermiteSpline(x, y, derivatives)

    @property
    def coefficients(self) -> np.ndarray:
        """Rows: cubic, quadratic, linear and constant coefficients in ``t - pillars[i]``."""
        return self._spline.c

    def interpolate(self, t: float) -> float:
        if t <= self.pillars[0]:
            return float(self.values[0])
        if t >= self.pillars[-1]:
            return float(self.values[-1])
        return float(self._spline(t))
