"""
Discount curve interpolated on pillar discount factors.
"""
import logging
from datetime import date
from typing import List, Sequence, Union

from xalib.interpolation import create_interpolator

from .base import YieldCurve

logger = logging.getLogger(__name__)


class InterpolatedDiscountCurve(YieldCurve):
    """
    Discount curve given by discount factors at pillars.

    Pillars are dates or curve times. ``LOGLINEAR`` interpolation (the
    default) gives piecewise flat instantaneous forwards.
    """

    def __init__(
        self,
        reference_date: date,
        pillars: Sequence[Union[date, float]],
        discount_factors: Sequence[float],
        interpolation_method: str = "LOGLINEAR",
        name: str = "",
        time_day_count: str = "ACT/365F",
    ):
        super().__init__(reference_date, name, time_day_count)

        if len(pillars) != len(discount_factors):
            raise ValueError("Pillars and discount factors must have same length")
        if len(pillars) < 1:
            raise ValueError("Need at least 1 pillar point")

        for i, df in enumerate(discount_factors):
            if df <= 0:
                raise ValueError(f"Discount factor at pillar {i} must be positive: {df}")

        times = [self.time_from_reference(p) for p in pillars]
        if times[0] > 0.0:
            times = [0.0] + times
            discount_factors = [1.0] + list(discount_factors)
        if len(times) < 2:
            raise ValueError("Need at least 1 pillar after the reference date")

        for i in range(1, len(times)):
            increase = discount_factors[i] - discount_factors[i - 1]
            if increase > 1e-6:
                logger.warning(
                    "Discount factors increasing at pillar %s (increase = %.8f)",
                    i,
                    increase,
                )

        self.pillar_times: List[float] = list(times)
        self.discount_factors: List[float] = list(discount_factors)
        self.interpolation_method = interpolation_method
        self._interpolator = create_interpolator(
            interpolation_method, self.pillar_times, self.discount_factors
        )

    def _discount_impl(self, t: float) -> float:
        if t > self.pillar_times[-1] and self.interpolation_method.upper() != "LOGLINEAR":
            # continue the last zero rate
            t_max = self.pillar_times[-1]
            return self.discount_factors[-1] ** (t / t_max)
        return self._interpolator(t)

    def __repr__(self) -> str:
        return (
            f"InterpolatedDiscountCurve(reference_date={self.reference_date}, "
            f"{len(self.pillar_times)} pillars, '{self.interpolation_method}')"
        )
