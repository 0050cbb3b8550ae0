"""
Gaussian one-factor model base.

Models are written in terms of a standardized state ``y``: for a grid
generated at time ``T`` the state variable ``x(T)`` is ``y`` times its
unconditional standard deviation plus its expectation. Subclasses provide
the numeraire and zero bond as functions of ``(t, y)``; everything else
(forward and swap rates under the model, zero bond options) is built on
those two.
"""

import logging
from abc import abstractmethod
from datetime import date, timedelta
from typing import Dict, Optional, Tuple, Union

import numpy as np

from xalib.config import settings
from xalib.conventions.types import OptionType, Tenor
from xalib.curves.base import YieldCurve
from xalib.interpolation.cubic import MonotoneCubicInterpolator
from xalib.market.indexes import IborIndex, OvernightIndexedSwapIndex, SwapIndex
from xalib.math.comparison import QL_EPSILON
from xalib.math.gaussian import gaussian_shifted_polynomial_integral
from xalib.observable import LazyObject

logger = logging.getLogger(__name__)

TimeOrDate = Union[float, date]

# integration bound standing in for infinity when extrapolating the payoff
_PAYOFF_BOUND = 100.0


class Gaussian1dModel(LazyObject):
    """
    Abstract one-factor Gaussian model.

    Args:
        term_structure: Model curve, used whenever no curve override is given
    """

    def __init__(self, term_structure: YieldCurve):
        super().__init__()
        self.term_structure = term_structure
        self.state_process = None
        self._swap_cache: Dict[Tuple[str, date, Tenor], object] = {}
        self._evaluation_date: Optional[date] = None
        self._enforce_todays_historic_fixings = False
        self.register_with(settings)
        self.register_with(term_structure)

    def perform_calculations(self) -> None:
        self._evaluation_date = settings.evaluation_date
        self._enforce_todays_historic_fixings = settings.enforce_todays_historic_fixings

    def _time(self, t: Optional[TimeOrDate]) -> float:
        if t is None:
            return 0.0
        return self.term_structure.time_from_reference(t)

    # model primitives

    @abstractmethod
    def _numeraire_impl(self, t: float, y: float, yts: Optional[YieldCurve]) -> float:
        pass

    @abstractmethod
    def _zerobond_impl(self, T: float, t: float, y: float, yts: Optional[YieldCurve]) -> float:
        pass

    def numeraire(
        self, t: TimeOrDate, y: float = 0.0, yts: Optional[YieldCurve] = None
    ) -> float:
        return self._numeraire_impl(self._time(t), y, yts)

    def zerobond(
        self,
        T: TimeOrDate,
        t: Optional[TimeOrDate] = 0.0,
        y: float = 0.0,
        yts: Optional[YieldCurve] = None,
    ) -> float:
        return self._zerobond_impl(self._time(T), self._time(t), y, yts)

    # rates under the model

    def _is_historic(self, fixing: date) -> bool:
        self.calculate()
        cutoff = self._evaluation_date
        if not self._enforce_todays_historic_fixings:
            cutoff = cutoff - timedelta(days=1)
        return fixing <= cutoff

    def forward_rate(
        self,
        fixing: date,
        reference_date: Optional[date] = None,
        y: float = 0.0,
        ibor_index: Optional[IborIndex] = None,
    ) -> float:
        """Ibor forward fixing at ``fixing`` seen from ``(reference_date, y)``."""
        if ibor_index is None:
            raise ValueError("no ibor index given")
        if self._is_historic(fixing):
            return ibor_index.fixing(fixing)

        yts = ibor_index.forwarding_curve
        value_date = ibor_index.value_date(fixing)
        end_date = ibor_index.fixing_calendar.advance(
            value_date, ibor_index.tenor, ibor_index.convention, ibor_index.end_of_month
        )
        dcf = ibor_index.day_count.year_fraction(value_date, end_date)
        zb_value = self.zerobond(value_date, reference_date, y, yts)
        zb_end = self.zerobond(end_date, reference_date, y, yts)
        return (zb_value - zb_end) / (dcf * zb_end)

    def underlying_swap(self, swap_index: SwapIndex, fixing: date, tenor: Union[Tenor, str]):
        """Underlying swap of ``swap_index`` with tenor ``tenor``, cached per fixing."""
        if isinstance(tenor, str):
            tenor = Tenor.parse(tenor)
        key = (swap_index.name, fixing, tenor)
        swap = self._swap_cache.get(key)
        if swap is None:
            swap = swap_index.with_tenor(tenor).underlying_swap(fixing)
            self._swap_cache[key] = swap
        return swap

    def swap_rate(
        self,
        fixing: date,
        tenor: Union[Tenor, str],
        reference_date: Optional[date] = None,
        y: float = 0.0,
        swap_index: Optional[SwapIndex] = None,
    ) -> float:
        """
        Par swap rate fixing at ``fixing`` seen from ``(reference_date, y)``.

        Without index curves the floating leg telescopes to the difference
        of the start and end zero bonds.
        """
        if swap_index is None:
            raise ValueError("no swap index given")
        if self._is_historic(fixing):
            return swap_index.fixing(fixing)

        ytsf = swap_index.forwarding_curve
        ytsd = swap_index.discounting_curve
        swap = self.underlying_swap(swap_index, fixing, tenor)
        schedule = swap.fixed_schedule
        if isinstance(swap_index, OvernightIndexedSwapIndex):
            float_schedule = schedule
        else:
            float_schedule = swap.floating_schedule
        payment_convention = swap.payment_convention

        annuity = self.swap_annuity(fixing, tenor, reference_date, y, swap_index)

        if ytsf is None and ytsd is None:
            float_leg = self.zerobond(schedule[0], reference_date, y) - self.zerobond(
                schedule.calendar.adjust(schedule[-1], payment_convention), reference_date, y
            )
        else:
            float_leg = 0.0
            for i in range(1, len(float_schedule)):
                forward_factor = self.zerobond(
                    float_schedule[i - 1], reference_date, y, ytsf
                ) / self.zerobond(float_schedule[i], reference_date, y, ytsf)
                pay_date = float_schedule.calendar.adjust(float_schedule[i], payment_convention)
                float_leg += (forward_factor - 1.0) * self.zerobond(
                    pay_date, reference_date, y, ytsd
                )
        return float_leg / annuity

    def swap_annuity(
        self,
        fixing: date,
        tenor: Union[Tenor, str],
        reference_date: Optional[date] = None,
        y: float = 0.0,
        swap_index: Optional[SwapIndex] = None,
    ) -> float:
        """Fixed leg annuity of the underlying swap seen from ``(reference_date, y)``."""
        if swap_index is None:
            raise ValueError("no swap index given")
        ytsd = swap_index.discounting_curve
        swap = self.underlying_swap(swap_index, fixing, tenor)
        schedule = swap.fixed_schedule
        annuity = 0.0
        for j in range(1, len(schedule)):
            pay_date = schedule.calendar.adjust(schedule[j], swap.payment_convention)
            annuity += self.zerobond(
                pay_date, reference_date, y, ytsd
            ) * swap_index.day_count.year_fraction(schedule[j - 1], schedule[j])
        return annuity

    # state grid and zero bond options

    def y_grid(
        self,
        std_devs: float,
        grid_points: int,
        T: float = 1.0,
        t: float = 0.0,
        y: float = 0.0,
    ) -> np.ndarray:
        """
        ``2 * grid_points + 1`` standardized states at ``T`` spanning
        ``std_devs`` conditional standard deviations around the expectation
        given ``y`` at ``t``.
        """
        process = self.state_process
        std_0_T = process.std_deviation(0.0, 0.0, T)
        e_0_T = process.expectation(0.0, 0.0, T)
        if t < QL_EPSILON:
            std_t_T = std_0_T
            e_t_T = e_0_T
        else:
            std_0_t = process.std_deviation(0.0, 0.0, t)
            std_t_T = process.std_deviation(t, 0.0, T - t)
            e_0_t = process.expectation(0.0, 0.0, t)
            x_t = y * std_0_t + e_0_t
            e_t_T = process.expectation(t, x_t, T - t)

        h = std_devs / grid_points
        j = np.arange(-grid_points, grid_points + 1, dtype=float)
        return (e_t_T + std_t_T * j * h - e_0_T) / std_0_T

    def zerobond_option(
        self,
        option_type: OptionType,
        expiry: date,
        value_date: date,
        maturity: date,
        strike: float,
        reference_date: Optional[date] = None,
        y: float = 0.0,
        yts: Optional[YieldCurve] = None,
        y_std_devs: float = 7.0,
        y_grid_points: int = 64,
        extrapolate_payoff: bool = True,
        flat_payoff_extrapolation: bool = False,
    ) -> float:
        """
        Option expiring at ``expiry`` on the zero bond from ``value_date`` to
        ``maturity``, valued at ``(reference_date, y)``.

        The deflated payoff is sampled on a state grid, interpolated by a
        monotone cubic spline and integrated segment by segment against the
        normal density in closed form.
        """
        fixing_time = self._time(expiry)
        reference_time = self._time(reference_date)

        yg = self.y_grid(y_std_devs, y_grid_points, fixing_time, reference_time, y)
        z = self.y_grid(y_std_devs, y_grid_points)
        w = 1.0 if option_type is OptionType.CALL else -1.0

        p = np.empty(len(yg))
        for i, yi in enumerate(yg):
            exp_val_dsc = self.zerobond(value_date, expiry, yi, yts)
            discount = self.zerobond(maturity, expiry, yi, yts) / exp_val_dsc
            p[i] = (
                max(w * (discount - strike), 0.0)
                / self.numeraire(fixing_time, yi, yts)
                * exp_val_dsc
            )

        # rows of c: cubic, quadratic, linear and constant coefficients in (x - z[i])
        c = MonotoneCubicInterpolator(z, p).coefficients
        n = len(z)
        price = 0.0
        for i in range(n - 1):
            price += gaussian_shifted_polynomial_integral(
                0.0, c[0, i], c[1, i], c[2, i], p[i], z[i], z[i], z[i + 1]
            )

        if extrapolate_payoff:
            if flat_payoff_extrapolation:
                price += gaussian_shifted_polynomial_integral(
                    0.0, 0.0, 0.0, 0.0, p[n - 2], z[n - 2], z[n - 1], _PAYOFF_BOUND
                )
                price += gaussian_shifted_polynomial_integral(
                    0.0, 0.0, 0.0, 0.0, p[0], z[0], -_PAYOFF_BOUND, z[0]
                )
            elif option_type is OptionType.CALL:
                price += gaussian_shifted_polynomial_integral(
                    0.0, c[0, n - 2], c[1, n - 2], c[2, n - 2], p[n - 2], z[n - 2],
                    z[n - 1], _PAYOFF_BOUND,
                )
            else:
                price += gaussian_shifted_polynomial_integral(
                    0.0, c[0, 0], c[1, 0], c[2, 0], p[0], z[0], -_PAYOFF_BOUND, z[0]
                )

        return self.numeraire(reference_time, y, yts) * price
