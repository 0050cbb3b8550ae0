"""
Cashflows whose amount is converted through an FX fixing.

Used for resettable cross currency swaps, where the notional of one leg is
reset to the other leg's notional at each period's FX fixing.
"""

from datetime import date
from typing import Optional

from xalib.conventions.daycount import DayCountConvention
from xalib.market.fx_index import FxIndex
from xalib.market.indexes import InterestRateIndex

from .base import CashFlow, FloatingRateCoupon


class FXLinkedCashFlow(CashFlow):
    """
    Pays ``foreign_amount`` converted at the FX fixing of ``fx_fixing_date``.

    With ``invert_index`` the amount is divided by the fixing instead.
    """

    def __init__(
        self,
        payment_date: date,
        fx_fixing_date: date,
        foreign_amount: float,
        fx_index: FxIndex,
        invert_index: bool = False,
    ):
        super().__init__(payment_date)
        self.fx_fixing_date = fx_fixing_date
        self.foreign_amount = foreign_amount
        self.fx_index = fx_index
        self.invert_index = invert_index
        self.register_with(fx_index)

    def fx_rate(self) -> float:
        fixing = self.fx_index.fixing(self.fx_fixing_date)
        return 1.0 / fixing if self.invert_index else fixing

    def amount(self) -> float:
        return self.foreign_amount * self.fx_rate()


class FloatingRateFXLinkedNotionalCoupon(FloatingRateCoupon):
    """
    Floating coupon on a notional given by an :class:`FXLinkedCashFlow`.

    ``nominal`` is 0 since the notional varies with the FX fixing; the
    effective notional is ``fx_linked_cashflow.amount()``.
    """

    kind = "ibor"

    def __init__(
        self,
        foreign_amount: float,
        fx_fixing_date: date,
        fx_index: FxIndex,
        invert_fx_index: bool,
        payment_date: date,
        accrual_start_date: date,
        accrual_end_date: date,
        fixing_days: int,
        index: InterestRateIndex,
        gearing: float = 1.0,
        spread: float = 0.0,
        day_count: Optional[DayCountConvention] = None,
    ):
        super().__init__(
            payment_date,
            0.0,
            accrual_start_date,
            accrual_end_date,
            fixing_days,
            index,
            gearing,
            spread,
            day_count,
        )
        self.fx_linked_cashflow = FXLinkedCashFlow(
            payment_date, fx_fixing_date, foreign_amount, fx_index, invert_fx_index
        )
        self.register_with(self.fx_linked_cashflow)

    def amount(self) -> float:
        return self.rate() * self.accrual_period * self.fx_linked_cashflow.amount()
