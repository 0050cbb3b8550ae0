"""
Multi-currency swaps: a set of legs, each paid or received in its own
currency.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence

from xalib.cashflows import analysis
from xalib.cashflows.base import Leg, SimpleCashFlow, as_list
from xalib.cashflows.fixed import FixedRateLeg
from xalib.cashflows.ibor import IborLeg
from xalib.conventions.daycount import DayCountConvention
from xalib.conventions.types import BusinessDayAdjustment
from xalib.market.indexes import IborIndex
from xalib.schedule.core import Schedule

from .base import Instrument, Results


@dataclass
class CurrencySwapArguments:
    legs: List[Leg]
    payer: List[float]
    currencies: List[str]

    def validate(self) -> None:
        if len(self.legs) != len(self.payer):
            raise ValueError("number of legs and multipliers differ")
        if len(self.currencies) != len(self.legs):
            raise ValueError("number of legs and currencies differ")


@dataclass
class CurrencySwapResults(Results):
    leg_npv: List[float] = field(default_factory=list)
    leg_bps: List[float] = field(default_factory=list)
    in_ccy_leg_npv: List[float] = field(default_factory=list)
    in_ccy_leg_bps: List[float] = field(default_factory=list)
    start_discounts: List[Optional[float]] = field(default_factory=list)
    end_discounts: List[Optional[float]] = field(default_factory=list)
    npv_date_discount: Optional[float] = None


@dataclass
class CrossCcySwapResults(CurrencySwapResults):
    npv_date_discounts: List[float] = field(default_factory=list)


class CurrencySwap(Instrument):
    """
    Legs in several currencies.

    ``payer[j]`` set means leg ``j`` is paid; its values enter with a
    negative sign.
    """

    def __init__(self, legs: Sequence[Leg], payer: Sequence[bool], currencies: Sequence[str]):
        super().__init__()
        if len(payer) != len(legs):
            raise ValueError(
                f"size mismatch between payer ({len(payer)}) and legs ({len(legs)})"
            )
        if len(currencies) != len(legs):
            raise ValueError(
                f"size mismatch between currency ({len(currencies)}) and legs ({len(legs)})"
            )
        self.legs: List[Leg] = [list(leg) for leg in legs]
        self.payer: List[float] = [-1.0 if p else 1.0 for p in payer]
        self.currencies: List[str] = list(currencies)
        for leg in self.legs:
            for cashflow in leg:
                self.register_with(cashflow)

    def _check_leg(self, j: int) -> None:
        if not 0 <= j < len(self.legs):
            raise IndexError(f"leg #{j} doesn't exist!")

    def leg(self, j: int) -> Leg:
        self._check_leg(j)
        return self.legs[j]

    def leg_currency(self, j: int) -> str:
        self._check_leg(j)
        return self.currencies[j]

    def start_date(self) -> date:
        if not self.legs:
            raise ValueError("no legs given")
        return min(analysis.start_date(leg) for leg in self.legs if leg)

    def maturity_date(self) -> date:
        if not self.legs:
            raise ValueError("no legs given")
        return max(analysis.maturity_date(leg) for leg in self.legs if leg)

    def is_expired(self) -> bool:
        return all(cf.has_occurred() for leg in self.legs for cf in leg)

    def _expired_results(self) -> CurrencySwapResults:
        n = len(self.legs)
        return CurrencySwapResults(
            value=0.0,
            error_estimate=0.0,
            leg_npv=[0.0] * n,
            leg_bps=[0.0] * n,
            in_ccy_leg_npv=[0.0] * n,
            in_ccy_leg_bps=[0.0] * n,
            start_discounts=[0.0] * n,
            end_discounts=[0.0] * n,
            npv_date_discount=0.0,
        )

    def arguments(self) -> CurrencySwapArguments:
        args = CurrencySwapArguments(self.legs, list(self.payer), list(self.currencies))
        args.validate()
        return args

    def _leg_result(self, name: str, j: int) -> float:
        self._check_leg(j)
        values = getattr(self.results, name)
        if len(values) != len(self.legs):
            raise ValueError(f"wrong number of {name} returned")
        return values[j]

    def leg_npv(self, j: int) -> float:
        return self._leg_result("leg_npv", j)

    def leg_bps(self, j: int) -> float:
        return self._leg_result("leg_bps", j)

    def in_ccy_leg_npv(self, j: int) -> float:
        return self._leg_result("in_ccy_leg_npv", j)

    def in_ccy_leg_bps(self, j: int) -> float:
        return self._leg_result("in_ccy_leg_bps", j)

    def start_discounts(self, j: int) -> Optional[float]:
        return self._leg_result("start_discounts", j)

    def end_discounts(self, j: int) -> Optional[float]:
        return self._leg_result("end_discounts", j)

    def npv_date_discount(self) -> Optional[float]:
        return self.results.npv_date_discount


def _notional_exchanges(
    nominals: List[float],
    schedule: Schedule,
    convention: BusinessDayAdjustment,
    label: str,
) -> Leg:
    """Initial exchange, amortisation flows and final exchange of a leg's nominal."""
    if len(nominals) >= len(schedule):
        raise ValueError(f"too many {label} nominals provided")
    calendar = schedule.calendar
    flows: Leg = [SimpleCashFlow(-nominals[0], calendar.adjust(schedule[0], convention))]
    for i in range(1, len(nominals)):
        flows.append(
            SimpleCashFlow(nominals[i - 1] - nominals[i], calendar.adjust(schedule[i], convention))
        )
    if nominals[-1] > 0:
        flows.append(SimpleCashFlow(nominals[-1], calendar.adjust(schedule[-1], convention)))
    return flows


class CrossCurrencySwap(CurrencySwap):
    """
    Fixed leg in one currency against an Ibor leg in another, with
    (possibly amortising) notional exchanges.

    Legs are ordered fixed coupons, fixed notionals, floating coupons,
    floating notionals.
    """

    def __init__(
        self,
        pay_fixed: bool,
        fixed_currency: str,
        fixed_nominals,
        fixed_schedule: Schedule,
        fixed_rates,
        fixed_day_count: DayCountConvention,
        float_currency: str,
        float_nominals,
        float_schedule: Schedule,
        ibor_index: IborIndex,
        float_spreads=0.0,
        payment_convention: Optional[BusinessDayAdjustment] = None,
    ):
        convention = payment_convention or float_schedule.convention
        fixed_nominals = as_list(fixed_nominals)
        float_nominals = as_list(float_nominals)
        fixed_leg = (
            FixedRateLeg(fixed_schedule)
            .with_notionals(fixed_nominals)
            .with_coupon_rates(fixed_rates, fixed_day_count)
            .with_payment_adjustment(convention)
            .build()
        )
        float_leg = (
            IborLeg(float_schedule, ibor_index)
            .with_notionals(float_nominals)
            .with_payment_day_counter(ibor_index.day_count)
            .with_payment_adjustment(convention)
            .with_spreads(float_spreads)
            .build()
        )
        super().__init__(
            [
                fixed_leg,
                _notional_exchanges(fixed_nominals, fixed_schedule, convention, "fixed"),
                float_leg,
                _notional_exchanges(float_nominals, float_schedule, convention, "float"),
            ],
            [pay_fixed, pay_fixed, not pay_fixed, not pay_fixed],
            [fixed_currency, fixed_currency, float_currency, float_currency],
        )


class CrossCcySwap(CurrencySwap):
    """Currency swap valued in two currencies by a :class:`CrossCcySwapEngine`."""

    @classmethod
    def from_legs(
        cls, first_leg: Leg, first_leg_currency: str, second_leg: Leg, second_leg_currency: str
    ) -> "CrossCcySwap":
        """Pay the first leg, receive the second."""
        return cls(
            [first_leg, second_leg], [True, False], [first_leg_currency, second_leg_currency]
        )

    def _expired_results(self) -> CrossCcySwapResults:
        base = super()._expired_results()
        return CrossCcySwapResults(
            **{k: getattr(base, k) for k in base.__dataclass_fields__},
            npv_date_discounts=[0.0] * len(self.legs),
        )

    def npv_date_discounts(self, j: int) -> float:
        return self._leg_result("npv_date_discounts", j)
