"""
Exercise schedules, payoffs and vanilla options.
"""

from dataclasses import dataclass
from datetime import date
from typing import List, Sequence

from xalib.config import settings
from xalib.conventions.types import ExerciseType, OptionType

from .base import Instrument


class Exercise:
    """Dates on which an option may be exercised."""

    def __init__(self, type: ExerciseType, dates: Sequence[date]):
        if not dates:
            raise ValueError("no exercise date given")
        self.type = type
        self.dates: List[date] = sorted(dates)

    def last_date(self) -> date:
        return self.dates[-1]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.dates})"


class EuropeanExercise(Exercise):
    def __init__(self, exercise_date: date):
        super().__init__(ExerciseType.EUROPEAN, [exercise_date])


class BermudanExercise(Exercise):
    def __init__(self, dates: Sequence[date]):
        super().__init__(ExerciseType.BERMUDAN, dates)


@dataclass(frozen=True)
class PlainVanillaPayoff:
    option_type: OptionType
    strike: float

    def __call__(self, price: float) -> float:
        if self.option_type is OptionType.CALL:
            return max(price - self.strike, 0.0)
        return max(self.strike - price, 0.0)


@dataclass
class OptionArguments:
    payoff: PlainVanillaPayoff
    exercise: Exercise


class VanillaOption(Instrument):
    """Option on an FX rate or equity, priced by the attached engine."""

    def __init__(self, payoff: PlainVanillaPayoff, exercise: Exercise):
        super().__init__()
        self.payoff = payoff
        self.exercise = exercise

    def is_expired(self) -> bool:
        return self.exercise.last_date() < settings.evaluation_date

    def arguments(self) -> OptionArguments:
        return OptionArguments(self.payoff, self.exercise)
