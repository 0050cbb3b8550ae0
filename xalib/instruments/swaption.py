"""
Swaption on a vanilla swap.
"""

from dataclasses import dataclass
from datetime import date
from typing import List

from xalib.config import settings
from xalib.conventions.types import SettlementType

from .base import Instrument
from .option import Exercise
from .swap import SwapArguments, VanillaSwap


@dataclass
class SwaptionArguments:
    swap: SwapArguments
    exercise: Exercise
    exercise_dates: List[date]
    settlement_type: SettlementType


class Swaption(Instrument):
    """Option to enter ``swap`` on one of the exercise dates."""

    def __init__(
        self,
        swap: VanillaSwap,
        exercise: Exercise,
        settlement_type: SettlementType = SettlementType.PHYSICAL,
    ):
        super().__init__()
        self.swap = swap
        self.exercise = exercise
        self.settlement_type = settlement_type
        self.register_with(swap)

    @property
    def type(self):
        return self.swap.type

    def is_expired(self) -> bool:
        return self.exercise.last_date() < settings.evaluation_date

    def arguments(self) -> SwaptionArguments:
        return SwaptionArguments(
            swap=self.swap.arguments(),
            exercise=self.exercise,
            exercise_dates=list(self.exercise.dates),
            settlement_type=self.settlement_type,
        )
