"""
Schedule generation: adjusted date sequences and accrual periods.
"""

from .core import Schedule, SchedulePeriod
from .generator import business_day_schedule, make_schedule

__all__ = ["Schedule", "SchedulePeriod", "make_schedule", "business_day_schedule"]
