"""Schedule module: plan settings and day-by-day page allocation."""

from .calculator import (
    allocate_pages,
    calculate_schedule,
    even_split,
    pace_split,
    plan_duration,
)
from .schemas import (
    DEFAULT_DAILY_GOAL,
    DEFAULT_TARGET_DAYS,
    TOTAL_PAGES,
    DayEntry,
    PlanMode,
    PlannerSettings,
)

__all__ = [
    # Constants
    "TOTAL_PAGES",
    "DEFAULT_DAILY_GOAL",
    "DEFAULT_TARGET_DAYS",
    # Schemas
    "DayEntry",
    "PlanMode",
    "PlannerSettings",
    # Calculation
    "allocate_pages",
    "calculate_schedule",
    "even_split",
    "pace_split",
    "plan_duration",
]
