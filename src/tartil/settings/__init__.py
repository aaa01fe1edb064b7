"""Planner state, settings parsing and persistence."""

from .manager import SETTINGS_METADATA, PlannerManager, resolve_field
from .parse import parse_date, parse_page_count, parse_plan_mode, parse_target_days
from .schemas import STORAGE_KEY, PlannerState, ThemeMode

__all__ = [
    "PlannerManager",
    "PlannerState",
    "SETTINGS_METADATA",
    "STORAGE_KEY",
    "ThemeMode",
    "parse_date",
    "parse_page_count",
    "parse_plan_mode",
    "parse_target_days",
    "resolve_field",
]
