"""Parse-and-clamp helpers for raw settings input.

Form-style input arrives as strings. Empty or non-numeric page counts become
zero rather than errors; dates and plan modes must parse.
"""

from datetime import date
from typing import Union

from ..schedule.schemas import PlanMode, TOTAL_PAGES

RawValue = Union[str, int, None]

PLAN_MODE_ALIASES = {
    "days": PlanMode.DAYS,
    "count": PlanMode.DAYS,
    "by-count": PlanMode.DAYS,
    "end-date": PlanMode.END_DATE,
    "end_date": PlanMode.END_DATE,
    "date": PlanMode.END_DATE,
    "by-end-date": PlanMode.END_DATE,
    "pace": PlanMode.PACE,
    "by-pace": PlanMode.PACE,
}


def _to_int(raw: RawValue, fallback: int) -> int:
    if raw is None:
        return fallback
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, int):
        return raw
    text = raw.strip()
    if not text:
        return fallback
    try:
        return int(float(text))
    except (OverflowError, ValueError):
        return fallback


def parse_page_count(raw: RawValue) -> int:
    """Parse a page count, clamped to [0, TOTAL_PAGES]. Blank or junk is 0."""
    return max(0, min(TOTAL_PAGES, _to_int(raw, 0)))


def parse_target_days(raw: RawValue) -> int:
    """Parse a day count with a floor of 1. Blank or junk is 1."""
    return max(1, _to_int(raw, 1))


def parse_date(raw: Union[str, date]) -> date:
    """Parse an ISO date (YYYY-MM-DD).

    Raises:
        ValueError: If the value is not a valid ISO date
    """
    if isinstance(raw, date):
        return raw
    try:
        return date.fromisoformat(raw.strip())
    except (AttributeError, ValueError) as e:
        raise ValueError(f"Invalid date: {raw!r}. Use YYYY-MM-DD") from e


def parse_plan_mode(raw: Union[str, PlanMode]) -> PlanMode:
    """Parse a plan mode from its value or a friendly alias.

    Raises:
        ValueError: If the mode is not recognised
    """
    if isinstance(raw, PlanMode):
        return raw
    text = raw.strip()
    try:
        return PlanMode(text.upper())
    except ValueError:
        pass
    mode = PLAN_MODE_ALIASES.get(text.lower())
    if mode is None:
        options = ", ".join(m.value.lower() for m in PlanMode)
        raise ValueError(f"Invalid plan mode: {raw!r}. Options: {options}")
    return mode
