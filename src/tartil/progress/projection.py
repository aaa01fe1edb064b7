"""Progress projection.

Derives pages read, percentage and finish-date projections from a
generated schedule.
"""

import math
from datetime import date, timedelta
from typing import Optional, Sequence

from ..schedule.schemas import DayEntry, PlannerSettings, TOTAL_PAGES
from .schemas import ProgressSnapshot


def format_date_long(value: date) -> str:
    """Long display date, e.g. 'Mon, Oct 19, 2026'."""
    return f"{value:%a}, {value:%b} {value.day}, {value.year}"


def calculate_percentage(pages_read: int, total: int = TOTAL_PAGES) -> int:
    """Whole-number percentage, rounded half up and clamped to 0-100."""
    if total <= 0:
        return 0
    ratio = pages_read / total
    if math.isnan(ratio):
        return 0
    return max(0, min(100, math.floor(ratio * 100 + 0.5)))


def calculate_progress(
    settings: PlannerSettings,
    schedule: Sequence[DayEntry],
    today: Optional[date] = None,
) -> ProgressSnapshot:
    """Summarize progress for a schedule.

    The expected finish date is a what-if based on the daily goal and today's
    date, independent of the active plan mode. The planned finish date is
    simply the last scheduled day.

    Args:
        settings: Plan settings the schedule was generated from
        schedule: Output of calculate_schedule
        today: Reference date for the expected finish (default: today)

    Returns:
        Progress snapshot
    """
    today = today or date.today()

    already_read = max(0, min(TOTAL_PAGES, settings.pages_already_read))
    completed = [day for day in schedule if day.is_completed]
    pages_in_schedule = sum(day.pages_to_read for day in completed)
    total_read = min(TOTAL_PAGES, already_read + pages_in_schedule)
    remaining = TOTAL_PAGES - total_read

    expected_finish = None
    days_expected = None
    if remaining > 0 and settings.daily_goal > 0:
        days_expected = math.ceil(remaining / settings.daily_goal)
        expected_finish = today + timedelta(days=days_expected)

    return ProgressSnapshot(
        total_pages_read=total_read,
        remaining_pages=remaining,
        percentage=calculate_percentage(total_read),
        days_completed=len(completed),
        days_scheduled=len(schedule),
        planned_finish_date=schedule[-1].date if schedule else None,
        expected_finish_date=expected_finish,
        days_to_finish_expected=days_expected,
    )
