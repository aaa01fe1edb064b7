"""Schedule generation.

Turns plan settings plus a completion map into an ordered list of day entries
that covers every remaining page exactly once. Pure functions only: nothing
here reads or writes persisted state.
"""

import math
from datetime import timedelta
from typing import Mapping, Optional

from .schemas import DayEntry, PlanMode, PlannerSettings, TOTAL_PAGES


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def even_split(remaining: int, duration: int) -> list[int]:
    """Split remaining pages across duration days, front-loading the remainder.

    Every day gets floor(remaining / duration) pages and the first
    remaining % duration days get one extra, so adjacent days never differ
    by more than one page and the total is exact.

    Example:
        >>> even_split(10, 3)
        [4, 3, 3]
    """
    duration = max(1, duration)
    base, extra = divmod(remaining, duration)
    return [base + 1 if day <= extra else base for day in range(1, duration + 1)]


def pace_split(remaining: int, goal: int) -> list[int]:
    """Allocate a fixed number of pages per day; the last day takes the rest.

    Example:
        >>> pace_split(45, 20)
        [20, 20, 5]
    """
    goal = max(1, goal)
    duration = math.ceil(remaining / goal)
    if duration <= 0:
        return []
    return [goal] * (duration - 1) + [remaining - goal * (duration - 1)]


def plan_duration(settings: PlannerSettings, remaining: int) -> int:
    """Number of days the plan spans for the active mode."""
    if settings.plan_mode == PlanMode.END_DATE:
        # Calendar-day difference; an end date on or before the start is one catch-up day
        return max(1, (settings.target_end_date - settings.start_date).days)
    if settings.plan_mode == PlanMode.PACE:
        return math.ceil(remaining / _effective_goal(settings))
    return max(1, settings.target_days)


def _effective_goal(settings: PlannerSettings) -> int:
    return _clamp(settings.daily_goal, 0, TOTAL_PAGES) or 1


def allocate_pages(settings: PlannerSettings, remaining: int) -> list[int]:
    """Per-day page counts for the active plan mode."""
    if settings.plan_mode == PlanMode.PACE:
        return pace_split(remaining, _effective_goal(settings))
    # Days past the last page get nothing, so the split never needs more than one day per page
    return even_split(remaining, min(plan_duration(settings, remaining), remaining))


def calculate_schedule(
    settings: PlannerSettings,
    completion: Optional[Mapping[int, bool]] = None,
) -> list[DayEntry]:
    """Generate the day-by-day reading schedule.

    Args:
        settings: Plan settings
        completion: Day number -> completed flag. Missing days count as not
            completed; days beyond the schedule are ignored.

    Returns:
        Ordered day entries whose page ranges cover
        (pages_already_read, TOTAL_PAGES] with no gaps or overlaps. Empty when
        everything has already been read.
    """
    completion = completion or {}
    already_read = _clamp(settings.pages_already_read, 0, TOTAL_PAGES)
    remaining = TOTAL_PAGES - already_read
    if remaining <= 0:
        return []

    schedule: list[DayEntry] = []
    current_page = already_read + 1

    for day_number, pages_for_today in enumerate(allocate_pages(settings, remaining), start=1):
        if current_page > TOTAL_PAGES:
            break

        try:
            day_date = settings.start_date + timedelta(days=day_number - 1)
        except OverflowError:
            # No calendar days left after date.max
            break

        end_page = min(current_page + pages_for_today - 1, TOTAL_PAGES)
        schedule.append(
            DayEntry(
                day_number=day_number,
                date=day_date,
                start_page=current_page,
                end_page=end_page,
                pages_to_read=max(0, end_page - current_page + 1),
                is_completed=bool(completion.get(day_number, False)),
            )
        )
        current_page += pages_for_today

    return schedule
