"""Pydantic schemas for reading plan settings and generated schedule days."""

from datetime import date, timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Pages in the mushaf being read
TOTAL_PAGES = 604

DEFAULT_TARGET_DAYS = 30
DEFAULT_DAILY_GOAL = 20  # roughly one juz per day


class PlanMode(str, Enum):
    """Pacing strategy used to allocate pages to days."""

    DAYS = "DAYS"  # fixed number of days
    END_DATE = "END_DATE"  # finish by a date
    PACE = "PACE"  # fixed pages per day


def _default_end_date() -> date:
    return date.today() + timedelta(days=DEFAULT_TARGET_DAYS)


class PlannerSettings(BaseModel):
    """User-editable plan settings.

    Values are stored as given; the scheduler clamps anything out of range.
    Serialized field names use camelCase so blobs match the web planner format.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    start_date: date = Field(default_factory=date.today)
    plan_mode: PlanMode = PlanMode.DAYS
    target_days: int = DEFAULT_TARGET_DAYS
    target_end_date: date = Field(default_factory=_default_end_date)
    pages_already_read: int = 0
    daily_goal: int = DEFAULT_DAILY_GOAL


class DayEntry(BaseModel):
    """One scheduled day: an inclusive page range and its completion flag."""

    model_config = ConfigDict(frozen=True)

    day_number: int
    date: date
    start_page: int
    end_page: int
    pages_to_read: int
    is_completed: bool = False

    @property
    def date_label(self) -> str:
        """Short display date, e.g. 'Mon, Oct 19'."""
        return f"{self.date:%a}, {self.date:%b} {self.date.day}"

    @property
    def page_range(self) -> str:
        """Human-readable page range."""
        return f"{self.start_page}-{self.end_page}"
