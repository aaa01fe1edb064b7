"""Schemas for derived progress metrics."""

from datetime import date
from typing import Optional

from pydantic import BaseModel


class ProgressSnapshot(BaseModel):
    """Aggregate progress derived from a generated schedule."""

    total_pages_read: int
    remaining_pages: int
    percentage: int
    days_completed: int
    days_scheduled: int
    planned_finish_date: Optional[date] = None
    expected_finish_date: Optional[date] = None
    days_to_finish_expected: Optional[int] = None

    @property
    def is_complete(self) -> bool:
        """Whether the whole document has been read (khatm reached)."""
        return self.remaining_pages <= 0
