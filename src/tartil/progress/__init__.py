"""Progress metrics derived from a generated schedule."""

from .projection import calculate_percentage, calculate_progress, format_date_long
from .schemas import ProgressSnapshot

__all__ = [
    "ProgressSnapshot",
    "calculate_percentage",
    "calculate_progress",
    "format_date_long",
]
