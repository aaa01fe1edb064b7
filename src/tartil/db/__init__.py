"""Database module for local SQLite storage."""

from .models import Base, PlannerRecord
from .sqlite import Database, get_db, reset_db

__all__ = [
    "Base",
    "PlannerRecord",
    "Database",
    "get_db",
    "reset_db",
]
