"""SQLAlchemy ORM models for local SQLite database.

Tables:
- planner_state: Persisted planner blobs keyed by a fixed storage identifier
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class PlannerRecord(Base):
    """Opaque planner state (settings, progress, theme) stored as JSON."""

    __tablename__ = "planner_state"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    state_json: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )
