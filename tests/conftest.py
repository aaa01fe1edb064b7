"""Pytest configuration and shared fixtures.

This module provides fixtures for testing the planner, including
in-memory databases, managers and settings factories.
"""

import os
import tempfile
from datetime import date
from pathlib import Path
from typing import Generator

import pytest

from tartil.config import reset_config
from tartil.db.sqlite import Database, reset_db
from tartil.schedule import PlanMode, PlannerSettings
from tartil.settings import PlannerManager


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture(scope="function")
def temp_db_path() -> Generator[Path, None, None]:
    """Create a temporary database file path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)
    yield db_path
    # Cleanup
    if db_path.exists():
        db_path.unlink()


@pytest.fixture
def db() -> Database:
    """Create an in-memory database for testing."""
    database = Database(":memory:")
    database.create_tables()
    return database


@pytest.fixture
def manager(db: Database) -> PlannerManager:
    """Create a PlannerManager with test database."""
    return PlannerManager(db)


@pytest.fixture
def env_db(temp_db_path: Path) -> Generator[Path, None, None]:
    """Point the global config and database at a temporary file."""
    reset_db()
    reset_config()
    os.environ["TARTIL_DB_PATH"] = str(temp_db_path)

    yield temp_db_path

    reset_db()
    reset_config()
    if "TARTIL_DB_PATH" in os.environ:
        del os.environ["TARTIL_DB_PATH"]


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def start() -> date:
    """A fixed plan start date."""
    return date(2026, 1, 1)


@pytest.fixture
def make_settings(start: date):
    """Factory for plan settings with a fixed start date."""

    def _make(**overrides) -> PlannerSettings:
        data = {
            "start_date": start,
            "plan_mode": PlanMode.DAYS,
            "target_days": 30,
            "target_end_date": date(2026, 1, 31),
            "pages_already_read": 0,
            "daily_goal": 20,
        }
        data.update(overrides)
        return PlannerSettings(**data)

    return _make
