"""SQLite database operations.

Handles database connection, session management, and blob storage.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .models import Base, PlannerRecord

logger = logging.getLogger(__name__)


class Database:
    """Database connection and operations manager."""

    def __init__(self, db_path: Optional[str] = None):
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file. If None, uses
                     the configured TARTIL_DB_PATH location.
        """
        if db_path is None:
            from ..config import get_config

            db_path = str(get_config().db_path)

        self.db_path = Path(db_path)
        self._is_memory = str(db_path) == ":memory:"

        if not self._is_memory:
            self._ensure_directory()

        # In-memory databases share one connection so every session sees the same data
        if self._is_memory:
            self.engine = create_engine(
                "sqlite:///:memory:",
                echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            self.engine = create_engine(
                f"sqlite:///{self.db_path}",
                echo=False,
                connect_args={"check_same_thread": False},
            )
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

    def _ensure_directory(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def create_tables(self) -> None:
        """Create all database tables."""
        Base.metadata.create_all(self.engine)

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a database session context manager."""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    # ========================================================================
    # Blob Operations
    # ========================================================================

    def load_blob(self, key: str) -> Optional[str]:
        """Return the JSON blob stored under key, or None if absent."""
        with self.get_session() as session:
            record = session.get(PlannerRecord, key)
            return record.state_json if record else None

    def save_blob(self, key: str, state_json: str) -> None:
        """Insert or replace the JSON blob stored under key."""
        with self.get_session() as session:
            record = session.get(PlannerRecord, key)
            if record:
                record.state_json = state_json
            else:
                session.add(PlannerRecord(key=key, state_json=state_json))
        logger.debug("Saved planner blob %s (%d bytes)", key, len(state_json))

    def delete_blob(self, key: str) -> bool:
        """Delete the blob stored under key. Returns True if one existed."""
        with self.get_session() as session:
            deleted = session.query(PlannerRecord).filter(PlannerRecord.key == key).delete()
        return deleted > 0


# Global database instance
_db: Optional[Database] = None


def get_db(db_path: Optional[str] = None) -> Database:
    """Get or create the global database instance."""
    global _db
    if _db is None:
        _db = Database(db_path)
        _db.create_tables()
    return _db


def reset_db() -> None:
    """Reset the global database instance. Used for testing."""
    global _db
    _db = None
