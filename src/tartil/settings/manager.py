"""Manager for persisted planner state.

Owns the (settings, progress, theme) blob: loading with defaults and
backfill, parse-and-clamp updates, day toggling and resets. Schedule and
progress figures are recomputed from the loaded state on every call.
"""

import json
import logging
from datetime import date
from typing import Any, Callable, Optional

from pydantic import ValidationError

from ..db.sqlite import Database
from ..progress import ProgressSnapshot, calculate_progress
from ..schedule import DEFAULT_DAILY_GOAL, DayEntry, PlannerSettings, calculate_schedule
from .parse import (
    parse_date,
    parse_page_count,
    parse_plan_mode,
    parse_target_days,
)
from .schemas import STORAGE_KEY, PlannerState, ThemeMode

logger = logging.getLogger(__name__)


# Editable settings: field -> parser and description
SETTINGS_METADATA: dict[str, dict[str, Any]] = {
    "start_date": {
        "parser": parse_date,
        "aliases": ["start"],
        "description": "First day of the plan (YYYY-MM-DD)",
    },
    "plan_mode": {
        "parser": parse_plan_mode,
        "aliases": ["mode"],
        "description": "Pacing strategy: days, end-date or pace",
    },
    "target_days": {
        "parser": parse_target_days,
        "aliases": ["days"],
        "description": "Planned duration in days (days mode)",
    },
    "target_end_date": {
        "parser": parse_date,
        "aliases": ["end_date", "end"],
        "description": "Planned finish date (end-date mode)",
    },
    "pages_already_read": {
        "parser": parse_page_count,
        "aliases": ["pages_read", "read"],
        "description": "Pages finished before the plan starts",
    },
    "daily_goal": {
        "parser": parse_page_count,
        "aliases": ["goal", "pace"],
        "description": "Pages per day (pace mode and expected finish)",
    },
}


def resolve_field(name: str) -> str:
    """Map a field name or alias to its settings attribute.

    Raises:
        ValueError: If the name is not an editable setting
    """
    key = name.strip().lower().replace("-", "_")
    if key in SETTINGS_METADATA:
        return key
    for field, metadata in SETTINGS_METADATA.items():
        if key in metadata["aliases"]:
            return field
    raise ValueError(
        f"Unknown setting: {name}. Options: {', '.join(SETTINGS_METADATA)}"
    )


def _backfill(data: dict) -> dict:
    """Fill fields that older saved states may lack or hold as null."""
    settings = data.get("settings")
    if isinstance(settings, dict):
        settings = dict(settings)
        data = {**data, "settings": settings}
        if settings.get("pagesAlreadyRead") is None and settings.get("pages_already_read") is None:
            settings["pagesAlreadyRead"] = 0
        if settings.get("dailyGoal") is None and settings.get("daily_goal") is None:
            settings["dailyGoal"] = DEFAULT_DAILY_GOAL
    return data


class PlannerManager:
    """Manager for planner settings and day-by-day progress."""

    def __init__(self, db: Database, storage_key: str = STORAGE_KEY):
        """Initialize the planner manager.

        Args:
            db: Database instance
            storage_key: Identifier the state blob is stored under
        """
        self.db = db
        self.storage_key = storage_key

    # ========================================================================
    # Load / Save
    # ========================================================================

    def load_state(self) -> PlannerState:
        """Load persisted state, falling back to defaults.

        A missing, corrupt or invalid blob yields fresh defaults; it never
        raises for bad stored data.
        """
        blob = self.db.load_blob(self.storage_key)
        if blob is None:
            return PlannerState()

        try:
            data = json.loads(blob)
            if not isinstance(data, dict):
                raise ValueError("state blob is not an object")
            return PlannerState.model_validate(_backfill(data))
        except (ValueError, ValidationError) as e:
            logger.warning("Failed to parse saved state, using defaults: %s", e)
            return PlannerState()

    def save_state(self, state: PlannerState) -> PlannerState:
        """Persist state under the storage key."""
        self.db.save_blob(self.storage_key, state.model_dump_json(by_alias=True))
        return state

    def _mutate(self, change: Callable[[PlannerState], None]) -> PlannerState:
        state = self.load_state()
        change(state)
        return self.save_state(state)

    # ========================================================================
    # Settings
    # ========================================================================

    def get_settings(self) -> PlannerSettings:
        """Get current plan settings."""
        return self.load_state().settings

    def update_setting(self, name: str, raw_value: Any) -> PlannerSettings:
        """Parse, clamp and store a single setting.

        Args:
            name: Field name or alias (e.g. "daily_goal", "goal", "mode")
            raw_value: Raw input, typically a string

        Returns:
            Updated settings

        Raises:
            ValueError: Unknown field, or a date/mode that does not parse
        """
        field = resolve_field(name)
        value = SETTINGS_METADATA[field]["parser"](raw_value)

        def _apply(state: PlannerState) -> None:
            setattr(state.settings, field, value)

        state = self._mutate(_apply)
        logger.debug("Setting %s updated to %r", field, value)
        return state.settings

    def update_settings(self, **changes: Any) -> PlannerSettings:
        """Parse and store several settings at once."""
        parsed = {}
        for name, raw_value in changes.items():
            field = resolve_field(name)
            parsed[field] = SETTINGS_METADATA[field]["parser"](raw_value)

        def _apply(state: PlannerState) -> None:
            for field, value in parsed.items():
                setattr(state.settings, field, value)

        return self._mutate(_apply).settings

    # ========================================================================
    # Progress
    # ========================================================================

    def mark_day(self, day_number: int, completed: bool = True) -> bool:
        """Set a day's completion flag explicitly.

        Raises:
            ValueError: If day_number is not positive
        """
        if day_number < 1:
            raise ValueError(f"Day number must be positive: {day_number}")

        def _apply(state: PlannerState) -> None:
            state.progress[day_number] = completed

        self._mutate(_apply)
        return completed

    def toggle_day(self, day_number: int) -> bool:
        """Flip a day's completion flag. Returns the new flag."""
        current = self.load_state().progress.get(day_number, False)
        return self.mark_day(day_number, not current)

    def reset_progress(self) -> PlannerState:
        """Clear all completed days. Settings are left untouched."""

        def _apply(state: PlannerState) -> None:
            state.progress = {}

        logger.info("Progress reset")
        return self._mutate(_apply)

    def start_new_khatm(self) -> PlannerState:
        """Begin a new full pass: nothing read yet and no days completed."""

        def _apply(state: PlannerState) -> None:
            state.settings.pages_already_read = 0
            state.progress = {}

        logger.info("Starting new khatm")
        return self._mutate(_apply)

    # ========================================================================
    # Theme
    # ========================================================================

    def set_theme(self, theme: ThemeMode) -> ThemeMode:
        """Set the display theme."""

        def _apply(state: PlannerState) -> None:
            state.theme = theme

        return self._mutate(_apply).theme

    def toggle_theme(self) -> ThemeMode:
        """Switch between light and dark themes."""
        current = self.load_state().theme
        return self.set_theme(ThemeMode.LIGHT if current == ThemeMode.DARK else ThemeMode.DARK)

    # ========================================================================
    # Derived views
    # ========================================================================

    def get_schedule(self) -> list[DayEntry]:
        """Generate the schedule from current state."""
        state = self.load_state()
        return calculate_schedule(state.settings, state.progress)

    def get_progress(self, today: Optional[date] = None) -> ProgressSnapshot:
        """Compute progress metrics from current state."""
        state = self.load_state()
        schedule = calculate_schedule(state.settings, state.progress)
        return calculate_progress(state.settings, schedule, today=today)

    # ========================================================================
    # Export / Import
    # ========================================================================

    def export_state(self) -> dict:
        """Export state as a JSON-ready dict in the saved blob format."""
        return self.load_state().model_dump(mode="json", by_alias=True)

    def import_state(self, data: dict) -> PlannerState:
        """Replace state with imported data.

        Raises:
            ValueError: If the data is not a valid planner state
        """
        if not isinstance(data, dict) or "settings" not in data:
            raise ValueError("Invalid planner export format")
        try:
            state = PlannerState.model_validate(_backfill(data))
        except ValidationError as e:
            raise ValueError(f"Invalid planner export: {e.error_count()} error(s)") from e
        return self.save_state(state)
