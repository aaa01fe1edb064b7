"""Schemas for persisted planner state."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..schedule.schemas import PlannerSettings

# Identifier the state blob is stored under
STORAGE_KEY = "al_tartil_planner_v1"


class ThemeMode(str, Enum):
    """Display theme mode."""

    LIGHT = "light"
    DARK = "dark"


class PlannerState(BaseModel):
    """Everything the planner persists: settings, completed days and theme."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    settings: PlannerSettings = Field(default_factory=PlannerSettings)
    progress: dict[int, bool] = Field(default_factory=dict)
    theme: ThemeMode = ThemeMode.DARK

    def completed_days(self) -> list[int]:
        """Day numbers currently marked complete, ascending."""
        return sorted(day for day, done in self.progress.items() if done)
