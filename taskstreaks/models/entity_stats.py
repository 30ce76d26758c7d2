"""Streak statistics models for taskstreaks."""

from datetime import date
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class SortKey(str, Enum):
    """Streak fields the dashboard can rank entities by."""
    CURRENT_STREAK = "current_streak"
    LONGEST_STREAK = "longest_streak"


class DateWindow(BaseModel):
    """Inclusive due-date range. Either side may be left open."""

    start_date: Optional[date] = Field(None, description="First due date to include (open if null)")
    end_date: Optional[date] = Field(None, description="Last due date to include (open if null)")

    @property
    def lower(self) -> date:
        return self.start_date or date.min

    @property
    def upper(self) -> date:
        return self.end_date or date.max

    def contains(self, day: date) -> bool:
        """Return True if day lies within the window, bounds included."""
        return self.lower <= day <= self.upper


class EntityStats(BaseModel):
    """Streak and completion aggregate for one entity."""

    entity_key: str = Field(..., description="Grouping identity")
    current_streak: int = Field(0, ge=0, description="Trailing run of Done records since the last reset")
    longest_streak: int = Field(0, ge=0, description="Largest current_streak seen during the pass")
    total_tasks: int = Field(0, ge=0, description="Records counted for this entity")
    completed_tasks: int = Field(0, ge=0, description="Records with status Done")
    current_streak_start: Optional[date] = Field(None, description="Due date of the first record in the current streak")
    current_streak_end: Optional[date] = Field(None, description="Due date of the latest record in the current streak")

    @property
    def completion_ratio(self) -> float:
        if self.total_tasks == 0:
            return 0.0
        return self.completed_tasks / self.total_tasks

    @property
    def remaining_tasks(self) -> int:
        return self.total_tasks - self.completed_tasks
