"""TaskRecord data model for taskstreaks."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class RecordStatus(str, Enum):
    """Status values that drive streak state.

    Any other status string is treated as in progress: it counts toward the
    total but neither advances nor resets a streak.
    """
    DONE = "Done"
    ARCHIVED = "Archived"


class TaskRecord(BaseModel):
    """One row of an uploaded task table."""

    status: str = Field(..., description="Raw status value (e.g. 'Done', 'Archived', 'In progress')")
    task_name: str = Field("", description="Task name; prefix before ':' is the fallback entity key")
    assignee: str = Field("", description="Assignee column value (informational only)")
    due: str = Field("", description="Raw due date string in source locale format")
    entity_key: str = Field(..., description="Grouping identity used for streaks")
    user_name: Optional[str] = Field(None, description="Raw user_name cell (null if the column is absent)")

    class Config:
        """Pydantic configuration."""
        frozen = True
