"""Data models for taskstreaks."""

from taskstreaks.models.task_record import TaskRecord, RecordStatus
from taskstreaks.models.entity_stats import EntityStats, DateWindow, SortKey

__all__ = [
    "TaskRecord",
    "RecordStatus",
    "EntityStats",
    "DateWindow",
    "SortKey",
]
