"""Streak analysis for taskstreaks.

Records are processed in due-date order. Each entity carries a small state
machine driven by status:

- Done: advance the current streak (and the longest streak if exceeded)
- Archived: hard reset of the current streak and its date span
- anything else: hold

The analysis is a pure function of (records, window). Nothing is cached
between calls.
"""

import logging
from datetime import date
from typing import Dict, List, Optional, Tuple
from taskstreaks.models.task_record import TaskRecord, RecordStatus
from taskstreaks.models.entity_stats import EntityStats, DateWindow
from taskstreaks.engine.date_parser import parse_due_date

logger = logging.getLogger(__name__)


def analyze(records: List[TaskRecord], window: Optional[DateWindow] = None) -> List[EntityStats]:
    """Compute per-entity streak statistics.

    Args:
        records: Task records in upload order
        window: Optional inclusive due-date range applied before streaks are computed

    Returns:
        One EntityStats per entity, in the order entities are first seen
        after sorting by due date. Empty if no record survives the window.
    """
    dated = _dated_in_order(records, window)

    stats_by_entity: Dict[str, EntityStats] = {}
    for due, record in dated:
        stats = stats_by_entity.get(record.entity_key)
        if stats is None:
            stats = EntityStats(entity_key=record.entity_key)
            stats_by_entity[record.entity_key] = stats
        _apply_record(stats, record, due)

    logger.debug(f"Analyzed {len(dated)} of {len(records)} records into {len(stats_by_entity)} entities")
    return list(stats_by_entity.values())


def filter_by_window(records: List[TaskRecord], window: DateWindow) -> List[TaskRecord]:
    """Keep the records whose parsed due date falls inside the window."""
    return [record for _, record in _dated_records(records, window)]


def sort_by_due(records: List[TaskRecord]) -> List[TaskRecord]:
    """Stable ascending sort by parsed due date."""
    return [record for _, record in _dated_in_order(records)]


def _dated_records(
    records: List[TaskRecord], window: Optional[DateWindow] = None
) -> List[Tuple[date, TaskRecord]]:
    """Pair each record with its parsed due date, dropping those outside the window."""
    # Parse once per record; the parser may log, so avoid re-parsing inside sort keys
    dated = [(parse_due_date(record.due), record) for record in records]
    if window is None:
        return dated
    return [(due, record) for due, record in dated if window.contains(due)]


def _dated_in_order(
    records: List[TaskRecord], window: Optional[DateWindow] = None
) -> List[Tuple[date, TaskRecord]]:
    # sorted() is stable: records sharing a due date keep their upload order
    return sorted(_dated_records(records, window), key=lambda item: item[0])


def _apply_record(stats: EntityStats, record: TaskRecord, due: date) -> None:
    """Advance one entity's streak state by a single record."""
    stats.total_tasks += 1

    if record.status == RecordStatus.DONE:
        stats.completed_tasks += 1
        stats.current_streak += 1
        if stats.current_streak > stats.longest_streak:
            stats.longest_streak = stats.current_streak
        if stats.current_streak_start is None:
            stats.current_streak_start = due
        stats.current_streak_end = due
    elif record.status == RecordStatus.ARCHIVED:
        stats.current_streak = 0
        stats.current_streak_start = None
        stats.current_streak_end = None
