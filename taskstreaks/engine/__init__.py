"""Streak engine for taskstreaks."""

from taskstreaks.engine.date_parser import parse_due_date
from taskstreaks.engine.streaks import analyze, filter_by_window, sort_by_due
from taskstreaks.engine.ranking import rank_stats

__all__ = [
    "parse_due_date",
    "analyze",
    "filter_by_window",
    "sort_by_due",
    "rank_stats",
]
