"""Ranking of entity statistics for display.

Sorts entities by the selected streak field, highest first. Ties keep the
analyzer's order, so the result is deterministic for a given input.
"""

from typing import List
from taskstreaks.models.entity_stats import EntityStats, SortKey
from taskstreaks.models.constants import DEFAULT_SORT_KEY


def rank_stats(stats: List[EntityStats], sort_by: SortKey = DEFAULT_SORT_KEY) -> List[EntityStats]:
    """Rank entities by current or longest streak.

    Args:
        stats: Entity statistics as returned by analyze()
        sort_by: Streak field to rank by

    Returns:
        New list sorted descending by the selected field
    """
    field = SortKey(sort_by).value
    return sorted(stats, key=lambda s: getattr(s, field), reverse=True)
