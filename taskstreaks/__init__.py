"""taskstreaks: per-assignee completion streaks from task export tables."""

__version__ = "0.1.0"
