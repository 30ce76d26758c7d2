"""Constants for taskstreaks.

Column names expected in uploaded task tables and default values.
"""

from taskstreaks.models.entity_stats import SortKey


# Required header names (matched case-sensitively)
COLUMN_STATUS = "Status"
COLUMN_TASK_NAME = "Task name"
COLUMN_ASSIGNEE = "Assignee"
COLUMN_DUE = "Due"
REQUIRED_COLUMNS = (COLUMN_STATUS, COLUMN_TASK_NAME, COLUMN_ASSIGNEE, COLUMN_DUE)

# Optional header name (matched case-insensitively)
COLUMN_USER_NAME = "user_name"

# Task names look like "<entity>: <description>"
ENTITY_SEPARATOR = ":"

DEFAULT_SORT_KEY = SortKey.LONGEST_STREAK
