"""CSV task table import for taskstreaks.

Turns an exported task table (first row = header) into TaskRecord objects.
Columns are located by header name; only the four required columns and the
optional user_name column are read.
"""

import csv
import io
import logging
from typing import Dict, List, Optional, Sequence

from taskstreaks.models.task_record import TaskRecord
from taskstreaks.models.constants import (
    COLUMN_STATUS,
    COLUMN_TASK_NAME,
    COLUMN_ASSIGNEE,
    COLUMN_DUE,
    COLUMN_USER_NAME,
    REQUIRED_COLUMNS,
    ENTITY_SEPARATOR,
)

logger = logging.getLogger(__name__)


class MissingColumnError(ValueError):
    """Raised when the header row lacks one or more required columns."""

    def __init__(self, missing: Sequence[str]):
        self.missing = list(missing)
        super().__init__(
            f"Missing required column(s): {', '.join(self.missing)}. "
            f"Expected headers: {', '.join(REQUIRED_COLUMNS)}"
        )


def derive_entity_key(task_name: str, user_name: Optional[str] = None) -> str:
    """Resolve the grouping identity for a row.

    A non-empty user_name wins. Otherwise the part of the task name before the
    first ':' is used, trimmed ("Design: write brief" -> "Design").
    """
    if user_name:
        return user_name
    return (task_name or "").split(ENTITY_SEPARATOR, 1)[0].strip()


def read_csv_text(text: str) -> List[List[str]]:
    """Split comma-separated text into rows of cells.

    Raises:
        ValueError: If the csv module rejects the text (e.g. an oversized cell)
    """
    reader = csv.reader(io.StringIO(text))
    try:
        return [row for row in reader]
    except csv.Error as e:
        raise ValueError(f"Malformed CSV near line {reader.line_num}: {str(e)[:100]}") from e



def ingest_csv(text: str) -> List[TaskRecord]:
    """Parse CSV text and ingest it. See ingest_rows()."""
    return ingest_rows(read_csv_text(text))


def ingest_rows(rows: List[List[str]]) -> List[TaskRecord]:
    """Build TaskRecord objects from a header row plus data rows.

    Args:
        rows: Two-dimensional grid of strings; rows[0] is the header

    Returns:
        One TaskRecord per non-blank data row, in input order

    Raises:
        MissingColumnError: If any of Status, Task name, Assignee or Due is absent
    """
    if not rows:
        raise MissingColumnError(REQUIRED_COLUMNS)

    columns = _resolve_columns(rows[0])
    user_name_index = columns.get(COLUMN_USER_NAME)
    width = len(rows[0])

    records = []
    for line_number, row in enumerate(rows[1:], start=2):
        if not any(cell.strip() for cell in row):
            logger.debug(f"Skipping blank row {line_number}")
            continue
        if len(row) < width:
            logger.warning(f"Row {line_number} has {len(row)} of {width} cells; missing cells read as empty")
            row = list(row) + [""] * (width - len(row))

        task_name = row[columns[COLUMN_TASK_NAME]]
        user_name = row[user_name_index] if user_name_index is not None else None
        records.append(
            TaskRecord(
                status=row[columns[COLUMN_STATUS]],
                task_name=task_name,
                assignee=row[columns[COLUMN_ASSIGNEE]],
                due=row[columns[COLUMN_DUE]],
                entity_key=derive_entity_key(task_name, user_name),
                user_name=user_name,
            )
        )

    logger.debug(f"Ingested {len(records)} records from {len(rows) - 1} data rows")
    return records


def _resolve_columns(header: List[str]) -> Dict[str, int]:
    """Map required and optional column names to their indexes."""
    missing = [name for name in REQUIRED_COLUMNS if name not in header]
    if missing:
        raise MissingColumnError(missing)

    columns = {name: header.index(name) for name in REQUIRED_COLUMNS}
    for index, name in enumerate(header):
        if name.lower() == COLUMN_USER_NAME:
            columns[COLUMN_USER_NAME] = index
            break
    return columns
