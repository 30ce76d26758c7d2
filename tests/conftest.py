"""Pytest fixtures and configuration for taskstreaks tests."""

import pytest
from fastapi.testclient import TestClient

from taskstreaks.models.task_record import TaskRecord


@pytest.fixture
def header_row():
    """Header row with all required columns plus user_name."""
    return ["Status", "Task name", "Assignee", "Due", "user_name"]


@pytest.fixture
def sample_record_base():
    """Base record data for creating test records.

    Returns a dict with default record attributes that can be overridden.
    """
    return {
        "status": "Done",
        "task_name": "Alice: daily report",
        "assignee": "Alice",
        "due": "2024年3月1日",
        "entity_key": "Alice",
        "user_name": None,
    }


@pytest.fixture
def make_records(sample_record_base):
    """Build records for one entity from (status, due) pairs."""
    def _make(pairs, entity_key="Alice"):
        return [
            TaskRecord(**{**sample_record_base, "status": status, "due": due, "entity_key": entity_key})
            for status, due in pairs
        ]
    return _make


@pytest.fixture
def sample_csv():
    """A small CSV export with two users."""
    return (
        "Status,Task name,Assignee,Due,user_name\n"
        "Done,Alice: write report,Alice,2024年3月1日,\n"
        "Done,Alice: review PR,Alice,2024年3月2日,\n"
        "Archived,Alice: old ticket,Alice,2024年3月3日,\n"
        "Done,Alice: deploy,Alice,2024年3月4日,\n"
        "Done,Task for Bob,Bob,2024年3月1日,bob\n"
        "In progress,Task for Bob,Bob,2024年3月2日,bob\n"
        "Done,Task for Bob,Bob,2024年3月3日,bob\n"
    )


@pytest.fixture
def test_client():
    """Create a FastAPI test client with an empty record store."""
    from taskstreaks.api import app as app_module

    app_module.records_store = None
    with TestClient(app_module.app) as client:
        yield client
    app_module.records_store = None
