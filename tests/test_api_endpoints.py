"""Integration tests for API endpoints.

These tests verify upload, stats and stateless analysis end-to-end.
"""

import logging
from unittest.mock import patch

from taskstreaks.models.entity_stats import SortKey


def _upload(test_client, content, filename="tasks.csv"):
    if isinstance(content, str):
        content = content.encode("utf-8")
    return test_client.post("/upload", files={"file": (filename, content, "text/csv")})


class TestHealthEndpoints:
    """Test basic endpoints."""

    def test_health(self, test_client):
        response = test_client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root_serves_html(self, test_client):
        response = test_client.get("/")
        assert response.status_code == 200
        assert "Task Analysis Dashboard" in response.text


class TestUploadEndpoint:
    """Test POST /upload."""

    def test_upload_csv(self, test_client, sample_csv):
        response = _upload(test_client, sample_csv)

        assert response.status_code == 200
        data = response.json()
        assert data["imported_count"] == 7
        assert data["entity_count"] == 2

    def test_upload_with_byte_order_mark(self, test_client, sample_csv):
        response = _upload(test_client, "\ufeff" + sample_csv)
        assert response.status_code == 200
        assert response.json()["imported_count"] == 7

    def test_upload_missing_column(self, test_client):
        response = _upload(test_client, "Status,Task name,Assignee\nDone,A: x,A\n")

        assert response.status_code == 400
        assert "Due" in response.json()["detail"]

    def test_upload_not_utf8(self, test_client):
        response = _upload(test_client, b"\xff\xfe\x00\x00garbage")
        assert response.status_code == 400

    def test_upload_too_large(self, test_client, sample_csv):
        with patch("taskstreaks.api.app.MAX_UPLOAD_BYTES", 10):
            response = _upload(test_client, sample_csv)
        assert response.status_code == 413

    def test_upload_at_size_limit_is_accepted(self, test_client, sample_csv):
        """A file exactly MAX_UPLOAD_BYTES long is not rejected."""
        content = sample_csv.encode("utf-8")
        with patch("taskstreaks.api.app.MAX_UPLOAD_BYTES", len(content)):
            response = _upload(test_client, content)
        assert response.status_code == 200
        assert response.json()["imported_count"] == 7

    def test_upload_oversized_cell(self, test_client):
        """A cell longer than the csv field limit is a client error, not a crash."""
        content = "Status,Task name,Assignee,Due\nDone,A: " + "x" * 200_000 + ",A,2024-03-01\n"
        response = _upload(test_client, content)

        assert response.status_code == 400
        assert "Malformed CSV" in response.json()["detail"]

    def test_new_upload_replaces_previous(self, test_client, sample_csv):
        _upload(test_client, sample_csv)
        _upload(test_client, "Status,Task name,Assignee,Due\nDone,Zed: x,Zed,2024年3月1日\n")

        data = test_client.get("/stats").json()
        assert [s["entity_key"] for s in data["stats"]] == ["Zed"]


class TestStatsEndpoint:
    """Test GET /stats."""

    def test_stats_before_upload(self, test_client):
        response = test_client.get("/stats")
        assert response.status_code == 400

    def test_stats_default_sort_longest(self, test_client, sample_csv):
        _upload(test_client, sample_csv)
        response = test_client.get("/stats")

        assert response.status_code == 200
        data = response.json()
        assert data["record_count"] == 7
        assert data["sort_by"] == "longest_streak"

        alice, bob = data["stats"]
        assert alice["entity_key"] == "Alice"
        assert alice["longest_streak"] == 2
        assert alice["current_streak"] == 1
        assert alice["total_tasks"] == 4
        assert alice["completed_tasks"] == 3
        assert alice["remaining_tasks"] == 1
        assert alice["completion_ratio"] == 0.75
        assert alice["current_streak_start"] == "2024-03-04"
        assert alice["current_streak_end"] == "2024-03-04"

        assert bob["entity_key"] == "bob"
        assert bob["current_streak"] == 2
        assert bob["longest_streak"] == 2
        assert bob["current_streak_start"] == "2024-03-01"
        assert bob["current_streak_end"] == "2024-03-03"

    def test_stats_sorted_by_current_streak(self, test_client, sample_csv):
        _upload(test_client, sample_csv)
        data = test_client.get("/stats", params={"sort_by": "current_streak"}).json()

        assert [s["entity_key"] for s in data["stats"]] == ["bob", "Alice"]

    def test_stats_with_window(self, test_client, sample_csv):
        _upload(test_client, sample_csv)
        data = test_client.get("/stats", params={"start_date": "2024-03-04", "end_date": "2024-03-31"}).json()

        assert data["start_date"] == "2024-03-04"
        assert [(s["entity_key"], s["total_tasks"], s["current_streak"]) for s in data["stats"]] == [("Alice", 1, 1)]

    def test_stats_window_without_matches(self, test_client, sample_csv):
        _upload(test_client, sample_csv)
        data = test_client.get("/stats", params={"start_date": "2030-01-01"}).json()
        assert data["stats"] == []

    def test_stats_header_only_upload(self, test_client):
        _upload(test_client, "Status,Task name,Assignee,Due\n")
        response = test_client.get("/stats")

        assert response.status_code == 200
        assert response.json()["stats"] == []

    def test_stats_invalid_sort_key(self, test_client, sample_csv):
        _upload(test_client, sample_csv)
        response = test_client.get("/stats", params={"sort_by": "total_tasks"})
        assert response.status_code == 422


class TestAnalyzeEndpoint:
    """Test POST /analyze (stateless)."""

    def test_analyze_records(self, test_client, sample_record_base):
        records = [
            {**sample_record_base, "status": "Done", "due": "2024年3月1日"},
            {**sample_record_base, "status": "Done", "due": "2024年3月2日"},
            {**sample_record_base, "status": "Archived", "due": "2024年3月3日"},
            {**sample_record_base, "status": "Done", "due": "2024年3月4日"},
        ]
        response = test_client.post("/analyze", json={"records": records})

        assert response.status_code == 200
        [stats] = response.json()["stats"]
        assert stats["longest_streak"] == 2
        assert stats["current_streak"] == 1

    def test_analyze_does_not_touch_upload_store(self, test_client, sample_record_base):
        test_client.post("/analyze", json={"records": [sample_record_base]})
        assert test_client.get("/stats").status_code == 400


class TestDefaultSortKey:
    """Test DEFAULT_SORT_KEY configuration."""

    def test_valid_value(self, monkeypatch):
        from taskstreaks.api import app as app_module

        monkeypatch.setenv("DEFAULT_SORT_KEY", "current_streak")
        assert app_module._default_sort_key() == SortKey.CURRENT_STREAK

    def test_invalid_value_falls_back(self, monkeypatch, caplog):
        from taskstreaks.api import app as app_module

        monkeypatch.setenv("DEFAULT_SORT_KEY", "total_tasks")
        with caplog.at_level(logging.WARNING, logger="taskstreaks.api.app"):
            assert app_module._default_sort_key() == SortKey.LONGEST_STREAK
        assert "DEFAULT_SORT_KEY" in caplog.text
