"""FastAPI web application for taskstreaks."""

import os
import logging
from datetime import date
from typing import List, Optional
from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field
from dotenv import load_dotenv

from taskstreaks import __version__
from taskstreaks.models.task_record import TaskRecord
from taskstreaks.models.entity_stats import EntityStats, DateWindow, SortKey
from taskstreaks.models import constants
from taskstreaks.integrations.csv_import import ingest_csv
from taskstreaks.engine.streaks import analyze
from taskstreaks.engine.ranking import rank_stats

load_dotenv()

logger = logging.getLogger(__name__)


def _default_sort_key() -> SortKey:
    value = os.getenv("DEFAULT_SORT_KEY", constants.DEFAULT_SORT_KEY.value)
    try:
        return SortKey(value)
    except ValueError:
        logger.warning(
            f"Invalid DEFAULT_SORT_KEY {value!r} (expected one of {[key.value for key in SortKey]}); "
            f"using {constants.DEFAULT_SORT_KEY.value}"
        )
        return constants.DEFAULT_SORT_KEY


MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(5 * 1024 * 1024)))
DEFAULT_SORT_KEY = _default_sort_key()

# Initialize FastAPI app
app = FastAPI(
    title="taskstreaks API",
    description="Per-assignee completion streaks from uploaded task tables",
    version=__version__,
)

# In-memory storage for the most recent upload (None until a file is uploaded)
records_store: Optional[List[TaskRecord]] = None


# Request/response models
class UploadResponse(BaseModel):
    """Response for CSV upload."""
    imported_count: int
    entity_count: int


class EntitySummary(BaseModel):
    """Streak statistics for one entity plus derived completion figures."""
    entity_key: str
    current_streak: int
    longest_streak: int
    total_tasks: int
    completed_tasks: int
    remaining_tasks: int
    completion_ratio: float = Field(..., ge=0.0, le=1.0)
    current_streak_start: Optional[date]
    current_streak_end: Optional[date]

    @classmethod
    def from_stats(cls, stats: EntityStats) -> "EntitySummary":
        return cls(
            entity_key=stats.entity_key,
            current_streak=stats.current_streak,
            longest_streak=stats.longest_streak,
            total_tasks=stats.total_tasks,
            completed_tasks=stats.completed_tasks,
            remaining_tasks=stats.remaining_tasks,
            completion_ratio=stats.completion_ratio,
            current_streak_start=stats.current_streak_start,
            current_streak_end=stats.current_streak_end,
        )


class StatsResponse(BaseModel):
    """Response for streak statistics."""
    record_count: int
    start_date: Optional[date]
    end_date: Optional[date]
    sort_by: SortKey
    stats: List[EntitySummary]


class AnalyzeRequest(BaseModel):
    """Stateless analysis request: records plus window and sort selection."""
    records: List[TaskRecord]
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    sort_by: SortKey = DEFAULT_SORT_KEY


def build_stats_response(
    records: List[TaskRecord],
    start_date: Optional[date],
    end_date: Optional[date],
    sort_by: SortKey,
) -> StatsResponse:
    """Analyze records within the window and rank the result."""
    window = DateWindow(start_date=start_date, end_date=end_date)
    ranked = rank_stats(analyze(records, window), sort_by)
    return StatsResponse(
        record_count=len(records),
        start_date=start_date,
        end_date=end_date,
        sort_by=sort_by,
        stats=[EntitySummary.from_stats(stats) for stats in ranked],
    )


@app.get("/", response_class=HTMLResponse)
async def root():
    """Root endpoint with basic UI."""
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>taskstreaks</title>
        <style>
            body { font-family: Arial, sans-serif; max-width: 800px; margin: 50px auto; padding: 20px; }
            button { padding: 10px 20px; margin: 5px; cursor: pointer; }
            .section { margin: 20px 0; padding: 15px; border: 1px solid #ddd; border-radius: 5px; }
            table { width: 100%; border-collapse: collapse; margin-top: 10px; }
            th, td { padding: 8px; text-align: left; border-bottom: 1px solid #ddd; }
            th { background-color: #f2f2f2; }
        </style>
    </head>
    <body>
        <h1>Task Analysis Dashboard</h1>

        <div class="section">
            <h2>Upload</h2>
            <input type="file" id="file" accept=".csv" onchange="uploadFile()">
        </div>

        <div class="section">
            <h2>Filters</h2>
            <label>Start Date: <input type="date" id="start" onchange="loadStats()"></label>
            <label>End Date: <input type="date" id="end" onchange="loadStats()"></label>
            <label>Sort by:
                <select id="sort" onchange="loadStats()">
                    <option value="longest_streak">Longest Streak</option>
                    <option value="current_streak">Current Streak</option>
                </select>
            </label>
        </div>

        <div class="section">
            <h2>Status</h2>
            <div id="status"></div>
        </div>

        <div class="section">
            <h2>Streaks</h2>
            <div id="stats"></div>
        </div>

        <script>
            async function uploadFile() {
                const status = document.getElementById('status');
                const input = document.getElementById('file');
                if (!input.files.length) {
                    return;
                }
                status.innerHTML = 'Uploading...';
                const form = new FormData();
                form.append('file', input.files[0]);
                try {
                    const response = await fetch('/upload', { method: 'POST', body: form });
                    const data = await response.json();
                    if (!response.ok) {
                        status.innerHTML = 'Error: ' + (data.detail || response.statusText);
                        return;
                    }
                    status.innerHTML = `Imported ${data.imported_count} tasks for ${data.entity_count} users`;
                    loadStats();
                } catch (error) {
                    status.innerHTML = 'Error: ' + error.message;
                }
            }

            async function loadStats() {
                const statsDiv = document.getElementById('stats');
                const params = new URLSearchParams();
                const start = document.getElementById('start').value;
                const end = document.getElementById('end').value;
                if (start) params.append('start_date', start);
                if (end) params.append('end_date', end);
                params.append('sort_by', document.getElementById('sort').value);
                try {
                    const response = await fetch('/stats?' + params.toString());
                    const data = await response.json();
                    if (!response.ok) {
                        statsDiv.innerHTML = 'Error: ' + (data.detail || response.statusText);
                        return;
                    }
                    if (data.stats.length === 0) {
                        statsDiv.innerHTML = '<p>No tasks in the selected range.</p>';
                        return;
                    }
                    let html = '<table><tr><th>User</th><th>Current</th><th>Longest</th><th>Completed</th><th>Current streak span</th></tr>';
                    data.stats.forEach(s => {
                        const span = s.current_streak_start ? `${s.current_streak_start} to ${s.current_streak_end}` : '';
                        html += `<tr>
                            <td>${s.entity_key}</td>
                            <td>${s.current_streak}</td>
                            <td>${s.longest_streak}</td>
                            <td>${s.completed_tasks}/${s.total_tasks} (${(s.completion_ratio * 100).toFixed(0)}%)</td>
                            <td>${span}</td>
                        </tr>`;
                    });
                    html += '</table>';
                    statsDiv.innerHTML = html;
                } catch (error) {
                    statsDiv.innerHTML = 'Error: ' + error.message;
                }
            }
        </script>
    </body>
    </html>
    """


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.post("/upload", response_model=UploadResponse)
async def upload_tasks(file: UploadFile = File(...)):
    """Upload a CSV task table, replacing any previous upload."""
    global records_store

    # One byte past the cap is enough to detect an oversized file
    content = await file.read(MAX_UPLOAD_BYTES + 1)
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail=f"File too large (limit {MAX_UPLOAD_BYTES} bytes)")

    try:
        records = ingest_csv(content.decode("utf-8-sig"))
    except UnicodeDecodeError as e:
        logger.error(f"Failed to decode upload {file.filename}: {str(e)[:100]}")
        raise HTTPException(status_code=400, detail="File is not valid UTF-8 text")
    except ValueError as e:
        logger.error(f"Failed to ingest upload {file.filename}: {str(e)}")
        raise HTTPException(status_code=400, detail=f"Failed to import tasks: {str(e)}")

    records_store = records
    logger.info(f"Imported {len(records)} records from {file.filename}")

    return UploadResponse(
        imported_count=len(records),
        entity_count=len({record.entity_key for record in records}),
    )


@app.get("/stats", response_model=StatsResponse)
async def view_stats(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    sort_by: SortKey = DEFAULT_SORT_KEY,
):
    """Streak statistics for the uploaded records within an optional date window."""
    if records_store is None:
        raise HTTPException(status_code=400, detail="No tasks available. Upload a CSV first.")

    return build_stats_response(records_store, start_date, end_date, sort_by)


@app.post("/analyze", response_model=StatsResponse)
async def analyze_records(request: AnalyzeRequest):
    """Streak statistics for records supplied in the request body."""
    return build_stats_response(request.records, request.start_date, request.end_date, request.sort_by)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
