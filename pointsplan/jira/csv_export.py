from __future__ import annotations

import csv
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from pointsplan.exceptions import JiraExportError
from pointsplan.schemas import ExportData

logger = logging.getLogger(__name__)

CSV_HEADER = [
    "Epic Name",
    "Summary",
    "Story Points",
    "Assignee",
    "Go Live Date",
    "Start Date",
    "Due Date",
    "Sprint",
]


def _format_date(day: Optional[date]) -> str:
    return day.isoformat() if day else ""


def export_to_csv(
    data: ExportData,
    output_dir: str | Path = ".",
    now: Optional[datetime] = None,
) -> Path:
    """Write the stories to a Jira-importable CSV file and return its path."""
    if not data.items:
        raise JiraExportError("No data to export")

    timestamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"Jira_Export_{timestamp}.csv"

    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle, quoting=csv.QUOTE_ALL)
        writer.writerow(CSV_HEADER)
        for item in data.items:
            writer.writerow(
                [
                    f"{data.month} {data.year} - {item.origin}",
                    item.description,
                    item.story_points,
                    item.assignee_account_id or item.assignee_name or "",
                    _format_date(item.go_live_date),
                    _format_date(item.start_date),
                    _format_date(item.end_date),
                    item.sprint or "",
                ]
            )

    logger.info("Exported %d items to %s", len(data.items), path)
    return path
