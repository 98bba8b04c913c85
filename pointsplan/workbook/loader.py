from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from pointsplan.exceptions import WorkbookError
from pointsplan.schemas import MONTHS, PointsWorkbook, Team, Workstream

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 100
DEFAULT_WORKSTREAMS = (
    ("SoMe", 0.50),
    ("PUA", 0.20),
    ("ASO", 0.05),
    ("Portal", 0.25),
)
DEFAULT_TEAM = "Creative"
DEFAULT_TEAM_MEMBERS = 5
DEFAULT_WORKING_DAYS = 20


def load_workbook(path: str | Path) -> PointsWorkbook:
    """Read and validate a workbook YAML file."""
    workbook_path = Path(path)
    if not workbook_path.exists():
        raise FileNotFoundError(f"Workbook not found: {workbook_path}")

    try:
        workbook = PointsWorkbook.model_validate_yaml(workbook_path)
    except (yaml.YAMLError, ValidationError) as exc:
        raise WorkbookError(f"Failed to parse workbook: {exc}") from exc

    logger.debug(
        "Loaded workbook %s with %d workstreams and %d teams",
        workbook_path,
        len(workbook.workstreams),
        len(workbook.teams),
    )
    return workbook


def save_workbook(workbook: PointsWorkbook, path: str | Path) -> Path:
    workbook_path = Path(path)
    workbook_path.parent.mkdir(parents=True, exist_ok=True)
    workbook_path.write_text(workbook.to_yaml(), encoding="utf-8")
    logger.debug("Saved workbook to %s", workbook_path)
    return workbook_path


def new_workbook(
    month: Optional[str] = None,
    year: Optional[int] = None,
    *,
    today: Optional[date] = None,
) -> PointsWorkbook:
    """Create a workbook with the default workstreams and a single team."""
    today = today or date.today()
    return PointsWorkbook(
        month=month or MONTHS[today.month - 1],
        year=year or today.year,
        capacity=DEFAULT_CAPACITY,
        workstreams=[
            Workstream(name=name, allocation=allocation)
            for name, allocation in DEFAULT_WORKSTREAMS
        ],
        teams=[
            Team(
                name=DEFAULT_TEAM,
                members=DEFAULT_TEAM_MEMBERS,
                working_days=DEFAULT_WORKING_DAYS,
            )
        ],
    )
