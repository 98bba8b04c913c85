"""Add and remove workstreams and teams."""

from __future__ import annotations

import logging

from pointsplan.exceptions import WorkbookError
from pointsplan.schemas import PointsWorkbook, Team, Workstream

logger = logging.getLogger(__name__)

DEFAULT_WORKING_DAYS = 20


def _clean_name(name: str, kind: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise WorkbookError(f"{kind} name cannot be empty")
    return cleaned


def add_workstream(workbook: PointsWorkbook, name: str) -> Workstream:
    name = _clean_name(name, "Workstream")
    if workbook.workstream(name) is not None:
        raise WorkbookError(f"Workstream already exists: {name}")
    workstream = Workstream(name=name, allocation=0.0)
    workbook.workstreams.append(workstream)
    logger.info("Added workstream %s", name)
    return workstream


def remove_workstream(workbook: PointsWorkbook, name: str) -> Workstream:
    workstream = workbook.workstream(name)
    if workstream is None:
        raise WorkbookError(f"Unknown workstream: {name}")
    workbook.workstreams.remove(workstream)
    for priority in workbook.strategic_priorities:
        if name in priority.workstreams:
            priority.workstreams.remove(name)
    logger.info("Removed workstream %s", name)
    return workstream


def add_team(workbook: PointsWorkbook, name: str) -> Team:
    name = _clean_name(name, "Team")
    if workbook.team(name) is not None:
        raise WorkbookError(f"Team already exists: {name}")
    team = Team(name=name, working_days=DEFAULT_WORKING_DAYS)
    workbook.teams.append(team)
    logger.info("Added team %s", name)
    return team


def remove_team(workbook: PointsWorkbook, name: str) -> Team:
    team = workbook.team(name)
    if team is None:
        raise WorkbookError(f"Unknown team: {name}")
    workbook.teams.remove(team)
    logger.info("Removed team %s", name)
    return team
