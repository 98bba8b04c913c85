from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from pointsplan.schemas import (
    MONTHS,
    Asset,
    PointsWorkbook,
    StrategicPriority,
    Team,
    TeamInitiative,
    WeightedPriority,
    Workstream,
)
from . import fixtures

logger = logging.getLogger(__name__)

DEFAULT_WORKING_DAYS = 20


@dataclass(slots=True)
class PopulateSummary:
    teams: int = 0
    workstreams: int = 0
    strategic_priorities: int = 0
    workstream_priorities: int = 0
    assets: int = 0
    initiatives: int = 0


def populate_with_test_data(
    workbook: PointsWorkbook, today: Optional[date] = None
) -> PopulateSummary:
    """Replace the workbook contents with the sample planning month."""
    today = today or date.today()
    summary = PopulateSummary()

    workbook.month = MONTHS[today.month - 1]
    workbook.year = today.year

    workbook.teams = [
        Team(
            name=team["name"],
            members=team["members"],
            working_days=team["working_days"],
            days_off=team["days_off"],
            creative_planning_days=team["creative_planning_days"],
            initiatives=[
                TeamInitiative(
                    description=description,
                    size=size,
                    go_live_date=today + timedelta(days=offset),
                )
                for description, size, offset in fixtures.TEAM_INITIATIVES.get(
                    team["name"], []
                )
            ],
        )
        for team in fixtures.TEAMS
    ]
    summary.teams = len(workbook.teams)
    summary.initiatives = sum(len(team.initiatives) for team in workbook.teams)

    for name in fixtures.WORKSTREAM_ALLOCATIONS:
        if workbook.workstream(name) is None:
            workbook.workstreams.append(Workstream(name=name))

    for workstream in workbook.workstreams:
        workstream.allocation = fixtures.WORKSTREAM_ALLOCATIONS.get(workstream.name, 0.0)
        workstream.priorities = [
            WeightedPriority(**priority)
            for priority in fixtures.WORKSTREAM_PRIORITIES.get(workstream.name, [])
        ]
        workstream.assets = [
            Asset(
                description=description,
                size=size,
                origin=origin,
                team=team,
                go_live_date=today + timedelta(days=offset),
            )
            for description, size, origin, team, offset in fixtures.WORKSTREAM_ASSETS.get(
                workstream.name, []
            )
        ]
        summary.workstream_priorities += len(workstream.priorities)
        summary.assets += len(workstream.assets)
    summary.workstreams = len(workbook.workstreams)

    workbook.strategic_priorities = [
        StrategicPriority(**priority) for priority in fixtures.STRATEGIC_PRIORITIES
    ]
    summary.strategic_priorities = len(workbook.strategic_priorities)

    logger.info(
        "Populated test data: %d teams, %d assets, %d initiatives",
        summary.teams,
        summary.assets,
        summary.initiatives,
    )
    return summary


def clear_all_data(workbook: PointsWorkbook) -> None:
    """Empty the workbook but keep its workstreams and teams."""
    workbook.strategic_priorities = []
    for workstream in workbook.workstreams:
        workstream.allocation = 0.0
        workstream.priorities = []
        workstream.assets = []
    for team in workbook.teams:
        team.members = 0
        team.days_off = 0
        team.creative_planning_days = 0
        team.working_days = DEFAULT_WORKING_DAYS
        team.initiatives = []
        team.manifest = []
        team.plan = None
    logger.info("Cleared all workbook data")
