from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from pointsplan.config.settings import PlanningSettings
from pointsplan.exceptions import PlanningError
from pointsplan.planning.calendar import next_monday
from pointsplan.planning.sprint_planner import assign_sprints
from pointsplan.planning.waterfall import member_names, schedule_waterfall
from pointsplan.schemas import ManifestItem, PointsWorkbook, Team, TeamPlan
from pointsplan.workbook.capacity import team_capacity

logger = logging.getLogger(__name__)


def plannable_items(team: Team) -> List[ManifestItem]:
    return [item for item in team.manifest if item.description and item.points > 0]


def _resolve_start(
    planning: PlanningSettings, start: Optional[date], today: Optional[date]
) -> date:
    return start or planning.planning_start_date or next_monday(today)


def _require_teams(workbook: PointsWorkbook) -> None:
    if not workbook.teams:
        raise PlanningError("No teams found in the workbook")


def apply_sprint_planning(
    workbook: PointsWorkbook,
    planning: Optional[PlanningSettings] = None,
    *,
    start: Optional[date] = None,
    today: Optional[date] = None,
) -> int:
    """Plan every team manifest into sprints. Returns the number of teams planned."""
    planning = planning or PlanningSettings()
    _require_teams(workbook)
    sprint_start = _resolve_start(planning, start, today)

    planned_teams = 0
    for team in workbook.teams:
        items = plannable_items(team)
        if not items:
            logger.info("Skipping %s: no assignments to plan", team.name)
            continue
        sprints, planned = assign_sprints(
            items,
            capacity=team_capacity(team).net,
            duration=planning.planning_sprint_duration,
            first_sprint=planning.planning_first_sprint,
            start=sprint_start,
        )
        team.plan = TeamPlan(
            method="Sprint",
            sprint_duration=planning.planning_sprint_duration,
            start_date=sprint_start,
            sprints=sprints,
            items=planned,
        )
        planned_teams += 1
        logger.info(
            "Planned %s: %d items over %d sprints", team.name, len(planned), len(sprints)
        )
    return planned_teams


def apply_waterfall_planning(
    workbook: PointsWorkbook,
    planning: Optional[PlanningSettings] = None,
    *,
    start: Optional[date] = None,
    today: Optional[date] = None,
) -> int:
    """Schedule every team manifest member by member. Returns teams planned."""
    planning = planning or PlanningSettings()
    _require_teams(workbook)
    schedule_start = _resolve_start(planning, start, today)

    planned_teams = 0
    for team in workbook.teams:
        items = plannable_items(team)
        if not items:
            logger.info("Skipping %s: no assignments to plan", team.name)
            continue
        members = member_names([person.name for person in team.roster], team.members)
        planned = schedule_waterfall(items, members, schedule_start)
        team.plan = TeamPlan(
            method="Waterfall",
            start_date=schedule_start,
            items=planned,
        )
        planned_teams += 1
        logger.info(
            "Scheduled %s: %d items across %d members",
            team.name,
            len(planned),
            len(members),
        )
    return planned_teams


def apply_planning(
    workbook: PointsWorkbook,
    planning: Optional[PlanningSettings] = None,
    *,
    start: Optional[date] = None,
    today: Optional[date] = None,
) -> int:
    """Plan every team with the configured ``planning_method``."""
    planning = planning or PlanningSettings()
    if planning.planning_method == "Waterfall":
        return apply_waterfall_planning(workbook, planning, start=start, today=today)
    return apply_sprint_planning(workbook, planning, start=start, today=today)


def clear_planning(workbook: PointsWorkbook) -> int:
    """Drop every team plan; manifests and initiatives stay untouched."""
    cleared = 0
    for team in workbook.teams:
        if team.plan is not None:
            team.plan = None
            cleared += 1
    logger.info("Cleared planning for %d teams", cleared)
    return cleared
