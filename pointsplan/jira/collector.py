"""Gather epics, sprints and stories from a planned workbook."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from pointsplan.estimation import DEFAULT_SIZE_MAPPING, EstimateProvider, size_cost
from pointsplan.exceptions import JiraExportError
from pointsplan.schemas import (
    TEAM_INITIATIVES_KEY,
    EpicData,
    ExportData,
    ExportItem,
    ExportScope,
    PointsWorkbook,
    SprintData,
    Team,
    Workstream,
)
from pointsplan.utils.numbers import round_half_up
from pointsplan.workbook.capacity import (
    allocation_points,
    priority_breakdown,
    workstream_budget,
)

logger = logging.getLogger(__name__)


def parse_scope(
    workbook: PointsWorkbook,
    teams: Optional[Iterable[str]] = None,
    workstreams: Optional[Iterable[str]] = None,
) -> ExportScope:
    """Build an export scope, keeping only names the workbook knows."""
    teams = [name for name in (teams or []) if name]
    workstreams = [name for name in (workstreams or []) if name]
    if teams and workstreams:
        raise JiraExportError("Select teams or workstreams, not both")

    if teams:
        known = set(workbook.team_names())
        valid = [name for name in teams if name in known]
        if not valid:
            raise JiraExportError("No valid teams selected")
        return ExportScope(type="teams", names=valid)

    if workstreams:
        known = set(workbook.workstream_names())
        valid = [name for name in workstreams if name in known]
        if not valid:
            raise JiraExportError("No valid workstreams selected")
        return ExportScope(type="workstreams", names=valid)

    return ExportScope(type="all")


def _percent(value: float) -> str:
    return f"{round_half_up(value * 100)}%"


def _owner_account_id(workbook: PointsWorkbook, workstream: Workstream) -> Optional[str]:
    owner = workstream.owner
    if owner is None:
        return None
    if owner.jira_account_id:
        return owner.jira_account_id
    for team in workbook.teams:
        account_id = team.account_id_for(owner.name)
        if account_id:
            return account_id
    return None


def epic_description(
    workbook: PointsWorkbook,
    workstream: Workstream,
    estimates: EstimateProvider = DEFAULT_SIZE_MAPPING,
) -> str:
    budget = workstream_budget(workbook, workstream.name, estimates)
    breakdown = priority_breakdown(workbook, workstream.name)

    lines = [
        f"Workstream: {workstream.name}",
        f"Total Allocation: {budget.allocated} points",
        f"Planned Assets: {budget.spent} points",
    ]
    for title, shares in (
        ("Strategic Priorities:", breakdown.strategic_priorities),
        ("Workstream Priorities:", breakdown.workstream_priorities),
    ):
        # Unweighted priorities are left out of the epic
        listed = [share for share in shares if share.name and share.percent > 0]
        if not listed:
            continue
        lines.append("")
        lines.append(title)
        lines.extend(f"- {share.name} ({_percent(share.percent)})" for share in listed)
    return "\n".join(lines)


def _has_initiative_work(team: Team, estimates: EstimateProvider) -> bool:
    return any(
        initiative.description and size_cost(initiative.size, estimates, logger) > 0
        for initiative in team.initiatives
    )


def collect_export_data(
    workbook: PointsWorkbook,
    scope: ExportScope,
    estimates: EstimateProvider = DEFAULT_SIZE_MAPPING,
) -> ExportData:
    data = ExportData(month=workbook.month, year=workbook.year)
    period = f"{workbook.month} {workbook.year}"

    if scope.type == "workstreams":
        workstreams = [ws for ws in workbook.workstreams if ws.name in scope.names]
    else:
        workstreams = list(workbook.workstreams)

    for workstream in workstreams:
        data.epics[workstream.name] = EpicData(
            name=f"{period} - {workstream.name}",
            workstream=workstream.name,
            description=epic_description(workbook, workstream, estimates),
            owner_account_id=_owner_account_id(workbook, workstream),
            allocation=allocation_points(workbook, workstream.name),
            type="workstream",
        )

    if scope.type == "teams":
        teams = [team for team in workbook.teams if team.name in scope.names]
    else:
        teams = list(workbook.teams)

    if any(_has_initiative_work(team, estimates) for team in teams):
        data.epics[TEAM_INITIATIVES_KEY] = EpicData(
            name=f"{period} - {TEAM_INITIATIVES_KEY}",
            workstream=TEAM_INITIATIVES_KEY,
            description=f"Team-initiated work across all teams for {period}",
            type="team",
        )

    selected_workstreams = set(scope.names) if scope.type == "workstreams" else None
    for team in teams:
        if team.plan is None:
            logger.info("Skipping %s: no planning applied", team.name)
            continue
        data.items.extend(_team_items(team, selected_workstreams, estimates))

    for item in data.items:
        if not item.sprint:
            continue
        key = f"{item.team} - {item.sprint}"
        sprint = data.sprints.get(key)
        if sprint is None:
            data.sprints[key] = SprintData(
                name=key,
                team=item.team,
                sprint=item.sprint,
                start_date=item.start_date,
                end_date=item.end_date,
            )
            continue
        if item.start_date and (
            sprint.start_date is None or item.start_date < sprint.start_date
        ):
            sprint.start_date = item.start_date
        if item.end_date and (sprint.end_date is None or item.end_date > sprint.end_date):
            sprint.end_date = item.end_date

    logger.info(
        "Collected %d epics, %d sprints and %d stories for %s",
        len(data.epics),
        len(data.sprints),
        len(data.items),
        scope.describe(),
    )
    return data


def _team_items(
    team: Team,
    selected_workstreams: Optional[set],
    estimates: EstimateProvider,
) -> List[ExportItem]:
    items: List[ExportItem] = []
    for planned in team.plan.items:
        if not planned.description:
            continue
        if selected_workstreams is not None and planned.origin not in selected_workstreams:
            continue
        items.append(
            ExportItem(
                team=team.name,
                origin=planned.origin,
                description=planned.description,
                size=planned.size,
                points=planned.points,
                story_points=size_cost(planned.size, estimates, logger),
                go_live_date=planned.go_live_date,
                source=planned.source,
                sprint=f"Sprint {planned.sprint}" if planned.sprint is not None else None,
                assignee_account_id=team.account_id_for(planned.assignee),
                assignee_name=planned.assignee,
                start_date=planned.start_date,
                end_date=planned.end_date,
            )
        )
    return items
