from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Literal

from pointsplan.estimation import DEFAULT_SIZE_MAPPING, EstimateProvider, size_cost
from pointsplan.schemas import (
    MONTHS,
    SOURCE_TEAM,
    SOURCE_WORKSTREAM,
    ManifestItem,
    PointsWorkbook,
    Team,
)

logger = logging.getLogger(__name__)

SortBy = Literal["workstream", "date"]

CREATIVE_PLANNING_SIZE = "-"


def next_month_start(month: str, year: int) -> date:
    index = MONTHS.index(month)
    if index == 11:
        return date(year + 1, 1, 1)
    return date(year, index + 2, 1)


def creative_planning_item(team: Team, month: str, year: int) -> ManifestItem:
    start = next_month_start(month, year)
    return ManifestItem(
        origin=team.name,
        description=f"Creative Planning & Ideation (for {MONTHS[start.month - 1]})",
        size=CREATIVE_PLANNING_SIZE,
        points=team.creative_planning_days,
        go_live_date=start,
        source=SOURCE_TEAM,
    )


def _sort_by_date(items: List[ManifestItem]) -> List[ManifestItem]:
    dated = sorted(
        (item for item in items if item.go_live_date is not None),
        key=lambda item: (item.go_live_date, item.origin),
    )
    undated = sorted(
        (item for item in items if item.go_live_date is None),
        key=lambda item: item.origin,
    )
    return dated + undated


def _group_by_origin(team_name: str, items: List[ManifestItem]) -> List[ManifestItem]:
    groups: Dict[str, List[ManifestItem]] = {}
    for item in items:
        groups.setdefault(item.origin, []).append(item)
    ordered = sorted(groups, key=lambda origin: (origin != team_name, origin))
    return [item for origin in ordered for item in groups[origin]]


def build_team_manifest(
    workbook: PointsWorkbook,
    team: Team,
    sort_by: SortBy = "workstream",
    estimates: EstimateProvider = DEFAULT_SIZE_MAPPING,
) -> List[ManifestItem]:
    items: List[ManifestItem] = []

    if team.creative_planning_days > 0:
        items.append(creative_planning_item(team, workbook.month, workbook.year))

    for workstream in workbook.workstreams:
        for asset in workstream.assets:
            if asset.team != team.name:
                continue
            items.append(
                ManifestItem(
                    origin=workstream.name,
                    description=asset.description,
                    size=asset.size,
                    points=size_cost(asset.size, estimates, logger),
                    go_live_date=asset.go_live_date,
                    source=SOURCE_WORKSTREAM,
                )
            )

    for initiative in team.initiatives:
        points = size_cost(initiative.size, estimates, logger)
        if not initiative.description or points <= 0:
            continue
        items.append(
            ManifestItem(
                origin=team.name,
                description=initiative.description,
                size=initiative.size,
                points=points,
                go_live_date=initiative.go_live_date,
                source=SOURCE_TEAM,
            )
        )

    if sort_by == "date":
        return _sort_by_date(items)
    return _group_by_origin(team.name, items)


def refresh_team_assignments(
    workbook: PointsWorkbook,
    sort_by: SortBy = "workstream",
    estimates: EstimateProvider = DEFAULT_SIZE_MAPPING,
) -> Dict[str, int]:
    """Rebuild every team manifest and return the item count per team."""
    if sort_by not in ("workstream", "date"):
        raise ValueError(f"Unsupported sort order: {sort_by}")

    team_names = set(workbook.team_names())
    for workstream in workbook.workstreams:
        for asset in workstream.assets:
            if asset.team and asset.team not in team_names:
                logger.warning(
                    "Asset %r in %s is assigned to unknown team %r",
                    asset.description,
                    workstream.name,
                    asset.team,
                )

    counts: Dict[str, int] = {}
    for team in workbook.teams:
        team.manifest = build_team_manifest(workbook, team, sort_by, estimates)
        counts[team.name] = len(team.manifest)
        logger.info("Refreshed %s: %d assignments", team.name, counts[team.name])
    return counts
