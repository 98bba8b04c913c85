"""Point budgets for workstreams and capacity for teams."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from pointsplan.estimation import DEFAULT_SIZE_MAPPING, EstimateProvider, size_cost
from pointsplan.exceptions import WorkbookError
from pointsplan.schemas import (
    SOURCE_WORKSTREAM,
    PointsWorkbook,
    Team,
    Workstream,
)
from pointsplan.utils.numbers import round_half_up

logger = logging.getLogger(__name__)

_ALLOCATION_TOLERANCE = 1e-6


@dataclass(slots=True)
class AllocationRow:
    name: str
    percent: float
    points: int


@dataclass(slots=True)
class AllocationSummary:
    capacity: int
    rows: List[AllocationRow] = field(default_factory=list)

    @property
    def total_percent(self) -> float:
        return sum(row.percent for row in self.rows)

    @property
    def total_points(self) -> int:
        return sum(row.points for row in self.rows)

    @property
    def balanced(self) -> bool:
        return abs(self.total_percent - 1.0) <= _ALLOCATION_TOLERANCE


@dataclass(slots=True)
class WorkstreamBudget:
    name: str
    allocated: int
    spent: int

    @property
    def remaining(self) -> int:
        return self.allocated - self.spent

    @property
    def status(self) -> str:
        if self.remaining < 0:
            return f"OVER by {-self.remaining}"
        return f"{self.remaining} remaining"


@dataclass(slots=True)
class PriorityShare:
    name: str
    percent: float
    points: int


@dataclass(slots=True)
class PriorityBreakdown:
    workstream: str
    budget: int
    workstream_priorities: List[PriorityShare] = field(default_factory=list)
    pmm_share: float = 0.0
    strategic_priorities: List[PriorityShare] = field(default_factory=list)


@dataclass(slots=True)
class TeamCapacity:
    team: str
    gross: int
    net: int
    workstream_assigned: int
    team_initiated: int
    creative_planning: int

    @property
    def total(self) -> int:
        return self.workstream_assigned + self.team_initiated + self.creative_planning

    @property
    def utilization(self) -> Optional[float]:
        if self.net == 0:
            return None
        return self.total / self.net

    @property
    def status(self) -> str:
        if self.total > self.net:
            return f"OVER by {self.total - self.net} pts"
        if self.total == self.net:
            return "FULL"
        return f"{self.net - self.total} pts available"


def _require_workstream(workbook: PointsWorkbook, name: str) -> Workstream:
    workstream = workbook.workstream(name)
    if workstream is None:
        raise WorkbookError(f"Unknown workstream: {name}")
    return workstream


def allocation_points(workbook: PointsWorkbook, name: str) -> int:
    workstream = _require_workstream(workbook, name)
    return round_half_up(workbook.capacity * workstream.allocation)


def allocation_summary(workbook: PointsWorkbook) -> AllocationSummary:
    summary = AllocationSummary(capacity=workbook.capacity)
    for workstream in workbook.workstreams:
        summary.rows.append(
            AllocationRow(
                name=workstream.name,
                percent=workstream.allocation,
                points=round_half_up(workbook.capacity * workstream.allocation),
            )
        )
    if summary.rows and not summary.balanced:
        logger.warning(
            "Workstream allocations total %.0f%%, expected 100%%",
            summary.total_percent * 100,
        )
    return summary


def workstream_budget(
    workbook: PointsWorkbook,
    name: str,
    estimates: EstimateProvider = DEFAULT_SIZE_MAPPING,
) -> WorkstreamBudget:
    """Allocated, spent and remaining points for one workstream."""
    workstream = _require_workstream(workbook, name)
    spent = 0
    for asset in workstream.assets:
        cost = size_cost(asset.size, estimates, logger)
        if cost > 0:
            spent += cost
    return WorkstreamBudget(
        name=name,
        allocated=allocation_points(workbook, name),
        spent=spent,
    )


def priority_breakdown(workbook: PointsWorkbook, name: str) -> PriorityBreakdown:
    """Split a workstream budget across its own and strategic priorities.

    Workstream priorities take their weight as a direct share of the budget.
    Whatever is left goes to the strategic (PMM) priorities flagged for the
    workstream, proportionally to their weights.
    """
    workstream = _require_workstream(workbook, name)
    budget = allocation_points(workbook, name)
    breakdown = PriorityBreakdown(workstream=name, budget=budget)

    for priority in workstream.priorities:
        breakdown.workstream_priorities.append(
            PriorityShare(
                name=priority.name,
                percent=priority.weight,
                points=round_half_up(priority.weight * budget),
            )
        )

    breakdown.pmm_share = max(
        0.0, 1.0 - sum(priority.weight for priority in workstream.priorities)
    )

    flagged = [
        priority
        for priority in workbook.strategic_priorities
        if name in priority.workstreams
    ]
    total_weight = sum(priority.weight for priority in flagged)
    for priority in flagged:
        share = 0.0
        if total_weight > 0:
            share = priority.weight / total_weight * breakdown.pmm_share
        breakdown.strategic_priorities.append(
            PriorityShare(
                name=priority.name,
                percent=share,
                points=round_half_up(share * budget),
            )
        )
    return breakdown


def team_capacity(
    team: Team, estimates: EstimateProvider = DEFAULT_SIZE_MAPPING
) -> TeamCapacity:
    gross = team.members * team.working_days - team.days_off
    workstream_assigned = sum(
        item.points for item in team.manifest if item.source == SOURCE_WORKSTREAM
    )
    team_initiated = sum(
        size_cost(initiative.size, estimates, logger)
        for initiative in team.initiatives
    )
    return TeamCapacity(
        team=team.name,
        gross=gross,
        net=gross - team.creative_planning_days,
        workstream_assigned=workstream_assigned,
        team_initiated=team_initiated,
        creative_planning=team.creative_planning_days,
    )
