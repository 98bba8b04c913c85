"""Spread a team manifest over sprints.

Each item is placed, in go-live order, into the sprint with the best score:

* date fit: up to 100 points, one less for every day between the go-live
  date and the sprint end (50 when the item has no go-live date);
* spare capacity: up to 50 points for sprints that are still empty;
* earlier bias: 5 points per sprint remaining after this one.

Sprints already loaded to 150% of the target are skipped.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Iterable, List, Sequence, Tuple

from pointsplan.planning.calendar import sprint_window
from pointsplan.schemas import ManifestItem, PlannedItem, SprintPlan

logger = logging.getLogger(__name__)

MIN_SPRINT_TARGET = 10
MIN_SPRINTS = 2
OVERLOAD_FACTOR = 1.5
UNDATED_SCORE = 50
_FAR_FUTURE = date(2099, 12, 31)


def by_go_live(items: Iterable[ManifestItem]) -> List[ManifestItem]:
    return sorted(items, key=lambda item: item.go_live_date or _FAR_FUTURE)


def sprint_target(capacity: float) -> float:
    return max(MIN_SPRINT_TARGET, capacity / 2)


def _score(
    item: ManifestItem,
    sprint_end: date,
    load: float,
    target: float,
    index: int,
    sprint_count: int,
) -> float:
    if item.go_live_date is not None:
        days_apart = abs((item.go_live_date - sprint_end).days)
        score = max(0, 100 - days_apart)
    else:
        score = UNDATED_SCORE
    score += max(0.0, (1 - load / target) * 50)
    score += (sprint_count - index) * 5
    return score


def assign_sprints(
    items: Sequence[ManifestItem],
    capacity: float,
    duration: str,
    first_sprint: int,
    start: date,
) -> Tuple[List[SprintPlan], List[PlannedItem]]:
    """Return the non-empty sprints and the planned items in sprint order."""
    total = sum(item.points for item in items)
    target = sprint_target(capacity)
    sprint_count = max(MIN_SPRINTS, math.ceil(total / target))
    windows = [sprint_window(start, index, duration) for index in range(sprint_count)]

    buckets: List[List[ManifestItem]] = [[] for _ in range(sprint_count)]
    loads = [0] * sprint_count

    for item in by_go_live(items):
        best_index = 0
        best_score = -1.0
        for index in range(sprint_count):
            if loads[index] >= target * OVERLOAD_FACTOR:
                continue
            score = _score(
                item, windows[index][1], loads[index], target, index, sprint_count
            )
            if score > best_score:
                best_score = score
                best_index = index
        buckets[best_index].append(item)
        loads[best_index] += item.points

    sprints: List[SprintPlan] = []
    planned: List[PlannedItem] = []
    for index, bucket in enumerate(buckets):
        if not bucket:
            continue
        number = first_sprint + index
        sprint_start, sprint_end = windows[index]
        sprints.append(
            SprintPlan(
                number=number,
                start_date=sprint_start,
                end_date=sprint_end,
                total_points=loads[index],
            )
        )
        for item in by_go_live(bucket):
            planned.append(
                PlannedItem(
                    **item.model_dump(),
                    sprint=number,
                    start_date=sprint_start,
                    end_date=sprint_end,
                )
            )

    logger.debug(
        "Assigned %d items (%d pts) to %d sprints, target %.1f",
        len(items),
        total,
        len(sprints),
        target,
    )
    return sprints, planned
