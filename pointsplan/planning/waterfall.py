from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Sequence

from pointsplan.planning.sprint_planner import by_go_live
from pointsplan.schemas import ManifestItem, PlannedItem
from pointsplan.utils.numbers import round_half_up

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MemberSchedule:
    name: str
    next_available: date


def member_names(roster: Sequence[str], members: int) -> List[str]:
    """Roster names, padded with generic names up to the team size."""
    names = [name for name in roster if name]
    count = max(1, members, len(names))
    for number in range(len(names) + 1, count + 1):
        names.append(f"Team Member {number}")
    return names


def schedule_waterfall(
    items: Sequence[ManifestItem],
    members: Sequence[str],
    start: date,
) -> List[PlannedItem]:
    """Queue items back to back on whichever member frees up first.

    Each point is one calendar day of work, with a minimum of one day.
    """
    schedules = [MemberSchedule(name=name, next_available=start) for name in members]
    if not schedules:
        schedules = [MemberSchedule(name="Team Member 1", next_available=start)]

    planned: List[PlannedItem] = []
    for item in by_go_live(items):
        member = min(schedules, key=lambda schedule: schedule.next_available)
        duration = max(1, round_half_up(item.points))
        task_start = member.next_available
        task_end = task_start + timedelta(days=duration - 1)
        member.next_available = task_end + timedelta(days=1)
        planned.append(
            PlannedItem(
                **item.model_dump(),
                assignee=member.name,
                start_date=task_start,
                end_date=task_end,
            )
        )

    planned.sort(key=lambda item: item.start_date)
    logger.debug("Scheduled %d items across %d members", len(planned), len(schedules))
    return planned
