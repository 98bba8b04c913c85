from .calendar import next_monday, sprint_window
from .sprint_planner import assign_sprints
from .tools import (
    apply_planning,
    apply_sprint_planning,
    apply_waterfall_planning,
    clear_planning,
)
from .waterfall import member_names, schedule_waterfall

__all__ = [
    "apply_planning",
    "apply_sprint_planning",
    "apply_waterfall_planning",
    "assign_sprints",
    "clear_planning",
    "member_names",
    "next_monday",
    "schedule_waterfall",
    "sprint_window",
]
