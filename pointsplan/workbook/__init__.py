from .assignments import build_team_manifest, refresh_team_assignments
from .capacity import (
    allocation_points,
    allocation_summary,
    priority_breakdown,
    team_capacity,
    workstream_budget,
)
from .loader import load_workbook, new_workbook, save_workbook
from .structure import add_team, add_workstream, remove_team, remove_workstream

__all__ = [
    "add_team",
    "add_workstream",
    "allocation_points",
    "allocation_summary",
    "build_team_manifest",
    "load_workbook",
    "new_workbook",
    "priority_breakdown",
    "refresh_team_assignments",
    "remove_team",
    "remove_workstream",
    "save_workbook",
    "team_capacity",
    "workstream_budget",
]
