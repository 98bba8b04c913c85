from __future__ import annotations

from datetime import date
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

TEAM_INITIATIVES_KEY = "Team Initiatives"


class ExportScope(BaseModel):
    type: Literal["all", "teams", "workstreams"] = "all"
    names: List[str] = Field(default_factory=list)

    def describe(self) -> str:
        if self.type == "all":
            return "All Teams"
        return ", ".join(self.names)


class EpicData(BaseModel):
    name: str
    workstream: str
    description: str = ""
    owner_account_id: Optional[str] = None
    allocation: int = 0
    type: Literal["workstream", "team"] = "workstream"


class ExportItem(BaseModel):
    team: str
    origin: str
    description: str
    size: Optional[str] = None
    points: int = 0
    story_points: int = 0
    go_live_date: Optional[date] = None
    source: str = "Workstream"
    sprint: Optional[str] = None
    assignee_account_id: Optional[str] = None
    assignee_name: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class SprintData(BaseModel):
    name: str
    team: str
    sprint: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class ExportData(BaseModel):
    month: str
    year: int
    epics: Dict[str, EpicData] = Field(default_factory=dict)
    items: List[ExportItem] = Field(default_factory=list)
    sprints: Dict[str, SprintData] = Field(default_factory=dict)

    @property
    def workstream_epic_count(self) -> int:
        return sum(1 for epic in self.epics.values() if epic.type == "workstream")

    @property
    def team_epic_count(self) -> int:
        return sum(1 for epic in self.epics.values() if epic.type == "team")


class ExportResult(BaseModel):
    success: bool = True
    epics_created: int = 0
    sprints_created: int = 0
    stories_created: int = 0
    failed: int = 0
    errors: List[str] = Field(default_factory=list)
    scope: Optional[ExportScope] = None


class ConnectionCheck(BaseModel):
    success: bool
    error: Optional[str] = None
    account: Optional[str] = None
