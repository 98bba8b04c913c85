from __future__ import annotations

from collections import Counter
from datetime import date
from os import PathLike
from pathlib import Path
from typing import List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

SOURCE_WORKSTREAM = "Workstream"
SOURCE_TEAM = "Team"


def _duplicates(names) -> List[str]:
    counts = Counter(names)
    return sorted(name for name, count in counts.items() if count > 1)


class Person(BaseModel):
    name: str
    jira_account_id: Optional[str] = None

    @field_validator("jira_account_id", mode="before")
    @classmethod
    def _none_marker(cls, value):
        # Rosters exported from Jira use "None" for people without an account
        if isinstance(value, str) and value.strip() in {"", "None"}:
            return None
        return value


class WeightedPriority(BaseModel):
    name: str
    weight: float = Field(0.0, ge=0.0)


class StrategicPriority(WeightedPriority):
    workstreams: List[str] = Field(default_factory=list)


class Asset(BaseModel):
    description: str
    go_live_date: Optional[date] = None
    size: Optional[str] = None
    origin: Literal["PMM", "Workstream"] = "Workstream"
    team: Optional[str] = None


class Workstream(BaseModel):
    name: str
    allocation: float = Field(0.0, ge=0.0, le=1.0)
    owner: Optional[Person] = None
    priorities: List[WeightedPriority] = Field(default_factory=list)
    assets: List[Asset] = Field(default_factory=list)


class TeamInitiative(BaseModel):
    description: str
    size: Optional[str] = None
    go_live_date: Optional[date] = None


class ManifestItem(BaseModel):
    origin: str
    description: str
    size: Optional[str] = None
    points: int = 0
    go_live_date: Optional[date] = None
    source: Literal["Workstream", "Team"] = SOURCE_WORKSTREAM


class PlannedItem(ManifestItem):
    sprint: Optional[int] = None
    assignee: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class SprintPlan(BaseModel):
    number: int
    start_date: date
    end_date: date
    total_points: int = 0


class TeamPlan(BaseModel):
    method: Literal["Sprint", "Waterfall"]
    sprint_duration: Optional[str] = None
    start_date: date
    sprints: List[SprintPlan] = Field(default_factory=list)
    items: List[PlannedItem] = Field(default_factory=list)


class Team(BaseModel):
    name: str
    members: int = Field(0, ge=0)
    working_days: int = Field(20, ge=0)
    days_off: int = Field(0, ge=0)
    creative_planning_days: int = Field(0, ge=0)
    roster: List[Person] = Field(default_factory=list)
    initiatives: List[TeamInitiative] = Field(default_factory=list)
    manifest: List[ManifestItem] = Field(default_factory=list)
    plan: Optional[TeamPlan] = None

    def account_id_for(self, name: Optional[str]) -> Optional[str]:
        if not name:
            return None
        for person in self.roster:
            if person.name == name:
                return person.jira_account_id
        return None


class PointsWorkbook(BaseModel):
    month: str
    year: int
    capacity: int = Field(100, ge=0)
    workstreams: List[Workstream] = Field(default_factory=list)
    strategic_priorities: List[StrategicPriority] = Field(default_factory=list)
    teams: List[Team] = Field(default_factory=list)

    @field_validator("month")
    @classmethod
    def _check_month(cls, value: str) -> str:
        if value not in MONTHS:
            raise ValueError(f"month must be one of {', '.join(MONTHS)}")
        return value

    @model_validator(mode="after")
    def _check_unique_names(self) -> "PointsWorkbook":
        for label, names in (
            ("workstream", [ws.name for ws in self.workstreams]),
            ("team", [team.name for team in self.teams]),
        ):
            duplicates = _duplicates(names)
            if duplicates:
                raise ValueError(f"Duplicate {label} name(s): {', '.join(duplicates)}")
        return self

    def workstream(self, name: str) -> Optional[Workstream]:
        return next((ws for ws in self.workstreams if ws.name == name), None)

    def team(self, name: str) -> Optional[Team]:
        return next((team for team in self.teams if team.name == name), None)

    def workstream_names(self) -> List[str]:
        return [ws.name for ws in self.workstreams]

    def team_names(self) -> List[str]:
        return [team.name for team in self.teams]

    @classmethod
    def model_validate_yaml(cls, data: PathLike | str) -> "PointsWorkbook":
        if isinstance(data, Path) or (
            isinstance(data, str) and "\n" not in data and Path(data).exists()
        ):
            content = Path(data).read_text(encoding="utf-8")
        elif isinstance(data, str):
            content = data
        else:
            raise TypeError("model_validate_yaml expects a path or YAML string")
        return cls.model_validate(yaml.safe_load(content) or {})

    def to_yaml(self) -> str:
        return yaml.safe_dump(
            self.model_dump(mode="json", exclude_none=True),
            sort_keys=False,
            allow_unicode=True,
        )
