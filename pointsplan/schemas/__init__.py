from .export_models import (
    TEAM_INITIATIVES_KEY,
    ConnectionCheck,
    EpicData,
    ExportData,
    ExportItem,
    ExportResult,
    ExportScope,
    SprintData,
)
from .workbook_models import (
    MONTHS,
    SOURCE_TEAM,
    SOURCE_WORKSTREAM,
    Asset,
    ManifestItem,
    Person,
    PlannedItem,
    PointsWorkbook,
    SprintPlan,
    StrategicPriority,
    Team,
    TeamInitiative,
    TeamPlan,
    WeightedPriority,
    Workstream,
)

__all__ = [
    "TEAM_INITIATIVES_KEY",
    "ConnectionCheck",
    "EpicData",
    "ExportData",
    "ExportItem",
    "ExportResult",
    "ExportScope",
    "SprintData",
    "MONTHS",
    "SOURCE_TEAM",
    "SOURCE_WORKSTREAM",
    "Asset",
    "ManifestItem",
    "Person",
    "PlannedItem",
    "PointsWorkbook",
    "SprintPlan",
    "StrategicPriority",
    "Team",
    "TeamInitiative",
    "TeamPlan",
    "WeightedPriority",
    "Workstream",
]
