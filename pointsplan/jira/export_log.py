from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError

from pointsplan.schemas import ExportResult
from pointsplan.utils.logging import SecretRedactor

logger = logging.getLogger(__name__)


class ExportLogEntry(BaseModel):
    timestamp: datetime
    scope: str
    epics: int = 0
    sprints: int = 0
    stories: int = 0
    failed: int = 0
    status: str
    errors: List[str] = Field(default_factory=list)


def export_status(result: ExportResult) -> str:
    if result.success:
        return "Success"
    if result.stories_created > 0:
        return "Partial"
    return "Failed"


class ExportLog:
    """Append-only JSON lines record of Jira exports."""

    def __init__(self, path: str | Path, redactor: Optional[SecretRedactor] = None) -> None:
        self.path = Path(path)
        self.redactor = redactor or SecretRedactor()

    def record(self, result: ExportResult, now: Optional[datetime] = None) -> ExportLogEntry:
        entry = ExportLogEntry(
            timestamp=now or datetime.now(),
            scope=result.scope.describe() if result.scope else "All Teams",
            epics=result.epics_created,
            sprints=result.sprints_created,
            stories=result.stories_created,
            failed=result.failed,
            status=export_status(result),
            errors=self.redactor.scrub_sequence(result.errors),
        )
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(entry.model_dump_json() + "\n")
        logger.debug("Logged export to %s", self.path)
        return entry

    def entries(self) -> List[ExportLogEntry]:
        if not self.path.exists():
            return []
        entries: List[ExportLogEntry] = []
        with self.path.open(encoding="utf-8") as handle:
            for number, line in enumerate(handle, start=1):
                if not line.strip():
                    continue
                try:
                    entries.append(ExportLogEntry.model_validate_json(line))
                except ValidationError as exc:
                    logger.warning("Skipping malformed export log line %d: %s", number, exc)
        return entries
