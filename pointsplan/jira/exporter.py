from __future__ import annotations

import logging
import math
from typing import Dict, Optional

from pointsplan.exceptions import JiraExportError
from pointsplan.jira.client import JiraGateway
from pointsplan.jira.export_log import ExportLog
from pointsplan.schemas import (
    TEAM_INITIATIVES_KEY,
    ExportData,
    ExportResult,
    ExportScope,
)

logger = logging.getLogger(__name__)

NO_BOARD_ERROR = "Could not find board ID - sprints not created"
MAX_ERRORS_SHOWN = 3


class JiraExporter:
    """Push collected export data to Jira.

    Epics are reused when an epic with the same summary already exists.
    Sprints need an agile board on the project; without one the stories
    are still created, just outside any sprint. Individual failures are
    collected on the result instead of aborting the export.
    """

    def __init__(self, gateway: JiraGateway, log: Optional[ExportLog] = None) -> None:
        self.gateway = gateway
        self.log = log

    def _error(self, result: ExportResult, message: str) -> None:
        message = self.gateway.redactor.scrub(message)
        logger.error(message)
        result.errors.append(message)

    def execute(self, data: ExportData, scope: Optional[ExportScope] = None) -> ExportResult:
        result = ExportResult(scope=scope or ExportScope())
        try:
            epic_keys = self._export_epics(data, result)
            sprint_ids = self._export_sprints(data, result)
            self._export_stories(data, result, epic_keys, sprint_ids)
        except JiraExportError as exc:
            result.success = False
            self._error(result, f"Fatal error: {exc}")
        else:
            if result.stories_created == 0 and data.items:
                result.success = False
            elif result.failed > result.stories_created:
                result.success = False

        logger.info(
            "Jira export finished: %d epics, %d sprints, %d stories, %d failed",
            result.epics_created,
            result.sprints_created,
            result.stories_created,
            result.failed,
        )
        if self.log is not None:
            self.log.record(result)
        return result

    def _export_epics(self, data: ExportData, result: ExportResult) -> Dict[str, str]:
        epic_keys: Dict[str, str] = {}
        for workstream, epic in data.epics.items():
            try:
                key, _ = self.gateway.find_or_create_epic(epic)
            except JiraExportError:
                raise
            except Exception as exc:
                result.failed += 1
                self._error(result, f"Epic {epic.name}: {exc}")
                continue
            epic_keys[workstream] = key
            result.epics_created += 1
        return epic_keys

    def _export_sprints(self, data: ExportData, result: ExportResult) -> Dict[str, int]:
        sprint_ids: Dict[str, int] = {}
        if not data.sprints:
            return sprint_ids

        board_id = self.gateway.find_board_id()
        if board_id is None:
            self._error(result, NO_BOARD_ERROR)
            return sprint_ids

        for key, sprint in data.sprints.items():
            try:
                sprint_ids[key] = self.gateway.create_sprint(sprint, board_id)
            except JiraExportError:
                raise
            except Exception as exc:
                self._error(result, f"Sprint {sprint.name}: {exc}")
                continue
            result.sprints_created += 1
        return sprint_ids

    def _export_stories(
        self,
        data: ExportData,
        result: ExportResult,
        epic_keys: Dict[str, str],
        sprint_ids: Dict[str, int],
    ) -> None:
        for item in data.items:
            epic_key = epic_keys.get(item.origin) or epic_keys.get(TEAM_INITIATIVES_KEY)
            sprint_id = sprint_ids.get(f"{item.team} - {item.sprint}") if item.sprint else None
            try:
                key = self.gateway.create_story(item, epic_key, sprint_id)
            except JiraExportError:
                raise
            except Exception as exc:
                result.failed += 1
                self._error(result, f'Story "{item.description}": {exc}')
                continue
            result.stories_created += 1
            logger.debug("Created story %s for %s", key, item.description)


def describe_scope_line(scope: ExportScope) -> str:
    if scope.type == "teams":
        return f"Scope: Teams ({', '.join(scope.names)})"
    if scope.type == "workstreams":
        return f"Scope: Workstreams ({', '.join(scope.names)})"
    return "Scope: All Teams"


def build_confirmation_message(data: ExportData, scope: ExportScope) -> str:
    stories = len(data.items)
    epics = f"- {len(data.epics)} Epic(s)"
    if data.team_epic_count:
        epics += f" ({data.workstream_epic_count} workstream, 1 team initiatives)"
    lines = [
        "Export Summary:",
        "",
        describe_scope_line(scope),
        "",
        "Will create:",
        epics,
        f"- {len(data.sprints)} Sprint(s)",
        f"- {stories} Story/Stories",
        "",
        f"Estimated time: ~{math.ceil(stories / 20)}-{math.ceil(stories / 10)} minutes",
    ]
    return "\n".join(lines)


def _has_field_errors(result: ExportResult) -> bool:
    return any(
        "customfield" in error or "cannot be set" in error for error in result.errors
    )


def build_results_message(result: ExportResult) -> str:
    if result.success or result.stories_created > 0:
        lines = [
            "Export completed successfully!"
            if result.success
            else "Export completed with some errors",
            "",
            "Created:",
            f"- {result.epics_created} Epic(s)",
            f"- {result.sprints_created} Sprint(s)",
            f"- {result.stories_created} Story/Stories",
        ]
        if result.failed > 0:
            lines.extend(["", f"Failed: {result.failed} item(s)"])
            if _has_field_errors(result):
                lines.extend(
                    [
                        "",
                        "Tip: Field errors detected.",
                        "- Clear any custom field ids in your Jira settings that "
                        "are causing errors",
                        "- Or run 'pointsplan export find-field' to get the "
                        "correct field id",
                    ]
                )
        lines.extend(["", "See the export log for details."])
        return "\n".join(lines)

    lines = ["The export encountered errors:", ""]
    lines.append("\n\n".join(result.errors[:MAX_ERRORS_SHOWN]))
    if len(result.errors) > MAX_ERRORS_SHOWN:
        lines.extend(["", f"...and {len(result.errors) - MAX_ERRORS_SHOWN} more errors"])
    lines.extend(["", "Check the export log for full details."])
    return "\n".join(lines)
