from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from pointsplan.config.settings import (
    API_TOKEN_PLACEHOLDER,
    EMAIL_PLACEHOLDER,
    JiraSettings,
)
from pointsplan.exceptions import JiraExportError
from pointsplan.schemas import ConnectionCheck, EpicData, ExportItem, SprintData
from pointsplan.utils.logging import SecretRedactor

logger = logging.getLogger(__name__)

DEFAULT_STORY_POINTS_FIELD = "customfield_10016"
BUILTIN_DUE_DATE_FIELD = "duedate"


def configuration_problem(config: JiraSettings) -> Optional[str]:
    """Describe the first missing or placeholder setting, if any."""
    if not config.jira_url or "http" not in config.jira_url:
        return "Invalid Jira URL"
    if not config.jira_api_token or config.jira_api_token == API_TOKEN_PLACEHOLDER:
        return "API token not configured"
    if not config.jira_project_key:
        return "Project key not configured"
    if not config.jira_email or config.jira_email == EMAIL_PLACEHOLDER:
        return "Email not configured"
    return None


def _as_datetime(day: Optional[date]) -> Optional[str]:
    if day is None:
        return None
    return f"{day.isoformat()}T00:00:00.000Z"


def _as_date(day: Optional[date]) -> Optional[str]:
    return day.isoformat() if day else None


def _escape_jql(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


class JiraGateway:
    """Thin wrapper over :class:`atlassian.Jira` for the export workflow."""

    def __init__(
        self,
        config: JiraSettings,
        *,
        client: Any = None,
        redactor: Optional[SecretRedactor] = None,
    ) -> None:
        if not config.jira_project_key:
            raise ValueError("jira_project_key is required")
        self.config = config
        self.project_key = config.jira_project_key
        self.redactor = redactor or SecretRedactor(
            secrets=[config.jira_api_token] if config.jira_api_token else []
        )
        self._client = client
        self.account: Dict[str, Any] = {}

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = self.connect()
        return self._client

    def connect(self, cloud: bool = True) -> Any:
        """Return an authenticated Jira client."""
        from atlassian import Jira

        try:
            jira = Jira(
                url=self.config.jira_url,
                username=self.config.jira_email,
                password=self.config.jira_api_token,
                cloud=cloud,
                backoff_and_retry=True,
                max_backoff_seconds=16,
                max_backoff_retries=3,
            )
            self.account = jira.myself() or {}
        except Exception as exc:
            raise JiraExportError(
                f"Failed to authenticate with Jira: {self.redactor.scrub(str(exc))}"
            ) from exc
        self._client = jira
        return jira

    def find_epic(self, name: str) -> Optional[str]:
        jql = (
            f'project = "{_escape_jql(self.project_key)}" AND issuetype = Epic '
            f'AND summary ~ "{_escape_jql(name)}"'
        )
        try:
            response = self.client.jql(jql, fields="summary", limit=1)
        except Exception as exc:
            logger.warning(
                "Epic search failed for %s: %s", name, self.redactor.scrub(str(exc))
            )
            return None
        issues = (response or {}).get("issues") or []
        return issues[0]["key"] if issues else None

    def create_epic(self, epic: EpicData) -> str:
        fields: Dict[str, Any] = {
            "project": {"key": self.project_key},
            "summary": epic.name,
            "description": epic.description,
            "issuetype": {"name": "Epic"},
        }
        if epic.owner_account_id:
            fields["assignee"] = {"accountId": epic.owner_account_id}
        return self.client.create_issue(fields=fields)["key"]

    def find_or_create_epic(self, epic: EpicData) -> tuple[str, bool]:
        """Return the epic key and whether it was newly created."""
        existing = self.find_epic(epic.name)
        if existing:
            logger.info("Found existing epic %s for %s", existing, epic.name)
            return existing, False
        key = self.create_epic(epic)
        logger.info("Created epic %s for %s", key, epic.name)
        return key, True

    def find_board_id(self) -> Optional[int]:
        try:
            response = self.client.get_all_agile_boards(project_key=self.project_key)
        except Exception as exc:
            logger.warning("Board lookup failed: %s", self.redactor.scrub(str(exc)))
            return None
        boards = (response or {}).get("values") or []
        return boards[0]["id"] if boards else None

    def create_sprint(self, sprint: SprintData, board_id: int) -> int:
        response = self.client.create_sprint(
            sprint.name,
            board_id,
            start_date=_as_datetime(sprint.start_date),
            end_date=_as_datetime(sprint.end_date),
        )
        return response["id"]

    def story_fields(self, item: ExportItem, epic_key: Optional[str]) -> Dict[str, Any]:
        fields: Dict[str, Any] = {
            "project": {"key": self.project_key},
            "summary": item.description,
            "issuetype": {"name": self.config.jira_issue_type or "Story"},
        }
        if self.config.jira_story_points_field and item.story_points > 0:
            fields[self.config.jira_story_points_field] = item.story_points
        if epic_key:
            fields["parent"] = {"key": epic_key}
        if item.assignee_account_id:
            fields["assignee"] = {"accountId": item.assignee_account_id}
        if self.config.jira_go_live_date_field and item.go_live_date:
            fields[self.config.jira_go_live_date_field] = _as_date(item.go_live_date)
        if self.config.jira_start_date_field and item.start_date:
            fields[self.config.jira_start_date_field] = _as_date(item.start_date)
        if item.end_date:
            due_field = self.config.jira_due_date_field or BUILTIN_DUE_DATE_FIELD
            fields[due_field] = _as_date(item.end_date)
        return fields

    def create_story(
        self,
        item: ExportItem,
        epic_key: Optional[str],
        sprint_id: Optional[int] = None,
    ) -> str:
        key = self.client.create_issue(fields=self.story_fields(item, epic_key))["key"]
        if sprint_id is not None:
            self.add_issue_to_sprint(key, sprint_id)
        return key

    def add_issue_to_sprint(self, issue_key: str, sprint_id: int) -> bool:
        try:
            self.client.add_issues_to_sprint(sprint_id, [issue_key])
        except Exception as exc:
            logger.warning(
                "Could not add %s to sprint %s: %s",
                issue_key,
                sprint_id,
                self.redactor.scrub(str(exc)),
            )
            return False
        return True

    def find_story_points_fields(self) -> List[Dict[str, Any]]:
        try:
            fields = self.client.get_all_fields() or []
        except JiraExportError:
            raise
        except Exception as exc:
            raise JiraExportError(
                f"Field lookup failed: {self.redactor.scrub(str(exc))}"
            ) from exc

        matches = []
        for field in fields:
            name = (field.get("name") or "").lower()
            if "story point" in name or field.get("id") == DEFAULT_STORY_POINTS_FIELD:
                matches.append(field)
        return matches


def check_connection(
    config: JiraSettings,
    gateway_factory: Callable[[JiraSettings], JiraGateway] = JiraGateway,
    *,
    gateway: Optional[JiraGateway] = None,
) -> ConnectionCheck:
    """Validate settings, then authenticate against Jira.

    A ``gateway`` passed in is connected in place so callers can keep using
    its authenticated client.
    """
    problem = configuration_problem(config)
    if problem:
        return ConnectionCheck(success=False, error=problem)

    if gateway is None:
        gateway = gateway_factory(config)
    try:
        gateway.connect()
    except JiraExportError as exc:
        return ConnectionCheck(success=False, error=str(exc))

    account = gateway.account.get("displayName") or gateway.account.get("emailAddress")
    logger.info("Connected to Jira as %s", account or "unknown user")
    return ConnectionCheck(success=True, account=account)
