from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).resolve().parent.parent.parent / ".env"

SPRINT_DURATIONS = ("1 week", "2 weeks", "1 month")
PLANNING_METHODS = ("Sprint", "Waterfall")

API_TOKEN_PLACEHOLDER = "YOUR_API_TOKEN_HERE"
EMAIL_PLACEHOLDER = "your.email@company.com"


class JiraSettings(BaseSettings):
    """Jira connection and field mapping settings"""

    jira_url: Optional[str] = Field(None, env="JIRA_URL")
    jira_email: Optional[str] = Field(None, env="JIRA_EMAIL")
    jira_api_token: Optional[str] = Field(None, env="JIRA_API_TOKEN")
    jira_project_key: str = Field("MKTG", env="JIRA_PROJECT_KEY")
    jira_issue_type: str = Field("Story", env="JIRA_ISSUE_TYPE")
    jira_story_points_field: Optional[str] = Field(
        None,
        env="JIRA_STORY_POINTS_FIELD",
        description="Custom field id holding story points, e.g. customfield_10016.",
    )
    jira_go_live_date_field: Optional[str] = Field(None, env="JIRA_GO_LIVE_DATE_FIELD")
    jira_start_date_field: Optional[str] = Field(None, env="JIRA_START_DATE_FIELD")
    jira_due_date_field: str = Field(
        "duedate",
        env="JIRA_DUE_DATE_FIELD",
        description="Either the built-in 'duedate' field or a custom field id.",
    )
    jira_export_log_path: str = Field(
        "jira_export_log.jsonl", env="JIRA_EXPORT_LOG_PATH"
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator(
        "jira_url",
        "jira_email",
        "jira_api_token",
        "jira_story_points_field",
        "jira_go_live_date_field",
        "jira_start_date_field",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("jira_url", mode="after")
    @classmethod
    def _normalize_url(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        if value.startswith("https://https://"):
            value = value[8:]
        return value.rstrip("/")


class PlanningSettings(BaseSettings):
    """Defaults for sprint and waterfall planning"""

    planning_method: str = Field("Sprint", env="PLANNING_METHOD")
    planning_sprint_duration: str = Field("2 weeks", env="PLANNING_SPRINT_DURATION")
    planning_first_sprint: int = Field(1, env="PLANNING_FIRST_SPRINT", ge=1)
    planning_start_date: Optional[date] = Field(
        None,
        env="PLANNING_START_DATE",
        description="First day of planning. Defaults to the next Monday.",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("planning_method")
    @classmethod
    def _check_method(cls, value: str) -> str:
        if value not in PLANNING_METHODS:
            raise ValueError(f"planning_method must be one of {PLANNING_METHODS}")
        return value

    @field_validator("planning_sprint_duration")
    @classmethod
    def _check_duration(cls, value: str) -> str:
        if value not in SPRINT_DURATIONS:
            raise ValueError(
                f"planning_sprint_duration must be one of {SPRINT_DURATIONS}"
            )
        return value

    @field_validator("planning_start_date", mode="before")
    @classmethod
    def _blank_date(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class AppSettings(BaseSettings):
    """Main application settings"""

    jira: JiraSettings = Field(default_factory=JiraSettings)
    planning: PlanningSettings = Field(default_factory=PlanningSettings)

    workbook_path: str = Field("points.yaml", env="WORKBOOK_PATH")
    output_dir: str = Field(".", env="OUTPUT_DIR")
    log_level: str = Field("INFO", env="LOG_LEVEL")
    structured_logs: bool = Field(False, env="STRUCTURED_LOGS")

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

