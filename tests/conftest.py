from datetime import date

import pytest

from pointsplan.testdata import populate_with_test_data
from pointsplan.workbook import new_workbook

TODAY = date(2025, 3, 10)

_JIRA_ENV_KEYS = (
    "JIRA_URL",
    "JIRA_EMAIL",
    "JIRA_API_TOKEN",
    "JIRA_PROJECT_KEY",
    "JIRA_ISSUE_TYPE",
    "JIRA_STORY_POINTS_FIELD",
    "JIRA_GO_LIVE_DATE_FIELD",
    "JIRA_START_DATE_FIELD",
    "JIRA_DUE_DATE_FIELD",
    "JIRA_EXPORT_LOG_PATH",
    "PLANNING_METHOD",
    "PLANNING_SPRINT_DURATION",
    "PLANNING_FIRST_SPRINT",
    "PLANNING_START_DATE",
    "WORKBOOK_PATH",
    "OUTPUT_DIR",
    "STRUCTURED_LOGS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in _JIRA_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def empty_workbook():
    return new_workbook(month="March", year=2025, today=TODAY)


@pytest.fixture
def sample_workbook():
    workbook = new_workbook(month="March", year=2025, today=TODAY)
    populate_with_test_data(workbook, today=TODAY)
    return workbook
