from datetime import date
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from pointsplan.cli import app
from pointsplan.jira import ExportLog
from pointsplan.planning import apply_sprint_planning
from pointsplan.workbook import load_workbook, refresh_team_assignments, save_workbook

runner = CliRunner()


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr("pointsplan.cli.configure_logging", lambda **kwargs: None)


@pytest.fixture
def workbook_path(tmp_path, sample_workbook):
    path = tmp_path / "points.yaml"
    save_workbook(sample_workbook, path)
    return path


@pytest.fixture
def planned_path(tmp_path, sample_workbook):
    refresh_team_assignments(sample_workbook)
    apply_sprint_planning(sample_workbook, start=date(2025, 3, 17))
    path = tmp_path / "planned.yaml"
    save_workbook(sample_workbook, path)
    return path


def _invoke(path, *args):
    return runner.invoke(app, ["--workbook", str(path), *args])


def test_sizes():
    result = runner.invoke(app, ["sizes"])

    assert result.exit_code == 0
    assert "XS    1" in result.output
    assert "XL   21" in result.output


def test_init_refuses_to_overwrite(tmp_path):
    path = tmp_path / "new.yaml"

    first = _invoke(path, "init", "--month", "April", "--year", "2025")
    second = _invoke(path, "init")

    assert first.exit_code == 0
    assert "Created" in first.output
    assert load_workbook(path).month == "April"
    assert second.exit_code == 1
    assert "--force" in second.output


def test_missing_workbook_fails(tmp_path):
    result = _invoke(tmp_path / "missing.yaml", "summary")

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_workstream_and_team_commands(workbook_path):
    assert _invoke(workbook_path, "workstream", "add", "Radio").exit_code == 0
    assert _invoke(workbook_path, "team", "add", "Video").exit_code == 0
    duplicate = _invoke(workbook_path, "team", "add", "Video")
    removed = _invoke(workbook_path, "workstream", "remove", "ASO")

    assert duplicate.exit_code == 1
    assert removed.exit_code == 0
    workbook = load_workbook(workbook_path)
    assert "Radio" in workbook.workstream_names()
    assert "ASO" not in workbook.workstream_names()
    assert "Video" in workbook.team_names()


def test_assignments_refresh(workbook_path):
    result = _invoke(workbook_path, "assignments", "refresh", "--sort", "date")

    assert result.exit_code == 0
    assert "Creative: 21 assignments" in result.output
    assert len(load_workbook(workbook_path).team("Content").manifest) == 17


def test_assignments_refresh_rejects_unknown_sort(workbook_path):
    result = _invoke(workbook_path, "assignments", "refresh", "--sort", "size")

    assert result.exit_code == 1


def test_summary(workbook_path):
    result = _invoke(workbook_path, "summary")

    assert result.exit_code == 0
    assert "March 2025: 100 points" in result.output
    assert "OVER by 33" in result.output


def test_plan_sprint_and_clear(workbook_path):
    _invoke(workbook_path, "assignments", "refresh")

    planned = _invoke(
        workbook_path, "plan", "sprint", "--start", "2025-03-17", "--duration", "1 week"
    )

    assert planned.exit_code == 0
    assert "Sprint planning applied to 3 team(s)" in planned.output
    plan = load_workbook(workbook_path).team("Creative").plan
    assert plan.sprint_duration == "1 week"
    assert plan.start_date == date(2025, 3, 17)

    cleared = _invoke(workbook_path, "plan", "clear")
    assert "Cleared planning for 3 team(s)" in cleared.output
    assert load_workbook(workbook_path).team("Creative").plan is None


def test_plan_sprint_rejects_unknown_duration(workbook_path):
    _invoke(workbook_path, "assignments", "refresh")

    result = _invoke(workbook_path, "plan", "sprint", "--duration", "3 weeks")

    assert result.exit_code == 1


def test_plan_waterfall(workbook_path):
    _invoke(workbook_path, "assignments", "refresh")

    result = _invoke(workbook_path, "plan", "waterfall", "--start", "2025-03-17")

    assert result.exit_code == 0
    assert load_workbook(workbook_path).team("Content").plan.method == "Waterfall"


def test_export_csv(planned_path, tmp_path, monkeypatch):
    out = tmp_path / "exports"
    monkeypatch.setenv("OUTPUT_DIR", str(out))

    result = _invoke(planned_path, "export", "csv", "--team", "Creative")

    assert result.exit_code == 0
    files = list(out.glob("Jira_Export_*.csv"))
    assert len(files) == 1
    assert len(files[0].read_text(encoding="utf-8").splitlines()) == 22


def test_export_jira_without_configuration(planned_path, tmp_path, monkeypatch):
    monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "exports"))

    refused = _invoke(planned_path, "export", "jira", "--yes")
    fallback = _invoke(planned_path, "export", "jira", "--yes", "--csv-fallback")

    assert refused.exit_code == 1
    assert "Jira connection failed: Invalid Jira URL" in refused.output
    assert fallback.exit_code == 0
    assert list((tmp_path / "exports").glob("*.csv"))


def test_export_jira(planned_path, tmp_path, monkeypatch):
    log_path = tmp_path / "export.jsonl"
    monkeypatch.setenv("JIRA_URL", "https://example.atlassian.net")
    monkeypatch.setenv("JIRA_EMAIL", "pm@example.com")
    monkeypatch.setenv("JIRA_API_TOKEN", "token-123")
    monkeypatch.setenv("JIRA_EXPORT_LOG_PATH", str(log_path))
    fake_client = MagicMock()
    fake_client.myself.return_value = {"displayName": "PM"}
    fake_client.jql.return_value = {"issues": []}
    fake_client.create_issue.return_value = {"key": "MKTG-1"}
    fake_client.get_all_agile_boards.return_value = {"values": [{"id": 1}]}
    fake_client.create_sprint.return_value = {"id": 5}

    with patch("atlassian.Jira", return_value=fake_client) as mock_jira:
        result = _invoke(
            planned_path, "export", "jira", "--workstream", "Portal", "--yes"
        )

    assert result.exit_code == 0, result.output
    assert mock_jira.call_count == 1
    fake_client.myself.assert_called_once()
    assert "Scope: Workstreams (Portal)" in result.output
    assert "Export completed successfully!" in result.output
    entry = ExportLog(log_path).entries()[0]
    assert (entry.status, entry.stories) == ("Success", 10)

    history = _invoke(planned_path, "export", "log")
    assert "Success" in history.output


def test_export_test_connection_reports_problem(tmp_path):
    result = _invoke(tmp_path / "unused.yaml", "export", "test-connection")

    assert result.exit_code == 1
    assert "Invalid Jira URL" in result.output


def test_testdata_populate_creates_workbook(tmp_path):
    path = tmp_path / "demo.yaml"

    result = _invoke(path, "testdata", "populate", "--yes")

    assert result.exit_code == 0
    assert "Populated 3 teams, 42 assets and 6 initiatives" in result.output
    assert load_workbook(path).team_names() == ["Creative", "Performance", "Content"]


def test_testdata_clear(workbook_path):
    result = _invoke(workbook_path, "testdata", "clear", "--yes")

    assert result.exit_code == 0
    assert load_workbook(workbook_path).strategic_priorities == []


def test_invalid_environment_setting_is_reported(monkeypatch):
    monkeypatch.setenv("PLANNING_SPRINT_DURATION", "3 weeks")

    result = runner.invoke(app, ["sizes"])

    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "planning_sprint_duration" in result.output
    assert isinstance(result.exception, SystemExit)


def test_plan_apply_uses_configured_method(workbook_path, monkeypatch):
    monkeypatch.setenv("PLANNING_METHOD", "Waterfall")
    _invoke(workbook_path, "assignments", "refresh")

    result = _invoke(workbook_path, "plan", "apply", "--start", "2025-03-17")

    assert result.exit_code == 0, result.output
    assert "Waterfall planning applied to 3 team(s)" in result.output
    assert load_workbook(workbook_path).team("Creative").plan.method == "Waterfall"


def test_export_find_field_failure_hides_token(tmp_path, monkeypatch):
    monkeypatch.setenv("JIRA_URL", "https://example.atlassian.net")
    monkeypatch.setenv("JIRA_EMAIL", "pm@example.com")
    monkeypatch.setenv("JIRA_API_TOKEN", "token-123")
    fake_client = MagicMock()
    fake_client.myself.return_value = {"displayName": "PM"}
    fake_client.get_all_fields.side_effect = RuntimeError("403 Forbidden token-123")

    with patch("atlassian.Jira", return_value=fake_client):
        result = _invoke(tmp_path / "unused.yaml", "export", "find-field")

    assert result.exit_code == 1
    assert "Field lookup failed" in result.output
    assert "token-123" not in result.output
