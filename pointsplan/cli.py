"""Command line entry point for point planning."""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError

from pointsplan.config.logging import configure_logging
from pointsplan.config.settings import SPRINT_DURATIONS, AppSettings
from pointsplan.estimation import DEFAULT_SIZE_MAPPING
from pointsplan.exceptions import PointsPlanError
from pointsplan.jira import (
    ExportLog,
    JiraExporter,
    JiraGateway,
    build_confirmation_message,
    build_results_message,
    check_connection,
    collect_export_data,
    configuration_problem,
    export_to_csv,
    parse_scope,
)
from pointsplan.planning import (
    apply_planning,
    apply_sprint_planning,
    apply_waterfall_planning,
    clear_planning,
)
from pointsplan.schemas import PointsWorkbook
from pointsplan.testdata import clear_all_data, populate_with_test_data
from pointsplan.utils.logging import SecretRedactor
from pointsplan.workbook import (
    add_team,
    add_workstream,
    allocation_summary,
    load_workbook,
    new_workbook,
    priority_breakdown,
    refresh_team_assignments,
    remove_team,
    remove_workstream,
    save_workbook,
    team_capacity,
    workstream_budget,
)

logger = logging.getLogger(__name__)

app = typer.Typer(help="Plan monthly marketing work in t-shirt sized points.")
workstream_app = typer.Typer(help="Add or remove workstreams.")
team_app = typer.Typer(help="Add or remove teams.")
assignments_app = typer.Typer(help="Team assignment manifests.")
plan_app = typer.Typer(help="Sprint and waterfall planning.")
export_app = typer.Typer(help="Export plans to Jira or CSV.")
testdata_app = typer.Typer(help="Sample data for demos.")
app.add_typer(workstream_app, name="workstream")
app.add_typer(team_app, name="team")
app.add_typer(assignments_app, name="assignments")
app.add_typer(plan_app, name="plan")
app.add_typer(export_app, name="export")
app.add_typer(testdata_app, name="testdata")


class _State:
    settings: AppSettings
    workbook_path: Path


_state = _State()


def _fail(exc: Exception) -> typer.Exit:
    typer.secho(f"Error: {exc}", fg=typer.colors.RED)
    return typer.Exit(code=1)


def _load() -> PointsWorkbook:
    try:
        return load_workbook(_state.workbook_path)
    except (FileNotFoundError, PointsPlanError) as exc:
        raise _fail(exc) from exc


def _save(workbook: PointsWorkbook) -> None:
    save_workbook(workbook, _state.workbook_path)


def _start_date(value: Optional[datetime]) -> Optional[date]:
    return value.date() if value else None


@app.callback()
def main_options(
    workbook: Optional[Path] = typer.Option(
        None, "--workbook", "-w", help="Workbook YAML file (default from WORKBOOK_PATH)."
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level."),
) -> None:
    try:
        settings = AppSettings()
    except ValidationError as exc:
        raise _fail(exc) from exc
    configure_logging(
        level=log_level or settings.log_level,
        structured=settings.structured_logs or None,
    )
    _state.settings = settings
    _state.workbook_path = workbook or Path(settings.workbook_path)


@app.command("sizes", help="Show the t-shirt size to points mapping.")
def show_sizes() -> None:
    for label, points in DEFAULT_SIZE_MAPPING.items():
        typer.echo(f"{label:<3} {points:>3}")


@app.command("init", help="Create a workbook with the default workstreams.")
def init_workbook(
    month: Optional[str] = typer.Option(None, "--month", help="Planning month name."),
    year: Optional[int] = typer.Option(None, "--year", help="Planning year."),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing workbook."),
) -> None:
    if _state.workbook_path.exists() and not force:
        raise _fail(
            FileExistsError(f"{_state.workbook_path} exists, use --force to overwrite")
        )
    try:
        workbook = new_workbook(month=month, year=year)
    except ValueError as exc:
        raise _fail(exc) from exc
    _save(workbook)
    typer.secho(
        f"Created {_state.workbook_path} for {workbook.month} {workbook.year}",
        fg=typer.colors.GREEN,
    )


@workstream_app.command("add", help="Add a workstream with a 0% allocation.")
def workstream_add(name: str = typer.Argument(..., help="Workstream name.")) -> None:
    workbook = _load()
    try:
        add_workstream(workbook, name)
    except PointsPlanError as exc:
        raise _fail(exc) from exc
    _save(workbook)
    typer.secho(f"Added workstream {name.strip()}", fg=typer.colors.GREEN)


@workstream_app.command("remove", help="Remove a workstream and its assets.")
def workstream_remove(name: str = typer.Argument(..., help="Workstream name.")) -> None:
    workbook = _load()
    try:
        remove_workstream(workbook, name)
    except PointsPlanError as exc:
        raise _fail(exc) from exc
    _save(workbook)
    typer.secho(f"Removed workstream {name}", fg=typer.colors.GREEN)


@team_app.command("add", help="Add a team.")
def team_add(name: str = typer.Argument(..., help="Team name.")) -> None:
    workbook = _load()
    try:
        add_team(workbook, name)
    except PointsPlanError as exc:
        raise _fail(exc) from exc
    _save(workbook)
    typer.secho(f"Added team {name.strip()}", fg=typer.colors.GREEN)


@team_app.command("remove", help="Remove a team.")
def team_remove(name: str = typer.Argument(..., help="Team name.")) -> None:
    workbook = _load()
    try:
        remove_team(workbook, name)
    except PointsPlanError as exc:
        raise _fail(exc) from exc
    _save(workbook)
    typer.secho(f"Removed team {name}", fg=typer.colors.GREEN)


@assignments_app.command("refresh", help="Rebuild every team manifest.")
def assignments_refresh(
    sort: str = typer.Option(
        "workstream", "--sort", case_sensitive=False, help="workstream or date."
    ),
) -> None:
    workbook = _load()
    try:
        counts = refresh_team_assignments(workbook, sort_by=sort.lower())
    except ValueError as exc:
        raise _fail(exc) from exc
    _save(workbook)
    for team, count in counts.items():
        typer.echo(f"{team}: {count} assignments" if count else f"{team}: No assignments")


@app.command("summary", help="Show allocation, budgets and team capacity.")
def summary() -> None:
    workbook = _load()
    allocation = allocation_summary(workbook)
    typer.secho(
        f"{workbook.month} {workbook.year}: {workbook.capacity} points", bold=True
    )
    for row in allocation.rows:
        budget = workstream_budget(workbook, row.name)
        breakdown = priority_breakdown(workbook, row.name)
        over = budget.remaining < 0
        typer.secho(
            f"  {row.name:<12} {row.percent:>4.0%} {row.points:>4} pts  {budget.status}",
            fg=typer.colors.RED if over else None,
        )
        typer.echo(f"    remaining for PMM: {breakdown.pmm_share:.0%}")
    if not allocation.balanced:
        typer.secho(
            f"  Allocations total {allocation.total_percent:.0%}, expected 100%",
            fg=typer.colors.YELLOW,
        )

    for team in workbook.teams:
        capacity = team_capacity(team)
        utilization = (
            f"{capacity.utilization:.0%}" if capacity.utilization is not None else "-"
        )
        typer.secho(
            f"  {team.name:<12} net {capacity.net:>4}  used {capacity.total:>4} "
            f"({utilization})  {capacity.status}",
            fg=typer.colors.RED if capacity.total > capacity.net else None,
        )


@plan_app.command("sprint", help="Spread team manifests across sprints.")
def plan_sprint(
    start: Optional[datetime] = typer.Option(
        None, "--start", formats=["%Y-%m-%d"], help="First sprint start date."
    ),
    duration: Optional[str] = typer.Option(
        None, "--duration", help=f"One of: {', '.join(SPRINT_DURATIONS)}."
    ),
    first_sprint: Optional[int] = typer.Option(
        None, "--first-sprint", min=1, help="Number of the first sprint."
    ),
) -> None:
    workbook = _load()
    planning = _state.settings.planning
    updates = {}
    if duration:
        updates["planning_sprint_duration"] = duration
    if first_sprint:
        updates["planning_first_sprint"] = first_sprint
    try:
        if updates:
            planning = planning.model_validate({**planning.model_dump(), **updates})
        planned = apply_sprint_planning(workbook, planning, start=_start_date(start))
    except (ValueError, PointsPlanError) as exc:
        raise _fail(exc) from exc
    _save(workbook)
    typer.secho(f"Sprint planning applied to {planned} team(s)", fg=typer.colors.GREEN)


@plan_app.command("waterfall", help="Schedule team manifests member by member.")
def plan_waterfall(
    start: Optional[datetime] = typer.Option(
        None, "--start", formats=["%Y-%m-%d"], help="Schedule start date."
    ),
) -> None:
    workbook = _load()
    try:
        planned = apply_waterfall_planning(
            workbook, _state.settings.planning, start=_start_date(start)
        )
    except PointsPlanError as exc:
        raise _fail(exc) from exc
    _save(workbook)
    typer.secho(f"Waterfall planning applied to {planned} team(s)", fg=typer.colors.GREEN)


@plan_app.command("apply", help="Plan every team with the configured planning method.")
def plan_apply(
    start: Optional[datetime] = typer.Option(
        None, "--start", formats=["%Y-%m-%d"], help="Planning start date."
    ),
) -> None:
    workbook = _load()
    planning = _state.settings.planning
    try:
        planned = apply_planning(workbook, planning, start=_start_date(start))
    except PointsPlanError as exc:
        raise _fail(exc) from exc
    _save(workbook)
    typer.secho(
        f"{planning.planning_method} planning applied to {planned} team(s)",
        fg=typer.colors.GREEN,
    )


@plan_app.command("clear", help="Remove planning, keeping manifests and initiatives.")
def plan_clear() -> None:
    workbook = _load()
    cleared = clear_planning(workbook)
    _save(workbook)
    typer.secho(f"Cleared planning for {cleared} team(s)", fg=typer.colors.GREEN)


def _redactor() -> SecretRedactor:
    return SecretRedactor.from_environ(
        extra_secrets=[_state.settings.jira.jira_api_token or ""]
    )


def _write_csv(workbook: PointsWorkbook, teams, workstreams) -> Path:
    scope = parse_scope(workbook, teams, workstreams)
    data = collect_export_data(workbook, scope)
    return export_to_csv(data, _state.settings.output_dir)


@export_app.command("jira", help="Create epics, sprints and stories in Jira.")
def export_jira(
    teams: List[str] = typer.Option([], "--team", help="Limit to a team (repeatable)."),
    workstreams: List[str] = typer.Option(
        [], "--workstream", help="Limit to a workstream (repeatable)."
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation."),
    csv_fallback: bool = typer.Option(
        False, "--csv-fallback", help="Write CSV when the connection fails."
    ),
) -> None:
    workbook = _load()
    jira_settings = _state.settings.jira
    try:
        scope = parse_scope(workbook, teams, workstreams)
        data = collect_export_data(workbook, scope)
    except PointsPlanError as exc:
        raise _fail(exc) from exc

    redactor = _redactor()
    gateway = None
    if configuration_problem(jira_settings) is None:
        gateway = JiraGateway(jira_settings, redactor=redactor)
    check = check_connection(jira_settings, gateway=gateway)
    if not check.success:
        typer.secho(f"Jira connection failed: {check.error}", fg=typer.colors.RED)
        if csv_fallback or (not yes and typer.confirm("Export to CSV instead?")):
            try:
                path = export_to_csv(data, _state.settings.output_dir)
            except PointsPlanError as exc:
                raise _fail(exc) from exc
            typer.secho(f"Wrote {path} ({len(data.items)} items)", fg=typer.colors.YELLOW)
            return
        raise typer.Exit(code=1)

    typer.echo(build_confirmation_message(data, scope))
    if not yes and not typer.confirm("Continue with export?"):
        raise typer.Exit(code=0)

    exporter = JiraExporter(
        gateway,
        log=ExportLog(jira_settings.jira_export_log_path, redactor=redactor),
    )
    result = exporter.execute(data, scope)
    typer.secho(
        build_results_message(result),
        fg=typer.colors.GREEN if result.success else typer.colors.RED,
    )
    if not result.success:
        raise typer.Exit(code=1)


@export_app.command("csv", help="Write planned stories to a CSV file.")
def export_csv(
    teams: List[str] = typer.Option([], "--team", help="Limit to a team (repeatable)."),
    workstreams: List[str] = typer.Option(
        [], "--workstream", help="Limit to a workstream (repeatable)."
    ),
) -> None:
    workbook = _load()
    try:
        path = _write_csv(workbook, teams, workstreams)
    except PointsPlanError as exc:
        raise _fail(exc) from exc
    typer.secho(f"Wrote {path}", fg=typer.colors.GREEN)


@export_app.command("test-connection", help="Check the Jira settings and credentials.")
def export_test_connection() -> None:
    check = check_connection(_state.settings.jira)
    if not check.success:
        raise _fail(RuntimeError(check.error))
    typer.secho(
        f"Connected to Jira as {check.account or 'unknown user'}", fg=typer.colors.GREEN
    )


@export_app.command("find-field", help="List Jira fields that look like story points.")
def export_find_field() -> None:
    jira_settings = _state.settings.jira
    problem = configuration_problem(jira_settings)
    if problem:
        raise _fail(RuntimeError(problem))
    try:
        gateway = JiraGateway(jira_settings, redactor=_redactor())
        fields = gateway.find_story_points_fields()
    except (ValueError, PointsPlanError) as exc:
        raise _fail(exc) from exc
    if not fields:
        typer.secho("No story points field found", fg=typer.colors.YELLOW)
        return
    for field in fields:
        typer.echo(f"{field.get('id')}: {field.get('name')}")


@export_app.command("log", help="Show previous Jira exports.")
def export_log(
    limit: int = typer.Option(10, "--limit", min=1, help="Entries to show."),
) -> None:
    entries = ExportLog(_state.settings.jira.jira_export_log_path).entries()
    if not entries:
        typer.echo("No exports logged yet")
        return
    for entry in entries[-limit:]:
        typer.echo(
            f"{entry.timestamp:%Y-%m-%d %H:%M:%S}  {entry.scope:<20} "
            f"epics={entry.epics} sprints={entry.sprints} stories={entry.stories} "
            f"failed={entry.failed}  {entry.status}"
        )
        for error in entry.errors:
            typer.echo(f"    {error}")


@testdata_app.command("populate", help="Fill the workbook with the sample month.")
def testdata_populate(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation."),
) -> None:
    if _state.workbook_path.exists():
        workbook = _load()
        if not yes and not typer.confirm("Replace the workbook contents with test data?"):
            raise typer.Exit(code=0)
    else:
        workbook = new_workbook()
    result = populate_with_test_data(workbook)
    _save(workbook)
    typer.secho(
        f"Populated {result.teams} teams, {result.assets} assets and "
        f"{result.initiatives} initiatives",
        fg=typer.colors.GREEN,
    )


@testdata_app.command("clear", help="Clear all data but keep workstreams and teams.")
def testdata_clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation."),
) -> None:
    workbook = _load()
    if not yes and not typer.confirm("Clear all data?"):
        raise typer.Exit(code=0)
    clear_all_data(workbook)
    _save(workbook)
    typer.secho("All data has been cleared", fg=typer.colors.GREEN)


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
