from datetime import date

from pointsplan.estimation import size_cost
from pointsplan.testdata import clear_all_data, populate_with_test_data
from pointsplan.workbook import allocation_summary, refresh_team_assignments

TODAY = date(2025, 3, 10)


def test_populate_fills_every_section(empty_workbook):
    summary = populate_with_test_data(empty_workbook, today=date(2025, 7, 2))

    assert (summary.teams, summary.workstreams, summary.initiatives) == (3, 4, 6)
    assert summary.strategic_priorities == 4
    assert summary.workstream_priorities == 13
    assert summary.assets == 42
    assert empty_workbook.month == "July"
    assert empty_workbook.year == 2025
    assert empty_workbook.team_names() == ["Creative", "Performance", "Content"]


def test_allocations_balance(sample_workbook):
    summary = allocation_summary(sample_workbook)

    assert summary.balanced
    assert summary.total_points == sample_workbook.capacity


def test_go_live_dates_are_relative_to_today(sample_workbook):
    teaser = sample_workbook.workstream("SoMe").assets[0]
    initiative = sample_workbook.team("Content").initiatives[1]

    assert teaser.description == "Free House Teaser"
    assert teaser.go_live_date == date(2025, 4, 9)
    assert initiative.go_live_date == date(2025, 3, 24)


def test_every_size_is_a_declared_label(sample_workbook):
    sizes = [asset.size for ws in sample_workbook.workstreams for asset in ws.assets]
    sizes += [i.size for team in sample_workbook.teams for i in team.initiatives]

    assert all(size_cost(size) > 0 for size in sizes)


def test_populate_keeps_extra_workstreams(empty_workbook):
    empty_workbook.workstreams[0].name = "Radio"

    populate_with_test_data(empty_workbook, today=TODAY)

    radio = empty_workbook.workstream("Radio")
    assert radio.allocation == 0.0
    assert radio.assets == []
    assert empty_workbook.workstream("SoMe").allocation == 0.5


def test_clear_all_data(sample_workbook):
    refresh_team_assignments(sample_workbook)

    clear_all_data(sample_workbook)

    assert sample_workbook.strategic_priorities == []
    assert sample_workbook.workstream_names() == ["SoMe", "PUA", "ASO", "Portal"]
    for workstream in sample_workbook.workstreams:
        assert workstream.allocation == 0.0
        assert workstream.assets == []
    for team in sample_workbook.teams:
        assert team.members == 0
        assert team.working_days == 20
        assert team.initiatives == []
        assert team.manifest == []
        assert team.plan is None
