from datetime import date

import pytest
from pydantic import ValidationError

from boqtrack.common.enums import LookAheadPeriod
from boqtrack.core.lookahead.schemas import Activity, ProgressRecord, Project
from boqtrack.core.lookahead.service import LookAheadService
from boqtrack.core.lookahead.window import LookAheadWindow


@pytest.mark.parametrize(
    "period,count,end",
    [
        (LookAheadPeriod.DAYS, 10, date(2024, 1, 31)),
        ("weeks", 2, date(2024, 2, 4)),
        ("months", 1, date(2024, 2, 21)),
        ("months", 0, date(2024, 1, 21)),
    ],
)
def test_window_for_period(period, count, end):
    window = LookAheadWindow.for_period(period, count, today=date(2024, 1, 21))

    assert window.start == date(2024, 1, 21)
    assert window.end == end


def test_window_month_end_is_clamped():
    window = LookAheadWindow.for_period("months", 1, today=date(2024, 1, 31))
    assert window.end == date(2024, 2, 29)


def test_window_rejects_bad_input():
    with pytest.raises(ValueError):
        LookAheadWindow.for_period("fortnights", 1, today=date(2024, 1, 1))
    with pytest.raises(ValueError):
        LookAheadWindow.for_period("days", -1, today=date(2024, 1, 1))
    with pytest.raises(ValidationError):
        LookAheadWindow(start=date(2024, 2, 1), end=date(2024, 1, 1))


@pytest.fixture
def portfolio():
    projects = [
        Project(id="1", project_code="P1", project_name="Soon"),
        Project(id="2", project_code="P2", project_name="Later"),
        Project(id="3", project_code="P3", project_name="Done"),
        Project(id="4", project_code="P4", project_name="Unknown"),
    ]
    activities = [
        Activity(project_code="P1", activity_name="Paving", total_units=50, calendar_duration=5),
        Activity(project_code="P2", activity_name="Paving", total_units=500, calendar_duration=250),
        Activity(project_code="P3", activity_name="Paving", total_units=20),
        Activity(project_code="P4", activity_name="Paving", total_units=20),
    ]
    records = [
        ProgressRecord(project_code="P3", activity_name="Paving", quantity=20, input_type="Actual", activity_date="2024-06-01"),
    ]
    return projects, activities, records


def test_build_report(portfolio, today, calendar):
    projects, activities, records = portfolio
    window = LookAheadWindow(start=today, end=date(2024, 7, 12))

    report = LookAheadService(calendar=calendar).build_report(
        projects, activities, records, window=window, today=today
    )

    assert report.generated_on == today
    assert [p.project_name for p in report.projects] == ["Soon", "Later", "Done", "Unknown"]
    # "Later" finishes outside the window, "Done" has no remaining work
    assert [p.project_name for p in report.projects_in_window] == ["Soon", "Unknown"]
    assert report.summary.total_projects == 4
    assert report.summary.projects_in_window == 2
    assert report.summary.total_activities == 4
    assert report.summary.completed_activities == 1
    assert report.summary.forecast_activities == 2
    assert report.summary.unforecastable_activities == 1


def test_build_report_uses_default_window(portfolio, today, calendar):
    projects, activities, records = portfolio

    report = LookAheadService(calendar=calendar).build_report(projects, activities, records, today=today)

    assert report.window_start == today
    assert report.window_end > today


def test_project_status_is_normalised():
    assert Project(**{"Project Status": " On Going "}).project_status == "on-going"
    assert Project(project_status="Site Preparation").is_active
    assert Project().is_active
    assert not Project(project_status="Completed").is_active


def test_inactive_projects_are_left_out(portfolio, today, calendar):
    projects, activities, records = portfolio
    projects = [
        projects[0].model_copy(update={"project_status": "on-going"}),
        projects[1].model_copy(update={"project_status": "completed"}),
        projects[3].model_copy(update={"project_status": "cancelled"}),
    ]
    window = LookAheadWindow(start=today, end=date(2024, 7, 12))

    report = LookAheadService(calendar=calendar).build_report(
        projects, activities, records, window=window, today=today
    )

    assert [p.project_name for p in report.projects] == ["Soon"]
    assert [p.project_name for p in report.projects_in_window] == ["Soon"]
    assert report.summary.total_projects == 1
    assert report.summary.total_activities == 1
    assert report.summary.inactive_projects == 2
