from datetime import date, timedelta

import pytest

from boqtrack.core.calendar.schemas import Holiday
from boqtrack.core.calendar.workdays import MAX_ADVANCE_WORKDAYS, WorkdayCalendar, sunday_based_weekday


def test_sunday_based_weekday():
    assert sunday_based_weekday(date(2024, 6, 9)) == 0  # Sunday
    assert sunday_based_weekday(date(2024, 6, 14)) == 5  # Friday
    assert sunday_based_weekday(date(2024, 6, 15)) == 6  # Saturday


def test_friday_and_saturday_are_not_workdays(calendar):
    assert not calendar.is_workday(date(2024, 6, 14))
    assert not calendar.is_workday(date(2024, 6, 15))
    assert calendar.is_workday(date(2024, 6, 16))
    assert calendar.is_workday(date(2024, 6, 13))


def test_include_weekends_disables_weekend_exclusion():
    calendar = WorkdayCalendar(weekend_days=[5, 6], include_weekends=True)
    assert calendar.is_workday(date(2024, 6, 14))


def test_all_days_weekend_is_rejected():
    with pytest.raises(ValueError):
        WorkdayCalendar(weekend_days=range(7))


def test_fixed_and_recurring_holidays():
    calendar = WorkdayCalendar(
        holidays=[
            Holiday(date=date(2024, 4, 10), name="Eid Al-Fitr"),
            Holiday(date=date(2020, 12, 2), name="National Day", is_recurring=True),
        ]
    )
    assert calendar.is_holiday(date(2024, 4, 10))
    assert not calendar.is_holiday(date(2025, 4, 10))
    assert calendar.is_holiday(date(2026, 12, 2))
    assert calendar.holiday_name(date(2026, 12, 2)) == "National Day"
    assert calendar.holiday_name(date(2026, 12, 3)) is None
    assert not calendar.is_workday(date(2024, 4, 10))


def test_advance_zero_returns_start(calendar):
    start = date(2024, 6, 14)
    assert calendar.advance(start, 0) == start
    assert calendar.advance(start, -3) == start


def test_advance_does_not_count_start_day(calendar):
    # Wednesday -> Thursday
    assert calendar.advance(date(2024, 6, 12), 1) == date(2024, 6, 13)
    # Thursday -> Sunday, skipping Friday/Saturday
    assert calendar.advance(date(2024, 6, 13), 1) == date(2024, 6, 16)


def test_advance_skips_exactly_the_weekend_in_a_week(calendar):
    start = date(2024, 6, 9)  # Sunday
    result = calendar.advance(start, 5)

    assert result == date(2024, 6, 16)
    span = [start + timedelta(days=i) for i in range(1, (result - start).days + 1)]
    assert len(span) == 7
    assert sum(1 for d in span if calendar.is_weekend(d)) == 2


@pytest.mark.parametrize("workdays", range(1, 30))
def test_advance_never_lands_on_weekend(calendar, workdays):
    result = calendar.advance(date(2024, 6, 12), workdays)
    assert calendar.is_workday(result)


def test_advance_skips_holidays():
    calendar = WorkdayCalendar(holidays=[Holiday(date=date(2024, 6, 13), name="Site closure")])
    assert calendar.advance(date(2024, 6, 12), 1) == date(2024, 6, 16)


def test_count_and_list_working_days(calendar):
    days = calendar.working_days(date(2024, 6, 9), date(2024, 6, 15))
    assert days == [date(2024, 6, d) for d in (9, 10, 11, 12, 13)]
    assert calendar.count_workdays(date(2024, 6, 9), date(2024, 6, 15)) == 5
    assert calendar.count_workdays(date(2024, 6, 15), date(2024, 6, 9)) == 0


def test_end_date_for_duration(calendar):
    start = date(2024, 6, 12)
    assert calendar.end_date_for_duration(start, 0) == start
    assert calendar.end_date_for_duration(start, 1) == start
    assert calendar.end_date_for_duration(start, 3) == date(2024, 6, 16)


def test_distribute_quantity_sums_to_total(calendar):
    parts = calendar.distribute_quantity(date(2024, 6, 9), date(2024, 6, 15), 23)

    assert [q for _, q in parts] == [5, 5, 5, 4, 4]
    assert sum(q for _, q in parts) == 23
    assert all(calendar.is_workday(d) for d, _ in parts)


def test_distribute_quantity_without_workdays(calendar):
    assert calendar.distribute_quantity(date(2024, 6, 14), date(2024, 6, 15), 10) == []


def test_holidays_in_range_projects_recurring_dates():
    calendar = WorkdayCalendar(
        holidays=[
            Holiday(date=date(2020, 1, 1), name="New Year", is_recurring=True),
            Holiday(date=date(2024, 12, 2), name="National Day"),
            Holiday(date=date(2020, 2, 29), name="Leap Day", is_recurring=True),
        ]
    )
    found = calendar.holidays_in_range(date(2024, 11, 1), date(2025, 3, 31))

    assert [(h.date, h.name) for h in found] == [
        (date(2024, 12, 2), "National Day"),
        (date(2025, 1, 1), "New Year"),
    ]


def test_advance_rejects_counts_past_the_limit(calendar):
    with pytest.raises(ValueError):
        calendar.advance(date(2024, 6, 12), MAX_ADVANCE_WORKDAYS + 1)


def test_advance_past_last_date_raises_value_error(calendar):
    with pytest.raises(ValueError):
        calendar.advance(date(9999, 12, 28), 10)


def test_working_days_up_to_last_date():
    calendar = WorkdayCalendar(include_weekends=True)
    assert calendar.count_workdays(date(9999, 12, 30), date.max) == 2
