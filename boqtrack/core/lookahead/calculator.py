"""Activity and project completion forecasting.

Remaining quantity divided by observed productivity gives the remaining
workdays, which the workday calendar turns into a completion date:

- actual units are the sum of matched *Actual* progress up to yesterday,
  clamped between zero and the activity total;
- observed productivity is actual units per distinct reporting day;
- when nothing has been observed yet, planned productivity
  (total units / calendar duration) is used instead;
- an activity with no productivity signal at all gets no completion date,
  and neither does one whose remaining workdays run past the calendar.
"""

from __future__ import annotations

import math
from collections import defaultdict
from collections.abc import Iterable
from datetime import date, timedelta

from boqtrack.common.logging import get_logger
from boqtrack.common.parsing import clean_text
from boqtrack.config import settings
from boqtrack.core.calendar.workdays import WorkdayCalendar
from boqtrack.core.lookahead.matcher import NameMatcher, activity_names_match, kpi_matches_activity
from boqtrack.core.lookahead.schemas import (
    Activity,
    ActivityLookAhead,
    ProgressRecord,
    Project,
    ProjectLookAhead,
)

logger = get_logger("lookahead.calculator")


class ProgressIndex:
    """Actual progress records keyed by every project code they carry.

    Looking up an activity returns only the records that could pass the
    project-identity check, so forecasting a whole portfolio does not run
    the matcher over every record for every activity.
    """

    def __init__(self, records: Iterable[ProgressRecord]):
        self._by_code: dict[str, list[ProgressRecord]] = defaultdict(list)
        self.size = 0
        for record in records:
            if not record.is_actual:
                continue
            self.size += 1
            for code in _codes(record.project_code, record.full_code):
                self._by_code[code].append(record)

    def candidates(self, activity: Activity) -> list[ProgressRecord]:
        seen: set[int] = set()
        found: list[ProgressRecord] = []
        for code in sorted(_codes(activity.project_code, activity.full_code)):
            for record in self._by_code.get(code, ()):
                if id(record) not in seen:
                    seen.add(id(record))
                    found.append(record)
        return found


def _codes(code: str, full_code: str) -> set[str]:
    return {c for c in (clean_text(code).upper(), full_code) if c}


def index_actual_records(records: Iterable[ProgressRecord]) -> ProgressIndex:
    return ProgressIndex(records)


def calculate_activity_lookahead(
    activity: Activity,
    records: Iterable[ProgressRecord] | ProgressIndex,
    *,
    today: date | None = None,
    calendar: WorkdayCalendar | None = None,
    name_matcher: NameMatcher = activity_names_match,
    include_undated: bool | None = None,
) -> ActivityLookAhead:
    today = today or date.today()
    calendar = calendar or WorkdayCalendar.from_settings()
    if include_undated is None:
        include_undated = settings.INCLUDE_UNDATED_PROGRESS

    candidates = records.candidates(activity) if isinstance(records, ProgressIndex) else records
    cutoff = today - timedelta(days=1)
    total_units = activity.resolved_total_units

    actual_units = 0.0
    reported_days: set[date] = set()
    undated = 0
    for record in candidates:
        if not record.is_actual or not kpi_matches_activity(record, activity, name_matcher):
            continue

        record_day = record.record_date
        if record_day is None:
            if not include_undated:
                continue
            undated += 1
        elif record_day > cutoff:
            continue
        else:
            reported_days.add(record_day)

        actual_units += record.quantity

    if undated:
        logger.debug(
            "Activity %s (%s): counted %d actual record(s) without a usable date",
            activity.id or activity.activity_name,
            activity.full_code,
            undated,
        )

    # correction entries can drive the sum below zero
    capped_actual = max(0.0, min(actual_units, total_units) if total_units > 0 else actual_units)
    remaining_units = max(0.0, total_units - capped_actual)
    actual_days = len(reported_days)

    actual_productivity = 0.0
    if actual_units > 0 and actual_days > 0:
        actual_productivity = actual_units / actual_days

    planned_productivity = 0.0
    if total_units > 0 and activity.calendar_duration > 0:
        planned_productivity = total_units / activity.calendar_duration

    productivity = actual_productivity if actual_productivity > 0 else planned_productivity
    is_completed = remaining_units == 0 and total_units > 0

    remaining_days = 0
    completion_date: date | None = None
    if not is_completed and productivity > 0:
        # drop float noise before rounding up to whole days
        remaining_days = math.ceil(round(remaining_units / productivity, 9))
        try:
            completion_date = calendar.advance(today, remaining_days)
        except ValueError as e:
            logger.warning(
                "Activity %s (%s): no completion date, %s",
                activity.id or activity.activity_name,
                activity.full_code,
                e,
            )

    return ActivityLookAhead(
        activity=activity,
        total_units=total_units,
        actual_units=capped_actual,
        remaining_units=remaining_units,
        actual_productivity=actual_productivity,
        planned_productivity=planned_productivity,
        remaining_days=remaining_days,
        completion_date=completion_date,
        is_completed=is_completed,
        actual_days=actual_days,
        undated_records=undated,
    )


# ---------------------------------------------------------------------------
# Project level
# ---------------------------------------------------------------------------


def activities_for_project(project: Project, activities: Iterable[Activity]) -> list[Activity]:
    project_code = project.full_code
    if not project_code:
        return []
    return [a for a in activities if a.full_code == project_code]


def completion_month_label(day: date) -> str:
    return f"{day:%B} {day.year}"


def completion_week_label(day: date) -> str:
    iso = day.isocalendar()
    return f"Week {iso.week}, {iso.year}"


def completion_day_label(day: date) -> str:
    return f"{day:%A}, {day:%B} {day.day}, {day.year}"


def calculate_project_lookahead(
    project: Project,
    activities: Iterable[Activity],
    records: Iterable[ProgressRecord] | ProgressIndex,
    *,
    today: date | None = None,
    calendar: WorkdayCalendar | None = None,
    name_matcher: NameMatcher = activity_names_match,
    include_undated: bool | None = None,
) -> ProjectLookAhead:
    today = today or date.today()
    calendar = calendar or WorkdayCalendar.from_settings()
    if not isinstance(records, ProgressIndex):
        records = ProgressIndex(records)

    results = [
        calculate_activity_lookahead(
            activity,
            records,
            today=today,
            calendar=calendar,
            name_matcher=name_matcher,
            include_undated=include_undated,
        )
        for activity in activities
    ]

    completion_dates = [r.completion_date for r in results if r.completion_date is not None]
    latest = max(completion_dates) if completion_dates else None

    return ProjectLookAhead(
        project_id=project.id,
        project_code=project.full_code,
        project_name=project.project_name,
        activities=results,
        latest_completion_date=latest,
        completion_month=completion_month_label(latest) if latest else None,
        completion_week=completion_week_label(latest) if latest else None,
        completion_day=completion_day_label(latest) if latest else None,
    )
