from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date

from boqtrack.common.logging import get_logger
from boqtrack.config import settings
from boqtrack.core.calendar.workdays import WorkdayCalendar
from boqtrack.core.lookahead.calculator import (
    activities_for_project,
    calculate_project_lookahead,
    index_actual_records,
)
from boqtrack.core.lookahead.matcher import NameMatcher, activity_names_match
from boqtrack.core.lookahead.schemas import (
    Activity,
    LookAheadReport,
    LookAheadSummary,
    ProgressRecord,
    Project,
    ProjectLookAhead,
)
from boqtrack.core.lookahead.window import LookAheadWindow, filter_projects_in_window

logger = get_logger("lookahead.service")


class LookAheadService:
    def __init__(
        self,
        calendar: WorkdayCalendar | None = None,
        name_matcher: NameMatcher = activity_names_match,
        include_undated: bool | None = None,
    ):
        self.calendar = calendar or WorkdayCalendar.from_settings()
        self.name_matcher = name_matcher
        self.include_undated = include_undated

    def forecast_projects(
        self,
        projects: Iterable[Project],
        activities: Sequence[Activity],
        records: Iterable[ProgressRecord],
        today: date | None = None,
    ) -> list[ProjectLookAhead]:
        today = today or date.today()
        index = index_actual_records(records)

        lookaheads = [
            calculate_project_lookahead(
                project,
                activities_for_project(project, activities),
                index,
                today=today,
                calendar=self.calendar,
                name_matcher=self.name_matcher,
                include_undated=self.include_undated,
            )
            for project in projects
        ]
        logger.info(
            "Forecast %d projects from %d activities and %d actual progress records",
            len(lookaheads),
            len(activities),
            index.size,
        )
        return lookaheads

    def build_report(
        self,
        projects: Iterable[Project],
        activities: Sequence[Activity],
        records: Iterable[ProgressRecord],
        window: LookAheadWindow | None = None,
        today: date | None = None,
    ) -> LookAheadReport:
        today = today or date.today()
        window = window or LookAheadWindow.for_period(
            settings.DEFAULT_LOOKAHEAD_PERIOD, settings.DEFAULT_LOOKAHEAD_COUNT, today
        )

        projects = list(projects)
        active = [p for p in projects if p.is_active]
        if len(active) < len(projects):
            logger.info("Skipping %d inactive projects", len(projects) - len(active))

        lookaheads = self.forecast_projects(active, activities, records, today=today)
        in_window = filter_projects_in_window(lookaheads, window)

        all_activities = [a for p in lookaheads for a in p.activities]
        completed = sum(1 for a in all_activities if a.is_completed)
        forecast = sum(1 for a in all_activities if a.completion_date is not None)

        summary = LookAheadSummary(
            total_projects=len(lookaheads),
            projects_in_window=len(in_window),
            total_activities=len(all_activities),
            completed_activities=completed,
            forecast_activities=forecast,
            unforecastable_activities=len(all_activities) - completed - forecast,
            inactive_projects=len(projects) - len(active),
        )

        return LookAheadReport(
            generated_on=today,
            window_start=window.start,
            window_end=window.end,
            projects=lookaheads,
            projects_in_window=in_window,
            summary=summary,
        )
