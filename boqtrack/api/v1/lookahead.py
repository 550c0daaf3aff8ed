from datetime import date

from fastapi import APIRouter
from pydantic import BaseModel, ValidationError

from boqtrack.api.deps import CalendarConfig, build_calendar
from boqtrack.common.enums import LookAheadPeriod
from boqtrack.common.exceptions import BadRequestError
from boqtrack.config import settings
from boqtrack.core.lookahead.calculator import calculate_activity_lookahead
from boqtrack.core.lookahead.schemas import (
    Activity,
    ActivityLookAhead,
    LookAheadReport,
    ProgressRecord,
    Project,
)
from boqtrack.core.lookahead.service import LookAheadService
from boqtrack.core.lookahead.window import LookAheadWindow

router = APIRouter(prefix="/lookahead", tags=["Lookahead"])


# ---------- Schemas ----------


class WindowRequest(BaseModel):
    period: str | None = None
    count: int | None = None
    start: date | None = None
    end: date | None = None


class ActivityLookAheadRequest(BaseModel):
    activity: Activity
    records: list[ProgressRecord] = []
    today: date | None = None
    include_undated: bool | None = None
    calendar: CalendarConfig | None = None


class ProjectLookAheadRequest(BaseModel):
    projects: list[Project]
    activities: list[Activity] = []
    records: list[ProgressRecord] = []
    today: date | None = None
    include_undated: bool | None = None
    window: WindowRequest | None = None
    calendar: CalendarConfig | None = None


# ---------- Endpoints ----------


@router.post("/activity", response_model=ActivityLookAhead)
async def forecast_activity(body: ActivityLookAheadRequest):
    return calculate_activity_lookahead(
        body.activity,
        body.records,
        today=body.today,
        calendar=build_calendar(body.calendar),
        include_undated=body.include_undated,
    )


@router.post("/projects", response_model=LookAheadReport)
async def forecast_projects(body: ProjectLookAheadRequest):
    today = body.today or date.today()
    window = _resolve_window(body.window, today)

    service = LookAheadService(
        calendar=build_calendar(body.calendar),
        include_undated=body.include_undated,
    )
    return service.build_report(
        body.projects,
        body.activities,
        body.records,
        window=window,
        today=today,
    )


# ---------- Helpers ----------


def _resolve_window(request: WindowRequest | None, today: date) -> LookAheadWindow:
    request = request or WindowRequest()
    try:
        if request.start is not None or request.end is not None:
            return LookAheadWindow(start=request.start or today, end=request.end or today)
        return LookAheadWindow.for_period(
            request.period or settings.DEFAULT_LOOKAHEAD_PERIOD,
            settings.DEFAULT_LOOKAHEAD_COUNT if request.count is None else request.count,
            today,
        )
    except ValidationError as e:
        raise BadRequestError(f"Invalid lookahead window: {e.errors()[0]['msg']}")
    except ValueError:
        periods = ", ".join(p.value for p in LookAheadPeriod)
        raise BadRequestError(
            f"Invalid lookahead window: period must be one of {periods} and count must not be negative"
        )
