from datetime import date

from fastapi import APIRouter
from pydantic import BaseModel

from boqtrack.api.deps import CalendarConfig, build_calendar
from boqtrack.common.exceptions import BadRequestError
from boqtrack.core.calendar.schemas import Holiday

router = APIRouter(prefix="/calendar", tags=["Calendar"])


# ---------- Schemas ----------


class AdvanceRequest(BaseModel):
    start: date
    workdays: int
    calendar: CalendarConfig | None = None


class AdvanceResponse(BaseModel):
    start: date
    workdays: int
    date: date


class WorkdaysRequest(BaseModel):
    start: date
    end: date
    calendar: CalendarConfig | None = None


class WorkdaysResponse(BaseModel):
    start: date
    end: date
    count: int
    days: list[date]
    holidays: list[Holiday]


# ---------- Endpoints ----------


@router.post("/advance", response_model=AdvanceResponse)
async def advance_workdays(body: AdvanceRequest):
    calendar = build_calendar(body.calendar)
    try:
        target = calendar.advance(body.start, body.workdays)
    except ValueError as e:
        raise BadRequestError(str(e))
    return AdvanceResponse(start=body.start, workdays=body.workdays, date=target)


@router.post("/workdays", response_model=WorkdaysResponse)
async def list_workdays(body: WorkdaysRequest):
    if body.end < body.start:
        raise BadRequestError("end must not be before start")

    calendar = build_calendar(body.calendar)
    days = calendar.working_days(body.start, body.end)
    return WorkdaysResponse(
        start=body.start,
        end=body.end,
        count=len(days),
        days=days,
        holidays=calendar.holidays_in_range(body.start, body.end),
    )
