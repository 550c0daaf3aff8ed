from pydantic import BaseModel

from boqtrack.common.exceptions import BadRequestError
from boqtrack.config import settings
from boqtrack.core.calendar.schemas import Holiday
from boqtrack.core.calendar.workdays import WorkdayCalendar


class CalendarConfig(BaseModel):
    weekend_days: list[int] | None = None
    include_weekends: bool | None = None
    holidays: list[Holiday] = []


def build_calendar(config: CalendarConfig | None) -> WorkdayCalendar:
    if config is None:
        return WorkdayCalendar.from_settings()

    weekend_days = settings.WEEKEND_DAYS if config.weekend_days is None else config.weekend_days
    include_weekends = (
        settings.INCLUDE_WEEKENDS if config.include_weekends is None else config.include_weekends
    )
    try:
        return WorkdayCalendar(
            weekend_days=weekend_days,
            holidays=config.holidays,
            include_weekends=include_weekends,
        )
    except ValueError as e:
        raise BadRequestError(str(e))
