"""Workday arithmetic for schedule forecasting.

A workday is any calendar day that is neither a configured weekend day nor a
holiday.  Weekend days are expressed Sun=0 .. Sat=6, which is how site
calendars are configured (the default weekend is Friday/Saturday).
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta

from boqtrack.common.logging import get_logger
from boqtrack.config import settings
from boqtrack.core.calendar.schemas import Holiday

logger = get_logger("calendar.workdays")

DEFAULT_WEEKEND_DAYS: tuple[int, ...] = (5, 6)

# About a century of five-day weeks
MAX_ADVANCE_WORKDAYS = 36_500


def sunday_based_weekday(day: date) -> int:
    """Weekday number with Sunday as 0 and Saturday as 6."""
    return (day.weekday() + 1) % 7


class WorkdayCalendar:
    def __init__(
        self,
        weekend_days: Iterable[int] = DEFAULT_WEEKEND_DAYS,
        holidays: Iterable[Holiday] = (),
        include_weekends: bool = False,
    ):
        self.weekend_days = frozenset(int(d) % 7 for d in weekend_days)
        self.include_weekends = include_weekends
        if not include_weekends and len(self.weekend_days) == 7:
            raise ValueError("At least one day of the week must be a workday")

        self.holidays = list(holidays)
        self._fixed: dict[date, str] = {}
        self._recurring: dict[tuple[int, int], str] = {}
        for holiday in self.holidays:
            if holiday.is_recurring:
                self._recurring.setdefault((holiday.date.month, holiday.date.day), holiday.name)
            else:
                self._fixed.setdefault(holiday.date, holiday.name)

    @classmethod
    def from_settings(cls, holidays: Iterable[Holiday] = ()) -> WorkdayCalendar:
        return cls(
            weekend_days=settings.WEEKEND_DAYS,
            holidays=holidays,
            include_weekends=settings.INCLUDE_WEEKENDS,
        )

    # ---------- Day classification ----------

    def is_weekend(self, day: date) -> bool:
        if self.include_weekends:
            return False
        return sunday_based_weekday(day) in self.weekend_days

    def holiday_name(self, day: date) -> str | None:
        if day in self._fixed:
            return self._fixed[day]
        return self._recurring.get((day.month, day.day))

    def is_holiday(self, day: date) -> bool:
        return day in self._fixed or (day.month, day.day) in self._recurring

    def is_workday(self, day: date) -> bool:
        return not self.is_weekend(day) and not self.is_holiday(day)

    # ---------- Arithmetic ----------

    def advance(self, start: date, workdays: int) -> date:
        """Return the date on which the *workdays*-th workday after *start* falls.

        The start date itself is never counted, so ``advance(d, 1)`` is the
        next workday after ``d``.  A non-positive count returns *start*.
        Raises ``ValueError`` when the count is above ``MAX_ADVANCE_WORKDAYS``
        or the result would fall after ``date.max``.
        """
        if workdays <= 0:
            return start
        if workdays > MAX_ADVANCE_WORKDAYS:
            raise ValueError(
                f"Cannot advance more than {MAX_ADVANCE_WORKDAYS} workdays (got {workdays})"
            )

        current = start
        counted = 0
        try:
            while counted < workdays:
                current += timedelta(days=1)
                if self.is_workday(current):
                    counted += 1
        except OverflowError:
            raise ValueError(f"{workdays} workdays after {start} is past {date.max}") from None
        return current

    def working_days(self, start: date, end: date) -> list[date]:
        days: list[date] = []
        for offset in range((end - start).days + 1):
            current = start + timedelta(days=offset)
            if self.is_workday(current):
                days.append(current)
        return days

    def count_workdays(self, start: date, end: date) -> int:
        return len(self.working_days(start, end))

    def end_date_for_duration(self, start: date, duration: int) -> date:
        """Finish date of a task that starts on *start* and lasts *duration* workdays."""
        if duration <= 0:
            return start
        return self.advance(start, duration - 1)

    def distribute_quantity(self, start: date, end: date, total: int) -> list[tuple[date, int]]:
        """Spread *total* units over the workdays between *start* and *end*.

        Every day gets the floor share and the first ``total % days`` days get
        one extra unit, so the parts always add back up to *total*.
        """
        days = self.working_days(start, end)
        if not days:
            return []

        base, remainder = divmod(int(total), len(days))
        return [
            (day, base + 1 if index < remainder else base)
            for index, day in enumerate(days)
        ]

    def holidays_in_range(self, start: date, end: date) -> list[Holiday]:
        """Holidays falling between *start* and *end*, recurring ones dated per year."""
        found: list[Holiday] = []
        for holiday in self.holidays:
            if not holiday.is_recurring:
                if start <= holiday.date <= end:
                    found.append(holiday)
                continue

            for year in range(start.year, end.year + 1):
                try:
                    occurrence = holiday.date.replace(year=year)
                except ValueError:
                    # 29 February in a non-leap year
                    continue
                if start <= occurrence <= end:
                    found.append(holiday.model_copy(update={"date": occurrence}))

        found.sort(key=lambda h: h.date)
        logger.debug("Found %d holidays between %s and %s", len(found), start, end)
        return found
