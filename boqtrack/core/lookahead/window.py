from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta
from pydantic import BaseModel, model_validator

from boqtrack.common.enums import LookAheadPeriod
from boqtrack.core.lookahead.schemas import ProjectLookAhead


class LookAheadWindow(BaseModel):
    """Inclusive date range a lookahead report focuses on."""

    start: date
    end: date

    @model_validator(mode="after")
    def _check_order(self) -> LookAheadWindow:
        if self.end < self.start:
            raise ValueError("Lookahead window ends before it starts")
        return self

    @classmethod
    def for_period(
        cls,
        period: LookAheadPeriod | str,
        count: int,
        today: date | None = None,
    ) -> LookAheadWindow:
        """Window from *today* to *count* days, weeks or calendar months ahead."""
        today = today or date.today()
        period = LookAheadPeriod(period)
        if count < 0:
            raise ValueError("Lookahead period count cannot be negative")

        if period is LookAheadPeriod.DAYS:
            end = today + timedelta(days=count)
        elif period is LookAheadPeriod.WEEKS:
            end = today + timedelta(weeks=count)
        else:
            end = today + relativedelta(months=count)
        return cls(start=today, end=end)

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


def filter_projects_in_window(
    lookaheads: Iterable[ProjectLookAhead],
    window: LookAheadWindow,
) -> list[ProjectLookAhead]:
    """Projects that still have work left and are due to finish inside *window*.

    A project with remaining work but no forecast date is kept: it is still
    live, there is just not enough data to date it yet.
    """
    selected: list[ProjectLookAhead] = []
    for lookahead in lookaheads:
        if not lookahead.has_remaining_work:
            continue
        if lookahead.latest_completion_date and not window.contains(lookahead.latest_completion_date):
            continue
        selected.append(lookahead)
    return selected
