"""Pydantic models for the lookahead (completion forecasting) pipeline.

Input models (``Project``, ``Activity``, ``ProgressRecord``) are lenient:
they accept the loosely-typed rows produced by spreadsheet imports and data
entry forms, including the human-readable column headers used there, and
coerce values instead of rejecting them.  Output models are plain records
built fresh on every forecasting pass.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator

from boqtrack.common.enums import InputType
from boqtrack.common.parsing import clean_text, parse_date, parse_quantity


def compose_full_code(code: str, sub_code: str = "", explicit: str = "") -> str:
    """Project code suffixed with ``-<sub_code>``; an explicit full code wins."""
    explicit = clean_text(explicit).upper()
    if explicit:
        return explicit
    code = clean_text(code).upper()
    sub_code = clean_text(sub_code).upper()
    if code and sub_code:
        return f"{code}-{sub_code}"
    return code


def _aliases(name: str, *headers: str) -> AliasChoices:
    return AliasChoices(name, *headers)


# Projects in any other status are left out of forecasting
ACTIVE_PROJECT_STATUSES = frozenset({"on-going", "upcoming", "site-preparation"})


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


class Project(BaseModel):
    id: str = ""
    project_code: str = Field("", validation_alias=_aliases("project_code", "Project Code"))
    project_sub_code: str = Field("", validation_alias=_aliases("project_sub_code", "Project Sub-Code"))
    project_full_code: str = Field("", validation_alias=_aliases("project_full_code", "Project Full Code"))
    project_name: str = Field("", validation_alias=_aliases("project_name", "Project Name"))
    project_status: str = Field("", validation_alias=_aliases("project_status", "Project Status"))

    @field_validator(
        "id", "project_code", "project_sub_code", "project_full_code", "project_name", mode="before"
    )
    @classmethod
    def _text(cls, value: Any) -> str:
        return clean_text(value)

    @field_validator("project_status", mode="before")
    @classmethod
    def _status(cls, value: Any) -> str:
        return clean_text(value).lower().replace(" ", "-")

    @property
    def full_code(self) -> str:
        return compose_full_code(self.project_code, self.project_sub_code, self.project_full_code)

    @property
    def is_active(self) -> bool:
        """Rows without a status are treated as active."""
        return not self.project_status or self.project_status in ACTIVE_PROJECT_STATUSES


class Activity(BaseModel):
    """A planned BOQ work item."""

    id: str = ""
    project_id: str = ""
    project_code: str = Field("", validation_alias=_aliases("project_code", "Project Code"))
    project_sub_code: str = Field("", validation_alias=_aliases("project_sub_code", "Project Sub-Code"))
    project_full_code: str = Field("", validation_alias=_aliases("project_full_code", "Project Full Code"))
    activity_name: str = Field(
        "",
        validation_alias=_aliases(
            "activity_name", "activity_description", "Activity Name", "Activity Description"
        ),
    )
    zone_number: str = Field("", validation_alias=_aliases("zone_number", "Zone Number", "zone"))
    unit: str = Field("", validation_alias=_aliases("unit", "Unit"))
    total_units: float = Field(0.0, validation_alias=_aliases("total_units", "Total Units"))
    planned_units: float = Field(0.0, validation_alias=_aliases("planned_units", "Planned Units"))
    actual_units: float = Field(0.0, validation_alias=_aliases("actual_units", "Actual Units"))
    calendar_duration: float = Field(
        0.0, validation_alias=_aliases("calendar_duration", "Calendar Duration")
    )

    @field_validator(
        "id",
        "project_id",
        "project_code",
        "project_sub_code",
        "project_full_code",
        "activity_name",
        "zone_number",
        "unit",
        mode="before",
    )
    @classmethod
    def _text(cls, value: Any) -> str:
        return clean_text(value)

    @field_validator(
        "total_units", "planned_units", "actual_units", "calendar_duration", mode="before"
    )
    @classmethod
    def _quantity(cls, value: Any) -> float:
        return parse_quantity(value)

    @property
    def full_code(self) -> str:
        return compose_full_code(self.project_code, self.project_sub_code, self.project_full_code)

    @property
    def resolved_total_units(self) -> float:
        return self.total_units or self.planned_units or 0.0


class ProgressRecord(BaseModel):
    """A KPI row reporting a planned or actual quantity against an activity."""

    id: str = ""
    project_code: str = Field("", validation_alias=_aliases("project_code", "Project Code"))
    project_sub_code: str = Field("", validation_alias=_aliases("project_sub_code", "Project Sub-Code"))
    project_full_code: str = Field("", validation_alias=_aliases("project_full_code", "Project Full Code"))
    activity_name: str = Field(
        "",
        validation_alias=_aliases(
            "activity_name",
            "activity_description",
            "activity",
            "Activity Name",
            "Activity Description",
        ),
    )
    zone: str = Field("", validation_alias=_aliases("zone", "Zone"))
    quantity: float = Field(0.0, validation_alias=_aliases("quantity", "Quantity"))
    input_type: str = Field("", validation_alias=_aliases("input_type", "Input Type"))
    activity_date: Any = Field(None, validation_alias=_aliases("activity_date", "Activity Date", "date"))
    created_at: Any = None

    @field_validator(
        "id", "project_code", "project_sub_code", "project_full_code", "activity_name", "zone",
        mode="before",
    )
    @classmethod
    def _text(cls, value: Any) -> str:
        return clean_text(value)

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity(cls, value: Any) -> float:
        return parse_quantity(value)

    @field_validator("input_type", mode="before")
    @classmethod
    def _input_type(cls, value: Any) -> str:
        return clean_text(value).lower()

    @property
    def full_code(self) -> str:
        return compose_full_code(self.project_code, self.project_sub_code, self.project_full_code)

    @property
    def is_actual(self) -> bool:
        return self.input_type == InputType.ACTUAL.value

    @property
    def record_date(self) -> date | None:
        """Activity date, or creation date when no activity date was entered."""
        raw = self.activity_date if clean_text(self.activity_date) else self.created_at
        return parse_date(raw)


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------


class ActivityLookAhead(BaseModel):
    activity: Activity
    total_units: float
    actual_units: float
    remaining_units: float
    actual_productivity: float
    planned_productivity: float
    remaining_days: int
    completion_date: date | None
    is_completed: bool
    actual_days: int = 0
    undated_records: int = 0

    @property
    def has_remaining_work(self) -> bool:
        return self.remaining_units > 0 and not self.is_completed


class ProjectLookAhead(BaseModel):
    project_id: str
    project_code: str
    project_name: str
    activities: list[ActivityLookAhead]
    latest_completion_date: date | None
    completion_month: str | None = None
    completion_week: str | None = None
    completion_day: str | None = None

    @property
    def has_remaining_work(self) -> bool:
        return any(a.has_remaining_work for a in self.activities)


class LookAheadSummary(BaseModel):
    total_projects: int
    projects_in_window: int
    total_activities: int
    completed_activities: int
    forecast_activities: int
    unforecastable_activities: int
    inactive_projects: int = 0


class LookAheadReport(BaseModel):
    generated_on: date
    window_start: date
    window_end: date
    projects: list[ProjectLookAhead]
    projects_in_window: list[ProjectLookAhead]
    summary: LookAheadSummary
