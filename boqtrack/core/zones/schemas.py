from datetime import datetime

from pydantic import BaseModel, field_validator

from boqtrack.common.enums import ZonePriority, ZoneStatus
from boqtrack.common.parsing import clean_text


class ZoneMapping(BaseModel):
    """Explicit zone attributes entered by planners.

    Any attribute left as ``None`` keeps the value derived from progress.
    """

    zone_number: str
    zone_name: str | None = None
    zone_description: str | None = None
    zone_color: str | None = None
    zone_priority: ZonePriority | None = None
    zone_status: ZoneStatus | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("zone_number", mode="before")
    @classmethod
    def _zone_number(cls, value) -> str:
        return clean_text(value)


class ZoneInfo(BaseModel):
    zone_number: str
    activities_count: int
    records_count: int = 0
    total_planned_units: float
    total_actual_units: float
    progress_percentage: float
    zone_name: str
    zone_description: str | None = None
    zone_status: ZoneStatus
    zone_priority: ZonePriority
    zone_color: str


class ZoneComparison(BaseModel):
    zone: str
    performance: float
    rank: int


class ZoneAnalytics(BaseModel):
    total_zones: int
    active_zones: int
    completed_zones: int
    average_progress: float
    zone_performance: list[ZoneInfo]
    zone_comparison: list[ZoneComparison]
    zone_recommendations: list[str]


class ZonePerformanceSummary(BaseModel):
    best_performing: ZoneInfo | None
    worst_performing: ZoneInfo | None
    average_progress: float
    total_activities: int
    completion_rate: float
