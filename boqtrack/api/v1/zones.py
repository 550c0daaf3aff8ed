from fastapi import APIRouter
from pydantic import BaseModel

from boqtrack.common.exceptions import NotFoundError
from boqtrack.core.lookahead.schemas import Activity, ProgressRecord
from boqtrack.core.zones.manager import ZoneManager
from boqtrack.core.zones.schemas import (
    ZoneAnalytics,
    ZoneInfo,
    ZoneMapping,
    ZonePerformanceSummary,
)

router = APIRouter(prefix="/zones", tags=["Zones"])


# ---------- Schemas ----------


class ZoneRequest(BaseModel):
    activities: list[Activity]
    records: list[ProgressRecord] = []
    zone_mappings: list[ZoneMapping] = []


# ---------- Endpoints ----------


@router.post("/analytics", response_model=ZoneAnalytics)
async def zone_analytics(body: ZoneRequest):
    return _manager(body).analytics()


@router.post("/summary", response_model=ZonePerformanceSummary)
async def zone_performance_summary(body: ZoneRequest):
    return _manager(body).performance_summary()


@router.post("/{zone_number}", response_model=ZoneInfo)
async def zone_detail(zone_number: str, body: ZoneRequest):
    info = _manager(body).zone_info(zone_number)
    if info is None:
        raise NotFoundError("Zone", zone_number)
    return info


# ---------- Helpers ----------


def _manager(body: ZoneRequest) -> ZoneManager:
    return ZoneManager(body.activities, body.records, body.zone_mappings)
