from fastapi import APIRouter

from boqtrack.api.v1.calendar import router as calendar_router
from boqtrack.api.v1.lookahead import router as lookahead_router
from boqtrack.api.v1.zones import router as zones_router

v1_router = APIRouter()

v1_router.include_router(lookahead_router)
v1_router.include_router(zones_router)
v1_router.include_router(calendar_router)
