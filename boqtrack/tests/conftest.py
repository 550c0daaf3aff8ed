from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from boqtrack.core.calendar.workdays import WorkdayCalendar
from boqtrack.core.lookahead.schemas import Activity, ProgressRecord, Project

# Wednesday; the default site weekend is Friday/Saturday
TODAY = date(2024, 6, 12)


@pytest.fixture
async def client():
    from boqtrack.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def calendar():
    return WorkdayCalendar(weekend_days=[5, 6])


@pytest.fixture
def make_activity():
    def _make(**fields) -> Activity:
        fields.setdefault("project_code", "P100")
        fields.setdefault("activity_name", "Excavation")
        return Activity(**fields)

    return _make


@pytest.fixture
def make_record():
    def _make(quantity, activity_date=None, **fields) -> ProgressRecord:
        fields.setdefault("project_code", "P100")
        fields.setdefault("activity_name", "Excavation")
        fields.setdefault("input_type", "Actual")
        return ProgressRecord(quantity=quantity, activity_date=activity_date, **fields)

    return _make


@pytest.fixture
def project():
    return Project(id="proj-1", project_code="P100", project_name="Marina Tower")
