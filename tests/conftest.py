import datetime as dt
import pytest
from fastapi.testclient import TestClient

from config import settings
from main import create_app
from schemas.scheduler.entities import Assignment, Resource, SchedulerData, Team
from scheduler.store import ChangeTrackedStore
from utils.loader import load_mock_data


def day(n: int) -> dt.datetime:
    """Day `n` of January 2026, midnight UTC."""
    return dt.datetime(2026, 1, 1, tzinfo=dt.timezone.utc) + dt.timedelta(days=n - 1)


@pytest.fixture
def seed_data():
    return SchedulerData(
        resources=[
            Resource(id="R1", description="James Wilson"),
            Resource(id="R2", description="Sarah Mitchell"),
            Resource(id="R3", description="Madonna"),
        ],
        teams=[
            Team(id="T1", name="Alpha", createdAt=day(1)),
            Team(id="T2", name="Bravo", createdAt=day(1)),
        ],
        assignments=[
            Assignment(id="A1", resourceId="R1", teamId="T1", start=day(1), end=day(10), isTeamLeader=True),
        ],
    )


@pytest.fixture
def store(seed_data):
    s = ChangeTrackedStore()
    s.seed(seed_data)
    return s


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(settings, "API_KEY", None)
    app = create_app(store=ChangeTrackedStore(), data_source=load_mock_data)
    with TestClient(app) as c:
        yield c
