import pytest
import requests

from exceptions.custom_errors import DataSourceError
from utils.crew_source import CrewSource, is_leader_for_period
from tests.conftest import day


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


class FakeSession:
    def __init__(self, routes):
        self.routes = routes
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append((url, headers))
        for path, payload in self.routes.items():
            if url.endswith(path):
                if isinstance(payload, int):
                    return FakeResponse(None, status=payload)
                return FakeResponse(payload)
        raise requests.ConnectionError(f"no route for {url}")


ROUTES = {
    "/technicians": [
        {"id": "tech-001", "description": "James Wilson", "resourceSeq": 1001},
        {"id": "tech-002", "description": "Sarah Mitchell", "resourceSeq": 1002},
    ],
    "/crews": [{"ResourceSeq": 10, "ResourceId": "North", "Description": "North crew"}],
    "/crews/10/members": [
        {"ResourceSeq": 10, "ResourceMemberSeq": 1, "ResourceId": "tech-001",
         "PeriodStart": "2026-01-01", "PeriodEnd": "2026-01-10"},
        {"ResourceSeq": 10, "ResourceMemberSeq": 2, "ResourceId": "tech-002",
         "PeriodStart": "2026-01-01", "PeriodEnd": "2026-01-10"},
    ],
    "/crews/10/leaders": [
        {"ResourceSeq": 10, "ResourceId": "tech-001", "ValidFrom": "2026-01-05", "ValidTo": "2026-02-01"},
    ],
}


def test_is_leader_for_period():
    leaders = ROUTES["/crews/10/leaders"]
    assert is_leader_for_period("tech-001", day(1), day(10), leaders)
    assert not is_leader_for_period("tech-001", day(1), day(5), leaders)
    assert not is_leader_for_period("tech-002", day(1), day(10), leaders)


def test_crew_source_maps_crews_to_teams_and_assignments():
    session = FakeSession(ROUTES)
    source = CrewSource("http://erp.local/api/", access_token="secret", session=session)

    data = source()

    assert [(t.id, t.name) for t in data.teams] == [("crew-10", "North")]
    assert [(a.id, a.resourceId, a.isTeamLeader) for a in data.assignments] == [
        ("assign-10-1", "tech-001", True),
        ("assign-10-2", "tech-002", False),
    ]
    assert all(a.teamId == "crew-10" for a in data.assignments)
    assert len(data.resources) == 2
    url, headers = session.calls[0]
    assert url == "http://erp.local/api/technicians"
    assert headers["Authorization"] == "Bearer secret"


def test_missing_leaders_means_no_leaders():
    routes = dict(ROUTES)
    routes["/crews/10/leaders"] = 500
    data = CrewSource("http://erp.local", session=FakeSession(routes))()
    assert len(data.assignments) == 2
    assert not any(a.isTeamLeader for a in data.assignments)


def test_missing_members_keeps_team():
    routes = dict(ROUTES)
    routes["/crews/10/members"] = 503
    data = CrewSource("http://erp.local", session=FakeSession(routes))()
    assert [t.id for t in data.teams] == ["crew-10"]
    assert data.assignments == []


def test_unreachable_erp_falls_back_to_mock_data():
    data = CrewSource("http://erp.local", session=FakeSession({}))()
    assert {t.id for t in data.teams} == {"team-1", "team-2"}
    assert len(data.resources) == 8


def test_fallback_can_be_disabled():
    source = CrewSource("http://erp.local", session=FakeSession({}), fallback_to_mock=False)
    with pytest.raises(DataSourceError):
        source()
