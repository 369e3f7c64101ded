import requests
from typing import Dict, Iterable, List, Optional
from core.intervals import overlaps
from exceptions.custom_errors import DataSourceError
from schemas.scheduler.entities import Assignment, Resource, SchedulerData, Team
from utils.constants import ASSIGNMENT_ID_PREFIX, CREW_TEAM_ID_PREFIX, DEFAULT_TEAM_COLOR
from utils.loader import load_mock_data
from utils.logger import get_logger
from utils.time_utils import normalise_datetime, utc_now

logger = get_logger(__name__)

"""
Seed data from the ERP crews facade.

The facade exposes the ERP records as plain JSON lists:

- `GET {base}/crews`                         -> [{ResourceSeq, ResourceId, Description}]
- `GET {base}/crews/{ResourceSeq}/members`   -> [{ResourceSeq, ResourceMemberSeq, ResourceId, PeriodStart, PeriodEnd}]
- `GET {base}/crews/{ResourceSeq}/leaders`   -> [{ResourceSeq, ResourceId, ValidFrom, ValidTo}]
- `GET {base}/technicians`                   -> [Resource]

Authentication against the ERP happens behind the facade; an optional bearer
token is forwarded as-is.
"""


def is_leader_for_period(resource_id: str, membership_start, membership_end, leaders: Iterable[dict]) -> bool:
    """True if any leader period of the same resource overlaps the membership period."""
    for leader in leaders:
        if leader.get("ResourceId") != resource_id:
            continue
        if overlaps(
            membership_start,
            membership_end,
            normalise_datetime(leader["ValidFrom"]),
            normalise_datetime(leader["ValidTo"]),
        ):
            return True
    return False


def crew_to_team(crew: dict) -> Team:
    return Team(
        id=f"{CREW_TEAM_ID_PREFIX}-{crew['ResourceSeq']}",
        name=crew["ResourceId"],
        description=crew.get("Description"),
        color=DEFAULT_TEAM_COLOR,
        # the ERP does not expose a creation date
        createdAt=utc_now(),
    )


def memberships_to_assignments(crew: dict, memberships: Iterable[dict], leaders: Iterable[dict]) -> List[Assignment]:
    """Map the crew's memberships to assignments, flagging those covered by a leader period."""
    leaders = list(leaders)
    team_id = f"{CREW_TEAM_ID_PREFIX}-{crew['ResourceSeq']}"
    assignments = []
    for m in memberships:
        start = normalise_datetime(m["PeriodStart"])
        end = normalise_datetime(m["PeriodEnd"])
        assignments.append(
            Assignment(
                id=f"{ASSIGNMENT_ID_PREFIX}-{crew['ResourceSeq']}-{m['ResourceMemberSeq']}",
                resourceId=m["ResourceId"],
                teamId=team_id,
                start=start,
                end=end,
                isTeamLeader=is_leader_for_period(m["ResourceId"], start, end, leaders),
            )
        )
    return assignments


class CrewSource:
    """
    Data source backed by the ERP crews facade.

    Calling the instance returns a `SchedulerData`; if the crews list cannot
    be fetched it falls back to the built-in mock data, like the scheduler UI
    does when the ERP is unavailable.
    """

    def __init__(
        self,
        base_url: str,
        access_token: Optional[str] = None,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
        fallback_to_mock: bool = True,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.fallback_to_mock = fallback_to_mock
        self.headers = {"Accept": "application/json"}
        if access_token:
            self.headers["Authorization"] = f"Bearer {access_token}"

    def _get(self, path: str) -> list:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, headers=self.headers, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            raise DataSourceError(f"Failed to fetch {url}: {e}") from e

    def fetch_resources(self) -> List[Resource]:
        """Fetch technicians; fall back to the mock technicians on failure."""
        try:
            return [Resource(**r) for r in self._get("/technicians")]
        except DataSourceError as e:
            logger.error("Failed to fetch technicians, using mock data: %s", e)
            return load_mock_data().resources

    def fetch_crews(self) -> Dict[str, list]:
        """
        Fetch all crews and map them to teams and assignments.

        A crew whose memberships cannot be fetched is still returned as a team
        without members; a crew whose leaders cannot be fetched is treated as
        having no leaders.
        """
        crews = self._get("/crews")
        logger.info("Retrieved %d crews from the ERP", len(crews))

        teams, assignments = [], []
        for crew in crews:
            teams.append(crew_to_team(crew))
            seq = crew["ResourceSeq"]

            try:
                memberships = self._get(f"/crews/{seq}/members")
            except DataSourceError as e:
                logger.error("Failed to fetch memberships for crew %s (%s): %s", crew["ResourceId"], seq, e)
                continue

            try:
                leaders = self._get(f"/crews/{seq}/leaders")
            except DataSourceError as e:
                logger.warning("Failed to fetch leaders for crew %s (%s): %s", crew["ResourceId"], seq, e)
                leaders = []

            crew_assignments = memberships_to_assignments(crew, memberships, leaders)
            logger.debug(
                "Crew %s (%s): %d memberships, %d leaders",
                crew["ResourceId"],
                seq,
                len(crew_assignments),
                len(leaders),
            )
            assignments.extend(crew_assignments)

        logger.info("Mapped %d teams and %d assignments from the ERP", len(teams), len(assignments))
        return {"teams": teams, "assignments": assignments}

    def __call__(self) -> SchedulerData:
        resources = self.fetch_resources()
        try:
            crews = self.fetch_crews()
        except DataSourceError as e:
            if not self.fallback_to_mock:
                raise
            logger.error("Error fetching crews from the ERP, falling back to mock data: %s", e)
            mock = load_mock_data()
            return SchedulerData(resources=resources, teams=mock.teams, assignments=mock.assignments)

        return SchedulerData(resources=resources, **crews)
