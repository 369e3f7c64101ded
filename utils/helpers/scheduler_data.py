from typing import Callable, Dict, List
from config import settings
from exceptions.custom_errors import ConflictError, CrossTeamConflictError
from schemas.scheduler.entities import SchedulerData
from scheduler.coverage import LeaderGap, format_gap_period
from utils.crew_source import CrewSource
from utils.loader import load_mock_data, load_workbook
from utils.logger import get_logger

logger = get_logger(__name__)


def default_data_source() -> Callable[[], SchedulerData]:
    """
    Pick the seed data source from the environment:

    1. the ERP crews facade when `USE_ERP_SOURCE=true` and a base URL is set,
    2. an Excel workbook when `SEED_DATA_PATH` is set,
    3. the built-in mock data otherwise.
    """
    if settings.USE_ERP_SOURCE and settings.ERP_CREWS_BASE_URL:
        logger.info("Using ERP crews source at %s", settings.ERP_CREWS_BASE_URL)
        return CrewSource(
            settings.ERP_CREWS_BASE_URL,
            access_token=settings.ERP_ACCESS_TOKEN,
            timeout=settings.ERP_TIMEOUT,
        )
    if settings.SEED_DATA_PATH:
        logger.info("Using seed workbook %s", settings.SEED_DATA_PATH)
        return lambda: load_workbook(settings.SEED_DATA_PATH)

    logger.info("Using built-in mock data")
    return load_mock_data


def gap_to_dict(gap: LeaderGap) -> Dict:
    return {"start": gap.start, "end": gap.end, "label": format_gap_period(gap)}


def gaps_to_payload(gaps_by_team: Dict[str, List[LeaderGap]]) -> Dict[str, List[Dict]]:
    """JSON-friendly form of the coverage analysis, keyed by team id."""
    return {team_id: [gap_to_dict(g) for g in gaps] for team_id, gaps in gaps_by_team.items()}


def error_detail(e: Exception):
    """HTTP error detail for a scheduler error; conflicts carry the clashing assignments."""
    if isinstance(e, CrossTeamConflictError):
        return {
            "message": str(e),
            "teamIds": e.team_ids,
            "teamNames": e.team_names,
            "conflictingAssignments": [a.model_dump(mode="json") for a in e.conflicting_assignments],
        }
    if isinstance(e, ConflictError) and e.conflicting_assignment is not None:
        return {
            "message": str(e),
            "conflictingAssignment": e.conflicting_assignment.model_dump(mode="json"),
        }
    return str(e)
