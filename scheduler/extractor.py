from core.state import ChangeTrackingState
from schemas.scheduler.entities import ChangeSummary
from utils.logger import get_logger

logger = get_logger(__name__)


def extract_change_summary(state: ChangeTrackingState) -> ChangeSummary:
    """
    Build the diff between the working copy and the baseline.

    Changed ids are split into created (not in the baseline) and updated (in
    the baseline). Deleted ids no longer exist in the working copy, so their
    last-known values are taken from the baseline.
    """
    original_assignment_ids = state.original_assignment_ids()
    original_team_ids = state.original_team_ids()

    created_assignments, updated_assignments = [], []
    for a in state.working_assignments:
        if a.id not in state.changed_assignments:
            continue
        if a.id in original_assignment_ids:
            updated_assignments.append(a.model_copy(deep=True))
        else:
            created_assignments.append(a.model_copy(deep=True))

    created_teams, updated_teams = [], []
    for t in state.working_teams:
        if t.id not in state.changed_teams:
            continue
        if t.id in original_team_ids:
            updated_teams.append(t.model_copy(deep=True))
        else:
            created_teams.append(t.model_copy(deep=True))

    deleted_assignments = [
        a.model_copy(deep=True)
        for a in state.original_assignments
        if a.id in state.deleted_assignments
    ]
    deleted_teams = [
        t.model_copy(deep=True)
        for t in state.original_teams
        if t.id in state.deleted_teams
    ]

    summary = ChangeSummary(
        createdAssignments=created_assignments,
        updatedAssignments=updated_assignments,
        deletedAssignments=deleted_assignments,
        createdTeams=created_teams,
        updatedTeams=updated_teams,
        deletedTeams=deleted_teams,
    )
    logger.debug(
        "Change summary: %d/%d/%d assignments, %d/%d/%d teams (created/updated/deleted)",
        len(created_assignments),
        len(updated_assignments),
        len(deleted_assignments),
        len(created_teams),
        len(updated_teams),
        len(deleted_teams),
    )
    return summary
