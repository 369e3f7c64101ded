from typing import Iterable, Optional
from core.state import ChangeTrackingState
from core.intervals import overlaps
from exceptions.custom_errors import ConflictError
from utils.resource_utils import get_resource_name

"""
This module contains the same-team leader rule: a team has at most one
team leader at any point in time.
"""


def find_conflicting_team_leader(
    assignments: Iterable,
    team_id: str,
    start,
    end,
    exclude_assignment_id: Optional[str] = None,
):
    """Return the first leader assignment of `team_id` overlapping `[start, end)`, or None."""
    for a in assignments:
        if a.teamId != team_id or not a.isTeamLeader:
            continue
        if exclude_assignment_id and a.id == exclude_assignment_id:
            continue
        if overlaps(start, end, a.start, a.end):
            return a
    return None


def leader_conflict_message(state: ChangeTrackingState, conflict) -> str:
    name = get_resource_name(state.resources, conflict.resourceId) or "Unknown"
    return f"{name} is already Team Leader during this period"


def single_team_leader(state: ChangeTrackingState, candidate):
    """Reject a leader assignment that overlaps another leader of the same team."""
    if not candidate.isTeamLeader:
        return

    conflict = find_conflicting_team_leader(
        state.working_assignments,
        candidate.teamId,
        candidate.start,
        candidate.end,
        exclude_assignment_id=candidate.id,
    )
    if conflict is not None:
        raise ConflictError(
            leader_conflict_message(state, conflict),
            conflicting_assignment=conflict.model_copy(deep=True),
        )
