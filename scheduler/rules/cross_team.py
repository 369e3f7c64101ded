from core.state import ChangeTrackingState
from core.intervals import find_overlapping
from exceptions.custom_errors import CrossTeamConflictError
from utils.resource_utils import get_resource_name, get_team_name

"""
This module contains the cross-team rule: a resource cannot be booked by two
different teams for overlapping periods. There is no override for this rule.
"""


def no_cross_team_overlap(state: ChangeTrackingState, candidate):
    """Reject the candidate if its resource is already assigned to another team in that period."""
    clashes = [
        a
        for a in find_overlapping(
            candidate.resourceId,
            candidate.start,
            candidate.end,
            state.working_assignments,
            exclude_assignment_id=candidate.id,
        )
        if a.teamId != candidate.teamId
    ]
    if not clashes:
        return

    team_ids = list(dict.fromkeys(a.teamId for a in clashes))
    team_names = [get_team_name(state.working_teams, tid) for tid in team_ids]
    who = get_resource_name(state.resources, candidate.resourceId) or candidate.resourceId
    raise CrossTeamConflictError(
        f"{who} is already assigned to {', '.join(team_names)} during this period",
        conflicting_assignments=[a.model_copy(deep=True) for a in clashes],
        team_ids=team_ids,
        team_names=team_names,
    )
