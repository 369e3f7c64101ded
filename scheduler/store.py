import copy
import threading
import uuid
from typing import Callable, Dict, List, Optional
from pydantic import ValidationError as PydanticValidationError

from core.state import ChangeTrackingState
from core.constraint_manager import ConstraintManager
from exceptions.custom_errors import NotFoundError, SchedulerError, ValidationError
from schemas.scheduler.entities import (
    Assignment,
    ChangeSummary,
    SchedulerData,
    Team,
    TeamComposition,
    TeamLeaderValidation,
    TeamMember,
)
from schemas.scheduler.inputs import UpdateAssignmentInput
from scheduler.rules import (
    find_conflicting_team_leader,
    leader_conflict_message,
    no_cross_team_overlap,
    single_team_leader,
    valid_period,
)
from scheduler.coverage import LeaderGap, find_all_leader_gaps, find_leader_gaps
from scheduler.extractor import extract_change_summary
from utils.constants import ASSIGNMENT_ID_PREFIX, DEFAULT_TEAM_COLOR, TEAM_ID_PREFIX
from utils.logger import get_logger
from utils.resource_utils import get_resource_name, split_resource_name
from utils.time_utils import normalise_datetime, utc_now

logger = get_logger(__name__)


def apply_assignment_update(existing: Assignment, patch: UpdateAssignmentInput) -> Assignment:
    """
    Return a copy of `existing` with the fields provided in `patch` merged over it.
    An explicit `role=None` clears the role.
    """
    fields = patch.model_dump(exclude_unset=True)
    return existing.model_copy(update=fields, deep=True)


class ChangeTrackedStore:
    """
    In-memory working copy of teams and assignments, diffed against the last
    synchronized baseline.

    Every mutation validates first and commits second while holding the
    store's lock, so a rejected operation leaves the working copy and the
    tracking sets untouched and readers never observe a half-applied change.
    """

    def __init__(self, state: Optional[ChangeTrackingState] = None):
        self.state = state or ChangeTrackingState()
        self._lock = threading.RLock()

    # == Seeding ==
    @property
    def is_seeded(self) -> bool:
        return self.state.seeded

    def seed(self, data: SchedulerData) -> None:
        """Fill both the baseline and the working copy from `data` and drop all tracking."""
        with self._lock:
            self.state.resources = [r.model_copy(deep=True) for r in data.resources]
            self.state.original_teams = [t.model_copy(deep=True) for t in data.teams]
            self.state.original_assignments = [
                a.model_copy(deep=True) for a in data.assignments
            ]
            self.state.working_teams = copy.deepcopy(self.state.original_teams)
            self.state.working_assignments = copy.deepcopy(self.state.original_assignments)
            self.state.clear_tracking()
            self.state.seeded = True
        logger.info(
            "📋 Seeded store with %d resources, %d teams, %d assignments",
            len(data.resources),
            len(data.teams),
            len(data.assignments),
        )

    def load(self, source: Callable[[], SchedulerData]) -> SchedulerData:
        """
        Seed from `source` once per session, then return the working data.

        The source is called outside the lock so slow fetches do not block
        readers; if another caller seeded in the meantime its data wins.
        """
        if not self.is_seeded:
            data = source()
            with self._lock:
                if not self.state.seeded:
                    self.seed(data)
        return self.get_scheduler_data()

    def reset_working_state(self) -> None:
        """Discard local edits and tracking; the next `load` re-seeds from the data source."""
        with self._lock:
            self.state = ChangeTrackingState()
        logger.info("🔄 Working state reset; next load will re-seed from the data source")

    # == Reads ==
    def get_scheduler_data(self) -> SchedulerData:
        with self._lock:
            return SchedulerData(
                resources=copy.deepcopy(self.state.resources),
                teams=copy.deepcopy(self.state.working_teams),
                assignments=copy.deepcopy(self.state.working_assignments),
            )

    def get_assignment(self, assignment_id: str) -> Optional[Assignment]:
        with self._lock:
            idx = self.state.find_assignment(assignment_id)
            if idx is None:
                return None
            return self.state.working_assignments[idx].model_copy(deep=True)

    def get_team_composition(self, team_id: str) -> Optional[TeamComposition]:
        """Return the team with its members' names and periods, or None if unknown."""
        with self._lock:
            idx = self.state.find_team(team_id)
            if idx is None:
                return None
            team = self.state.working_teams[idx]

            members = []
            for a in self.state.working_assignments:
                if a.teamId != team_id:
                    continue
                first, surname = split_resource_name(
                    get_resource_name(self.state.resources, a.resourceId)
                )
                members.append(
                    TeamMember(
                        resourceId=a.resourceId,
                        resourceName=first,
                        resourceSurname=surname,
                        startDate=a.start,
                        endDate=a.end,
                        isTeamLeader=a.isTeamLeader,
                    )
                )

            return TeamComposition(
                teamId=team.id,
                teamName=team.name,
                description=team.description,
                color=team.color,
                members=members,
            )

    def validate_team_leader(
        self, team_id: str, start, end, exclude_assignment_id: Optional[str] = None
    ) -> TeamLeaderValidation:
        """Check, without raising, whether a leader could be placed on `team_id` for `[start, end)`."""
        start, end = normalise_datetime(start), normalise_datetime(end)
        with self._lock:
            conflict = find_conflicting_team_leader(
                self.state.working_assignments, team_id, start, end, exclude_assignment_id
            )
            if conflict is None:
                return TeamLeaderValidation(valid=True)
            return TeamLeaderValidation(
                valid=False,
                conflictingAssignment=conflict.model_copy(deep=True),
                message=leader_conflict_message(self.state, conflict),
            )

    def leader_gaps(self, team_id: str, view) -> List[LeaderGap]:
        with self._lock:
            assignments = list(self.state.working_assignments)
        return find_leader_gaps(team_id, assignments, view)

    def all_leader_gaps(self, view) -> Dict[str, List[LeaderGap]]:
        with self._lock:
            teams = list(self.state.working_teams)
            assignments = list(self.state.working_assignments)
        return find_all_leader_gaps(teams, assignments, view)

    # == Change tracking ==
    def has_unsaved_changes(self) -> bool:
        with self._lock:
            return self.state.has_changes()

    def get_change_summary(self) -> ChangeSummary:
        with self._lock:
            return extract_change_summary(self.state)

    def clear_change_tracking(self) -> None:
        """Mark the working copy as synchronized: it becomes the new baseline."""
        with self._lock:
            self.state.original_teams = copy.deepcopy(self.state.working_teams)
            self.state.original_assignments = copy.deepcopy(self.state.working_assignments)
            self.state.clear_tracking()
        logger.info("✅ Change tracking cleared")

    # == Assignments ==
    def create_assignment(
        self,
        resource_id: str,
        team_id: str,
        start,
        end,
        role: Optional[str] = None,
        is_team_leader: bool = False,
    ) -> Assignment:
        """
        Add a resource to a team for `[start, end)`.

        Raises:
            ValidationError: If `start >= end`.
            ConflictError: If the assignment is a leader and another leader of
                the same team overlaps the period.
            CrossTeamConflictError: If the resource is already assigned to
                another team during the period.
        """
        with self._lock:
            try:
                candidate = Assignment(
                    id=self._new_id(ASSIGNMENT_ID_PREFIX, self.state.assignment_id_taken),
                    resourceId=resource_id,
                    teamId=team_id,
                    start=start,
                    end=end,
                    role=role,
                    isTeamLeader=bool(is_team_leader),
                )
            except PydanticValidationError as e:
                raise ValidationError(f"Invalid assignment: {e}") from e
            self._validate(candidate, "create")

            self.state.working_assignments.append(candidate)
            self.state.changed_assignments.add(candidate.id)

        logger.info(
            "➕ Assignment %s created: %s -> %s (%s to %s%s)",
            candidate.id,
            resource_id,
            team_id,
            candidate.start.isoformat(),
            candidate.end.isoformat(),
            ", leader" if candidate.isTeamLeader else "",
        )
        return candidate.model_copy(deep=True)

    def update_assignment(
        self,
        assignment_id: str,
        patch: Optional[UpdateAssignmentInput] = None,
        **changes,
    ) -> Assignment:
        """
        Merge a partial update over an existing assignment.

        Accepted fields are `start`, `end`, `teamId` (or `team_id`),
        `isTeamLeader` (or `is_team_leader`) and `role`. Pass them either as an
        `UpdateAssignmentInput` or as keyword arguments; anything else is
        rejected with a ValidationError.

        Raises:
            NotFoundError: If `assignment_id` is not in the working copy.
            ValidationError: On unknown fields or if the merged `start >= end`.
            ConflictError: On an overlapping leader of the same team.
            CrossTeamConflictError: On an overlapping assignment of the same
                resource in another team.
        """
        if patch is None:
            try:
                patch = UpdateAssignmentInput(**changes)
            except PydanticValidationError as e:
                raise ValidationError(f"Invalid assignment update: {e}") from e
        elif changes:
            raise ValidationError("Pass either an update object or keyword changes, not both.")

        with self._lock:
            idx = self.state.find_assignment(assignment_id)
            if idx is None:
                logger.warning("Update rejected: assignment %s not found", assignment_id)
                raise NotFoundError(f"Assignment not found: {assignment_id}")

            updated = apply_assignment_update(self.state.working_assignments[idx], patch)
            self._validate(updated, "update")

            self.state.working_assignments[idx] = updated
            self.state.changed_assignments.add(assignment_id)
            self.state.deleted_assignments.discard(assignment_id)

        logger.info("✏️ Assignment %s updated", assignment_id)
        return updated.model_copy(deep=True)

    def delete_assignment(self, assignment_id: str) -> None:
        """Remove an assignment. Unknown ids are ignored."""
        with self._lock:
            removed = self._remove_assignment(assignment_id)
        if removed:
            logger.info("🗑️ Assignment %s deleted", assignment_id)

    # == Teams ==
    def create_team(
        self,
        name: str,
        description: Optional[str] = None,
        color: str = DEFAULT_TEAM_COLOR,
    ) -> Team:
        """Create a team; raises ValidationError if `name` is empty."""
        if not name or not name.strip():
            logger.warning("Team creation rejected: empty name")
            raise ValidationError("Team name is required.")

        with self._lock:
            team = Team(
                id=self._new_id(TEAM_ID_PREFIX, self.state.team_id_taken),
                name=name.strip(),
                description=description,
                color=color or DEFAULT_TEAM_COLOR,
                createdAt=utc_now(),
            )
            self.state.working_teams.append(team)
            self.state.changed_teams.add(team.id)

        logger.info("➕ Team %s (%s) created", team.id, team.name)
        return team.model_copy(deep=True)

    def delete_team(self, team_id: str) -> None:
        """Remove a team and every assignment referencing it. Unknown ids are ignored."""
        with self._lock:
            idx = self.state.find_team(team_id)
            if idx is None:
                return

            member_ids = [a.id for a in self.state.working_assignments if a.teamId == team_id]
            for assignment_id in member_ids:
                self._remove_assignment(assignment_id)

            self.state.working_teams.pop(idx)
            self.state.changed_teams.discard(team_id)
            if team_id in self.state.original_team_ids():
                self.state.deleted_teams.add(team_id)

        logger.info("🗑️ Team %s deleted with %d assignments", team_id, len(member_ids))

    # == Internals ==
    def _rules(self) -> ConstraintManager:
        manager = ConstraintManager(self.state)
        manager.add_rule(valid_period)
        manager.add_rule(single_team_leader)
        manager.add_rule(no_cross_team_overlap)
        return manager

    def _validate(self, candidate: Assignment, action: str) -> None:
        try:
            self._rules().apply_all(candidate)
        except SchedulerError as e:
            logger.warning("⚠️ Assignment %s rejected: %s", action, e)
            raise

    def _remove_assignment(self, assignment_id: str) -> bool:
        """Caller holds the lock. Returns whether anything was removed."""
        idx = self.state.find_assignment(assignment_id)
        if idx is None:
            return False

        self.state.working_assignments.pop(idx)
        self.state.changed_assignments.discard(assignment_id)
        if assignment_id in self.state.original_assignment_ids():
            self.state.deleted_assignments.add(assignment_id)
        return True

    @staticmethod
    def _new_id(prefix: str, taken: Callable[[str], bool]) -> str:
        while True:
            candidate = f"{prefix}-{uuid.uuid4().hex[:12]}"
            if not taken(candidate):
                return candidate
