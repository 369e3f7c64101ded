from dataclasses import dataclass, field
from typing import List, Set, Optional
from schemas.scheduler.entities import Assignment, Resource, Team


@dataclass
class ChangeTrackingState:
    """
    A dataclass to hold the working dataset of a scheduling session together
    with the baseline it is diffed against.
    """

    # reference data
    resources: List[Resource] = field(default_factory=list)
    """Resources supplied by the data source. Read-only for the store."""

    # baseline
    original_teams: List[Team] = field(default_factory=list)
    """Teams as last synchronized with the external system."""
    original_assignments: List[Assignment] = field(default_factory=list)
    """Assignments as last synchronized with the external system."""

    # working copy
    working_teams: List[Team] = field(default_factory=list)
    """Current, possibly unsynchronized, teams."""
    working_assignments: List[Assignment] = field(default_factory=list)
    """Current, possibly unsynchronized, assignments."""

    # tracking sets
    changed_assignments: Set[str] = field(default_factory=set)
    """Ids of assignments created or updated since the last synchronization."""
    changed_teams: Set[str] = field(default_factory=set)
    """Ids of teams created or updated since the last synchronization."""
    deleted_assignments: Set[str] = field(default_factory=set)
    """Ids of baseline assignments removed from the working copy."""
    deleted_teams: Set[str] = field(default_factory=set)
    """Ids of baseline teams removed from the working copy."""

    seeded: bool = False
    """Whether both snapshots have been filled from a data source."""

    def find_assignment(self, assignment_id: str) -> Optional[int]:
        """Index of the assignment in the working copy, or None."""
        for idx, a in enumerate(self.working_assignments):
            if a.id == assignment_id:
                return idx
        return None

    def find_team(self, team_id: str) -> Optional[int]:
        """Index of the team in the working copy, or None."""
        for idx, t in enumerate(self.working_teams):
            if t.id == team_id:
                return idx
        return None

    def original_assignment_ids(self) -> Set[str]:
        return {a.id for a in self.original_assignments}

    def original_team_ids(self) -> Set[str]:
        return {t.id for t in self.original_teams}

    def clear_tracking(self) -> None:
        self.changed_assignments.clear()
        self.changed_teams.clear()
        self.deleted_assignments.clear()
        self.deleted_teams.clear()

    def has_changes(self) -> bool:
        return bool(
            self.changed_assignments
            or self.changed_teams
            or self.deleted_assignments
            or self.deleted_teams
        )

    def assignment_id_taken(self, assignment_id: str) -> bool:
        """In the working copy or the baseline, so a deleted id is never reissued."""
        return (
            self.find_assignment(assignment_id) is not None
            or assignment_id in self.original_assignment_ids()
        )

    def team_id_taken(self, team_id: str) -> bool:
        return self.find_team(team_id) is not None or team_id in self.original_team_ids()
