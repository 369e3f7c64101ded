import uuid
import pytest

from exceptions.custom_errors import (
    ConflictError,
    CrossTeamConflictError,
    NotFoundError,
    ValidationError,
)
from schemas.scheduler.entities import Assignment, Team, TimeRange
from schemas.scheduler.inputs import UpdateAssignmentInput
from scheduler.store import ChangeTrackedStore
from utils.loader import load_mock_data
from tests.conftest import day


def tracking(store):
    s = store.state
    return s.changed_assignments, s.deleted_assignments, s.changed_teams, s.deleted_teams


# == seeding ==


def test_seed_fills_both_snapshots_without_changes(store):
    assert store.is_seeded
    assert not store.has_unsaved_changes()
    data = store.get_scheduler_data()
    assert [t.id for t in data.teams] == ["T1", "T2"]
    assert [a.id for a in data.assignments] == ["A1"]
    assert store.state.original_assignments is not store.state.working_assignments


def test_load_seeds_once():
    calls = []

    def source():
        calls.append(1)
        return load_mock_data()

    s = ChangeTrackedStore()
    s.load(source)
    s.create_team("Local")
    data = s.load(source)
    assert len(calls) == 1
    assert any(t.name == "Local" for t in data.teams)


def test_reset_forces_reseed_and_drops_edits():
    s = ChangeTrackedStore()
    s.load(load_mock_data)
    s.delete_team("team-1")
    assert s.has_unsaved_changes()

    s.reset_working_state()
    assert not s.is_seeded
    data = s.load(load_mock_data)
    assert not s.has_unsaved_changes()
    assert {t.id for t in data.teams} == {"team-1", "team-2"}


def test_returned_data_is_a_copy(store):
    data = store.get_scheduler_data()
    data.assignments.clear()
    assert store.get_assignment("A1") is not None


# == create / delete ==


def test_create_then_delete_leaves_no_trace(store):
    a = store.create_assignment("R2", "T1", day(1), day(5))
    assert a.id in store.state.changed_assignments
    assert store.has_unsaved_changes()

    store.delete_assignment(a.id)
    assert tracking(store) == (set(), set(), set(), set())
    assert not store.has_unsaved_changes()


def test_create_rejects_empty_period(store):
    with pytest.raises(ValidationError):
        store.create_assignment("R2", "T1", day(5), day(5))
    with pytest.raises(ValidationError):
        store.create_assignment("R2", "T1", day(6), day(5))
    assert len(store.state.working_assignments) == 1
    assert not store.has_unsaved_changes()


def test_create_rejects_overlapping_leader(store):
    with pytest.raises(ConflictError) as err:
        store.create_assignment("R2", "T1", day(5), day(12), is_team_leader=True)
    assert err.value.conflicting_assignment.id == "A1"
    assert "James Wilson is already Team Leader" in str(err.value)
    assert len(store.state.working_assignments) == 1


def test_leader_touching_previous_leader_is_allowed(store):
    a = store.create_assignment("R2", "T1", day(10), day(20), is_team_leader=True)
    assert a.isTeamLeader


def test_non_leader_may_overlap_leader(store):
    a = store.create_assignment("R2", "T1", day(2), day(8))
    assert not a.isTeamLeader


def test_cross_team_overlap_is_rejected(seed_data):
    seed_data.assignments.append(
        Assignment(id="A2", resourceId="R1", teamId="T2", start=day(20), end=day(30))
    )
    store = ChangeTrackedStore()
    store.seed(seed_data)
    before = store.get_scheduler_data().assignments

    with pytest.raises(CrossTeamConflictError) as err:
        store.create_assignment("R1", "T1", day(20), day(25), is_team_leader=True)

    assert err.value.team_ids == ["T2"]
    assert err.value.team_names == ["Bravo"]
    assert [a.id for a in err.value.conflicting_assignments] == ["A2"]
    assert "Bravo" in str(err.value)
    assert store.get_scheduler_data().assignments == before
    assert not store.has_unsaved_changes()


def test_same_team_overlap_of_resource_is_allowed(store):
    a = store.create_assignment("R1", "T1", day(5), day(15))
    assert a.teamId == "T1"


def test_delete_synced_assignment_is_tracked(store):
    store.delete_assignment("A1")
    assert store.state.deleted_assignments == {"A1"}
    assert store.state.changed_assignments == set()
    summary = store.get_change_summary()
    assert [a.id for a in summary.deletedAssignments] == ["A1"]
    assert summary.deletedAssignments[0].end == day(10)


def test_delete_unknown_assignment_is_a_no_op(store):
    store.delete_assignment("missing")
    assert not store.has_unsaved_changes()


# == update ==


def test_update_synced_assignment(store):
    updated = store.update_assignment("A1", end=day(15))
    assert updated.end == day(15)
    assert store.state.changed_assignments == {"A1"}
    assert store.state.deleted_assignments == set()

    summary = store.get_change_summary()
    assert [a.id for a in summary.updatedAssignments] == ["A1"]
    assert summary.updatedAssignments[0].end == day(15)
    assert summary.createdAssignments == []
    # baseline untouched
    assert store.state.original_assignments[0].end == day(10)


def test_update_created_assignment_stays_created(store):
    a = store.create_assignment("R2", "T2", day(1), day(5))
    store.update_assignment(a.id, end=day(8))
    summary = store.get_change_summary()
    assert [x.id for x in summary.createdAssignments] == [a.id]
    assert summary.updatedAssignments == []


def test_update_accepts_update_object(store):
    updated = store.update_assignment("A1", UpdateAssignmentInput(teamId="T2"))
    assert updated.teamId == "T2"
    assert updated.start == day(1)


def test_update_accepts_snake_case_keys(store):
    updated = store.update_assignment("A1", team_id="T2", is_team_leader=False)
    assert updated.teamId == "T2"
    assert not updated.isTeamLeader


def test_update_unknown_id_raises(store):
    with pytest.raises(NotFoundError):
        store.update_assignment("missing", end=day(15))


def test_update_rejects_unknown_fields(store):
    with pytest.raises(ValidationError):
        store.update_assignment("A1", resourceId="R2")
    assert store.get_assignment("A1").resourceId == "R1"


def test_update_rejects_inverted_period(store):
    with pytest.raises(ValidationError):
        store.update_assignment("A1", start=day(12))
    assert store.get_assignment("A1").start == day(1)
    assert not store.has_unsaved_changes()


def test_update_ignores_own_leader_period(store):
    updated = store.update_assignment("A1", start=day(2), end=day(9))
    assert updated.isTeamLeader


def test_update_to_leader_checks_conflicts(store):
    a = store.create_assignment("R2", "T1", day(5), day(12))
    with pytest.raises(ConflictError):
        store.update_assignment(a.id, is_team_leader=True)
    assert not store.get_assignment(a.id).isTeamLeader


def test_update_into_other_team_checks_cross_team(store):
    store.create_assignment("R1", "T2", day(20), day(30))
    with pytest.raises(CrossTeamConflictError):
        store.update_assignment("A1", end=day(25))


# == teams ==


def test_create_team(store):
    team = store.create_team("  Charlie ", description="night shift")
    assert team.name == "Charlie"
    assert team.color == "#3B82F6"
    assert team.id.startswith("team-")
    assert [t.id for t in store.get_change_summary().createdTeams] == [team.id]


def test_create_team_requires_name(store):
    with pytest.raises(ValidationError):
        store.create_team("")
    with pytest.raises(ValidationError):
        store.create_team("   ")


def test_delete_team_cascades(store):
    local = store.create_assignment("R2", "T1", day(3), day(6))

    store.delete_team("T1")

    assert store.state.deleted_teams == {"T1"}
    assert store.state.deleted_assignments == {"A1"}
    assert local.id not in store.state.changed_assignments
    assert all(a.teamId != "T1" for a in store.state.working_assignments)


def test_delete_created_team_leaves_no_trace(store):
    team = store.create_team("Temp")
    store.create_assignment("R2", team.id, day(1), day(3))
    store.delete_team(team.id)
    assert not store.has_unsaved_changes()


def test_delete_unknown_team_is_a_no_op(store):
    store.delete_team("missing")
    assert not store.has_unsaved_changes()


# == synchronization ==


def test_clear_change_tracking_makes_working_the_baseline(store):
    a = store.create_assignment("R2", "T2", day(1), day(5))
    store.delete_assignment("A1")

    store.clear_change_tracking()
    assert not store.has_unsaved_changes()
    assert [x.id for x in store.state.original_assignments] == [a.id]

    # deleting the now-synced assignment is tracked
    store.delete_assignment(a.id)
    assert store.state.deleted_assignments == {a.id}


def test_clear_change_tracking_is_idempotent(store):
    store.clear_change_tracking()
    store.clear_change_tracking()
    assert not store.has_unsaved_changes()
    assert store.get_change_summary().model_dump() == {
        "createdAssignments": [],
        "updatedAssignments": [],
        "deletedAssignments": [],
        "createdTeams": [],
        "updatedTeams": [],
        "deletedTeams": [],
    }


# == reads ==


def test_team_composition(store):
    store.create_assignment("R3", "T1", day(2), day(4))
    comp = store.get_team_composition("T1")
    assert comp.teamName == "Alpha"
    names = [(m.resourceName, m.resourceSurname, m.isTeamLeader) for m in comp.members]
    assert names == [("James", "Wilson", True), ("Madonna", "", False)]
    assert store.get_team_composition("missing") is None


def test_validate_team_leader(store):
    result = store.validate_team_leader("T1", day(5), day(8))
    assert not result.valid
    assert result.conflictingAssignment.id == "A1"
    assert result.message == "James Wilson is already Team Leader during this period"

    assert store.validate_team_leader("T1", day(10), day(12)).valid
    assert store.validate_team_leader("T1", day(5), day(8), exclude_assignment_id="A1").valid


def test_leader_gaps_follow_working_copy(store):
    view = TimeRange(start=day(1), end=day(31))
    assert store.leader_gaps("T1", view) == []

    store.create_assignment("R2", "T1", day(5), day(15))
    gaps = store.leader_gaps("T1", view)
    assert [(g.start, g.end) for g in gaps] == [(day(10), day(15))]
    assert list(store.all_leader_gaps(view)) == ["T1"]


# == isolation of error payloads ==


def test_leader_conflict_carries_a_copy(store):
    with pytest.raises(ConflictError) as err:
        store.create_assignment("R2", "T1", day(5), day(12), is_team_leader=True)

    err.value.conflicting_assignment.end = day(3)

    assert store.get_assignment("A1").end == day(10)
    assert not store.has_unsaved_changes()


def test_cross_team_conflict_carries_copies(seed_data):
    seed_data.assignments.append(
        Assignment(id="A2", resourceId="R1", teamId="T2", start=day(20), end=day(30))
    )
    store = ChangeTrackedStore()
    store.seed(seed_data)

    with pytest.raises(CrossTeamConflictError) as err:
        store.create_assignment("R1", "T1", day(20), day(25))

    err.value.conflicting_assignments[0].teamId = "T1"

    assert store.get_assignment("A2").teamId == "T2"
    assert not store.has_unsaved_changes()


# == partial updates with explicit nulls ==


def test_update_clears_role_with_none(store):
    store.update_assignment("A1", role="Lead")
    updated = store.update_assignment("A1", role=None)
    assert updated.role is None
    assert store.get_assignment("A1").role is None


def test_update_rejects_null_required_fields(store):
    for field in ("start", "end", "teamId", "isTeamLeader"):
        with pytest.raises(ValidationError):
            store.update_assignment("A1", **{field: None})
    assert store.get_assignment("A1") == store.state.original_assignments[0]
    assert not store.has_unsaved_changes()


# == id allocation ==


def test_deleted_assignment_id_is_not_reissued(seed_data, monkeypatch):
    seed_data.assignments.append(
        Assignment(id="assign-aaaaaaaaaaaa", resourceId="R2", teamId="T2", start=day(1), end=day(5))
    )
    store = ChangeTrackedStore()
    store.seed(seed_data)
    store.delete_assignment("assign-aaaaaaaaaaaa")

    ids = iter([uuid.UUID("a" * 32), uuid.UUID("b" * 32)])
    monkeypatch.setattr(uuid, "uuid4", lambda: next(ids))

    created = store.create_assignment("R2", "T2", day(1), day(5))

    assert created.id == "assign-bbbbbbbbbbbb"
    assert store.state.deleted_assignments == {"assign-aaaaaaaaaaaa"}
    assert store.state.changed_assignments == {"assign-bbbbbbbbbbbb"}


def test_deleted_team_id_is_not_reissued(seed_data, monkeypatch):
    seed_data.teams.append(Team(id="team-cccccccccccc", name="Old", createdAt=day(1)))
    store = ChangeTrackedStore()
    store.seed(seed_data)
    store.delete_team("team-cccccccccccc")

    ids = iter([uuid.UUID("c" * 32), uuid.UUID("d" * 32)])
    monkeypatch.setattr(uuid, "uuid4", lambda: next(ids))

    team = store.create_team("New")

    assert team.id == "team-dddddddddddd"
    assert store.state.deleted_teams == {"team-cccccccccccc"}
