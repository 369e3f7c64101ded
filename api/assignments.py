from fastapi import APIRouter, Depends, HTTPException
from schemas.scheduler.entities import Assignment, TeamLeaderValidation
from schemas.scheduler.inputs import (
    CreateAssignmentInput,
    UpdateAssignmentInput,
    ValidateLeaderInput,
)
from scheduler.store import ChangeTrackedStore
from exceptions.custom_errors import *
from docs.scheduler.assignments import (
    create_assignment_description,
    update_assignment_description,
    delete_assignment_description,
    validate_leader_description,
)
from utils.helpers.scheduler_data import error_detail
from api.deps import get_store

router = APIRouter(prefix="/assignments", tags=["Assignments"])


@router.post(
    "",
    response_model=Assignment,
    status_code=201,
    description=create_assignment_description,
    summary="Create Assignment",
)
def create_assignment(data: CreateAssignmentInput, store: ChangeTrackedStore = Depends(get_store)):
    try:
        return store.create_assignment(
            data.resourceId,
            data.teamId,
            data.start,
            data.end,
            role=data.role,
            is_team_leader=data.isTeamLeader,
        )
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=error_detail(e))


@router.post(
    "/validate-leader",
    response_model=TeamLeaderValidation,
    description=validate_leader_description,
    summary="Validate Team Leader",
)
def validate_leader(data: ValidateLeaderInput, store: ChangeTrackedStore = Depends(get_store)):
    return store.validate_team_leader(
        data.teamId, data.start, data.end, exclude_assignment_id=data.excludeAssignmentId
    )


@router.patch(
    "/{assignment_id}",
    response_model=Assignment,
    description=update_assignment_description,
    summary="Update Assignment",
)
def update_assignment(
    assignment_id: str,
    data: UpdateAssignmentInput,
    store: ChangeTrackedStore = Depends(get_store),
):
    try:
        return store.update_assignment(assignment_id, data)
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=error_detail(e))


@router.delete(
    "/{assignment_id}",
    status_code=204,
    description=delete_assignment_description,
    summary="Delete Assignment",
)
def delete_assignment(assignment_id: str, store: ChangeTrackedStore = Depends(get_store)):
    store.delete_assignment(assignment_id)
