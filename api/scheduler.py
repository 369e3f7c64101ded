from fastapi import APIRouter, Depends, HTTPException
from schemas.scheduler.entities import SchedulerData, Team, TeamComposition
from schemas.scheduler.inputs import CreateTeamInput
from scheduler.store import ChangeTrackedStore
from exceptions.custom_errors import *
from utils.helpers.scheduler_data import error_detail
from api.deps import get_store

router = APIRouter(tags=["Scheduler"])


@router.get("/scheduler", response_model=SchedulerData, summary="Get Scheduler Data")
def get_scheduler_data(store: ChangeTrackedStore = Depends(get_store)):
    return store.get_scheduler_data()


@router.get("/teams/{team_id}", response_model=TeamComposition, summary="Get Team Composition")
def get_team(team_id: str, store: ChangeTrackedStore = Depends(get_store)):
    composition = store.get_team_composition(team_id)
    if composition is None:
        raise HTTPException(status_code=404, detail=f"Team not found: {team_id}")
    return composition


@router.post("/teams", response_model=Team, status_code=201, summary="Create Team")
def create_team(data: CreateTeamInput, store: ChangeTrackedStore = Depends(get_store)):
    try:
        return store.create_team(data.name, description=data.description, color=data.color)
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=error_detail(e))


@router.delete("/teams/{team_id}", status_code=204, summary="Delete Team")
def delete_team(team_id: str, store: ChangeTrackedStore = Depends(get_store)):
    store.delete_team(team_id)
