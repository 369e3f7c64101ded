from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from schemas.scheduler.entities import TimeRange
from scheduler.store import ChangeTrackedStore
from utils.helpers.scheduler_data import gaps_to_payload
from api.deps import get_store

router = APIRouter(prefix="/coverage", tags=["Coverage"])


@router.get("/gaps", summary="Team Leader Gaps")
def leader_gaps(
    start: datetime,
    end: datetime,
    teamId: Optional[str] = Query(default=None),
    store: ChangeTrackedStore = Depends(get_store),
):
    """Periods in the view window where a team has members but no team leader."""
    view = TimeRange(start=start, end=end)
    if not view.start < view.end:
        raise HTTPException(status_code=400, detail="View start must be before view end.")

    if teamId is not None:
        gaps = store.leader_gaps(teamId, view)
        return gaps_to_payload({teamId: gaps} if gaps else {})
    return gaps_to_payload(store.all_leader_gaps(view))
