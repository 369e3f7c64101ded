from fastapi import APIRouter, Depends
from schemas.scheduler.entities import ChangeSummary
from scheduler.store import ChangeTrackedStore
from docs.scheduler.changes import change_summary_description, reset_description
from api.deps import get_store

router = APIRouter(prefix="/changes", tags=["Synchronization"])


@router.get(
    "",
    response_model=ChangeSummary,
    description=change_summary_description,
    summary="Change Summary",
)
def change_summary(store: ChangeTrackedStore = Depends(get_store)):
    return store.get_change_summary()


@router.get("/pending", summary="Has Unsaved Changes")
def pending(store: ChangeTrackedStore = Depends(get_store)):
    return {"hasUnsavedChanges": store.has_unsaved_changes()}


@router.post("/clear", summary="Mark Changes Synchronized")
def clear(store: ChangeTrackedStore = Depends(get_store)):
    store.clear_change_tracking()
    return {"hasUnsavedChanges": store.has_unsaved_changes()}


@router.post("/reset", description=reset_description, summary="Discard Local Changes")
def reset(store: ChangeTrackedStore = Depends(get_store)):
    store.reset_working_state()
    return {"status": "reset"}
