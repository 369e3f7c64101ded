from fastapi import HTTPException, Request
from scheduler.store import ChangeTrackedStore
from exceptions.custom_errors import CUSTOM_ERRORS


def get_store(request: Request) -> ChangeTrackedStore:
    """The app's store, seeded from the configured data source on first use."""
    store: ChangeTrackedStore = request.app.state.store
    if not store.is_seeded:
        try:
            store.load(request.app.state.data_source)
        except tuple(CUSTOM_ERRORS) as e:
            raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    return store
