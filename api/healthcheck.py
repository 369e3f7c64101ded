from fastapi import APIRouter, Request

router = APIRouter(prefix="/health", tags=["Health Check"])


@router.get("/check", summary="Health Check")
def healthcheck(request: Request):
    return {"status": "ok", "seeded": request.app.state.store.is_seeded}
