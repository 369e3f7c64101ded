import secrets
from typing import Callable, Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from starlette.middleware.trustedhost import TrustedHostMiddleware

from api.assignments import router as assignments_router
from api.changes import router as changes_router
from api.coverage import router as coverage_router
from api.healthcheck import router as healthcheck_router
from api.scheduler import router as scheduler_router
from config import settings
from schemas.scheduler.entities import SchedulerData
from scheduler.store import ChangeTrackedStore
from utils.helpers.scheduler_data import default_data_source
from utils.logger import get_logger

logger = get_logger(__name__)

API_KEY_HEADER = "x-api-key"
HEALTH_PATH = "/api/health/check"

# paths reachable without the API key
PUBLIC_PATHS = {"/openapi.json", "/redoc", "/docs", HEALTH_PATH}
PUBLIC_PREFIXES = ("/docs/",)


def is_public(path: str) -> bool:
    return path in PUBLIC_PATHS or path.startswith(PUBLIC_PREFIXES)


def add_security_middleware(app: FastAPI) -> None:
    """CORS, trusted hosts, request size guard and API key check."""
    if settings.ENABLE_CORS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ALLOW_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        limit = settings.MAX_BODY_BYTES
        length = request.headers.get("content-length", "")
        if limit > 0 and length.isdigit() and int(length) > limit:
            return JSONResponse(status_code=413, content={"detail": "Payload too large"})
        return await call_next(request)

    @app.middleware("http")
    async def api_key_guard(request: Request, call_next):
        if request.method == "OPTIONS" or is_public(request.url.path):
            return await call_next(request)

        expected = settings.API_KEY
        if not expected:
            # dev mode
            return await call_next(request)

        provided = request.headers.get(API_KEY_HEADER) or ""
        if not secrets.compare_digest(provided, str(expected)):
            logger.warning("Rejected request to %s: bad or missing API key", request.url.path)
            return JSONResponse(status_code=401, content={"detail": "Unauthorized"})
        return await call_next(request)


def install_openapi(app: FastAPI) -> None:
    """Document the API key header and require it everywhere except the health check."""

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema

        schema = get_openapi(
            title=app.title,
            version=app.version,
            description="Crew scheduling: teams, assignments, leader coverage and change tracking",
            routes=app.routes,
        )
        schema.setdefault("components", {}).setdefault("securitySchemes", {})["ApiKeyAuth"] = {
            "type": "apiKey",
            "in": "header",
            "name": API_KEY_HEADER,
        }
        for path, methods in schema.get("paths", {}).items():
            for op in methods.values():
                op["security"] = [] if path == HEALTH_PATH else [{"ApiKeyAuth": []}]

        app.openapi_schema = schema
        return app.openapi_schema

    app.openapi = custom_openapi


def create_app(
    store: Optional[ChangeTrackedStore] = None,
    data_source: Optional[Callable[[], SchedulerData]] = None,
) -> FastAPI:
    """
    Build the HTTP facade around a change-tracked store.

    The store is seeded lazily from `data_source` on the first request that
    needs it (see `api.deps.get_store`).
    """
    app = FastAPI(title="Crew Scheduler API")
    app.state.store = store or ChangeTrackedStore()
    app.state.data_source = data_source or default_data_source()

    if not settings.API_KEY:
        logger.warning("API_KEY not set; API key auth is DISABLED (dev mode).")

    add_security_middleware(app)
    install_openapi(app)

    for router in (
        scheduler_router,
        assignments_router,
        coverage_router,
        changes_router,
        healthcheck_router,
    ):
        app.include_router(router, prefix="/api")
    return app


app = create_app()
