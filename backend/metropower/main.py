"""FastAPI application factory for the MetroPower dashboard API."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi_pagination import add_pagination

from metropower.api import assignments, exports, org, projects
from metropower.core.config import Settings, get_settings
from metropower.core.errors import MetroPowerError
from metropower.core.logging import configure_logging, get_logger
from metropower.db.session import build_engine, init_db, session_scope
from metropower.services.demo_data import seed_store
from metropower.services.store import InMemoryStore, SqlStore

logger = get_logger(__name__)


def _error_body(title: str, message: str) -> dict[str, str]:
    return {"error": title, "message": message}


async def _metropower_error_handler(request: Request, exc: MetroPowerError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("request.failed path=%s error=%s", request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.title, exc.message))


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("Validation error", "; ".join(problems)),
    )


def _init_storage(app: FastAPI, settings: Settings) -> None:
    if settings.storage_backend == "memory":
        store = InMemoryStore()
        if settings.seed_demo_data:
            seed_store(store)
        app.state.memory_store = store
        logger.info("storage.ready backend=memory seeded=%s", settings.seed_demo_data)
        return

    engine = build_engine(settings.database_url, echo=settings.database_echo)
    init_db(engine)
    if settings.seed_demo_data:
        with session_scope(engine) as session:
            seeded = seed_store(SqlStore(session))
        logger.info("storage.seed backend=database seeded=%s", seeded)
    app.state.engine = engine
    app.state.memory_store = None
    logger.info("storage.ready backend=database")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        engine = getattr(app.state, "engine", None)
        if engine is not None:
            engine.dispose()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    # Storage is built eagerly so the app is usable without running the lifespan.
    _init_storage(app, settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_exception_handler(MetroPowerError, _metropower_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)

    @app.get("/health", tags=["health"])
    def health() -> dict[str, bool]:
        return {"ok": True}

    app.include_router(org.router)
    app.include_router(projects.router)
    app.include_router(assignments.router)
    app.include_router(exports.router)
    add_pagination(app)
    return app
