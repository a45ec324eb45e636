from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from auth import router as auth_router
from auth import security
from core import schema
from core.config import Settings
from core.db import Database
from core.errors import AppError, StorageFailure
from core.log import configure_logging
from feedback import router as feedback_router
from locations import router as locations_router
from performance import router as performance_router
from staff import router as staff_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    configure_logging(settings.log_level)
    settings.validate()

    # One storage handle per process, shared by every request.
    db = await Database.connect(
        settings.database_url,
        max_size=settings.db_pool_max_size,
        command_timeout=settings.db_command_timeout,
    )
    app.state.db = db
    try:
        await schema.create_schema(db)
        if settings.seed_demo_data:
            admin_hash = await run_in_threadpool(security.hash_password, schema.DEMO_ADMIN["password"])
            staff_hash = await run_in_threadpool(security.hash_password, schema.DEMO_STAFF["password"])
            await schema.seed_demo_data(
                db,
                admin_password_hash=admin_hash,
                staff_password_hash=staff_hash,
            )
        logger.info("startup_done env=%s", settings.app_env)
        yield
    finally:
        app.state.db = None
        await db.close()
        logger.info("shutdown_done")


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid input"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"Invalid input: {field}: {first.get('msg', 'invalid value')}" if field else "Invalid input"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        settings: Settings = request.app.state.settings
        message = exc.message
        if isinstance(exc, StorageFailure) and settings.is_production:
            # Driver details were logged where the failure was raised.
            message = "Internal server error"
        return _error_response(exc.status_code, message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        return _error_response(400, _validation_message(exc))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error_response(exc.status_code, str(exc.detail))


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(title="hygiene-feedback", lifespan=lifespan)
    app.state.settings = settings
    app.state.db = None

    # Bearer tokens travel in a header, so credentialed CORS is not needed.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(locations_router.router, tags=["locations"])
    app.include_router(feedback_router.router, tags=["feedback"])
    app.include_router(auth_router.router, tags=["auth"])
    app.include_router(performance_router.router, tags=["admin"])
    app.include_router(staff_router.router, tags=["staff"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": "hygiene-feedback api"}

    return app


app = create_app()
