import logging
import os
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from dashboard.api.router import api_router
from dashboard.core.config import settings
from dashboard.core.errors import (
    AppError,
    StoreError,
    ValidationError,
    error_payload,
    field_errors,
    resolve_error_code,
)
from dashboard.db.init_db import create_tables, seed_superadmin


def _resolve_log_level(value: str) -> int:
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else logging.INFO


if not logging.getLogger().handlers:
    logging.basicConfig(
        level=_resolve_log_level(settings.log_level),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
logger = logging.getLogger("dashboard")


def _run_migrations_if_needed():
    """Apply Alembic migrations on startup in production.

    Controlled by env var AUTO_APPLY_MIGRATIONS (default: '1'). Safe to run repeatedly.
    """
    if settings.env.lower() != "prod":
        return
    if os.getenv("AUTO_APPLY_MIGRATIONS", "1") != "1":
        return
    from alembic import command
    from alembic.config import Config

    alembic_ini = Path(__file__).resolve().parents[1] / "alembic.ini"
    if not alembic_ini.exists():
        logger.warning("alembic.ini not found at %s, skipping auto-migrations", alembic_ini)
        return
    cfg = Config(str(alembic_ini))
    # script_location must resolve when launched from an arbitrary CWD
    cfg.set_main_option("script_location", str(Path(__file__).resolve().parents[1] / "alembic"))
    logger.info("Applying Alembic migrations -> head")
    try:
        command.upgrade(cfg, "head")
    except Exception:  # pragma: no cover
        # Keep serving; migrations can be retried manually
        logger.exception("Migration failed")
        return
    logger.info("Migrations applied")


app = FastAPI(title=settings.app_name, version="0.1.0")

origins = settings.cors_origins
logger.info("Resolved CORS origins: %s", origins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


def _log_error(request: Request, status_code: int, code: str, message: str, exc: Exception | None = None) -> None:
    log_message = f"[{code}] {request.method} {request.url.path} message={message}"
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(log_message, exc_info=exc)
    else:
        logger.warning(log_message)


@app.exception_handler(AppError)
async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    _log_error(request, exc.status_code, exc.code, exc.message, exc)
    return JSONResponse(status_code=exc.status_code, content=error_payload(exc.code, exc.message, exc.details))


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = field_errors(exc.errors())
    _log_error(request, status.HTTP_400_BAD_REQUEST, ValidationError.code, str(details))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_payload(ValidationError.code, "Request validation failed", details),
    )


@app.exception_handler(SQLAlchemyError)
async def handle_store_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    # Full cause goes to the log only; callers get an opaque failure
    _log_error(request, status.HTTP_500_INTERNAL_SERVER_ERROR, StoreError.code, str(exc), exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_payload(StoreError.code, StoreError.message),
    )


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = resolve_error_code(exc.status_code)
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    _log_error(request, exc.status_code, code, message)
    return JSONResponse(status_code=exc.status_code, content=error_payload(code, message), headers=getattr(exc, "headers", None))


@app.on_event("startup")
def startup():
    _run_migrations_if_needed()
    if settings.is_dev:
        create_tables()
        seed_superadmin()
