# backend/inspection_payroll/main.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .db import init_db
from .domain.errors import DomainError
from .logging_config import configure_logging

from .middleware.request_id import RequestIdMiddleware
from .middleware.structured_logging import StructuredLoggingMiddleware

from .routers.health import router as health_router
from .routers.properties import router as properties_router
from .routers.inspection_tasks import router as inspection_tasks_router
from .routers.inspection_records import router as inspection_records_router
from .routers.sundry_tasks import router as sundry_tasks_router
from .routers.reports import router as reports_router
from .routers.audit import router as audit_router

API_PREFIX = "/api"

log = logging.getLogger("inspection_payroll.app")


def _cors_origins() -> list[str]:
    val = getattr(settings, "cors_allow_origins", ["*"])
    if isinstance(val, str):
        v = val.strip()
        return ["*"] if v == "*" else [x.strip() for x in v.split(",") if x.strip()]
    if isinstance(val, list) and val:
        return val
    return ["*"]


def _message(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, **extra})


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainError)
    async def _domain_error(request: Request, exc: DomainError):
        return _message(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _request_validation(request: Request, exc: RequestValidationError):
        errors = [
            {"field": ".".join(str(p) for p in e.get("loc", ()) if p != "body"), "error": e.get("msg", "")}
            for e in exc.errors()
        ]
        return _message(400, "validation failed", errors=errors)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        return _message(exc.status_code, str(exc.detail))

    @app.exception_handler(SQLAlchemyError)
    async def _storage_error(request: Request, exc: SQLAlchemyError):
        log.exception("storage failure on %s %s", request.method, request.url.path)
        return _message(500, "internal error, please retry later")

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception):
        log.exception("unhandled error on %s %s", request.method, request.url.path)
        return _message(500, "internal error, please retry later")


@asynccontextmanager
async def _lifespan(app: FastAPI):
    if settings.auto_create_schema:
        init_db()
        log.info("database schema ready")
    yield


def create_app(*, create_schema: bool = True) -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Inspection Scheduling & Payroll",
        version=settings.app_version,
        lifespan=_lifespan if create_schema else None,
    )

    app.add_middleware(StructuredLoggingMiddleware)
    # outermost, so the request log line sees the id
    app.add_middleware(RequestIdMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app)

    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(properties_router, prefix=API_PREFIX)
    app.include_router(inspection_tasks_router, prefix=API_PREFIX)
    app.include_router(inspection_records_router, prefix=API_PREFIX)
    app.include_router(sundry_tasks_router, prefix=API_PREFIX)
    app.include_router(reports_router, prefix=API_PREFIX)
    app.include_router(audit_router, prefix=API_PREFIX)

    return app


app = create_app()
