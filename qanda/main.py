"""
Q&A Backend: FastAPI Application Factory
=========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn qanda.main:app) or the `qanda-server` script.
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌──────────┐ ┌──────────┐ ┌───────┐ ┌──────┐            │
    │  │  Req ID  │→│ Logging  │→│ GZip  │→│ CORS │            │
    │  └──────────┘ └──────────┘ └───────┘ └──────┘            │
    │                                                          │
    │  Routes:                                                 │
    │  ┌────────────────┐ ┌──────────────┐ ┌────────────────┐  │
    │  │ /questions/... │ │ /answers/... │ │ /health, /test │  │
    │  └────────────────┘ └──────────────┘ └────────────────┘  │
    │                                                          │
    │  Exception Handlers:                                     │
    │  ┌────────────────────────────────────────────────────┐  │
    │  │ Validation→400 │ NotFound→404 │ DB→500 │ other→500 │  │
    │  └────────────────────────────────────────────────────┘  │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Open the Database handle (unless one was injected)
    3. Create missing tables when DB_CREATE_SCHEMA is on
    4. Log startup complete

    Shutdown:
    1. Dispose the Database handle (close all pooled connections)
    2. Log shutdown complete
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from qanda import __version__
from qanda.config import settings
from qanda.database import Database
from qanda.exceptions import DatabaseError, NotFoundError, QandaError, ValidationError
from qanda.middleware.logging import RequestLoggingMiddleware
from qanda.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from qanda.routes import answers, health, questions

logger = logging.getLogger(__name__)

GENERIC_SERVER_MESSAGE = "An internal error occurred. Please try again later."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s

    Access lines come from the "qanda.access" logger (RequestLoggingMiddleware);
    uvicorn's own access log is turned down so each request is logged once.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the Database handle on startup and dispose it on shutdown.

    A handle already present on app.state (passed to create_app, typically by
    tests) is used as is and left for its owner to dispose.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Q&A Backend %s starting up...", __version__)

    owns_database = getattr(app.state, "database", None) is None
    if owns_database:
        app.state.database = Database.from_settings(settings)
    database: Database = app.state.database

    if settings.db_create_schema:
        await database.create_schema()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Q&A Backend shutting down...")
    if owns_database:
        await database.dispose()
        app.state.database = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str, details: Optional[dict] = None) -> dict:
    body = {"error": error, "message": message, "request_id": request_id_var.get("")}
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError         → 400 Bad Request
        RequestValidationError  → 400 Bad Request (bad path id, unparseable JSON)
        NotFoundError           → 404 Not Found
        DatabaseError           → 500 Internal Server Error
        QandaError (base)       → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    Store error text and stack traces are logged, never returned, unless
    EXPOSE_STORE_ERRORS is switched on for development.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc.message, exc.context),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """FastAPI's own parsing failures get the same 400 shape as ours."""
        fields = sorted({".".join(str(p) for p in err.get("loc", ())) for err in exc.errors()})
        logger.warning("[%s] Request validation error: %s", request_id_var.get(""), fields)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", "Invalid request data.", {"fields": fields}),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=_error_body("not_found", exc.message),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        details = None
        if settings.expose_store_errors and "store_error" in exc.context:
            details = {"store_error": exc.context["store_error"]}
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", exc.message, details),
        )

    @app.exception_handler(QandaError)
    async def handle_qanda_error(request: Request, exc: QandaError):
        logger.error("[%s] Application error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", GENERIC_SERVER_MESSAGE),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all for truly unexpected errors. The stack trace is logged only."""
        logger.error("[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again or contact support.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: Optional pre-built handle. When given, the lifespan uses it
                  instead of opening one from settings, and does not dispose it.
    """
    app = FastAPI(
        title="Questions and Answers API",
        description=(
            "CRUD and voting API for questions and their answers. "
            "Questions can be searched by title and category; questions and "
            "answers accept up/down votes.\n\n"
            "Every error body has the shape `{error, message, details, request_id}`. "
            "`error` is a machine-readable code (`validation_error`, `not_found`, "
            "`server_error`), not the database's error text; that text is returned "
            "under `details.store_error` only when EXPOSE_STORE_ERRORS is enabled."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.database = database

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(questions.router)
    app.include_router(answers.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Entry point for the `qanda-server` console script."""
    uvicorn.run(
        "qanda.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )
