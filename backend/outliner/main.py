"""
Outliner Backend — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers, routers and the
       static front-end; the lifespan owns the Database (store client).
Who:   uvicorn (`uvicorn outliner.main:app`) and `python -m outliner`.
When:  Once at server startup.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────┐ ┌──────┐ ┌─────────┐  │
    │  │ Req ID   │→│  Logging    │→│ GZip │→│  CORS   │  │
    │  └──────────┘ └─────────────┘ └──────┘ └─────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────┐ ┌───────────────────┐ ┌───────────┐ │
    │  │ GET /api/  │ │ POST/PUT/DELETE   │ │ GET /     │ │
    │  │   data     │ │ sections, sub-    │ │ GET       │ │
    │  │            │ │ sections, items   │ │  /health  │ │
    │  └────────────┘ └───────────────────┘ └───────────┘ │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Store error │ bad input │ anything → 500     │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Configure logging
    2. Build the Database (engine + pool) and attach it to app.state
    3. Create missing tables
    A failure in 2 or 3 is logged and the server still starts; data calls
    then answer 500 until the store is fixed.
    Shutdown:
    1. Dispose the engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from outliner import __version__
from outliner.config import Settings, settings as default_settings
from outliner.database import init_schema, open_database
from outliner.exceptions import OutlinerError, StoreOperationError
from outliner.middleware.logging import RequestLoggingMiddleware
from outliner.middleware.request_id import RequestIDMiddleware, request_id_var
from outliner.routes import frontend, health, items, sections, subsections, tree

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure process-wide logging.

    Format: 2026-01-15T12:00:00 [INFO] outliner.access: GET /api/data 200 4.2ms ...
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that log every statement or request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Build the store client on startup and release it on shutdown."""
    app_settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(app_settings.log_level)
    logger.info("Outliner backend %s starting up...", __version__)

    database = open_database(app_settings, app.state)
    if database is not None:
        await init_schema(database)

    logger.info("Server ready at http://%s:%d", app_settings.host, app_settings.port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Outliner backend shutting down...")
    if database is not None:
        await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{location}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers.

    Every failure becomes HTTP 500 with {"error": <message>}:
        StoreOperationError     → store/driver message verbatim
        OutlinerError (base)    → its message
        RequestValidationError  → malformed id or body, pydantic's message
        Exception (fallback)    → str(exc)
    """

    @app.exception_handler(StoreOperationError)
    async def handle_store_error(request: Request, exc: StoreOperationError):
        rid = request_id_var.get("")
        logger.error("[%s] Store error: %s | Context: %s", rid, exc.message, exc.context)
        return _error_response(exc.message)

    @app.exception_handler(OutlinerError)
    async def handle_outliner_error(request: Request, exc: OutlinerError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s", rid, exc.message)
        return _error_response(exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        message = _describe_validation_error(exc)
        logger.warning("[%s] Invalid request: %s", rid, message)
        return _error_response(message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _error_response(str(exc) or type(exc).__name__)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to run with; the environment-derived module
                      settings when omitted.

    Returns:
        Configured FastAPI instance. The Database is attached by the lifespan.
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="Outliner API",
        description=(
            "Sections, subsections and items with title, content and position. "
            "Read the whole tree in one call; create, update and delete single nodes."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(tree.router)
    app.include_router(sections.router)
    app.include_router(subsections.router)
    app.include_router(items.router)
    app.include_router(health.router)
    app.include_router(frontend.router)

    # Remaining front-end assets; mounted last so API routes match first
    app.mount(
        "/",
        StaticFiles(directory=app_settings.public_dir, check_dir=False),
        name="public",
    )

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `outliner.main:app` to be importable
app = create_app()
