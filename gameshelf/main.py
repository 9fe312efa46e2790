"""
GameShelf Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app(database) returns a configured FastAPI instance with the
       given Database handle on app.state. Without an argument the handle
       is built from settings.
Who:   uvicorn (`uvicorn gameshelf.main:app`), the `gameshelf` console
       script, and the test suite (which passes its own SQLite handle).

Application Layout:
    Middleware:   RequestID → Logging → CORS
    Routes:       /api/game/{create,get,update,destroy}, /health
    Errors:       ValidationError→422 │ NotFoundError→422 │ DatabaseError→500
                  RequestValidationError→422 │ Exception→500

Lifecycle:
    Startup:   setup logging, database.connect()
    Shutdown:  database.disconnect()
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gameshelf import __version__
from gameshelf.config import settings
from gameshelf.database import Database
from gameshelf.exceptions import (
    DatabaseError,
    GameShelfError,
    NotFoundError,
    ValidationError,
)
from gameshelf.middleware.logging import RequestLoggingMiddleware
from gameshelf.middleware.request_id import RequestIDMiddleware, request_id_var
from gameshelf.routes import games, health

logger = logging.getLogger(__name__)

INVALID_BODY = "Invalid request body"
INTERNAL_ERROR = "An unexpected error occurred. Please try again later."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger once at startup.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, level or settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-query and per-request chatter from libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the store on startup and close it on shutdown.

    The Database handle comes from app.state, set by create_app(), so the
    lifespan never builds its own connection.
    """
    setup_logging()
    database: Database = app.state.database

    logger.info("GameShelf Backend %s starting up...", __version__)
    await database.connect()
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("GameShelf Backend shutting down...")
    await database.disconnect()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "request_id": request_id_var.get("")},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to `{"error": <message>}` responses.

    Handler table:
        ValidationError         → 422 (missing field or id)
        NotFoundError           → 422 ("Cannot find game by that id")
        RequestValidationError  → 422 (malformed JSON / wrong types)
        DatabaseError           → 500 (generic message, context logged)
        GameShelfError (base)   → its status_code
        Exception (fallback)    → 500 (stack trace logged only)
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s %s", request_id_var.get(""), exc.message, exc.context)
        return _error_response(422, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(422, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        logger.warning("[%s] Rejected request body: %s", request_id_var.get(""), exc.errors())
        return _error_response(422, INVALID_BODY)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("[%s] Database error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return _error_response(500, "A database error occurred. Please try again later.")

    @app.exception_handler(GameShelfError)
    async def handle_app_error(request: Request, exc: GameShelfError):
        logger.error("[%s] %s: %s", request_id_var.get(""), type(exc).__name__, exc.message)
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return _error_response(500, INTERNAL_ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: Store handle to serve from. Defaults to one built from
                  settings. The handle is opened by the lifespan, or by the
                  caller when the app runs without lifespan events.
    """
    app = FastAPI(
        title="GameShelf API",
        description="CRUD API for game records: title, release date and genre.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.database = database or Database.from_settings(settings)

    # Middleware executes in reverse order of addition:
    # RequestID → Logging → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(games.router)
    app.include_router(health.router)

    return app


# uvicorn expects `gameshelf.main:app` to be importable
app = create_app()


def run() -> None:
    """Console entry point: serve `app` with uvicorn."""
    import uvicorn

    uvicorn.run(
        "gameshelf.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )
