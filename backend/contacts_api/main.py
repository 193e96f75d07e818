"""
Contacts API - FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires the Database, middleware, exception handlers,
       routers and the OpenAPI generator, and returns the app.
Who:   uvicorn (`uvicorn contacts_api.main:app`) and `python -m contacts_api`.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → CORS           │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────────┐ ┌──────────────┐  │
    │  │ GET/POST/PUT/DELETE contacts │ │ GET /health  │  │
    │  └──────────────────────────────┘ └──────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ ContactsAPIError → 500 (handler)             │   │
    │  │ any other Exception → 500 (RequestLogging)   │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Connect to MongoDB (missing config or unreachable store aborts startup)

    Shutdown (also on SIGINT/SIGTERM, which uvicorn turns into a shutdown):
    1. Close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import partial
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from contacts_api import __version__
from contacts_api.config import settings
from contacts_api.database import Database
from contacts_api.docs import API_DESCRIPTION, API_TITLE, build_openapi
from contacts_api.exceptions import INTERNAL_ERROR_MESSAGE, ContactsAPIError
from contacts_api.middleware.logging import RequestLoggingMiddleware
from contacts_api.middleware.request_id import RequestIDMiddleware, request_id_var
from contacts_api.routes import contacts, health

logger = logging.getLogger(__name__)

# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before the database connects.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access log replaces uvicorn's; the driver logs every heartbeat
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Contacts API starting up...")

    database: Database = app.state.database
    try:
        await database.connect(settings.mongodb_uri, settings.db_name)
    except ContactsAPIError as e:
        logger.error("Startup failed: %s", e.message)
        logger.error("Fix the configuration and restart the server.")
        raise

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/api-docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Contacts API shutting down...")
    await database.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map ContactsAPIError escaping a route (e.g. NotInitializedError) to a 500.

    Validation, malformed id and not-found never reach these handlers; the
    routes answer them from the returned Err value. What arrives here is a
    server-side problem, so the client gets no detail beyond the message.
    Driver errors and other exceptions are caught by RequestLoggingMiddleware.
    """

    @app.exception_handler(ContactsAPIError)
    async def handle_application_error(request: Request, exc: ContactsAPIError):
        rid = request_id_var.get("")
        logger.error(
            "[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context
        )
        return JSONResponse(status_code=500, content={"message": INTERNAL_ERROR_MESSAGE})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: Connection manager to use. A fresh, unconnected Database is
                  created when omitted; tests pass one that is already connected.
    """
    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=__version__,
        docs_url="/api-docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.database = database or Database()

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(contacts.router)
    app.include_router(health.router)

    app.openapi = partial(build_openapi, app)

    return app


app = create_app()
