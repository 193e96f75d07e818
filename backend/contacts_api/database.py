"""
Contacts API - Database Connection Manager
===========================================

What:  Owns the single MongoDB client and database handle used by the service.
How:   `Database.connect()` builds an AsyncMongoClient once, pings the server,
       and keeps the handle; later calls return the same handle.
Who:   Constructed by the app factory (`create_app`) and by the CLI scripts;
       reached by route handlers through the `get_database` dependency.
When:  Connected once in the lifespan startup, closed in the lifespan shutdown.

Connection settings:
    serverApi:                 Stable API v1, strict, deprecation errors on
    serverSelectionTimeoutMS:  settings.mongodb_timeout_ms (default 10s)
    connectTimeoutMS:          settings.mongodb_timeout_ms (default 10s)

    Pooling is left to the driver: one client serves every in-flight request
    concurrently and no request opens its own connection.
"""

import asyncio
import logging
from typing import Any, Callable, Optional

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import ConfigurationError as DriverConfigurationError
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from contacts_api.config import settings
from contacts_api.exceptions import (
    ConfigurationError,
    DatabaseConnectionError,
    NotInitializedError,
)

logger = logging.getLogger(__name__)

CONTACTS_COLLECTION = "contacts"


class Database:
    """
    Lazily connected MongoDB handle.

    Lifecycle:
        1. Database()          → no network activity
        2. await connect(...)  → client created, server pinged, handle stored
        3. handle / collection → reused by every request
        4. await close()       → client closed, handle forgotten

    Args:
        client_factory: Callable building the driver client. Defaults to
                        pymongo's AsyncMongoClient; tests pass a fake.
        timeout_ms:     Server selection and connect timeout.
    """

    def __init__(
        self,
        client_factory: Callable[..., Any] = AsyncMongoClient,
        timeout_ms: Optional[int] = None,
    ):
        self._client_factory = client_factory
        self._timeout_ms = timeout_ms or settings.mongodb_timeout_ms
        self._client: Optional[Any] = None
        self._db: Optional[AsyncDatabase] = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    @property
    def client(self) -> Optional[Any]:
        return self._client

    async def connect(self, uri: Optional[str], db_name: Optional[str]) -> AsyncDatabase:
        """
        Establish the shared handle, or return it if it already exists.

        Raises:
            ConfigurationError:       uri or db_name empty, or URI rejected by the driver
            DatabaseConnectionError:  ping failed within the timeout
        """
        if not uri:
            raise ConfigurationError("MONGODB_URI is not defined")
        if not db_name:
            raise ConfigurationError("DB_NAME is not defined")
        if self._db is not None:
            return self._db

        async with self._lock:
            # Another caller may have finished connecting while we waited
            if self._db is not None:
                return self._db

            logger.info("Connecting to MongoDB...")
            try:
                client = self._client_factory(
                    uri,
                    server_api=ServerApi("1", strict=True, deprecation_errors=True),
                    serverSelectionTimeoutMS=self._timeout_ms,
                    connectTimeoutMS=self._timeout_ms,
                )
            except DriverConfigurationError as e:
                raise ConfigurationError(
                    message=f"Invalid MongoDB configuration: {e}",
                    context={"error_type": type(e).__name__},
                ) from e

            try:
                await client.admin.command("ping")
            except PyMongoError as e:
                logger.error("MongoDB ping failed: %s", str(e))
                await client.close()
                raise DatabaseConnectionError(
                    context={"error_type": type(e).__name__, "detail": str(e)},
                ) from e

            self._client = client
            self._db = client[db_name]
            logger.info("Connected to MongoDB: %s", db_name)
            return self._db

    @property
    def handle(self) -> AsyncDatabase:
        """The connected database. Raises NotInitializedError before connect()."""
        if self._db is None:
            raise NotInitializedError()
        return self._db

    def collection(self, name: str = CONTACTS_COLLECTION) -> AsyncCollection:
        return self.handle[name]

    async def ping(self) -> bool:
        """Lightweight reachability check used by GET /health."""
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.warning("MongoDB ping failed: %s", str(e))
            return False

    async def close(self) -> None:
        """Close the client if one is open. Safe to call more than once."""
        client = self._client
        self._client = None
        self._db = None
        if client is not None:
            await client.close()
            logger.info("MongoDB client closed.")


# ── FastAPI Dependency ────────────────────────────────────────────────────
def get_database(request: Request) -> Database:
    """Returns the Database owned by the running application."""
    return request.app.state.database
