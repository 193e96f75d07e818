"""
Contacts API - Exception Hierarchy
===================================

What:  Application-specific error types for every failure the service knows about.
How:   Each class carries a client-safe message and an optional context dict
       that is logged but never returned to the client.
Who:   Raised by the connection manager; returned inside `Err` results by the
       validator and the repository.

Exception Hierarchy:
    ContactsAPIError (base)
    ├── ConfigurationError       → fatal at startup (missing URI / database name)
    ├── DatabaseConnectionError  → fatal at startup (store unreachable)
    ├── NotInitializedError      → 500 (handle used before connect)
    ├── ValidationError          → 400 Bad Request
    ├── InvalidIdError           → 400 Bad Request
    └── NotFoundError            → 404 Not Found

Client errors (validation, malformed id, not found) are not raised across the
route boundary. The validator and repository return them wrapped in
`contacts_api.result.Err`, and the routes pick a status code from the error
type. Startup and programming errors are raised normally.
"""

from typing import Any, Dict, Optional

REQUIRED_FIELDS_MESSAGE = (
    "All fields are required: firstName, lastName, email, favoriteColor, birthday"
)
INVALID_ID_MESSAGE = "Invalid id format"
NOT_FOUND_MESSAGE = "Contact not found"
INTERNAL_ERROR_MESSAGE = "Internal server error"


class ContactsAPIError(Exception):
    """
    Base exception for all Contacts API errors.

    Attributes:
        message:  Client-safe error description
        context:  Additional debug info (logged, NOT returned to the client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ConfigurationError(ContactsAPIError):
    """
    Raised when connection parameters are missing or rejected by the driver.

    When:    MONGODB_URI or DB_NAME is empty, or the URI cannot be parsed.
    Effect:  Startup aborts; the server never accepts traffic.
    """

    def __init__(
        self,
        message: str = "Database configuration is incomplete",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseConnectionError(ContactsAPIError):
    """
    Raised when the store cannot be reached within the connect timeout.

    Not retried by the connection manager.
    """

    def __init__(
        self,
        message: str = "Could not connect to MongoDB",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotInitializedError(ContactsAPIError):
    """Raised when the database handle is requested before `connect()` succeeded."""

    def __init__(
        self,
        message: str = "Database not initialized. Call connect() first.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ValidationError(ContactsAPIError):
    """
    Client payload is missing one or more required contact fields.

    HTTP:    400 Bad Request

    A single error is produced no matter how many fields are missing.
    The missing field names go into `context` for logging only.
    """

    def __init__(
        self,
        message: str = REQUIRED_FIELDS_MESSAGE,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidIdError(ContactsAPIError):
    """
    The id path segment is not a well-formed ObjectId (24 hex characters).

    HTTP:    400 Bad Request (distinct from 404)
    """

    def __init__(
        self,
        raw_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if raw_id is not None:
            ctx["raw_id"] = raw_id
        super().__init__(message=INVALID_ID_MESSAGE, context=ctx)


class NotFoundError(ContactsAPIError):
    """
    A well-formed id matched no contact.

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = "contact"
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=NOT_FOUND_MESSAGE, context=ctx)
