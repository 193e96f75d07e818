"""
Contacts API - Pydantic Request/Response Schemas
=================================================

What:  Pydantic models describing the contact API contract.
How:   `ContactInput` is the typed struct produced by the validator and
       written to the store; the response models feed the OpenAPI document.

Note:
    Route handlers do not declare `ContactInput` as a body parameter. FastAPI
    would answer a missing field with 422, while this API answers 400 with a
    single message, so bodies are parsed and validated explicitly
    (see services/contact_validator.py).
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

REQUIRED_FIELDS = ("firstName", "lastName", "email", "favoriteColor", "birthday")


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ContactInput(BaseModel):
    """
    What:  The five attributes of a contact, as accepted by POST and PUT.
    How:   Built by `validate_contact()` after the presence check; values are
           carried through unchanged (no email or date format checks).
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "firstName": "Ann",
                "lastName": "Lee",
                "email": "a@x.com",
                "favoriteColor": "blue",
                "birthday": "1990-01-01",
            }
        }
    )

    firstName: str = Field(description="Given name")
    lastName: str = Field(description="Family name")
    email: str = Field(description="Email address", json_schema_extra={"format": "email"})
    favoriteColor: str = Field(description="Favorite color")
    birthday: str = Field(description="Birthday (YYYY-MM-DD)", json_schema_extra={"format": "date"})

    def to_document(self) -> Dict[str, Any]:
        """The exact document persisted to the contacts collection."""
        return {name: getattr(self, name) for name in REQUIRED_FIELDS}


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class Contact(BaseModel):
    """
    What:  A stored contact as returned by GET /contacts and GET /contacts/{id}.

    Reads are not validated, so every attribute is optional here; documents
    written by this service always carry all five.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id", description="MongoDB ObjectId (24 hex characters)")
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    email: Optional[str] = Field(default=None, json_schema_extra={"format": "email"})
    favoriteColor: Optional[str] = None
    birthday: Optional[str] = Field(default=None, json_schema_extra={"format": "date"})


class ContactCreated(BaseModel):
    """Returned by POST /contacts with HTTP 201."""

    id: str = Field(description="Identifier assigned to the new contact")


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response."""

    message: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Returned by GET /health."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
