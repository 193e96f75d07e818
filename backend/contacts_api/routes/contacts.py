"""
Contacts API - Contact Route Handlers
======================================

What:  The five /contacts endpoints.
How:   Each handler reads the raw request, calls the validator and/or the
       repository, and turns the returned Ok/Err into a response.
Who:   Mounted by create_app(); the repository is built per request from the
       application's Database via dependency injection.

Endpoint table:
    GET    /contacts       → 200 [Contact]
    GET    /contacts/{id}  → 200 Contact | 400 bad id | 404
    POST   /contacts       → 201 {id}    | 400 missing field
    PUT    /contacts/{id}  → 204         | 400 missing field or bad id | 404
    DELETE /contacts/{id}  → 204         | 400 bad id | 404

Anything else (store unreachable, driver errors, bugs) escapes the handler and
is turned into a 500 by the global exception handlers in main.py.
"""

import logging
from typing import Any, Dict, Type

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from contacts_api.database import CONTACTS_COLLECTION, Database, get_database
from contacts_api.exceptions import (
    ContactsAPIError,
    InvalidIdError,
    NotFoundError,
    ValidationError,
)
from contacts_api.middleware.request_id import request_id_var
from contacts_api.result import Err
from contacts_api.schemas.contact import Contact, ContactCreated, ErrorResponse
from contacts_api.services.contact_repository import ContactRepository
from contacts_api.services.contact_validator import validate_contact

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contacts", tags=["Contacts"])

ERROR_STATUS: Dict[Type[ContactsAPIError], int] = {
    ValidationError: 400,
    InvalidIdError: 400,
    NotFoundError: 404,
}

# Request body schema is registered as a component by docs.build_openapi()
CONTACT_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            "application/json": {
                "schema": {"$ref": "#/components/schemas/ContactInput"},
            }
        },
    }
}

ID_ERRORS = {
    400: {"description": "Invalid id", "model": ErrorResponse},
    404: {"description": "Not found", "model": ErrorResponse},
}


# ── Dependencies ──────────────────────────────────────────────────────────
def get_contact_repository(
    database: Database = Depends(get_database),
) -> ContactRepository:
    return ContactRepository(database.collection(CONTACTS_COLLECTION))


async def read_json_body(request: Request) -> Any:
    """
    Parsed JSON body, or None when the body is empty or not valid JSON.

    None fails validation like any other payload without the required fields.
    """
    try:
        return await request.json()
    except ValueError:
        return None


def error_response(error: ContactsAPIError) -> JSONResponse:
    status = ERROR_STATUS.get(type(error))
    if status is None:
        raise error
    logger.warning(
        "[%s] %s | Context: %s", request_id_var.get(""), error.message, error.context
    )
    return JSONResponse(status_code=status, content={"message": error.message})


# ── Routes ────────────────────────────────────────────────────────────────
@router.get(
    "",
    response_model=None,
    responses={
        200: {"description": "List of contacts", "model": list[Contact]},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get all contacts",
)
async def list_contacts(
    repository: ContactRepository = Depends(get_contact_repository),
):
    return await repository.list_contacts()


@router.get(
    "/{contact_id}",
    response_model=None,
    responses={
        200: {"description": "Contact", "model": Contact},
        **ID_ERRORS,
    },
    summary="Get a contact by id",
)
async def get_contact(
    contact_id: str,
    repository: ContactRepository = Depends(get_contact_repository),
):
    result = await repository.get_contact(contact_id)
    if isinstance(result, Err):
        return error_response(result.error)
    return result.value


@router.post(
    "",
    status_code=201,
    response_model=ContactCreated,
    responses={
        201: {"description": "Created; returns new contact id"},
        400: {"description": "Validation error", "model": ErrorResponse},
    },
    summary="Create a new contact",
    openapi_extra=CONTACT_BODY,
)
async def create_contact(
    payload: Any = Depends(read_json_body),
    repository: ContactRepository = Depends(get_contact_repository),
):
    validated = validate_contact(payload)
    if isinstance(validated, Err):
        return error_response(validated.error)

    new_id = await repository.create_contact(validated.value)
    return ContactCreated(id=new_id)


@router.put(
    "/{contact_id}",
    status_code=204,
    response_class=Response,
    responses={
        204: {"description": "Updated (no content)"},
        400: {"description": "Invalid id or validation error", "model": ErrorResponse},
        404: {"description": "Not found", "model": ErrorResponse},
    },
    summary="Update (replace) a contact by id",
    openapi_extra=CONTACT_BODY,
)
async def replace_contact(
    contact_id: str,
    payload: Any = Depends(read_json_body),
    repository: ContactRepository = Depends(get_contact_repository),
):
    # Body is validated before the id is parsed
    validated = validate_contact(payload)
    if isinstance(validated, Err):
        return error_response(validated.error)

    result = await repository.replace_contact(contact_id, validated.value)
    if isinstance(result, Err):
        return error_response(result.error)
    return Response(status_code=204)


@router.delete(
    "/{contact_id}",
    status_code=204,
    response_class=Response,
    responses={
        204: {"description": "Deleted"},
        **ID_ERRORS,
    },
    summary="Delete a contact by id",
)
async def delete_contact(
    contact_id: str,
    repository: ContactRepository = Depends(get_contact_repository),
):
    result = await repository.delete_contact(contact_id)
    if isinstance(result, Err):
        return error_response(result.error)
    return Response(status_code=204)
