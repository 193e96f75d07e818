"""
Contacts API - Contact Validator
=================================

What:  Presence check for the five required contact fields.
How:   `validate_contact()` takes any parsed JSON value and returns either
       Ok(ContactInput) or Err(ValidationError). It never raises.
Who:   Called by POST /contacts and PUT /contacts/{id} before any store access.

Rules:
    - firstName, lastName, email, favoriteColor, birthday must all be present
      and truthy (missing key, None, "" and other falsy values are rejected)
    - a payload that is not a JSON object counts as "every field missing"
    - one error for any number of missing fields, always the same message
    - no format checks: "not-an-email" and "yesterday" are accepted as-is
"""

import logging
from typing import Any, Union

from contacts_api.exceptions import ValidationError
from contacts_api.result import Err, Ok
from contacts_api.schemas.contact import REQUIRED_FIELDS, ContactInput

logger = logging.getLogger(__name__)


def validate_contact(payload: Any) -> Union[Ok[ContactInput], Err[ValidationError]]:
    if not isinstance(payload, dict):
        payload = {}

    missing = [name for name in REQUIRED_FIELDS if not payload.get(name)]
    if missing:
        logger.debug("Contact payload rejected, missing: %s", ", ".join(missing))
        return Err(ValidationError(context={"missing_fields": missing}))

    # Presence check only; values pass through untouched
    contact = ContactInput.model_construct(
        **{name: payload[name] for name in REQUIRED_FIELDS}
    )
    return Ok(contact)
