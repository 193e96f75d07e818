"""
Contacts API - Contact Repository
==================================

What:  Translates contact operations into MongoDB collection calls.
How:   Wraps one AsyncCollection. Expected client errors (malformed id,
       no matching document) are returned as `Err` values; driver failures
       propagate to RequestLoggingMiddleware, which answers 500.
Who:   Built per request by the contacts routes from the shared Database.

Operation → driver call:
    list_contacts()         find({}).to_list()
    get_contact(id)         find_one({"_id": oid})
    create_contact(c)       insert_one(doc)          → inserted_id
    replace_contact(id, c)  replace_one({"_id": oid}, doc) → matched_count
    delete_contact(id)      delete_one({"_id": oid})  → deleted_count

Nothing is cached between requests; every call goes to the store.
"""

import logging
from typing import Any, Dict, List, Union

from bson import Decimal128, ObjectId
from fastapi.encoders import jsonable_encoder
from pymongo.asynchronous.collection import AsyncCollection

from contacts_api.exceptions import InvalidIdError, NotFoundError
from contacts_api.result import Err, Ok, Result
from contacts_api.schemas.contact import ContactInput

logger = logging.getLogger(__name__)

BSON_ENCODERS = {
    ObjectId: str,
    Decimal128: lambda value: str(value.to_decimal()),
}


def parse_object_id(raw_id: str) -> Union[Ok[ObjectId], Err[InvalidIdError]]:
    """
    Parse a path segment into an ObjectId.

    Only the 24-character hex form is accepted. `ObjectId.is_valid` would
    also take 12-byte `bytes`, so non-strings are rejected first.
    """
    if not isinstance(raw_id, str) or not ObjectId.is_valid(raw_id):
        return Err(InvalidIdError(raw_id=str(raw_id)))
    return Ok(ObjectId(raw_id))


def serialize_contact(document: Dict[str, Any]) -> Dict[str, Any]:
    """
    Render a stored document as JSON-safe data.

    Seeded or hand-edited documents may hold BSON values at any depth:
        ObjectId     → hex string
        Decimal128   → decimal string ("19.99")
        datetime     → ISO 8601 (FastAPI default)
    """
    return jsonable_encoder(document, custom_encoder=BSON_ENCODERS)


class ContactRepository:
    """
    CRUD operations on the contacts collection.

    Args:
        collection: The `contacts` collection from the connected Database.
    """

    def __init__(self, collection: AsyncCollection):
        self.collection = collection

    async def list_contacts(self) -> List[Dict[str, Any]]:
        """Every contact in store order; no filtering or pagination."""
        documents = await self.collection.find({}).to_list(length=None)
        return [serialize_contact(doc) for doc in documents]

    async def get_contact(self, contact_id: str) -> Result[Dict[str, Any]]:
        parsed = parse_object_id(contact_id)
        if isinstance(parsed, Err):
            return parsed

        document = await self.collection.find_one({"_id": parsed.value})
        if document is None:
            return Err(NotFoundError(resource_id=contact_id))
        return Ok(serialize_contact(document))

    async def create_contact(self, contact: ContactInput) -> str:
        """
        Insert a new contact and return its id as a hex string.

        Duplicates (same email or otherwise identical payloads) are allowed.
        """
        result = await self.collection.insert_one(contact.to_document())
        new_id = str(result.inserted_id)
        logger.info("Contact created: %s", new_id)
        return new_id

    async def replace_contact(self, contact_id: str, contact: ContactInput) -> Result[None]:
        """
        Overwrite all five attributes of an existing contact.

        The `_id` is never part of the replacement document, so identity
        is preserved.
        """
        parsed = parse_object_id(contact_id)
        if isinstance(parsed, Err):
            return parsed

        result = await self.collection.replace_one(
            {"_id": parsed.value}, contact.to_document()
        )
        if result.matched_count == 0:
            return Err(NotFoundError(resource_id=contact_id))
        logger.info("Contact replaced: %s", contact_id)
        return Ok(None)

    async def delete_contact(self, contact_id: str) -> Result[None]:
        parsed = parse_object_id(contact_id)
        if isinstance(parsed, Err):
            return parsed

        result = await self.collection.delete_one({"_id": parsed.value})
        if result.deleted_count == 0:
            return Err(NotFoundError(resource_id=contact_id))
        logger.info("Contact deleted: %s", contact_id)
        return Ok(None)
