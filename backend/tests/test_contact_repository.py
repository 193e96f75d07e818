"""
Contacts API - Contact Repository Unit Tests
=============================================

What:  CRUD operations against the in-memory collection, plus the exact
       driver calls made for each operation.

What we test:
    ✅ parse_object_id accepts only 24-hex strings
    ✅ Insert → get round-trip returns the same five attributes
    ✅ Replace keeps the id and overwrites every attribute
    ✅ Malformed id → InvalidIdError, unknown id → NotFoundError
    ✅ Delete removes exactly one document
    ✅ Driver errors propagate (not wrapped into Err)
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import Decimal128, ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from contacts_api.exceptions import InvalidIdError, NotFoundError
from contacts_api.result import Err, Ok
from contacts_api.schemas.contact import ContactInput
from contacts_api.services.contact_repository import (
    ContactRepository,
    parse_object_id,
    serialize_contact,
)

MALFORMED_IDS = ["abc", "123", "zzzzzzzzzzzzzzzzzzzzzzzz", "a" * 25, "", "0" * 23]


def make_contact(**overrides) -> ContactInput:
    data = {
        "firstName": "Ann",
        "lastName": "Lee",
        "email": "a@x.com",
        "favoriteColor": "blue",
        "birthday": "1990-01-01",
    }
    data.update(overrides)
    return ContactInput(**data)


class TestParseObjectId:

    def test_valid_hex_string(self):
        oid = ObjectId()
        result = parse_object_id(str(oid))
        assert isinstance(result, Ok)
        assert result.value == oid

    @pytest.mark.parametrize("raw_id", MALFORMED_IDS)
    def test_malformed_ids(self, raw_id):
        result = parse_object_id(raw_id)
        assert isinstance(result, Err)
        assert isinstance(result.error, InvalidIdError)
        assert result.error.message == "Invalid id format"

    def test_twelve_byte_string_is_not_an_id(self):
        """Only the hex form is accepted for path ids."""
        assert isinstance(parse_object_id("abcdefghijkl"), Err)


def test_serialize_contact_renders_object_id():
    oid = ObjectId()
    doc = {"_id": oid, "firstName": "Ann"}

    out = serialize_contact(doc)

    assert out == {"_id": str(oid), "firstName": "Ann"}
    assert doc["_id"] is oid  # input left untouched


def test_serialize_contact_renders_nested_bson():
    oid, ref = ObjectId(), ObjectId()
    doc = {
        "_id": oid,
        "tags": [ref],
        "meta": {"balance": Decimal128("19.99"), "ownerId": ref},
    }

    assert serialize_contact(doc) == {
        "_id": str(oid),
        "tags": [str(ref)],
        "meta": {"balance": "19.99", "ownerId": str(ref)},
    }


class TestRepositoryWithFakeCollection:
    """Behavior against the in-memory collection from conftest."""

    @pytest.fixture
    def repository(self, contacts_collection):
        return ContactRepository(contacts_collection)

    @pytest.mark.asyncio
    async def test_create_then_get(self, repository):
        contact = make_contact()

        new_id = await repository.create_contact(contact)
        result = await repository.get_contact(new_id)

        assert ObjectId.is_valid(new_id)
        assert isinstance(result, Ok)
        assert result.value["_id"] == new_id
        for name, value in contact.to_document().items():
            assert result.value[name] == value

    @pytest.mark.asyncio
    async def test_duplicates_are_allowed(self, repository):
        first = await repository.create_contact(make_contact())
        second = await repository.create_contact(make_contact())

        assert first != second
        assert len(await repository.list_contacts()) == 2

    @pytest.mark.asyncio
    async def test_list_empty(self, repository):
        assert await repository.list_contacts() == []

    @pytest.mark.asyncio
    async def test_list_returns_string_ids(self, repository):
        new_id = await repository.create_contact(make_contact())

        contacts = await repository.list_contacts()

        assert [c["_id"] for c in contacts] == [new_id]

    @pytest.mark.asyncio
    async def test_get_unknown_id(self, repository):
        result = await repository.get_contact(str(ObjectId()))
        assert isinstance(result, Err)
        assert isinstance(result.error, NotFoundError)
        assert result.error.message == "Contact not found"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw_id", MALFORMED_IDS)
    async def test_get_malformed_id(self, repository, raw_id):
        result = await repository.get_contact(raw_id)
        assert isinstance(result, Err)
        assert isinstance(result.error, InvalidIdError)

    @pytest.mark.asyncio
    async def test_replace_overwrites_everything_and_keeps_id(self, repository):
        new_id = await repository.create_contact(make_contact())
        replacement = make_contact(
            firstName="Bo",
            lastName="Kim",
            email="bo@y.org",
            favoriteColor="red",
            birthday="2001-12-31",
        )

        result = await repository.replace_contact(new_id, replacement)
        fetched = await repository.get_contact(new_id)

        assert isinstance(result, Ok)
        assert fetched.value == {"_id": new_id, **replacement.to_document()}

    @pytest.mark.asyncio
    async def test_replace_unknown_id(self, repository, contacts_collection):
        result = await repository.replace_contact(str(ObjectId()), make_contact())
        assert isinstance(result, Err)
        assert isinstance(result.error, NotFoundError)
        assert len(contacts_collection.documents) == 0

    @pytest.mark.asyncio
    async def test_replace_malformed_id(self, repository):
        result = await repository.replace_contact("nope", make_contact())
        assert isinstance(result.error, InvalidIdError)

    @pytest.mark.asyncio
    async def test_delete_removes_one(self, repository, contacts_collection):
        keep = await repository.create_contact(make_contact(firstName="Keep"))
        drop = await repository.create_contact(make_contact(firstName="Drop"))

        first = await repository.delete_contact(drop)
        second = await repository.delete_contact(drop)

        assert isinstance(first, Ok)
        assert isinstance(second, Err)
        assert isinstance(second.error, NotFoundError)
        assert [str(oid) for oid in contacts_collection.documents] == [keep]

    @pytest.mark.asyncio
    async def test_delete_malformed_id(self, repository):
        result = await repository.delete_contact("123")
        assert isinstance(result.error, InvalidIdError)


class TestRepositoryDriverCalls:
    """Checks the exact collection calls with a mocked AsyncCollection."""

    def setup_method(self):
        self.collection = MagicMock()
        self.repository = ContactRepository(self.collection)

    @pytest.mark.asyncio
    async def test_insert_sends_only_the_five_fields(self):
        oid = ObjectId()
        self.collection.insert_one = AsyncMock(return_value=SimpleNamespace(inserted_id=oid))
        contact = make_contact()

        new_id = await self.repository.create_contact(contact)

        assert new_id == str(oid)
        self.collection.insert_one.assert_awaited_once_with(contact.to_document())

    @pytest.mark.asyncio
    async def test_replace_filters_by_object_id(self):
        oid = ObjectId()
        self.collection.replace_one = AsyncMock(
            return_value=SimpleNamespace(matched_count=1, modified_count=0)
        )
        contact = make_contact()

        result = await self.repository.replace_contact(str(oid), contact)

        # matched but unchanged is still a successful replace
        assert isinstance(result, Ok)
        self.collection.replace_one.assert_awaited_once_with({"_id": oid}, contact.to_document())

    @pytest.mark.asyncio
    async def test_malformed_id_never_reaches_the_store(self):
        self.collection.find_one = AsyncMock()
        self.collection.delete_one = AsyncMock()

        await self.repository.get_contact("bad")
        await self.repository.delete_contact("bad")

        self.collection.find_one.assert_not_awaited()
        self.collection.delete_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_driver_errors_propagate(self):
        self.collection.find_one = AsyncMock(
            side_effect=ServerSelectionTimeoutError("no servers")
        )

        with pytest.raises(ServerSelectionTimeoutError):
            await self.repository.get_contact(str(ObjectId()))
