"""
Contacts API - Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the test suite.
How:   An in-memory stand-in for the MongoDB client/collection lets the real
       Database, repository and routes run without a server.

Fixture Hierarchy:
    ├── fake_client:       FakeMongoClient (ping, close, db[name][collection])
    ├── database:          Database connected through fake_client
    ├── contacts_collection: the FakeCollection behind database
    ├── contact_payload:   valid POST/PUT body
    └── test_client:       HTTPX AsyncClient bound to create_app(database)
"""

import os
from collections import OrderedDict
from types import SimpleNamespace
from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock

# Set before any contacts_api import reads settings
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")
os.environ.setdefault("DB_NAME", "contacts_test")
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient

from contacts_api.database import CONTACTS_COLLECTION, Database


# ══════════════════════════════════════════════════════════════════════════
# In-memory MongoDB stand-ins
# ══════════════════════════════════════════════════════════════════════════

class FakeCursor:
    def __init__(self, documents: List[Dict[str, Any]]):
        self._documents = documents

    async def to_list(self, length=None):
        docs = [dict(doc) for doc in self._documents]
        return docs if length is None else docs[:length]


class FakeCollection:
    """Implements the subset of AsyncCollection used by the service."""

    def __init__(self):
        self.documents: "OrderedDict[ObjectId, Dict[str, Any]]" = OrderedDict()

    def find(self, filter=None):
        return FakeCursor(list(self.documents.values()))

    async def find_one(self, filter):
        doc = self.documents.get(filter["_id"])
        return dict(doc) if doc is not None else None

    async def insert_one(self, document):
        oid = ObjectId()
        self.documents[oid] = {"_id": oid, **document}
        return SimpleNamespace(inserted_id=oid)

    async def insert_many(self, documents):
        ids = [(await self.insert_one(doc)).inserted_id for doc in documents]
        return SimpleNamespace(inserted_ids=ids)

    async def replace_one(self, filter, replacement):
        oid = filter["_id"]
        if oid not in self.documents:
            return SimpleNamespace(matched_count=0, modified_count=0)
        self.documents[oid] = {"_id": oid, **replacement}
        return SimpleNamespace(matched_count=1, modified_count=1)

    async def delete_one(self, filter):
        removed = self.documents.pop(filter["_id"], None)
        return SimpleNamespace(deleted_count=0 if removed is None else 1)

    async def count_documents(self, filter):
        return len(self.documents)


class FakeDatabase(dict):
    def __missing__(self, name):
        self[name] = FakeCollection()
        return self[name]


class FakeMongoClient:
    def __init__(self):
        self.admin = MagicMock()
        self.admin.command = AsyncMock(return_value={"ok": 1.0})
        self.close = AsyncMock()
        self.databases: Dict[str, FakeDatabase] = {}

    def __getitem__(self, name):
        return self.databases.setdefault(name, FakeDatabase())


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def fake_client():
    return FakeMongoClient()


@pytest.fixture
def client_factory(fake_client):
    """Stands in for AsyncMongoClient; records the connect arguments."""
    return MagicMock(return_value=fake_client)


@pytest_asyncio.fixture
async def database(client_factory):
    db = Database(client_factory=client_factory)
    await db.connect("mongodb://localhost:27017", "contacts_test")
    return db


@pytest.fixture
def contacts_collection(database) -> FakeCollection:
    return database.collection(CONTACTS_COLLECTION)


@pytest.fixture
def contact_payload():
    return {
        "firstName": "Ann",
        "lastName": "Lee",
        "email": "a@x.com",
        "favoriteColor": "blue",
        "birthday": "1990-01-01",
    }


@pytest_asyncio.fixture
async def test_client(database):
    """
    HTTPX AsyncClient talking to a fresh app that uses the fake database.

    ASGITransport does not run the lifespan, so the already-connected
    database is used as-is.
    """
    from contacts_api.main import create_app

    app = create_app(database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
