"""
Mflix API — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── collections:   one mocked collection per collection name
    ├── mock_db:       database mock whose db[name] returns from `collections`
    ├── movie_id / comment_id / theater_id: valid 24-hex identifiers
    ├── sample_movie / sample_theater / sample_comment: request bodies
    └── test_client:   HTTPX AsyncClient with get_database overridden

Mocked collection API (mirrors pymongo's asyncio driver):
    find()                 → cursor (sync call); cursor.sort/skip/limit chain
    cursor.to_list()       → awaitable list of documents
    find_one/insert_one/update_one/delete_one → awaitable
"""

import os
from unittest.mock import AsyncMock, MagicMock

# Settings are read at import time; set them before any mflix_api import
os.environ["MONGODB_URI"] = "mongodb://localhost:27017"
os.environ["MONGODB_DB"] = "sample_mflix_test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient

from mflix_api.database import COMMENTS, MOVIES, THEATERS


def make_cursor(documents=None):
    """A cursor mock whose sort/skip/limit return itself and to_list returns `documents`."""
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=list(documents or []))
    return cursor


def make_collection():
    collection = MagicMock()
    collection.find = MagicMock(return_value=make_cursor())
    collection.find_one = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock()
    collection.update_one = AsyncMock(return_value=MagicMock(matched_count=1))
    collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    return collection


@pytest.fixture
def collections():
    return {name: make_collection() for name in (MOVIES, THEATERS, COMMENTS)}


@pytest.fixture
def mock_db(collections):
    """
    Provides a mock `AsyncDatabase`.

    Usage:
        collections[MOVIES].find_one.return_value = {"_id": oid, "title": "..."}
        movie = await movie_service.get_movie(mock_db, str(oid))
    """
    db = MagicMock()
    db.__getitem__.side_effect = lambda name: collections[name]
    return db


@pytest.fixture
def movie_id():
    return "573a1390f29313caabcd4135"


@pytest.fixture
def comment_id():
    return "5a9427648b0beebeb69579e7"


@pytest.fixture
def theater_id():
    return "59a47286cfa9a3a73e51e72c"


@pytest.fixture
def sample_movie():
    """A minimal valid movie body plus a few optional fields."""
    return {
        "title": "Blacksmith Scene",
        "plot": "Three men hammer on an anvil and pass a bottle of beer around.",
        "genres": ["Short"],
        "num_mflix_comments": 1,
        "year": 1893,
        "runtime": 1,
        "cast": ["Charles Kayser", "John Ott"],
        "released": {"$date": {"$numberLong": "-2418768000000"}},
        "imdb": {"rating": 6.2, "votes": 1189, "id": 5},
    }


@pytest.fixture
def sample_theater():
    return {
        "theaterId": 1000,
        "location": {
            "address": {
                "street1": "340 W Market",
                "city": "Bloomington",
                "state": "MN",
                "zipcode": "55425",
            },
            "geo": {"type": "Point", "coordinates": [-93.24565, 44.85466]},
        },
    }


@pytest.fixture
def sample_comment():
    return {
        "name": "Mercedes Tyler",
        "email": "mercedes_tyler@fakegmail.com",
        "text": "Eius veritatis vero facilis quaerat fuga temporibus.",
    }


@pytest.fixture
def stored_movie(movie_id, sample_movie):
    """What find_one returns for an existing movie."""
    doc = dict(sample_movie)
    doc.pop("released")
    doc["_id"] = ObjectId(movie_id)
    return doc


@pytest_asyncio.fixture
async def test_client(mock_db):
    """
    Provides an async HTTP test client for endpoint testing.

    How:  ASGITransport routes requests directly to the app; get_database is
          overridden so handlers receive `mock_db`.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/api/movies")
            assert response.status_code == 200
    """
    from mflix_api.database import get_database
    from mflix_api.main import app

    app.dependency_overrides[get_database] = lambda: mock_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
