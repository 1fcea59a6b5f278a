"""
Mflix API — MongoDB Client Management
======================================

What:  Async MongoDB client, database dependency, and collection names.
How:   A single AsyncMongoClient is created lazily from settings and shared by
       all requests; the driver pools connections internally.
Who:   Used by route handlers via FastAPI's dependency injection system and by
       the health check.
When:  Client is created on first use; closed during application shutdown.

Connection Settings:
    serverSelectionTimeoutMS: Fail a call quickly when no server is reachable
    maxPoolSize:              Upper bound on sockets per server
    tz_aware=True:            Datetimes come back as UTC-aware values
"""

import logging
from typing import Optional

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from mflix_api.config import settings

logger = logging.getLogger(__name__)

# ── Collection Names ──────────────────────────────────────────────────────
MOVIES = "movies"
THEATERS = "theaters"
COMMENTS = "comments"

_client: Optional[AsyncMongoClient] = None


def get_client() -> AsyncMongoClient:
    """
    Return the shared client, creating it on first call.

    The constructor does not open sockets; the first operation does. This
    keeps imports side-effect free for tests and tooling.
    """
    global _client
    if _client is None:
        _client = AsyncMongoClient(
            settings.mongodb_uri,
            serverSelectionTimeoutMS=settings.mongodb_server_selection_timeout_ms,
            maxPoolSize=settings.mongodb_max_pool_size,
            tz_aware=True,
        )
        logger.info("MongoDB client created for database '%s'", settings.mongodb_db)
    return _client


# ── Database Dependency ───────────────────────────────────────────────────
async def get_database() -> AsyncDatabase:
    """
    FastAPI dependency that provides the `sample_mflix` database handle.

    Example usage in a route:
        @router.get("/movies")
        async def list_movies(db: AsyncDatabase = Depends(get_database)):
            return await movie_service.list_movies(db)

    Tests replace this dependency with a mock database via
    `app.dependency_overrides[get_database]`.
    """
    return get_client()[settings.mongodb_db]


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def ping_database() -> bool:
    """Runs the `ping` admin command; returns False if the server is unreachable."""
    try:
        await get_client().admin.command("ping")
        return True
    except PyMongoError as e:
        logger.warning("MongoDB ping failed: %s", str(e))
        return False


async def close_client() -> None:
    """
    What:  Closes the shared client and all pooled connections.
    When:  Called during application shutdown (lifespan handler).
    """
    global _client
    if _client is not None:
        await _client.close()
        _client = None
        logger.info("MongoDB client closed")
