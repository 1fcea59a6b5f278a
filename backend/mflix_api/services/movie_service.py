"""
Mflix API — Movie Service
==========================

What:  Data access for the `movies` collection.
Who:   Called by the movie route handlers.

Operation map:
    list_movies   → find({}).skip(skip).limit(limit)
    get_movie     → find_one({_id})
    create_movie  → insert_one(document)
    update_movie  → update_one({_id}, {$set: document})
    delete_movie  → delete_one({_id})
"""

import logging
from typing import Any, Dict, List

from pymongo.asynchronous.database import AsyncDatabase

from mflix_api.database import MOVIES
from mflix_api.exceptions import NotFoundError
from mflix_api.schemas.common import parse_object_id
from mflix_api.schemas.movie import MovieIn
from mflix_api.services.base import CollectionService

logger = logging.getLogger(__name__)

INVALID_MOVIE_ID = "Invalid movie ID"


class MovieService(CollectionService):
    """
    CRUD over movies.

    Every method that takes `movie_id` validates it first and raises
    InvalidIdError ("Invalid movie ID") before touching the database.
    """

    collection_name = MOVIES

    async def list_movies(
        self, db: AsyncDatabase, limit: int = 10, skip: int = 0
    ) -> List[Dict[str, Any]]:
        """Returns up to `limit` movies in natural order, after skipping `skip`."""
        return await self._find_many(db, {}, limit=limit, skip=skip, action="retrieve movies")

    async def get_movie(self, db: AsyncDatabase, movie_id: str) -> Dict[str, Any]:
        """
        Raises:
            InvalidIdError: malformed id (→ 400)
            NotFoundError:  no movie with that id (→ 404)
        """
        oid = parse_object_id(movie_id, INVALID_MOVIE_ID)
        movie = await self._find_one(db, {"_id": oid}, action="retrieve the movie")
        if movie is None:
            raise NotFoundError(
                message="Movie not found",
                detail="No movie found with the given ID",
                context={"movie_id": movie_id},
            )
        return movie

    async def create_movie(self, db: AsyncDatabase, movie: MovieIn) -> Dict[str, Any]:
        result = await self._insert_one(db, movie.to_document(), action="create the movie")
        logger.info("Movie created: %s", result.inserted_id)
        return self.insert_summary(result)

    async def update_movie(self, db: AsyncDatabase, movie_id: str, movie: MovieIn) -> None:
        """Overwrites every field present in the payload; `_id` is never changed."""
        oid = parse_object_id(movie_id, INVALID_MOVIE_ID)
        matched = await self._set_fields(
            db, {"_id": oid}, movie.to_document(), action="update the movie"
        )
        if matched == 0:
            raise NotFoundError(message="Movie not found", context={"movie_id": movie_id})
        logger.info("Movie updated: %s", movie_id)

    async def delete_movie(self, db: AsyncDatabase, movie_id: str) -> None:
        oid = parse_object_id(movie_id, INVALID_MOVIE_ID)
        deleted = await self._delete_one(db, {"_id": oid}, action="delete the movie")
        if deleted == 0:
            raise NotFoundError(message="Movie not found", context={"movie_id": movie_id})
        logger.info("Movie deleted: %s", movie_id)


# ── Singleton Instance ────────────────────────────────────────────────────
movie_service = MovieService()
