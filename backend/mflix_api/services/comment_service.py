"""
Mflix API — Comment Service
============================

What:  Data access for the `comments` collection, always scoped to a movie.
How:   Every lookup filters on both `_id` and `movie_id`, so a comment id
       paired with the wrong movie behaves exactly like a missing comment.
Who:   Called by the comment route handlers.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Tuple

from bson import ObjectId
from pymongo.asynchronous.database import AsyncDatabase

from mflix_api.database import COMMENTS
from mflix_api.exceptions import InvalidIdError, NotFoundError
from mflix_api.schemas.comment import CommentIn, CommentUpdate
from mflix_api.schemas.common import is_valid_object_id
from mflix_api.schemas.envelope import validate_body
from mflix_api.services.base import CollectionService
from mflix_api.services.movie_service import movie_service

logger = logging.getLogger(__name__)

INVALID_IDS = "Invalid movie ID or comment ID"
COMMENT_NOT_FOUND = "Comment not found for this movie"


def _parse_ids(movie_id: str, comment_id: Optional[str] = None) -> Tuple[ObjectId, Optional[ObjectId]]:
    """Both ids are checked before either is used; one bad id rejects the request."""
    ids_valid = is_valid_object_id(movie_id) and (
        comment_id is None or is_valid_object_id(comment_id)
    )
    if not ids_valid:
        raise InvalidIdError(
            message=INVALID_IDS,
            context={"movie_id": movie_id, "comment_id": comment_id},
        )
    return ObjectId(movie_id), ObjectId(comment_id) if comment_id is not None else None


class CommentService(CollectionService):
    """
    Responsibilities:
        - list_comments():  newest-first comments of one movie
        - create_comment(): insert after confirming the movie exists
        - get/update/delete_comment(): single comment scoped by movie
    """

    collection_name = COMMENTS

    async def list_comments(
        self, db: AsyncDatabase, movie_id: str, limit: int = 10, skip: int = 0
    ) -> List[Dict[str, Any]]:
        movie_oid, _ = _parse_ids(movie_id)
        return await self._find_many(
            db,
            {"movie_id": movie_oid},
            limit=limit,
            skip=skip,
            sort=[("date", -1)],
            action="retrieve comments",
        )

    async def create_comment(
        self, db: AsyncDatabase, movie_id: str, comment: CommentIn
    ) -> Dict[str, Any]:
        """
        Raises:
            InvalidIdError: malformed movie id (→ 400)
            NotFoundError:  movie does not exist (→ 404 "Movie not found")
        """
        movie_oid, _ = _parse_ids(movie_id)
        await movie_service.get_movie(db, movie_id)

        document = comment.to_document()
        document["movie_id"] = movie_oid
        document.setdefault("date", datetime.now(timezone.utc))

        result = await self._insert_one(db, document, action="create the comment")
        logger.info("Comment %s created for movie %s", result.inserted_id, movie_id)
        return {"insertedId": result.inserted_id}

    async def get_comment(
        self, db: AsyncDatabase, movie_id: str, comment_id: str
    ) -> Dict[str, Any]:
        movie_oid, comment_oid = _parse_ids(movie_id, comment_id)
        comment = await self._find_one(
            db, {"_id": comment_oid, "movie_id": movie_oid}, action="retrieve the comment"
        )
        if comment is None:
            raise NotFoundError(
                message=COMMENT_NOT_FOUND,
                context={"movie_id": movie_id, "comment_id": comment_id},
            )
        return comment

    async def update_comment(
        self, db: AsyncDatabase, movie_id: str, comment_id: str, payload: Mapping[str, Any]
    ) -> None:
        """
        Only name, email and text are written; movie_id and date are kept.

        The raw body is validated after the ids and the comment's existence,
        so a missing comment is a 404 whatever the body holds.

        Raises:
            InvalidIdError:  malformed movie or comment id (→ 400)
            NotFoundError:   no such comment for this movie (→ 404)
            ValidationError: body fails CommentUpdate (→ 400)
        """
        await self.get_comment(db, movie_id, comment_id)
        comment = validate_body(CommentUpdate, payload)
        await self._set_fields(
            db, {"_id": ObjectId(comment_id)}, comment.to_document(), action="update the comment"
        )
        logger.info("Comment updated: %s", comment_id)

    async def delete_comment(self, db: AsyncDatabase, movie_id: str, comment_id: str) -> None:
        movie_oid, comment_oid = _parse_ids(movie_id, comment_id)
        deleted = await self._delete_one(
            db, {"_id": comment_oid, "movie_id": movie_oid}, action="delete the comment"
        )
        if deleted == 0:
            raise NotFoundError(
                message=COMMENT_NOT_FOUND,
                context={"movie_id": movie_id, "comment_id": comment_id},
            )
        logger.info("Comment deleted: %s", comment_id)


comment_service = CommentService()
