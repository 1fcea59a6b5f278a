"""
Mflix API — Shared Collection Service Base
===========================================

What:  Base class holding the MongoDB plumbing every resource service shares.
How:   Concrete services set `collection_name` and call these helpers from
       their public methods; the helpers translate driver failures into
       DatabaseError so routes never see pymongo exceptions.
Who:   Subclassed by MovieService, TheaterService, CommentService.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError
from pymongo.results import InsertOneResult

from mflix_api.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class CollectionService:
    """
    Common data access for one MongoDB collection.

    Contract:
        - Subclasses set `collection_name` (see database.MOVIES etc.)
        - Every helper performs exactly one driver call
        - PyMongoError is logged with its stack trace and re-raised as
          DatabaseError carrying a client-safe message
    """

    collection_name: str = ""

    def collection(self, db: AsyncDatabase) -> AsyncCollection:
        return db[self.collection_name]

    def _database_error(self, action: str, exc: Exception, **context: Any) -> DatabaseError:
        logger.error(
            "MongoDB error while trying to %s in '%s': %s",
            action,
            self.collection_name,
            str(exc),
            exc_info=True,
        )
        context["collection"] = self.collection_name
        context["error_type"] = type(exc).__name__
        return DatabaseError(message=f"Could not {action}. Please try again.", context=context)

    async def _find_many(
        self,
        db: AsyncDatabase,
        query: Mapping[str, Any],
        limit: int,
        skip: int = 0,
        sort: Optional[List[Tuple[str, int]]] = None,
        action: str = "list documents",
    ) -> List[Dict[str, Any]]:
        try:
            cursor = self.collection(db).find(query)
            if sort:
                cursor = cursor.sort(sort)
            if skip:
                cursor = cursor.skip(skip)
            return await cursor.limit(limit).to_list(length=limit)
        except PyMongoError as e:
            raise self._database_error(action, e)

    async def _find_one(
        self,
        db: AsyncDatabase,
        query: Mapping[str, Any],
        action: str = "retrieve the document",
    ) -> Optional[Dict[str, Any]]:
        try:
            return await self.collection(db).find_one(query)
        except PyMongoError as e:
            raise self._database_error(action, e)

    async def _insert_one(
        self,
        db: AsyncDatabase,
        document: Dict[str, Any],
        action: str = "create the document",
    ) -> InsertOneResult:
        try:
            return await self.collection(db).insert_one(document)
        except PyMongoError as e:
            raise self._database_error(action, e)

    async def _set_fields(
        self,
        db: AsyncDatabase,
        query: Mapping[str, Any],
        fields: Dict[str, Any],
        action: str = "update the document",
    ) -> int:
        """Applies `$set` to the first matching document; returns matched_count."""
        try:
            result = await self.collection(db).update_one(query, {"$set": fields})
        except PyMongoError as e:
            raise self._database_error(action, e)
        return result.matched_count

    async def _delete_one(
        self,
        db: AsyncDatabase,
        query: Mapping[str, Any],
        action: str = "delete the document",
    ) -> int:
        """Deletes the first matching document; returns deleted_count."""
        try:
            result = await self.collection(db).delete_one(query)
        except PyMongoError as e:
            raise self._database_error(action, e)
        return result.deleted_count

    @staticmethod
    def insert_summary(result: InsertOneResult) -> Dict[str, Any]:
        """Shape returned to clients after an insert: {acknowledged, insertedId}."""
        return {"acknowledged": result.acknowledged, "insertedId": result.inserted_id}
