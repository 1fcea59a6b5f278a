"""Data access for the `theaters` collection."""

import logging
from typing import Any, Dict, List

from pymongo.asynchronous.database import AsyncDatabase

from mflix_api.database import THEATERS
from mflix_api.exceptions import NotFoundError
from mflix_api.schemas.common import parse_object_id
from mflix_api.schemas.theater import TheaterIn, TheaterUpdate
from mflix_api.services.base import CollectionService

logger = logging.getLogger(__name__)

INVALID_THEATER_ID = "Invalid theater ID"


class TheaterService(CollectionService):
    collection_name = THEATERS

    async def list_theaters(
        self, db: AsyncDatabase, limit: int = 10, skip: int = 0
    ) -> List[Dict[str, Any]]:
        return await self._find_many(db, {}, limit=limit, skip=skip, action="retrieve theaters")

    async def get_theater(self, db: AsyncDatabase, theater_id: str) -> Dict[str, Any]:
        oid = parse_object_id(theater_id, INVALID_THEATER_ID)
        theater = await self._find_one(db, {"_id": oid}, action="retrieve the theater")
        if theater is None:
            raise NotFoundError(
                message="Theater not found",
                detail="No theater found with the given ID",
                context={"theater_id": theater_id},
            )
        return theater

    async def create_theater(self, db: AsyncDatabase, theater: TheaterIn) -> Dict[str, Any]:
        result = await self._insert_one(db, theater.to_document(), action="create the theater")
        logger.info("Theater created: %s", result.inserted_id)
        return self.insert_summary(result)

    async def update_theater(
        self, db: AsyncDatabase, theater_id: str, theater: TheaterUpdate
    ) -> None:
        """Replaces `location`; `theaterId` stays as stored."""
        oid = parse_object_id(theater_id, INVALID_THEATER_ID)
        matched = await self._set_fields(
            db, {"_id": oid}, theater.to_document(), action="update the theater"
        )
        if matched == 0:
            raise NotFoundError(message="Theater not found", context={"theater_id": theater_id})
        logger.info("Theater updated: %s", theater_id)

    async def delete_theater(self, db: AsyncDatabase, theater_id: str) -> None:
        oid = parse_object_id(theater_id, INVALID_THEATER_ID)
        deleted = await self._delete_one(db, {"_id": oid}, action="delete the theater")
        if deleted == 0:
            raise NotFoundError(message="Theater not found", context={"theater_id": theater_id})
        logger.info("Theater deleted: %s", theater_id)


theater_service = TheaterService()
