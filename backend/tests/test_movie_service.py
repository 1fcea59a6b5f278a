"""
Mflix API — Movie Service Unit Tests
=====================================

What:  Tests for MovieService data access (list, get, create, update, delete).
How:   Uses the mocked database from conftest (no real MongoDB).

What we test:
    ✅ Each operation issues the expected collection call
    ✅ Malformed ids are rejected before any database call
    ✅ "Nothing matched" becomes NotFoundError
    ✅ Driver failures become DatabaseError
"""

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError
from pymongo.results import InsertOneResult

from mflix_api.database import MOVIES
from mflix_api.exceptions import DatabaseError, InvalidIdError, NotFoundError
from mflix_api.schemas.movie import MovieIn
from mflix_api.services.movie_service import MovieService


class TestMovieServiceList:

    def setup_method(self):
        self.service = MovieService()

    @pytest.mark.asyncio
    async def test_list_movies(self, mock_db, collections, stored_movie):
        cursor = collections[MOVIES].find.return_value
        cursor.to_list.return_value = [stored_movie]

        result = await self.service.list_movies(mock_db, limit=10)

        assert result == [stored_movie]
        collections[MOVIES].find.assert_called_once_with({})
        cursor.limit.assert_called_once_with(10)
        cursor.skip.assert_not_called()

    @pytest.mark.asyncio
    async def test_list_movies_with_skip(self, mock_db, collections):
        cursor = collections[MOVIES].find.return_value

        await self.service.list_movies(mock_db, limit=5, skip=20)

        cursor.skip.assert_called_once_with(20)
        cursor.limit.assert_called_once_with(5)

    @pytest.mark.asyncio
    async def test_list_movies_database_error(self, mock_db, collections):
        cursor = collections[MOVIES].find.return_value
        cursor.to_list.side_effect = ServerSelectionTimeoutError("no servers")

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.list_movies(mock_db)
        assert exc_info.value.message == "Could not retrieve movies. Please try again."
        assert exc_info.value.context["collection"] == MOVIES


class TestMovieServiceGet:

    def setup_method(self):
        self.service = MovieService()

    @pytest.mark.asyncio
    async def test_get_movie_found(self, mock_db, collections, movie_id, stored_movie):
        collections[MOVIES].find_one.return_value = stored_movie

        result = await self.service.get_movie(mock_db, movie_id)

        assert result is stored_movie
        collections[MOVIES].find_one.assert_awaited_once_with({"_id": ObjectId(movie_id)})

    @pytest.mark.asyncio
    async def test_get_movie_not_found(self, mock_db, movie_id):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_movie(mock_db, movie_id)
        assert exc_info.value.message == "Movie not found"
        assert exc_info.value.detail == "No movie found with the given ID"

    @pytest.mark.asyncio
    async def test_get_movie_invalid_id(self, mock_db, collections):
        with pytest.raises(InvalidIdError) as exc_info:
            await self.service.get_movie(mock_db, "1234")
        assert exc_info.value.message == "Invalid movie ID"
        collections[MOVIES].find_one.assert_not_awaited()


class TestMovieServiceWrite:

    def setup_method(self):
        self.service = MovieService()

    @pytest.mark.asyncio
    async def test_create_movie(self, mock_db, collections, sample_movie):
        new_id = ObjectId()
        collections[MOVIES].insert_one.return_value = InsertOneResult(new_id, True)

        result = await self.service.create_movie(mock_db, MovieIn.model_validate(sample_movie))

        assert result == {"acknowledged": True, "insertedId": new_id}
        inserted = collections[MOVIES].insert_one.await_args.args[0]
        assert inserted["title"] == "Blacksmith Scene"
        assert "_id" not in inserted

    @pytest.mark.asyncio
    async def test_update_movie_sets_fields(self, mock_db, collections, movie_id, sample_movie):
        await self.service.update_movie(mock_db, movie_id, MovieIn.model_validate(sample_movie))

        query, update = collections[MOVIES].update_one.await_args.args
        assert query == {"_id": ObjectId(movie_id)}
        assert update["$set"]["year"] == 1893
        assert "_id" not in update["$set"]

    @pytest.mark.asyncio
    async def test_update_movie_not_found(self, mock_db, collections, movie_id, sample_movie):
        collections[MOVIES].update_one.return_value.matched_count = 0

        with pytest.raises(NotFoundError, match="Movie not found"):
            await self.service.update_movie(mock_db, movie_id, MovieIn.model_validate(sample_movie))

    @pytest.mark.asyncio
    async def test_update_movie_invalid_id(self, mock_db, collections, sample_movie):
        """A bad id is a 400, not a driver error."""
        with pytest.raises(InvalidIdError):
            await self.service.update_movie(mock_db, "zzz", MovieIn.model_validate(sample_movie))
        collections[MOVIES].update_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_movie(self, mock_db, collections, movie_id):
        await self.service.delete_movie(mock_db, movie_id)
        collections[MOVIES].delete_one.assert_awaited_once_with({"_id": ObjectId(movie_id)})

    @pytest.mark.asyncio
    async def test_delete_movie_not_found(self, mock_db, collections, movie_id):
        collections[MOVIES].delete_one.return_value.deleted_count = 0

        with pytest.raises(NotFoundError):
            await self.service.delete_movie(mock_db, movie_id)
