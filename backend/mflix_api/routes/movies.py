"""
Mflix API — Movie Route Handlers
=================================

What:  CRUD endpoints for the `movies` collection.
How:   Each handler takes the validated body/path values, calls MovieService,
       and wraps the result in the response envelope. Errors raised by the
       service (bad id, not found, database failure) are formatted by the
       global exception handlers in main.py.

Route Inventory:
    GET    /api/movies          list (limit/skip)
    POST   /api/movies          create
    GET    /api/movies/{id}     read
    PUT    /api/movies/{id}     update
    POST   /api/movies/{id}     create (path id ignored)
    DELETE /api/movies/{id}     delete
    PUT, DELETE on /api/movies → 405 envelope
"""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from pymongo.asynchronous.database import AsyncDatabase

from mflix_api.config import settings
from mflix_api.database import get_database
from mflix_api.schemas.envelope import Envelope, envelope_response
from mflix_api.schemas.movie import MovieIn
from mflix_api.services.movie_service import movie_service

router = APIRouter(prefix="/api/movies", tags=["Movies"])

_ERRORS = {
    400: {"description": "Invalid movie ID or movie data", "model": Envelope},
    404: {"description": "Movie not found", "model": Envelope},
    500: {"description": "Server error", "model": Envelope},
}


@router.get(
    "",
    response_model=Envelope,
    responses={500: _ERRORS[500]},
    summary="Retrieve a list of movies",
    description="Fetches the first `limit` movies (default 10) from the database.",
)
async def list_movies(
    limit: int = Query(
        default=settings.list_default_limit, ge=1, le=settings.list_max_limit,
        description="Maximum number of movies to return",
    ),
    skip: int = Query(default=0, ge=0, description="Number of movies to skip"),
    db: AsyncDatabase = Depends(get_database),
) -> JSONResponse:
    movies = await movie_service.list_movies(db, limit=limit, skip=skip)
    return envelope_response(200, data=movies)


@router.post(
    "",
    status_code=201,
    response_model=Envelope,
    responses={400: _ERRORS[400], 500: _ERRORS[500]},
    summary="Create a new movie",
    description="Adds a new movie to the database. Unknown fields and `_id` are ignored.",
)
async def create_movie(
    movie: MovieIn,
    db: AsyncDatabase = Depends(get_database),
) -> JSONResponse:
    summary = await movie_service.create_movie(db, movie)
    return envelope_response(201, message="Movie created successfully", data=summary)


@router.get(
    "/{movie_id}",
    response_model=Envelope,
    responses=_ERRORS,
    summary="Get a single movie by ID",
)
async def get_movie(
    movie_id: str,
    db: AsyncDatabase = Depends(get_database),
) -> JSONResponse:
    """Response data is `{"movie": {...}}`."""
    movie = await movie_service.get_movie(db, movie_id)
    return envelope_response(200, data={"movie": movie})


@router.put(
    "/{movie_id}",
    response_model=Envelope,
    responses=_ERRORS,
    summary="Update a movie",
    description="Validates the full movie document and overwrites the provided fields.",
)
async def update_movie(
    movie_id: str,
    movie: MovieIn,
    db: AsyncDatabase = Depends(get_database),
) -> JSONResponse:
    await movie_service.update_movie(db, movie_id, movie)
    return envelope_response(200, message="Movie updated")


@router.post(
    "/{movie_id}",
    status_code=201,
    response_model=Envelope,
    responses={400: _ERRORS[400], 500: _ERRORS[500]},
    summary="Create a movie (path ID ignored)",
    description="Inserts the body as a new movie; the ID in the path is not used.",
)
async def create_movie_at_path(
    movie_id: str,
    movie: MovieIn,
    db: AsyncDatabase = Depends(get_database),
) -> JSONResponse:
    summary = await movie_service.create_movie(db, movie)
    return envelope_response(
        201, message="Movie created", data={"insertedId": summary["insertedId"]}
    )


@router.delete(
    "/{movie_id}",
    response_model=Envelope,
    responses=_ERRORS,
    summary="Delete a movie",
)
async def delete_movie(
    movie_id: str,
    db: AsyncDatabase = Depends(get_database),
) -> JSONResponse:
    await movie_service.delete_movie(db, movie_id)
    return envelope_response(200, message="Movie deleted")
