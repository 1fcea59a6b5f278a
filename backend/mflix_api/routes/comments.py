"""
Mflix API — Comment Route Handlers
===================================

What:  Endpoints for the comments of one movie.
Note:  Every route is nested under a movie id; a comment is only visible
       through the movie it belongs to.

Route Inventory:
    GET    /api/movies/{movie_id}/comments                 list, newest first
    POST   /api/movies/{movie_id}/comments                 create
    GET    /api/movies/{movie_id}/comments/{comment_id}    read
    PUT    /api/movies/{movie_id}/comments/{comment_id}    update name/email/text
    DELETE /api/movies/{movie_id}/comments/{comment_id}    delete
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse
from pymongo.asynchronous.database import AsyncDatabase

from mflix_api.config import settings
from mflix_api.database import get_database
from mflix_api.schemas.comment import CommentIn
from mflix_api.schemas.envelope import Envelope, envelope_response
from mflix_api.services.comment_service import comment_service

router = APIRouter(prefix="/api/movies/{movie_id}/comments", tags=["Comments"])

_ERRORS = {
    400: {"description": "Invalid movie ID or comment ID, or invalid comment data", "model": Envelope},
    404: {"description": "Movie or comment not found", "model": Envelope},
    500: {"description": "Server error", "model": Envelope},
}


@router.get(
    "",
    response_model=Envelope,
    responses={400: _ERRORS[400], 500: _ERRORS[500]},
    summary="List a movie's comments",
)
async def list_comments(
    movie_id: str,
    limit: int = Query(default=settings.list_default_limit, ge=1, le=settings.list_max_limit),
    skip: int = Query(default=0, ge=0),
    db: AsyncDatabase = Depends(get_database),
) -> JSONResponse:
    comments = await comment_service.list_comments(db, movie_id, limit=limit, skip=skip)
    return envelope_response(200, data=comments)


@router.post(
    "",
    status_code=201,
    response_model=Envelope,
    responses=_ERRORS,
    summary="Add a comment to a movie",
)
async def create_comment(
    movie_id: str,
    comment: CommentIn,
    db: AsyncDatabase = Depends(get_database),
) -> JSONResponse:
    summary = await comment_service.create_comment(db, movie_id, comment)
    return envelope_response(201, message="Comment created successfully", data=summary)


@router.get(
    "/{comment_id}",
    response_model=Envelope,
    responses=_ERRORS,
    summary="Get a comment of a movie",
)
async def get_comment(
    movie_id: str,
    comment_id: str,
    db: AsyncDatabase = Depends(get_database),
) -> JSONResponse:
    comment = await comment_service.get_comment(db, movie_id, comment_id)
    return envelope_response(200, data=comment)


@router.put(
    "/{comment_id}",
    response_model=Envelope,
    responses=_ERRORS,
    summary="Edit a comment",
    description=(
        "Replaces the comment's name, email and text. The ids and the comment's "
        "existence are checked before the body is validated."
    ),
)
async def update_comment(
    movie_id: str,
    comment_id: str,
    comment: Dict[str, Any] = Body(
        description="CommentUpdate fields; validated after the comment is found",
        examples=[{"name": "Mercedes Tyler", "email": "mercedes_tyler@fakegmail.com", "text": "Edited."}],
    ),
    db: AsyncDatabase = Depends(get_database),
) -> JSONResponse:
    await comment_service.update_comment(db, movie_id, comment_id, comment)
    return envelope_response(200, message="Comment updated successfully")


@router.delete(
    "/{comment_id}",
    response_model=Envelope,
    responses=_ERRORS,
    summary="Delete a comment",
)
async def delete_comment(
    movie_id: str,
    comment_id: str,
    db: AsyncDatabase = Depends(get_database),
) -> JSONResponse:
    await comment_service.delete_comment(db, movie_id, comment_id)
    return envelope_response(200, message="Comment deleted successfully")
