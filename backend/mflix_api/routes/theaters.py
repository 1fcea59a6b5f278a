"""
Mflix API — Theater Route Handlers
===================================

Route Inventory:
    GET    /api/theaters            list (limit/skip)
    POST   /api/theaters            create
    GET    /api/theaters/{id}       read
    PUT    /api/theaters/{id}       replace location
    DELETE /api/theaters/{id}       delete
"""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from pymongo.asynchronous.database import AsyncDatabase

from mflix_api.config import settings
from mflix_api.database import get_database
from mflix_api.schemas.envelope import Envelope, envelope_response
from mflix_api.schemas.theater import TheaterIn, TheaterUpdate
from mflix_api.services.theater_service import theater_service

router = APIRouter(prefix="/api/theaters", tags=["Theaters"])

_ERRORS = {
    400: {"description": "Invalid theater ID or theater data", "model": Envelope},
    404: {"description": "Theater not found", "model": Envelope},
    500: {"description": "Server error", "model": Envelope},
}


@router.get(
    "",
    response_model=Envelope,
    responses={500: _ERRORS[500]},
    summary="Retrieve a list of theaters",
)
async def list_theaters(
    limit: int = Query(default=settings.list_default_limit, ge=1, le=settings.list_max_limit),
    skip: int = Query(default=0, ge=0),
    db: AsyncDatabase = Depends(get_database),
) -> JSONResponse:
    theaters = await theater_service.list_theaters(db, limit=limit, skip=skip)
    return envelope_response(200, data=theaters)


@router.post(
    "",
    status_code=201,
    response_model=Envelope,
    responses={400: _ERRORS[400], 500: _ERRORS[500]},
    summary="Create a theater",
)
async def create_theater(
    theater: TheaterIn,
    db: AsyncDatabase = Depends(get_database),
) -> JSONResponse:
    summary = await theater_service.create_theater(db, theater)
    return envelope_response(201, message="Theater created successfully", data=summary)


@router.get(
    "/{theater_id}",
    response_model=Envelope,
    responses=_ERRORS,
    summary="Get a single theater by ID",
)
async def get_theater(
    theater_id: str,
    db: AsyncDatabase = Depends(get_database),
) -> JSONResponse:
    theater = await theater_service.get_theater(db, theater_id)
    return envelope_response(200, data=theater)


@router.put(
    "/{theater_id}",
    response_model=Envelope,
    responses=_ERRORS,
    summary="Update a theater's location",
)
async def update_theater(
    theater_id: str,
    theater: TheaterUpdate,
    db: AsyncDatabase = Depends(get_database),
) -> JSONResponse:
    await theater_service.update_theater(db, theater_id, theater)
    return envelope_response(200, message="Theater updated")


@router.delete(
    "/{theater_id}",
    response_model=Envelope,
    responses=_ERRORS,
    summary="Delete a theater",
)
async def delete_theater(
    theater_id: str,
    db: AsyncDatabase = Depends(get_database),
) -> JSONResponse:
    await theater_service.delete_theater(db, theater_id)
    return envelope_response(200, message="Theater deleted")
