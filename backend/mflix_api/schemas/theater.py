"""Pydantic models for theater request bodies."""

from typing import Literal, Tuple

from pydantic import BaseModel, Field


class Address(BaseModel):
    street1: str
    city: str
    state: str
    zipcode: str


class Geo(BaseModel):
    """GeoJSON point; coordinates are [longitude, latitude]."""
    type: Literal["Point"]
    coordinates: Tuple[float, float]


class Location(BaseModel):
    address: Address
    geo: Geo


class TheaterUpdate(BaseModel):
    """Body of PUT /api/theaters/{id}. `theaterId` cannot be changed."""
    location: Location

    def to_document(self) -> dict:
        doc = self.model_dump()
        doc["location"]["geo"]["coordinates"] = list(doc["location"]["geo"]["coordinates"])
        return doc


class TheaterIn(TheaterUpdate):
    """
    Body of POST /api/theaters.

    Example:
        {
            "theaterId": 1000,
            "location": {
                "address": {"street1": "340 W Market", "city": "Bloomington",
                            "state": "MN", "zipcode": "55425"},
                "geo": {"type": "Point", "coordinates": [-93.24565, 44.85466]}
            }
        }
    """
    theaterId: int = Field(description="Public theater number")
