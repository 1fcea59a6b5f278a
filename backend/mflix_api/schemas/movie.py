"""
Mflix API — Movie Request Schemas
==================================

What:  Pydantic models for movie request bodies (POST and PUT).
How:   FastAPI validates the JSON body against `MovieIn` before the handler
       runs; failures become a 400 envelope with one item per bad field.

Field rules:
    Required: plot, genres, num_mflix_comments, title, year
    Optional: everything else, including every field of the nested objects
    Dropped:  unknown keys and `_id` (MongoDB assigns/keeps the identifier)
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from mflix_api.schemas.common import MongoDate


class Awards(BaseModel):
    wins: Optional[int] = None
    nominations: Optional[int] = None
    text: Optional[str] = None


class Imdb(BaseModel):
    rating: Optional[float] = None
    votes: Optional[int] = None
    id: Optional[int] = None


class TomatoesRating(BaseModel):
    """Viewer or critic score block inside `tomatoes`."""
    rating: Optional[float] = None
    numReviews: Optional[int] = None
    meter: Optional[int] = None


class Tomatoes(BaseModel):
    viewer: Optional[TomatoesRating] = None
    critic: Optional[TomatoesRating] = None
    fresh: Optional[int] = None
    rotten: Optional[int] = None
    lastUpdated: Optional[MongoDate] = None


class MovieIn(BaseModel):
    """
    What:  Body of POST /api/movies, POST/PUT /api/movies/{id}.

    Example:
        {
            "title": "Creative Sparks",
            "plot": "A determined filmmaker documents the lives of struggling artists.",
            "genres": ["Documentary", "Drama"],
            "num_mflix_comments": 0,
            "year": 2023,
            "released": {"$date": 1672531200000}
        }
    """
    plot: str = Field(description="Brief plot summary")
    genres: List[str] = Field(description="Movie genres")
    runtime: Optional[int] = Field(default=None, description="Duration in minutes")
    cast: Optional[List[str]] = None
    num_mflix_comments: int = Field(description="Number of comments")
    title: str = Field(description="The movie title")
    fullplot: Optional[str] = None
    languages: Optional[List[str]] = None
    released: Optional[MongoDate] = Field(
        default=None,
        description="Release date: ISO 8601, epoch milliseconds, or {\"$date\": ...}",
    )
    directors: Optional[List[str]] = None
    rated: Optional[str] = None
    awards: Optional[Awards] = None
    year: int = Field(description="Release year")
    imdb: Optional[Imdb] = None
    countries: Optional[List[str]] = None
    type: Optional[str] = None
    tomatoes: Optional[Tomatoes] = None

    def to_document(self) -> dict:
        """Fields to write to MongoDB; omitted optionals are not stored."""
        return self.model_dump(exclude_none=True)
