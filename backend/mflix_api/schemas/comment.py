"""
Mflix API — Comment Request Schemas
====================================

What:  Bodies for creating and editing a movie's comments.
Note:  `movie_id` always comes from the URL, never from the body.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr

from mflix_api.schemas.common import MongoDate


class CommentUpdate(BaseModel):
    """Body of PUT /api/movies/{movie_id}/comments/{comment_id}; only these fields are written."""
    name: str
    email: EmailStr
    text: str

    def to_document(self) -> dict:
        return self.model_dump()


class CommentIn(CommentUpdate):
    """Body of POST /api/movies/{movie_id}/comments. `date` defaults to now (UTC)."""
    date: Optional[MongoDate] = None

    def to_document(self) -> dict:
        return self.model_dump(exclude_none=True)
