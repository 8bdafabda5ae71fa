"""Pydantic schemas for movie reviews."""

from datetime import datetime

from pydantic import BaseModel, Field


class ReviewCreate(BaseModel):
    rating: int = Field(ge=1, le=5)
    review_text: str | None = Field(default=None, max_length=5000)


class ReviewResponse(BaseModel):
    """Review with the author's display name."""

    id: str
    movie_id: str
    user_id: str
    user_name: str
    rating: int
    review_text: str | None = None
    created_at: datetime | None = None
