"""Pydantic schemas for theater data."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class TheaterResponse(BaseModel):
    """Theater response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    location: str
    city: str
    status: str
    created_at: datetime | None = None


class ScreenResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    theater_id: str
    name: str
    format: str
