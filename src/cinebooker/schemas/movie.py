"""Pydantic schemas for movie catalog data."""

from datetime import date

from pydantic import BaseModel, ConfigDict


class MovieResponse(BaseModel):
    """Movie response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None = None
    poster_url: str | None = None
    trailer_url: str | None = None
    duration: int | None = None
    language: str | None = None
    genre: str | None = None
    rating: float | None = None
    release_date: date | None = None
    status: str
    cast_crew: dict | None = None


class FacetsResponse(BaseModel):
    """Distinct filter values for the catalog."""

    model_config = ConfigDict(from_attributes=True)

    languages: list[str]
    genres: list[str]
    cities: list[str]


class CatalogResponse(BaseModel):
    """Filtered catalog split by release status."""

    now_showing: list[MovieResponse]
    coming_soon: list[MovieResponse]
    facets: FacetsResponse
