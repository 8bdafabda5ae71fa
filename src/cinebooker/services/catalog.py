"""Catalog browsing: movie/theater listings, filters and reviews."""

import logging
import uuid
from collections.abc import Iterable
from dataclasses import dataclass

from cinebooker.models import Movie, Review, Theater, User
from cinebooker.models.movie import COMING_SOON, NOW_SHOWING
from cinebooker.models.theater import APPROVED
from cinebooker.services.gateway import Gateway

logger = logging.getLogger(__name__)

REVIEWS_PAGE_SIZE = 10


@dataclass
class Facets:
    languages: list[str]
    genres: list[str]
    cities: list[str]


@dataclass
class ReviewWithAuthor:
    review: Review
    user_name: str


def filter_movies(
    movies: Iterable[Movie],
    query: str | None = None,
    language: str | None = None,
    genre: str | None = None,
) -> list[Movie]:
    """
    Filter movies in memory.

    Title matching is a case-insensitive substring test; language and genre
    must match exactly when given. Empty values do not filter.
    """
    needle = (query or "").strip().lower()
    return [
        movie
        for movie in movies
        if needle in movie.title.lower()
        and (not language or movie.language == language)
        and (not genre or movie.genre == genre)
    ]


def filter_theaters(theaters: Iterable[Theater], city: str | None = None) -> list[Theater]:
    return [theater for theater in theaters if not city or theater.city == city]


def partition_by_status(movies: Iterable[Movie]) -> tuple[list[Movie], list[Movie]]:
    """Split movies into (now_showing, coming_soon); other statuses are dropped."""
    now_showing: list[Movie] = []
    coming_soon: list[Movie] = []
    for movie in movies:
        if movie.status == NOW_SHOWING:
            now_showing.append(movie)
        elif movie.status == COMING_SOON:
            coming_soon.append(movie)
    return now_showing, coming_soon


def _distinct_sorted(values: Iterable[str | None]) -> list[str]:
    return sorted({value for value in values if value})


def facets(movies: Iterable[Movie], theaters: Iterable[Theater]) -> Facets:
    """Distinct filter values offered to the user, computed from the full lists."""
    movies = list(movies)
    return Facets(
        languages=_distinct_sorted(movie.language for movie in movies),
        genres=_distinct_sorted(movie.genre for movie in movies),
        cities=_distinct_sorted(theater.city for theater in theaters),
    )


class CatalogBrowser:
    """Read-only catalog queries against the gateway."""

    def __init__(self, gateway: Gateway) -> None:
        self.gateway = gateway

    async def list_movies(self) -> list[Movie]:
        return await self.gateway.movies.list(order_by={"created_at": "desc"})

    async def list_theaters(self, approved: bool = True) -> list[Theater]:
        where = {"status": APPROVED} if approved else None
        return await self.gateway.theaters.list(where=where, order_by={"name": "asc"})

    async def get_movie(self, movie_id: str) -> Movie:
        return await self.gateway.movies.get(movie_id)

    async def list_reviews(self, movie_id: str) -> list[ReviewWithAuthor]:
        """Latest reviews for a movie with the author's name attached."""
        reviews = await self.gateway.reviews.list(
            where={"movie_id": movie_id},
            order_by={"created_at": "desc"},
            limit=REVIEWS_PAGE_SIZE,
        )

        names: dict[str, str] = {}
        enriched: list[ReviewWithAuthor] = []
        for review in reviews:
            if review.user_id not in names:
                author = await self.gateway.users.first({"id": review.user_id})
                names[review.user_id] = author.name if author else "Anonymous"
            enriched.append(ReviewWithAuthor(review=review, user_name=names[review.user_id]))
        return enriched

    async def add_review(
        self,
        movie_id: str,
        user: User,
        rating: int,
        review_text: str | None,
    ) -> ReviewWithAuthor:
        await self.gateway.movies.get(movie_id)
        review = await self.gateway.reviews.create(
            id=f"review_{uuid.uuid4().hex}",
            movie_id=movie_id,
            user_id=user.id,
            rating=rating,
            review_text=review_text,
        )
        logger.info(f"User {user.id} reviewed movie {movie_id} ({rating}/5)")
        return ReviewWithAuthor(review=review, user_name=user.name)
