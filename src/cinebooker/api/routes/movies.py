"""Movie catalog, showtime listing and review endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Query

from cinebooker.api.deps import get_gateway, require_view
from cinebooker.models import Movie, User
from cinebooker.models.base import utcnow
from cinebooker.roles import View
from cinebooker.schemas.movie import CatalogResponse, FacetsResponse, MovieResponse
from cinebooker.schemas.review import ReviewCreate, ReviewResponse
from cinebooker.schemas.showtime import (
    ShowtimeResponse,
    ShowtimesForDateResponse,
    ShowtimeSlot,
    TheaterShowtimesResponse,
)
from cinebooker.services.catalog import (
    CatalogBrowser,
    ReviewWithAuthor,
    facets,
    filter_movies,
    partition_by_status,
)
from cinebooker.services.gateway import Gateway
from cinebooker.services.seat_planner import SeatPlanner, upcoming_dates

router = APIRouter()


def review_response(item: ReviewWithAuthor) -> ReviewResponse:
    review = item.review
    return ReviewResponse(
        id=review.id,
        movie_id=review.movie_id,
        user_id=review.user_id,
        user_name=item.user_name,
        rating=review.rating,
        review_text=review.review_text,
        created_at=review.created_at,
    )


@router.get("/movies", response_model=CatalogResponse)
async def get_movies(
    q: str | None = Query(default=None, description="Case-insensitive title search"),
    language: str | None = Query(default=None),
    genre: str | None = Query(default=None),
    gateway: Gateway = Depends(get_gateway),
    _: User = Depends(require_view(View.CATALOG)),
) -> CatalogResponse:
    """
    Browse the catalog.

    Args:
        q: Title substring
        language: Exact language
        genre: Exact genre

    Returns:
        Matching movies split into now showing and coming soon, plus the
        filter values computed from the unfiltered catalog
    """
    browser = CatalogBrowser(gateway)
    movies = await browser.list_movies()
    theaters = await browser.list_theaters()

    now_showing, coming_soon = partition_by_status(filter_movies(movies, q, language, genre))
    return CatalogResponse(
        now_showing=[MovieResponse.model_validate(movie) for movie in now_showing],
        coming_soon=[MovieResponse.model_validate(movie) for movie in coming_soon],
        facets=FacetsResponse.model_validate(facets(movies, theaters)),
    )


@router.get("/movies/{movie_id}", response_model=MovieResponse)
async def get_movie(
    movie_id: str,
    gateway: Gateway = Depends(get_gateway),
    _: User = Depends(require_view(View.MOVIE_DETAIL)),
) -> Movie:
    return await CatalogBrowser(gateway).get_movie(movie_id)


@router.get("/movies/{movie_id}/showtimes", response_model=ShowtimesForDateResponse)
async def get_movie_showtimes(
    movie_id: str,
    show_date: date | None = Query(default=None, alias="date", description="Show date (default: today)"),
    gateway: Gateway = Depends(get_gateway),
    _: User = Depends(require_view(View.MOVIE_DETAIL)),
) -> ShowtimesForDateResponse:
    """Showtimes of a movie on one date, grouped by theater."""
    await CatalogBrowser(gateway).get_movie(movie_id)

    today = utcnow().date()
    show_date = show_date or today
    groups = await SeatPlanner(gateway).list_showtimes_for_date(movie_id, show_date)

    return ShowtimesForDateResponse(
        date=show_date,
        dates=upcoming_dates(today),
        theaters=[
            TheaterShowtimesResponse(
                theater_name=group.theater_name,
                theater_location=group.theater_location,
                showtimes=[
                    ShowtimeSlot(
                        showtime=ShowtimeResponse.model_validate(item.showtime),
                        screen_name=item.screen_name,
                        format=item.format,
                    )
                    for item in group.showtimes
                ],
            )
            for group in groups
        ],
    )


@router.get("/movies/{movie_id}/reviews", response_model=list[ReviewResponse])
async def get_movie_reviews(
    movie_id: str,
    gateway: Gateway = Depends(get_gateway),
    _: User = Depends(require_view(View.MOVIE_DETAIL)),
) -> list[ReviewResponse]:
    reviews = await CatalogBrowser(gateway).list_reviews(movie_id)
    return [review_response(item) for item in reviews]


@router.post("/movies/{movie_id}/reviews", response_model=ReviewResponse, status_code=201)
async def post_movie_review(
    movie_id: str,
    request: ReviewCreate,
    gateway: Gateway = Depends(get_gateway),
    user: User = Depends(require_view(View.MOVIE_DETAIL)),
) -> ReviewResponse:
    item = await CatalogBrowser(gateway).add_review(movie_id, user, request.rating, request.review_text)
    return review_response(item)
