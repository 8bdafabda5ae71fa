"""Tests for catalog queries and reviews."""

from datetime import timedelta

import pytest

from cinebooker.exceptions import NotFoundError
from cinebooker.models import Review
from cinebooker.models.base import utcnow
from cinebooker.services.catalog import REVIEWS_PAGE_SIZE, CatalogBrowser
from cinebooker.services.gateway import Gateway


async def test_list_theaters_defaults_to_approved(gateway: Gateway, catalog) -> None:
    browser = CatalogBrowser(gateway)
    assert [t.id for t in await browser.list_theaters()] == ["regal-central"]
    assert [t.id for t in await browser.list_theaters(approved=False)] == ["lotus-talkies", "regal-central"]


async def test_get_movie(gateway: Gateway, catalog) -> None:
    browser = CatalogBrowser(gateway)
    assert (await browser.get_movie("the-last-reel")).title == "The Last Reel"
    with pytest.raises(NotFoundError):
        await browser.get_movie("missing")


async def test_add_review_and_list_with_author(gateway: Gateway, catalog) -> None:
    browser = CatalogBrowser(gateway)
    added = await browser.add_review("the-last-reel", catalog.customer, 5, "Loved it")

    reviews = await browser.list_reviews("the-last-reel")

    assert added.user_name == "Asha"
    assert [(r.user_name, r.review.rating, r.review.review_text) for r in reviews] == [("Asha", 5, "Loved it")]


async def test_review_for_unknown_movie(gateway: Gateway, catalog) -> None:
    with pytest.raises(NotFoundError):
        await CatalogBrowser(gateway).add_review("missing", catalog.customer, 4, None)


async def test_reviews_are_newest_first_and_paged(gateway: Gateway, catalog) -> None:
    start = utcnow() - timedelta(days=1)
    gateway.db.add_all(
        [
            Review(
                id=f"review-{n}",
                movie_id="the-last-reel",
                user_id=catalog.customer.id,
                rating=3,
                created_at=start + timedelta(minutes=n),
            )
            for n in range(12)
        ]
    )
    await gateway.db.flush()

    reviews = await CatalogBrowser(gateway).list_reviews("the-last-reel")

    assert len(reviews) == REVIEWS_PAGE_SIZE
    assert reviews[0].review.id == "review-11"
    assert reviews[-1].review.id == "review-2"


async def test_unknown_author_is_anonymous(gateway: Gateway, catalog) -> None:
    gateway.db.add(Review(id="r-ghost", movie_id="the-last-reel", user_id="deleted-user", rating=2))
    await gateway.db.flush()

    reviews = await CatalogBrowser(gateway).list_reviews("the-last-reel")

    assert reviews[0].user_name == "Anonymous"
