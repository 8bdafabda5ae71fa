"""Tests for in-memory catalog filtering and facets."""

from cinebooker.models import Movie, Theater
from cinebooker.services.catalog import facets, filter_movies, filter_theaters, partition_by_status


def make_movie(id: str, title: str, language: str = "English", genre: str = "Drama", status: str = "now_showing") -> Movie:
    return Movie(id=id, title=title, language=language, genre=genre, status=status)


def make_theater(id: str, city: str) -> Theater:
    return Theater(id=id, name=id.title(), location="Main Road", city=city, status="approved")


MOVIES = [
    make_movie("reel", "The Last Reel"),
    make_movie("heist", "Monsoon Heist", language="Hindi", genre="Thriller"),
    make_movie("kites", "Paper Kites", language="Tamil", genre="Family"),
    make_movie("orbit", "Orbit Zero", genre="Sci-Fi", status="coming_soon"),
]


class TestFilterMovies:
    def test_no_filters_returns_everything(self) -> None:
        assert filter_movies(MOVIES) == MOVIES

    def test_title_search_is_case_insensitive_substring(self) -> None:
        assert [m.id for m in filter_movies(MOVIES, query="REEL")] == ["reel"]
        assert [m.id for m in filter_movies(MOVIES, query="  ei  ")] == ["heist"]

    def test_language_is_exact_match(self) -> None:
        assert [m.id for m in filter_movies(MOVIES, language="Hindi")] == ["heist"]
        assert filter_movies(MOVIES, language="hindi") == []

    def test_filters_combine(self) -> None:
        result = filter_movies(MOVIES, query="o", language="English", genre="Sci-Fi")
        assert [m.id for m in result] == ["orbit"]

    def test_empty_values_do_not_filter(self) -> None:
        assert filter_movies(MOVIES, query="", language="", genre=None) == MOVIES


def test_partition_by_status() -> None:
    now_showing, coming_soon = partition_by_status(MOVIES + [make_movie("old", "Old", status="archived")])
    assert [m.id for m in now_showing] == ["reel", "heist", "kites"]
    assert [m.id for m in coming_soon] == ["orbit"]


def test_filter_theaters_by_city() -> None:
    theaters = [make_theater("regal", "Mumbai"), make_theater("lotus", "Pune")]
    assert [t.id for t in filter_theaters(theaters, "Pune")] == ["lotus"]
    assert filter_theaters(theaters, None) == theaters


def test_facets_are_sorted_and_distinct() -> None:
    theaters = [make_theater("a", "Pune"), make_theater("b", "Mumbai"), make_theater("c", "Pune")]
    result = facets(MOVIES, theaters)
    assert result.languages == ["English", "Hindi", "Tamil"]
    assert result.genres == ["Drama", "Family", "Sci-Fi", "Thriller"]
    assert result.cities == ["Mumbai", "Pune"]
