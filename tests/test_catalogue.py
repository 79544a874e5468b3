"""Tests for InMemoryCatalogue."""

from __future__ import annotations

import asyncio

import pytest

from moodreco.catalogue import CatalogueSource, InMemoryCatalogue
from moodreco.models import Movie


@pytest.fixture
def catalogue(sample_movies) -> InMemoryCatalogue:
    return InMemoryCatalogue(sample_movies)


class TestCatalogueManagement:
    def test_is_catalogue_source(self, catalogue) -> None:
        assert isinstance(catalogue, CatalogueSource)

    def test_get_all_movies_keeps_insertion_order(self, catalogue) -> None:
        assert [m.movie_id for m in catalogue.get_all_movies()] == list(range(1, 11))

    def test_derives_mood_tags_from_genres(self, catalogue) -> None:
        comedy = asyncio.run(catalogue.fetch_details(2))
        assert comedy.mood_tags == (
            "upbeat", "cheerful", "lighthearted", "heartwarming", "wholesome", "positive",
        )

    def test_keeps_explicit_mood_tags(self) -> None:
        movie = Movie(1, "A", genres=("Comedy",), mood_tags=("quirky",))
        catalogue = InMemoryCatalogue([movie])
        assert catalogue.get_all_movies()[0].mood_tags == ("quirky",)

    def test_add_movies_replaces_by_id(self, catalogue) -> None:
        catalogue.add_movies([Movie(1, "Road Fury II", genres=("Action",))])
        movies = catalogue.get_all_movies()
        assert len(movies) == 10
        assert movies[0].title == "Road Fury II"

    def test_get_all_movies_returns_snapshot(self, catalogue) -> None:
        snapshot = catalogue.get_all_movies()
        catalogue.add_movies([Movie(50, "New")])
        assert len(snapshot) == 10


class TestFetches:
    def test_popular_sorted_by_votes(self, catalogue) -> None:
        movies = asyncio.run(catalogue.fetch_popular())
        assert [m.movie_id for m in movies[:3]] == [1, 7, 3]

    def test_top_rated_sorted_by_rating(self, catalogue) -> None:
        movies = asyncio.run(catalogue.fetch_top_rated())
        assert [m.movie_id for m in movies[:3]] == [1, 3, 8]

    def test_paging(self, sample_movies) -> None:
        catalogue = InMemoryCatalogue(sample_movies, page_size=4)
        page_one = asyncio.run(catalogue.fetch_popular(page=1))
        page_three = asyncio.run(catalogue.fetch_popular(page=3))
        assert len(page_one) == 4
        assert len(page_three) == 2
        assert asyncio.run(catalogue.fetch_popular(page=4)) == []

    def test_fetch_by_genre(self, catalogue) -> None:
        movies = asyncio.run(catalogue.fetch_by_genre(35))
        assert [m.movie_id for m in movies] == [5, 2, 9]

    def test_fetch_by_genre_with_language(self, catalogue) -> None:
        movies = asyncio.run(catalogue.fetch_by_genre(35, language="FR"))
        assert [m.movie_id for m in movies] == [5]

    def test_fetch_by_unknown_genre(self, catalogue) -> None:
        assert asyncio.run(catalogue.fetch_by_genre(123456)) == []

    def test_search_matches_title_substring(self, catalogue) -> None:
        movies = asyncio.run(catalogue.search("  star "))
        assert [m.title for m in movies] == ["Star Runner"]

    def test_search_blank_query(self, catalogue) -> None:
        assert asyncio.run(catalogue.search("   ")) == []

    def test_search_with_language(self, catalogue) -> None:
        assert asyncio.run(catalogue.search("e", language="fr")) != []
        assert all(
            m.language == "fr" for m in asyncio.run(catalogue.search("e", language="fr"))
        )

    def test_fetch_details_missing(self, catalogue) -> None:
        assert asyncio.run(catalogue.fetch_details(999)) is None
