"""Pytest fixtures for text search tests."""

import pytest

from text_search import Config, TextSearchEngine


@pytest.fixture
def engine() -> TextSearchEngine:
    """Engine with default configuration."""
    return TextSearchEngine()


@pytest.fixture
def small_corpus():
    return [(0, "the cat sat"), (1, "the dog sat")]


@pytest.fixture
def small_index(engine, small_corpus):
    return engine.build_index(small_corpus)


@pytest.fixture
def articles():
    """A slightly larger corpus with repeated and rare terms."""
    return [
        (0, "Search engines build an inverted index over documents."),
        (1, "An inverted index maps each term to the documents containing it."),
        (2, "Fuzzy matching tolerates typos: searching for 'serch' still finds search."),
        (3, "Ranking combines term frequency with inverse document frequency."),
        (4, "Documents, documents, documents! Longer documents repeat terms."),
        (5, ""),
    ]


@pytest.fixture
def articles_index(engine, articles):
    return engine.build_index(articles)


@pytest.fixture
def bm25_engine() -> TextSearchEngine:
    return TextSearchEngine(Config(RANKING_METHOD="bm25"))
