"""Tests for configuration and parameter validation."""

import pytest

from text_search import config as defaults
from text_search.config import (
    Config,
    validate_backend,
    validate_max_distance,
    validate_ngram_size,
    validate_offset,
    validate_top_k,
    validate_workers,
)
from text_search.exceptions import InvalidParameter, SearchEngineError


class TestConfig:
    """Tests for the Config object."""

    def test_defaults(self) -> None:
        config = Config()
        assert config.NGRAM_SIZE == defaults.NGRAM_SIZE
        assert config.MAX_EDIT_DISTANCE == defaults.MAX_EDIT_DISTANCE
        assert config.TOP_K_RESULTS == defaults.TOP_K_RESULTS
        assert config.RANKING_METHOD == "tfidf"
        assert config.STOP_WORDS == frozenset()
        assert config.PARALLEL_BACKEND == "thread"

    def test_overrides(self) -> None:
        config = Config(MAX_EDIT_DISTANCE=1, RANKING_METHOD="bm25", STOP_WORDS=["the"])
        assert config.MAX_EDIT_DISTANCE == 1
        assert config.RANKING_METHOD == "bm25"
        assert config.STOP_WORDS == frozenset({"the"})

    def test_from_dict(self) -> None:
        assert Config.from_dict({"TOP_K_RESULTS": 3}).TOP_K_RESULTS == 3
        assert Config.from_dict(None).TOP_K_RESULTS == defaults.TOP_K_RESULTS

    def test_instances_are_independent(self) -> None:
        a = Config(TOP_K_RESULTS=1)
        b = Config()
        assert a.TOP_K_RESULTS == 1
        assert b.TOP_K_RESULTS == defaults.TOP_K_RESULTS

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(InvalidParameter):
            Config(NOT_A_SETTING=1)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"MAX_EDIT_DISTANCE": -1},
            {"MAX_EDIT_DISTANCE": 10},
            {"NGRAM_SIZE": 0},
            {"TOP_K_RESULTS": 0},
            {"RANKING_METHOD": "pagerank"},
            {"PARALLEL_WORKERS": 0},
            {"PARALLEL_BACKEND": "fork"},
            {"BM25_B": 1.5},
            {"BM25_K1": -0.1},
        ],
    )
    def test_invalid_values_rejected(self, overrides) -> None:
        with pytest.raises(InvalidParameter):
            Config(**overrides)

    def test_to_dict_round_trip(self) -> None:
        config = Config(NGRAM_SIZE=3)
        assert Config(**config.to_dict()).NGRAM_SIZE == 3


class TestValidators:
    """Tests for call-site parameter validation."""

    def test_max_distance_bounds(self) -> None:
        assert validate_max_distance(0) == 0
        assert validate_max_distance(defaults.MAX_EDIT_DISTANCE_LIMIT) == defaults.MAX_EDIT_DISTANCE_LIMIT
        with pytest.raises(InvalidParameter):
            validate_max_distance(-1)
        with pytest.raises(InvalidParameter):
            validate_max_distance(defaults.MAX_EDIT_DISTANCE_LIMIT + 1)

    def test_max_distance_type(self) -> None:
        with pytest.raises(InvalidParameter):
            validate_max_distance(1.5)
        with pytest.raises(InvalidParameter):
            validate_max_distance(True)

    def test_top_k(self) -> None:
        assert validate_top_k(1) == 1
        for bad in (0, -3, None, "5"):
            with pytest.raises(InvalidParameter):
                validate_top_k(bad)

    def test_offset(self) -> None:
        assert validate_offset(0) == 0
        with pytest.raises(InvalidParameter):
            validate_offset(-1)

    def test_ngram_size(self) -> None:
        assert validate_ngram_size(3) == 3
        with pytest.raises(InvalidParameter):
            validate_ngram_size(defaults.MAX_NGRAM_SIZE + 1)

    def test_workers(self) -> None:
        assert validate_workers(4) == 4
        with pytest.raises(InvalidParameter):
            validate_workers(0)

    def test_backend(self) -> None:
        assert validate_backend("thread") == "thread"
        assert validate_backend("process") == "process"
        with pytest.raises(InvalidParameter):
            validate_backend("fork")


class TestInvalidParameter:
    """Tests for the error type."""

    def test_hierarchy(self) -> None:
        error = InvalidParameter("top_k", 0, "must be a positive integer")
        assert isinstance(error, SearchEngineError)
        assert isinstance(error, ValueError)

    def test_message(self) -> None:
        error = InvalidParameter("top_k", 0, "must be a positive integer")
        assert str(error) == "Invalid top_k=0: must be a positive integer"
        assert error.name == "top_k"
        assert error.value == 0
