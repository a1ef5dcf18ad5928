"""
Configuration settings for the text search engine.

The module-level constants are the defaults. Components never read them
directly; they receive a ``Config`` instance, and every call-site keyword
argument overrides the matching config value when it is not None.
"""

from typing import Any, Dict

from .exceptions import InvalidParameter

# Text processing settings
LOWERCASE = True  # Case-fold terms during tokenization
STOP_WORDS = ()  # Terms dropped at build and query time

# Fuzzy matching settings
NGRAM_SIZE = 2  # n for the fuzzy candidate n-gram structure
MIN_NGRAM_SIZE = 1
MAX_NGRAM_SIZE = 4
MAX_EDIT_DISTANCE = 2  # Default edit distance bound for fuzzy matching
MAX_EDIT_DISTANCE_LIMIT = 3  # Largest bound accepted
AUTO_CORRECT_ENABLED = True  # Substitute fuzzy matches for unknown query terms

# Search settings
TOP_K_RESULTS = 10  # Number of results to return
RANKING_METHOD = "tfidf"  # Ranking method: "tfidf" or "bm25"
RANKING_METHODS = ("tfidf", "bm25")
BM25_K1 = 1.2  # Term frequency saturation
BM25_B = 0.75  # Document length normalization

# Performance settings
PARALLEL_WORKERS = 1  # Workers used to tokenize documents during a build
PARALLEL_BACKEND = "thread"  # Pool used when workers > 1: "thread" or "process"
PARALLEL_BACKENDS = ("thread", "process")

# Debug settings
LOG_LEVEL = "INFO"  # Logging level: DEBUG, INFO, WARNING, ERROR

DEFAULTS: Dict[str, Any] = {
    "LOWERCASE": LOWERCASE,
    "STOP_WORDS": STOP_WORDS,
    "NGRAM_SIZE": NGRAM_SIZE,
    "MAX_EDIT_DISTANCE": MAX_EDIT_DISTANCE,
    "AUTO_CORRECT_ENABLED": AUTO_CORRECT_ENABLED,
    "TOP_K_RESULTS": TOP_K_RESULTS,
    "RANKING_METHOD": RANKING_METHOD,
    "BM25_K1": BM25_K1,
    "BM25_B": BM25_B,
    "PARALLEL_WORKERS": PARALLEL_WORKERS,
    "PARALLEL_BACKEND": PARALLEL_BACKEND,
    "LOG_LEVEL": LOG_LEVEL,
}


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_max_distance(max_distance) -> int:
    """Reject edit distance bounds that are negative, too large or not integers."""
    if not _is_int(max_distance):
        raise InvalidParameter("max_distance", max_distance, "must be an integer")
    if max_distance < 0:
        raise InvalidParameter("max_distance", max_distance, "must not be negative")
    if max_distance > MAX_EDIT_DISTANCE_LIMIT:
        raise InvalidParameter(
            "max_distance", max_distance, f"must be at most {MAX_EDIT_DISTANCE_LIMIT}"
        )
    return max_distance


def validate_top_k(top_k) -> int:
    if not _is_int(top_k) or top_k <= 0:
        raise InvalidParameter("top_k", top_k, "must be a positive integer")
    return top_k


def validate_offset(offset) -> int:
    if not _is_int(offset) or offset < 0:
        raise InvalidParameter("offset", offset, "must be a non-negative integer")
    return offset


def validate_ngram_size(ngram_size) -> int:
    if not _is_int(ngram_size) or not MIN_NGRAM_SIZE <= ngram_size <= MAX_NGRAM_SIZE:
        raise InvalidParameter(
            "ngram_size", ngram_size,
            f"must be an integer between {MIN_NGRAM_SIZE} and {MAX_NGRAM_SIZE}"
        )
    return ngram_size


def validate_workers(workers) -> int:
    if not _is_int(workers) or workers < 1:
        raise InvalidParameter("workers", workers, "must be a positive integer")
    return workers


def validate_ranking_method(method) -> str:
    if method not in RANKING_METHODS:
        raise InvalidParameter("ranking_method", method, f"must be one of {RANKING_METHODS}")
    return method


def validate_backend(backend) -> str:
    if backend not in PARALLEL_BACKENDS:
        raise InvalidParameter("backend", backend, f"must be one of {PARALLEL_BACKENDS}")
    return backend


class Config:
    """
    Settings object handed to every component.

    Attributes mirror the module-level defaults. Unknown keys and invalid
    values are rejected at construction.

    Example:
        >>> config = Config(MAX_EDIT_DISTANCE=1, RANKING_METHOD="bm25")
        >>> config.NGRAM_SIZE
        2
    """

    def __init__(self, **overrides):
        unknown = sorted(set(overrides) - set(DEFAULTS))
        if unknown:
            raise InvalidParameter("config", unknown, "unknown setting(s)")

        for key, default in DEFAULTS.items():
            setattr(self, key, overrides.get(key, default))

        self.STOP_WORDS = frozenset(self.STOP_WORDS)
        self._validate()

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any] = None) -> "Config":
        """Create a configuration from an optional dictionary of overrides."""
        return cls(**(config_dict or {}))

    def _validate(self) -> None:
        validate_ngram_size(self.NGRAM_SIZE)
        validate_max_distance(self.MAX_EDIT_DISTANCE)
        validate_top_k(self.TOP_K_RESULTS)
        validate_ranking_method(self.RANKING_METHOD)
        validate_workers(self.PARALLEL_WORKERS)
        validate_backend(self.PARALLEL_BACKEND)
        if not isinstance(self.BM25_K1, (int, float)) or self.BM25_K1 < 0:
            raise InvalidParameter("BM25_K1", self.BM25_K1, "must be a non-negative number")
        if not isinstance(self.BM25_B, (int, float)) or not 0 <= self.BM25_B <= 1:
            raise InvalidParameter("BM25_B", self.BM25_B, "must be between 0 and 1")

    def to_dict(self) -> Dict[str, Any]:
        return {key: getattr(self, key) for key in DEFAULTS}

    def __repr__(self):
        items = ", ".join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"Config({items})"
