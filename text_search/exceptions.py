"""
Exception hierarchy for the text search engine.

Empty corpora, empty queries and unmatched terms are not errors; they
produce empty results. Only malformed arguments raise.
"""


class SearchEngineError(Exception):
    """Base exception for all search engine errors."""


class InvalidParameter(SearchEngineError, ValueError):
    """A configuration value or call argument is out of range or malformed."""

    def __init__(self, name: str, value, reason: str):
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {name}={value!r}: {reason}")
