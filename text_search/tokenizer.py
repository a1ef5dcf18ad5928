"""
Text normalization and tokenization.

This module turns raw text into the sequence of terms that the index is
built from and that queries are matched against.
"""

import re
from collections import Counter
from typing import Dict, List, Optional

from .config import Config

_WHITESPACE = re.compile(r"\s+")
# Non-alphanumeric characters at either end of a whitespace-delimited chunk
_BOUNDARY = re.compile(r"^[\W_]+|[\W_]+$")


class Tokenizer:
    """Normalizes raw text into terms."""

    def __init__(self, config: Optional[Config] = None):
        """Initialize with configuration."""
        self.config = config or Config()
        self.lowercase = self.config.LOWERCASE
        self.stop_words = frozenset(
            self._normalize(w) for w in self.config.STOP_WORDS
        )

    def _normalize(self, chunk: str) -> str:
        if self.lowercase:
            chunk = chunk.casefold()
        return _BOUNDARY.sub("", chunk)

    def tokenize(self, text: str) -> List[str]:
        """
        Split text into normalized terms.

        Whitespace runs separate chunks; each chunk is case-folded and
        stripped of leading and trailing non-alphanumeric characters.
        Chunks left empty and configured stop words are dropped.

        Args:
            text: Raw text.

        Returns:
            List of terms in text order. Empty for empty or
            whitespace-only text.
        """
        terms = []
        for chunk in _WHITESPACE.split(text):
            if not chunk:
                continue
            term = self._normalize(chunk)
            if term and term not in self.stop_words:
                terms.append(term)
        return terms

    def term_frequencies(self, text: str) -> Dict[str, int]:
        """Tokenize text and count occurrences of each term."""
        return Counter(self.tokenize(text))


def tokenize(text: str) -> List[str]:
    """Tokenize text with the default settings."""
    return Tokenizer().tokenize(text)
