"""
Character n-gram index over the vocabulary.

Used by the fuzzy matcher to collect edit-distance candidates without
comparing a query term against every vocabulary term.
"""

from collections import defaultdict
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Set, Tuple

from .config import validate_max_distance, validate_ngram_size

# Terms never contain whitespace, so a space can pad both ends safely
PAD = " "


def padded_ngrams(term: str, n: int) -> List[str]:
    """
    Return the n-grams of a term padded with n - 1 boundary characters on each side.

    Padding gives every term len(term) + n - 1 grams, so that prefixes and
    suffixes contribute grams even for terms shorter than n.

    Args:
        term: Term to split.
        n: Gram length.

    Returns:
        List of grams in order (may contain repeats).
    """
    padding = PAD * (n - 1)
    padded = f"{padding}{term}{padding}"
    return [padded[i:i + n] for i in range(len(padded) - n + 1)]


class NGramIndex:
    """
    Immutable mapping of n-gram -> vocabulary terms containing it.

    Also buckets the vocabulary by term length, which covers the short
    terms that may share no gram with a query term and still lie within
    the edit-distance bound.
    """

    def __init__(self, n: int, grams: Dict[str, FrozenSet[str]], by_length: Dict[int, Tuple[str, ...]]):
        self._n = n
        self._grams = MappingProxyType(grams)
        self._by_length = MappingProxyType(by_length)

    @classmethod
    def from_vocabulary(cls, vocabulary: Iterable[str], n: int) -> "NGramIndex":
        """
        Build the n-gram structure for a vocabulary.

        Args:
            vocabulary: Distinct terms.
            n: Gram length.

        Returns:
            A new NGramIndex.
        """
        validate_ngram_size(n)
        grams = defaultdict(set)
        by_length = defaultdict(list)
        for term in vocabulary:
            by_length[len(term)].append(term)
            for gram in padded_ngrams(term, n):
                grams[gram].add(term)

        return cls(
            n,
            {gram: frozenset(terms) for gram, terms in grams.items()},
            {length: tuple(sorted(terms)) for length, terms in by_length.items()},
        )

    @property
    def n(self) -> int:
        return self._n

    def __len__(self) -> int:
        return len(self._grams)

    def __eq__(self, other):
        if not isinstance(other, NGramIndex):
            return NotImplemented
        return (
            self._n == other._n
            and dict(self._grams) == dict(other._grams)
            and dict(self._by_length) == dict(other._by_length)
        )

    def terms_with_gram(self, gram: str) -> FrozenSet[str]:
        return self._grams.get(gram, frozenset())

    def short_term_limit(self, max_distance: int) -> int:
        """
        Length at or below which a true match may share no gram with the query.

        A term of length L has L + n - 1 padded grams and one edit destroys
        at most n of them, so two terms within distance k share at least
        max(len) + n - 1 - k * n grams. That count is positive once the
        longer term exceeds (k - 1) * n + 1 characters.
        """
        return (max_distance - 1) * self._n + 1

    def candidates(self, term: str, max_distance: int) -> Set[str]:
        """
        Collect vocabulary terms that may lie within max_distance of term.

        The result is a superset of the true matches: terms sharing at least
        one padded gram, plus the short terms the gram filter cannot vouch
        for. Terms whose length differs by more than max_distance are
        dropped since they cannot match.

        Args:
            term: Query term.
            max_distance: Edit distance bound.

        Returns:
            Set of candidate vocabulary terms.
        """
        validate_max_distance(max_distance)
        length = len(term)
        found = set()
        for gram in set(padded_ngrams(term, self._n)):
            found.update(self._grams.get(gram, ()))

        limit = self.short_term_limit(max_distance)
        if length <= limit:
            for other_length in range(max(0, length - max_distance), limit + 1):
                found.update(self._by_length.get(other_length, ()))

        return {cand for cand in found if abs(len(cand) - length) <= max_distance}
