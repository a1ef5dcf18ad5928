"""
Fuzzy term matching and query auto-correction.

Candidates come from the index's n-gram structure; exact Levenshtein
distance is computed only for those candidates.
"""

import logging
from typing import List, NamedTuple, Optional, Tuple

from rapidfuzz.distance import Levenshtein

from .config import Config, validate_max_distance
from .indexer import InvertedIndex

logger = logging.getLogger(__name__)


class FuzzyMatch(NamedTuple):
    term: str
    distance: int
    doc_freq: int


class AutoCorrect:
    """Handles fuzzy matching using edit distance and document frequency."""

    def __init__(self, config: Optional[Config] = None):
        """Initialize with configuration."""
        self.config = config or Config()

    def _resolve_distance(self, max_distance: Optional[int]) -> int:
        if max_distance is None:
            max_distance = self.config.MAX_EDIT_DISTANCE
        return validate_max_distance(max_distance)

    def _scored_matches(self, term: str, index: InvertedIndex, max_distance: int) -> List[FuzzyMatch]:
        """Score n-gram candidates and keep those within the bound, best first."""
        candidates = index.ngram_index.candidates(term, max_distance)
        matches = []
        for cand in candidates:
            dist = Levenshtein.distance(term, cand, score_cutoff=max_distance)
            if dist <= max_distance:
                matches.append(FuzzyMatch(cand, dist, index.document_frequency(cand)))

        # Smaller distance first, then more common terms, then term order
        matches.sort(key=lambda m: (m.distance, -m.doc_freq, m.term))
        logger.debug(
            "Fuzzy match %r: %d candidates of %d terms, %d within distance %d",
            term, len(candidates), len(index), len(matches), max_distance,
        )
        return matches

    def fuzzy_match(self, term: str, index: InvertedIndex, max_distance: Optional[int] = None) -> List[str]:
        """
        Find vocabulary terms within an edit distance of a term.

        A term present in the vocabulary is returned alone: exact matches
        always take priority and no fuzzy search is done.

        Args:
            term: Normalized query term.
            index: Index whose vocabulary is searched.
            max_distance: Edit distance bound (0..3).

        Returns:
            Matching vocabulary terms ordered by distance, then descending
            document frequency, then term. Empty if nothing is close enough.

        Raises:
            InvalidParameter: If max_distance is negative or too large.
        """
        max_distance = self._resolve_distance(max_distance)
        if term in index:
            return [term]
        if not term or max_distance == 0:
            return []
        return [m.term for m in self._scored_matches(term, index, max_distance)]

    def suggest_correction(self, term: str, index: InvertedIndex,
                           max_distance: Optional[int] = None) -> Tuple[Optional[str], Optional[int]]:
        """
        Suggest the single best replacement for a term.

        Args:
            term: Term to correct.
            index: Index whose vocabulary is searched.
            max_distance: Edit distance bound.

        Returns:
            Tuple of (best_term, distance) or (None, None) if no match.
        """
        max_distance = self._resolve_distance(max_distance)
        if term in index:
            return term, 0
        if not term or max_distance == 0:
            return None, None
        matches = self._scored_matches(term, index, max_distance)
        if not matches:
            return None, None
        return matches[0].term, matches[0].distance

    def autocorrect_query_words(self, words: List[str], index: InvertedIndex,
                                max_distance: Optional[int] = None) -> Tuple[List[str], List[Tuple[str, str]], List[str]]:
        """
        Auto-correct a list of query terms.

        Args:
            words: Normalized query terms.
            index: Index whose vocabulary is searched.
            max_distance: Edit distance bound.

        Returns:
            Tuple of (corrected_words, changes, oov_no_suggest).
            - corrected_words: vocabulary terms, one per matched word, in order
            - changes: list of (original, corrected) pairs
            - oov_no_suggest: words with no viable suggestion
        """
        max_distance = self._resolve_distance(max_distance)

        corrected = []
        changes = []
        oov_no_suggest = []

        for w in words:
            suggestion, _dist = self.suggest_correction(w, index, max_distance=max_distance)
            if suggestion is None:
                oov_no_suggest.append(w)
                continue
            corrected.append(suggestion)
            if suggestion != w:
                changes.append((w, suggestion))

        return corrected, changes, oov_no_suggest

    def get_similar_words(self, term: str, index: InvertedIndex, max_distance: Optional[int] = None,
                          top_k: int = 5) -> List[FuzzyMatch]:
        """
        Get vocabulary terms similar to a term, including the term itself if known.

        Args:
            term: Input term.
            index: Index whose vocabulary is searched.
            max_distance: Edit distance bound.
            top_k: Number of suggestions to return.

        Returns:
            List of (term, distance, doc_freq) tuples sorted by distance,
            then descending document frequency.
        """
        max_distance = self._resolve_distance(max_distance)
        if not term:
            return []
        return self._scored_matches(term, index, max_distance)[:top_k]


def fuzzy_match(term: str, index: InvertedIndex, max_distance: int) -> List[str]:
    """Fuzzy-match a term against an index vocabulary."""
    return AutoCorrect().fuzzy_match(term, index, max_distance)
