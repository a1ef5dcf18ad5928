"""
Main TextSearchEngine class that orchestrates the search pipeline.

The engine holds configuration and components only. Indexes are explicit
values: ``build_index`` returns one and every query takes one, so a single
engine can serve any number of independent indexes.
"""

import logging
from collections import Counter
from typing import Any, Dict, Hashable, Iterable, List, NamedTuple, Optional, Tuple

from .autocorrect import AutoCorrect
from .config import Config, validate_max_distance, validate_offset, validate_top_k
from .indexer import Indexer, InvertedIndex
from .ranker import Ranker, SearchResult
from .tokenizer import Tokenizer
from .utils import format_terms

logger = logging.getLogger(__name__)


class QueryTerm(NamedTuple):
    """How one query term was resolved against the vocabulary."""

    original: str
    term: Optional[str]
    distance: Optional[int]
    count: int = 1


class TextSearchEngine:
    """
    Unified interface for building indexes and searching them.

    Query pipeline: tokenize -> exact lookup -> fuzzy substitution for
    unknown terms -> OR-merge of postings -> ranking -> top-k.

    Example:
        >>> engine = TextSearchEngine()
        >>> index = engine.build_index([(0, "the cat sat"), (1, "the dog sat")])
        >>> [r.doc_id for r in engine.search("cet", index, max_distance=1)]
        [0]
    """

    def __init__(self, config: Optional[Config] = None, config_dict: Optional[Dict[str, Any]] = None):
        """
        Initialize the TextSearchEngine.

        Args:
            config: Configuration object. Built from config_dict if None.
            config_dict: Optional dictionary of settings overriding defaults.
        """
        self.config = config or Config.from_dict(config_dict)

        self.tokenizer = Tokenizer(self.config)
        self.indexer = Indexer(self.config, tokenizer=self.tokenizer)
        self.ranker = Ranker(self.config)
        self.auto_correct = AutoCorrect(self.config)

    def build_index(self, documents: Iterable[Tuple[Hashable, str]], ngram_size: Optional[int] = None,
                    workers: Optional[int] = None, backend: Optional[str] = None) -> InvertedIndex:
        """
        Build an immutable index over a full corpus.

        Args:
            documents: Sequence of (doc_id, text) pairs.
            ngram_size: Gram length for fuzzy candidates. If None, uses config.
            workers: Pool workers used for tokenization. If None, uses config.
            backend: "thread" or "process". If None, uses config.

        Returns:
            The new InvertedIndex.
        """
        return self.indexer.build_inverted_index(documents, ngram_size=ngram_size, workers=workers, backend=backend)

    def resolve_query_terms(self, query: str, index: InvertedIndex,
                            max_distance: Optional[int] = None) -> List[QueryTerm]:
        """
        Map each distinct query term to the vocabulary term it will search for.

        Exact vocabulary terms map to themselves. Other terms are replaced
        by the single best fuzzy match (smallest distance, then highest
        document frequency, then term order); other tied candidates are not
        used. Terms with no match map to None.

        Args:
            query: Raw query string.
            index: The index to resolve against.
            max_distance: Edit distance bound. If None, uses config; fuzzy
                substitution is off when AUTO_CORRECT_ENABLED is False.

        Returns:
            One QueryTerm per distinct query term, in query order, with the
            number of times it occurs in the query.
        """
        if max_distance is None:
            max_distance = self.config.MAX_EDIT_DISTANCE if self.config.AUTO_CORRECT_ENABLED else 0
        validate_max_distance(max_distance)

        resolved = []
        for word, count in Counter(self.tokenizer.tokenize(query)).items():
            term, distance = self.auto_correct.suggest_correction(word, index, max_distance=max_distance)
            resolved.append(QueryTerm(word, term, distance, count))
        return resolved

    def search(self, query: str, index: InvertedIndex, top_k: Optional[int] = None,
               max_distance: Optional[int] = None, offset: int = 0) -> List[SearchResult]:
        """
        Search an index for documents matching a query.

        A document qualifies if it contains at least one resolved query
        term. A term repeated in the query, or reached by several query
        words, is weighted by how often it occurs. Parameters are validated
        before any work is done.

        Args:
            query: Search query string.
            index: The index to search.
            top_k: Number of results to return. If None, uses config default.
            max_distance: Edit distance bound for unknown terms.
            offset: Number of top results to skip (for paging).

        Returns:
            List of (doc_id, score) sorted by score descending, ties by
            ascending doc_id. Empty for an empty query or index.
        """
        if top_k is None:
            top_k = self.config.TOP_K_RESULTS
        validate_top_k(top_k)
        validate_offset(offset)
        if max_distance is not None:
            validate_max_distance(max_distance)

        resolved = self.resolve_query_terms(query, index, max_distance=max_distance)
        changes = [(q.original, q.term) for q in resolved if q.term is not None and q.term != q.original]
        if changes:
            logger.debug("Query corrections: %s", changes)

        terms = [q.term for q in resolved if q.term is not None for _ in range(q.count)]
        if not terms:
            return []
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Searching with terms %s", format_terms(terms))

        return self.ranker.rank(terms, index, top_k=top_k, offset=offset)

    def get_stats(self, index: InvertedIndex) -> Dict[str, Any]:
        """
        Get statistics about a built index.

        Returns:
            Dictionary containing various statistics.
        """
        stats = index.summary()
        stats["ranking_method"] = self.ranker.method
        return stats


def search(query: str, index: InvertedIndex, top_k: Optional[int] = None,
           max_distance: Optional[int] = None) -> List[SearchResult]:
    """Search an index with the default settings."""
    return TextSearchEngine().search(query, index, top_k=top_k, max_distance=max_distance)
