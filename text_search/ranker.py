"""
Document ranking and scoring module.

This module combines in-document term frequency, document frequency
rarity and document length into a relevance score, and selects the
top-ranked documents.

TF-IDF (default):
    idf  = log((N + 1) / (df + 1)) + 1      (smooth, positive)
    tfw  = sqrt(tf)
    term = tfw * idf / sqrt(doc_len)

BM25:
    idf  = log((N - df + 0.5) / (df + 0.5) + 1)
    term = idf * tf * (k1 + 1) / (tf + k1 * (1 - b + b * doc_len / avg_len))

A query term repeated c times weighs 1 + log(c) in either method.
"""

import heapq
import math
from collections import Counter, defaultdict
from typing import Dict, Hashable, Iterable, List, NamedTuple, Optional, Tuple

from .config import Config, validate_offset, validate_ranking_method, validate_top_k
from .indexer import InvertedIndex


class SearchResult(NamedTuple):
    doc_id: Hashable
    score: float


class Ranker:
    """Handles document scoring and top-k selection."""

    def __init__(self, config: Optional[Config] = None, method: Optional[str] = None):
        """Initialize with configuration."""
        self.config = config or Config()
        self.method = validate_ranking_method(method or self.config.RANKING_METHOD)
        self.k1 = self.config.BM25_K1
        self.b = self.config.BM25_B

    def idf(self, term: str, index: InvertedIndex) -> float:
        """
        Rarity weight of a term; fewer containing documents weigh more.

        Args:
            term: Vocabulary term.
            index: The inverted index.

        Returns:
            IDF weight for the configured method.
        """
        n = index.num_docs
        df = index.document_frequency(term)
        if self.method == "bm25":
            return math.log((n - df + 0.5) / (df + 0.5) + 1.0)
        return math.log((n + 1) / (df + 1)) + 1.0

    def term_score(self, tf: int, doc_len: int, idf: float, avg_doc_len: float) -> float:
        """Contribution of one term occurring tf times in a document of doc_len terms."""
        if tf <= 0 or doc_len <= 0:
            return 0.0
        if self.method == "bm25":
            avg = avg_doc_len if avg_doc_len > 0 else 1.0
            norm = 1.0 - self.b + self.b * (doc_len / avg)
            return idf * (tf * (self.k1 + 1.0)) / (tf + self.k1 * norm)
        return math.sqrt(tf) * idf / math.sqrt(doc_len)

    @staticmethod
    def query_weights(query_terms: Iterable[str]) -> Dict[str, float]:
        """Map each distinct query term to 1 + log(count), so repeats count sublinearly."""
        return {term: 1.0 + math.log(count) for term, count in Counter(query_terms).items()}

    def score(self, doc_id: Hashable, query_terms: Iterable[str], index: InvertedIndex) -> float:
        """
        Score one document for a set of vocabulary terms.

        Each distinct term contributes once, scaled by its query weight, and
        terms are summed in ascending order so the result does not depend
        on query term order.

        Args:
            doc_id: Document ID.
            query_terms: Vocabulary terms (exact or fuzzy substitutes), repeats
                included.
            index: The inverted index.

        Returns:
            Relevance score, 0.0 if the document contains none of the terms.
        """
        total = 0.0
        if not index.has_document(doc_id):
            return total
        doc_len = index.doc_length(doc_id)
        weights = self.query_weights(query_terms)
        for term in sorted(weights):
            tf = index.term_frequency(term, doc_id)
            if tf:
                total += weights[term] * self.term_score(tf, doc_len, self.idf(term, index), index.avg_doc_length)
        return total

    def rank(self, query_terms: Iterable[str], index: InvertedIndex, top_k: Optional[int] = None,
             offset: int = 0) -> List[SearchResult]:
        """
        Rank every document containing at least one term (OR semantics).

        Scores accumulate over posting lists in ascending term order, which
        gives the same sums as score(). Ties are broken by ascending
        document ID.

        Args:
            query_terms: Vocabulary terms.
            index: The inverted index.
            top_k: Number of top results to return.
            offset: Number of top results to skip first.

        Returns:
            List of (doc_id, score) sorted by score descending.
        """
        if top_k is None:
            top_k = self.config.TOP_K_RESULTS
        validate_top_k(top_k)
        validate_offset(offset)

        scores = defaultdict(float)  # doc_id -> accumulated score
        weights = self.query_weights(query_terms)
        for term in sorted(weights):
            postings = index.postings(term)
            if not postings:
                continue
            term_idf = self.idf(term, index)
            weight = weights[term]
            for doc_id, tf in postings:
                contribution = self.term_score(tf, index.doc_length(doc_id), term_idf, index.avg_doc_length)
                scores[doc_id] += weight * contribution

        best = heapq.nsmallest(
            offset + top_k, scores.items(), key=lambda item: (-item[1], item[0])
        )
        return [SearchResult(doc_id, s) for doc_id, s in best[offset:]]

    def get_top_terms_for_document(self, doc_id: Hashable, index: InvertedIndex,
                                   topk: int = 10) -> List[Tuple[str, float]]:
        """
        Get the highest scoring terms of a document.

        Args:
            doc_id: Document ID.
            index: The inverted index.
            topk: Number of top terms to return.

        Returns:
            List of (term, score) tuples sorted by score descending.
        """
        term_scores = []
        doc_len = index.doc_length(doc_id)
        for term in index.vocabulary:
            tf = index.term_frequency(term, doc_id)
            if tf:
                term_scores.append(
                    (term, self.term_score(tf, doc_len, self.idf(term, index), index.avg_doc_length))
                )

        term_scores.sort(key=lambda x: (-x[1], x[0]))
        return term_scores[:topk]


def score(doc_id: Hashable, query_terms: Iterable[str], index: InvertedIndex) -> float:
    """Score a document with the default settings."""
    return Ranker().score(doc_id, query_terms, index)
