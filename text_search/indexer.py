"""
Inverted index construction and management.

This module builds the immutable term -> postings index, its corpus
statistics and the n-gram structure used for fuzzy matching.
"""

import logging
from collections import defaultdict
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from types import MappingProxyType
from typing import Any, Dict, Hashable, Iterable, List, NamedTuple, Optional, Sequence, Set, Tuple

from .config import Config, validate_backend, validate_ngram_size, validate_workers
from .exceptions import InvalidParameter
from .ngrams import NGramIndex
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)


class Posting(NamedTuple):
    """A document containing a term, with the term's frequency in it."""

    doc_id: Hashable
    freq: int


class InvertedIndex:
    """
    Frozen snapshot of an indexed corpus.

    Holds term -> postings (ascending document identifier), per-document
    lengths in terms and the n-gram structure over the vocabulary. No
    method mutates it, so one instance can be shared by concurrent readers.
    """

    def __init__(self, postings: Dict[str, Tuple[Posting, ...]], doc_lengths: Dict[Hashable, int],
                 ngram_index: NGramIndex):
        self._postings = MappingProxyType(postings)
        self._doc_lengths = MappingProxyType(doc_lengths)
        self._ngram_index = ngram_index
        self._num_docs = len(doc_lengths)
        self._avg_doc_length = (
            sum(doc_lengths.values()) / self._num_docs if self._num_docs else 0.0
        )

    @property
    def num_docs(self) -> int:
        return self._num_docs

    @property
    def avg_doc_length(self) -> float:
        return self._avg_doc_length

    @property
    def vocabulary(self):
        """Read-only view of all distinct terms."""
        return self._postings.keys()

    @property
    def doc_ids(self) -> Tuple[Hashable, ...]:
        return tuple(self._doc_lengths)

    @property
    def ngram_index(self) -> NGramIndex:
        return self._ngram_index

    def __contains__(self, term) -> bool:
        return term in self._postings

    def __len__(self) -> int:
        return len(self._postings)

    def __eq__(self, other):
        if not isinstance(other, InvertedIndex):
            return NotImplemented
        return (
            dict(self._postings) == dict(other._postings)
            and dict(self._doc_lengths) == dict(other._doc_lengths)
            and self._ngram_index == other._ngram_index
        )

    def __repr__(self):
        return f"InvertedIndex(num_docs={self._num_docs}, vocabulary={len(self._postings)})"

    def postings(self, term: str) -> Tuple[Posting, ...]:
        """Return the posting list for a term, empty if the term is unknown."""
        return self._postings.get(term, ())

    def document_frequency(self, term: str) -> int:
        """
        Get the document frequency (number of documents containing the term).

        Args:
            term: Term to look up.

        Returns:
            Document frequency of the term.
        """
        return len(self.postings(term))

    def collection_frequency(self, term: str) -> int:
        """
        Get the collection frequency (total occurrences of the term).

        Args:
            term: Term to look up.

        Returns:
            Collection frequency of the term.
        """
        return sum(p.freq for p in self.postings(term))

    def term_frequency(self, term: str, doc_id: Hashable) -> int:
        for posting in self.postings(term):
            if posting.doc_id == doc_id:
                return posting.freq
        return 0

    def has_document(self, doc_id: Hashable) -> bool:
        return doc_id in self._doc_lengths

    def doc_length(self, doc_id: Hashable) -> int:
        """Length of a document in terms; raises KeyError for unknown documents."""
        return self._doc_lengths[doc_id]

    def documents_containing(self, terms: Iterable[str]) -> Set[Hashable]:
        """
        Get the set of documents containing any of the given terms.

        Args:
            terms: Terms to search for.

        Returns:
            Set of document IDs containing at least one of the terms.
        """
        doc_ids = set()
        for term in terms:
            doc_ids.update(p.doc_id for p in self.postings(term))
        return doc_ids

    def common_documents(self, terms: Sequence[str]) -> Set[Hashable]:
        """
        Get the set of documents containing all of the given terms.

        Args:
            terms: Terms to search for.

        Returns:
            Set of document IDs containing every term.
        """
        if not terms:
            return set()

        common_docs = {p.doc_id for p in self.postings(terms[0])}
        for term in terms[1:]:
            common_docs &= {p.doc_id for p in self.postings(term)}
        return common_docs

    def summary(self) -> Dict[str, Any]:
        """Collect statistics about the index."""
        posting_lengths = sorted(len(plist) for plist in self._postings.values())
        total_postings = sum(posting_lengths)
        stats = {
            "num_docs": self._num_docs,
            "vocabulary_size": len(self._postings),
            "total_postings": total_postings,
            "avg_postings_per_term": total_postings / len(posting_lengths) if posting_lengths else 0.0,
            "avg_doc_length": self._avg_doc_length,
            "num_ngrams": len(self._ngram_index),
            "ngram_size": self._ngram_index.n,
        }
        if posting_lengths:
            stats["min_posting_list_length"] = posting_lengths[0]
            stats["max_posting_list_length"] = posting_lengths[-1]
            stats["median_posting_list_length"] = posting_lengths[len(posting_lengths) // 2]
        return stats


class Indexer:
    """Handles inverted index construction."""

    def __init__(self, config: Optional[Config] = None, tokenizer: Optional[Tokenizer] = None):
        """Initialize with configuration."""
        self.config = config or Config()
        self.tokenizer = tokenizer or Tokenizer(self.config)

    def _check_documents(self, documents: Sequence[Tuple[Hashable, str]]) -> List[Hashable]:
        seen = set()
        for entry in documents:
            if not isinstance(entry, (tuple, list)) or len(entry) != 2:
                raise InvalidParameter("document", entry, "must be a (doc_id, text) pair")
            doc_id, text = entry
            if not isinstance(text, str):
                raise InvalidParameter("text", type(text).__name__, f"document {doc_id!r} text must be a string")
            try:
                duplicate = doc_id in seen
            except TypeError:
                raise InvalidParameter("doc_id", doc_id, "must be hashable") from None
            if duplicate:
                raise InvalidParameter("doc_id", doc_id, "duplicate document identifier")
            seen.add(doc_id)

        try:
            return sorted(seen)
        except TypeError:
            raise InvalidParameter("doc_id", None, "document identifiers must be mutually comparable") from None

    def build_inverted_index(self, documents: Iterable[Tuple[Hashable, str]], ngram_size: Optional[int] = None,
                             workers: Optional[int] = None, backend: Optional[str] = None) -> InvertedIndex:
        """
        Build an inverted index from (document id, text) pairs.

        Phase one tokenizes each document and counts its terms; documents
        share nothing, so with workers > 1 this runs on a pool. Tokenizing is
        pure Python and holds the GIL, so the "thread" backend gains little;
        the "process" backend runs documents in parallel at the cost of
        pickling each text and its counts. Phase two merges the local counts
        into the global posting lists serially. The index is only
        constructed once the merge is complete.

        Args:
            documents: Sequence of (doc_id, text) pairs. Identifiers must be
                unique, hashable and mutually comparable.
            ngram_size: Gram length for the fuzzy structure.
            workers: Number of pool workers for phase one.
            backend: "thread" or "process". If None, uses config.

        Returns:
            A new immutable InvertedIndex.

        Raises:
            InvalidParameter: If an argument or document is malformed. No
                index is produced in that case.
        """
        if ngram_size is None:
            ngram_size = self.config.NGRAM_SIZE
        if workers is None:
            workers = self.config.PARALLEL_WORKERS
        if backend is None:
            backend = self.config.PARALLEL_BACKEND
        validate_ngram_size(ngram_size)
        validate_workers(workers)
        validate_backend(backend)

        documents = list(documents)
        ordered_ids = self._check_documents(documents)
        texts = [text for _, text in documents]

        # Phase 1: per-document tokenization and local aggregation
        if workers > 1 and len(texts) > 1:
            pool = ProcessPoolExecutor if backend == "process" else ThreadPoolExecutor
            with pool(max_workers=workers) as executor:
                local_counts = list(executor.map(self.tokenizer.term_frequencies, texts))
        else:
            local_counts = [self.tokenizer.term_frequencies(text) for text in texts]

        # Phase 2: merge into global structures
        postings = defaultdict(list)      # term -> list of postings
        doc_lengths = {}                  # doc_id -> length in terms
        for (doc_id, _), counts in zip(documents, local_counts):
            doc_lengths[doc_id] = sum(counts.values())
            for term, freq in counts.items():
                postings[term].append(Posting(doc_id, freq))

        rank = {doc_id: i for i, doc_id in enumerate(ordered_ids)}
        inverted = {
            term: tuple(sorted(plist, key=lambda p: rank[p.doc_id]))
            for term, plist in sorted(postings.items())
        }
        ordered_lengths = {doc_id: doc_lengths[doc_id] for doc_id in ordered_ids}
        ngram_index = NGramIndex.from_vocabulary(inverted, ngram_size)

        index = InvertedIndex(inverted, ordered_lengths, ngram_index)
        logger.info(
            "Built inverted index: %d terms across %d documents (avg length %.2f, %d %d-grams)",
            len(index), index.num_docs, index.avg_doc_length, len(ngram_index), ngram_size,
        )
        return index


def build(documents: Iterable[Tuple[Hashable, str]], ngram_size: Optional[int] = None,
          workers: Optional[int] = None, backend: Optional[str] = None) -> InvertedIndex:
    """Build an index with the default settings."""
    return Indexer().build_inverted_index(documents, ngram_size=ngram_size, workers=workers, backend=backend)
