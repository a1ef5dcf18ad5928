"""
Text Search Core

An in-memory full-text search engine with an immutable inverted index,
n-gram pruned fuzzy matching and TF-IDF / BM25 ranking.

Main components:
- TextSearchEngine: Orchestrates tokenization, lookup, fuzzy matching and ranking
- Tokenizer: Text normalization into terms
- Indexer: Inverted index construction
- InvertedIndex: Immutable index snapshot with corpus statistics
- AutoCorrect: Fuzzy term matching using Levenshtein distance
- Ranker: Document scoring and top-k selection
"""

import logging

from .autocorrect import AutoCorrect, FuzzyMatch, fuzzy_match
from .config import Config
from .exceptions import InvalidParameter, SearchEngineError
from .indexer import Indexer, InvertedIndex, Posting, build
from .ngrams import NGramIndex
from .ranker import Ranker, SearchResult, score
from .search_engine import QueryTerm, TextSearchEngine, search
from .tokenizer import Tokenizer, tokenize
from .utils import setup_logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"

__all__ = [
    "TextSearchEngine",
    "QueryTerm",
    "Tokenizer",
    "Indexer",
    "InvertedIndex",
    "Posting",
    "NGramIndex",
    "Ranker",
    "SearchResult",
    "AutoCorrect",
    "FuzzyMatch",
    "Config",
    "SearchEngineError",
    "InvalidParameter",
    "tokenize",
    "build",
    "fuzzy_match",
    "score",
    "search",
    "setup_logging",
]
