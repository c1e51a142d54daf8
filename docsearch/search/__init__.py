"""
TF-IDF ranking engine for document search.

Components:
- tokenizer: Lexer turning raw text into normalized terms
- index_builder: Per-document term frequency tables and the corpus index
- scorer: tf and idf functions
- ranker: Query ranking over an index snapshot

The index is a plain dict snapshot {doc_id: {term: count}}:
- Built once per corpus scan, never mutated afterwards
- Reindexing builds a new snapshot instead of patching the old one
- Safe to share between concurrent queries
"""

from .tokenizer import Lexer, tokenize
from .index_builder import (
    IndexBuildResult,
    TermFreq,
    TermFreqIndex,
    build_index,
    build_index_with_report,
    build_term_frequencies,
)
from .scorer import document_frequency, idf, tf
from .ranker import RankedResult, search_query, top_k

__all__ = [
    "Lexer",
    "tokenize",
    "TermFreq",
    "TermFreqIndex",
    "IndexBuildResult",
    "build_term_frequencies",
    "build_index",
    "build_index_with_report",
    "tf",
    "idf",
    "document_frequency",
    "RankedResult",
    "search_query",
    "top_k",
]
