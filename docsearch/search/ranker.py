"""
Query ranking over a term frequency index.

Every indexed document gets a score (zero included), results are sorted by
descending score, ties broken by ascending doc_id.
"""

import logging
from typing import Dict, List, Optional, Tuple

from .index_builder import TermFreqIndex
from .scorer import idf, tf
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

RankedResult = List[Tuple[str, float]]


def search_query(tf_index: TermFreqIndex, query: str) -> RankedResult:
    """
    Rank all documents in the index against a free-text query.

    Repeated query terms count repeatedly ("cat cat" weighs CAT twice).

    Args:
        tf_index: Index snapshot {doc_id: {term: count}}
        query: Raw query text

    Returns:
        [(doc_id, score), ...] covering every indexed document,
        score descending, doc_id ascending on ties

    Example:
        >>> index = {"doc1": {"CAT": 1, "SAT": 1}, "doc2": {"DOG": 1}}
        >>> search_query(index, "cat")
        [('doc1', 0.1505149978319906), ('doc2', 0.0)]
    """
    if not tf_index:
        return []

    tokens = tokenize(query)

    # idf depends only on the term and the index, not on the document
    idf_cache: Dict[str, float] = {token: idf(token, tf_index) for token in set(tokens)}

    result: RankedResult = []
    for doc_id, tf_table in tf_index.items():
        rank = 0.0
        for token in tokens:
            rank += tf(token, tf_table) * idf_cache[token]
        result.append((doc_id, rank))

    result.sort(key=lambda item: (-item[1], item[0]))

    logger.debug(f"Ranked {len(result)} documents for {len(tokens)} query tokens")
    return result


def top_k(results: RankedResult, k: Optional[int] = None) -> RankedResult:
    """First k ranked results (all of them when k is None)"""
    if k is None:
        return list(results)
    return results[:k]
