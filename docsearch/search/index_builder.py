"""
Index builder - term frequency tables per document and the corpus index.

Creates an immutable snapshot: {doc_id: {term: count}}.
"""

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from .tokenizer import Lexer

logger = logging.getLogger(__name__)

TermFreq = Dict[str, int]
TermFreqIndex = Dict[str, TermFreq]

# Either the text itself or a zero-argument callable returning it
DocumentSource = Union[str, Callable[[], str]]


@dataclass
class IndexBuildResult:
    """Outcome of a full corpus build"""
    index: TermFreqIndex
    skipped: List[str] = field(default_factory=list)

    @property
    def document_count(self) -> int:
        return len(self.index)


def build_term_frequencies(content: str) -> TermFreq:
    """
    Build the term frequency table of one document.

    Args:
        content: Full document text

    Returns:
        Dict {term: count}; empty for an empty document

    Example:
        >>> build_term_frequencies("the dog sat on the mat")
        {'THE': 2, 'DOG': 1, 'SAT': 1, 'ON': 1, 'MAT': 1}
    """
    term_frequencies = Counter(Lexer(content))
    return dict(term_frequencies)


def _index_one(doc_id: str, source: DocumentSource) -> Tuple[str, Optional[TermFreq]]:
    try:
        content = source() if callable(source) else source
        table = build_term_frequencies(content)
    except Exception as e:
        logger.warning(f"Skipping {doc_id}: {type(e).__name__}: {e}")
        return doc_id, None

    logger.debug(f"Indexed {doc_id}: {len(table)} unique terms, {sum(table.values())} total")
    return doc_id, table


def build_index_with_report(
    documents: Iterable[Tuple[str, DocumentSource]],
    max_workers: Optional[int] = None,
) -> IndexBuildResult:
    """
    Build a fresh index over the whole corpus and report skipped documents.

    Documents are independent: a document whose text cannot be obtained or
    processed is logged and left out, the rest are indexed.

    Args:
        documents: (doc_id, text) or (doc_id, loader) pairs
        max_workers: Thread pool size for per-document tables (None/1 = sequential)

    Returns:
        IndexBuildResult with the new index and the skipped doc_ids
    """
    documents = list(documents)

    if max_workers and max_workers > 1 and len(documents) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            tables = list(executor.map(lambda doc: _index_one(*doc), documents))
    else:
        tables = [_index_one(doc_id, source) for doc_id, source in documents]

    index: TermFreqIndex = {}
    skipped: List[str] = []
    for doc_id, table in tables:
        if table is None:
            skipped.append(doc_id)
            continue
        if doc_id in index:
            logger.warning(f"Duplicate document id {doc_id}, keeping last occurrence")
        index[doc_id] = table

    logger.info(f"Built index: {len(index)} documents, {len(skipped)} skipped")
    return IndexBuildResult(index=index, skipped=skipped)


def build_index(
    documents: Iterable[Tuple[str, DocumentSource]],
    max_workers: Optional[int] = None,
) -> TermFreqIndex:
    """
    Build a fresh index {doc_id: term frequency table} over the whole corpus.

    Example:
        >>> build_index([("doc1", "the cat sat"), ("doc3", "cats and dogs")])
        {'doc1': {'THE': 1, 'CAT': 1, 'SAT': 1}, 'doc3': {'CATS': 1, 'AND': 1, 'DOGS': 1}}
    """
    return build_index_with_report(documents, max_workers=max_workers).index
