"""
Search engine - owns the current index snapshot

Reindexing builds a complete new index and then swaps the reference.
Queries read the reference once, so a swap never changes the snapshot
an in-flight query is ranking against.
"""

import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from .corpus import load_corpus
from .document_processor import DocumentProcessor
from .search import IndexBuildResult, RankedResult, TermFreqIndex, build_index_with_report, search_query, top_k
from .storage import IndexStorage

logger = logging.getLogger(__name__)


class SearchEngine:
    """Holds one index snapshot and serves queries against it"""

    def __init__(
        self,
        index: Optional[TermFreqIndex] = None,
        processor: Optional[DocumentProcessor] = None,
        storage: Optional[IndexStorage] = None,
        max_workers: Optional[int] = None,
    ):
        self._index: TermFreqIndex = index if index is not None else {}
        self._swap_lock = threading.Lock()
        self.processor = processor or DocumentProcessor()
        self.storage = storage
        self.max_workers = max_workers
        self.indexed_at: Optional[str] = (
            datetime.utcnow().isoformat() + "Z" if index is not None else None
        )

    @property
    def index(self) -> TermFreqIndex:
        """Current snapshot (never mutated; replaced on reindex)"""
        return self._index

    @property
    def document_count(self) -> int:
        return len(self._index)

    def replace_index(self, index: TermFreqIndex):
        """Swap in a new snapshot"""
        with self._swap_lock:
            self._index = index
            self.indexed_at = datetime.utcnow().isoformat() + "Z"
        logger.info(f"Index swapped: {len(index)} documents")

    def reindex(self, corpus_dir: Union[str, Path]) -> IndexBuildResult:
        """
        Rebuild the index from a corpus directory and swap it in

        Nothing from the previous snapshot is reused. If storage is
        configured the new snapshot is persisted before the lock is
        released, so the saved file always matches the latest swap.

        Raises:
            CorpusNotFoundError: If corpus_dir does not exist
        """
        # Serialize writers: two concurrent reindexes must not interleave swaps or saves
        with self._swap_lock:
            documents = load_corpus(corpus_dir, self.processor)
            result = build_index_with_report(documents, max_workers=self.max_workers)
            self._index = result.index
            self.indexed_at = datetime.utcnow().isoformat() + "Z"
            if self.storage is not None:
                self.storage.save(result.index)
        logger.info(f"Reindexed {corpus_dir}: {result.document_count} documents, {len(result.skipped)} skipped")

        return result

    def load(self) -> bool:
        """Load the persisted snapshot if storage has one; returns True if loaded"""
        if self.storage is None or not self.storage.exists():
            return False
        self.replace_index(self.storage.load())
        return True

    def search(self, query: str, k: Optional[int] = None) -> RankedResult:
        """Rank the current snapshot against a query"""
        snapshot = self._index
        return top_k(search_query(snapshot, query), k)
