"""
Local JSON storage for index snapshots

File layout:
{
    "version": 1,
    "documents": {
        "gl4/glBindBuffer.xhtml": {"GLBINDBUFFER": 4, "TARGET": 7, ...},
        ...
    }
}

Writes go to a temporary file first and replace the target in one step,
so readers never see a half-written index.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from .search import TermFreqIndex

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


class IndexFormatError(ValueError):
    """Stored index file is not a valid snapshot"""


class IndexStorage:
    """JSON file handler for index snapshots"""

    def __init__(self, path: Union[str, Path]):
        """
        Args:
            path: Index file location (parent directory is created on save)
        """
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def save(self, index: TermFreqIndex):
        """Write the snapshot atomically"""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"version": FORMAT_VERSION, "documents": index}

        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.info(f"Saved index ({len(index)} documents) to {self.path}")

    def load(self) -> TermFreqIndex:
        """
        Read a snapshot from disk

        Raises:
            FileNotFoundError: If the file does not exist
            IndexFormatError: If the content is not a valid snapshot
        """
        with open(self.path, "r", encoding="utf-8") as f:
            try:
                payload = json.load(f)
            except json.JSONDecodeError as e:
                raise IndexFormatError(f"Index file {self.path} is not valid JSON: {e}") from e

        if not isinstance(payload, dict) or payload.get("version") != FORMAT_VERSION:
            raise IndexFormatError(
                f"Index file {self.path} has unsupported format "
                f"(expected version {FORMAT_VERSION})"
            )

        documents = payload.get("documents")
        if not isinstance(documents, dict):
            raise IndexFormatError(f"Index file {self.path} has no 'documents' mapping")

        index: TermFreqIndex = {}
        for doc_id, table in documents.items():
            if not isinstance(table, dict) or not all(
                isinstance(count, int) and not isinstance(count, bool) and count > 0
                for count in table.values()
            ):
                raise IndexFormatError(f"Invalid term frequencies for document {doc_id}")
            index[doc_id] = dict(table)

        logger.info(f"Loaded index ({len(index)} documents) from {self.path}")
        return index
