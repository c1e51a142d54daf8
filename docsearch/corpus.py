"""Corpus enumeration - discover documents under a directory"""

import logging
from functools import partial
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Tuple, Union

from .document_processor import DocumentProcessor

logger = logging.getLogger(__name__)


class CorpusNotFoundError(FileNotFoundError):
    """Corpus root does not exist or is not a directory"""


def iter_documents(
    root: Union[str, Path],
    extensions: Optional[Iterable[str]] = None,
    recursive: bool = True,
) -> Iterator[Path]:
    """
    Yield document paths under a corpus root, sorted.

    Args:
        root: Corpus directory
        extensions: Accepted suffixes (".xhtml", ".txt"...), None = any file
        recursive: Descend into subdirectories

    Raises:
        CorpusNotFoundError: If root is missing or not a directory
    """
    root = Path(root)
    if not root.is_dir():
        raise CorpusNotFoundError(f"Corpus directory not found: {root}")

    allowed = {ext.lower() for ext in extensions} if extensions is not None else None
    pattern = "**/*" if recursive else "*"

    for path in sorted(root.glob(pattern)):
        if not path.is_file():
            continue
        if allowed is not None and path.suffix.lower() not in allowed:
            logger.debug(f"Ignoring {path}: unsupported extension")
            continue
        yield path


def load_corpus(
    root: Union[str, Path],
    processor: Optional[DocumentProcessor] = None,
    recursive: bool = True,
) -> List[Tuple[str, Callable[[], str]]]:
    """
    List (doc_id, loader) pairs for every supported document under root.

    doc_id is the POSIX path relative to root ("gl4/glBindBuffer.xhtml").
    Loaders read and extract text lazily, so read failures surface during
    the index build where they are handled per document.
    """
    processor = processor or DocumentProcessor()
    root = Path(root)

    documents = [
        (path.relative_to(root).as_posix(), partial(processor.read_document, path))
        for path in iter_documents(root, processor.supported_extensions, recursive=recursive)
    ]
    logger.info(f"Found {len(documents)} documents under {root}")
    return documents
