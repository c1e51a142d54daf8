#!/usr/bin/env python3
"""
Index a document directory (or load a saved index) and run one query.

Usage:
    python scripts/search_corpus.py docs.gl/gl4 "bind buffer" --top-k 10
    python scripts/search_corpus.py docs.gl/gl4 --save index.json
    python scripts/search_corpus.py --index index.json "bind buffer"
"""

import argparse
import logging
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from docsearch.corpus import CorpusNotFoundError
from docsearch.engine import SearchEngine
from docsearch.storage import IndexStorage


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1"""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="TF-IDF search over a document directory")
    parser.add_argument("corpus_dir", nargs="?", help="Directory of documents to index")
    parser.add_argument("query", nargs="?", default=None, help="Query text")
    parser.add_argument("--index", help="Load a saved index instead of indexing corpus_dir")
    parser.add_argument("--save", help="Write the built index to this JSON file")
    parser.add_argument("--top-k", type=positive_int, default=10, help="Results to print (default: 10)")
    parser.add_argument("--workers", type=positive_int, default=4, help="Indexing threads (default: 4)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    # With --index the only positional is the query
    if args.index and args.corpus_dir and args.query is None:
        args.query, args.corpus_dir = args.corpus_dir, None
    if not args.index and not args.corpus_dir:
        parser.error("corpus_dir is required unless --index is given")
    return args


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    engine = SearchEngine(max_workers=args.workers)

    if args.index:
        engine.replace_index(IndexStorage(args.index).load())
    else:
        try:
            result = engine.reindex(args.corpus_dir)
        except CorpusNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        for doc_id in result.skipped:
            print(f"Skipped: {doc_id}", file=sys.stderr)

    if args.save:
        IndexStorage(args.save).save(engine.index)

    if args.query is None:
        return 0

    for rank, (doc_id, score) in enumerate(engine.search(args.query, args.top_k), start=1):
        print(f"{rank:3d}. {score:.6f}  {doc_id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
