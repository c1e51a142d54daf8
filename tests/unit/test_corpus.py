"""Unit tests for corpus enumeration"""

import pytest

from docsearch.corpus import CorpusNotFoundError, iter_documents, load_corpus
from docsearch.search import build_index_with_report


class TestIterDocuments:
    """Test document discovery"""

    def test_recursive_sorted(self, corpus_dir):
        """Test all files are found in sorted order"""
        names = [path.relative_to(corpus_dir).as_posix() for path in iter_documents(corpus_dir)]
        assert names == sorted(names)
        assert "gl4/glBindBuffer.xhtml" in names
        assert "image.png" in names

    def test_extension_filter(self, corpus_dir):
        """Test only accepted suffixes are yielded"""
        paths = list(iter_documents(corpus_dir, extensions=[".XHTML"]))
        assert {path.name for path in paths} == {
            "glBindBuffer.xhtml", "glDrawArrays.xhtml", "broken.xhtml",
        }

    def test_non_recursive(self, corpus_dir):
        """Test subdirectories are skipped when not recursive"""
        names = {path.name for path in iter_documents(corpus_dir, recursive=False)}
        assert names == {"notes.txt", "broken.xhtml", "image.png"}

    def test_missing_root(self, tmp_path):
        """Test a missing directory raises CorpusNotFoundError"""
        with pytest.raises(CorpusNotFoundError):
            list(iter_documents(tmp_path / "nope"))

    def test_root_is_file(self, tmp_path):
        """Test a file root is rejected"""
        file_root = tmp_path / "file.txt"
        file_root.write_text("x")
        with pytest.raises(CorpusNotFoundError):
            list(iter_documents(file_root))

    def test_corpus_not_found_is_file_not_found(self):
        assert issubclass(CorpusNotFoundError, FileNotFoundError)


class TestLoadCorpus:
    """Test (doc_id, loader) pairs"""

    def test_relative_posix_ids(self, corpus_dir):
        """Test identifiers are relative paths of supported files"""
        doc_ids = [doc_id for doc_id, _ in load_corpus(corpus_dir)]
        assert doc_ids == [
            "broken.xhtml",
            "gl4/glBindBuffer.xhtml",
            "gl4/glDrawArrays.xhtml",
            "notes.txt",
        ]

    def test_loaders_are_lazy(self, corpus_dir):
        """Test files are read when the loader is called"""
        documents = dict(load_corpus(corpus_dir))
        (corpus_dir / "notes.txt").write_text("changed", encoding="utf-8")
        assert documents["notes.txt"]() == "changed"

    def test_build_skips_broken_document(self, corpus_dir):
        """Test a malformed document is left out of the index"""
        result = build_index_with_report(load_corpus(corpus_dir))

        assert result.skipped == ["broken.xhtml"]
        assert set(result.index) == {
            "gl4/glBindBuffer.xhtml", "gl4/glDrawArrays.xhtml", "notes.txt",
        }
        assert result.index["gl4/glBindBuffer.xhtml"]["BUFFER"] == 2
        assert result.index["notes.txt"] == {
            "BUFFER": 1, "NOTES": 1, ":": 1, "BIND": 1, "BEFORE": 1, "DRAW": 1,
        }

    def test_build_skips_deleted_document(self, corpus_dir):
        """Test a file removed after enumeration is skipped, not fatal"""
        documents = load_corpus(corpus_dir)
        (corpus_dir / "notes.txt").unlink()

        result = build_index_with_report(documents)
        assert "notes.txt" in result.skipped
        assert "gl4/glDrawArrays.xhtml" in result.index
