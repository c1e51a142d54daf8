"""Unit test fixtures - small corpora and reference indexes"""

import pytest


REFERENCE_DOCUMENTS = [
    ("doc1", "the cat sat"),
    ("doc2", "the dog sat on the mat"),
    ("doc3", "cats and dogs"),
]


@pytest.fixture
def reference_documents():
    """Three-document corpus with hand-computed scores"""
    return list(REFERENCE_DOCUMENTS)


@pytest.fixture
def reference_index():
    """Term frequency index of the reference corpus"""
    return {
        "doc1": {"THE": 1, "CAT": 1, "SAT": 1},
        "doc2": {"THE": 2, "DOG": 1, "SAT": 1, "ON": 1, "MAT": 1},
        "doc3": {"CATS": 1, "AND": 1, "DOGS": 1},
    }


@pytest.fixture
def corpus_dir(tmp_path):
    """
    Corpus directory with mixed formats:

    corpus/
    ├── gl4/glBindBuffer.xhtml
    ├── gl4/glDrawArrays.xhtml
    ├── notes.txt
    ├── broken.xhtml        (malformed XML)
    └── image.png           (unsupported, ignored)
    """
    root = tmp_path / "corpus"
    (root / "gl4").mkdir(parents=True)

    (root / "gl4" / "glBindBuffer.xhtml").write_text(
        '<html xmlns="http://www.w3.org/1999/xhtml">'
        '<body><h1>glBindBuffer</h1>'
        '<p>bind a named buffer object to a buffer <b>target</b></p>'
        '</body></html>',
        encoding="utf-8",
    )
    (root / "gl4" / "glDrawArrays.xhtml").write_text(
        '<html xmlns="http://www.w3.org/1999/xhtml">'
        '<body><h1>glDrawArrays</h1>'
        '<p class="purpose">render primitives from array data</p>'
        '</body></html>',
        encoding="utf-8",
    )
    (root / "notes.txt").write_text("buffer notes: bind before draw", encoding="utf-8")
    (root / "broken.xhtml").write_text("<html><body><p>unclosed", encoding="utf-8")
    (root / "image.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    return root
