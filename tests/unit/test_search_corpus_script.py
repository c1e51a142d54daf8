"""Unit tests for scripts/search_corpus.py"""

import importlib.util
import re
from pathlib import Path

import pytest

SCRIPT_PATH = Path(__file__).parent.parent.parent / "scripts" / "search_corpus.py"


def result_lines(out):
    """Ranked result lines ("  1. 0.123456  doc_id"), ignoring log output"""
    return [line for line in out.splitlines() if re.match(r"\s*\d+\. ", line)]


@pytest.fixture(scope="module")
def script():
    spec = importlib.util.spec_from_file_location("search_corpus", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_index_and_query(script, corpus_dir, capsys):
    exit_code = script.main([str(corpus_dir), "array primitives", "--top-k", "2"])

    captured = capsys.readouterr()
    assert exit_code == 0
    lines = result_lines(captured.out)
    assert len(lines) == 2
    assert lines[0].endswith("gl4/glDrawArrays.xhtml")
    assert "Skipped: broken.xhtml" in captured.err


def test_save_then_query_saved_index(script, corpus_dir, tmp_path, capsys):
    index_file = tmp_path / "index.json"
    assert script.main([str(corpus_dir), "--save", str(index_file)]) == 0
    assert index_file.is_file()
    capsys.readouterr()

    assert script.main(["--index", str(index_file), "notes"]) == 0
    out = capsys.readouterr().out
    assert result_lines(out)[0].endswith("notes.txt")


def test_missing_corpus(script, tmp_path, capsys):
    assert script.main([str(tmp_path / "missing"), "query"]) == 1
    assert "not found" in capsys.readouterr().err


def test_requires_corpus_or_index(script):
    with pytest.raises(SystemExit):
        script.main([])


@pytest.mark.parametrize("value", ["0", "-3", "two"])
def test_top_k_must_be_positive(script, corpus_dir, value, capsys):
    with pytest.raises(SystemExit) as exc_info:
        script.main([str(corpus_dir), "buffer", "--top-k", value])
    assert exc_info.value.code == 2
    assert "--top-k" in capsys.readouterr().err


def test_workers_must_be_positive(script, corpus_dir):
    with pytest.raises(SystemExit):
        script.main([str(corpus_dir), "buffer", "--workers", "0"])
