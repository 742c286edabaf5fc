"""
Corpus reading and count file writing.
"""

import io
import sys

import pytest

from corpus_count.common.data_loader import count_lines, iter_lines, open_corpus, open_counts, write_counts


def read_counts(path):
    counts = []
    for line in path.read_text(encoding="utf-8").splitlines():
        if line:
            item, count = line.rsplit("\t", 1)
            counts.append((item, int(count)))
    return counts


def test_write_counts_format(tmp_path):
    path = tmp_path / "counts.tsv"
    with open_counts(path) as f:
        written = write_counts(f, [("ab", 3), ("é", 1)])
    assert written == 2
    assert path.read_bytes() == "ab\t3\né\t1\n".encode("utf-8")
    assert read_counts(path) == [("ab", 3), ("é", 1)]


def test_open_counts_creates_parent_dir(tmp_path):
    path = tmp_path / "nested" / "dir" / "counts.tsv"
    with open_counts(path) as f:
        write_counts(f, [("a", 1)])
    assert path.read_text(encoding="utf-8") == "a\t1\n"



def test_open_corpus_from_file(tmp_path):
    path = tmp_path / "corpus.txt"
    path.write_text("one two\nthree\n", encoding="utf-8")
    with open_corpus(path) as f:
        assert list(iter_lines(f)) == ["one two\n", "three\n"]
    assert count_lines(path) == 2


def test_open_corpus_from_stdin(monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO("ä b\n".encode("utf-8"))))
    with open_corpus() as f:
        assert list(iter_lines(f, show_progress=True)) == ["ä b\n"]
    assert count_lines(None) is None


def test_open_corpus_rejects_invalid_utf8(tmp_path):
    path = tmp_path / "corpus.txt"
    path.write_bytes(b"ok \xff\xfe\n")
    with open_corpus(path) as f:
        with pytest.raises(UnicodeDecodeError):
            list(iter_lines(f))


def test_open_corpus_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        with open_corpus(tmp_path / "missing.txt"):
            pass
