"""Corpus reading and count file writing utilities."""
import io
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Optional, TextIO, Tuple

from tqdm import tqdm


@contextmanager
def open_corpus(file_path: str | Path | None = None) -> Iterator[TextIO]:
    """
    Open a UTF-8 corpus for reading.

    Args:
        file_path: Corpus file, or None for standard input
    """
    if file_path is None:
        stream = io.TextIOWrapper(sys.stdin.buffer, encoding='utf-8')
        try:
            yield stream
        finally:
            stream.detach()
    else:
        with open(file_path, 'r', encoding='utf-8') as f:
            yield f


@contextmanager
def open_counts(file_path: str | Path | None = None) -> Iterator[TextIO]:
    """
    Open a count file for writing, UTF-8 with '\\n' line endings.

    Args:
        file_path: Output file, or None for standard output
    """
    if file_path is None:
        stream = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8', newline='\n')
        try:
            yield stream
        finally:
            stream.detach()
    else:
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, 'w', encoding='utf-8', newline='\n') as f:
            yield f


def iter_lines(stream: TextIO, show_progress: bool = False, total: Optional[int] = None) -> Iterator[str]:
    """
    Iterate over corpus lines.

    Args:
        stream: Open corpus
        show_progress: Show progress bar
        total: Number of lines (for progress bar)
    """
    iterator = tqdm(stream, total=total, desc="Counting tokens", unit=" lines") if show_progress else stream
    for line in iterator:
        yield line


def write_counts(stream: TextIO, ranked: Iterable[Tuple[str, int]]) -> int:
    """
    Write (string, count) pairs as tab-separated lines.

    Returns:
        Number of lines written
    """
    written = 0
    for item, count in ranked:
        stream.write(f"{item}\t{count}\n")
        written += 1
    return written


def count_lines(file_path: Optional[str | Path]) -> Optional[int]:
    """Count lines in a file, None for standard input."""
    if file_path is None:
        return None
    with open(file_path, 'r', encoding='utf-8', errors='replace') as f:
        return sum(1 for _ in f)
