"""Character n-gram extraction for subword vocabularies."""
from typing import Iterator, Tuple


BOW = "<"
EOW = ">"


def _check_range(min_n: int, max_n: int):
    if min_n < 1:
        raise ValueError("The minimum n-gram length cannot be zero.")
    if min_n > max_n:
        raise ValueError("The maximum length should be equal to or greater than the minimum length.")


def bracket(token: str) -> str:
    """Wrap a token in word boundary markers."""
    return f"{BOW}{token}{EOW}"


def ngram_count(length: int, min_n: int, max_n: int) -> int:
    """
    Number of n-grams of length [min_n, max_n] in a string of `length` characters.

    Equal to the sum over every start position i of
    max(0, min(max_n, length - i) - min_n + 1).
    """
    if length < min_n:
        return 0

    # Suffixes shorter than max_n contribute 1, 2, ... n-grams.
    short = min(length, max_n) - min_n + 1
    total = short * (short + 1) // 2

    # Every other suffix contributes the full range.
    if length > max_n:
        total += (length - max_n) * (max_n - min_n + 1)

    return total


class NGrams:
    """
    Iterator over the character n-grams of a string.

    For every start position the n-grams are produced longest first,
    from min(max_n, remaining characters) down to min_n, before moving
    on to the next start position. Iteration stops at the first start
    position with fewer than min_n characters left.

    Python strings are indexed by code point, so the cursor is a plain
    (start, length) pair and a slice never splits a character. Each
    n-gram is an owned copy of the slice; use `ngram_spans` for the
    offsets alone.

    An instance is consumed once. Create a new one to iterate again.
    """

    def __init__(self, string: str, min_n: int, max_n: int):
        _check_range(min_n, max_n)

        self.string = string
        self.min_n = min_n
        self.max_n = max_n

        self._start = 0
        self._ngram_len = min(max_n, len(string))

    def __iter__(self):
        return self

    def __next__(self) -> str:
        start, end = self._advance()
        return self.string[start:end]

    def __length_hint__(self) -> int:
        remaining = len(self.string) - self._start
        if remaining < self.min_n:
            return 0
        current = max(0, self._ngram_len - self.min_n + 1)
        return current + ngram_count(remaining - 1, self.min_n, self.max_n)

    def _advance(self) -> Tuple[int, int]:
        # N-grams for the current start position are exhausted, drop
        # the leading character.
        if self._ngram_len < self.min_n:
            self._start += 1

            remaining = len(self.string) - self._start
            if remaining < self.min_n:
                # Keep the cursor pinned so that further calls stay exhausted.
                self._start = len(self.string)
                self._ngram_len = 0
                raise StopIteration

            self._ngram_len = min(self.max_n, remaining)

        span = (self._start, self._start + self._ngram_len)
        self._ngram_len -= 1
        return span


def ngram_spans(string: str, min_n: int, max_n: int) -> Iterator[Tuple[int, int]]:
    """Yield (start, end) character offsets of each n-gram, in `NGrams` order."""
    ngrams = NGrams(string, min_n, max_n)
    while True:
        try:
            yield ngrams._advance()
        except StopIteration:
            return
