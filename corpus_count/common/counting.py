"""Token and n-gram frequency counting."""
import re
from collections import Counter
from typing import Iterable, List, Mapping, Optional, Tuple

from tqdm import tqdm

from corpus_count.common.ngrams import NGrams, bracket


# Unicode White_Space. Narrower than str.split(), which also breaks on \x1c-\x1f.
WHITESPACE = re.compile(r"[\t\n\v\f\r \x85\xa0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000]+")


def split_tokens(line: str) -> List[str]:
    """Split a line on Unicode whitespace."""
    return [token for token in WHITESPACE.split(line) if token]


def count_tokens(lines: Iterable[str]) -> Counter:
    """Count whitespace-separated tokens over all lines."""
    counts = Counter()
    for line in lines:
        counts.update(split_tokens(line))
    return counts


def count_ngrams(
    ranked_tokens: Iterable[Tuple[str, int]],
    min_n: int,
    max_n: int,
    use_brackets: bool = True,
    show_progress: bool = False,
    total: Optional[int] = None
) -> Counter:
    """
    Count character n-grams of counted tokens.

    Every n-gram extracted from a token is credited with the token's
    count, so a token seen k times adds k for each of its n-grams.

    Args:
        ranked_tokens: (token, count) pairs
        min_n: Minimum n-gram length
        max_n: Maximum n-gram length
        use_brackets: Wrap tokens in '<' and '>' before extraction
        show_progress: Show progress bar
        total: Number of tokens (for progress bar)
    """
    counts = Counter()

    iterator = tqdm(ranked_tokens, total=total, desc="Counting n-grams") if show_progress else ranked_tokens
    for token, count in iterator:
        if use_brackets:
            token = bracket(token)
        for ngram in NGrams(token, min_n, max_n):
            counts[ngram] += count

    return counts


def counted_into_sorted(counts: Mapping[str, int], min_count: Optional[int] = None) -> List[Tuple[str, int]]:
    """
    Rank counted items by descending count, then ascending string.

    Items with a count below `min_count` are dropped first.
    """
    items = counts.items()
    if min_count is not None:
        items = [(item, count) for item, count in items if count >= min_count]
    return sorted(items, key=lambda pair: (-pair[1], pair[0]))
