"""Count tokens and character n-grams in a corpus."""
import argparse
import logging
import sys
from contextlib import ExitStack
from dataclasses import dataclass
from typing import Iterable, Optional, TextIO

from corpus_count.common.counting import count_ngrams, count_tokens, counted_into_sorted
from corpus_count.common.data_loader import count_lines, iter_lines, open_corpus, open_counts, write_counts
from corpus_count.common.logging_utils import setup_logging

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Invalid counting configuration."""


@dataclass
class CountConfig:
    corpus: Optional[str] = None
    token_counts: Optional[str] = None
    ngram_counts: Optional[str] = None
    token_min: int = 1
    ngram_min: int = 1
    min_n: int = 3
    max_n: int = 6
    filter_first: bool = False
    bracket: bool = True

    def validate(self):
        if self.min_n == 0:
            raise ConfigError("The minimum n-gram length cannot be zero.")
        if self.min_n > self.max_n:
            raise ConfigError("The maximum length should be equal to or greater than the minimum length.")


def count_streams(
    lines: Iterable[str],
    token_out: TextIO,
    ngram_out: Optional[TextIO],
    config: CountConfig,
    show_progress: bool = False
) -> dict:
    """
    Count tokens, and n-grams when `ngram_out` is given, writing ranked counts.

    Without n-gram output, `token_min` always filters the token counts.
    With n-gram output, `token_min` only applies when `filter_first` is
    set, and then to both the token counts and the n-gram inputs. When
    it is not set, every token is written and expanded regardless of
    `token_min`.

    Returns:
        Summary statistics of the run
    """
    token_counts = count_tokens(lines)
    stats = {
        "tokens": sum(token_counts.values()),
        "distinct_tokens": len(token_counts),
    }
    logger.info(f"Counted {stats['tokens']:,} tokens ({stats['distinct_tokens']:,} distinct)")

    if ngram_out is None:
        ranked_tokens = counted_into_sorted(token_counts, config.token_min)
        stats["tokens_written"] = write_counts(token_out, ranked_tokens)
        logger.info(f"Wrote {stats['tokens_written']:,} token counts")
        return stats

    token_min = config.token_min if config.filter_first else None
    ranked_tokens = counted_into_sorted(token_counts, token_min)

    stats["tokens_written"] = write_counts(token_out, ranked_tokens)
    logger.info(f"Wrote {stats['tokens_written']:,} token counts")

    ngram_counts = count_ngrams(
        ranked_tokens,
        config.min_n,
        config.max_n,
        use_brackets=config.bracket,
        show_progress=show_progress,
        total=len(ranked_tokens)
    )
    stats["distinct_ngrams"] = len(ngram_counts)
    logger.info(f"Expanded {len(ranked_tokens):,} tokens into n-grams of length {config.min_n}-{config.max_n}")

    ranked_ngrams = counted_into_sorted(ngram_counts, config.ngram_min)
    stats["ngrams_written"] = write_counts(ngram_out, ranked_ngrams)
    logger.info(f"Wrote {stats['ngrams_written']:,} of {stats['distinct_ngrams']:,} distinct n-gram counts")

    return stats


def count_corpus(config: CountConfig, show_progress: bool = False) -> dict:
    """
    Run token and n-gram counting for a corpus.

    Args:
        config: Validated configuration
        show_progress: Show progress bars

    Returns:
        Summary statistics of the run
    """
    config.validate()
    logger.debug(f"Configuration: {config}")

    total = count_lines(config.corpus) if show_progress else None

    with ExitStack() as stack:
        corpus = stack.enter_context(open_corpus(config.corpus))
        token_out = stack.enter_context(open_counts(config.token_counts))
        ngram_out = None
        if config.ngram_counts is not None:
            ngram_out = stack.enter_context(open_counts(config.ngram_counts))

        return count_streams(
            iter_lines(corpus, show_progress=show_progress, total=total),
            token_out,
            ngram_out,
            config,
            show_progress=show_progress
        )


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid count: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"count cannot be negative: {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="corpus-count",
        description="Count tokens and character n-grams in a corpus",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  uv run corpus-count -c corpus.txt -t tokens.tsv
  uv run corpus-count -c corpus.txt -t tokens.tsv -n ngrams.tsv --min_n 3 --max_n 6
  cat corpus.txt | uv run corpus-count -n ngrams.tsv --token_min 5 --filter_first
        """
    )
    parser.add_argument("-c", "--corpus", default=None,
                       help="Corpus file (default: stdin)")
    parser.add_argument("-t", "--token_counts", default=None,
                       help="Token count file (default: stdout)")
    parser.add_argument("-n", "--ngram_counts", default=None,
                       help="File for n-gram counts (n-grams are only counted when given)")
    parser.add_argument("--token_min", type=non_negative_int, default=1,
                       help="Token min count (default: 1)")
    parser.add_argument("--ngram_min", type=non_negative_int, default=1,
                       help="N-gram min count (default: 1)")
    parser.add_argument("--min_n", type=non_negative_int, default=3,
                       help="Minimal n-gram length to be used (default: 3)")
    parser.add_argument("--max_n", type=non_negative_int, default=6,
                       help="Maximum n-gram length to be used (default: 6)")
    parser.add_argument("--filter_first", action="store_true",
                       help="Filter tokens before counting n-grams")
    parser.add_argument("--no_bracket", action="store_false", dest="bracket",
                       help="Do not wrap tokens in '<' and '>' before counting n-grams")
    parser.add_argument("--progress", action="store_true",
                       help="Show progress bars on stderr")
    parser.add_argument("-v", "--verbose", action="store_true",
                       help="Enable debug logging")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    config = CountConfig(
        corpus=args.corpus,
        token_counts=args.token_counts,
        ngram_counts=args.ngram_counts,
        token_min=args.token_min,
        ngram_min=args.ngram_min,
        min_n=args.min_n,
        max_n=args.max_n,
        filter_first=args.filter_first,
        bracket=args.bracket
    )
    try:
        config.validate()
    except ConfigError as e:
        parser.error(str(e))

    try:
        count_corpus(config, show_progress=args.progress)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
