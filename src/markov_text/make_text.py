"""Command-line tool to generate Markov text from a file or URL.

Usage:
    markov-text file <path> [--order 2] [--max-words 50]
    markov-text url <url> [--seed 7] [--count 3]
"""

import argparse
import logging
import random
import sys
from typing import List, Optional

from .chain import SUPPORTED_ORDERS
from .generator import MarkovGenerator
from .shared.config_validator import ConfigLoader, ConfigValidationError
from .shared.utils import log_event, setup_logging
from .util.corpus_fetcher import (
    SOURCE_METHODS,
    CorpusFetchError,
    CorpusReadError,
    load_corpus,
)

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="markov-text",
        description="Generate random text from a Markov chain built over a corpus",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Order-1 chain over a local file
  %(prog)s file eggs.txt

  # Order-2 chain over a web page, 40 words, reproducible
  %(prog)s url https://example.com/story.txt --order 2 --max-words 40 --seed 7

Environment:
  MARKOV_ORDER, MARKOV_MAX_WORDS, MARKOV_SEED, MARKOV_FETCH_TIMEOUT,
  MARKOV_USER_AGENT, MARKOV_FETCH_MAX_BYTES, MARKOV_FETCH_ALLOW_REDIRECTS,
  MARKOV_EVENT_LOG, LOG_LEVEL
        """,
    )
    parser.add_argument("method", choices=SOURCE_METHODS, help="Corpus source type")
    parser.add_argument("source", help="Path of the corpus file or URL to fetch")
    parser.add_argument(
        "--order",
        type=int,
        choices=SUPPORTED_ORDERS,
        help="Words per chain state (default: 1, or MARKOV_ORDER)",
    )
    parser.add_argument(
        "--max-words",
        type=int,
        help="Maximum words per generated text (default: 100, or MARKOV_MAX_WORDS)",
    )
    parser.add_argument("--seed", type=int, help="Random seed for reproducible output")
    parser.add_argument(
        "--count",
        type=_positive_int,
        default=1,
        help="Number of texts to generate from the same chain (default: 1)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    loader = ConfigLoader(strict=True)
    try:
        config = loader.load_from_env()
        config = loader.apply_overrides(
            config, order=args.order, max_words=args.max_words, seed=args.seed
        )
    except ConfigValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    setup_logging(logging.DEBUG if args.verbose else config.log_level)

    is_valid, errors = loader.validate_config(config)
    if not is_valid:
        for error in errors:
            print(f"Invalid configuration: {error}", file=sys.stderr)
        return 1

    try:
        text = load_corpus(args.method, args.source, config.fetch)
    except CorpusReadError as e:
        print(f"Cannot read file: {e.source}: {e.reason}", file=sys.stderr)
        return 1
    except CorpusFetchError as e:
        print(f"Cannot read URL: {e.source}: {e.reason}", file=sys.stderr)
        return 1

    settings = config.generator
    generator = MarkovGenerator(
        text, order=settings.order, rng=random.Random(settings.seed)
    )
    if not len(generator.chain):
        logger.warning(
            f"Corpus has {len(generator.words)} word(s); "
            f"too short for an order-{settings.order} chain"
        )

    for _ in range(args.count):
        output = generator.generate(settings.max_words)
        print(output)
        if config.event_log_file:
            log_event(
                config.event_log_file,
                "text_generated",
                {
                    "method": args.method,
                    "source": args.source,
                    "order": settings.order,
                    "max_words": settings.max_words,
                    "seed": settings.seed,
                    "corpus_words": len(generator.words),
                    "states": len(generator.chain),
                    "words_emitted": len(output.split()),
                },
            )

    return 0


if __name__ == "__main__":
    sys.exit(main())
