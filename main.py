"""CLI entrypoint for the word-connect crossword layout engine."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from crossword_layout.core.exceptions import LayoutError
from crossword_layout.data.normalization import normalize_words
from crossword_layout.engine.greedy import build_greedy_layout
from crossword_layout.engine.layout_store import DEFAULT_STORE_DIR, LayoutStore
from crossword_layout.engine.planner import GenerationConfig, GenerationResult, LayoutGenerator
from crossword_layout.utils.logger import configure_logging, get_logger
from crossword_layout.utils.pretty import print_layout_summary


LOGGER = get_logger(__name__)


def parse_words_file(path: Path) -> List[str]:
    """Read words from a file, one entry per line. Blank lines and # comments are skipped."""
    entries: List[str] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(line)
    return entries


def build_parser() -> argparse.ArgumentParser:
    defaults = GenerationConfig()
    parser = argparse.ArgumentParser(
        description="Lay out a word list on a crossword grid so that words cross on shared letters",
    )
    parser.add_argument("--columns", type=int, default=defaults.columns, help="Grid width in cells")
    parser.add_argument("--rows", type=int, default=defaults.rows, help="Grid height in cells")
    parser.add_argument("--words", nargs="+", metavar="WORD", help="Words to place")
    parser.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="File with one word per line (# comments and blank lines ignored)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Base seed; omit for a fresh layout on every run",
    )
    parser.add_argument("--max-attempts", type=int, default=defaults.max_attempts)
    parser.add_argument(
        "--min-horizontal-ratio",
        type=int,
        default=defaults.min_horizontal_ratio,
        help="Percentage of horizontal words below which new words are forced horizontal",
    )
    parser.add_argument(
        "--vertical-word-max-length",
        type=int,
        default=defaults.vertical_word_max_length,
        help="Words longer than this are only placed horizontally",
    )
    parser.add_argument(
        "--small-word-max-length",
        type=int,
        default=defaults.small_word_max_length,
        help="Words up to this length may go vertical in the greedy strategy",
    )
    parser.add_argument("--max-overlap-retries", type=int, default=defaults.max_overlap_retries)
    parser.add_argument(
        "--strategy",
        choices=["planner", "greedy"],
        default="planner",
        help="Seeded multi-attempt search (default) or the single-pass greedy layout",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--store-dir",
        type=Path,
        default=None,
        help=f"Save the layout as a JSON document in this directory (e.g. {DEFAULT_STORE_DIR})",
    )
    parser.add_argument("--load", metavar="ID", help="Load a stored layout from --store-dir instead of generating")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument("--pretty", action="store_true", help="Print the grid to stderr")
    return parser


def build_config(args: argparse.Namespace) -> GenerationConfig:
    config = GenerationConfig(
        columns=args.columns,
        rows=args.rows,
        max_attempts=args.max_attempts,
        min_horizontal_ratio=args.min_horizontal_ratio,
        vertical_word_max_length=args.vertical_word_max_length,
        small_word_max_length=args.small_word_max_length,
        max_overlap_retries=args.max_overlap_retries,
    )
    if args.seed is not None:
        return config.with_seed(args.seed)
    if config.force_unique_layout:
        return config.with_fresh_seed()
    return config


def run(args: argparse.Namespace, words: List[str]) -> GenerationResult:
    if args.load:
        return LayoutStore(args.store_dir).load(args.load).result

    config = build_config(args)
    if args.strategy == "greedy":
        result = build_greedy_layout(words, config.columns, config.rows, config.small_word_max_length)
        result.seed = config.seed
    else:
        result = LayoutGenerator(config).generate(words)

    if args.store_dir is not None:
        doc_id = LayoutStore(args.store_dir).save(result)
        LOGGER.info("Stored layout as %s", doc_id)
    return result


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    if args.load and args.store_dir is None:
        parser.error("--load requires --store-dir")
    if not args.load and not (args.words or args.words_file):
        parser.error("provide --words, --words-file or --load")

    entries: List[str] = []
    if args.words:
        entries.extend(args.words)
    if args.words_file:
        entries.extend(parse_words_file(args.words_file))
    words = normalize_words(entries)
    if len(words) != len(entries):
        LOGGER.warning("Dropped %d entries with no letters", len(entries) - len(words))

    try:
        result = run(args, words)
    except LayoutError as exc:
        LOGGER.error("%s", exc)
        return 1

    if args.pretty:
        print_layout_summary(result, stream=sys.stderr)

    payload: Dict[str, Any] = result.to_payload()
    output_text = json.dumps(payload, ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)
    return 0 if result.success else 2


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
