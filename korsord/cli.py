"""Command-line interface: lay out a word list and write the puzzle as JSON."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from .core.exceptions import KorsordError
from .engine.autoplacer import STRATEGIES, AutoPlaceConfig
from .engine.builder import CrosswordBuilder
from .io.serialization import words_from_jsonable
from .utils.logger import configure_logging, get_logger
from .utils.pretty import print_layout_stats

LOGGER = get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_SOLUTION = 2


def load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise KorsordError(f"Cannot read {path}: {exc}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Lay out crossword answers on a square grid",
    )
    parser.add_argument(
        "words",
        type=Path,
        help="JSON file with [{id, answer, clue}] entries (or {\"words\": [...]})",
    )
    parser.add_argument("--grid-size", type=int, default=15, help="Grid side length in cells")
    parser.add_argument(
        "--grid",
        type=Path,
        help="JSON cell list of an existing puzzle to continue from",
    )
    parser.add_argument(
        "--strategy",
        type=str,
        choices=list(STRATEGIES),
        default="backtracking",
        help="Layout strategy",
    )
    parser.add_argument(
        "--max-nodes",
        type=int,
        default=10_000,
        help="Search node budget for the backtracking strategy (0 disables)",
    )
    parser.add_argument(
        "--time-limit",
        type=float,
        default=None,
        help="Wall-clock budget in seconds (exact strategy defaults to 10)",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Print the grid and layout stats to stderr",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    if args.grid_size < 1:
        parser.error("--grid-size must be positive")

    config = AutoPlaceConfig(
        strategy=args.strategy,
        max_nodes=args.max_nodes or None,
        time_limit_seconds=args.time_limit,
    )
    if args.time_limit is not None:
        config.exact_time_limit_seconds = args.time_limit

    try:
        words = words_from_jsonable(load_json(args.words))
        initial_cells = load_json(args.grid) if args.grid else None
        if initial_cells is not None and not isinstance(initial_cells, list):
            raise KorsordError(f"{args.grid} must hold a JSON list of cells")
        builder = CrosswordBuilder(
            words,
            grid_size=args.grid_size,
            initial_cells=initial_cells,
            config=config,
        )
        result = builder.auto_place()
    except KorsordError as exc:
        LOGGER.error("%s", exc)
        return EXIT_ERROR

    if args.pretty:
        print_layout_stats(result, words, stream=sys.stderr)

    payload: Dict[str, Any] = {
        "ok": result.ok,
        "reason": result.reason.value if result.reason else None,
        "gridSize": args.grid_size,
        "grid": builder.export_cells(),
        "clues": builder.export_clues(),
        "unplaced": result.unplaced,
    }

    output_text = json.dumps(payload, ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)
    return EXIT_OK if result.ok else EXIT_NO_SOLUTION
