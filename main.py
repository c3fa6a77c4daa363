"""CLI entrypoint for the hex torus backtracking search."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from hextorus.core.exceptions import HexTorusError
from hextorus.engine.search import BacktrackingSearch, SearchConfig, SearchResult
from hextorus.engine.validator import TorusValidator
from hextorus.utils.bits import to_list
from hextorus.utils.logger import configure_logging, get_logger


LOGGER = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Search for a hex torus holding every 7-hex pattern exactly once",
    )
    parser.add_argument("--width", type=int, default=32, help="Torus width in hexagons")
    parser.add_argument("--height", type=int, default=4, help="Torus height in hexagons (even)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--target",
        type=int,
        default=128,
        help="Stop once this many distinct codes are placed (default 128)",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Give up after this many search steps (default: unbounded)",
    )
    parser.add_argument(
        "--progress-interval",
        type=int,
        default=10_000_000,
        help="Log the torus every N steps",
    )
    parser.add_argument(
        "--report-threshold",
        type=int,
        default=50,
        help="Only log best-so-far tori above this many distinct codes",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def build_payload(result: SearchResult) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "outcome": result.outcome.value,
        "seed": result.seed,
        "steps": result.steps,
        "best": result.best,
        "used_codes": to_list(result.used_codes),
        "grid": result.grid.to_jsonable() if result.grid else None,
        "best_grid": result.best_grid.to_jsonable() if result.best_grid else None,
    }
    if result.grid is not None:
        validation = TorusValidator().validate(result.grid)
        payload["validation"] = validation.messages
    return payload


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    try:
        config = SearchConfig(
            width=args.width,
            height=args.height,
            seed=args.seed,
            target=args.target,
            progress_interval=args.progress_interval,
            report_threshold=args.report_threshold,
            max_steps=args.max_steps,
        )
        result = BacktrackingSearch(config).run()
    except HexTorusError as exc:
        LOGGER.error("Search failed: %s", exc)
        return 1

    output_text = json.dumps(build_payload(result), indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
