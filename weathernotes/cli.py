"""CLI entry point: refresh the weather block of every travel note under a root."""

import argparse
import json
import logging
import sys
from datetime import date, datetime
from pathlib import Path

import yaml
from pydantic import ValidationError

from weathernotes.config.loader import get_config_value, load_config
from weathernotes.pipeline.note_pipeline import NotePipeline
from weathernotes.reporting.formatters import (
    format_summary_json,
    format_summary_text,
)


def _parse_today(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from e


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weathernotes",
        description="Add forecast or historic temperatures to travel notes",
    )
    parser.add_argument(
        "root", nargs="?", default=".", help="Notes directory or single note"
    )
    parser.add_argument("--config", default=None, help="Config YAML path")
    parser.add_argument(
        "--today", type=_parse_today, default=None,
        help="Plan windows as if today were YYYY-MM-DD",
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Compute blocks without writing"
    )
    parser.add_argument(
        "--json", action="store_true", help="Print the run summary as JSON"
    )
    parser.add_argument(
        "--show-config", action="store_true", help="Display effective config"
    )
    parser.add_argument(
        "--get", metavar="KEY", default=None,
        help="Print one config value by dotted key, e.g. planner.horizon_days",
    )
    parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger = logging.getLogger("weathernotes")

    try:
        config = load_config(args.config)
    except (OSError, ValueError, ValidationError, yaml.YAMLError) as e:
        logger.error("Could not load config %s: %s", args.config, e)
        return 2

    if args.show_config:
        print(config.model_dump_json(indent=2))
        return 0

    if args.get is not None:
        try:
            value = get_config_value(config, args.get)
        except KeyError as e:
            logger.error("%s", e.args[0])
            return 2
        print(value if isinstance(value, str) else json.dumps(value))
        return 0

    if not Path(args.root).exists():
        logger.error("Notes root does not exist: %s", args.root)
        return 2

    pipeline = NotePipeline(config, today=args.today, dry_run=args.dry_run)
    summary = pipeline.run(args.root)

    if summary.notes_found == 0:
        print("No notes found.")
    if args.json:
        print(format_summary_json(summary))
    else:
        print(format_summary_text(summary))
    return 0 if summary.ok else 1


def run() -> None:
    sys.exit(main())
