"""Command line entry point: ``cup init`` and ``cup update``."""

import argparse
import logging
from pathlib import Path

from cup.init_config import init_config
from cup.load_config import CONFIG_FILE_NAME, ConfigNotFoundError, load_config
from cup.run_update import run_update

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the cup command."""
    parser = argparse.ArgumentParser(
        prog="cup",
        description="Update annotated version literals to the latest release.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path(CONFIG_FILE_NAME),
        help=f"Path to configuration file (default: {CONFIG_FILE_NAME})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("init", help="Write a default configuration file")

    update = sub.add_parser("update", help="Scan files and update versions")
    update.add_argument(
        "--root",
        type=Path,
        default=Path(),
        help="Directory to scan (default: current directory)",
    )
    update.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve and report without writing files",
    )
    update.add_argument(
        "--report",
        type=Path,
        help="Write a JSON report of every target to this path",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the cup command."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    if args.command == "init":
        try:
            init_config(args.config)
        except OSError as e:
            logger.error("Error initializing configuration: %s", e)
            return 1
        return 0

    try:
        config = load_config(args.config, required=True)
    except ConfigNotFoundError as e:
        logger.error("%s (run `cup init` first)", e)
        return 1

    # No subcommand behaves like a plain update of the current directory.
    return run_update(
        config,
        getattr(args, "root", Path()),
        dry_run=getattr(args, "dry_run", False),
        report_path=getattr(args, "report", None),
    )


if __name__ == "__main__":
    raise SystemExit(main())
