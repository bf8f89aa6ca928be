# main.py

"""Entry point for the cardtrend re-pricer."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from cardtrend.config.logging_config import setup_logging
from cardtrend.config.settings import Settings

logger = logging.getLogger("cardtrend.main")


def _positive_int(value: str) -> int:
    """argparse type for a concurrency level within bounds."""
    number = int(value)
    if not 1 <= number <= Settings.MAX_CONCURRENCY:
        msg = f"must be between 1 and {Settings.MAX_CONCURRENCY}"
        raise argparse.ArgumentTypeError(msg)
    return number


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="cardtrend",
        description=(
            "Re-price a Cardmarket catalogue against its baseline prices."
        ),
    )
    parser.add_argument(
        "-i",
        "--input",
        type=Path,
        default=Settings.CATALOGUE_PATH,
        dest="input_path",
        help="Input catalogue JSON (default: data/products.json).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Settings.OUTPUT_PATH,
        dest="output_path",
        help="Output catalogue JSON (default: docs/output.json).",
    )
    parser.add_argument(
        "--rate",
        type=float,
        default=None,
        help="Fixed EUR->GBP rate; skips the live lookup.",
    )
    parser.add_argument(
        "-c",
        "--concurrency",
        type=_positive_int,
        default=1,
        help="Products rendered in parallel (default: 1).",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=Settings.FETCH_TIMEOUT,
        help="Seconds allowed per page render (default: 30).",
    )
    parser.add_argument(
        "--settle",
        type=float,
        default=Settings.SETTLE_DELAY,
        dest="settle_delay",
        help="Seconds to wait after navigation (default: 5).",
    )
    parser.add_argument(
        "--table",
        action="store_true",
        default=False,
        dest="show_table",
        help="Print a ranked table per category.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Show INFO messages on the console as well as in the run log.",
    )
    return parser


def main() -> None:
    """Parse arguments and run one re-pricing pass."""
    args = _build_parser().parse_args()

    log_file = setup_logging(console_level="INFO" if args.verbose else None)
    logger.info("cardtrend starting, log file: %s", log_file)

    from cardtrend.cli.runner import run_repricing

    try:
        exit_code = asyncio.run(
            run_repricing(
                input_path=args.input_path,
                output_path=args.output_path,
                rate=args.rate,
                concurrency=args.concurrency,
                timeout=args.timeout,
                settle_delay=args.settle_delay,
                show_table=args.show_table,
            )
        )
    except Exception:
        logger.critical("Fatal error during run", exc_info=True)
        raise
    finally:
        logger.info("cardtrend shutting down")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
