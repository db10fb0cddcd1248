"""
Command-line entrypoint: probe one storefront URL and print the result as JSON.

Logs go to stderr so stdout carries only the result record.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from dotenv import load_dotenv

from prober.orchestrator import run_probe
from shared.config import get_config
from shared.logging import configure_logging, get_logger

EXIT_OK = 0
EXIT_USAGE = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="checkout-probe",
        description="Detect CAPTCHA, a product id and checkout payment methods of a storefront.",
    )
    parser.add_argument("url", help="Absolute storefront URL, e.g. https://shop.example.com/")
    parser.add_argument("--pretty", action="store_true", help="Indent the JSON output")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments, run the probe, print the record. Returns the exit code."""
    load_dotenv()
    args = _build_parser().parse_args(argv)

    config = get_config()
    configure_logging(
        level=logging.getLevelName(config.log_level.upper()),
        log_file=config.log_file,
        log_stdout=config.log_stdout,
        stream=sys.stderr,
    )
    logger = get_logger(__name__)

    try:
        result = run_probe(args.url, config=config)
    except ValueError as e:
        logger.error("probe.invalid_url", url=args.url, error=str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE

    print(json.dumps(result.to_dict(), indent=2 if args.pretty else None, ensure_ascii=False))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
