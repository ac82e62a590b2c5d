"""Command-line entry point for the page spider."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Optional, Sequence, TextIO

from .config import DEFAULT_OUTPUT_DIR, DEFAULT_TIMEOUT, SpiderConfig
from .models import ItemOutcome, SpiderResult
from .spider import spider_page

logger = logging.getLogger("page_spider.cli")

EXIT_OK = 0
EXIT_PAGE_UNREACHABLE = 1
EXIT_PARTIAL_FAILURE = 2


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Download a web page's same-origin resources, its fetchTextDataAsync "
            "API responses and well-known site files."
        ),
    )
    parser.add_argument(
        "url",
        nargs="?",
        help="Page to spider; read from standard input when omitted",
    )
    parser.add_argument(
        "--output",
        default=DEFAULT_OUTPUT_DIR,
        type=Path,
        help="Directory where downloaded files should be written",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Per-request timeout in seconds (0 waits indefinitely)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args(argv)
    if args.timeout < 0:
        parser.error("--timeout must be 0 or greater")
    return args


def read_target_url(args: argparse.Namespace, stdin: Optional[TextIO] = None) -> str:
    """Return the URL from the arguments, prompting on stdin if it was omitted."""
    if args.url:
        return args.url.strip()
    print("Please provide a URL.", flush=True)
    return (stdin or sys.stdin).readline().strip()


def _summarize(label: str, items: Sequence[ItemOutcome]) -> str:
    succeeded = sum(1 for item in items if item.ok)
    return f"{label} {succeeded}/{len(items)}"


def exit_code_for(result: SpiderResult) -> int:
    if not result.page_fetched:
        return EXIT_PAGE_UNREACHABLE
    if result.has_item_failures:
        return EXIT_PARTIAL_FAILURE
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    url = read_target_url(args)
    if not url:
        logger.error("No URL provided.")
        return EXIT_PAGE_UNREACHABLE

    config = SpiderConfig(
        output_root=Path(args.output),
        timeout=args.timeout or None,
    )

    logger.info("Starting resource downloading...")
    overall_start = time.perf_counter()
    result = spider_page(url, config)
    total_elapsed = time.perf_counter() - overall_start

    if result.page_fetched:
        logger.info(
            "Finished in %.2fs (%s, %s, %s succeeded)",
            total_elapsed,
            _summarize("API calls", result.api_calls),
            _summarize("resources", result.resources),
            _summarize("well-known files", result.well_known),
        )
    else:
        logger.info("Finished in %.2fs; page could not be fetched", total_elapsed)
    return exit_code_for(result)


if __name__ == "__main__":
    sys.exit(main())
