#!/usr/bin/env python3
"""
VivaTech Scraper

Retrieves the public speaker and partner listings of the VivaTech
conference and writes them to CSV.

Usage:
    python main.py speakers
    python main.py partners
    python main.py speakers --output speakers.csv
    python main.py speakers --workers 4 --page-size 200
    python main.py partners --source page --debug-html
"""

import argparse
import logging
import sys

from config import (
    DEBUG_HTML_FILE,
    DEFAULT_PARTNERS_OUTPUT,
    DEFAULT_SPEAKERS_OUTPUT,
    PAGE_SIZE,
    validate_http_config,
)
from errors import ScraperError
from models import PARTNER_COLUMNS, SPEAKER_COLUMNS
from output.csv_export import write_records
from scrapers.vivatech import PARTNERS, SOURCE_API, SOURCE_PAGE, SPEAKERS, scrape

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)

DEFAULT_OUTPUTS = {
    SPEAKERS: DEFAULT_SPEAKERS_OUTPUT,
    PARTNERS: DEFAULT_PARTNERS_OUTPUT,
}
COLUMNS = {
    SPEAKERS: SPEAKER_COLUMNS,
    PARTNERS: PARTNER_COLUMNS,
}


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Scrape VivaTech speakers or partners to CSV",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  python main.py speakers
  python main.py partners --output partners.csv
  python main.py speakers --workers 4

Default outputs:
  speakers -> {DEFAULT_SPEAKERS_OUTPUT}
  partners -> {DEFAULT_PARTNERS_OUTPUT}
        """
    )

    parser.add_argument(
        "target",
        choices=[SPEAKERS, PARTNERS],
        help="Dataset to scrape"
    )
    parser.add_argument(
        "--output", "-o",
        help="Output CSV file (default depends on target)"
    )
    parser.add_argument(
        "--page-size",
        type=positive_int,
        default=PAGE_SIZE,
        help=f"Records requested per API page (default: {PAGE_SIZE})"
    )
    parser.add_argument(
        "--workers",
        type=positive_int,
        default=1,
        help="Pages fetched in parallel once the total is known (default: 1)"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Abort on a record without a name instead of skipping it"
    )
    parser.add_argument(
        "--source",
        choices=[SOURCE_API, SOURCE_PAGE],
        default=SOURCE_API,
        help="Read the paginated API or the data embedded in the public page"
    )
    parser.add_argument(
        "--debug-html",
        action="store_true",
        help=f"With --source page, save the HTML to {DEBUG_HTML_FILE} if no data is found"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    # Endpoint override, mainly for testing
    parser.add_argument("--url", help=argparse.SUPPRESS)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if not validate_http_config():
        logger.error("Invalid VIVATECH_* settings: retries, page size and max pages must be positive")
        return 1

    output_path = args.output or DEFAULT_OUTPUTS[args.target]

    try:
        logger.info(f"Step 1: Scraping {args.target}...")
        records = scrape(
            args.target,
            args.url,
            source=args.source,
            page_size=args.page_size,
            workers=args.workers,
            strict=args.strict,
            debug_html=DEBUG_HTML_FILE if args.debug_html else None,
        )

        logger.info("Step 2: Exporting to CSV...")
        count = write_records(records, output_path, COLUMNS[args.target])
    except ScraperError as e:
        logger.error(str(e))
        return 1
    except OSError as e:
        logger.error(f"Could not write file: {e}")
        return 1

    print(f"\nSaved {count} {args.target} to {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
