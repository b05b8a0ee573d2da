#!/usr/bin/env python3
"""
CLI script for parsing a CloudFront access log into event records.

Feeds every line of a log file through CloudFrontRowParser and reports how
many rows became records, how many were skipped (headers, rows without a
query string) and how many failed to parse.

Usage:
    # Parse and print a summary
    python scripts/parse_rows.py --input data/E2ABCDEF.2024-01-15-12.abcd1234.gz

    # Write records to CSV
    python scripts/parse_rows.py --input data/cloudfront.log --output events.csv

    # Stop at the first malformed row
    python scripts/parse_rows.py --input data/cloudfront.log --fail-fast
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Optional

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cloudfront_events.config import get_settings
from cloudfront_events.serde import (
    CloudFrontRowParser,
    EventRecord,
    ParseError,
    records_to_dataframe,
)
from cloudfront_events.utils import open_file_auto_decompress, setup_logging

logger = logging.getLogger(__name__)


def parse_log_file(
    parser: CloudFrontRowParser,
    input_path: Path,
    fail_fast: bool = False,
) -> dict:
    """
    Parse every line of a log file.

    Args:
        parser: Row parser to use
        input_path: Log file (plain or gzip)
        fail_fast: If True, re-raise the first ParseError

    Returns:
        Dictionary with records, counts, errors and duration
    """
    results = {
        "records": [],
        "rows_read": 0,
        "rows_skipped": 0,
        "rows_failed": 0,
        "errors": [],
        "duration_seconds": 0.0,
    }
    start = time.time()

    with open_file_auto_decompress(input_path) as f:
        for line_number, line in enumerate(f, start=1):
            results["rows_read"] += 1
            if not line.strip():
                results["rows_skipped"] += 1
                continue
            try:
                record: Optional[EventRecord] = parser.parse(line.rstrip("\r\n"))
            except ParseError as e:
                results["rows_failed"] += 1
                if fail_fast:
                    raise ParseError(
                        e.message, line_content=e.line_content, line_number=line_number
                    ) from e
                logger.warning(f"Line {line_number}: {e}")
                results["errors"].append(f"line {line_number}: {e}")
                continue

            if record is None:
                results["rows_skipped"] += 1
            else:
                results["records"].append(record)

    results["duration_seconds"] = time.time() - start
    return results


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Parse a CloudFront access log into event records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--input",
        "-i",
        type=Path,
        required=True,
        help="CloudFront access log file (plain or .gz)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Write parsed records to this CSV file",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to YAML config file (default: config.yaml or environment)",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Abort on the first row that cannot be parsed",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    setup_logging(level=logging.INFO)
    settings = get_settings(args.config)

    errors = settings.validate()
    if errors:
        for error in errors:
            logger.error(f"Invalid setting: {error}")
        return 1

    setup_logging(level=logging.DEBUG if args.verbose else settings.log_level)

    if not args.input.is_file():
        parser.error(f"Input file not found: {args.input}")

    row_parser = CloudFrontRowParser(settings=settings.parser)

    try:
        results = parse_log_file(row_parser, args.input, fail_fast=args.fail_fast)
    except ParseError as e:
        logger.error(f"Aborting: {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130

    if args.output:
        df = records_to_dataframe(results["records"])
        df.to_csv(args.output, index=False)
        logger.info(f"Wrote {len(df):,} records to {args.output}")

    logger.info(f"Rows read: {results['rows_read']:,}")
    logger.info(f"Records parsed: {len(results['records']):,}")
    logger.info(f"Rows skipped: {results['rows_skipped']:,}")
    logger.info(f"Rows failed: {results['rows_failed']:,}")
    logger.info(f"Duration: {results['duration_seconds']:.1f}s")

    return 1 if results["rows_failed"] else 0


if __name__ == "__main__":
    sys.exit(main())
