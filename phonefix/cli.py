"""
Command-line phone converter.

    phonefix -i contacts.xlsx
    phonefix -i contacts.csv -c 3,5 -m directory -o fixed/
    phonefix -i contacts.xlsx --validate-only
"""

import argparse
import logging
import sys
from typing import List, Optional

from phonefix.config import get_settings
from phonefix.exceptions import PhoneFixError
from phonefix.services.column_detector import parse_column_list
from phonefix.services.spreadsheet_writer import OUTPUT_MODES
from phonefix.tasks.process_spreadsheet import ConversionReport, PhoneSpreadsheetProcessor

logger = logging.getLogger("phonefix")


def _column_list(text: str) -> List[int]:
    try:
        return parse_column_list(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="phonefix",
        description="Fix Brazilian phone numbers mangled by spreadsheet software.",
    )
    parser.add_argument("-i", "--input", required=True, help="Input .xls, .xlsx or .csv file")
    parser.add_argument(
        "-o", "--output",
        help="Output file (output directory with --mode directory)",
    )
    parser.add_argument(
        "-m", "--mode",
        choices=OUTPUT_MODES,
        default=settings.OUTPUT_MODE,
        help="new: <name>_fixed file, overwrite: replace input, directory: write into a folder",
    )
    parser.add_argument(
        "-c", "--phone-columns",
        type=_column_list,
        help="Phone column numbers, 1-based and comma separated (e.g. 3,5). Auto-detected when omitted",
    )
    parser.add_argument(
        "-v", "--validate-only",
        action="store_true",
        help="Only analyse and write the report, do not write a corrected file",
    )
    parser.add_argument("--sheet", dest="sheet_name", help="Workbook sheet to read (first sheet by default)")
    parser.add_argument("--delimiter", default=settings.CSV_DELIMITER, help="CSV field separator")
    parser.add_argument("--verbose", action="store_true", help="Debug logging and full tracebacks")
    return parser.parse_args(argv)


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, get_settings().LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def print_summary(report: ConversionReport) -> None:
    summary = report.summary
    print()
    print("=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print(f"Rows:           {summary.total_rows}")
    print(f"Processed:      {summary.cells_processed}")
    print(f"Valid:          {summary.cells_converted}")
    print(f"Invalid:        {summary.cells_invalid}")
    print(f"Unconvertible:  {summary.cells_unconvertible}")
    print(f"Skipped:        {summary.cells_skipped}")
    if report.output_file:
        print(f"Output file:    {report.output_file}")
    if report.report_file:
        print(f"Report:         {report.report_file}")
    print(f"Elapsed:        {report.elapsed_seconds}s")
    print("=" * 60)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    processor = PhoneSpreadsheetProcessor(
        args.input,
        output_path=args.output,
        mode=args.mode,
        phone_columns=args.phone_columns,
        validate_only=args.validate_only,
        sheet_name=args.sheet_name,
        delimiter=args.delimiter,
    )

    try:
        report = processor.process()
    except PhoneFixError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        if args.verbose:
            logger.exception("Unexpected failure")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print_summary(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
