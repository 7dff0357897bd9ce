import json
import logging
import time
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from phonefix.config import Settings, get_settings
from phonefix.exceptions import InvalidFileError
from phonefix.services.column_detector import PhoneColumnDetector
from phonefix.services.file_validator import FileInfo, validate_file
from phonefix.services.phone_converter import convert_and_validate
from phonefix.services.scientific_notation import is_blank_cell, stringify_cell
from phonefix.services.spreadsheet_reader import SpreadsheetData, read_spreadsheet
from phonefix.services.spreadsheet_writer import (
    OUTPUT_MODE_DIRECTORY,
    ensure_writable_path,
    generate_output_path,
    generate_report_path,
    write_spreadsheet,
)

logger = logging.getLogger(__name__)


@dataclass
class CellConversion:
    """One phone cell that produced digits."""
    row: int                 # 0-based data row (header excluded)
    col: int
    column_name: str
    original: Any
    new_value: str
    is_valid: bool
    reasons: List[str] = field(default_factory=list)


@dataclass
class ConversionSummary:
    total_rows: int = 0
    cells_processed: int = 0
    cells_converted: int = 0
    cells_invalid: int = 0
    cells_unconvertible: int = 0
    cells_skipped: int = 0


@dataclass
class ConversionReport:
    input_file: str
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    output_file: Optional[str] = None
    report_file: Optional[str] = None
    sheet_name: Optional[str] = None
    summary: ConversionSummary = field(default_factory=ConversionSummary)
    phone_columns: List[Dict[str, Any]] = field(default_factory=list)
    conversion_details: List[Dict[str, Any]] = field(default_factory=list)
    warnings: List[Dict[str, Any]] = field(default_factory=list)
    errors: List[Dict[str, Any]] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class PhoneSpreadsheetProcessor:
    """
    Converts every phone cell of a spreadsheet:
      1. Validate the input file
      2. Read the sheet and detect phone columns
      3. Convert + validate each phone cell
      4. Write the corrected copy (unless validate-only)
      5. Write the JSON report next to the input
    """

    def __init__(
        self,
        input_path: str,
        output_path: Optional[str] = None,
        mode: Optional[str] = None,
        phone_columns: Optional[Sequence[int]] = None,
        validate_only: bool = False,
        sheet_name: Optional[str] = None,
        delimiter: Optional[str] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.input_path = input_path
        self.output_path = output_path
        self.mode = mode or self.settings.OUTPUT_MODE
        self.phone_columns = list(phone_columns) if phone_columns else None
        self.validate_only = validate_only
        self.sheet_name = sheet_name
        self.delimiter = delimiter or self.settings.CSV_DELIMITER

        self.report = ConversionReport(input_file=input_path)
        self.conversions: List[CellConversion] = []

    def _validate_input(self) -> FileInfo:
        validation = validate_file(self.input_path)
        if not validation.is_valid:
            for error in validation.errors:
                logger.error(error)
            raise InvalidFileError(validation.errors)

        info = validation.file_info
        logger.info("Valid file: %s (%s)", info.name, info.size_formatted)
        return info

    def _read(self) -> SpreadsheetData:
        detector = PhoneColumnDetector(
            sample_size=self.settings.DETECTION_SAMPLE_SIZE,
            min_score=self.settings.DETECTION_MIN_SCORE,
        )
        data = read_spreadsheet(
            self.input_path,
            phone_columns=self.phone_columns,
            auto_detect=True,
            sheet_name=self.sheet_name,
            delimiter=self.delimiter,
            detector=detector,
        )

        self.report.summary.total_rows = data.total_rows
        self.report.sheet_name = data.sheet_name
        self.report.phone_columns = [match.to_dict() for match in data.phone_columns]

        logger.info("%d rows read", data.total_rows)
        if data.sheet_name:
            logger.info("Sheet: %s", data.sheet_name)

        if data.phone_columns:
            for match in data.phone_columns:
                logger.info(
                    "Phone column: %s (column %d, confidence: %d%%)",
                    match.name, match.index + 1, match.confidence,
                )
        else:
            logger.warning("No phone column detected; use --phone-columns to choose them")

        return data

    def _convert_cells(self, data: SpreadsheetData) -> None:
        summary = self.report.summary

        for row_index in range(data.total_rows):
            for match in data.phone_columns:
                value = data.rows.iat[row_index, match.index]

                if is_blank_cell(value):
                    summary.cells_skipped += 1
                    continue

                summary.cells_processed += 1
                verdict = convert_and_validate(value)
                original_text = stringify_cell(value)

                if verdict.normalized is None:
                    summary.cells_unconvertible += 1
                    logger.debug("Row %d, %s: could not convert %r", row_index + 2, match.name, value)
                    continue

                self.conversions.append(CellConversion(
                    row=row_index,
                    col=match.index,
                    column_name=match.name,
                    original=original_text,
                    new_value=verdict.normalized,
                    is_valid=verdict.is_valid,
                    reasons=list(verdict.reasons),
                ))

                if verdict.is_valid:
                    summary.cells_converted += 1
                else:
                    summary.cells_invalid += 1
                    self.report.warnings.append({
                        "row": row_index + 2,
                        "column": match.name,
                        "original": original_text,
                        "converted": verdict.normalized,
                        "message": ", ".join(verdict.reasons),
                    })

                self.report.conversion_details.append({
                    "row": row_index + 2,
                    "column": match.name,
                    "original": original_text,
                    "converted": verdict.normalized,
                    "validation": "PASS" if verdict.is_valid else "FAIL",
                })

        logger.info("%d cells converted", len(self.conversions))
        logger.info("Valid: %d", summary.cells_converted)
        logger.info("Invalid: %d", summary.cells_invalid)
        logger.info("Unconvertible: %d", summary.cells_unconvertible)
        logger.info("Skipped: %d", summary.cells_skipped)

    def resolve_output_path(self) -> str:
        if self.mode == OUTPUT_MODE_DIRECTORY:
            path = generate_output_path(self.input_path, self.mode, output_dir=self.output_path)
        else:
            path = self.output_path or generate_output_path(self.input_path, self.mode)
        return ensure_writable_path(path)

    def _write_output(self, data: SpreadsheetData) -> None:
        output_path = self.resolve_output_path()
        write_spreadsheet(data, self.conversions, output_path, delimiter=self.delimiter)
        self.report.output_file = output_path
        logger.info("File saved: %s", output_path)

    def _write_report(self) -> None:
        report_path = generate_report_path(self.input_path)
        self.report.report_file = report_path
        with open(report_path, "w", encoding="utf-8") as f:
            json.dump(self.report.to_dict(), f, indent=2, ensure_ascii=False, default=str)
        logger.info("Detailed report: %s", report_path)

    def process(self) -> ConversionReport:
        start_time = time.time()
        try:
            self._validate_input()
            data = self._read()
            self._convert_cells(data)

            if not self.validate_only and self.conversions:
                self._write_output(data)

            self.report.elapsed_seconds = round(time.time() - start_time, 2)
            self._write_report()
            return self.report
        except Exception as e:
            logger.error("Processing failed: %s", e)
            self.report.errors.append({"message": str(e), "type": type(e).__name__})
            raise


def process_spreadsheet(input_path: str, **options) -> ConversionReport:
    """Run :class:`PhoneSpreadsheetProcessor` with keyword options."""
    return PhoneSpreadsheetProcessor(input_path, **options).process()
