"""
Spreadsheet reading for phone conversion.

Excel files are read cell-by-cell as objects so that numeric cells keep the
value the workbook stored; CSV files are read as text so long digit strings
never pass through float. Emoji noise is removed from every text cell.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

import pandas as pd

from phonefix.exceptions import SpreadsheetReadError
from phonefix.services.column_detector import PhoneColumnDetector, PhoneColumnMatch, column_display_name
from phonefix.services.file_validator import EXCEL_EXTENSIONS
from phonefix.services.phone_repair import remove_emojis
from phonefix.services.scientific_notation import is_blank_cell

logger = logging.getLogger(__name__)


@dataclass
class SpreadsheetData:
    """Header row, data rows and detected phone columns of one sheet."""
    file_name: str
    file_type: str
    sheet_name: Optional[str]
    headers: List[str]
    rows: pd.DataFrame
    phone_columns: List[PhoneColumnMatch] = field(default_factory=list)

    @property
    def total_rows(self) -> int:
        return len(self.rows)

    @property
    def total_columns(self) -> int:
        return len(self.headers)


def _clean_cell(value: Any) -> Any:
    if is_blank_cell(value):
        return None
    if isinstance(value, str):
        return remove_emojis(value) or None
    return value


def _split_header(raw: pd.DataFrame, empty_message: str) -> tuple:
    if raw.empty:
        raise SpreadsheetReadError(empty_message)

    header_row = list(raw.iloc[0])
    headers = [column_display_name(header_row, i) for i in range(len(header_row))]

    # object frame: blank cells stay None
    records = [[_clean_cell(value) for value in row] for row in raw.iloc[1:].to_numpy(dtype=object).tolist()]
    rows = pd.DataFrame(records, columns=range(len(headers)), dtype=object)
    return headers, rows


def _read_excel(file_path: str, sheet_name: Optional[str]) -> tuple:
    try:
        with pd.ExcelFile(file_path) as xls:
            target = sheet_name if sheet_name is not None else xls.sheet_names[0]
            if target not in xls.sheet_names:
                raise SpreadsheetReadError(f"Sheet not found: {target}")
            raw = xls.parse(target, header=None, dtype=object)
    except SpreadsheetReadError:
        raise
    except Exception as e:
        raise SpreadsheetReadError(f"Failed to read Excel file: {str(e)}") from e

    headers, rows = _split_header(raw, "Spreadsheet is empty")
    return target, headers, rows


def _read_csv(file_path: str, delimiter: str) -> tuple:
    try:
        raw = pd.read_csv(
            file_path,
            sep=delimiter,
            header=None,
            dtype=str,
            keep_default_na=False,
            encoding="utf-8-sig",
        )
    except pd.errors.EmptyDataError as e:
        raise SpreadsheetReadError("CSV file is empty") from e
    except Exception as e:
        raise SpreadsheetReadError(f"Failed to read CSV file: {str(e)}") from e

    headers, rows = _split_header(raw, "CSV file is empty")
    if rows.empty:
        raise SpreadsheetReadError("CSV file is empty")
    return headers, rows


def read_spreadsheet(
    file_path: str,
    phone_columns: Optional[Sequence[int]] = None,
    auto_detect: bool = True,
    sheet_name: Optional[str] = None,
    delimiter: str = ",",
    detector: Optional[PhoneColumnDetector] = None,
) -> SpreadsheetData:
    """
    Read a spreadsheet and locate its phone columns.

    Args:
        file_path: Path to a .xls, .xlsx or .csv file
        phone_columns: 0-based column indices chosen by the user
        auto_detect: Detect phone columns when none were chosen
        sheet_name: Excel sheet to read (first sheet by default)
        delimiter: CSV field separator
        detector: Detector to use for auto-detection

    Returns:
        SpreadsheetData

    Raises:
        SpreadsheetReadError: If the file cannot be read or has no content
    """
    extension = os.path.splitext(file_path)[1].lower()

    if extension in EXCEL_EXTENSIONS:
        file_type = "excel"
        sheet, headers, rows = _read_excel(file_path, sheet_name)
    else:
        file_type = "csv"
        sheet = None
        headers, rows = _read_csv(file_path, delimiter)

    logger.debug("Read %d rows x %d columns from %s", len(rows), len(headers), file_path)

    if phone_columns:
        matches = PhoneColumnDetector.from_indices(headers, phone_columns)
    elif auto_detect:
        matches = (detector or PhoneColumnDetector()).detect(headers, rows)
    else:
        matches = []

    return SpreadsheetData(
        file_name=os.path.basename(file_path),
        file_type=file_type,
        sheet_name=sheet,
        headers=headers,
        rows=rows,
        phone_columns=matches,
    )
