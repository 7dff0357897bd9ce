"""
Writing converted spreadsheets and choosing where they go.

Output modes:
- ``new``        <input_dir>/<name>_fixed<ext>
- ``overwrite``  the input path itself
- ``directory``  <output_dir or input_dir/output>/<name>_fixed<ext>

Converted phone cells are written as text so the spreadsheet application does
not coerce them back into numbers.
"""

import logging
import os
from typing import Iterable, Optional

import pandas as pd

from phonefix.config import settings
from phonefix.services.file_validator import EXCEL_EXTENSIONS
from phonefix.services.spreadsheet_reader import SpreadsheetData

logger = logging.getLogger(__name__)

OUTPUT_MODE_NEW = "new"
OUTPUT_MODE_OVERWRITE = "overwrite"
OUTPUT_MODE_DIRECTORY = "directory"
OUTPUT_MODES = (OUTPUT_MODE_NEW, OUTPUT_MODE_OVERWRITE, OUTPUT_MODE_DIRECTORY)


def _writable_extension(extension: str) -> str:
    # pandas can no longer write legacy .xls workbooks
    return ".xlsx" if extension.lower() == ".xls" else extension


def ensure_writable_path(output_path: str) -> str:
    """Swap a legacy .xls destination for .xlsx."""
    root, extension = os.path.splitext(output_path)
    return root + _writable_extension(extension)


def generate_output_path(
    input_path: str,
    mode: str = OUTPUT_MODE_NEW,
    output_dir: Optional[str] = None,
) -> str:
    """Output file path for ``input_path`` under the given mode."""
    if mode not in OUTPUT_MODES:
        raise ValueError(f"Unknown output mode: {mode}")

    directory, base = os.path.split(input_path)
    name, extension = os.path.splitext(base)
    extension = _writable_extension(extension)

    if mode == OUTPUT_MODE_OVERWRITE:
        return os.path.join(directory, f"{name}{extension}")

    if mode == OUTPUT_MODE_DIRECTORY:
        target_dir = output_dir or os.path.join(directory, settings.OUTPUT_DIRECTORY_NAME)
        os.makedirs(target_dir, exist_ok=True)
        return os.path.join(target_dir, f"{name}{settings.OUTPUT_SUFFIX}{extension}")

    return os.path.join(directory, f"{name}{settings.OUTPUT_SUFFIX}{extension}")


def generate_report_path(input_path: str) -> str:
    """<input_dir>/<name>_report.json"""
    directory, base = os.path.split(input_path)
    name = os.path.splitext(base)[0]
    return os.path.join(directory, f"{name}{settings.REPORT_SUFFIX}.json")


def apply_conversions(data: SpreadsheetData, conversions: Iterable) -> pd.DataFrame:
    """Copy of the data rows with every converted cell replaced by its digits."""
    df = data.rows.copy().astype(object)
    for conversion in conversions:
        if conversion.row < len(df) and conversion.col < df.shape[1]:
            df.iat[conversion.row, conversion.col] = str(conversion.new_value)
    df.columns = data.headers
    return df


def write_spreadsheet(
    data: SpreadsheetData,
    conversions: Iterable,
    output_path: str,
    delimiter: str = ",",
) -> int:
    """
    Write the converted sheet to ``output_path``.

    Args:
        data: Sheet as returned by ``read_spreadsheet``
        conversions: Objects with ``row``, ``col`` and ``new_value``
        output_path: Destination; the extension picks CSV or Excel
        delimiter: CSV field separator

    Returns:
        Number of conversions applied
    """
    conversions = list(conversions)
    df = apply_conversions(data, conversions)

    output_dir = os.path.dirname(output_path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    extension = os.path.splitext(output_path)[1].lower()
    if extension in EXCEL_EXTENSIONS:
        sheet_name = data.sheet_name or "Sheet1"
        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=sheet_name, index=False)
    else:
        df.to_csv(output_path, sep=delimiter, index=False)

    logger.info("Wrote %d converted cells to %s", len(conversions), output_path)
    return len(conversions)
