import os
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

ALLOWED_EXTENSIONS = (".xls", ".xlsx", ".csv")
EXCEL_EXTENSIONS = (".xls", ".xlsx")


@dataclass
class FileInfo:
    path: str
    name: str
    extension: str
    size: int
    size_formatted: str
    file_type: str


@dataclass
class FileValidation:
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    file_info: Optional[FileInfo] = None


def get_file_type(extension: str) -> str:
    """excel / csv / unknown, from a dotted extension."""
    extension = extension.lower()
    if extension in EXCEL_EXTENSIONS:
        return "excel"
    if extension == ".csv":
        return "csv"
    return "unknown"


def format_bytes(size: int) -> str:
    """1536 -> '1.5 KB'"""
    if size <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(units) - 1:
        value /= 1024
        unit += 1
    value = round(value, 2)
    return f"{value:g} {units[unit]}"


def validate_file(file_path: str, allowed_extensions: Sequence[str] = ALLOWED_EXTENSIONS) -> FileValidation:
    """Check that ``file_path`` is a readable, non-empty spreadsheet."""
    if not os.path.exists(file_path):
        return FileValidation(is_valid=False, errors=[f"File not found: {file_path}"])

    if not os.path.isfile(file_path):
        return FileValidation(is_valid=False, errors=[f"Path is not a file: {file_path}"])

    file_ext = os.path.splitext(file_path)[1].lower()
    if file_ext not in allowed_extensions:
        expected = ", ".join(allowed_extensions)
        return FileValidation(
            is_valid=False,
            errors=[f"File type '{file_ext}' not allowed (expected: {expected})"],
        )

    file_size = os.path.getsize(file_path)
    if file_size == 0:
        return FileValidation(is_valid=False, errors=["File is empty"])

    if not os.access(file_path, os.R_OK):
        return FileValidation(is_valid=False, errors=["No permission to read the file"])

    return FileValidation(
        is_valid=True,
        file_info=FileInfo(
            path=file_path,
            name=os.path.basename(file_path),
            extension=file_ext,
            size=file_size,
            size_formatted=format_bytes(file_size),
            file_type=get_file_type(file_ext),
        ),
    )
