import io
import logging
import os
import tempfile
from typing import List, Optional

from fastapi import APIRouter, File, HTTPException, Query, UploadFile
from fastapi.responses import StreamingResponse

from phonefix.config import settings
from phonefix.exceptions import PhoneFixError
from phonefix.schemas.conversion import ConversionReportResponse
from phonefix.services.column_detector import parse_column_list
from phonefix.services.file_validator import ALLOWED_EXTENSIONS, EXCEL_EXTENSIONS
from phonefix.tasks.process_spreadsheet import ConversionReport, PhoneSpreadsheetProcessor

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/convert", tags=["conversion"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _validate_upload(file: UploadFile) -> str:
    file_name = os.path.basename(file.filename or "")
    file_ext = os.path.splitext(file_name)[1].lower()

    if file_ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"File type '{file_ext}' not allowed. Only CSV and Excel files accepted.",
        )

    file.file.seek(0, 2)
    file_size = file.file.tell()
    file.file.seek(0)

    max_size = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
    if file_size > max_size:
        raise HTTPException(
            status_code=400,
            detail=f"File too large ({file_size / 1024 / 1024:.1f}MB). Maximum {settings.MAX_UPLOAD_SIZE_MB}MB.",
        )

    return file_name


def _parse_columns(phone_columns: Optional[str]) -> Optional[List[int]]:
    if not phone_columns:
        return None
    try:
        return parse_column_list(phone_columns) or None
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _save_upload(file: UploadFile, file_name: str, directory: str) -> str:
    path = os.path.join(directory, file_name)
    with open(path, "wb") as f:
        f.write(file.file.read())
    return path


def _run(processor: PhoneSpreadsheetProcessor) -> ConversionReport:
    try:
        return processor.process()
    except PhoneFixError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _report_response(report: ConversionReport, file_name: str) -> ConversionReportResponse:
    data = report.to_dict()
    return ConversionReportResponse(
        file_name=file_name,
        sheet_name=data["sheet_name"],
        summary=data["summary"],
        phone_columns=data["phone_columns"],
        conversion_details=data["conversion_details"],
        warnings=data["warnings"],
        elapsed_seconds=data["elapsed_seconds"],
    )


# ─────────────────────────────────────────────────────────────────────────────
# Validate-only report
# ─────────────────────────────────────────────────────────────────────────────

@router.post("/report", response_model=ConversionReportResponse)
def conversion_report(
    file: UploadFile = File(...),
    phone_columns: Optional[str] = Query(None, description="1-based column numbers, e.g. 3,5"),
    sheet: Optional[str] = Query(None),
):
    """Analyse the phone columns of an uploaded spreadsheet without converting it."""
    file_name = _validate_upload(file)
    columns = _parse_columns(phone_columns)

    with tempfile.TemporaryDirectory() as workdir:
        input_path = _save_upload(file, file_name, workdir)
        report = _run(PhoneSpreadsheetProcessor(
            input_path,
            phone_columns=columns,
            validate_only=True,
            sheet_name=sheet,
        ))

    return _report_response(report, file_name)


# ─────────────────────────────────────────────────────────────────────────────
# Conversion
# ─────────────────────────────────────────────────────────────────────────────

@router.post("")
def convert_file(
    file: UploadFile = File(...),
    phone_columns: Optional[str] = Query(None, description="1-based column numbers, e.g. 3,5"),
    sheet: Optional[str] = Query(None),
):
    """Convert the phone columns of an uploaded spreadsheet and return the corrected file."""
    file_name = _validate_upload(file)
    columns = _parse_columns(phone_columns)

    with tempfile.TemporaryDirectory() as workdir:
        input_path = _save_upload(file, file_name, workdir)
        report = _run(PhoneSpreadsheetProcessor(
            input_path,
            mode="new",
            phone_columns=columns,
            sheet_name=sheet,
        ))

        if not report.output_file:
            raise HTTPException(status_code=400, detail="No phone numbers found to convert")

        with open(report.output_file, "rb") as f:
            content = f.read()
        output_name = os.path.basename(report.output_file)

    summary = report.summary
    logger.info(
        "Converted %s: %d valid, %d invalid",
        file_name, summary.cells_converted, summary.cells_invalid,
    )

    is_excel = os.path.splitext(output_name)[1].lower() in EXCEL_EXTENSIONS
    return StreamingResponse(
        io.BytesIO(content),
        media_type=XLSX_MEDIA_TYPE if is_excel else "text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{output_name}"',
            "X-Cells-Converted": str(summary.cells_converted),
            "X-Cells-Invalid": str(summary.cells_invalid),
        },
    )
