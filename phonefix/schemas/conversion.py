from pydantic import BaseModel
from typing import Any, Dict, List, Optional


class PhoneValidateRequest(BaseModel):
    values: List[Any]


class PhoneVerdictResponse(BaseModel):
    original: Optional[str] = None
    normalized: Optional[str] = None
    is_valid: bool
    phone_type: Optional[str] = None
    reasons: List[str] = []


class PhoneValidateResponse(BaseModel):
    total: int
    valid: int
    invalid: int
    results: List[PhoneVerdictResponse]


class PhoneColumnResponse(BaseModel):
    index: int
    name: str
    confidence: int


class ConversionSummaryResponse(BaseModel):
    total_rows: int
    cells_processed: int
    cells_converted: int
    cells_invalid: int
    cells_unconvertible: int
    cells_skipped: int


class ConversionReportResponse(BaseModel):
    file_name: str
    sheet_name: Optional[str] = None
    summary: ConversionSummaryResponse
    phone_columns: List[PhoneColumnResponse] = []
    conversion_details: List[Dict[str, Any]] = []
    warnings: List[Dict[str, Any]] = []
    elapsed_seconds: float = 0.0
