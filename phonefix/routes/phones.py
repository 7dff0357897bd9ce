from fastapi import APIRouter

from phonefix.schemas.conversion import PhoneValidateRequest, PhoneValidateResponse, PhoneVerdictResponse
from phonefix.services.phone_converter import convert_and_validate

router = APIRouter(prefix="/phones", tags=["phones"])


@router.post("/validate", response_model=PhoneValidateResponse)
def validate_phones(payload: PhoneValidateRequest):
    """Convert and validate raw phone values, one verdict per value."""
    verdicts = [convert_and_validate(value) for value in payload.values]
    valid = sum(1 for verdict in verdicts if verdict.is_valid)

    return PhoneValidateResponse(
        total=len(verdicts),
        valid=valid,
        invalid=len(verdicts) - valid,
        results=[PhoneVerdictResponse(**verdict.to_dict()) for verdict in verdicts],
    )
