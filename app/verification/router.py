"""
Verification API Router

1. POST /verify - Preview the assessment of a description without filing a report
"""

import logging

from fastapi import APIRouter, Depends

from app.api.responses import error_response
from .exceptions import VerificationInputError, VerificationUnavailableError
from .schemas import VerifyData, VerifyRequest, VerifyResponse
from .service import VerificationEngine, get_verification_engine, preview_assessment

logger = logging.getLogger(__name__)

router = APIRouter(tags=["verification"])


@router.post("/verify", response_model=VerifyResponse)
async def verify_report(
    request: VerifyRequest,
    engine: VerificationEngine = Depends(get_verification_engine),
):
    """
    Classify a description and return the assessment.

    - 400 when the description is missing or blank
    - 503 when no verification model is configured
    - 500 when the model call fails
    """
    try:
        result = await preview_assessment(engine, request.description)
    except VerificationInputError:
        return error_response(400, "Description is required")
    except VerificationUnavailableError as e:
        if not engine.is_configured:
            return error_response(503, "Verification service unavailable")
        logger.error(f"Verification error: {e}")
        return error_response(500, "Verification service error")
    except Exception:
        logger.exception("Unexpected verification error")
        return error_response(500, "Verification service error")

    return VerifyResponse(
        data=VerifyData(
            verified=True,
            verificationResult=result.assessment,
            severity=result.severity,
        )
    )
