"""
Schemas for report verification.

AssessmentResult is the ephemeral outcome of one classification attempt.
Its status records which path produced it:

- classified: the model answered with valid JSON and a known severity
- degraded: the model answered, but not in the expected shape; the raw text
  is kept as the assessment and severity falls back to medium
- unavailable: no answer could be obtained; only produced by callers that
  absorb the failure (see AssessmentResult.unavailable)
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from app.models import Severity

ASSESSMENT_UNAVAILABLE = "Assessment unavailable"
VERIFICATION_FAILED = "Verification failed"


class VerificationStatus(str, Enum):
    CLASSIFIED = "classified"
    DEGRADED = "degraded"
    UNAVAILABLE = "unavailable"


class AssessmentResult(BaseModel):
    assessment: str
    severity: Severity = Severity.MEDIUM
    status: VerificationStatus = VerificationStatus.CLASSIFIED

    @classmethod
    def degraded(cls, raw_text: str) -> "AssessmentResult":
        return cls(
            assessment=raw_text.strip(),
            severity=Severity.MEDIUM,
            status=VerificationStatus.DEGRADED,
        )

    @classmethod
    def unavailable(cls) -> "AssessmentResult":
        return cls(
            assessment=VERIFICATION_FAILED,
            severity=Severity.MEDIUM,
            status=VerificationStatus.UNAVAILABLE,
        )


class VerifyRequest(BaseModel):
    description: Optional[str] = None


class VerifyData(BaseModel):
    verified: bool = True
    verificationResult: str
    severity: Severity


class VerifyResponse(BaseModel):
    result: str = Field(default="success")
    data: VerifyData
