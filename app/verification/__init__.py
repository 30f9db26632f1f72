"""
Report verification: severity classification of incident descriptions by an
external LLM, with fallbacks that never block report submission.
"""

from .exceptions import (
    VerificationError,
    VerificationInputError,
    VerificationUnavailableError,
)
from .providers import BaseLLMProvider, GeminiProvider, GroqProvider, get_default_provider
from .schemas import AssessmentResult, VerificationStatus
from .service import (
    VerificationEngine,
    get_verification_engine,
    parse_assessment,
    preview_assessment,
)

__all__ = [
    "AssessmentResult",
    "BaseLLMProvider",
    "GeminiProvider",
    "GroqProvider",
    "VerificationEngine",
    "VerificationError",
    "VerificationInputError",
    "VerificationStatus",
    "VerificationUnavailableError",
    "get_default_provider",
    "get_verification_engine",
    "parse_assessment",
    "preview_assessment",
]
