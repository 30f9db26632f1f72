"""
Verification engine: severity classification of incident descriptions.

Failures degrade in two independent layers:
- a malformed model answer is absorbed here (degraded result, medium severity)
- an unreachable or unconfigured model raises VerificationUnavailableError,
  which callers absorb so a report can always be filed
"""

import json
import logging
from functools import lru_cache
from typing import Optional

from app.models import Severity
from .exceptions import VerificationInputError, VerificationUnavailableError
from .prompts import build_verification_prompt
from .providers import BaseLLMProvider, get_default_provider
from .schemas import ASSESSMENT_UNAVAILABLE, AssessmentResult, VerificationStatus

logger = logging.getLogger(__name__)

VALID_SEVERITIES = {severity.value for severity in Severity}


def parse_assessment(text: str) -> AssessmentResult:
    """
    Parse a model response into an AssessmentResult. Never raises.

    Strict JSON with a recognised severity is "classified"; anything else
    keeps the trimmed raw text as the assessment with medium severity.
    """
    trimmed = text.strip()

    try:
        parsed = json.loads(trimmed)
    except ValueError:
        logger.warning("Model response is not valid JSON, using raw text")
        return AssessmentResult.degraded(trimmed)

    if not isinstance(parsed, dict):
        logger.warning("Model response JSON is not an object, using raw text")
        return AssessmentResult.degraded(trimmed)

    severity = parsed.get("severity")
    if isinstance(severity, str):
        severity = severity.strip().lower()

    if not isinstance(severity, str) or severity not in VALID_SEVERITIES:
        logger.warning(f"Invalid severity level in model response: {severity!r}")
        return AssessmentResult.degraded(trimmed)

    assessment = parsed.get("assessment")
    if assessment is not None and not isinstance(assessment, str):
        assessment = json.dumps(assessment)

    return AssessmentResult(
        assessment=assessment or ASSESSMENT_UNAVAILABLE,
        severity=Severity(severity),
        status=VerificationStatus.CLASSIFIED,
    )


class VerificationEngine:
    """Builds the prompt, calls the provider and parses the answer."""

    def __init__(self, provider: Optional[BaseLLMProvider] = None):
        self.provider = provider

    @property
    def is_configured(self) -> bool:
        return self.provider is not None

    async def classify(self, description: str) -> AssessmentResult:
        """
        Classify an incident description.

        Args:
            description: Non-blank report description

        Returns:
            A classified or degraded AssessmentResult

        Raises:
            VerificationUnavailableError: No provider is configured, the model
                call failed, or the model returned no text
        """
        if self.provider is None:
            raise VerificationUnavailableError("Verification service not configured")

        prompt = build_verification_prompt(description)

        try:
            text = await self.provider.generate(prompt)
        except Exception as e:
            logger.error(f"{self.provider.name} verification call failed: {e}")
            raise VerificationUnavailableError(
                "Verification service unavailable"
            ) from e

        if not text or not text.strip():
            logger.error(f"{self.provider.name} returned an empty verification result")
            raise VerificationUnavailableError("Verification service unavailable")

        result = parse_assessment(text)
        logger.info(
            f"Report classified by {self.provider.name}: "
            f"severity={result.severity.value} status={result.status.value}"
        )
        return result


@lru_cache
def get_verification_engine() -> VerificationEngine:
    """FastAPI dependency: the process-wide engine built from settings."""
    return VerificationEngine(get_default_provider())


async def preview_assessment(
    engine: VerificationEngine, description: Optional[str]
) -> AssessmentResult:
    """
    Standalone verification without persistence.

    Raises:
        VerificationInputError: description is missing or blank
        VerificationUnavailableError: no provider, or the model call failed
    """
    if not description or not description.strip():
        raise VerificationInputError("Description is required")

    return await engine.classify(description)
