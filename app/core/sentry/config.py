"""
Centralized Sentry configuration and context helpers.

Every Sentry event raised while serving a request is tagged with its
request_id so it can be matched against the JSON logs.
"""

import logging

import sentry_sdk

from app.core.config import settings

logger = logging.getLogger(__name__)


def init_sentry() -> None:
    """Initialize Sentry SDK.

    Called once at app startup (main.py). No-op if SENTRY_DSN is not set.
    """
    if not settings.SENTRY_DSN:
        logger.info("Sentry DSN not configured, skipping initialization")
        return

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        traces_sample_rate=(
            1.0 if settings.is_local else settings.SENTRY_TRACES_SAMPLE_RATE
        ),
        environment=settings.ENVIRONMENT,
        # Reports are anonymous: never attach client IPs or headers
        send_default_pii=False,
    )
    logger.info("Sentry initialized (environment=%s)", settings.ENVIRONMENT)


def set_sentry_context(*, request_id: str | None = None) -> None:
    """Tag Sentry events in the current scope with the request_id."""
    if not settings.SENTRY_DSN:
        return

    if request_id:
        sentry_sdk.set_tag("request_id", request_id)


def clear_sentry_context() -> None:
    """Clear Sentry scope tags after the request completes."""
    if not settings.SENTRY_DSN:
        return

    sentry_sdk.set_tag("request_id", "")
