"""
Pytest configuration and shared fixtures.

Provides deterministic fakes for the two external seams of the system:
the LLM provider (text classifier) and the report store.
"""

import os

# Set required environment variables BEFORE importing app modules
os.environ.setdefault("LOG_LEVEL", "INFO")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-testing-only")

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Report
from app.reports.exceptions import ReportStorageError
from app.reports.images import BaseImageStore
from app.reports.repository import BaseReportStore
from app.verification.providers import BaseLLMProvider


class FakeLLMProvider(BaseLLMProvider):
    """Provider returning a canned response (or raising) and recording prompts."""

    def __init__(self, response: str = "", error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def name(self) -> str:
        return "fake"


class InMemoryReportStore(BaseReportStore):
    def __init__(self):
        self.reports: Dict[str, Report] = {}

    async def insert(self, values: Dict[str, Any]) -> Report:
        report = Report(**values)
        report.id = str(uuid.uuid4())
        report.created_at = datetime.now(timezone.utc)
        self.reports[report.id] = report
        return report

    async def list_recent(self) -> List[Report]:
        return sorted(
            self.reports.values(), key=lambda report: report.created_at, reverse=True
        )

    async def get(self, report_id: str) -> Optional[Report]:
        return self.reports.get(report_id)

    async def delete(self, report_id: str) -> bool:
        return self.reports.pop(report_id, None) is not None


class FailingReportStore(InMemoryReportStore):
    async def insert(self, values: Dict[str, Any]) -> Report:
        raise ReportStorageError("Failed to store report")


class FakeImageStore(BaseImageStore):
    def __init__(self, configured: bool = True):
        self.configured = configured
        self.uploads: Dict[str, bytes] = {}

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def upload(self, key: str, content: bytes, content_type: str) -> str:
        self.uploads[key] = content
        return f"https://images.test/{key}"


@pytest.fixture
def fake_provider():
    """Factory for FakeLLMProvider instances."""

    def _make(response: str = "", error: Optional[Exception] = None):
        return FakeLLMProvider(response=response, error=error)

    return _make


@pytest.fixture
def report_store():
    return InMemoryReportStore()


@pytest.fixture
def failing_store():
    return FailingReportStore()


@pytest.fixture
def image_store():
    return FakeImageStore()


@pytest.fixture
def valid_report_payload():
    return {
        "type": "harassment",
        "description": "Someone was followed and shouted at near the main gate.",
        "location": "Central Park",
        "date": "2024-01-01",
    }


@pytest.fixture
def mock_db():
    """Create a mock async session for unit tests."""
    mock_session = AsyncMock(spec=AsyncSession)
    mock_session.execute = AsyncMock()
    mock_session.add = MagicMock()
    mock_session.commit = AsyncMock()
    mock_session.refresh = AsyncMock()
    mock_session.rollback = AsyncMock()
    return mock_session


# Smallest headers libmagic recognises for each allowed image type
PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"
    b"\x00\x00\x00\x01\x00\x00\x00\x01\x08\x02\x00\x00\x00\x90wS\xde"
)
GIF_BYTES = b"GIF89a\x01\x00\x01\x00\x80\x00\x00\xff\xff\xff\x00\x00\x00!\xf9\x04\x01\x00\x00\x00\x00,\x00\x00\x00\x00\x01\x00\x01\x00\x00\x02\x02D\x01\x00;"
JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"


@pytest.fixture
def png_bytes():
    return PNG_BYTES


@pytest.fixture
def image_samples():
    """(bytes, detected MIME type, stored extension) per allowed format."""
    return {
        "png": (PNG_BYTES, "image/png", "png"),
        "gif": (GIF_BYTES, "image/gif", "gif"),
        "jpeg": (JPEG_BYTES, "image/jpeg", "jpg"),
    }
