"""
Report ingestion: optional verification followed by a single storage write.

Verification never blocks submission. When the engine is configured but
fails, the report is stored unverified with severity medium and the
"Verification failed" marker; when no engine is configured the step is
skipped entirely. Only validation and storage errors fail a submission.
"""

import logging
from typing import List, Optional

from app.models import Report, Severity
from app.verification import (
    AssessmentResult,
    VerificationEngine,
    VerificationError,
)
from .repository import BaseReportStore
from .schemas import ReportCreate

logger = logging.getLogger(__name__)


class ReportIngestionService:
    """Service for filing and reviewing incident reports."""

    def __init__(self, store: BaseReportStore, engine: VerificationEngine):
        self.store = store
        self.engine = engine

    async def submit(self, report: ReportCreate) -> Report:
        """
        Verify (when configured) and persist a validated report.

        Raises:
            ReportStorageError: The insert failed; nothing was stored
        """
        verified = False
        verification_result: Optional[str] = None
        severity = Severity.MEDIUM

        if self.engine.is_configured:
            try:
                result = await self.engine.classify(report.description)
                verified = True
            except VerificationError as e:
                logger.warning(f"Verification failed, storing report unverified: {e}")
                result = AssessmentResult.unavailable()

            verification_result = result.assessment
            severity = result.severity
        else:
            logger.info("Verification service not configured, skipping verification")

        stored = await self.store.insert(
            {
                "type": report.type.value,
                "description": report.description,
                "location": report.location,
                "date": report.incident_date,
                "verified": verified,
                "verification_result": verification_result,
                "severity": severity.value,
                "image_url": report.image_url,
            }
        )

        logger.info(
            f"Report {stored.id} stored: type={stored.type} "
            f"severity={stored.severity} verified={stored.verified}"
        )
        return stored

    async def list_reports(self) -> List[Report]:
        return await self.store.list_recent()

    async def get_report(self, report_id: str) -> Optional[Report]:
        return await self.store.get(report_id)

    async def delete_report(self, report_id: str) -> bool:
        return await self.store.delete(report_id)
