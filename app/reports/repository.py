"""
Report storage.

BaseReportStore is the "report store" seam used by the ingestion service;
SQLAlchemyReportStore is the database-backed implementation. Inserts are
single-row commits: they either fully succeed or are rolled back.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Report
from .exceptions import ReportStorageError

logger = logging.getLogger(__name__)


class BaseReportStore(ABC):
    """Abstract base class for report stores."""

    @abstractmethod
    async def insert(self, values: Dict[str, Any]) -> Report:
        """Persist a new report and return it with server-assigned fields."""
        pass

    @abstractmethod
    async def list_recent(self) -> List[Report]:
        """All reports, newest first."""
        pass

    @abstractmethod
    async def get(self, report_id: str) -> Optional[Report]:
        pass

    @abstractmethod
    async def delete(self, report_id: str) -> bool:
        """Delete a report. Returns False if it did not exist."""
        pass


class SQLAlchemyReportStore(BaseReportStore):
    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, values: Dict[str, Any]) -> Report:
        report = Report(**values)
        try:
            self.db.add(report)
            await self.db.commit()
            await self.db.refresh(report)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to insert report: {e}", exc_info=True)
            raise ReportStorageError("Failed to store report") from e
        return report

    async def list_recent(self) -> List[Report]:
        try:
            result = await self.db.execute(
                select(Report).order_by(Report.created_at.desc())
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to list reports: {e}", exc_info=True)
            raise ReportStorageError("Failed to list reports") from e
        return list(result.scalars().all())

    async def get(self, report_id: str) -> Optional[Report]:
        try:
            result = await self.db.execute(select(Report).where(Report.id == report_id))
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch report {report_id}: {e}", exc_info=True)
            raise ReportStorageError("Failed to fetch report") from e
        return result.scalar_one_or_none()

    async def delete(self, report_id: str) -> bool:
        try:
            result = await self.db.execute(delete(Report).where(Report.id == report_id))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Failed to delete report {report_id}: {e}", exc_info=True)
            raise ReportStorageError("Failed to delete report") from e
        return result.rowcount > 0
