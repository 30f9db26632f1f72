"""Incident report ingestion, storage and admin review."""

from .repository import BaseReportStore, SQLAlchemyReportStore
from .service import ReportIngestionService

__all__ = ["BaseReportStore", "SQLAlchemyReportStore", "ReportIngestionService"]
