from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.verification import VerificationEngine, get_verification_engine
from .repository import BaseReportStore, SQLAlchemyReportStore
from .service import ReportIngestionService


def get_report_store(db: AsyncSession = Depends(get_db)) -> BaseReportStore:
    return SQLAlchemyReportStore(db)


def get_ingestion_service(
    store: BaseReportStore = Depends(get_report_store),
    engine: VerificationEngine = Depends(get_verification_engine),
) -> ReportIngestionService:
    return ReportIngestionService(store, engine)
