"""
Unified database models for the application.
All SQLAlchemy models are defined here.
"""

import enum
import uuid

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Index,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


# Enums
class ReportType(str, enum.Enum):
    HARASSMENT = "harassment"
    DISCRIMINATION = "discrimination"
    ASSAULT = "assault"
    OTHER = "other"


class Severity(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def _new_id() -> str:
    return str(uuid.uuid4())


class Report(Base):
    """An anonymous incident report. Rows are never updated, only deleted."""

    __tablename__ = "reports"

    id = Column(String, primary_key=True, default=_new_id)
    type = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String(200), nullable=False)
    date = Column(Date, nullable=False)

    # Verification outcome
    verified = Column(Boolean, nullable=False, default=False)
    verification_result = Column(Text, nullable=True)
    severity = Column(String, nullable=False, default=Severity.MEDIUM.value)

    image_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint(
            "type IN ('harassment', 'discrimination', 'assault', 'other')",
            name="ck_reports_type",
        ),
        CheckConstraint(
            "severity IN ('low', 'medium', 'high')",
            name="ck_reports_severity",
        ),
        CheckConstraint(
            "length(description) >= 10 AND length(description) <= 1000",
            name="ck_reports_description_length",
        ),
        CheckConstraint(
            "length(location) >= 3 AND length(location) <= 200",
            name="ck_reports_location_length",
        ),
        Index("idx_reports_created_at", "created_at"),
    )


class Admin(Base):
    """Dashboard user allowed to review and delete reports."""

    __tablename__ = "admins"

    id = Column(String, primary_key=True, default=_new_id)
    email = Column(String, unique=True, nullable=False, index=True)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
