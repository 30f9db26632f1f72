"""
Pydantic schemas for incident reports.

ReportCreate is the public submission payload; every violated constraint is
reported back to the client as its own error entry.
"""

import datetime as dt
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models import ReportType, Severity

ISO_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class ReportCreate(BaseModel):
    type: ReportType
    description: str = Field(..., min_length=10, max_length=1000)
    location: str = Field(..., min_length=3, max_length=200)
    date: str = Field(..., pattern=ISO_DATE_PATTERN, description="YYYY-MM-DD")
    image_url: Optional[str] = Field(
        None,
        max_length=2048,
        description="Public URL returned by POST /reports/images",
    )

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Description must not be blank")
        return value

    @field_validator("date")
    @classmethod
    def date_is_calendar_date(cls, value: str) -> str:
        try:
            dt.date.fromisoformat(value)
        except ValueError:
            raise ValueError("Date must be a valid calendar date (YYYY-MM-DD)")
        return value

    @property
    def incident_date(self) -> dt.date:
        return dt.date.fromisoformat(self.date)


class ReportResponse(BaseModel):
    id: str
    type: ReportType
    description: str
    location: str
    date: dt.date
    verified: bool = False
    verification_result: Optional[str] = None
    severity: Severity = Severity.MEDIUM
    image_url: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ReportEnvelope(BaseModel):
    result: Literal["success"] = "success"
    data: ReportResponse


class ReportListEnvelope(BaseModel):
    result: Literal["success"] = "success"
    data: List[ReportResponse]


class ImageUploadData(BaseModel):
    image_url: str


class ImageUploadEnvelope(BaseModel):
    result: Literal["success"] = "success"
    data: ImageUploadData
