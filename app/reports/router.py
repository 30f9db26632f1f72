"""
Reports API Router

Public:
1. POST /reports         - File an anonymous report (verified when a model is configured)
2. POST /reports/images  - Upload an optional image, returns its public URL

Admin only:
3. GET    /reports              - List reports, newest first
4. GET    /reports/{report_id}  - Get one report
5. DELETE /reports/{report_id}  - Delete a report
"""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile

from app.admin import admin_auth_service
from app.api.responses import INTERNAL_SERVER_ERROR, error_response
from app.core.config import settings
from app.models import Admin
from .dependencies import get_ingestion_service
from .exceptions import ImageUploadError, ImageValidationError, ReportStorageError
from .images import BaseImageStore, build_image_key, get_image_store, validate_image
from .schemas import (
    ImageUploadData,
    ImageUploadEnvelope,
    ReportCreate,
    ReportEnvelope,
    ReportListEnvelope,
    ReportResponse,
)
from .service import ReportIngestionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["reports"])


@router.post("", status_code=201, response_model=ReportEnvelope)
async def submit_report(
    report: ReportCreate,
    service: ReportIngestionService = Depends(get_ingestion_service),
):
    """
    File an anonymous incident report.

    Verification problems are absorbed into the stored record
    (verified / verification_result / severity); only validation (400) and
    storage (500) failures are returned to the client.
    """
    try:
        created = await service.submit(report)
    except ReportStorageError:
        return error_response(500, INTERNAL_SERVER_ERROR)
    except Exception:
        logger.exception("Error submitting report")
        return error_response(500, INTERNAL_SERVER_ERROR)

    return ReportEnvelope(data=ReportResponse.model_validate(created))


@router.post("/images", status_code=201, response_model=ImageUploadEnvelope)
async def upload_report_image(
    file: UploadFile = File(...),
    image_store: BaseImageStore = Depends(get_image_store),
):
    """Upload an image to attach to a report (png, jpeg, gif or webp, max 5MB)."""
    if not image_store.is_configured:
        return error_response(503, "Image upload unavailable")

    # One byte past the limit is enough to reject an oversized upload
    content = await file.read(settings.REPORT_IMAGE_MAX_BYTES + 1)

    try:
        mime, extension = validate_image(file.content_type, content)
    except ImageValidationError as e:
        return error_response(400, str(e))

    try:
        image_url = await image_store.upload(
            build_image_key(extension), content, mime
        )
    except ImageUploadError:
        return error_response(500, "Failed to upload image")

    return ImageUploadEnvelope(data=ImageUploadData(image_url=image_url))


@router.get("", response_model=ReportListEnvelope)
async def list_reports(
    admin: Admin = Depends(admin_auth_service.get_current_admin),
    service: ReportIngestionService = Depends(get_ingestion_service),
):
    try:
        reports = await service.list_reports()
    except ReportStorageError:
        return error_response(500, INTERNAL_SERVER_ERROR)

    return ReportListEnvelope(
        data=[ReportResponse.model_validate(report) for report in reports]
    )


@router.get("/{report_id}", response_model=ReportEnvelope)
async def get_report(
    report_id: str,
    admin: Admin = Depends(admin_auth_service.get_current_admin),
    service: ReportIngestionService = Depends(get_ingestion_service),
):
    try:
        report = await service.get_report(report_id)
    except ReportStorageError:
        return error_response(500, INTERNAL_SERVER_ERROR)

    if report is None:
        raise HTTPException(status_code=404, detail="Report not found")

    return ReportEnvelope(data=ReportResponse.model_validate(report))


@router.delete("/{report_id}", status_code=204)
async def delete_report(
    report_id: str,
    admin: Admin = Depends(admin_auth_service.get_current_admin),
    service: ReportIngestionService = Depends(get_ingestion_service),
):
    try:
        deleted = await service.delete_report(report_id)
    except ReportStorageError:
        return error_response(500, INTERNAL_SERVER_ERROR)

    if not deleted:
        raise HTTPException(status_code=404, detail="Report not found")

    logger.info(f"Report {report_id} deleted by admin {admin.id}")
    return Response(status_code=204)
