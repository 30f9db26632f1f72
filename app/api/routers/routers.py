# Central API router include file
from fastapi import APIRouter

from app.admin.router import router as admin_router
from app.reports.router import router as reports_router
from app.verification.router import router as verification_router

api_router = APIRouter()

api_router.include_router(reports_router)
api_router.include_router(verification_router)
api_router.include_router(admin_router)
