"""
Admin API Router

1. POST /admin/login - Exchange admin credentials for an access token
2. GET  /admin/me    - Current admin
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.models import Admin
from .schemas import AdminLoginRequest, AdminResponse, TokenResponse
from .service import admin_auth_service

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/login", response_model=TokenResponse)
async def login(request: AdminLoginRequest, db: AsyncSession = Depends(get_db)):
    admin = await admin_auth_service.authenticate(request.email, request.password, db)
    if admin is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    access_token = admin_auth_service.create_access_token(
        data={"sub": admin.id, "email": admin.email}
    )
    return TokenResponse(
        access_token=access_token,
        expires_in=admin_auth_service.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )


@router.get("/me", response_model=AdminResponse)
async def get_current_admin_endpoint(
    admin: Admin = Depends(admin_auth_service.get_current_admin),
):
    return admin
