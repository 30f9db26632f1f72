"""
Admin authentication.

Admins sign in with email and password and receive a short-lived JWT access
token. Passwords are hashed with Argon2id.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db
from app.models import Admin

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

security = HTTPBearer(auto_error=False)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AdminAuthService:
    """Service for admin credential checks and JWT handling."""

    def __init__(self):
        self.ALGORITHM = settings.JWT_ALGORITHM
        self.ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES

    @property
    def secret_key(self) -> str:
        if not settings.JWT_SECRET_KEY:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Admin authentication is not configured",
            )
        return settings.JWT_SECRET_KEY

    # ============== PASSWORD OPERATIONS ==============

    def hash_password(self, password: str) -> str:
        return pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        return pwd_context.verify(plain_password, hashed_password)

    # ============== TOKEN OPERATIONS ==============

    def create_access_token(
        self, data: dict, expires_delta: Optional[timedelta] = None
    ) -> str:
        to_encode = data.copy()
        expire = datetime.now(timezone.utc) + (
            expires_delta or timedelta(minutes=self.ACCESS_TOKEN_EXPIRE_MINUTES)
        )
        to_encode.update({"exp": expire, "type": "access"})
        return jwt.encode(to_encode, self.secret_key, algorithm=self.ALGORITHM)

    def verify_token(self, token: str) -> dict:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.ALGORITHM])
        except JWTError:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Could not validate credentials",
                headers={"WWW-Authenticate": "Bearer"},
            )

        if payload.get("type") != "access":
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token type. Expected access",
                headers={"WWW-Authenticate": "Bearer"},
            )

        return payload

    # ============== ADMIN ACCOUNTS ==============

    async def create_admin(self, email: str, password: str, db: AsyncSession) -> Admin:
        admin = Admin(
            email=normalize_email(email),
            hashed_password=self.hash_password(password),
        )
        db.add(admin)
        await db.commit()
        await db.refresh(admin)
        logger.info(f"Admin account created: {admin.id}")
        return admin

    async def authenticate(
        self, email: str, password: str, db: AsyncSession
    ) -> Optional[Admin]:
        result = await db.execute(
            select(Admin).where(Admin.email == normalize_email(email))
        )
        admin = result.scalar_one_or_none()

        if admin is None or not self.verify_password(password, admin.hashed_password):
            logger.warning("Failed admin login attempt")
            return None

        return admin

    async def get_current_admin(
        self,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
        db: AsyncSession = Depends(get_db),
    ) -> Admin:
        """Get the signed-in admin from the bearer token."""
        if credentials is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Not authenticated",
                headers={"WWW-Authenticate": "Bearer"},
            )

        payload = self.verify_token(credentials.credentials)
        admin_id = payload.get("sub")

        if admin_id is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Could not validate credentials",
            )

        result = await db.execute(select(Admin).where(Admin.id == admin_id))
        admin = result.scalar_one_or_none()

        if admin is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Admin not found",
            )

        return admin


admin_auth_service = AdminAuthService()
