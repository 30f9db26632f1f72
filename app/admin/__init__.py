"""Admin dashboard authentication."""

from .service import AdminAuthService, admin_auth_service

__all__ = ["AdminAuthService", "admin_auth_service"]
