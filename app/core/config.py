from typing import List, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: Optional[str] = None

    # API Configuration
    PROJECT_NAME: str = "Incident-Reporting-API"
    VERSION: str = "1.0.0"

    # Database (PostgreSQL in deployed envs, SQLite for local/testing)
    DATABASE_URL: str = "sqlite+aiosqlite:///./reports.db"

    # CORS
    ALLOWED_ORIGINS: List[str] = ["*"]

    # Log Level
    LOG_LEVEL: str = "INFO"

    # Logging Configuration
    LOGGING_FRAME_DEPTH: int = (
        6  # Frame depth for finding logging call origin in stack trace
    )

    # Sentry Configuration
    SENTRY_DSN: Optional[str] = None  # Sentry DSN for error tracking
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    # Verification LLM
    VERIFICATION_LLM_PROVIDER: Optional[str] = (
        None  # "gemini" or "groq"; picked from available keys when unset
    )
    VERIFICATION_TEMPERATURE: float = 0.0  # Deterministic severity classification

    # Gemini
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_LLM_MODEL: str = "gemini-1.5-pro"

    # Groq
    GROQ_API_KEY: Optional[str] = None
    GROQ_LLM_MODEL: str = "llama-3.3-70b-versatile"

    # JWT Settings (admin dashboard)
    JWT_SECRET_KEY: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Report image uploads (S3-compatible object storage)
    AWS_REGION: Optional[str] = None
    AWS_ENDPOINT_URL: Optional[str] = None
    REPORT_IMAGES_BUCKET: Optional[str] = None
    REPORT_IMAGES_PUBLIC_BASE_URL: Optional[str] = (
        None  # e.g., https://cdn.example.com/report-images
    )
    REPORT_IMAGE_MAX_BYTES: int = 5 * 1024 * 1024  # 5MB

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    # --------- Properties ---------
    @property
    def is_local(self) -> bool:
        """
        Check if running in local development environment.

        Supported values:
        - "local" or "local_dev" → True (local development)
        - "dev", "staging", "prod", or anything else → False (deployed)
        """
        if not self.ENVIRONMENT:
            return False
        env = self.ENVIRONMENT.lower()
        return env in ["local", "local_dev"]

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


settings = Settings()
