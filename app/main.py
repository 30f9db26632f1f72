from contextlib import asynccontextmanager
from dotenv import load_dotenv
import logging
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from app.api.responses import validation_exception_handler
from app.api.routers.routers import api_router
from app.core.config import settings
from app.core.database import init_database
from app.core.logging_config import configure_logging
from app.core.sentry import init_sentry
from app.middleware import RequestIDMiddleware
from app.verification import get_verification_engine


# Load environment variables
load_dotenv()

# Configure logging with request_id support
configure_logging()

logger = logging.getLogger(__name__)

# Initialize Sentry for error tracking (no-op without SENTRY_DSN)
init_sentry()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown.

    On startup, creates the database tables and resolves the verification
    provider once so a missing model configuration is reported immediately.
    """
    logger.info("Starting Incident Reporting API...")

    try:
        await init_database()
        logger.info("Database initialized")

        engine = get_verification_engine()
        if engine.is_configured:
            logger.info(f"Verification provider: {engine.provider.name}")
        else:
            logger.warning("Verification service is not configured")

        logger.info("All services started successfully")
        yield

    except Exception:
        logger.exception("Failed to start services")
        raise
    finally:
        logger.info("Shutting down Incident Reporting API...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    lifespan=lifespan,
    openapi_url="/openapi.json" if settings.is_local else None,
)

# Validation failures are returned as 400 with one entry per violated field
app.add_exception_handler(RequestValidationError, validation_exception_handler)

app.add_middleware(RequestIDMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Incident Reporting API is running"


@app.get("/health")
async def health_check():
    try:
        return {
            "fastAPI server": {"status": "healthy"},
            "verification": {
                "configured": get_verification_engine().is_configured,
            },
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Health check failed: {str(e)}")
