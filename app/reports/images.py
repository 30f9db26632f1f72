"""
Optional report image uploads to S3-compatible object storage.

Images are stored under a random key (the original filename is discarded so
nothing identifying leaks into the public URL) and exposed by public URL.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Optional, Tuple

import aioboto3
import magic
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import settings
from .exceptions import ImageUploadError, ImageValidationError

logger = logging.getLogger(__name__)

# NOTE: SVG intentionally excluded (can contain embedded JavaScript)
IMAGE_EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/gif": "gif",
    "image/webp": "webp",
}


def validate_image(content_type: Optional[str], content: bytes) -> Tuple[str, str]:
    """
    Check an upload against the allowed image types and size limit.

    The declared content type must be an allowed image type, and the type
    detected from the bytes themselves must be one too.

    Returns:
        (detected MIME type, file extension to store the image under)

    Raises:
        ImageValidationError: Empty file, over the limit, unsupported
            declared type, or content that is not an allowed image
    """
    size = len(content)
    if size == 0:
        raise ImageValidationError("Image file is empty")
    if size > settings.REPORT_IMAGE_MAX_BYTES:
        max_mb = settings.REPORT_IMAGE_MAX_BYTES // (1024 * 1024)
        raise ImageValidationError(f"Image size must be less than {max_mb}MB")

    if (content_type or "").lower() not in IMAGE_EXTENSIONS:
        raise ImageValidationError(
            "Unsupported image type. Allowed: png, jpeg, gif, webp"
        )

    try:
        mime = magic.from_buffer(content, mime=True)
    except Exception as e:
        raise ImageValidationError(f"Failed to detect image type: {str(e)}")

    extension = IMAGE_EXTENSIONS.get(mime)
    if extension is None:
        logger.warning(f"Rejected upload declared as {content_type}, detected {mime}")
        raise ImageValidationError(
            f"Image content type '{mime}' is not allowed. Allowed: png, jpeg, gif, webp"
        )
    return mime, extension


def build_image_key(extension: str) -> str:
    return f"{uuid.uuid4().hex}.{extension}"


class BaseImageStore(ABC):
    """Abstract base class for report image storage."""

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        pass

    @abstractmethod
    async def upload(self, key: str, content: bytes, content_type: str) -> str:
        """Store the image and return its public URL."""
        pass


class S3ImageStore(BaseImageStore):
    def __init__(
        self,
        bucket: Optional[str] = None,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        public_base_url: Optional[str] = None,
    ):
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        self.public_base_url = public_base_url
        self._session = aioboto3.Session()

    @property
    def is_configured(self) -> bool:
        return bool(self.bucket)

    def public_url(self, key: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{key}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.{self.region or 'us-east-1'}.amazonaws.com/{key}"

    async def upload(self, key: str, content: bytes, content_type: str) -> str:
        client_kwargs = {"region_name": self.region}
        if self.endpoint_url:
            client_kwargs["endpoint_url"] = self.endpoint_url

        try:
            async with self._session.client("s3", **client_kwargs) as s3:
                await s3.put_object(
                    Bucket=self.bucket,
                    Key=key,
                    Body=content,
                    ContentType=content_type,
                )
        except (ClientError, BotoCoreError) as e:
            logger.exception(f"Failed to upload report image {key}")
            raise ImageUploadError("Failed to upload image") from e

        logger.info(f"Uploaded report image {key} ({len(content)} bytes)")
        return self.public_url(key)


@lru_cache
def get_image_store() -> BaseImageStore:
    """FastAPI dependency: the process-wide image store built from settings."""
    return S3ImageStore(
        bucket=settings.REPORT_IMAGES_BUCKET,
        region=settings.AWS_REGION,
        endpoint_url=settings.AWS_ENDPOINT_URL,
        public_base_url=settings.REPORT_IMAGES_PUBLIC_BASE_URL,
    )
