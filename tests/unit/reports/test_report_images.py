"""Unit tests for report image validation and the S3 image store."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from app.reports.exceptions import ImageUploadError, ImageValidationError
from app.reports.images import S3ImageStore, build_image_key, validate_image


class TestValidateImage:
    @pytest.mark.parametrize("kind", ["png", "gif", "jpeg"])
    def test_allowed_images(self, image_samples, kind):
        content, mime, extension = image_samples[kind]

        assert validate_image(mime, content) == (mime, extension)

    def test_declared_type_is_case_insensitive(self, png_bytes):
        assert validate_image("IMAGE/PNG", png_bytes) == ("image/png", "png")

    def test_extension_follows_detected_content(self, image_samples):
        content, _, _ = image_samples["gif"]

        assert validate_image("image/png", content) == ("image/gif", "gif")

    def test_webp_detection_is_accepted(self, png_bytes):
        with patch("app.reports.images.magic.from_buffer", return_value="image/webp"):
            assert validate_image("image/webp", png_bytes) == ("image/webp", "webp")

    @pytest.mark.parametrize(
        "content_type", ["image/svg+xml", "application/pdf", "text/plain", None]
    )
    def test_disallowed_declared_types(self, png_bytes, content_type):
        with pytest.raises(ImageValidationError, match="Unsupported image type"):
            validate_image(content_type, png_bytes)

    @pytest.mark.parametrize(
        "content",
        [
            b"<html><script>alert(document.cookie)</script></html>",
            b'<svg xmlns="http://www.w3.org/2000/svg"><script>alert(1)</script></svg>',
            b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n",
            b"MZ\x90\x00\x03\x00\x00\x00\x04\x00\x00\x00\xff\xff\x00\x00",
        ],
    )
    def test_non_image_content_labelled_png_rejected(self, content):
        with pytest.raises(ImageValidationError, match="is not allowed"):
            validate_image("image/png", content)

    def test_detection_failure_rejected(self, png_bytes):
        with patch(
            "app.reports.images.magic.from_buffer",
            side_effect=RuntimeError("no magic database"),
        ):
            with pytest.raises(ImageValidationError, match="Failed to detect"):
                validate_image("image/png", png_bytes)

    def test_empty_file_rejected(self):
        with pytest.raises(ImageValidationError, match="empty"):
            validate_image("image/png", b"")

    def test_size_limit(self, png_bytes):
        limit = 5 * 1024 * 1024
        at_limit = png_bytes + b"\x00" * (limit - len(png_bytes))

        assert validate_image("image/png", at_limit) == ("image/png", "png")
        with pytest.raises(ImageValidationError, match="less than 5MB"):
            validate_image("image/png", at_limit + b"\x00")


def test_image_keys_are_random_and_keep_extension():
    first = build_image_key("png")
    second = build_image_key("png")

    assert first != second
    assert first.endswith(".png")


class TestS3ImageStore:
    def test_not_configured_without_bucket(self):
        assert S3ImageStore(bucket=None).is_configured is False
        assert S3ImageStore(bucket="report-images").is_configured is True

    def test_public_url_prefers_public_base_url(self):
        store = S3ImageStore(
            bucket="report-images",
            endpoint_url="http://localhost:4566",
            public_base_url="https://cdn.example.org/",
        )

        assert store.public_url("abc.png") == "https://cdn.example.org/abc.png"

    def test_public_url_with_custom_endpoint(self):
        store = S3ImageStore(bucket="report-images", endpoint_url="http://localhost:4566")

        assert store.public_url("abc.png") == "http://localhost:4566/report-images/abc.png"

    def test_public_url_defaults_to_aws(self):
        store = S3ImageStore(bucket="report-images", region="eu-west-1")

        assert (
            store.public_url("abc.png")
            == "https://report-images.s3.eu-west-1.amazonaws.com/abc.png"
        )

    @pytest.mark.asyncio
    async def test_upload_puts_object_and_returns_url(self):
        store = S3ImageStore(bucket="report-images", region="us-east-1")
        s3 = MagicMock()
        s3.put_object = AsyncMock()
        client_cm = MagicMock()
        client_cm.__aenter__ = AsyncMock(return_value=s3)
        client_cm.__aexit__ = AsyncMock(return_value=False)
        store._session = MagicMock()
        store._session.client.return_value = client_cm

        url = await store.upload("abc.png", b"\x89PNG", "image/png")

        assert url == "https://report-images.s3.us-east-1.amazonaws.com/abc.png"
        s3.put_object.assert_awaited_once_with(
            Bucket="report-images",
            Key="abc.png",
            Body=b"\x89PNG",
            ContentType="image/png",
        )

    @pytest.mark.asyncio
    async def test_upload_client_error_raises_upload_error(self):
        store = S3ImageStore(bucket="report-images")
        s3 = MagicMock()
        s3.put_object = AsyncMock(
            side_effect=ClientError(
                {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject"
            )
        )
        client_cm = MagicMock()
        client_cm.__aenter__ = AsyncMock(return_value=s3)
        client_cm.__aexit__ = AsyncMock(return_value=False)
        store._session = MagicMock()
        store._session.client.return_value = client_cm

        with pytest.raises(ImageUploadError):
            await store.upload("abc.png", b"\x89PNG", "image/png")
