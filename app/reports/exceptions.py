class ReportError(Exception):
    """Base error for report handling."""


class ReportStorageError(ReportError):
    """The report could not be written to or read from the database."""


class ImageValidationError(ReportError):
    """The uploaded image has an unsupported type or is too large."""


class ImageUploadError(ReportError):
    """The image could not be stored in object storage."""
