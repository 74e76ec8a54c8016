"""Custom exception classes for the picture storage service."""

from http import HTTPStatus
from typing import Any

from core.utils.constants import (
    ERROR_CODE_CORRUPT_IMAGE,
    ERROR_CODE_IMAGE_DOWNLOAD_FAILED,
    ERROR_CODE_IMAGE_UPLOAD_FAILED,
    ERROR_CODE_INTERNAL_ERROR,
    ERROR_CODE_INVALID_FILE,
    ERROR_CODE_RESOURCE_NOT_FOUND,
    ERROR_CODE_UNSUPPORTED_MIME_TYPE,
    ERROR_CODE_UPLOAD_READ_FAILED,
    ERROR_CODE_VALIDATION_FAILED,
)


class ImageServiceError(Exception):
    """
    Base exception for all picture storage errors.

    Every error carries a human-readable message, a stable machine code and
    optional contextual `details`. Subclasses only declare their defaults:
    `error_code` when the caller gives none, and the HTTP classification
    in `status_code`.
    """

    status_code: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR
    default_error_code: str = ERROR_CODE_INTERNAL_ERROR

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        status_code: HTTPStatus | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}

        if status_code is not None:
            self.status_code = status_code

        super().__init__(self.message)

    @property
    def cause(self) -> BaseException | None:
        """Underlying low-level fault, if the error was chained."""
        return self.__cause__

    @property
    def is_client_error(self) -> bool:
        return 400 <= int(self.status_code) < 500


class ValidationError(ImageServiceError):
    """Raised when request validation fails."""

    status_code = HTTPStatus.BAD_REQUEST
    default_error_code = ERROR_CODE_VALIDATION_FAILED


class NotFoundError(ImageServiceError):
    """Raised when a requested picture does not exist in the storage medium."""

    status_code = HTTPStatus.NOT_FOUND
    default_error_code = ERROR_CODE_RESOURCE_NOT_FOUND


class InvalidFileError(ImageServiceError):
    """Raised when an uploaded file cannot be validated or persisted.

    The status code separates client-caused failures (400, the upload is not
    a supported image) from server-caused ones (500, the medium failed).
    """

    default_error_code = ERROR_CODE_INVALID_FILE


class UnsupportedFormatError(InvalidFileError):
    """Raised when the sniffed content type has no registered decoder."""

    status_code = HTTPStatus.BAD_REQUEST
    default_error_code = ERROR_CODE_UNSUPPORTED_MIME_TYPE


class CorruptImageError(InvalidFileError):
    """Raised when the magic bytes match a format but the header does not decode."""

    default_error_code = ERROR_CODE_CORRUPT_IMAGE


class UploadReadError(InvalidFileError):
    """Raised when the uploaded stream cannot be read back."""

    default_error_code = ERROR_CODE_UPLOAD_READ_FAILED


class ImageUploadFailedError(InvalidFileError):
    """Raised when writing a validated picture to the storage medium fails."""

    default_error_code = ERROR_CODE_IMAGE_UPLOAD_FAILED


class ImageDownloadFailedError(ImageServiceError):
    default_error_code = ERROR_CODE_IMAGE_DOWNLOAD_FAILED
