"""Global constants used throughout the application.

This module centralizes error codes, format tables and environment variable
names shared by the storage backends and the Lambda handlers.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================


# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_INVALID_FILE = "INVALID_FILE"
ERROR_CODE_UNSUPPORTED_MIME_TYPE = "UNSUPPORTED_MIME_TYPE"
ERROR_CODE_CORRUPT_IMAGE = "CORRUPT_IMAGE"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"

# Storage Errors
ERROR_CODE_UPLOAD_READ_FAILED = "UPLOAD_READ_FAILED"
ERROR_CODE_IMAGE_UPLOAD_FAILED = "IMAGE_UPLOAD_FAILED"
ERROR_CODE_IMAGE_DOWNLOAD_FAILED = "IMAGE_DOWNLOAD_FAILED"

# Internal / Unexpected
ERROR_CODE_INTERNAL_ERROR = "INTERNAL_ERROR"


# ============================================================================
# File Inspection
# ============================================================================

# Bytes handed to the format sniffer
SNIFF_LENGTH: Final[int] = 512

# Uploads above this size are spooled to disk when they have to be rewound
SPOOL_MAX_MEMORY: Final[int] = 1024 * 1024

MAX_FILE_SIZE: Final[int] = 8 * 1024 * 1024  # 8MB in bytes

MIME_TYPE_PILLOW_FORMAT_MAP: Final[dict[str, str]] = {
    "image/jpeg": "JPEG",
    "image/png": "PNG",
    "image/gif": "GIF",
    "image/tiff": "TIFF",
    "image/webp": "WEBP",
    "image/bmp": "BMP",
}

SUPPORTED_MIME_TYPES: Final[frozenset[str]] = frozenset(MIME_TYPE_PILLOW_FORMAT_MAP)

SUPPORTED_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {"jpg", "jpeg", "png", "gif", "tif", "tiff", "webp", "bmp"}
)

FALLBACK_CONTENT_TYPE = "application/octet-stream"


# ============================================================================
# Storage Backends
# ============================================================================

STORAGE_BACKEND_LOCAL = "local"
STORAGE_BACKEND_S3 = "s3"
DEFAULT_LOCAL_STORAGE_PATH = "./images"

S3_OBJECT_ACL = "private"
S3_NOT_FOUND_CODES: Final[frozenset[str]] = frozenset({"NoSuchKey", "404", "NotFound"})


# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Api-Key"
EXPOSE_HEADERS = "Content-Type,Content-Length"
DEFAULT_CONTENT_TYPE = "application/json"

METRICS_NAMESPACE = "PictureStorage"


# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_STORAGE_BACKEND = "STORAGE_BACKEND"
ENV_IMAGE_STORAGE_PATH = "IMAGE_STORAGE_PATH"
ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_IMAGE_S3_BUCKET_NAME = "IMAGE_S3_BUCKET_NAME"
ENV_IMAGE_S3_PREFIX = "IMAGE_S3_PREFIX"
ENV_IMAGE_CDN_BASE_URL = "IMAGE_CDN_BASE_URL"


# ============================================================================
# Helper Functions
# ============================================================================


def get_max_file_size_mb() -> int:
    """Get maximum file size in megabytes."""
    return MAX_FILE_SIZE // (1024 * 1024)
