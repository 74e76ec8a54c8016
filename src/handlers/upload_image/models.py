"""Pydantic models for picture upload request/response."""

import base64
import binascii

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.models.picture import PictureRequest
from core.utils.constants import MAX_FILE_SIZE, get_max_file_size_mb

logger = Logger(UTC=True)


class ImageUploadRequest(BaseModel):
    """Validation model for picture upload request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    file: str = Field(..., description="Base64 encoded picture file")
    image_name: str = Field(
        ..., min_length=1, max_length=255, description="Original picture filename"
    )

    @field_validator("file")
    @classmethod
    def validate_file(cls, value: str) -> str:
        """Reject payloads that are not non-empty base64 within MAX_FILE_SIZE."""
        if not value:
            raise ValueError("file is required")

        try:
            decoded = base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as exc:
            logger.warning("Upload payload is not base64", extra={"error": str(exc)})
            raise ValueError("Invalid base64 encoded file") from exc

        if not decoded:
            raise ValueError("file decodes to zero bytes")

        if len(decoded) > MAX_FILE_SIZE:
            logger.warning(
                "Upload payload too large",
                extra={"size": len(decoded), "limit": MAX_FILE_SIZE},
            )
            raise ValueError(f"File size exceeds {get_max_file_size_mb()}MB limit")

        return value

    @field_validator("image_name")
    @classmethod
    def validate_image_name(cls, value: str) -> str:
        if any(ord(char) < 0x20 or ord(char) == 0x7F for char in value):
            raise ValueError("image_name must not contain control characters")
        return value


class ImageUploadResponse(PictureRequest):
    """Response model for a successful picture upload."""

    url: str = Field(..., description="Client-resolvable locator of the stored picture")
    message: str = Field(..., description="Human-readable outcome")
