"""Picture record handed to the metadata store after a successful save."""

from pydantic import (
    BaseModel,
    Field,
    NonNegativeInt,
    PositiveInt,
    StrictStr,
    field_validator,
)

from core.imaging.inspector import ImageInspection
from core.models.upload import UploadedFile
from core.utils.constants import SUPPORTED_MIME_TYPES


class PictureRequest(BaseModel):
    """Descriptor of a stored picture."""

    name: StrictStr = Field(..., description="Original upload file name")
    destination: StrictStr = Field(
        ..., min_length=1, description="Generated storage key including extension"
    )
    height: PositiveInt = Field(..., description="Picture height in pixels")
    width: PositiveInt = Field(..., description="Picture width in pixels")
    size: NonNegativeInt = Field(..., description="Byte length of the original upload")
    content_type: StrictStr = Field(
        ..., description="Sniffed MIME type of the picture (e.g. image/png)"
    )

    @field_validator("content_type")
    @classmethod
    def validate_content_type(cls, value: str) -> str:
        if value not in SUPPORTED_MIME_TYPES:
            raise ValueError(f"Unsupported content type: {value}")
        return value


def build_picture_request(
    *,
    upload: UploadedFile,
    destination: str,
    inspection: ImageInspection,
) -> PictureRequest:
    """Combine validation output with the upload's own metadata."""
    return PictureRequest(
        name=upload.filename,
        destination=destination,
        height=inspection.height,
        width=inspection.width,
        size=upload.size,
        content_type=inspection.content_type,
    )
