"""Business logic for picture upload operations."""

import base64
import binascii

from aws_lambda_powertools import Logger

from core.infrastructure.storage_factory import get_image_storage
from core.models.errors import ValidationError
from core.models.picture import PictureRequest
from core.models.upload import BytesUpload
from core.repositories.storage_repository import ImageStorageRepository

logger = Logger(UTC=True)


class UploadService:
    """Application service responsible for picture uploads.

    Validation, naming and persistence are owned by the storage backend;
    this service adapts the request payload to an uploaded file.
    """

    def __init__(self, storage: ImageStorageRepository | None = None) -> None:
        self.storage = storage or get_image_storage()

    @staticmethod
    def decode_file(encoded: str) -> bytes:
        """Decode base64-encoded picture data.

        Raises:
            ValidationError: If decoding fails
        """
        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            logger.exception("Failed to decode base64 picture data")
            raise ValidationError(
                message="Invalid image data",
                details={"encoding": "base64"},
            ) from exc

    def upload_picture(self, *, image_name: str, file_data: bytes) -> tuple[PictureRequest, str]:
        """Store a picture and return its descriptor and public locator.

        Raises:
            InvalidFileError: If validation or persistence fails
        """
        logger.debug(
            "Starting picture upload",
            extra={"image_name": image_name, "size": len(file_data)},
        )

        picture = self.storage.save(BytesUpload(filename=image_name, data=file_data))
        url = self.storage.get_full_path(picture.destination)

        logger.info(
            "Picture uploaded",
            extra={"destination": picture.destination, "format": picture.content_type},
        )
        return picture, url
