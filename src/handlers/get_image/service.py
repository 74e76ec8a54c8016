"""
Business logic for picture retrieval.
"""

from aws_lambda_powertools import Logger

from core.infrastructure.storage_factory import get_image_storage
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.mime import detect_mime_type

logger = Logger(UTC=True)


class GetService:
    """Application service responsible for reading pictures back."""

    def __init__(self, storage: ImageStorageRepository | None = None) -> None:
        self.storage = storage or get_image_storage()

    def fetch_picture(self, key: str) -> tuple[bytes, str]:
        """Return the stored bytes and their sniffed content type.

        Raises:
            NotFoundError: If nothing is stored under ``key``
            ImageDownloadFailedError: If the medium fails
        """
        content = self.storage.get(key)
        content_type = detect_mime_type(content)

        logger.debug(
            "Picture fetched",
            extra={"key": key, "size": len(content), "format": content_type},
        )
        return content, content_type

    def locate_picture(self, key: str) -> str:
        return self.storage.get_full_path(key)
