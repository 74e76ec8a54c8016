"""Process-wide selection of the picture storage backend."""

from functools import lru_cache
import os

from aws_lambda_powertools import Logger

from core.infrastructure.aws.s3_image_storage import S3ImageStorage
from core.infrastructure.local.local_image_storage import LocalImageStorage
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import (
    DEFAULT_LOCAL_STORAGE_PATH,
    ENV_IMAGE_STORAGE_PATH,
    ENV_STORAGE_BACKEND,
    STORAGE_BACKEND_LOCAL,
    STORAGE_BACKEND_S3,
)

logger = Logger(UTC=True)


def create_image_storage() -> ImageStorageRepository:
    """Build the backend named by ``STORAGE_BACKEND``.

    Raises:
        RuntimeError: If the backend is unknown or its settings are missing
    """
    backend = (os.getenv(ENV_STORAGE_BACKEND) or STORAGE_BACKEND_LOCAL).strip().lower()

    if backend == STORAGE_BACKEND_LOCAL:
        root = os.getenv(ENV_IMAGE_STORAGE_PATH) or DEFAULT_LOCAL_STORAGE_PATH
        logger.info("Using local picture storage", extra={"root": root})
        return LocalImageStorage(root)

    if backend == STORAGE_BACKEND_S3:
        storage = S3ImageStorage()
        logger.info("Using S3 picture storage", extra={"prefix": storage.prefix})
        return storage

    raise RuntimeError(
        f"Unsupported {ENV_STORAGE_BACKEND} '{backend}'. "
        f"Expected '{STORAGE_BACKEND_LOCAL}' or '{STORAGE_BACKEND_S3}'"
    )


@lru_cache(maxsize=1)
def get_image_storage() -> ImageStorageRepository:
    """Return the single backend instance shared by every request."""
    return create_image_storage()
