"""Local filesystem implementation of ImageStorageRepository."""

from contextlib import suppress
import os
from pathlib import Path
import shutil
from typing import BinaryIO

from aws_lambda_powertools import Logger

from core.imaging.inspector import inspect_image, open_upload
from core.models.errors import (
    ImageDownloadFailedError,
    ImageUploadFailedError,
    NotFoundError,
    ValidationError,
)
from core.models.picture import PictureRequest, build_picture_request
from core.models.upload import UploadedFile
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.naming import build_destination, is_bare_key

logger = Logger(UTC=True)


class LocalImageStorage(ImageStorageRepository):
    """Pictures stored as flat files below a root directory.

    The root directory is created on the first save, not at construction,
    so locators can be computed before anything exists on disk.
    """

    def __init__(self, root: str | os.PathLike[str]) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def get_full_path(self, key: str) -> str:
        return str(self._root / key)

    def save(self, upload: UploadedFile) -> PictureRequest:
        destination = build_destination(upload.filename)

        logger.debug(
            "Saving picture",
            extra={
                "image_name": upload.filename,
                "destination": destination,
                "size": upload.size,
            },
        )

        with open_upload(upload, destination=destination) as stream:
            inspection = inspect_image(stream, destination=destination)
            self._write(stream, destination=destination)

        logger.info(
            "Picture saved",
            extra={"destination": destination, "format": inspection.content_type},
        )

        return build_picture_request(
            upload=upload,
            destination=destination,
            inspection=inspection,
        )

    def get(self, key: str) -> bytes:
        path = self._resolve(key)

        logger.debug("Reading picture", extra={"key": key})

        try:
            with path.open("rb") as file:
                body = file.read()
        except FileNotFoundError as exc:
            logger.warning("Picture not found", extra={"key": key})
            raise NotFoundError(
                message="Image not found",
                details={"key": key},
            ) from exc
        except OSError as exc:
            logger.exception("Local read failed", extra={"key": key})
            raise ImageDownloadFailedError(
                message="Unable to read image at this time",
                details={"key": key},
            ) from exc

        logger.info("Picture read", extra={"key": key, "size": len(body)})
        return body

    def _write(self, stream: BinaryIO, *, destination: str) -> None:
        """Stream into a hidden sibling and rename it into place.

        Raises:
            ImageUploadFailedError: If the directory or file cannot be written
        """
        target = self._root / destination
        partial = self._root / f".{destination}.part"

        try:
            self._root.mkdir(parents=True, exist_ok=True)
            with partial.open("xb") as out:
                shutil.copyfileobj(stream, out)
            os.replace(partial, target)

        except (OSError, ValueError) as exc:
            logger.exception("Local write failed", extra={"destination": destination})
            with suppress(OSError, ValueError):
                partial.unlink(missing_ok=True)
            raise ImageUploadFailedError(
                message="Unable to store image at this time",
                details={"destination": destination},
            ) from exc

    def _resolve(self, key: str) -> Path:
        """Return the path for ``key``, refusing anything but a bare file name."""
        if not is_bare_key(key):
            logger.warning("Rejected storage key", extra={"key": key})
            raise ValidationError(
                message="Invalid image key",
                details={"key": key},
            )

        return self._root / key
