"""S3-backed implementation of ImageStorageRepository."""

import os
from typing import BinaryIO

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from core.imaging.inspector import inspect_image, open_upload
from core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from core.models.errors import (
    ImageDownloadFailedError,
    ImageUploadFailedError,
    NotFoundError,
)
from core.models.picture import PictureRequest, build_picture_request
from core.models.upload import UploadedFile
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import (
    ENV_IMAGE_CDN_BASE_URL,
    ENV_IMAGE_S3_PREFIX,
    S3_NOT_FOUND_CODES,
)
from core.utils.naming import build_destination

logger = Logger(UTC=True)


def normalize_prefix(prefix: str | None) -> str:
    """Return ``prefix`` with exactly one trailing slash, or an empty string."""
    if not prefix:
        return ""
    return prefix if prefix.endswith("/") else f"{prefix}/"


class S3ImageStorage(ImageStorageRepository):
    """Picture storage backed by Amazon S3 and served through a CDN.

    Objects live under ``<bucket>/<prefix><destination>`` with a private ACL;
    end clients read them through ``<cdn_base_url>/<prefix><destination>``.
    """

    def __init__(
        self,
        adapter: S3AdapterProtocol | None = None,
        *,
        prefix: str | None = None,
        cdn_base_url: str | None = None,
    ) -> None:
        """Create storage using the provided S3 adapter and CDN settings."""
        cdn_base_url = cdn_base_url or os.getenv(ENV_IMAGE_CDN_BASE_URL)
        if not cdn_base_url:
            raise RuntimeError(f"{ENV_IMAGE_CDN_BASE_URL} environment variable is not set")

        if prefix is None:
            prefix = os.getenv(ENV_IMAGE_S3_PREFIX)

        self._s3: S3AdapterProtocol = adapter or S3Adapter()
        self._prefix = normalize_prefix(prefix)
        self._cdn_base_url = cdn_base_url.rstrip("/")

    @property
    def prefix(self) -> str:
        return self._prefix

    def object_key(self, destination: str) -> str:
        return f"{self._prefix}{destination}"

    def get_full_path(self, key: str) -> str:
        return f"{self._cdn_base_url}/{self.object_key(key)}"

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
            self._upload(
                stream,
                destination=destination,
                content_type=inspection.content_type,
            )

        return build_picture_request(
            upload=upload,
            destination=destination,
            inspection=inspection,
        )

    def _upload(self, stream: BinaryIO, *, destination: str, content_type: str) -> None:
        key = self.object_key(destination)

        try:
            self._s3.upload_fileobj(
                key=key,
                fileobj=stream,
                content_type=content_type,
            )
            logger.info(
                "Picture uploaded successfully",
                extra={"key": key, "format": content_type},
            )

        except ClientError as exc:
            logger.error("S3 upload failed", extra={"key": key})
            raise ImageUploadFailedError(
                message="Unable to upload image at this time",
                details={"destination": destination},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error uploading picture")
            raise ImageUploadFailedError(
                message="Unable to upload image at this time",
                details={"destination": destination},
            ) from exc

    def get(self, key: str) -> bytes:
        object_key = self.object_key(key)

        logger.debug("Downloading picture", extra={"key": object_key})

        try:
            response = self._s3.get_object(key=object_key)
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") in S3_NOT_FOUND_CODES:
                logger.warning("Picture not found", extra={"key": object_key})
                raise NotFoundError(
                    message="Image not found",
                    details={"key": key},
                ) from exc

            logger.error("S3 download failed", extra={"key": object_key})
            raise ImageDownloadFailedError(
                message="Unable to download image at this time",
                details={"key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error downloading picture")
            raise ImageDownloadFailedError(
                message="Unable to download image at this time",
                details={"key": key},
            ) from exc

        body = response["Body"]
        try:
            data: bytes = body.read()
        except (BotoCoreError, OSError) as exc:
            logger.exception("S3 body read failed", extra={"key": object_key})
            raise ImageDownloadFailedError(
                message="Unable to download image at this time",
                details={"key": key},
            ) from exc
        finally:
            close = getattr(body, "close", None)
            if close is not None:
                close()

        logger.info(
            "Picture downloaded successfully",
            extra={"key": object_key, "size": len(data)},
        )
        return data
