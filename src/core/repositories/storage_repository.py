"""Abstract contract for picture file storage."""

from abc import ABC, abstractmethod

from core.models.picture import PictureRequest
from core.models.upload import UploadedFile


class ImageStorageRepository(ABC):
    """Contract for storing and retrieving picture files.

    Implementations are the local filesystem and S3 behind a CDN.
    Handlers depend on this interface, not the implementation.
    Instances are immutable after construction and safe to share
    between concurrent requests.
    """

    @abstractmethod
    def get_full_path(self, key: str) -> str:
        """Map a storage key to a client-resolvable locator.

        Pure: performs no I/O and never raises.

        Args:
            key: Storage key returned by ``save``

        Returns:
            Filesystem path (local) or public CDN URL (remote)
        """

    @abstractmethod
    def save(self, upload: UploadedFile) -> PictureRequest:
        """Validate an upload and persist it under a new unique key.

        Args:
            upload: File received by the HTTP layer

        Returns:
            Descriptor of the stored picture

        Raises:
            UnsupportedFormatError: If the content is not a supported image
            CorruptImageError: If the image header does not decode
            UploadReadError: If the upload cannot be read
            ImageUploadFailedError: If writing to the medium fails
        """

    @abstractmethod
    def get(self, key: str) -> bytes:
        """Read the full content stored under ``key``.

        Args:
            key: Storage key returned by ``save``

        Returns:
            Stored bytes, identical to the original upload

        Raises:
            NotFoundError: If nothing is stored under ``key``
            ImageDownloadFailedError: If the medium fails
        """
