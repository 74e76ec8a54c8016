"""Uploaded file boundary between the HTTP layer and the storage backends."""

import io
from typing import BinaryIO, Protocol


class UploadedFile(Protocol):
    """File handed over by the HTTP layer.

    ``size`` is the declared byte length; ``open`` returns a fresh binary
    stream positioned at the first byte. The caller closes the stream.
    """

    @property
    def filename(self) -> str: ...

    @property
    def size(self) -> int: ...

    def open(self) -> BinaryIO: ...


class BytesUpload:
    """In-memory upload, as produced by decoding a base64 request body."""

    def __init__(self, *, filename: str, data: bytes) -> None:
        self._filename = filename
        self._data = data

    @property
    def filename(self) -> str:
        return self._filename

    @property
    def size(self) -> int:
        return len(self._data)

    def open(self) -> BinaryIO:
        return io.BytesIO(self._data)
