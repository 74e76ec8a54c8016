"""Validation pipeline shared by every storage backend.

An upload is opened once and rewound twice: the sniffer sees only a bounded
prefix, the decoder sees the stream from byte zero, and persistence starts
from byte zero again.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
import shutil
import tempfile
from typing import BinaryIO

from aws_lambda_powertools import Logger

from core.imaging.decoders import ImageDecodeError, get_decoder
from core.models.errors import (
    CorruptImageError,
    UnsupportedFormatError,
    UploadReadError,
)
from core.models.upload import UploadedFile
from core.utils.constants import SNIFF_LENGTH, SPOOL_MAX_MEMORY
from core.utils.mime import detect_mime_type

logger = Logger(UTC=True)


@dataclass(frozen=True)
class ImageInspection:
    """Outcome of a successful inspection."""

    content_type: str
    width: int
    height: int


def _is_seekable(stream: BinaryIO) -> bool:
    try:
        return stream.seekable()
    except (AttributeError, OSError, ValueError):
        return False


@contextmanager
def open_upload(upload: UploadedFile, *, destination: str) -> Iterator[BinaryIO]:
    """Open ``upload`` as a rewindable stream and close it on exit.

    Non-seekable sources are spooled into a temporary file first.

    Raises:
        UploadReadError: If the upload cannot be opened or spooled
    """
    try:
        source = upload.open()
    except Exception as exc:
        logger.exception("Unable to open upload", extra={"destination": destination})
        raise UploadReadError(
            message="Unable to open the uploaded file",
            details={"destination": destination},
        ) from exc

    with source:
        if _is_seekable(source):
            yield source
            return

        with tempfile.SpooledTemporaryFile(max_size=SPOOL_MAX_MEMORY) as spool:
            try:
                shutil.copyfileobj(source, spool)
                spool.seek(0)
            except Exception as exc:
                logger.exception(
                    "Unable to buffer upload", extra={"destination": destination}
                )
                raise UploadReadError(
                    message="Unable to read the uploaded file",
                    details={"destination": destination},
                ) from exc

            yield spool  # type: ignore[misc]


def _rewind(stream: BinaryIO, *, destination: str) -> None:
    try:
        stream.seek(0)
    except Exception as exc:
        logger.exception("Unable to rewind upload", extra={"destination": destination})
        raise UploadReadError(
            message="Unable to read the uploaded file",
            details={"destination": destination},
        ) from exc


def inspect_image(stream: BinaryIO, *, destination: str) -> ImageInspection:
    """Sniff and header-decode ``stream``, leaving it rewound to byte zero.

    Raises:
        UploadReadError: If the stream cannot be read or rewound
        UnsupportedFormatError: If the sniffed type has no decoder
        CorruptImageError: If the header of a recognised format does not decode
    """
    logger.debug("Inspecting upload", extra={"destination": destination})

    try:
        prefix = stream.read(SNIFF_LENGTH)
    except Exception as exc:
        logger.exception("Unable to read upload header", extra={"destination": destination})
        raise UploadReadError(
            message="Unable to read the uploaded file",
            details={"destination": destination},
        ) from exc

    content_type = detect_mime_type(prefix)
    decoder = get_decoder(content_type)
    if decoder is None:
        logger.warning(
            "Unsupported picture format",
            extra={"destination": destination, "format": content_type},
        )
        raise UnsupportedFormatError(
            message="Unsupported image format",
            details={"format": content_type},
        )

    _rewind(stream, destination=destination)

    try:
        dimensions = decoder(stream)
    except ImageDecodeError as exc:
        logger.error(
            "Picture header could not be decoded",
            extra={"destination": destination, "format": content_type, "error": str(exc)},
        )
        raise CorruptImageError(
            message="Image file is corrupt or truncated",
            details={"format": content_type},
        ) from exc

    _rewind(stream, destination=destination)

    return ImageInspection(
        content_type=content_type,
        width=dimensions.width,
        height=dimensions.height,
    )
