"""Header-only image decoders keyed by MIME type.

Each decoder parses just enough of the stream to report the picture's
dimensions and confirm that the container is structurally valid. Pixel
data is never loaded.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import BinaryIO

from PIL import Image

from core.utils.constants import MIME_TYPE_PILLOW_FORMAT_MAP


class ImageDecodeError(ValueError):
    """Raised when a stream is not a valid instance of the expected format."""


@dataclass(frozen=True)
class ImageDimensions:
    width: int
    height: int


Decoder = Callable[[BinaryIO], ImageDimensions]


def _pillow_decoder(pillow_format: str) -> Decoder:
    """Build a decoder that only accepts ``pillow_format``."""

    def decode(stream: BinaryIO) -> ImageDimensions:
        try:
            with Image.open(stream, formats=(pillow_format,)) as image:
                width, height = image.size
                # Walks the container structure (chunk CRCs for PNG) without
                # decoding pixels.
                image.verify()
        except Exception as exc:
            raise ImageDecodeError(f"Invalid {pillow_format} image: {exc}") from exc

        if width <= 0 or height <= 0:
            raise ImageDecodeError(
                f"Invalid {pillow_format} image dimensions: {width}x{height}"
            )

        return ImageDimensions(width=width, height=height)

    decode.__name__ = f"decode_{pillow_format.lower()}"
    return decode


DECODERS: Mapping[str, Decoder] = MappingProxyType(
    {
        mime_type: _pillow_decoder(pillow_format)
        for mime_type, pillow_format in MIME_TYPE_PILLOW_FORMAT_MAP.items()
    }
)


def is_supported(mime_type: str) -> bool:
    return mime_type in DECODERS


def get_decoder(mime_type: str) -> Decoder | None:
    return DECODERS.get(mime_type)
