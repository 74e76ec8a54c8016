"""Sample pictures in every supported format, generated with Pillow."""

import io

from PIL import Image

# mime type -> Pillow format, image mode
SAMPLE_FORMATS: dict[str, tuple[str, str]] = {
    "image/jpeg": ("JPEG", "RGB"),
    "image/png": ("PNG", "RGB"),
    "image/gif": ("GIF", "P"),
    "image/tiff": ("TIFF", "RGB"),
    "image/webp": ("WEBP", "RGB"),
    "image/bmp": ("BMP", "RGB"),
}

SAMPLE_EXTENSIONS: dict[str, str] = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/tiff": ".tiff",
    "image/webp": ".webp",
    "image/bmp": ".bmp",
}

SAMPLE_WIDTH = 3
SAMPLE_HEIGHT = 2

PLAIN_TEXT = b"This is definitely not a cat picture.\nJust some plain text.\n"


def make_image_bytes(
    mime_type: str,
    *,
    width: int = SAMPLE_WIDTH,
    height: int = SAMPLE_HEIGHT,
) -> bytes:
    """Encode a small solid picture in the format matching ``mime_type``."""
    pillow_format, mode = SAMPLE_FORMATS[mime_type]
    image = Image.new(mode, (width, height), color=1 if mode == "P" else (200, 30, 30))

    buffer = io.BytesIO()
    image.save(buffer, format=pillow_format)
    return buffer.getvalue()
