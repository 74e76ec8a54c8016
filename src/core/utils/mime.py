"""Content type sniffing from leading magic bytes.

The client supplied filename and Content-Type header are never trusted;
classification only looks at the first ``SNIFF_LENGTH`` bytes. The table
recognises more types than the service accepts so that rejections can name
what was actually uploaded.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from core.utils.constants import FALLBACK_CONTENT_TYPE, SNIFF_LENGTH

TEXT_PLAIN = "text/plain"

_WHITESPACE = b"\t\n\x0c\r "
_TAG_TERMINATORS = b" >"

_HTML_TAGS: tuple[bytes, ...] = (
    b"<!DOCTYPE HTML",
    b"<HTML",
    b"<HEAD",
    b"<SCRIPT",
    b"<IFRAME",
    b"<H1",
    b"<DIV",
    b"<FONT",
    b"<TABLE",
    b"<A",
    b"<STYLE",
    b"<TITLE",
    b"<B",
    b"<BODY",
    b"<BR",
    b"<P",
    b"<!--",
)

MAGIC_BYTES: Mapping[bytes, str] = {
    b"%PDF-": "application/pdf",
    b"%!PS-Adobe-": "application/postscript",
    b"\xfe\xff": TEXT_PLAIN,
    b"\xff\xfe": TEXT_PLAIN,
    b"\xef\xbb\xbf": TEXT_PLAIN,
    b"\x00\x00\x01\x00": "image/x-icon",
    b"\x00\x00\x02\x00": "image/x-icon",
    b"BM": "image/bmp",
    b"GIF87a": "image/gif",
    b"GIF89a": "image/gif",
    b"\x89PNG\r\n\x1a\n": "image/png",
    b"\xff\xd8\xff": "image/jpeg",
    b"II*\x00": "image/tiff",
    b"MM\x00*": "image/tiff",
    b"\x1a\x45\xdf\xa3": "video/webm",
    b"OggS\x00": "application/ogg",
    b"ID3": "audio/mpeg",
    b"PK\x03\x04": "application/zip",
    b"\x1f\x8b\x08": "application/x-gzip",
    b"Rar!\x1a\x07\x00": "application/x-rar-compressed",
    b"Rar!\x1a\x07\x01\x00": "application/x-rar-compressed",
    b"\x00asm": "application/wasm",
    b"wOFF": "font/woff",
    b"wOF2": "font/woff2",
}


@dataclass(frozen=True)
class _RiffSignature:
    """RIFF container: ``RIFF`` + 4 size bytes + form type."""

    form_type: bytes
    content_type: str

    def matches(self, data: bytes) -> bool:
        return data.startswith(b"RIFF") and data[8 : 8 + len(self.form_type)] == self.form_type


RIFF_SIGNATURES: tuple[_RiffSignature, ...] = (
    _RiffSignature(b"WEBPVP", "image/webp"),
    _RiffSignature(b"AVI ", "video/avi"),
    _RiffSignature(b"WAVE", "audio/wave"),
)


def _is_html(data: bytes) -> bool:
    upper = data.upper()
    for tag in _HTML_TAGS:
        if upper.startswith(tag) and len(data) > len(tag) and data[len(tag)] in _TAG_TERMINATORS:
            return True
    return False


def _is_binary(data: bytes) -> bool:
    return any(
        byte <= 0x08 or byte == 0x0B or 0x0E <= byte <= 0x1A or 0x1C <= byte <= 0x1F
        for byte in data
    )


def detect_mime_type(file_data: bytes) -> str:
    """Classify ``file_data`` by its leading bytes.

    Always returns a MIME type string: ``text/plain`` for printable data
    nothing else matched, ``application/octet-stream`` for anything else.
    """
    data = file_data[:SNIFF_LENGTH]

    markup = data.lstrip(_WHITESPACE)
    if _is_html(markup):
        return "text/html"
    if markup.startswith(b"<?xml"):
        return "text/xml"

    for signature, mime in MAGIC_BYTES.items():
        if data.startswith(signature):
            return mime

    for riff in RIFF_SIGNATURES:
        if riff.matches(data):
            return riff.content_type

    if not _is_binary(data):
        return TEXT_PLAIN

    return FALLBACK_CONTENT_TYPE
