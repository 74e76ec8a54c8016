"""Generation of unique storage keys."""

import re
import uuid
from pathlib import PurePath

# Path separators and control characters never appear in a storage key
_UNSAFE_KEY_CHARS = re.compile(r"[\x00-\x1f\x7f/\\]")


def generate_unique_name() -> str:
    """Return a random, non-sequential identifier."""
    return uuid.uuid4().hex


def has_unsafe_chars(value: str) -> bool:
    return _UNSAFE_KEY_CHARS.search(value) is not None


def is_bare_key(key: str) -> bool:
    """Whether ``key`` is a plain file name that every backend can address."""
    return bool(key) and key not in {".", ".."} and not has_unsafe_chars(key)


def build_destination(filename: str) -> str:
    """Build a storage key from a fresh unique name and the upload's extension.

    The extension is taken verbatim from ``filename`` and may be empty. An
    extension holding a separator or control character is dropped, so the
    key always satisfies ``is_bare_key``.

    Example:
        build_destination("cat.png") -> "3f2b...9c.png"
    """
    suffix = PurePath(filename).suffix
    if has_unsafe_chars(suffix):
        suffix = ""
    return generate_unique_name() + suffix
