"""Unique storage path generation for uploaded files."""

import mimetypes
import re
import time
from typing import Optional
from uuid import uuid4

DEFAULT_EXTENSION = "bin"
_EXTENSION_RE = re.compile(r"^[a-z0-9]{1,10}$")

# Platform mime tables disagree on image extensions
_PREFERRED_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/svg+xml": "svg",
}


def extract_extension(filename: Optional[str], content_type: Optional[str] = None) -> str:
    """Return the lowercase extension to use for a stored file.

    The extension is the text after the last ``.`` in ``filename``. When the
    name has no usable extension (no dot, trailing dot, or characters other
    than letters and digits) it is derived from ``content_type``, and failing
    that falls back to ``bin``.
    """
    if filename:
        base = filename.replace("\\", "/").rsplit("/", 1)[-1]
        if "." in base.strip("."):
            candidate = base.rsplit(".", 1)[-1].lower()
            if _EXTENSION_RE.match(candidate):
                return candidate

    if content_type:
        mime = content_type.split(";", 1)[0].strip().lower()
        if mime in _PREFERRED_EXTENSIONS:
            return _PREFERRED_EXTENSIONS[mime]
        guessed = mimetypes.guess_extension(mime)
        if guessed:
            return guessed.lstrip(".")

    return DEFAULT_EXTENSION


def normalize_folder(folder: Optional[str], default: str = "uploads") -> str:
    """Strip leading/trailing slashes and drop traversal segments."""
    parts = [
        part
        for part in (folder or "").replace("\\", "/").split("/")
        if part and part not in {".", ".."}
    ]
    return "/".join(parts) or default


def generate_path(
    folder: Optional[str],
    original_filename: Optional[str],
    content_type: Optional[str] = None,
) -> str:
    """Build ``{folder}/{timestamp}-{token}.{extension}`` for a new object.

    Uniqueness is probabilistic: a millisecond timestamp plus 64 random bits.
    The store is not consulted for collisions.
    """
    timestamp_ms = int(time.time() * 1000)
    token = uuid4().hex[:16]
    extension = extract_extension(original_filename, content_type)
    return f"{normalize_folder(folder)}/{timestamp_ms}-{token}.{extension}"
