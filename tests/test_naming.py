"""Tests for storage path generation."""

import re
from unittest.mock import patch

from charityhub.services.upload.naming import (
    extract_extension,
    generate_path,
    normalize_folder,
)

PATH_RE = re.compile(r"^uploads/(\d{13})-([0-9a-f]{16})\.([a-z0-9]+)$")


def test_generate_path_format():
    path = generate_path("uploads", "holiday.JPG")

    match = PATH_RE.match(path)
    assert match is not None
    assert match.group(3) == "jpg"


def test_generate_path_uses_millisecond_timestamp():
    with patch("charityhub.services.upload.naming.time.time", return_value=1700000000.123):
        path = generate_path("programs", "cover.png")

    assert path.startswith("programs/1700000000123-")


def test_no_collisions_within_same_millisecond():
    """Random tokens keep paths unique even when the clock does not move."""
    with patch("charityhub.services.upload.naming.time.time", return_value=1700000000.0):
        paths = {generate_path("uploads", "a.png") for _ in range(100_000)}

    assert len(paths) == 100_000


def test_extract_extension_from_filename():
    assert extract_extension("photo.jpeg") == "jpeg"
    assert extract_extension("archive.tar.gz") == "gz"
    assert extract_extension("UPPER.PNG") == "png"
    assert extract_extension("dir/sub/pic.webp") == "webp"


def test_extract_extension_without_dot_uses_content_type():
    assert extract_extension("snapshot", "image/png") == "png"
    assert extract_extension("snapshot", "image/jpeg") == "jpg"
    assert extract_extension("trailing.", "image/gif") == "gif"
    assert extract_extension(".hidden", "image/webp") == "webp"


def test_extract_extension_defaults_to_bin():
    assert extract_extension("snapshot") == "bin"
    assert extract_extension(None, None) == "bin"
    assert extract_extension("", "image/x-unknown-thing") == "bin"


def test_extract_extension_ignores_unsafe_suffix():
    assert extract_extension("evil.p$p", "image/png") == "png"
    assert extract_extension("long.abcdefghijklmnop") == "bin"


def test_normalize_folder():
    assert normalize_folder("uploads") == "uploads"
    assert normalize_folder("/programs/covers/") == "programs/covers"
    assert normalize_folder("../../etc") == "etc"
    assert normalize_folder("") == "uploads"
    assert normalize_folder(None, default="blog") == "blog"
    assert normalize_folder("./..", default="blog") == "blog"
