"""Inline SVG placeholder images and the strategy that serves them."""

import base64
import logging
from xml.sax.saxutils import escape

from charityhub.core.logging import upload_path_context
from charityhub.models.upload import StorageOutcome, UploadRequest, UploadSuccess
from charityhub.services.upload.naming import generate_path
from charityhub.storage.base import StorageStrategy

logger = logging.getLogger(__name__)

SVG_DATA_URL_PREFIX = "data:image/svg+xml;base64,"


def _svg_data_url(svg: str) -> str:
    return SVG_DATA_URL_PREFIX + base64.b64encode(svg.encode("utf-8")).decode("ascii")


def generate_placeholder_image(
    width: int = 400,
    height: int = 300,
    text: str = "Image",
    bg_color: str = "#f3f4f6",
    text_color: str = "#6b7280",
) -> str:
    """Return an SVG placeholder showing ``text`` as a base64 data URL."""
    label = escape(text)
    svg = (
        f'<svg width="{width}" height="{height}" xmlns="http://www.w3.org/2000/svg">'
        f'<rect width="100%" height="100%" fill="{escape(bg_color)}"/>'
        f'<text x="50%" y="50%" font-family="Arial, sans-serif" font-size="16" '
        f'fill="{escape(text_color)}" text-anchor="middle" dy=".3em">{label}</text>'
        f'<text x="50%" y="70%" font-family="Arial, sans-serif" font-size="12" '
        f'fill="{escape(text_color)}" text-anchor="middle">\U0001F4F7</text>'
        "</svg>"
    )
    return _svg_data_url(svg)


def generate_simple_placeholder(width: int = 400, height: int = 300, color: str = "#e5e7eb") -> str:
    """Return a plain colored rectangle as a base64 data URL."""
    svg = (
        f'<svg width="{width}" height="{height}" xmlns="http://www.w3.org/2000/svg">'
        f'<rect width="100%" height="100%" fill="{escape(color)}"/>'
        "</svg>"
    )
    return _svg_data_url(svg)


class PlaceholderStrategy(StorageStrategy):
    """Synthesizes an inline image instead of storing anything.

    Never touches the network and always succeeds, so it ends every chain.
    """

    name = "placeholder"
    terminal = True

    def __init__(self, width: int = 400, height: int = 300):
        self.width = width
        self.height = height

    async def attempt(self, request: UploadRequest, bucket: str, folder: str) -> StorageOutcome:
        path = generate_path(folder, request.filename, request.content_type)
        upload_path_context.set(path)
        url = generate_placeholder_image(
            width=self.width,
            height=self.height,
            text=request.filename or "Image",
        )
        logger.info(
            "Serving placeholder image",
            extra={"strategy": self.name, "bucket": bucket, "path": path},
        )
        return UploadSuccess(url=url, path=path, strategy=self.name)
