"""Image upload policy checks.

Runs before any storage strategy is selected, so the same limits apply
whichever strategy ends up storing the file.
"""

from typing import Optional

from charityhub.models.upload import RejectionReason, ValidationVerdict

MAX_IMAGE_SIZE_BYTES = 5 * 1024 * 1024
IMAGE_MIME_PREFIX = "image/"


def validate_image(content_type: Optional[str], size_bytes: int) -> ValidationVerdict:
    """Check a declared MIME type and byte length against the image policy.

    Args:
        content_type: Declared MIME type of the upload
        size_bytes: Declared length of the upload in bytes

    Returns:
        Accepting verdict, or a rejection naming the failed constraint.
        The MIME type is checked first, so a large non-image reports
        NOT_AN_IMAGE.
    """
    if not content_type or not content_type.startswith(IMAGE_MIME_PREFIX):
        return ValidationVerdict.reject(RejectionReason.NOT_AN_IMAGE)

    if size_bytes > MAX_IMAGE_SIZE_BYTES:
        return ValidationVerdict.reject(RejectionReason.TOO_LARGE)

    return ValidationVerdict.accept()
