"""
Image upload pipeline

Validates incoming images and names their storage paths before the
storage strategy chain runs.
"""

from charityhub.services.upload.exceptions import (
    StorageChainError,
    StorageStrategyError,
    UploadServiceError,
    UploadValidationError,
)
from charityhub.services.upload.naming import extract_extension, generate_path
from charityhub.services.upload.validator import (
    MAX_IMAGE_SIZE_BYTES,
    validate_image,
)

__all__ = [
    "MAX_IMAGE_SIZE_BYTES",
    "StorageChainError",
    "StorageStrategyError",
    "UploadServiceError",
    "UploadValidationError",
    "extract_extension",
    "generate_path",
    "validate_image",
]
