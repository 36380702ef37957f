"""Upload data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field


class RejectionReason(str, Enum):
    """Why an upload was refused before any storage strategy ran."""

    MISSING_FILE = "missing_file"
    NOT_AN_IMAGE = "not_an_image"
    TOO_LARGE = "too_large"

    @property
    def message(self) -> str:
        """Client-facing error text for this reason."""
        return _REJECTION_MESSAGES[self]


_REJECTION_MESSAGES = {
    RejectionReason.MISSING_FILE: "No file provided",
    RejectionReason.NOT_AN_IMAGE: "File must be an image",
    RejectionReason.TOO_LARGE: "File size must be less than 5MB",
}


@dataclass(frozen=True)
class UploadRequest:
    """A single uploaded file together with its target location.

    Lives only for the duration of the request that created it.
    """

    content: bytes
    content_type: str
    size_bytes: int
    filename: str = "upload"
    bucket: str = "images"
    folder: str = "uploads"
    user_id: Optional[str] = None


@dataclass(frozen=True)
class ValidationVerdict:
    """Result of checking an upload against the image policy."""

    reason: Optional[RejectionReason] = None

    @property
    def accepted(self) -> bool:
        return self.reason is None

    @classmethod
    def accept(cls) -> "ValidationVerdict":
        return cls()

    @classmethod
    def reject(cls, reason: RejectionReason) -> "ValidationVerdict":
        return cls(reason=reason)


@dataclass(frozen=True)
class UploadSuccess:
    """A strategy stored (or synthesized) the file."""

    url: str
    path: str
    strategy: str


@dataclass(frozen=True)
class UploadFailure:
    """A strategy could not store the file."""

    reason: str
    strategy: str


StorageOutcome = Union[UploadSuccess, UploadFailure]


@dataclass(frozen=True)
class ChainResult:
    """Final answer of the strategy chain.

    ``failures`` lists the reasons of every strategy that was tried and failed
    before ``outcome``, in the order they ran. They are for logging only.
    """

    outcome: UploadSuccess
    failures: tuple[UploadFailure, ...] = field(default_factory=tuple)
    is_placeholder: bool = False

    @property
    def url(self) -> str:
        return self.outcome.url

    @property
    def path(self) -> str:
        return self.outcome.path

    @property
    def strategy(self) -> str:
        return self.outcome.strategy


class UploadImageResponse(BaseModel):
    """Response model for image upload."""

    url: str
    path: str
    message: Optional[str] = None


class DeleteImageRequest(BaseModel):
    """Request model for deleting a stored image."""

    path: str = Field(..., min_length=1, description="Storage-relative object path")
    bucket: Optional[str] = Field(None, description="Bucket name, defaults to the upload bucket")


class DeleteImageResponse(BaseModel):
    """Response model for image deletion."""

    success: bool


class ImageUrlResponse(BaseModel):
    """Response model for public URL lookup."""

    url: str
