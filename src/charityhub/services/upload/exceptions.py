"""Custom exceptions for the image upload pipeline."""

from charityhub.models.upload import RejectionReason


class UploadServiceError(Exception):
    """Base exception for the upload pipeline."""
    pass


class UploadValidationError(UploadServiceError):
    """Exception raised when an upload fails a precondition."""

    def __init__(self, reason: RejectionReason):
        super().__init__(reason.message)
        self.reason = reason


class StorageStrategyError(UploadServiceError):
    """Exception raised inside a storage strategy when the store rejects a call."""
    pass


class StorageChainError(UploadServiceError):
    """Exception raised when a strategy chain is misconfigured or exhausted."""
    pass


class ImageStoreError(UploadServiceError):
    """Exception raised when delete, URL or diagnostic operations fail."""
    pass
