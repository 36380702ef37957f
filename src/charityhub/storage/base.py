"""Abstract storage strategy interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from charityhub.models.upload import StorageOutcome, UploadRequest


@dataclass(frozen=True)
class StoreConfig:
    """Credentials for one client of the object store."""

    url: str
    key: str
    cache_control: str = "3600"


class StorageStrategy(ABC):
    """One way of getting an uploaded file to a retrievable URL.

    Implementations never raise past ``attempt``: store errors are
    reported as ``UploadFailure``.
    """

    #: Identifier used in logs and results
    name: str = "base"

    #: A terminal strategy always succeeds and may end a chain
    terminal: bool = False

    @abstractmethod
    async def attempt(self, request: UploadRequest, bucket: str, folder: str) -> StorageOutcome:
        """Try to store the file.

        Args:
            request: Upload being handled
            bucket: Target bucket name
            folder: Prefix inside the bucket

        Returns:
            UploadSuccess with the public URL and storage path, or
            UploadFailure with a reason
        """
        pass
