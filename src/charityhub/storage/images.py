"""Management operations on stored images: delete, public URL, diagnostics."""

import logging
from typing import Any, Dict, Optional

import httpx
from storage3.exceptions import StorageApiError
from supabase import Client
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from charityhub.services.upload.exceptions import ImageStoreError
from charityhub.storage.base import StoreConfig
from charityhub.storage.supabase_store import create_store_client

logger = logging.getLogger(__name__)


class TransientStoreError(ImageStoreError):
    """Store call failed in a way worth retrying (network, 5xx)."""
    pass


def _error_message(error: Exception) -> str:
    return getattr(error, "message", None) or str(error)


def _is_server_error(error: StorageApiError) -> bool:
    try:
        return int(getattr(error, "status", 0) or 0) >= 500
    except (TypeError, ValueError):
        return False


class ImageStore:
    """Wraps one Supabase client for image housekeeping."""

    def __init__(self, config: Optional[StoreConfig], client: Optional[Client] = None):
        self._config = config
        self._client = client

    @property
    def configured(self) -> bool:
        return self._client is not None or self._config is not None

    def _get_client(self) -> Client:
        """Lazy-load and cache the Supabase client."""
        if self._client is None:
            if self._config is None:
                raise ImageStoreError("Supabase not configured")
            self._client = create_store_client(self._config)
        return self._client

    def delete_image(self, path: str, bucket: str = "images") -> None:
        """Remove ``path`` from ``bucket``.

        Raises:
            ImageStoreError: If the store is not configured or rejects the delete
        """
        client = self._get_client()
        try:
            self._remove(client, bucket, path)
        except StorageApiError as e:
            logger.error(
                "Storage delete failed",
                extra={"bucket": bucket, "path": path, "error": _error_message(e)},
            )
            raise ImageStoreError(f"Delete failed: {_error_message(e)}") from e
        except TransientStoreError as e:
            logger.error(
                "Storage delete failed after retries",
                extra={"bucket": bucket, "path": path, "error": str(e)},
            )
            raise ImageStoreError(f"Delete failed: {e}") from e

        logger.info("Image deleted", extra={"bucket": bucket, "path": path})

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
        retry=retry_if_exception_type(TransientStoreError),
        reraise=True,
    )
    def _remove(self, client: Client, bucket: str, path: str) -> None:
        try:
            client.storage.from_(bucket).remove([path])
        except StorageApiError as e:
            if _is_server_error(e):
                raise TransientStoreError(_error_message(e)) from e
            raise
        except (httpx.TransportError, ConnectionError, TimeoutError) as e:
            raise TransientStoreError(str(e)) from e

    def get_image_url(self, path: str, bucket: str = "images") -> str:
        """Public URL for ``path``, or an empty string when unconfigured."""
        if not self.configured:
            return ""
        return self._get_client().storage.from_(bucket).get_public_url(path)

    def check_storage(self, images_bucket: str = "images") -> Dict[str, Any]:
        """Describe the store's buckets for troubleshooting uploads.

        Never raises for store-side problems; they are reported in the body.
        """
        try:
            buckets = self._get_client().storage.list_buckets()
        except ImageStoreError:
            raise
        except Exception as e:
            logger.warning("Failed to list buckets", extra={"error": _error_message(e)})
            return {
                "error": "Failed to list buckets",
                "bucketError": _error_message(e),
                "supabaseConfigured": True,
                "storageAvailable": True,
            }

        buckets = buckets or []
        images = next((b for b in buckets if b.name == images_bucket), None)

        return {
            "success": True,
            "supabaseConfigured": True,
            "storageAvailable": True,
            "buckets": [{"name": b.name, "public": b.public} for b in buckets],
            "imagesBucket": {
                "name": images.name,
                "public": images.public,
                "fileSizeLimit": getattr(images, "file_size_limit", None),
                "allowedMimeTypes": getattr(images, "allowed_mime_types", None),
            }
            if images
            else None,
            "bucketCount": len(buckets),
        }
