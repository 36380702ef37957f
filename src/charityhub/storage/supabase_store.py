"""Supabase Storage strategies."""

import asyncio
import logging
from typing import Optional

from storage3.exceptions import StorageApiError
from supabase import Client, ClientOptions, create_client

from charityhub.core.logging import upload_path_context
from charityhub.models.upload import StorageOutcome, UploadFailure, UploadRequest, UploadSuccess
from charityhub.services.upload.exceptions import StorageStrategyError
from charityhub.services.upload.naming import generate_path
from charityhub.storage.base import StorageStrategy, StoreConfig

logger = logging.getLogger(__name__)


def create_store_client(config: StoreConfig) -> Client:
    """Create a server-side Supabase client that keeps no session."""
    return create_client(
        config.url,
        config.key,
        options=ClientOptions(auto_refresh_token=False, persist_session=False),
    )


class SupabaseStorageStrategy(StorageStrategy):
    """Upload to a Supabase Storage bucket with one set of credentials.

    The client is created lazily on first use. Passing ``client`` skips
    creation, which is how tests inject a fake store.
    """

    name = "supabase"

    def __init__(self, config: Optional[StoreConfig], client: Optional[Client] = None):
        self._config = config
        self._client = client

    @property
    def cache_control(self) -> str:
        return self._config.cache_control if self._config else "3600"

    def _get_client(self) -> Client:
        """Lazy-load and cache the Supabase client."""
        if self._client is None:
            if self._config is None:
                raise StorageStrategyError("Supabase not configured")
            self._client = create_store_client(self._config)
        return self._client

    async def attempt(self, request: UploadRequest, bucket: str, folder: str) -> StorageOutcome:
        path = generate_path(folder, request.filename, request.content_type)
        upload_path_context.set(path)
        log_fields = {
            "strategy": self.name,
            "bucket": bucket,
            "path": path,
            "user_id": request.user_id,
        }

        try:
            url = await asyncio.to_thread(self._upload, bucket, path, request)
        except StorageApiError as e:
            reason = f"Upload failed: {getattr(e, 'message', None) or e}"
        except StorageStrategyError as e:
            reason = str(e)
        except Exception as e:
            reason = f"Upload failed: {type(e).__name__}: {e}"
        else:
            logger.info("Image stored", extra=log_fields)
            return UploadSuccess(url=url, path=path, strategy=self.name)

        logger.warning(
            "Storage strategy failed",
            extra={**log_fields, "reason": reason},
        )
        return UploadFailure(reason=reason, strategy=self.name)

    def _upload(self, bucket: str, path: str, request: UploadRequest) -> str:
        """Put the bytes at ``path`` and resolve the public URL (blocking)."""
        bucket_api = self._get_client().storage.from_(bucket)
        bucket_api.upload(
            path,
            request.content,
            file_options={
                "content-type": request.content_type,
                "cache-control": self.cache_control,
                "upsert": "false",
            },
        )

        url = bucket_api.get_public_url(path)
        if not url:
            raise StorageStrategyError("Upload failed: store returned no public URL")
        return url


class PrivilegedStorageStrategy(SupabaseStorageStrategy):
    """Uploads with the service role key, bypassing row level security."""

    name = "privileged"


class ScopedStorageStrategy(SupabaseStorageStrategy):
    """Uploads with the anon key, subject to the bucket's access policies."""

    name = "scoped"
