"""Builds storage objects from application settings."""

from charityhub.core.config import settings
from charityhub.storage.chain import UploadChain
from charityhub.storage.images import ImageStore
from charityhub.storage.placeholder import PlaceholderStrategy
from charityhub.storage.supabase_store import PrivilegedStorageStrategy, ScopedStorageStrategy


def get_placeholder_strategy() -> PlaceholderStrategy:
    return PlaceholderStrategy(
        width=settings.PLACEHOLDER_WIDTH,
        height=settings.PLACEHOLDER_HEIGHT,
    )


def get_upload_chain() -> UploadChain:
    """Default chain: service role key, then anon key, then placeholder."""
    return UploadChain(
        [
            PrivilegedStorageStrategy(settings.privileged_store_config),
            ScopedStorageStrategy(settings.scoped_store_config),
            get_placeholder_strategy(),
        ],
        attempt_timeout=settings.attempt_timeout,
    )


def get_fallback_chain() -> UploadChain:
    """Chain that only serves placeholders."""
    return UploadChain([get_placeholder_strategy()])


def get_image_store() -> ImageStore:
    """Image store using the elevated key when set, else the anon key."""
    return ImageStore(settings.privileged_store_config or settings.scoped_store_config)
