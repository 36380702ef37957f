"""Configuration management for the CharityHub media service."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from charityhub.storage.base import StoreConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    ENV: str = "local"
    SERVICE_NAME: str = "charityhub-media"
    SERVICE_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"

    # Supabase Configuration
    SUPABASE_URL: str = ""
    SUPABASE_ANON_KEY: str = ""
    SUPABASE_SERVICE_ROLE_KEY: str = ""
    SUPABASE_SERVICE_KEY: str = ""  # Legacy name for the service role key

    # Upload Defaults
    DEFAULT_UPLOAD_BUCKET: str = "images"
    DEFAULT_UPLOAD_FOLDER: str = "uploads"
    STORAGE_ATTEMPT_TIMEOUT_SECONDS: float = 10.0  # 0 disables the per-strategy timeout
    STORAGE_CACHE_CONTROL: str = "3600"

    # Placeholder Image
    PLACEHOLDER_WIDTH: int = 400
    PLACEHOLDER_HEIGHT: int = 300

    @property
    def service_role_key(self) -> str:
        """Elevated key, preferring SUPABASE_SERVICE_ROLE_KEY over the legacy name."""
        return self.SUPABASE_SERVICE_ROLE_KEY or self.SUPABASE_SERVICE_KEY

    @property
    def supabase_configured(self) -> bool:
        """True when both the store URL and the anon key are set."""
        return bool(self.SUPABASE_URL and self.SUPABASE_ANON_KEY)

    @property
    def privileged_store_config(self) -> StoreConfig | None:
        """Store credentials for the elevated (service role) client."""
        if not self.SUPABASE_URL or not self.service_role_key:
            return None
        return StoreConfig(
            url=self.SUPABASE_URL,
            key=self.service_role_key,
            cache_control=self.STORAGE_CACHE_CONTROL,
        )

    @property
    def scoped_store_config(self) -> StoreConfig | None:
        """Store credentials for the caller-level (anon) client."""
        if not self.supabase_configured:
            return None
        return StoreConfig(
            url=self.SUPABASE_URL,
            key=self.SUPABASE_ANON_KEY,
            cache_control=self.STORAGE_CACHE_CONTROL,
        )

    @property
    def attempt_timeout(self) -> float | None:
        """Per-strategy timeout in seconds, None when disabled."""
        if self.STORAGE_ATTEMPT_TIMEOUT_SECONDS <= 0:
            return None
        return self.STORAGE_ATTEMPT_TIMEOUT_SECONDS


# Singleton settings instance
settings = Settings()
