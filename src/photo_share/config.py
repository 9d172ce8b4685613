"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

MIN_UPLOAD_CONCURRENCY = 1
MAX_UPLOAD_CONCURRENCY = 20


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    upload_endpoint_url: str
    serving_origin: str
    supabase_url: str
    supabase_service_key: str
    admin_token: str
    storage_bucket: str = "photo-share"
    upload_folder: str = "photo-share-albums"
    retention_hours: int = 24
    upload_concurrency: int = 6
    upload_max_retries: int = 3
    retry_base_delay_seconds: float = 0.8
    retry_max_jitter_seconds: float = 0.25
    worker_delay_seconds: float = 0.2
    upload_timeout_seconds: float = 60
    sweep_interval_seconds: float = 3600
    reclaim_interval_seconds: float = 86400
    scheduler_enabled: bool = True
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def clamp_concurrency(requested: int | None, default: int = 6) -> int:
    """Clamp a requested worker count into the supported range."""
    value = default if requested is None else requested
    return max(MIN_UPLOAD_CONCURRENCY, min(value, MAX_UPLOAD_CONCURRENCY))


def build_share_link(serving_origin: str, album_id: str) -> str:
    """Return the public share link for an album."""
    return f"{serving_origin.rstrip('/')}/album/{album_id}"
