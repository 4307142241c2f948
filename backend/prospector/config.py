from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process configuration, read once at startup and never mutated."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"
    # Comma-separated list of origins allowed to call the API from a browser
    allowed_origins: str = "http://localhost:3000,http://localhost:5500"

    # Firebase Admin credentials: a service-account file path or the JSON inline
    google_application_credentials: str = ""
    firebase_service_account: str = ""

    # Secret Google keys, NEVER returned to clients (except the referrer-restricted maps key)
    google_places_api_key: str = ""
    google_maps_api_key: str = ""  # falls back to the places key when empty
    upstream_timeout_seconds: float = 10.0

    # Public Firebase web client config, echoed by /api/config
    firebase_web_api_key: str | None = None
    firebase_auth_domain: str | None = None
    firebase_project_id: str | None = None
    firebase_storage_bucket: str | None = None
    firebase_messaging_sender_id: str | None = None
    firebase_app_id: str | None = None

    @field_validator(
        "google_places_api_key",
        "google_maps_api_key",
        "google_application_credentials",
        "firebase_service_account",
        mode="before",
    )
    @classmethod
    def _strip(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @property
    def places_api_key(self) -> str:
        return self.google_places_api_key

    @property
    def maps_api_key(self) -> str:
        return self.google_maps_api_key or self.google_places_api_key

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
