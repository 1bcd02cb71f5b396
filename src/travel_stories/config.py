"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_PLACEHOLDER_IMAGE_URL = (
    "https://coffective.com/wp-content/uploads/2018/06/"
    "default-featured-image.png.jpg"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    access_token_secret: str
    access_token_expire_hours: int = 72
    jwt_algorithm: str = "HS256"
    server_url: str = "http://localhost:8000"
    upload_dir: str = "uploads"
    assets_dir: str = "assets"
    placeholder_image_url: str = DEFAULT_PLACEHOLDER_IMAGE_URL
    cors_allowed_origins: str = "*"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_allowed_origins(raw: str | None) -> list[str]:
    """Parse the comma-separated CORS origin list from env."""
    if raw is None:
        return ["*"]
    origins = [chunk.strip() for chunk in raw.split(",") if chunk.strip()]
    if not origins or "*" in origins:
        return ["*"]
    return [origin.rstrip("/") for origin in origins]
