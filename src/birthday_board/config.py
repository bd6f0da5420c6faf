"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from birthday_board.domain.render import PhotoConfig, RenderAssets

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    storage_bucket: str = "birthday-images"
    signed_url_ttl_hours: int = 336
    photos_base_url: str = ""
    teams_webhook_url: str | None = None
    assets_dir: Path = Path("assets")
    photos_dir: Path = Path("photos")
    roster_csv_path: Path = Path("birthdays.csv")
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def photo_config(self) -> PhotoConfig:
        """Return the photo lookup configuration for the renderer."""
        return PhotoConfig(
            base_url=self.photos_base_url.strip(),
            local_dir=self.photos_dir,
        )

    def render_assets(self) -> RenderAssets:
        """Return the asset bundle laid out under the assets directory."""
        return RenderAssets.from_dir(self.assets_dir)
