"""
Configuration settings for the R&D Job Manager.
All sensitive values are loaded from environment variables.
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "R&D Job Manager"
    debug: bool = False
    environment: str = "production"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    app_url: str = "http://localhost:3000"
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    # Database (single-file SQLite by default, PostgreSQL URLs also accepted)
    database_url: str = "sqlite+aiosqlite:///./rnd_tasks.db"
    database_echo: bool = False

    # Email webhook
    trusted_sender_email: str = "marketing@kriyanusantara.com"

    # Google Sheets mirror
    default_spreadsheet_id: str = "1xY78Q5eIcZ8fUFnPI1EO9TsPxuqP40GNetXpQ6wdPhg"
    google_client_id: str = ""
    google_client_secret: str = ""
    sheets_sync_timeout: float = 30.0

    @property
    def google_redirect_uri(self) -> str:
        return f"{self.app_url.rstrip('/')}/auth/google/callback"


# Global settings instance
settings = Settings()
