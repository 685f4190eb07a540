"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "solverhub_user"
    postgres_password: str = "password"
    postgres_db: str = "solverhub_db"

    # Full URL override (e.g. sqlite:///./solverhub.db)
    database_url: Optional[str] = None

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440

    # Identity
    require_email_confirmation: bool = False
    demo_accounts_enabled: bool = True

    # Demo catalogue: served when list reads fail, and used for seeding
    demo_mode: bool = False
    seed_demo_data: bool = False
    auto_create_tables: bool = True

    # App
    debug: bool = False
    log_level: str = "INFO"

    @property
    def postgres_url(self) -> str:
        """Construct the database connection URL"""
        if self.database_url is not None:
            return self.database_url
        if not self.postgres_host:
            return ""
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def is_configured(self) -> bool:
        """Backend endpoint and signing key are both present."""
        return bool(self.postgres_url) and bool(self.jwt_secret_key)

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
