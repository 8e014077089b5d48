"""Configuration management using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_path: str = "./data/accounts.db"
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    # JWT Configuration
    # No default: signing and verification fail with ConfigurationError
    # until AUTH_PRIVATE_KEY is provided.
    auth_private_key: str | None = None
    bearer_token_expiry_minutes: int = 60
    refresh_token_expiry_days: int = 7

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False
    )


settings = Settings()
