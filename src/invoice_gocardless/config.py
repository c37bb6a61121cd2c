"""Configuration management for the GoCardless invoice driver."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GoCardlessSettings(BaseSettings):
    """GoCardless API credentials and client settings."""

    access_token_live: str = Field(default="", description="Live access token")
    access_token_sandbox: str = Field(default="", description="Sandbox access token")
    timeout_seconds: float = Field(default=10.0, description="Request timeout")
    api_version: str = Field(default="2015-07-06", description="GoCardless-Version header")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Log level")
    log_format_json: bool = Field(default=True, description="Render logs as JSON")

    # GoCardless
    gocardless: GoCardlessSettings = Field(default_factory=GoCardlessSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in ("production", "prod")


# Global settings instance
settings = Settings()
