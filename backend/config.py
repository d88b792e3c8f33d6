# backend/config.py

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """
    Application configuration settings loaded from environment variables.
    Provides validation and type casting for all settings.
    """

    service_name: str = Field(default="elastic-agent-backend", alias="SERVICE_NAME")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    json_logs: bool = Field(default=False, alias="JSON_LOGS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    api_key: str = Field(..., alias="API_KEY")
    tracing_enabled: bool = Field(default=False, alias="TRACING_ENABLED")

    # Server info as reported by the Go server hosting the plugin.
    go_server_id: str | None = Field(default=None, alias="GO_SERVER_ID")
    go_site_url: str | None = Field(default=None, alias="GO_SITE_URL")
    go_secure_site_url: str | None = Field(default=None, alias="GO_SECURE_SITE_URL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


settings = AppConfig()
