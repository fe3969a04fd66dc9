"""
Application configuration and settings.
Centralized configuration management using Pydantic Settings.
"""
from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from bizbot.core.routing import AuthorizationPolicy


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Variables used by the web front end (MONGODB_URI, GEMINI_API_KEY, ...) share the .env file
    model_config = SettingsConfigDict(
        extra="ignore",
        populate_by_name=True,
        case_sensitive=False,
        env_file=[".env", ".env.local"],  # .env.local overrides .env
    )

    # Application settings
    app_name: str = "BizBot API"
    environment: str = Field(default="local", validation_alias="SYSTEM_ENVIRONMENT")
    debug: bool = Field(default=False, validation_alias="DEBUG")

    # Authentication settings
    jwt_secret: str = Field(default="fallback-secret-key", validation_alias="JWT_SECRET")
    route_auth_policy: AuthorizationPolicy = Field(
        default=AuthorizationPolicy.DEFERRED_TO_CLIENT, validation_alias="ROUTE_AUTH_POLICY"
    )

    # CORS settings
    allowed_origins: Optional[List[str]] = Field(default=None, validation_alias="ALLOWED_ORIGINS")

    # Logging settings
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    enable_request_logging: bool = Field(default=True, validation_alias="ENABLE_REQUEST_LOGGING")

    # OpenAI settings
    openai_api_key: str = Field(default="", validation_alias="OPENAI_API_KEY")
    openai_model: str = Field(default="gpt-4o-mini", validation_alias="OPENAI_MODEL")
    openai_temperature: float = Field(default=0.9, validation_alias="OPENAI_TEMPERATURE")
    openai_max_tokens: int = Field(default=200, validation_alias="OPENAI_MAX_TOKENS")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
