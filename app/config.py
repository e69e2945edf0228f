"""
Configuration handling for the learn-python service
Loads and validates environment variables once per process
"""
from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Environment name that switches off request logging
TEST_ENVIRONMENT = "test"


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        frozen=True,
    )

    # Application settings
    APP_NAME: str = "learn-python"
    APP_VERSION: str = "0.0.1"
    APP_ENV: str = Field(
        "development",
        validation_alias=AliasChoices("APP_ENV", "GO_ENV", "ENVIRONMENT"),
    )

    # Listener settings
    HOST: str = "127.0.0.1"
    PORT: int = 8080

    # CORS settings
    CORS_ORIGIN: str = "*"

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # Tracing
    OTEL_EXPORTER_OTLP_ENDPOINT: Optional[str] = None

    @field_validator("APP_ENV")
    @classmethod
    def normalize_environment(cls, v: str) -> str:
        """Normalize the environment name"""
        v = v.strip().lower()
        return v or "development"

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port range"""
        if not 0 < v < 65536:
            raise ValueError("PORT must be between 1 and 65535")
        return v

    @field_validator("APP_VERSION", "CORS_ORIGIN")
    @classmethod
    def default_when_blank(cls, v: str, info: ValidationInfo) -> str:
        """Treat blank values like unset ones"""
        if v.strip():
            return v.strip()
        return cls.model_fields[info.field_name].default

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {', '.join(allowed)}")
        return v.upper()

    @property
    def is_test(self) -> bool:
        return self.APP_ENV == TEST_ENVIRONMENT


@lru_cache()
def get_settings() -> Settings:
    """Resolve settings once for the lifetime of the process"""
    return Settings()
