from typing import Literal

import phonenumbers
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.exceptions import ConfigurationError


class DirectorySettings(BaseSettings):
    search_limit: int = Field(default=100, ge=1, le=10_000)
    phone_region: str = Field(
        default="CA",
        description="Region assumed for phone numbers written without a country code",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["text", "json"] = "text"
    environment: str = "development"

    model_config = SettingsConfigDict(env_prefix="DIRECTORY_")

    @field_validator("phone_region")
    @classmethod
    def validate_phone_region(cls, v: str) -> str:
        region = v.upper()
        if region not in phonenumbers.SUPPORTED_REGIONS:
            raise ValueError(f"Unsupported phone region: {v}")
        return region


class DatabaseSettings(BaseSettings):
    url: str = "sqlite:///data/rider_directory.db"
    echo: bool = False

    model_config = SettingsConfigDict(env_prefix="DATABASE_")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if "://" not in v:
            raise ValueError("Database URL must include a dialect, e.g. sqlite:///path.db")
        return v


class RedisSettings(BaseSettings):
    enabled: bool = False
    host: str = "localhost"
    port: int = 6379
    db: int = 0
    password: str | None = None
    ssl: bool = False

    model_config = SettingsConfigDict(env_prefix="REDIS_")


class Settings(BaseSettings):
    directory: DirectorySettings = Field(default_factory=DirectorySettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        case_sensitive=False,
    )


def get_settings() -> Settings:
    """Load and validate settings from environment variables.

    Raises:
        ConfigurationError: If any environment value fails validation.
    """
    try:
        return Settings()
    except ValidationError as e:
        fields = sorted({".".join(str(part) for part in error["loc"]) for error in e.errors()})
        raise ConfigurationError(
            f"Invalid settings: {', '.join(fields)}",
            details={"errors": e.errors(include_url=False)},
        ) from e
