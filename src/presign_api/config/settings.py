# src/presign_api/config/settings.py
import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from presign_api.errors import ConfigurationError

logger = logging.getLogger(__name__)

BUCKET_ENV_VAR = "AWS_S3_BUCKET"
REGION_ENV_VAR = "AWS_REGION"
REQUIRED_ENV_VARS = (BUCKET_ENV_VAR, REGION_ENV_VAR)
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Keyword arguments passed to the constructor (highest priority)
    2. Environment variables
    3. .env file (if exists)
    4. Default values in this class (lowest priority)

    The AWS settings are read from their conventional variable names; everything
    else is prefixed with ``PRESIGN_API_``.

    Usage:
        from presign_api.config.settings import load_settings
        settings = load_settings()
        bucket_name = settings.s3_bucket_name
    """

    # AWS Core Settings
    s3_bucket_name: str = Field(
        alias=BUCKET_ENV_VAR,
        min_length=1,
        description="S3 bucket that receives uploads",
    )

    aws_region: str = Field(
        alias=REGION_ENV_VAR,
        min_length=1,
        description="Region the S3 client signs for",
    )

    aws_endpoint_url: Optional[str] = Field(
        default=None,
        alias="AWS_ENDPOINT_URL",
        description="Override for the S3 endpoint, e.g. a LocalStack or moto server",
    )

    # Server Settings
    host: str = Field(default="0.0.0.0", description="Interface to bind")
    port: int = Field(default=8080, ge=1, le=65535, description="Port to bind")
    idle_timeout_seconds: int = Field(
        default=30,
        ge=1,
        description="Seconds an idle keep-alive connection is held open",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate the log level is one both logging and uvicorn accept."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {v}")
        return level

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PRESIGN_API_",
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )


def _env_var_name(loc: str) -> str:
    """Name a validation error location by its environment variable, whether it came in by alias or field name."""
    field = Settings.model_fields.get(loc)
    if field is not None and field.alias:
        return field.alias
    return loc.upper()


def load_settings(**overrides) -> Settings:
    """
    Read and validate the settings.

    :param overrides: Values that take priority over the environment, keyed by
        environment variable name (e.g. ``AWS_S3_BUCKET``) or field name.
    :raises ConfigurationError: If the bucket or region is unset or empty, or any
        other setting is invalid.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        missing = {
            _env_var_name(str(error["loc"][0]))
            for error in e.errors()
            if error["type"] in ("missing", "string_too_short")
        }
        missing_fields = [name for name in REQUIRED_ENV_VARS if name in missing]
        if missing_fields:
            raise ConfigurationError(missing_fields=missing_fields) from e
        raise ConfigurationError(f"Invalid configuration: {e}") from e


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return load_settings()


def get_settings_with_env_file(env_file: Optional[str] = None) -> Settings:
    """
    Get settings after loading an extra .env file into the environment.

    Variables already present in the environment are not overridden.

    :param env_file: Path to a .env file (e.g. '.env.production').
    :raises FileNotFoundError: If ``env_file`` does not exist.
    :raises ConfigurationError: If the resulting settings are invalid.
    """
    if env_file:
        if not Path(env_file).is_file():
            raise FileNotFoundError(f"Environment file not found: {env_file}")
        load_dotenv(env_file)
        logger.info(f"Loaded environment from {env_file}")

    # Clear the settings cache and return fresh instance
    get_settings.cache_clear()
    return get_settings()
