"""Configuration management for the welcome mailer."""

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError
from .template import DEFAULT_TEMPLATE_DIR

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseSettings):
    """Application settings, read from the environment.

    Variable names are unprefixed (``PORT``, ``RESEND_API_KEY``,
    ``FROM_EMAIL``...) so an existing ``.env`` keeps working.
    """

    # Server
    host: str = Field("0.0.0.0", description="Interface to listen on")
    port: int = Field(3000, description="Port to listen on")
    debug: bool = Field(False, description="Enable Flask debug mode")
    cors_origin: str = Field("*", description="Value of Access-Control-Allow-Origin")

    # Email provider
    email_provider: str = Field("resend", description="resend, sendgrid or mock")
    from_email: Optional[str] = Field(None, description="Sender address")
    resend_api_key: Optional[str] = Field(None, description="Resend API key")
    sendgrid_api_key: Optional[str] = Field(None, description="SendGrid API key")
    provider_timeout: float = Field(10.0, description="Provider request timeout in seconds")

    # Templates
    templates_dir: str = Field(str(DEFAULT_TEMPLATE_DIR), description="Template directory")
    template_name: str = Field("welcome", description="Template sent on each submission")
    escape_html: bool = Field(True, description="Escape the name inside the HTML body")

    # Logging
    log_level: str = Field("INFO", description="Logging level")
    log_format: str = Field(LOG_FORMAT, description="Console log format string")
    log_file: Optional[str] = Field(None, description="Path to a JSON log file")
    log_max_file_size: int = Field(10 * 1024 * 1024, description="Rotate after this many bytes")
    log_backup_count: int = Field(5, description="Number of rotated log files to keep")

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    @field_validator("email_provider")
    @classmethod
    def _known_provider(cls, value: str) -> str:
        value = value.lower()
        if value not in ("resend", "sendgrid", "mock"):
            raise ValueError(f"unknown email provider: {value}")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level: {value}")
        return value

    @field_validator("provider_timeout")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("provider timeout must be positive")
        return value


def load_settings(env_file: Optional[str] = None, **overrides) -> Settings:
    """Load settings once at startup.

    Variables from ``env_file`` (default: ``.env`` in the working directory)
    are loaded first without overriding the real environment.

    Args:
        env_file: Path to environment file
        **overrides: Explicit values that win over the environment

    Returns:
        Loaded settings instance

    Raises:
        ConfigurationError: If a value is invalid
    """
    env_path = Path(env_file) if env_file else Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(env_path)
    elif env_file:
        raise ConfigurationError(f"Environment file not found: {env_file}")

    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(f"Failed to load configuration: {e}") from e
