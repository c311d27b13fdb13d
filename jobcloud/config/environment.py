"""Environment variable loading and validation."""

import os
from typing import Optional
from urllib.parse import urlparse

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        database_url: Optional[str] = None,
        posting_api_url: Optional[str] = None,
        posting_api_key: Optional[str] = None,
        log_level: Optional[str] = None,
    ):
        """Initialize environment configuration."""
        self.database_url = database_url or "sqlite:///./data/job_cloud.db"
        self.posting_api_url = posting_api_url.rstrip("/") if posting_api_url else None
        self.posting_api_key = posting_api_key
        self.log_level = log_level


def load_environment_config(require_api: bool = False) -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Environment variables:
    - DATABASE_URL: SQLAlchemy URL of the local store (default: sqlite:///./data/job_cloud.db)
    - POSTING_API_URL: Base URL of the hosted posting API (required for the rest backend)
    - POSTING_API_KEY: API key for the hosted posting API (required for the rest backend)
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Args:
        require_api: Whether the REST store credentials must be present

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If required variables are missing or invalid
    """
    errors = []

    database_url = os.getenv("DATABASE_URL")
    posting_api_url = os.getenv("POSTING_API_URL")
    posting_api_key = os.getenv("POSTING_API_KEY")
    log_level = os.getenv("LOG_LEVEL")

    if require_api:
        if not posting_api_url:
            errors.append("Missing required environment variable: POSTING_API_URL")
        if not posting_api_key:
            errors.append("Missing required environment variable: POSTING_API_KEY")

    if posting_api_url:
        parsed = urlparse(posting_api_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            errors.append(
                f"Invalid POSTING_API_URL: '{posting_api_url}'. Must be an http(s) URL."
            )

    if log_level and log_level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and fill in your settings",
                "Set POSTING_API_URL and POSTING_API_KEY when using the rest backend",
            ],
        )

    return EnvironmentConfig(
        database_url=database_url,
        posting_api_url=posting_api_url,
        posting_api_key=posting_api_key,
        log_level=log_level.upper() if log_level else None,
    )
