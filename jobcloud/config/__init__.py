"""Configuration management module for Job Cloud."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_config, validate_config_file
from .models import (
    AppConfig,
    LogFormat,
    LogLevel,
    LoggingConfig,
    StoreBackend,
    StoreConfig,
    SuggestionConfig,
)

__all__ = [
    # Main loader functions
    "load_config",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "StoreConfig",
    "SuggestionConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "StoreBackend",
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
