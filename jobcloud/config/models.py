"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Dict, List, Sequence

from pydantic import BaseModel, Field, field_validator

from jobcloud.catalog.filtering import SearchField
from jobcloud.catalog.suggestions import (
    JOB_LEVELS,
    JOB_TYPES,
    SUGGESTED_CITIES,
    SUGGESTED_ROLES,
)


class StoreBackend(str, Enum):
    """Where postings are read from."""

    SQLITE = "sqlite"
    REST = "rest"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class StoreConfig(BaseModel):
    """Posting store settings."""

    backend: StoreBackend = Field(StoreBackend.SQLITE, description="Store backend (sqlite, rest)")
    table: str = Field("jobs", min_length=1, description="Table holding the postings")
    http_request_timeout: int = Field(
        30, ge=5, le=300, description="Request timeout for the REST store (seconds)"
    )
    user_agent: str = Field("JobCloud/1.0", min_length=1, description="User-Agent for HTTP requests")

    @field_validator("table", "user_agent")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped

    model_config = {"use_enum_values": True, "validate_default": True}


class SuggestionConfig(BaseModel):
    """Autocomplete settings for the search fields."""

    hide_delay_ms: int = Field(
        200, ge=0, le=5000, description="Delay between losing focus and hiding suggestions"
    )
    roles: List[str] = Field(default_factory=lambda: list(SUGGESTED_ROLES))
    cities: List[str] = Field(default_factory=lambda: list(SUGGESTED_CITIES))
    job_types: List[str] = Field(default_factory=lambda: list(JOB_TYPES))
    job_levels: List[str] = Field(default_factory=lambda: list(JOB_LEVELS))

    @field_validator("roles", "cities", "job_types", "job_levels")
    @classmethod
    def normalize_vocabulary(cls, v: List[str]) -> List[str]:
        """Strip entries and drop blanks; order is kept because it is display order."""
        normalized = [entry.strip() for entry in v if entry and entry.strip()]
        if not normalized:
            raise ValueError("Vocabulary must contain at least one entry")
        return normalized

    @property
    def hide_delay_seconds(self) -> float:
        return self.hide_delay_ms / 1000.0

    def vocabularies(self) -> Dict[SearchField, Sequence[str]]:
        """Vocabularies keyed by the search field they complete."""
        return {
            SearchField.TITLE: tuple(self.roles),
            SearchField.LOCATION: tuple(self.cities),
            SearchField.JOB_TYPE: tuple(self.job_types),
            SearchField.JOB_LEVEL: tuple(self.job_levels),
        }


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True, "validate_default": True}


class AppConfig(BaseModel):
    """Root configuration object for Job Cloud."""

    store: StoreConfig = Field(default_factory=StoreConfig, description="Posting store settings")
    suggestions: SuggestionConfig = Field(
        default_factory=SuggestionConfig, description="Autocomplete settings"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
