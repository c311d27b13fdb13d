"""Domain models for the Job Cloud catalog."""

from .models import NOT_APPLICABLE_LEVEL, Posting, format_job_type, is_wildcard_level

__all__ = ["Posting", "format_job_type", "is_wildcard_level", "NOT_APPLICABLE_LEVEL"]
