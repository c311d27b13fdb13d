"""Core domain model for crawled job postings.

A Posting is created by the external store and is read-only to the catalog:
it is frozen, and a whole batch is replaced whenever the selected date changes.
"""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from jobcloud.utils.timestamps import ensure_utc

NOT_APPLICABLE_LEVEL = "not applicable"

_DATE_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def format_job_type(job_type: Optional[str]) -> str:
    """Format a stored job type for display.

    Each space-separated word is capitalised and the rest lowercased.

    Example:
        >>> format_job_type("part time")
        'Part Time'
        >>> format_job_type(None)
        'N/A'
    """
    if not job_type:
        return "N/A"
    return " ".join(word[:1].upper() + word[1:].lower() for word in job_type.split(" "))


def is_wildcard_level(job_level: Optional[str]) -> bool:
    """True when a job level is absent or "not applicable" (case-insensitive)."""
    return not job_level or job_level.lower() == NOT_APPLICABLE_LEVEL


class Posting(BaseModel):
    """One crawled job listing.

    ``job_type`` and ``job_level`` are free text. An absent (or empty) job type
    never excludes a posting from a job type search, and an absent level or the
    level "not applicable" never excludes it from a level search.
    """

    id: str = Field(..., description="Opaque identifier, unique within a batch")
    title: str = Field(..., description="Job title")
    company: str = Field(..., description="Company name")
    location: str = Field(..., description="Job location")
    site: str = Field(..., description="Site the posting was crawled from")
    crawled_date: str = Field(..., description="Crawl date as YYYY-MM-DD")
    description: Optional[str] = Field(None, description="Markdown-flavored description")
    job_type: Optional[str] = Field(None, description="e.g. fulltime, contract, part-time")
    job_url: str = Field(..., description="Canonical apply URL")
    job_url_direct: Optional[str] = Field(None, description="Direct apply URL")
    is_remote: Optional[bool] = Field(None, description="Remote flag (tri-state)")
    job_level: Optional[str] = Field(None, description="Experience level")
    role: Optional[str] = Field(None, description="Role category")
    job_function: Optional[str] = Field(None, description="Job function")
    created_at: Optional[datetime] = Field(None, description="Ingestion time (UTC)")

    model_config = {
        "frozen": True,
        "json_schema_extra": {"example": {
            "id": "in-4021",
            "title": "Backend Engineer",
            "company": "Example Corp",
            "location": "Bengaluru, Karnataka, India",
            "site": "linkedin",
            "crawled_date": "2024-03-05",
            "description": "**About the role**\n\nBuild APIs...",
            "job_type": "fulltime",
            "job_url": "https://www.linkedin.com/jobs/view/4021",
            "job_url_direct": None,
            "is_remote": False,
            "job_level": "Mid-Senior level",
            "role": "Software Engineer",
            "job_function": "Engineering",
            "created_at": "2024-03-05T06:30:00Z",
        }},
    }

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        """Stores may hand out numeric identifiers; keep them opaque strings."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("crawled_date", mode="before")
    @classmethod
    def validate_crawled_date(cls, v):
        """Accept date objects and validate the YYYY-MM-DD form."""
        if hasattr(v, "isoformat") and not isinstance(v, str):
            v = v.isoformat()[:10]
        if not isinstance(v, str) or not _DATE_KEY_PATTERN.match(v):
            raise ValueError(f"crawled_date must be YYYY-MM-DD, got: {v!r}")
        return v

    @field_validator("created_at")
    @classmethod
    def ensure_created_at_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Ensure datetime is timezone-aware and in UTC."""
        return ensure_utc(v)

    @property
    def job_type_display(self) -> str:
        """Job type in display form ("Part Time", "N/A")."""
        return format_job_type(self.job_type)
