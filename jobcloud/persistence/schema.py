"""Database schema for the local posting store.

The column layout mirrors the hosted ``jobs`` table so that rows exported
from the crawler can be loaded unchanged.
"""

import logging

from sqlalchemy import Boolean, Column, Index, String, Text, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from jobcloud.domain.models import Posting
from jobcloud.utils.timestamps import format_timestamp, parse_iso_datetime, utc_now

logger = logging.getLogger(__name__)

Base = declarative_base()


class PostingModel(Base):
    """ORM model for the jobs table."""

    __tablename__ = "jobs"

    id = Column(String(255), primary_key=True, nullable=False)

    title = Column(Text, nullable=False)
    company = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    site = Column(String(100), nullable=False)
    crawled_date = Column(String(10), nullable=False)

    description = Column(Text, nullable=True)
    job_type = Column(String(100), nullable=True)
    job_url = Column(Text, nullable=False)
    job_url_direct = Column(Text, nullable=True)
    is_remote = Column(Boolean, nullable=True)
    job_level = Column(String(100), nullable=True)
    role = Column(String(255), nullable=True)
    job_function = Column(String(255), nullable=True)

    # ISO 8601 string; lexical order equals chronological order
    created_at = Column(String(50), nullable=False)

    __table_args__ = (
        Index("idx_jobs_crawled_date", "crawled_date"),
        Index("idx_jobs_created_at", "created_at"),
    )

    def to_domain(self) -> Posting:
        """Convert ORM model to domain model."""
        return Posting(
            id=self.id,
            title=self.title,
            company=self.company,
            location=self.location,
            site=self.site,
            crawled_date=self.crawled_date,
            description=self.description,
            job_type=self.job_type,
            job_url=self.job_url,
            job_url_direct=self.job_url_direct,
            is_remote=self.is_remote,
            job_level=self.job_level,
            role=self.role,
            job_function=self.job_function,
            created_at=parse_iso_datetime(self.created_at),
        )

    @classmethod
    def from_domain(cls, posting: Posting) -> "PostingModel":
        """Create ORM model from domain model.

        Postings without an ingestion time are stamped with the current time.
        """
        model = cls(id=posting.id)
        model.apply(posting)
        if model.created_at is None:
            model.created_at = format_timestamp(utc_now())
        return model

    def apply(self, posting: Posting) -> None:
        """Copy every field of a posting onto this row.

        A posting without an ingestion time keeps the row's stored one.
        """
        self.title = posting.title
        self.company = posting.company
        self.location = posting.location
        self.site = posting.site
        self.crawled_date = posting.crawled_date
        self.description = posting.description
        self.job_type = posting.job_type
        self.job_url = posting.job_url
        self.job_url_direct = posting.job_url_direct
        self.is_remote = posting.is_remote
        self.job_level = posting.job_level
        self.role = posting.role
        self.job_function = posting.job_function
        if posting.created_at is not None:
            self.created_at = format_timestamp(posting.created_at)


def create_schema(engine: Engine) -> None:
    """Create all tables and indexes if they don't exist (idempotent)."""
    logger.info("Creating database schema if not exists")

    try:
        Base.metadata.create_all(engine, checkfirst=True)
        tables = inspect(engine).get_table_names()
        logger.info(f"Database schema ready. Tables: {', '.join(tables)}")
    except Exception as e:
        logger.error(f"Failed to create database schema: {e}", exc_info=True)
        raise
