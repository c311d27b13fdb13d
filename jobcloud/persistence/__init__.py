"""Persistence layer for the local posting store.

Public API:
    # Database initialization and session management
    - init_database(database_url: str) -> None
    - get_session() -> ContextManager[Session]
    - close_database() -> None
    - get_engine() -> Engine

    # Repository
    - PostingRepository: queries by crawl date, crawled-date projection, upserts

    # Exceptions
    - PersistenceError, DatabaseConnectionError, DataIntegrityError

Example usage:
    >>> from jobcloud.persistence import init_database, get_session, PostingRepository
    >>> init_database("sqlite:///./data/job_cloud.db")
    >>> with get_session() as session:
    ...     postings = PostingRepository(session).get_by_crawled_date("2024-03-05")
"""

from .database import close_database, get_engine, get_session, init_database
from .exceptions import DatabaseConnectionError, DataIntegrityError, PersistenceError
from .repositories import PostingRepository

__all__ = [
    "init_database",
    "get_session",
    "close_database",
    "get_engine",
    "PostingRepository",
    "PersistenceError",
    "DatabaseConnectionError",
    "DataIntegrityError",
]
