"""Posting store backed by the local SQL database."""

from typing import Callable, ContextManager, List

from pydantic import ValidationError
from sqlalchemy.orm import Session

from jobcloud.domain.models import Posting
from jobcloud.logging import get_logger
from jobcloud.persistence import PersistenceError, PostingRepository, get_session

from .base import PostingStore
from .exceptions import RetrievalError, StoreResponseError

logger = get_logger(__name__, component="store")


class DatabasePostingStore(PostingStore):
    """Read postings through PostingRepository.

    The database must have been initialized with init_database() first.
    A stored row that no longer validates as a posting fails the whole batch
    with StoreResponseError.
    """

    name = "sqlite"

    def __init__(self, session_scope: Callable[[], ContextManager[Session]] = get_session) -> None:
        self._session_scope = session_scope

    def fetch_by_date(self, date_key: str) -> List[Posting]:
        try:
            with self._session_scope() as session:
                return PostingRepository(session).get_by_crawled_date(date_key)
        except PersistenceError as e:
            raise RetrievalError(f"Failed to query postings for {date_key}: {e}") from e
        except ValidationError as e:
            logger.error(
                "Malformed posting row",
                extra={
                    "event": "store.response.malformed",
                    "store": self.name,
                    "date_key": date_key,
                    "error_count": e.error_count(),
                },
            )
            raise StoreResponseError(f"Malformed posting stored for {date_key}: {e}") from e

    def fetch_crawled_dates(self) -> List[str]:
        try:
            with self._session_scope() as session:
                return PostingRepository(session).get_crawled_dates()
        except PersistenceError as e:
            raise RetrievalError(f"Failed to query crawled dates: {e}") from e
