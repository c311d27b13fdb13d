"""Posting store contract.

The catalog only needs two queries from wherever postings live: every
posting crawled on one date, and the crawled-date column of every posting.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Mapping

from pydantic import ValidationError

from jobcloud.domain.models import Posting
from jobcloud.logging import get_logger

from .exceptions import StoreResponseError

logger = get_logger(__name__, component="store")


class PostingStore(ABC):
    """Base class for all posting stores."""

    name = "store"

    @abstractmethod
    def fetch_by_date(self, date_key: str) -> List[Posting]:
        """Return every posting crawled on date_key, most recently ingested first.

        Args:
            date_key: Crawl date as YYYY-MM-DD (exact match)

        Raises:
            RetrievalError: If the store cannot be queried or returns malformed data
        """

    @abstractmethod
    def fetch_crawled_dates(self) -> List[str]:
        """Return the crawled-date value of every posting (duplicates allowed).

        Raises:
            RetrievalError: If the store cannot be queried
        """

    def close(self) -> None:
        """Release any resources held by the store."""

    def _parse_postings(self, rows: Iterable[Mapping[str, Any]]) -> List[Posting]:
        """Validate raw rows into postings.

        A single malformed row fails the whole batch.

        Raises:
            StoreResponseError: If any row fails validation
        """
        postings = []
        for index, row in enumerate(rows):
            try:
                postings.append(Posting.model_validate(row))
            except ValidationError as e:
                logger.error(
                    "Malformed posting row",
                    extra={
                        "event": "store.response.malformed",
                        "store": self.name,
                        "row_index": index,
                        "error_count": e.error_count(),
                    },
                )
                raise StoreResponseError(f"Malformed posting at index {index}: {e}") from e
        return postings
