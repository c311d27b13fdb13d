"""Data models for retrieval bookkeeping."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RetrievalTicket:
    """Handle for a retrieval that has been started but not completed.

    Attributes:
        request_id: Monotonically increasing id issued by start_retrieval()
        date_key: Store key (YYYY-MM-DD) being fetched
    """

    request_id: int
    date_key: str


@dataclass(frozen=True)
class RetrievalOutcome:
    """What happened to a retrieval.

    Attributes:
        request_id: Id of the retrieval
        date_key: Store key that was queried
        count: Postings in the batch (0 on failure)
        applied: False when a newer retrieval made this one stale
        error: Error message when the store failed
        duration_seconds: Time spent waiting for the store
    """

    request_id: int
    date_key: str
    count: int = 0
    applied: bool = True
    error: Optional[str] = None
    duration_seconds: float = 0.0

    @property
    def failed(self) -> bool:
        return self.error is not None
