"""Catalog orchestration: retrieval, search, suggestions and selection.

CatalogService owns the current CatalogState and the injected PostingStore.
Each public method applies one event and swaps in the resulting state.
Store failures never propagate: the batch is cleared and the failure logged.
"""

import time
from datetime import date
from typing import Callable, FrozenSet, List, Mapping, Optional, Sequence

from jobcloud.domain.models import Posting
from jobcloud.logging import get_logger
from jobcloud.logging.context import log_context
from jobcloud.stores.base import PostingStore

from . import state as transitions
from .dates import DateLike, build_availability_index, format_date_key, parse_date_input, quick_date
from .filtering import SearchField
from .models import RetrievalOutcome, RetrievalTicket
from .state import CatalogState
from .suggestions import build_vocabularies, has_suggestions

logger = get_logger(__name__, component="catalog")

# schedule(delay_seconds, callback)
HideScheduler = Callable[[float, Callable[[], None]], None]


class CatalogService:
    """Browse one day's postings at a time.

    Typical flow:
        >>> service = CatalogService(store)
        >>> service.start()                       # availability index + today's batch
        >>> service.set_query(SearchField.TITLE, "engineer")
        >>> service.visible_postings              # filtered batch
        >>> service.pick_posting("in-4021")       # detail pane
    """

    def __init__(
        self,
        store: PostingStore,
        vocabularies: Optional[Mapping[SearchField, Sequence[str]]] = None,
        hide_delay_seconds: float = 0.2,
        schedule_hide: Optional[HideScheduler] = None,
        today: Optional[date] = None,
    ):
        """
        Initialize the catalog service.

        Args:
            store: Posting store to query
            vocabularies: Suggestion vocabularies per field, merged over the built-in lists
            hide_delay_seconds: Delay between a blur and hiding the suggestions
            schedule_hide: Callable running a callback after a delay; without one
                the hide is applied immediately on blur
            today: Initial selected date (defaults to the local date)
        """
        self.store = store
        self.vocabularies = build_vocabularies(vocabularies)
        self.hide_delay_seconds = hide_delay_seconds
        self.schedule_hide = schedule_hide
        self._state = transitions.initial_state(today)

    # State access

    @property
    def state(self) -> CatalogState:
        return self._state

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def postings(self) -> List[Posting]:
        return list(self._state.postings)

    @property
    def visible_postings(self) -> List[Posting]:
        return transitions.visible_postings(self._state)

    @property
    def selected(self) -> Optional[Posting]:
        return self._state.selected

    @property
    def available_dates(self) -> FrozenSet[str]:
        return self._state.available_dates

    def suggestions(self, field: SearchField) -> List[str]:
        """Candidates for a field while its suggestion panel is shown."""
        return transitions.visible_suggestions(self._state, field, self.vocabularies)

    # Startup and dates

    def start(self) -> RetrievalOutcome:
        """Load the availability index, then retrieve the current date."""
        self.load_available_dates()
        return self.select_date(self._state.selected_date)

    def load_available_dates(self) -> FrozenSet[str]:
        """Fetch the crawled-date projection and build the availability index.

        On failure the index is left as it was and the error is logged.
        """
        try:
            crawled_dates = self.store.fetch_crawled_dates()
        except Exception as e:
            logger.error(
                f"Failed to load available dates: {e}",
                extra={
                    "event": "dates.load_failed",
                    "error_type": type(e).__name__,
                },
            )
            return self._state.available_dates

        index = build_availability_index(crawled_dates)
        self._state = transitions.set_available_dates(self._state, index)
        logger.info(
            "Available dates loaded",
            extra={"event": "dates.loaded", "date_count": len(index)},
        )
        return index

    def select_date(self, day: DateLike) -> RetrievalOutcome:
        """Select a date and retrieve its batch."""
        return self.run_retrieval(self.begin_retrieval(day))

    def select_date_input(self, text: Optional[str]) -> Optional[RetrievalOutcome]:
        """Select a manually typed date; invalid input is ignored."""
        day = parse_date_input(text)
        if day is None:
            logger.debug(
                "Ignoring invalid date input",
                extra={"event": "dates.input_ignored", "input": text},
            )
            return None
        return self.select_date(day)

    def select_quick_date(self, days_ago: int) -> RetrievalOutcome:
        """Select today, yesterday, 2 days ago, etc."""
        return self.select_date(quick_date(days_ago))

    # Retrieval

    def begin_retrieval(self, day: DateLike) -> RetrievalTicket:
        """Start a retrieval: record the date, set loading and issue a request id."""
        self._state, request_id = transitions.start_retrieval(self._state, day)
        ticket = RetrievalTicket(request_id=request_id, date_key=format_date_key(day))
        logger.info(
            "Retrieval started",
            extra={
                "event": "retrieval.started",
                "request_id": ticket.request_id,
                "date_key": ticket.date_key,
            },
        )
        return ticket

    def run_retrieval(self, ticket: RetrievalTicket) -> RetrievalOutcome:
        """Query the store for a started retrieval and apply the result."""
        started = time.monotonic()

        with log_context(request_id=ticket.request_id, date_key=ticket.date_key):
            try:
                postings = self.store.fetch_by_date(ticket.date_key)
            except Exception as e:
                duration = time.monotonic() - started
                return self.fail_retrieval(ticket, e, duration)

            return self.complete_retrieval(ticket, postings, time.monotonic() - started)

    def complete_retrieval(
        self,
        ticket: RetrievalTicket,
        postings: Sequence[Posting],
        duration_seconds: float = 0.0,
    ) -> RetrievalOutcome:
        """Apply a successful store response (discarded if stale)."""
        if transitions.is_stale(self._state, ticket.request_id):
            return self._discard_stale(ticket, duration_seconds)

        self._state = transitions.complete_retrieval(self._state, ticket.request_id, postings)
        logger.info(
            f"Retrieval completed: {len(postings)} postings",
            extra={
                "event": "retrieval.completed",
                "request_id": ticket.request_id,
                "date_key": ticket.date_key,
                "count": len(postings),
                "selected_id": self._state.selected.id if self._state.selected else None,
                "duration_seconds": round(duration_seconds, 3),
            },
        )
        return RetrievalOutcome(
            request_id=ticket.request_id,
            date_key=ticket.date_key,
            count=len(postings),
            duration_seconds=duration_seconds,
        )

    def fail_retrieval(
        self,
        ticket: RetrievalTicket,
        error: Exception,
        duration_seconds: float = 0.0,
    ) -> RetrievalOutcome:
        """Apply a store failure: empty batch, no selection (discarded if stale)."""
        if transitions.is_stale(self._state, ticket.request_id):
            return self._discard_stale(ticket, duration_seconds, error=str(error))

        self._state = transitions.fail_retrieval(self._state, ticket.request_id)
        logger.error(
            f"Retrieval failed: {error}",
            extra={
                "event": "retrieval.failed",
                "request_id": ticket.request_id,
                "date_key": ticket.date_key,
                "error_type": type(error).__name__,
                "duration_seconds": round(duration_seconds, 3),
            },
        )
        return RetrievalOutcome(
            request_id=ticket.request_id,
            date_key=ticket.date_key,
            error=str(error),
            duration_seconds=duration_seconds,
        )

    def _discard_stale(
        self,
        ticket: RetrievalTicket,
        duration_seconds: float,
        error: Optional[str] = None,
    ) -> RetrievalOutcome:
        logger.info(
            "Discarding stale retrieval response",
            extra={
                "event": "retrieval.discarded_stale",
                "request_id": ticket.request_id,
                "latest_request_id": self._state.latest_request_id,
                "date_key": ticket.date_key,
            },
        )
        return RetrievalOutcome(
            request_id=ticket.request_id,
            date_key=ticket.date_key,
            applied=False,
            error=error,
            duration_seconds=duration_seconds,
        )

    # Search fields and suggestions

    def set_query(self, field: SearchField, text: Optional[str]) -> None:
        self._state = transitions.set_query(self._state, field, text)

    def focus_field(self, field: SearchField) -> None:
        self._state = transitions.focus_field(self._state, field)

    def blur_field(self, field: SearchField) -> None:
        """Mark the field blurred and arrange for its suggestions to hide."""
        self._state = transitions.blur_field(self._state, field)
        if not has_suggestions(field):
            return

        if self.schedule_hide is None:
            self.hide_suggestions(field)
        else:
            self.schedule_hide(self.hide_delay_seconds, lambda: self.hide_suggestions(field))

    def hide_suggestions(self, field: SearchField) -> None:
        self._state = transitions.hide_suggestions(self._state, field)

    def choose_suggestion(self, field: SearchField, value: str) -> None:
        """Fill a field with a suggestion and close its panel."""
        self._state = transitions.choose_suggestion(self._state, field, value)
        logger.debug(
            "Suggestion chosen",
            extra={"event": "suggestion.chosen", "field": SearchField(field).value, "value": value},
        )

    # Selection

    def pick_posting(self, posting_id: str) -> Optional[Posting]:
        """Show a visible posting in the detail pane."""
        self._state = transitions.pick_posting(self._state, posting_id)
        if self._state.selected is None or self._state.selected.id != posting_id:
            logger.debug(
                "Ignoring pick of a posting that is not visible",
                extra={"event": "selection.pick_ignored", "posting_id": posting_id},
            )
        return self._state.selected

    def dismiss_detail(self) -> None:
        self._state = transitions.dismiss_detail(self._state)
