"""Immutable catalog state and its transition functions.

Every user or store event is a pure function taking the current
:class:`CatalogState` and returning a new one. Nothing here performs I/O,
which keeps the whole state machine testable without a store or a UI.

Retrievals are tagged with a request id. Only the completion of the most
recently started retrieval is applied; an older response arriving late is
discarded instead of overwriting the newer batch.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from typing import FrozenSet, Iterable, List, Mapping, Optional, Sequence, Tuple

from jobcloud.domain.models import Posting

from . import selection
from .dates import DateLike, format_date_key, to_local_date
from .filtering import SearchField, SearchQueries, filter_postings
from .suggestions import SuggestionPanels, has_suggestions, suggest


@dataclass(frozen=True)
class CatalogState:
    """Snapshot of everything the catalog screen depends on."""

    selected_date: date = field(default_factory=date.today)
    available_dates: FrozenSet[str] = frozenset()
    postings: Tuple[Posting, ...] = ()
    loading: bool = False
    latest_request_id: int = 0
    queries: SearchQueries = SearchQueries()
    selected: Optional[Posting] = None
    panels: SuggestionPanels = SuggestionPanels()

    @property
    def date_key(self) -> str:
        return format_date_key(self.selected_date)


def initial_state(today: Optional[date] = None) -> CatalogState:
    return CatalogState(selected_date=today or date.today())


# Retrieval


def start_retrieval(state: CatalogState, day: DateLike) -> Tuple[CatalogState, int]:
    """Record a date selection and issue a new request id.

    Returns:
        Tuple of (new state, request id to hand back on completion)
    """
    request_id = state.latest_request_id + 1
    new_state = replace(
        state,
        selected_date=to_local_date(day),
        loading=True,
        latest_request_id=request_id,
    )
    return new_state, request_id


def is_stale(state: CatalogState, request_id: int) -> bool:
    """True when a newer retrieval has been started since request_id."""
    return request_id != state.latest_request_id


def complete_retrieval(
    state: CatalogState, request_id: int, postings: Sequence[Posting]
) -> CatalogState:
    """Replace the batch and re-anchor the selection."""
    if is_stale(state, request_id):
        return state

    batch = tuple(postings)
    return replace(
        state,
        postings=batch,
        selected=selection.anchor_selection(batch),
        loading=False,
    )


def fail_retrieval(state: CatalogState, request_id: int) -> CatalogState:
    """Degrade to an empty batch after a store failure."""
    return complete_retrieval(state, request_id, ())


def set_available_dates(state: CatalogState, dates: Iterable[str]) -> CatalogState:
    return replace(state, available_dates=frozenset(dates))


# Search fields


def set_query(state: CatalogState, search_field: SearchField, text: Optional[str]) -> CatalogState:
    return replace(state, queries=state.queries.with_value(search_field, text))


def focus_field(state: CatalogState, search_field: SearchField) -> CatalogState:
    if not has_suggestions(search_field):
        return state
    panel = state.panels.get(search_field).focused()
    return replace(state, panels=state.panels.with_panel(search_field, panel))


def blur_field(state: CatalogState, search_field: SearchField) -> CatalogState:
    if not has_suggestions(search_field):
        return state
    panel = state.panels.get(search_field).blurred()
    return replace(state, panels=state.panels.with_panel(search_field, panel))


def hide_suggestions(state: CatalogState, search_field: SearchField) -> CatalogState:
    """Apply a delayed hide scheduled by blur_field()."""
    if not has_suggestions(search_field):
        return state
    panel = state.panels.get(search_field).hide_elapsed()
    return replace(state, panels=state.panels.with_panel(search_field, panel))


def choose_suggestion(state: CatalogState, search_field: SearchField, value: str) -> CatalogState:
    """Overwrite the field's query with a candidate and close its panel."""
    if not has_suggestions(search_field):
        return set_query(state, search_field, value)
    panel = state.panels.get(search_field).chosen()
    return replace(
        state,
        queries=state.queries.with_value(search_field, value),
        panels=state.panels.with_panel(search_field, panel),
    )


# Selection


def pick_posting(state: CatalogState, posting_id: str) -> CatalogState:
    picked = selection.pick_posting(visible_postings(state), posting_id, state.selected)
    return replace(state, selected=picked)


def dismiss_detail(state: CatalogState) -> CatalogState:
    return replace(state, selected=selection.dismiss_selection())


# Derived views


def visible_postings(state: CatalogState) -> List[Posting]:
    return filter_postings(state.postings, state.queries)


def visible_suggestions(
    state: CatalogState,
    search_field: SearchField,
    vocabularies: Mapping[SearchField, Sequence[str]],
) -> List[str]:
    """Candidates for a field, or an empty list while its panel is hidden."""
    if not has_suggestions(search_field) or not state.panels.get(search_field).visible:
        return []
    return suggest(vocabularies[SearchField(search_field)], state.queries.get(search_field))
