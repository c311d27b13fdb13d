"""Client-side retrieval and filter engine for the posting catalog.

This package provides:
- Date keys and the availability index (dates)
- The five-field filter (filtering)
- Autocomplete suggestions and their visibility panels (suggestions)
- Master-detail selection rules (selection)
- The immutable CatalogState and its transitions (state)
- CatalogService, which ties them to a PostingStore (service)
"""

from .dates import format_date_key, parse_date_input, quick_date
from .filtering import FILTER_RULES, FilterRule, SearchField, SearchQueries, filter_postings
from .models import RetrievalOutcome, RetrievalTicket
from .service import CatalogService
from .state import CatalogState
from .suggestions import SuggestionPanel, suggest

__all__ = [
    "CatalogService",
    "CatalogState",
    "SearchField",
    "SearchQueries",
    "FilterRule",
    "FILTER_RULES",
    "filter_postings",
    "suggest",
    "SuggestionPanel",
    "RetrievalTicket",
    "RetrievalOutcome",
    "format_date_key",
    "parse_date_input",
    "quick_date",
]
