"""View models for the posting list and the detail pane.

These functions turn catalog state into plain dictionaries for templates.
All display fallbacks ("N/A", "Not specified", ...) live here.
"""

from typing import Any, Dict, Optional

from jobcloud.catalog.dates import format_display_date, is_available
from jobcloud.catalog.selection import is_selected
from jobcloud.catalog.state import CatalogState, visible_postings
from jobcloud.domain.models import Posting

from .renderer import RichTextRenderer, render_description

LIST_HEADING = "Jobs for you"
EMPTY_STATE_MESSAGE = "No jobs found for this date."
EMPTY_DETAIL_MESSAGE = "Select a job to view details"
DISCLAIMER = (
    "Note: This listing was aggregated automatically. "
    "Please verify details on the employer's site."
)


def build_card(posting: Posting, selected: Optional[Posting]) -> Dict[str, Any]:
    """Summary card for one posting in the list."""
    return {
        "id": posting.id,
        "title": posting.title,
        "company": posting.company,
        "location": posting.location,
        "site": posting.site or None,
        "posted": f"Posted {posting.crawled_date}",
        "active": is_selected(posting, selected),
    }


def build_listing_view(state: CatalogState) -> Dict[str, Any]:
    """List pane: heading, result count and one card per visible posting.

    While a retrieval is in flight ``loading`` is set and the cards should be
    replaced by placeholders; an empty result shows the empty-state message.
    """
    visible = visible_postings(state)
    return {
        "heading": LIST_HEADING,
        "date_key": state.date_key,
        "date_display": format_display_date(state.selected_date),
        "date_available": is_available(state.available_dates, state.selected_date),
        "result_count": len(visible),
        "results_label": f"{len(visible)} results",
        "loading": state.loading,
        "empty": not state.loading and not visible,
        "empty_message": EMPTY_STATE_MESSAGE,
        "cards": [build_card(posting, state.selected) for posting in visible],
    }


def build_detail_view(posting: Optional[Posting], renderer: RichTextRenderer) -> Dict[str, Any]:
    """Detail pane for the selected posting, or the empty-detail prompt."""
    if posting is None:
        return {"empty": True, "empty_message": EMPTY_DETAIL_MESSAGE}

    return {
        "empty": False,
        "id": posting.id,
        "title": posting.title,
        "company": posting.company,
        "location": posting.location,
        "easy_apply_url": posting.job_url_direct or None,
        "apply_url": posting.job_url,
        "site": posting.site,
        "role": posting.role or "N/A",
        "job_type": posting.job_type_display,
        "remote": "Yes" if posting.is_remote else "No",
        "experience": posting.job_level or "Not specified",
        "job_function": posting.job_function or "N/A",
        "description": render_description(posting.description, renderer),
        "disclaimer": DISCLAIMER,
    }
