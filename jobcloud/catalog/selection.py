"""Master-detail selection rules.

The selection is at most one posting from the current batch. A new batch
always re-anchors it to the first (most recently ingested) posting. Filtering
never touches it, so the detail pane may show a posting that the current
search hides from the list.
"""

from typing import Optional, Sequence

from jobcloud.domain.models import Posting


def anchor_selection(batch: Sequence[Posting]) -> Optional[Posting]:
    """Selection after a batch replacement: the first posting, or none."""
    return batch[0] if batch else None


def find_posting(postings: Sequence[Posting], posting_id: str) -> Optional[Posting]:
    for posting in postings:
        if posting.id == posting_id:
            return posting
    return None


def pick_posting(
    visible: Sequence[Posting],
    posting_id: str,
    current: Optional[Posting],
) -> Optional[Posting]:
    """Select a posting from the visible list.

    Only postings the user can currently see can be picked; an unknown or
    filtered-out id leaves the current selection in place.
    """
    picked = find_posting(visible, posting_id)
    return picked if picked is not None else current


def dismiss_selection() -> Optional[Posting]:
    """Selection after the "back" action."""
    return None


def is_selected(posting: Posting, selected: Optional[Posting]) -> bool:
    return selected is not None and selected.id == posting.id
