"""Five-field search filter over a retrieved batch.

The filter is a table of rules, one per search field. Each rule pairs an
extractor (which posting attribute to look at) with a predicate (how the
attribute is compared to the query). A posting is visible when every rule
holds. Matching is case-insensitive substring containment; the batch order is
never changed.
"""

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Callable, List, Optional, Sequence

from jobcloud.domain.models import Posting, is_wildcard_level


class SearchField(str, Enum):
    """Search inputs shown above the posting list."""

    TITLE = "title"
    COMPANY = "company"
    LOCATION = "location"
    JOB_TYPE = "job_type"
    JOB_LEVEL = "job_level"


@dataclass(frozen=True)
class SearchQueries:
    """Current text of the five search inputs."""

    title: str = ""
    company: str = ""
    location: str = ""
    job_type: str = ""
    job_level: str = ""

    def get(self, field: SearchField) -> str:
        return getattr(self, SearchField(field).value)

    def with_value(self, field: SearchField, text: Optional[str]) -> "SearchQueries":
        """Return a copy with one field replaced."""
        return replace(self, **{SearchField(field).value: text or ""})

    @property
    def is_empty(self) -> bool:
        return not any(getattr(self, f.name) for f in fields(self))


Predicate = Callable[[Optional[str], str], bool]


def contains(value: Optional[str], query: str) -> bool:
    """Case-insensitive substring test. An empty query always matches."""
    return query.lower() in (value or "").lower()


def contains_or_absent(value: Optional[str], query: str) -> bool:
    """Like contains(), but a posting without a value is always included."""
    if not value:
        return True
    return contains(value, query)


def level_matches(value: Optional[str], query: str) -> bool:
    """Job level rule.

    An empty query matches everything. Otherwise a missing level or the level
    "not applicable" matches any query, and other levels need a substring match.
    """
    if not query:
        return True
    if is_wildcard_level(value):
        return True
    return contains(value, query)


@dataclass(frozen=True)
class FilterRule:
    """One row of the filter table."""

    field: SearchField
    extractor: Callable[[Posting], Optional[str]]
    predicate: Predicate

    def matches(self, posting: Posting, queries: SearchQueries) -> bool:
        return self.predicate(self.extractor(posting), queries.get(self.field))


FILTER_RULES = (
    FilterRule(SearchField.TITLE, lambda p: p.title, contains),
    FilterRule(SearchField.COMPANY, lambda p: p.company, contains),
    FilterRule(SearchField.LOCATION, lambda p: p.location, contains),
    FilterRule(SearchField.JOB_TYPE, lambda p: p.job_type, contains_or_absent),
    FilterRule(SearchField.JOB_LEVEL, lambda p: p.job_level, level_matches),
)


def posting_matches(
    posting: Posting,
    queries: SearchQueries,
    rules: Sequence[FilterRule] = FILTER_RULES,
) -> bool:
    """Check a single posting against every rule."""
    return all(rule.matches(posting, queries) for rule in rules)


def filter_postings(
    batch: Sequence[Posting],
    queries: Optional[SearchQueries] = None,
    rules: Sequence[FilterRule] = FILTER_RULES,
) -> List[Posting]:
    """Return the visible subset of a batch, preserving batch order.

    Args:
        batch: Full batch for the selected date
        queries: Current search text (defaults to all-empty)
        rules: Filter table (defaults to FILTER_RULES)

    Returns:
        New list holding the postings that satisfy every rule
    """
    queries = queries or SearchQueries()
    if queries.is_empty:
        return list(batch)
    return [posting for posting in batch if posting_matches(posting, queries, rules)]
