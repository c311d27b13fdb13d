"""Autocomplete suggestions and their visibility state machine.

Four of the search fields offer suggestions from a fixed vocabulary. Each
field has a panel that is shown while the field has focus. Losing focus does
not hide the panel straight away: a hide is scheduled so that a pointer
selection registered just before the blur still lands. Choosing a candidate
hides the panel immediately.
"""

from dataclasses import dataclass, replace
from typing import Dict, List, Mapping, Optional, Sequence

from .filtering import SearchField

SUGGESTED_ROLES = (
    "Software Engineer",
    "Data Scientist",
    "AI Engineer",
    "Business Analyst",
    "Data Analyst",
    "Cloud Engineer",
    "Cybersecurity Analyst",
    "Digital Marketing Specialist",
    "Quality Assurance Engineer",
    "Customer Service Representative",
)

SUGGESTED_CITIES = (
    "Mumbai",
    "Chennai",
    "Hyderabad",
    "Bengaluru",
    "Pune",
    "Kolkata",
)

JOB_TYPES = (
    "Fulltime",
    "Contract",
    "Internship",
    "Apprentice",
    "Part-time",
)

JOB_LEVELS = (
    "Internship",
    "Entry level",
    "Associate",
    "Mid-Senior level",
    "Director",
    "Executive",
)

# Company has no vocabulary
DEFAULT_VOCABULARIES: Dict[SearchField, Sequence[str]] = {
    SearchField.TITLE: SUGGESTED_ROLES,
    SearchField.LOCATION: SUGGESTED_CITIES,
    SearchField.JOB_TYPE: JOB_TYPES,
    SearchField.JOB_LEVEL: JOB_LEVELS,
}

SUGGESTION_FIELDS = tuple(DEFAULT_VOCABULARIES)


def suggest(vocabulary: Sequence[str], query: Optional[str]) -> List[str]:
    """Return the candidates to show for the current query.

    When the query equals a vocabulary entry (ignoring case) the whole
    vocabulary is returned, so a user who just picked a value can switch to
    another one. Otherwise only entries containing the query are returned,
    in vocabulary order.

    Example:
        >>> suggest(["Fulltime", "Contract"], "fulltime")
        ['Fulltime', 'Contract']
        >>> suggest(["Fulltime", "Contract"], "con")
        ['Contract']
    """
    needle = (query or "").lower()
    if any(entry.lower() == needle for entry in vocabulary):
        return list(vocabulary)
    return [entry for entry in vocabulary if needle in entry.lower()]


def has_suggestions(field: SearchField) -> bool:
    return SearchField(field) in DEFAULT_VOCABULARIES


@dataclass(frozen=True)
class SuggestionPanel:
    """Visibility of one field's suggestion list.

    ``hide_pending`` is set between a blur and the delayed hide.
    """

    visible: bool = False
    hide_pending: bool = False

    def focused(self) -> "SuggestionPanel":
        return SuggestionPanel(visible=True, hide_pending=False)

    def blurred(self) -> "SuggestionPanel":
        if not self.visible:
            return self
        return replace(self, hide_pending=True)

    def hide_elapsed(self) -> "SuggestionPanel":
        # A refocus in between clears hide_pending and keeps the panel open
        if not self.hide_pending:
            return self
        return SuggestionPanel()

    def chosen(self) -> "SuggestionPanel":
        return SuggestionPanel()


@dataclass(frozen=True)
class SuggestionPanels:
    """Panels for every field that offers suggestions."""

    title: SuggestionPanel = SuggestionPanel()
    location: SuggestionPanel = SuggestionPanel()
    job_type: SuggestionPanel = SuggestionPanel()
    job_level: SuggestionPanel = SuggestionPanel()

    def get(self, field: SearchField) -> SuggestionPanel:
        field = SearchField(field)
        if not has_suggestions(field):
            raise ValueError(f"Field '{field.value}' has no suggestions")
        return getattr(self, field.value)

    def with_panel(self, field: SearchField, panel: SuggestionPanel) -> "SuggestionPanels":
        field = SearchField(field)
        if not has_suggestions(field):
            raise ValueError(f"Field '{field.value}' has no suggestions")
        return replace(self, **{field.value: panel})


def build_vocabularies(
    overrides: Optional[Mapping[SearchField, Sequence[str]]] = None,
) -> Dict[SearchField, tuple]:
    """Merge configured vocabularies over the defaults."""
    vocabularies = {field: tuple(values) for field, values in DEFAULT_VOCABULARIES.items()}
    for field, values in (overrides or {}).items():
        field = SearchField(field)
        if not has_suggestions(field):
            raise ValueError(f"Field '{field.value}' has no suggestions")
        if values:
            vocabularies[field] = tuple(values)
    return vocabularies
