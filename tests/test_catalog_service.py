"""Unit tests for CatalogService.

Tests cover:
- Date keys sent to the store
- Batch replacement and selection re-anchoring
- Store failures degrading to an empty batch
- Out-of-order responses (stale discard) and the loading flag
- Delayed hiding of suggestion panels
"""

from datetime import date

import pytest

from jobcloud.catalog.filtering import SearchField
from jobcloud.catalog.service import CatalogService
from jobcloud.catalog.suggestions import JOB_TYPES

from tests.helpers.fake_store import FakePostingStore


class FakeScheduler:
    """Collects scheduled hides so tests decide when the delay elapses."""

    def __init__(self):
        self.pending = []

    def __call__(self, delay, callback):
        self.pending.append((delay, callback))

    def run_all(self):
        pending, self.pending = self.pending, []
        for _, callback in pending:
            callback()


@pytest.fixture
def service(fake_store, catalog_day):
    return CatalogService(fake_store, today=catalog_day)


class TestRetrieval:
    def test_start_loads_index_and_current_date(self, service, fake_store):
        outcome = service.start()

        assert fake_store.requested_dates == ["2024-03-05"]
        assert service.available_dates == frozenset({"2024-03-05", "2024-03-04"})
        assert outcome.count == 5
        assert outcome.applied
        assert not outcome.failed

    def test_query_uses_local_calendar_key(self, service, fake_store):
        service.select_date(date(2024, 3, 5))

        assert fake_store.requested_dates[-1] == "2024-03-05"

    def test_new_batch_reanchors_selection(self, service):
        service.select_date(date(2024, 3, 5))
        service.pick_posting("p-103")
        assert service.selected.id == "p-103"

        service.select_date(date(2024, 3, 4))

        assert service.selected.id == "p-201"
        assert [p.id for p in service.postings] == ["p-201", "p-202"]

    def test_empty_batch_clears_selection(self, service):
        service.select_date(date(2024, 3, 5))

        outcome = service.select_date(date(2024, 3, 1))

        assert outcome.count == 0
        assert service.postings == []
        assert service.selected is None
        assert not service.loading

    def test_store_failure_degrades_to_empty_batch(self, posting_batches, catalog_day):
        store = FakePostingStore(posting_batches, failing_dates={"2024-03-04"})
        service = CatalogService(store, today=catalog_day)
        service.select_date(date(2024, 3, 5))

        outcome = service.select_date(date(2024, 3, 4))

        assert outcome.failed
        assert service.postings == []
        assert service.selected is None
        assert not service.loading

    def test_index_failure_keeps_previous_index(self, posting_batches, catalog_day):
        store = FakePostingStore(posting_batches)
        service = CatalogService(store, today=catalog_day)
        service.load_available_dates()

        store.fail_crawled_dates = True
        index = service.load_available_dates()

        assert index == frozenset({"2024-03-05", "2024-03-04"})

    def test_index_does_not_gate_retrieval(self, service, fake_store):
        service.load_available_dates()

        service.select_date(date(2023, 1, 1))

        assert fake_store.requested_dates == ["2023-01-01"]

    def test_stale_response_is_discarded(self, service, posting_batches):
        first = service.begin_retrieval(date(2024, 3, 5))
        second = service.begin_retrieval(date(2024, 3, 4))

        service.complete_retrieval(second, posting_batches["2024-03-04"])
        late = service.complete_retrieval(first, posting_batches["2024-03-05"])

        assert not late.applied
        assert service.state.date_key == "2024-03-04"
        assert [p.id for p in service.postings] == ["p-201", "p-202"]

    def test_loading_stays_set_until_latest_completes(self, service, posting_batches):
        first = service.begin_retrieval(date(2024, 3, 5))
        second = service.begin_retrieval(date(2024, 3, 4))
        assert service.loading

        service.complete_retrieval(first, posting_batches["2024-03-05"])
        assert service.loading

        service.complete_retrieval(second, posting_batches["2024-03-04"])
        assert not service.loading

    def test_stale_failure_is_discarded(self, service, posting_batches):
        first = service.begin_retrieval(date(2024, 3, 5))
        second = service.begin_retrieval(date(2024, 3, 4))
        service.complete_retrieval(second, posting_batches["2024-03-04"])

        outcome = service.fail_retrieval(first, RuntimeError("boom"))

        assert not outcome.applied
        assert len(service.postings) == 2


class TestDateInput:
    def test_invalid_input_is_ignored(self, service, fake_store):
        service.select_date(date(2024, 3, 5))

        assert service.select_date_input("2024-02-30") is None
        assert service.select_date_input("") is None

        assert fake_store.requested_dates == ["2024-03-05"]
        assert service.state.date_key == "2024-03-05"
        assert len(service.postings) == 5

    def test_valid_input(self, service, fake_store):
        outcome = service.select_date_input("2024-03-04")

        assert outcome.date_key == "2024-03-04"
        assert fake_store.requested_dates == ["2024-03-04"]

    def test_quick_date(self, service, fake_store):
        service.select_quick_date(0)

        assert fake_store.requested_dates == [date.today().isoformat()]


class TestSearchAndSelection:
    def test_filtering_keeps_hidden_selection(self, service):
        service.select_date(date(2024, 3, 5))

        service.set_query(SearchField.TITLE, "analyst")

        assert [p.id for p in service.visible_postings] == ["p-102"]
        assert service.selected.id == "p-101"

    def test_pick_hidden_posting_is_ignored(self, service):
        service.select_date(date(2024, 3, 5))
        service.set_query(SearchField.COMPANY, "globex")

        assert service.pick_posting("p-102").id == "p-101"
        assert service.pick_posting("p-105").id == "p-105"

    def test_dismiss_detail(self, service):
        service.select_date(date(2024, 3, 5))

        service.dismiss_detail()

        assert service.selected is None
        assert len(service.visible_postings) == 5


class TestSuggestions:
    def test_blur_without_scheduler_hides_immediately(self, service):
        service.focus_field(SearchField.JOB_TYPE)
        assert service.suggestions(SearchField.JOB_TYPE) == list(JOB_TYPES)

        service.blur_field(SearchField.JOB_TYPE)

        assert service.suggestions(SearchField.JOB_TYPE) == []

    def test_blur_schedules_delayed_hide(self, fake_store, catalog_day):
        scheduler = FakeScheduler()
        service = CatalogService(
            fake_store, hide_delay_seconds=0.2, schedule_hide=scheduler, today=catalog_day
        )

        service.focus_field(SearchField.TITLE)
        service.blur_field(SearchField.TITLE)

        assert scheduler.pending[0][0] == 0.2
        assert service.suggestions(SearchField.TITLE) != []

        scheduler.run_all()

        assert service.suggestions(SearchField.TITLE) == []

    def test_choice_during_hide_delay_lands(self, fake_store, catalog_day):
        scheduler = FakeScheduler()
        service = CatalogService(fake_store, schedule_hide=scheduler, today=catalog_day)

        service.focus_field(SearchField.LOCATION)
        service.blur_field(SearchField.LOCATION)
        service.choose_suggestion(SearchField.LOCATION, "Pune")
        scheduler.run_all()

        assert service.state.queries.location == "Pune"
        assert service.suggestions(SearchField.LOCATION) == []

    def test_refocus_before_delay_keeps_panel(self, fake_store, catalog_day):
        scheduler = FakeScheduler()
        service = CatalogService(fake_store, schedule_hide=scheduler, today=catalog_day)

        service.focus_field(SearchField.JOB_LEVEL)
        service.blur_field(SearchField.JOB_LEVEL)
        service.focus_field(SearchField.JOB_LEVEL)
        scheduler.run_all()

        assert service.suggestions(SearchField.JOB_LEVEL) != []

    def test_custom_vocabulary(self, fake_store, catalog_day):
        service = CatalogService(
            fake_store,
            vocabularies={SearchField.LOCATION: ("Delhi", "Noida")},
            today=catalog_day,
        )

        service.focus_field(SearchField.LOCATION)
        service.set_query(SearchField.LOCATION, "no")

        assert service.suggestions(SearchField.LOCATION) == ["Noida"]

    def test_company_never_suggests(self, service):
        service.focus_field(SearchField.COMPANY)
        service.blur_field(SearchField.COMPANY)

        assert service.suggestions(SearchField.COMPANY) == []
