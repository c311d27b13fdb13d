"""Shared pytest fixtures."""

from datetime import date

import pytest

from jobcloud.domain.models import Posting
from jobcloud.logging.context import clear_log_context
from jobcloud.persistence import close_database

from tests.helpers.fake_store import FIXTURES_DIR, FakePostingStore, load_fixture_batches

ENV_VARS = ("DATABASE_URL", "POSTING_API_URL", "POSTING_API_KEY", "LOG_LEVEL", "ENVIRONMENT")


@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every environment variable the application reads."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def mock_env_vars(clean_env, tmp_path):
    """Environment for a local run plus credentials for the rest backend."""
    clean_env.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'env.db'}")
    clean_env.setenv("POSTING_API_URL", "https://postings.example.com/")
    clean_env.setenv("POSTING_API_KEY", "test-key")
    return clean_env


@pytest.fixture
def posting_batches():
    """Fixture batches keyed by crawl date."""
    return load_fixture_batches()


@pytest.fixture
def batch(posting_batches):
    """The five-posting batch crawled on 2024-03-05."""
    return posting_batches["2024-03-05"]


@pytest.fixture
def fake_store(posting_batches):
    return FakePostingStore(posting_batches)


@pytest.fixture
def catalog_day():
    return date(2024, 3, 5)


@pytest.fixture
def make_posting():
    """Factory for postings with sensible defaults."""

    def _make(posting_id="p-1", **overrides):
        fields = {
            "id": posting_id,
            "title": "Software Engineer",
            "company": "Acme",
            "location": "Pune, India",
            "site": "linkedin",
            "crawled_date": "2024-03-05",
            "job_url": f"https://jobs.example.com/{posting_id}",
        }
        fields.update(overrides)
        return Posting(**fields)

    return _make


@pytest.fixture(autouse=True)
def clean_log_context():
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def test_database(tmp_path):
    """File-backed sqlite database, closed after the test."""
    from jobcloud.persistence import init_database

    db_url = f"sqlite:///{tmp_path / 'test.db'}"
    init_database(db_url)
    yield db_url
    close_database()
