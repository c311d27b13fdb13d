"""Posting store backed by a hosted PostgREST (Supabase-style) API.

Queries issued:
- GET {base_url}/rest/v1/{table}?select=*&crawled_date=eq.{date}&order=created_at.desc
- GET {base_url}/rest/v1/{table}?select=crawled_date
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from jobcloud.domain.models import Posting
from jobcloud.logging import get_logger

from .base import PostingStore
from .exceptions import (
    StoreConfigurationError,
    StoreHTTPError,
    StoreResponseError,
    StoreTimeoutError,
)

logger = get_logger(__name__, component="store")


class RestPostingStore(PostingStore):
    """Read postings from a PostgREST endpoint.

    Attributes:
        base_url: API root (without the /rest/v1 suffix)
        table: Table holding the postings
        timeout: HTTP request timeout in seconds
    """

    name = "rest"

    def __init__(
        self,
        base_url: str,
        api_key: str,
        table: str = "jobs",
        timeout: int = 30,
        user_agent: str = "JobCloud/1.0",
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize the store.

        Raises:
            StoreConfigurationError: If the URL or key is missing or the timeout is out of range
        """
        if not base_url or not base_url.strip():
            raise StoreConfigurationError("base_url cannot be empty")
        if not api_key:
            raise StoreConfigurationError("api_key cannot be empty")
        if not 5 <= timeout <= 300:
            raise StoreConfigurationError(
                f"Timeout must be between 5 and 300 seconds, got: {timeout}"
            )

        self.base_url = base_url.strip().rstrip("/")
        self.table = table
        self.timeout = timeout

        self._session = session or requests.Session()
        self._session.headers.update({
            "User-Agent": user_agent,
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        })

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/rest/v1/{self.table}"

    def fetch_by_date(self, date_key: str) -> List[Posting]:
        rows = self._get_rows({
            "select": "*",
            "crawled_date": f"eq.{date_key}",
            "order": "created_at.desc",
        })
        postings = self._parse_postings(rows)
        logger.debug(
            "Fetched postings",
            extra={"event": "store.fetch.completed", "date_key": date_key, "count": len(postings)},
        )
        return postings

    def fetch_crawled_dates(self) -> List[str]:
        rows = self._get_rows({"select": "crawled_date"})
        return [row.get("crawled_date") for row in rows if row.get("crawled_date")]

    def close(self) -> None:
        self._session.close()

    def _get_rows(self, params: Dict[str, str]) -> List[Dict[str, Any]]:
        """GET the table endpoint and return the decoded JSON rows.

        Raises:
            StoreHTTPError: On connection failures or 4xx/5xx status
            StoreTimeoutError: On request timeout
            StoreResponseError: On invalid JSON or a non-list body
        """
        url = self.endpoint

        try:
            logger.debug(
                f"HTTP GET request to {url}",
                extra={
                    "event": "store.fetch.request",
                    "url": url,
                    "timeout": self.timeout,
                },
            )
            response = self._session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Request to {url} timed out after {self.timeout} seconds",
                extra={"event": "store.fetch.timeout", "url": url, "timeout": self.timeout},
            )
            raise StoreTimeoutError(
                f"Request to {url} timed out after {self.timeout} seconds", url=url
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {url} failed: {e}",
                extra={"event": "store.fetch.error", "error_type": type(e).__name__, "url": url},
            )
            raise StoreHTTPError(f"Request to {url} failed: {e}", status_code=0, url=url) from e

        if response.status_code >= 400:
            log_level = logging.WARNING if response.status_code >= 500 else logging.ERROR
            logger.log(
                log_level,
                f"HTTP {response.status_code} error from {url}",
                extra={"event": "store.fetch.error", "status_code": response.status_code, "url": url},
            )
            raise StoreHTTPError(
                f"HTTP {response.status_code}: {response.reason}",
                status_code=response.status_code,
                url=url,
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error(
                f"Failed to parse JSON response from {url}",
                extra={"event": "store.fetch.error", "error_type": "JSONDecodeError", "url": url},
            )
            raise StoreResponseError(f"Failed to parse JSON response from {url}: {e}") from e

        if not isinstance(data, list):
            raise StoreResponseError(
                f"Expected a JSON array from {url}, got {type(data).__name__}"
            )

        return data
