"""Factory function for instantiating the configured posting store."""

import logging

from jobcloud.config.environment import EnvironmentConfig
from jobcloud.config.models import AppConfig, StoreBackend

from .base import PostingStore
from .database import DatabasePostingStore
from .exceptions import StoreConfigurationError
from .rest import RestPostingStore

logger = logging.getLogger(__name__)


def get_store(app_config: AppConfig, env_config: EnvironmentConfig) -> PostingStore:
    """Create the posting store selected by ``store.backend``.

    The sqlite backend expects init_database() to have been called.

    Raises:
        StoreConfigurationError: If the backend is unknown or misconfigured

    Example:
        >>> store = get_store(AppConfig(), EnvironmentConfig())
        >>> postings = store.fetch_by_date("2024-03-05")
    """
    store_config = app_config.store
    backend = str(getattr(store_config.backend, "value", store_config.backend)).lower()

    logger.debug(
        "Creating posting store",
        extra={"backend": backend, "table": store_config.table},
    )

    if backend == StoreBackend.SQLITE.value:
        return DatabasePostingStore()

    if backend == StoreBackend.REST.value:
        if not env_config.posting_api_url or not env_config.posting_api_key:
            raise StoreConfigurationError(
                "The rest backend needs POSTING_API_URL and POSTING_API_KEY"
            )
        return RestPostingStore(
            base_url=env_config.posting_api_url,
            api_key=env_config.posting_api_key,
            table=store_config.table,
            timeout=store_config.http_request_timeout,
            user_agent=store_config.user_agent,
        )

    supported = ", ".join(b.value for b in StoreBackend)
    raise StoreConfigurationError(f"Unknown store backend: {backend}. Supported backends: {supported}")
