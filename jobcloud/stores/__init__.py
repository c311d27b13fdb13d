"""Posting stores: where the catalog reads postings from.

The factory lives in ``jobcloud.stores.factory`` and is not re-exported here,
because it depends on the configuration package.
"""

from .base import PostingStore
from .database import DatabasePostingStore
from .exceptions import (
    RetrievalError,
    StoreConfigurationError,
    StoreHTTPError,
    StoreResponseError,
    StoreTimeoutError,
)
from .rest import RestPostingStore

__all__ = [
    "PostingStore",
    "RestPostingStore",
    "DatabasePostingStore",
    "RetrievalError",
    "StoreHTTPError",
    "StoreTimeoutError",
    "StoreResponseError",
    "StoreConfigurationError",
]
