"""Exceptions raised by posting stores.

Every store failure is a RetrievalError. The catalog service catches it,
clears the batch and logs it; it is never shown to the user as an error.
"""


class RetrievalError(Exception):
    """Base exception for all posting store errors."""

    pass


class StoreHTTPError(RetrievalError):
    """HTTP request to the posting API failed or returned 4xx/5xx."""

    def __init__(self, message: str, status_code: int, url: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class StoreTimeoutError(RetrievalError):
    """HTTP request to the posting API timed out."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class StoreResponseError(RetrievalError):
    """Store answered, but with data that cannot be turned into postings."""

    pass


class StoreConfigurationError(RetrievalError):
    """Store was given invalid settings (unknown backend, missing credentials)."""

    pass
