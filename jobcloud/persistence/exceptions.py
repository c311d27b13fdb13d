"""Persistence layer exceptions.

All persistence exceptions inherit from PersistenceError so that the
database-backed posting store can translate them with a single except clause.
"""


class PersistenceError(Exception):
    """Base exception for all persistence layer errors."""

    pass


class DatabaseConnectionError(PersistenceError):
    """Raised when the database cannot be initialized or reached.

    Examples:
    - Empty or malformed database URL
    - Database file not accessible
    - Session requested before init_database()
    """

    pass


class DataIntegrityError(PersistenceError):
    """Raised when a write violates a constraint (e.g. duplicate posting id)."""

    pass
