"""Error types for the car ownership data-access layer.

Every database failure is re-raised as one of these, chained to the
original SQLAlchemy error, so the entry point can log a single line with
the operation that failed.
"""

from __future__ import annotations


class DataAccessError(Exception):
    """Base error for all data-access failures."""


class DatabaseConnectionError(DataAccessError):
    """Raised when the database cannot be reached."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"failed opening connection to {url}: {message}")


class SchemaCreationError(DataAccessError):
    """Raised when the tables cannot be created."""

    def __init__(self, message: str) -> None:
        super().__init__(f"failed creating schema resources: {message}")


class RecordCreationError(DataAccessError):
    """Raised when an insert fails."""

    def __init__(self, entity: str, message: str) -> None:
        super().__init__(f"failed creating {entity}: {message}")


class QueryError(DataAccessError):
    """Raised when a query fails."""


class NotFoundError(QueryError):
    """Raised when a query expecting exactly one row matches none."""

    def __init__(self, entity: str, criteria: str) -> None:
        super().__init__(f"{entity} not found ({criteria})")


class MultipleResultsError(QueryError):
    """Raised when a query expecting exactly one row matches several."""

    def __init__(self, entity: str, criteria: str) -> None:
        super().__init__(f"{entity} query returned multiple results ({criteria})")


class OwnerNotFoundError(NotFoundError):
    """Raised when a car has no owner linked."""

    def __init__(self, model: str) -> None:
        super().__init__("owner", f'car "{model}"')


class InvalidDSNError(ValueError):
    """Raised for connection strings that cannot be parsed."""

    def __init__(self, dsn: str, reason: str) -> None:
        super().__init__(f"invalid DSN {dsn!r}: {reason}")
