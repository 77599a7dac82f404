"""Errors raised by the persistence layer itself.

Store failures (connectivity, constraint violations, deadlocks) are not
wrapped: they surface as the SQLAlchemy exceptions raised by the driver.
"""

from __future__ import annotations


class PersistenceError(Exception):
    """Root of the errors this layer raises on its own."""


class InvalidArgumentError(PersistenceError, ValueError):
    """A query argument was rejected before any store round trip.

    Raised for unknown sort fields, negative skip/take, unknown include
    paths and malformed procedure names.
    """


class TransactionStateError(PersistenceError, RuntimeError):
    """A transaction was begun while another one is still open."""


class ConcurrentUsageError(PersistenceError, RuntimeError):
    """A unit of work was entered by a second caller while busy."""
