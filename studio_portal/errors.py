"""Typed failures raised by the store and service layers.

Routes translate these into HTTP responses; nothing below the route
layer swallows them.
"""


class StoreError(Exception):
    """Base class for all entity store failures."""


class NotFoundError(StoreError, LookupError):
    """The target record (or sub-record) does not exist."""


class ValidationError(StoreError, ValueError):
    """Input was rejected before any mutation took place."""


class PersistenceError(StoreError):
    """The backing storage could not be read or written.

    Raised with the underlying exception chained. When this is raised from
    a mutation, nothing has been committed.
    """


class UnauthorizedError(StoreError):
    """Missing or invalid bearer token on a gated operation."""
