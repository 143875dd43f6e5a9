"""
db/errors.py
------------
Typed failures raised by the database layer.
"""


class StoreError(RuntimeError):
    """Base class for failures originating in the persistence layer."""


class StoreUnavailableError(StoreError):
    """No usable connection could be obtained from the pool."""


class DecodeError(StoreError, ValueError):
    """A stored value does not map to a known entity attribute."""
