"""Exceptions raised by the cache orchestrator.

Validation, capacity and path errors are the caller's to handle and always
propagate. Store and codec failures are degraded to a "failed" outcome by
the orchestrator; an unconfigured store is an outcome, not an exception.
"""


class CacheError(Exception):
    """Base exception for all cache errors."""


class ValidationError(CacheError):
    """Raised when keys or path sets violate their constraints (caller misuse)."""


class NoCacheablePathsError(CacheError):
    """Raised when save patterns resolve to no existing path."""


class CapacityError(CacheError):
    """Raised when a packaged archive exceeds the configured size ceiling.

    Attributes:
        size_bytes: Measured archive size
        limit_bytes: Configured ceiling
    """

    def __init__(self, message: str, *, size_bytes: int, limit_bytes: int) -> None:
        super().__init__(message)
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes


class StoreError(CacheError):
    """Raised when transferring bytes to or from the backing store fails."""
