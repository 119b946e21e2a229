"""Blob store backends."""

from runnercache.core.caching.backends.fs import FSBlobLocator

__all__ = ["FSBlobLocator"]
