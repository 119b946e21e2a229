"""Content-key artifact cache for CI runners.

Restores previously saved path sets matching one of an ordered list of keys,
or packages the current paths and stores them under an explicit key.

Key features:
- First-hit-wins key scan over [primary, *restore_keys]
- Scope-namespaced, atomically written entries (no partial blobs)
- Graceful degradation: store/codec failures become a FAILED outcome
- Temporary archives removed on every exit path
"""

from runnercache.core.caching.backends.fs import FSBlobLocator
from runnercache.core.caching.errors import (
    CacheError,
    CapacityError,
    NoCacheablePathsError,
    StoreError,
    ValidationError,
)
from runnercache.core.caching.models import (
    CacheScope,
    RestoreOptions,
    RestoreOutcome,
    RestoreResult,
    SaveOptions,
    SaveOutcome,
    SaveResult,
)
from runnercache.core.caching.protocols import BlobLocator
from runnercache.core.caching.service import (
    CacheService,
    is_feature_available,
    restore_cache,
    save_cache,
)
from runnercache.core.caching.validation import validate_key, validate_keys, validate_paths

__all__ = [
    # Orchestration
    "CacheService",
    "restore_cache",
    "save_cache",
    "is_feature_available",
    # Storage
    "BlobLocator",
    "FSBlobLocator",
    # Models
    "CacheScope",
    "RestoreOptions",
    "RestoreOutcome",
    "RestoreResult",
    "SaveOptions",
    "SaveOutcome",
    "SaveResult",
    # Validation
    "validate_key",
    "validate_keys",
    "validate_paths",
    # Errors
    "CacheError",
    "CapacityError",
    "NoCacheablePathsError",
    "StoreError",
    "ValidationError",
]
