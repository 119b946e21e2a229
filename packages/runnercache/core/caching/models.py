"""Models for the cache system.

Provides scope, per-call options and result models.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from runnercache.core.archive.models import CompressionMethod


class CacheScope(BaseModel):
    """
    Namespace under which cache keys are stored.

    Entries saved under one (repository, ref) pair are never visible from
    another.
    """

    model_config = ConfigDict(frozen=True)

    repository: str = Field(description="Owning repository identifier (e.g., 'acme/widgets')")
    ref: str = Field(description="Ref/branch identifier (e.g., 'main')")

    def __str__(self) -> str:
        return f"{self.repository}@{self.ref}"


class RestoreOptions(BaseModel):
    """Per-call restore behavior."""

    lookup_only: bool = Field(
        default=False,
        description="Report a hit without downloading or extracting the entry",
    )


class SaveOptions(BaseModel):
    """Per-call save behavior."""

    compression: CompressionMethod | None = Field(
        default=None, description="Override the configured compression method"
    )


class RestoreOutcome(str, Enum):
    HIT = "hit"
    MISS = "miss"
    UNAVAILABLE = "unavailable"
    FAILED = "failed"


class SaveOutcome(str, Enum):
    SAVED = "saved"
    UNAVAILABLE = "unavailable"
    FAILED = "failed"


class RestoreResult(BaseModel):
    """Result of a restore call.

    Attributes:
        outcome: Hit, clean miss, no configured store, or degraded failure
        primary_key: Key the caller asked for first
        matched_key: Key that produced the hit (None unless outcome is HIT)
        archive_bytes: Size of the transferred archive (None for lookup-only)
        error: Failure message (FAILED only)
    """

    model_config = ConfigDict(frozen=True)

    outcome: RestoreOutcome
    primary_key: str
    matched_key: str | None = None
    archive_bytes: int | None = None
    error: str | None = None

    @property
    def cache_hit(self) -> bool:
        """True only for an exact hit on the primary key."""
        return self.outcome == RestoreOutcome.HIT and self.matched_key == self.primary_key


class SaveResult(BaseModel):
    """Result of a save call.

    Attributes:
        outcome: Saved, no configured store, or degraded failure
        key: Target key
        archive_bytes: Size of the stored archive (SAVED only)
        error: Failure message (FAILED only)
    """

    model_config = ConfigDict(frozen=True)

    outcome: SaveOutcome
    key: str
    archive_bytes: int | None = None
    error: str | None = None

    @property
    def saved(self) -> bool:
        return self.outcome == SaveOutcome.SAVED

    @property
    def cache_id(self) -> int:
        """``1`` when the archive was stored, ``-1`` otherwise."""
        return 1 if self.saved else -1
