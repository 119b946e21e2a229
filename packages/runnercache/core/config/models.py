"""Configuration models for runnercache."""

from __future__ import annotations

from pathlib import Path
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from runnercache.core.archive.models import CompressionMethod
from runnercache.core.io.models import DEFAULT_CHUNK_SIZE

# Largest archive accepted by save (10 GiB)
CACHE_SIZE_LIMIT_BYTES = 10 * 1024**3


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(default=False, description="Emit JSON log lines")


class CacheSettings(BaseModel):
    """Settings injected into the blob locator and cache service at startup.

    ``root`` is the only availability signal: when it is unset, restore
    reports "unavailable" and save is a no-op.

    Example:
        >>> settings = CacheSettings(
        ...     root=Path("/mnt/runner-cache"),
        ...     repository="acme/widgets",
        ...     ref="main",
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    root: Path | None = Field(default=None, description="Top of the backing store")
    repository: str = Field(default="", description="Owning repository identifier")
    ref: str = Field(default="", description="Ref/branch identifier")
    workspace: Path = Field(
        default_factory=Path.cwd, description="Directory archive members are relative to"
    )
    temp_dir: Path | None = Field(
        default=None, description="Parent for temporary archive directories"
    )
    compression: CompressionMethod = CompressionMethod.GZIP
    max_archive_bytes: int = Field(
        default=CACHE_SIZE_LIMIT_BYTES, gt=0, description="Archive size ceiling for save"
    )
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, gt=0, description="Transfer chunk size")
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("root", "temp_dir")
    @classmethod
    def _require_absolute(cls, value: Path | None) -> Path | None:
        if value is not None and not value.expanduser().is_absolute():
            raise ValueError(f"Path must be absolute: {value}")
        return value.expanduser() if value is not None else None

    @model_validator(mode="after")
    def _require_scope_with_root(self) -> Self:
        if self.root is not None and not (self.repository and self.ref):
            raise ValueError("repository and ref are required when a cache root is configured")
        return self

    @property
    def available(self) -> bool:
        """Whether a backing store is configured."""
        return self.root is not None
