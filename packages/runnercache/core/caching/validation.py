"""Key and path set validation.

Pure checks run before any storage access.
"""

from __future__ import annotations

from collections.abc import Sequence

from runnercache.core.caching.errors import ValidationError

MAX_KEY_LENGTH = 512
MAX_KEYS = 10


def validate_paths(paths: Sequence[str] | None) -> None:
    """Raise ValidationError when no path is given."""
    if not paths:
        raise ValidationError(
            "Path Validation Error: At least one directory or file path is required"
        )


def validate_key(key: str) -> None:
    """Raise ValidationError when ``key`` is empty, too long, or contains a comma."""
    if not key:
        raise ValidationError("Key Validation Error: key cannot be empty.")
    if len(key) > MAX_KEY_LENGTH:
        raise ValidationError(
            f"Key Validation Error: {key} cannot be larger than {MAX_KEY_LENGTH} characters."
        )
    if "," in key:
        raise ValidationError(f"Key Validation Error: {key} cannot contain commas.")


def validate_keys(primary_key: str, restore_keys: Sequence[str] | None = None) -> list[str]:
    """Validate the combined lookup key list.

    Args:
        primary_key: Exact key probed first
        restore_keys: Ordered fallback keys

    Returns:
        ``[primary_key, *restore_keys]``

    Raises:
        ValidationError: If more than MAX_KEYS keys are given or any key is invalid
    """
    keys = [primary_key, *(restore_keys or [])]
    if len(keys) > MAX_KEYS:
        raise ValidationError(
            f"Key Validation Error: Keys are limited to a maximum of {MAX_KEYS}."
        )
    for key in keys:
        validate_key(key)
    return keys
