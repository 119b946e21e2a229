"""Tests for key and path set validation."""

import pytest

from runnercache.core.caching import ValidationError, validate_key, validate_keys, validate_paths


class TestValidatePaths:
    """Tests for path set validation."""

    def test_empty_list_rejected(self):
        """Test empty path set raises ValidationError."""
        with pytest.raises(ValidationError, match="At least one directory or file path"):
            validate_paths([])

    def test_none_rejected(self):
        """Test missing path set raises ValidationError."""
        with pytest.raises(ValidationError):
            validate_paths(None)

    def test_non_empty_accepted(self):
        """Test a single path passes."""
        validate_paths(["dist"])


class TestValidateKey:
    """Tests for single key validation."""

    def test_key_at_limit_accepted(self):
        """Test a 512-character key is valid."""
        validate_key("k" * 512)

    def test_key_over_limit_rejected(self):
        """Test a 513-character key is rejected."""
        with pytest.raises(ValidationError, match="cannot be larger than 512 characters"):
            validate_key("k" * 513)

    @pytest.mark.parametrize("key", [",", "a,b", "npm-,", ",lead"])
    def test_comma_rejected(self, key: str):
        """Test keys containing commas are rejected."""
        with pytest.raises(ValidationError, match="cannot contain commas"):
            validate_key(key)

    def test_empty_key_rejected(self):
        """Test empty key is rejected."""
        with pytest.raises(ValidationError, match="cannot be empty"):
            validate_key("")

    def test_slashes_and_dots_accepted(self):
        """Test keys with path-like characters are valid."""
        validate_key("linux/node-20/../npm-abc123")


class TestValidateKeys:
    """Tests for combined key list validation."""

    def test_returns_primary_then_restore_keys(self):
        """Test combined list preserves order."""
        assert validate_keys("v1", ["v1-", "v"]) == ["v1", "v1-", "v"]

    def test_restore_keys_optional(self):
        """Test missing restore keys yields primary only."""
        assert validate_keys("v1") == ["v1"]

    def test_ten_keys_accepted(self):
        """Test exactly ten keys is allowed."""
        assert len(validate_keys("k0", [f"k{i}" for i in range(1, 10)])) == 10

    def test_eleven_keys_rejected(self):
        """Test more than ten keys is rejected."""
        with pytest.raises(ValidationError, match="maximum of 10"):
            validate_keys("k0", [f"k{i}" for i in range(1, 11)])

    def test_invalid_restore_key_rejected(self):
        """Test every restore key is validated."""
        with pytest.raises(ValidationError, match="cannot contain commas"):
            validate_keys("v1", ["ok", "bad,key"])
