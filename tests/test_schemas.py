"""Tests for credential and result schemas."""

import pytest
from pydantic import ValidationError

from bucket_tools.schemas import ClearResult, DeletionOutcome, StoreCredentials


class TestStoreCredentials:
    """Test store credentials validation."""

    def test_credentials_creation(self, credentials):
        """Test credentials creation."""
        assert credentials.access_key == "test_key"
        assert credentials.secret_key == "test_secret"
        assert credentials.endpoint == "http://localhost:9000"
        assert credentials.bucket_name == "test-bucket"
        assert credentials.region == "us-geo"
        assert credentials.path_style is True  # default

    def test_credentials_virtual_host(self):
        """Test credentials with virtual-host addressing."""
        creds = StoreCredentials(
            access_key="key",
            secret_key="secret",
            endpoint="https://s3.amazonaws.com",
            bucket_name="bucket",
            region="eu-west-1",
            path_style=False,
        )
        assert creds.path_style is False

    def test_credentials_are_immutable(self, credentials):
        """Test that credentials cannot be modified after construction."""
        with pytest.raises(ValidationError):
            credentials.bucket_name = "other-bucket"

    def test_credentials_strip_whitespace(self):
        """Test that surrounding whitespace is removed."""
        creds = StoreCredentials(
            access_key=" key ",
            secret_key="secret",
            endpoint="https://s3.amazonaws.com",
            bucket_name=" bucket\n",
            region="us-east-1",
        )
        assert creds.access_key == "key"
        assert creds.bucket_name == "bucket"

    def test_credentials_missing_region(self):
        """Test that region is required."""
        with pytest.raises(ValidationError):
            StoreCredentials(
                access_key="key",
                secret_key="secret",
                endpoint="https://s3.amazonaws.com",
                bucket_name="bucket",
            )

    def test_credentials_blank_bucket(self):
        """Test that a blank bucket name is rejected."""
        with pytest.raises(ValidationError, match="must not be empty"):
            StoreCredentials(
                access_key="key",
                secret_key="secret",
                endpoint="https://s3.amazonaws.com",
                bucket_name="   ",
                region="us-east-1",
            )

    def test_credentials_invalid_endpoint(self):
        """Test that a non-HTTP endpoint is rejected."""
        with pytest.raises(ValidationError, match="http"):
            StoreCredentials(
                access_key="key",
                secret_key="secret",
                endpoint="s3.amazonaws.com",
                bucket_name="bucket",
                region="us-east-1",
            )

    def test_credentials_extra_fields_forbidden(self):
        """Test that unknown fields are rejected."""
        with pytest.raises(ValidationError):
            StoreCredentials(
                access_key="key",
                secret_key="secret",
                endpoint="https://s3.amazonaws.com",
                bucket_name="bucket",
                region="us-east-1",
                session_token="token",
            )


class TestClearResult:
    """Test aggregate clear results."""

    def test_clear_result_defaults(self):
        """Test an empty result."""
        result = ClearResult()
        assert result.deleted_count == 0
        assert result.failures == ()
        assert result.failed_count == 0
        assert result.ok

    def test_clear_result_with_failures(self):
        """Test a result carrying failures."""
        result = ClearResult(
            deleted_count=1,
            failures=(DeletionOutcome(key="b", error="access denied"),),
        )
        assert result.failed_count == 1
        assert not result.ok

    def test_deletion_outcome(self):
        """Test deleted and failed outcomes."""
        assert DeletionOutcome(key="a").deleted
        assert not DeletionOutcome(key="b", error="access denied").deleted
