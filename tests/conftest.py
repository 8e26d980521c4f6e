"""Test configuration and fixtures for bucket-tools."""

import pytest

from bucket_tools.schemas import StoreCredentials


@pytest.fixture
def credentials():
    """Credentials for a path-style S3-compatible endpoint."""
    return StoreCredentials(
        access_key="test_key",
        secret_key="test_secret",
        endpoint="http://localhost:9000",
        bucket_name="test-bucket",
        region="us-geo",
    )


@pytest.fixture
def cli_args():
    """Connection arguments for the clear command."""
    return [
        "clear",
        "--endpoint",
        "http://localhost:9000",
        "--access-key",
        "test_key",
        "--secret-key",
        "test_secret",
        "--bucket",
        "test-bucket",
        "--region",
        "us-geo",
    ]
