"""Object store clients."""

from .s3_client import ObjectStoreClient, S3ObjectStore

__all__ = ["ObjectStoreClient", "S3ObjectStore"]
