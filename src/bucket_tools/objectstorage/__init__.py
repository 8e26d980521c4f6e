"""Object storage operations for S3-compatible services."""

from .bulk_delete import BulkDeleter, clear_bucket
from .clients import ObjectStoreClient, S3ObjectStore

__all__ = [
    "BulkDeleter",
    "ObjectStoreClient",
    "S3ObjectStore",
    "clear_bucket",
]
