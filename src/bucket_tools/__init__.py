"""Tools for emptying S3-compatible object storage buckets.

This package drains a bucket of every object it holds: it pages through the
bucket listing, deletes each page's objects with a bounded pool of workers,
and reports every delete that failed instead of stopping at the first one.

Any S3-compatible service works (AWS S3, IBM Cloud Object Storage, MinIO,
Cloudflare R2, ...) as long as an endpoint and static keys are available.

Usage:
    >>> from bucket_tools import StoreCredentials, clear_bucket
    >>> creds = StoreCredentials(
    ...     access_key="key",
    ...     secret_key="secret",
    ...     endpoint="https://s3.us.cloud-object-storage.appdomain.cloud",
    ...     bucket_name="scratch",
    ...     region="us-geo",
    ... )
    >>> result = clear_bucket(creds, concurrency_limit=16)
    >>> result.deleted_count
"""

__version__ = "0.1.0"

from .core.exceptions import (
    AggregateError,
    BucketToolsError,
    ClearCancelledError,
    DeleteError,
    ListError,
    SessionError,
    StoreError,
    ValidationError,
)
from .objectstorage import (
    BulkDeleter,
    ObjectStoreClient,
    S3ObjectStore,
    clear_bucket,
)
from .schemas import ClearResult, DeletionOutcome, ObjectPage, StoreCredentials

__all__ = [
    # Data model
    "ClearResult",
    "DeletionOutcome",
    "ObjectPage",
    "StoreCredentials",
    # Operations
    "BulkDeleter",
    "ObjectStoreClient",
    "S3ObjectStore",
    "clear_bucket",
    # Errors
    "AggregateError",
    "BucketToolsError",
    "ClearCancelledError",
    "DeleteError",
    "ListError",
    "SessionError",
    "StoreError",
    "ValidationError",
]
