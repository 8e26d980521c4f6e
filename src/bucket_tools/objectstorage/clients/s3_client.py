"""S3 client construction and the object store interface used for clearing.

``ObjectStoreClient`` is the narrow capability the bulk deleter needs: list one
page of keys and delete one key. ``S3ObjectStore`` implements it on top of
boto3 for any S3-compatible endpoint (AWS, IBM COS, MinIO, R2, ...).

botocore exceptions never leave this module; they are translated into the
bucket-tools error taxonomy:
    - SessionError: the client could not be built, or the endpoint rejected or
      never answered the session check
    - ListError: a listing call failed
    - DeleteError: a single delete call failed
"""

from typing import Optional, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from bucket_tools.core import get_logger, settings
from bucket_tools.core.exceptions import (
    DeleteError,
    ListError,
    SessionError,
    ValidationError,
)
from bucket_tools.schemas import ClearResult, ObjectPage, StoreCredentials

logger = get_logger(__name__)

# Error codes meaning the endpoint refused the credentials
AUTH_ERROR_CODES = frozenset(
    {
        "403",
        "AccessDenied",
        "ExpiredToken",
        "InvalidAccessKeyId",
        "InvalidToken",
        "SignatureDoesNotMatch",
    }
)


class ObjectStoreClient(Protocol):
    """Protocol for the object store operations needed to empty a bucket."""

    def list_objects(
        self, bucket: str, continuation_token: Optional[str] = None
    ) -> ObjectPage:
        """Return one page of keys, starting after ``continuation_token``."""
        ...

    def delete_object(self, bucket: str, key: str) -> None:
        """Delete a single key, raising DeleteError on failure."""
        ...

    def close(self) -> None:
        """Release the underlying session."""
        ...


class S3ObjectStore:
    """boto3-backed object store client scoped to one set of credentials."""

    def __init__(
        self, credentials: StoreCredentials, page_size: Optional[int] = None
    ):
        """Create the boto3 client.

        Args:
            credentials: Static credentials and endpoint of the store
            page_size: Keys requested per listing call (defaults to settings)

        Raises:
            SessionError: If the client cannot be constructed
            ValidationError: If page_size is outside 1..1000
        """
        if page_size is None:
            page_size = settings.page_size
        if not 1 <= page_size <= 1000:
            raise ValidationError(
                f"page_size must be between 1 and 1000, got: {page_size}"
            )

        self.credentials = credentials
        self.page_size = page_size
        self._client = self._create_client()

    def _create_client(self):
        addressing_style = "path" if self.credentials.path_style else "virtual"
        try:
            client = boto3.client(
                "s3",
                region_name=self.credentials.region,
                endpoint_url=self.credentials.endpoint,
                aws_access_key_id=self.credentials.access_key,
                aws_secret_access_key=self.credentials.secret_key,
                config=Config(s3={"addressing_style": addressing_style}),
            )
        except (BotoCoreError, ValueError) as e:
            error_msg = (
                f"Failed to create S3 client for '{self.credentials.endpoint}': {e}"
            )
            logger.error(error_msg, error=str(e))
            raise SessionError(error_msg) from e

        logger.info(
            "S3 client created",
            endpoint=self.credentials.endpoint,
            region=self.credentials.region,
            addressing_style=addressing_style,
        )
        return client

    def check_session(self) -> None:
        """Make one HEAD request against the bucket to prove the session works.

        Raises:
            SessionError: If the endpoint is unreachable or refuses the credentials
            ListError: If the bucket cannot be accessed for any other reason
        """
        bucket = self.credentials.bucket_name
        try:
            self._client.head_bucket(Bucket=bucket)
        except ClientError as e:
            code = str(e.response.get("Error", {}).get("Code", ""))
            if code in AUTH_ERROR_CODES:
                error_msg = (
                    f"Credentials rejected by '{self.credentials.endpoint}': {e}"
                )
                logger.error(error_msg, error=str(e), code=code)
                raise SessionError(error_msg) from e
            raise ListError(
                f"Failed to access bucket '{bucket}': {e}", result=ClearResult()
            ) from e
        except BotoCoreError as e:
            error_msg = f"Failed to reach '{self.credentials.endpoint}': {e}"
            logger.error(error_msg, error=str(e))
            raise SessionError(error_msg) from e

        logger.debug("S3 session checked", bucket=bucket)

    @property
    def client(self):
        """The underlying boto3 S3 client."""
        return self._client

    def list_objects(
        self, bucket: str, continuation_token: Optional[str] = None
    ) -> ObjectPage:
        kwargs = {"Bucket": bucket, "MaxKeys": self.page_size}
        if continuation_token:
            kwargs["ContinuationToken"] = continuation_token

        try:
            response = self._client.list_objects_v2(**kwargs)
        except (BotoCoreError, ClientError) as e:
            raise ListError(f"Failed to list objects in '{bucket}': {e}") from e

        keys = [obj["Key"] for obj in response.get("Contents", [])]
        next_token = None
        if response.get("IsTruncated"):
            next_token = response.get("NextContinuationToken")

        logger.debug(
            "S3 page listed",
            bucket=bucket,
            key_count=len(keys),
            truncated=bool(next_token),
        )
        return ObjectPage(keys=keys, next_token=next_token)

    def delete_object(self, bucket: str, key: str) -> None:
        try:
            self._client.delete_object(Bucket=bucket, Key=key)
        except ClientError as e:
            reason = e.response.get("Error", {}).get("Message") or str(e)
            raise DeleteError(key, reason) from e
        except BotoCoreError as e:
            raise DeleteError(key, str(e)) from e

    def close(self) -> None:
        self._client.close()
        logger.debug("S3 client closed", endpoint=self.credentials.endpoint)

    def __enter__(self) -> "S3ObjectStore":
        try:
            self.check_session()
        except Exception:
            self.close()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
