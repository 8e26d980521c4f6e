"""Credential and result schemas for bucket-tools."""

from dataclasses import dataclass, field
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

ObjectKey = str


class StoreCredentials(BaseModel):
    """Credentials and location of the bucket to clear.

    Region and addressing style are properties of the S3-compatible provider
    (IBM COS uses regions such as ``us-geo``), so both are explicit fields.

    Example:
        creds = StoreCredentials(
            access_key="minioadmin",
            secret_key="minioadmin",
            endpoint="http://localhost:9000",
            bucket_name="scratch",
            region="us-east-1",
        )
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    access_key: str = Field(..., description="Access key ID")
    secret_key: str = Field(..., description="Secret access key")
    endpoint: str = Field(..., description="Endpoint URL of the object store")
    bucket_name: str = Field(..., description="Name of the bucket to clear")
    region: str = Field(..., description="Region of the bucket")
    path_style: bool = Field(
        default=True, description="Use path-style addressing instead of virtual hosts"
    )

    @field_validator("access_key", "secret_key", "endpoint", "bucket_name", "region")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("endpoint")
    @classmethod
    def _http_endpoint(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"endpoint must be an http(s) URL: {value}")
        return value


@dataclass(frozen=True)
class ObjectPage:
    """One page of listed keys plus the cursor for the next page."""

    keys: list[ObjectKey]
    next_token: Optional[str] = None


@dataclass(frozen=True)
class DeletionOutcome:
    """Result of deleting a single key: deleted, or failed with a reason."""

    key: ObjectKey
    error: Optional[str] = None

    @property
    def deleted(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ClearResult:
    """Aggregate outcome of clearing a bucket."""

    deleted_count: int = 0
    failures: tuple[DeletionOutcome, ...] = field(default_factory=tuple)

    @property
    def failed_count(self) -> int:
        return len(self.failures)

    @property
    def ok(self) -> bool:
        return not self.failures
