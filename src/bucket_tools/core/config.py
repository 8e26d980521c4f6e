"""Configuration management for bucket-tools."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support.

    Every field can be set through a ``BUCKET_TOOLS_`` prefixed environment
    variable, e.g. ``BUCKET_TOOLS_CONCURRENCY_LIMIT=64``.
    """

    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"
    otel_enabled: bool = False
    otel_service_name: str = "bucket-tools"

    # Upper bound on delete calls in flight during a clear
    concurrency_limit: int = Field(32, ge=1)
    # MaxKeys per listing request; S3 caps this at 1000
    page_size: int = Field(1000, ge=1, le=1000)

    model_config = {
        "env_prefix": "BUCKET_TOOLS_",
        "case_sensitive": False,
    }


settings = Settings()
