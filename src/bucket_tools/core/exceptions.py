"""Exception hierarchy for bucket-tools."""


class BucketToolsError(Exception):
    """Base exception for all bucket-tools errors."""

    pass


class ValidationError(BucketToolsError):
    """Raised when validation fails."""

    pass


class StoreError(BucketToolsError):
    """Raised when a call to the object store fails."""

    pass


class SessionError(StoreError):
    """Raised when the store client cannot be constructed."""

    pass


class ListError(StoreError):
    """Raised when a page of objects cannot be listed.

    ``result`` holds whatever was achieved on earlier pages, if known.
    """

    def __init__(self, message: str, result=None):
        super().__init__(message)
        self.result = result


class DeleteError(StoreError):
    """Raised when a single object cannot be deleted."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"failed to delete '{key}': {reason}")
        self.key = key
        self.reason = reason


class AggregateError(StoreError):
    """Raised when a clear finished but one or more deletes failed."""

    def __init__(self, result):
        lines = [f"{f.key}: {f.error}" for f in result.failures]
        super().__init__(
            f"{result.failed_count} object(s) could not be deleted "
            f"({result.deleted_count} deleted): " + "; ".join(lines)
        )
        self.result = result


class ClearCancelledError(BucketToolsError):
    """Raised when a clear was cancelled or ran past its deadline."""

    def __init__(self, result):
        super().__init__(
            f"clear cancelled after {result.deleted_count} deletion(s)"
        )
        self.result = result
