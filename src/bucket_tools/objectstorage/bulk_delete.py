"""Bulk deletion of every object in a bucket.

The bucket is drained page by page. Each page's keys are deleted by a bounded
thread pool, and the next page is only listed once every delete of the
current page has finished. Delete failures are collected rather than raised,
so a single bad object never stops the rest of the page.

Outcomes:
    - every delete succeeded: a ClearResult is returned
    - some deletes failed: AggregateError carrying the ClearResult
    - a listing call failed: ListError carrying the partial ClearResult
    - cancelled or past the deadline: ClearCancelledError carrying the
      partial ClearResult
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from bucket_tools.core import get_logger, get_tracer, settings
from bucket_tools.core.exceptions import (
    AggregateError,
    ClearCancelledError,
    ListError,
    ValidationError,
)
from bucket_tools.objectstorage.clients import ObjectStoreClient, S3ObjectStore
from bucket_tools.schemas import ClearResult, DeletionOutcome, StoreCredentials

logger = get_logger(__name__)
tracer = get_tracer(__name__)


class _Tally:
    """Thread-safe accumulator for delete outcomes."""

    def __init__(self):
        self._lock = threading.Lock()
        self._deleted = 0
        self._failures: list[DeletionOutcome] = []

    def record(self, outcome: DeletionOutcome) -> None:
        with self._lock:
            if outcome.deleted:
                self._deleted += 1
            else:
                self._failures.append(outcome)

    def snapshot(self) -> ClearResult:
        with self._lock:
            return ClearResult(
                deleted_count=self._deleted, failures=tuple(self._failures)
            )


class BulkDeleter:
    """Deletes every object in a bucket through an ObjectStoreClient."""

    def __init__(
        self,
        store: ObjectStoreClient,
        bucket: str,
        concurrency_limit: Optional[int] = None,
    ):
        """Initialize the deleter.

        Args:
            store: Client used to list and delete objects
            bucket: Name of the bucket to drain
            concurrency_limit: Maximum number of delete calls in flight
                (defaults to settings.concurrency_limit)

        Raises:
            ValidationError: If the concurrency limit is below 1
        """
        if concurrency_limit is None:
            concurrency_limit = settings.concurrency_limit
        if concurrency_limit < 1:
            raise ValidationError(
                f"concurrency_limit must be at least 1, got: {concurrency_limit}"
            )

        self.store = store
        self.bucket = bucket
        self.concurrency_limit = concurrency_limit

    def run(
        self,
        cancel_event: Optional[threading.Event] = None,
        timeout: Optional[float] = None,
    ) -> ClearResult:
        """Drain the bucket.

        Args:
            cancel_event: When set, no further deletes are submitted
            timeout: Seconds after which the run is treated as cancelled

        Returns:
            ClearResult with the number of deleted objects

        Raises:
            ListError: If a page cannot be listed
            AggregateError: If one or more deletes failed
            ClearCancelledError: If cancelled or the timeout expired
        """
        deadline = time.monotonic() + timeout if timeout is not None else None
        tally = _Tally()
        token = None
        pages = 0

        logger.info(
            "Clearing bucket",
            bucket=self.bucket,
            concurrency_limit=self.concurrency_limit,
        )

        with tracer.start_as_current_span("clear_bucket") as span:
            span.set_attribute("bucket", self.bucket)
            span.set_attribute("concurrency_limit", self.concurrency_limit)

            while True:
                if self._should_stop(cancel_event, deadline):
                    self._raise_cancelled(tally)

                try:
                    page = self.store.list_objects(self.bucket, token)
                except ListError as e:
                    e.result = tally.snapshot()
                    logger.error(
                        "Listing failed",
                        bucket=self.bucket,
                        pages=pages,
                        error=str(e),
                        deleted_count=e.result.deleted_count,
                    )
                    raise
                except Exception as e:
                    result = tally.snapshot()
                    error_msg = (
                        f"Failed to list objects in '{self.bucket}' "
                        f"after {pages} page(s): {e}"
                    )
                    logger.error(
                        error_msg,
                        error=str(e),
                        deleted_count=result.deleted_count,
                    )
                    raise ListError(error_msg, result=result) from e

                if not page.keys:
                    break

                pages += 1
                finished = self._delete_page(page.keys, tally, cancel_event, deadline)
                logger.debug(
                    "Page processed",
                    bucket=self.bucket,
                    page=pages,
                    key_count=len(page.keys),
                )
                if not finished:
                    self._raise_cancelled(tally)

                if page.next_token is None:
                    break
                token = page.next_token

            result = tally.snapshot()
            span.set_attribute("deleted_count", result.deleted_count)
            span.set_attribute("failed_count", result.failed_count)

        if result.failures:
            logger.error(
                "Bucket cleared with failures",
                bucket=self.bucket,
                deleted_count=result.deleted_count,
                failed_count=result.failed_count,
            )
            raise AggregateError(result)

        logger.info(
            "Bucket cleared",
            bucket=self.bucket,
            pages=pages,
            deleted_count=result.deleted_count,
        )
        return result

    def _delete_page(
        self,
        keys: list[str],
        tally: _Tally,
        cancel_event: Optional[threading.Event],
        deadline: Optional[float],
    ) -> bool:
        """Delete one page of keys; returns False if stopped early."""
        workers = min(self.concurrency_limit, len(keys))
        slots = threading.BoundedSemaphore(workers)
        stopped = False

        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="bulk-delete"
        ) as executor:
            for key in keys:
                slots.acquire()
                if self._should_stop(cancel_event, deadline):
                    slots.release()
                    stopped = True
                    break
                executor.submit(self._delete_one, key, tally, slots)

        return not stopped

    def _delete_one(
        self, key: str, tally: _Tally, slots: threading.BoundedSemaphore
    ) -> None:
        try:
            self.store.delete_object(self.bucket, key)
        except Exception as e:
            reason = getattr(e, "reason", None) or str(e)
            logger.warning(
                "Failed to delete object", bucket=self.bucket, key=key, error=reason
            )
            tally.record(DeletionOutcome(key=key, error=reason))
        else:
            tally.record(DeletionOutcome(key=key))
        finally:
            slots.release()

    @staticmethod
    def _should_stop(
        cancel_event: Optional[threading.Event], deadline: Optional[float]
    ) -> bool:
        if cancel_event is not None and cancel_event.is_set():
            return True
        return deadline is not None and time.monotonic() >= deadline

    def _raise_cancelled(self, tally: _Tally) -> None:
        result = tally.snapshot()
        logger.warning(
            "Bucket clear cancelled",
            bucket=self.bucket,
            deleted_count=result.deleted_count,
            failed_count=result.failed_count,
        )
        raise ClearCancelledError(result)


def clear_bucket(
    credentials: StoreCredentials,
    concurrency_limit: Optional[int] = None,
    page_size: Optional[int] = None,
    cancel_event: Optional[threading.Event] = None,
    timeout: Optional[float] = None,
) -> ClearResult:
    """Delete every object in the bucket named by ``credentials``.

    The S3 session is opened for the duration of the call and closed on every
    exit path.

    Args:
        credentials: Endpoint, keys, bucket and region of the store
        concurrency_limit: Maximum number of delete calls in flight
        page_size: Keys requested per listing call
        cancel_event: When set, no further deletes are submitted
        timeout: Seconds after which the run is treated as cancelled

    Returns:
        ClearResult with the number of deleted objects

    Raises:
        SessionError: If the S3 client cannot be created, the endpoint is
            unreachable or the credentials are rejected
        ListError: If a page cannot be listed
        AggregateError: If one or more deletes failed
        ClearCancelledError: If cancelled or the timeout expired
    """
    with S3ObjectStore(credentials, page_size=page_size) as store:
        deleter = BulkDeleter(store, credentials.bucket_name, concurrency_limit)
        return deleter.run(cancel_event=cancel_event, timeout=timeout)
