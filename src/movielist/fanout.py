"""Bounded fan-out/fan-in lookup of many titles.

Dispatches one fetch per title onto a thread pool while a PermitPool caps
the number of lookups in flight. Successes and failures are collected
separately and returned together once every task has finished. Output order
is unspecified.
"""

import threading
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, wait

from loguru import logger

from .errors import MovieLookupError
from .models import DEFAULT_MAX_CONCURRENCY, AggregateResult, LookupCause, MovieRecord

log = logger.bind(stage="fanout")

FetchFn = Callable[[str], MovieRecord]


class PermitPool:
    """Fixed-capacity pool of permits, one per in-flight lookup.

    acquire() blocks while all permits are held. Also usable as a context
    manager for scoped acquisition.
    """

    def __init__(self, capacity: int = DEFAULT_MAX_CONCURRENCY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self._sem = threading.BoundedSemaphore(capacity)
        self._lock = threading.Lock()
        self._in_use = 0
        self._peak = 0

    @property
    def in_use(self) -> int:
        return self._in_use

    @property
    def peak(self) -> int:
        """Highest number of permits held at once since creation."""
        return self._peak

    def acquire(self) -> None:
        self._sem.acquire()
        with self._lock:
            self._in_use += 1
            self._peak = max(self._peak, self._in_use)

    def release(self) -> None:
        with self._lock:
            self._in_use -= 1
        # BoundedSemaphore raises ValueError on over-release
        self._sem.release()

    def __enter__(self) -> "PermitPool":
        self.acquire()
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()


class _Collector:
    """Lock-guarded record/error lists shared by all tasks of one batch."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.records: list[MovieRecord] = []
        self.errors: list[MovieLookupError] = []

    def add_record(self, record: MovieRecord) -> None:
        with self._lock:
            self.records.append(record)

    def add_error(self, error: MovieLookupError) -> None:
        with self._lock:
            self.errors.append(error)


def aggregate_all(
    titles: Sequence[str],
    fetch: FetchFn,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
    pool: PermitPool | None = None,
) -> AggregateResult:
    """Look up every title concurrently, at most max_concurrency at a time.

    Each title yields exactly one outcome: a record, or an error in
    result.errors. A failing lookup never aborts the batch and this function
    does not raise for per-title failures.

    Args:
        titles: Titles to look up. Duplicates are looked up independently.
        fetch: Single-title lookup; raises MovieLookupError on failure.
        max_concurrency: Permit capacity, used when no pool is given.
        pool: Optional pre-built PermitPool (lets callers inspect peak usage).
    """
    if not titles:
        log.debug("aggregate_all: no titles")
        return AggregateResult()

    permits = pool or PermitPool(max_concurrency)
    collector = _Collector()

    def _run(title: str) -> None:
        try:
            record = fetch(title)
        except MovieLookupError as e:
            collector.add_error(e)
        except Exception as e:
            log.exception(f"Unexpected error looking up {title!r}")
            collector.add_error(
                MovieLookupError(title, f"{type(e).__name__}: {e}", LookupCause.UNEXPECTED)
            )
        else:
            collector.add_record(record)
        finally:
            permits.release()

    log.info(
        f"Starting lookups: {len(titles)} titles, "
        f"max_concurrency={permits.capacity}"
    )

    with ThreadPoolExecutor(
        max_workers=permits.capacity,
        thread_name_prefix="lookup",
    ) as executor:
        futures = []
        for title in titles:
            # Blocks the dispatch loop while every permit is held
            permits.acquire()
            try:
                futures.append(executor.submit(_run, title))
            except BaseException:
                permits.release()
                raise
        wait(futures)

    result = AggregateResult(records=collector.records, errors=collector.errors)
    log.info(
        f"Lookups finished: {result.succeeded} succeeded, {result.failed} failed "
        f"(peak in flight={permits.peak})"
    )
    return result
