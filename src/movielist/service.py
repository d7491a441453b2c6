"""Load titles, fan out lookups, and log the outcome of the batch."""

from pathlib import Path

from loguru import logger

from .fanout import FetchFn, aggregate_all
from .models import DEFAULT_MAX_CONCURRENCY, AggregateResult
from .title_source import load_titles

log = logger.bind(stage="service")


def collect_movies(
    titles_file: Path,
    fetch: FetchFn,
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
) -> AggregateResult:
    """Run one batch over the titles file.

    Raises TitleSourceError if the title list cannot be loaded. Per-title
    failures are logged and returned in result.errors.
    """
    titles = load_titles(titles_file)
    result = aggregate_all(titles, fetch, max_concurrency=max_concurrency)

    log.info(f"Number of movies retrieved: {result.succeeded}")
    for err in result.errors:
        log.warning(f"Unable to fetch movie information by title [{err.cause}]: {err}")

    return result
