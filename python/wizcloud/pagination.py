from __future__ import annotations

import logging
from concurrent.futures import Executor
from typing import Callable, Iterator, List, Optional

from wiz_graphql.errors import RequestError, TransientError, ValidationError
from wiz_graphql.logging import get_logger

from .cursors import (
    CancellationToken,
    CursorTracker,
    FetchPage,
    Page,
    T,
    is_cancelled,
)
from .prefetch import prefetched_pages
from .progress import ProgressCallback, ProgressReporter

MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 5000

ErrorSink = Callable[[Exception], None]

__all__ = [
    "CancellationToken",
    "FetchPage",
    "Page",
    "MAX_PAGE_SIZE",
    "collect_all",
    "iter_lazy",
    "sequential_pages",
    "validate_page_size",
    "validate_paging_options",
]


def validate_page_size(page_size: int) -> int:
    if isinstance(page_size, bool) or not isinstance(page_size, int):
        raise ValidationError("page_size must be an integer")
    if page_size < MIN_PAGE_SIZE or page_size > MAX_PAGE_SIZE:
        raise ValidationError(
            f"page_size must be between {MIN_PAGE_SIZE} and {MAX_PAGE_SIZE}"
        )
    return page_size


def validate_paging_options(
    *,
    max_results: Optional[int] = None,
    degree_of_parallelism: Optional[int] = None,
) -> None:
    if max_results is not None and max_results < 1:
        raise ValidationError("max_results must be >= 1")
    if degree_of_parallelism is not None and degree_of_parallelism < 1:
        raise ValidationError("degree_of_parallelism must be >= 1")


def sequential_pages(
    fetch_page: FetchPage,
    *,
    cancellation: Optional[CancellationToken] = None,
    path: str = "page",
) -> Iterator[Page[T]]:
    """Fetch one page at a time, only when the consumer asks for it."""
    tracker = CursorTracker(path)
    after: Optional[str] = None
    while not is_cancelled(cancellation):
        page = fetch_page(after)
        yield page
        after = tracker.next_cursor(page)
        if after is None:
            return


def _page_source(
    fetch_page: FetchPage,
    *,
    degree_of_parallelism: Optional[int],
    cancellation: Optional[CancellationToken],
    executor: Optional[Executor],
    path: str,
    logger: logging.Logger,
) -> Iterator[Page[T]]:
    if degree_of_parallelism is None or degree_of_parallelism <= 1:
        return sequential_pages(fetch_page, cancellation=cancellation, path=path)
    return prefetched_pages(
        fetch_page,
        depth=degree_of_parallelism,
        executor=executor,
        cancellation=cancellation,
        path=path,
        logger=logger,
    )


def collect_all(
    fetch_page: FetchPage,
    *,
    max_results: Optional[int] = None,
    degree_of_parallelism: Optional[int] = None,
    progress: Optional[ProgressCallback] = None,
    total: Optional[int] = None,
    executor: Optional[Executor] = None,
    path: str = "page",
    logger: Optional[logging.Logger] = None,
) -> List[T]:
    """Walk every page and return the concatenated items.

    Every error propagates. Stops as soon as ``max_results`` items are held,
    without requesting another page.
    """
    validate_paging_options(max_results=max_results, degree_of_parallelism=degree_of_parallelism)
    reporter = ProgressReporter(progress, total)
    reporter.start()

    results: List[T] = []
    pages = _page_source(
        fetch_page,
        degree_of_parallelism=degree_of_parallelism,
        cancellation=None,
        executor=executor,
        path=path,
        logger=get_logger(logger, "wizcloud"),
    )
    try:
        for page in pages:
            for item in page.items:
                results.append(item)
                reporter.advance()
                if max_results is not None and len(results) >= max_results:
                    return results
    finally:
        pages.close()
    return results


def iter_lazy(
    fetch_page: FetchPage,
    *,
    max_results: Optional[int] = None,
    cancellation: Optional[CancellationToken] = None,
    degree_of_parallelism: Optional[int] = None,
    progress: Optional[ProgressCallback] = None,
    total: Optional[int] = None,
    on_error: Optional[ErrorSink] = None,
    executor: Optional[Executor] = None,
    path: str = "page",
    logger: Optional[logging.Logger] = None,
) -> Iterator[T]:
    """Stream items page by page as the consumer pulls them.

    A TransientError or RequestError from a page fetch ends the stream
    quietly: it is logged, handed to ``on_error`` when given, and iteration
    stops. AuthError, ValidationError and PaginationError always propagate.
    Cancellation is checked before every page and every item.
    """
    validate_paging_options(max_results=max_results, degree_of_parallelism=degree_of_parallelism)
    log = get_logger(logger, "wizcloud")
    return _stream(
        fetch_page,
        max_results=max_results,
        cancellation=cancellation,
        degree_of_parallelism=degree_of_parallelism,
        reporter=ProgressReporter(progress, total),
        on_error=on_error,
        executor=executor,
        path=path,
        logger=log,
    )


def _stream(
    fetch_page: FetchPage,
    *,
    max_results: Optional[int],
    cancellation: Optional[CancellationToken],
    degree_of_parallelism: Optional[int],
    reporter: ProgressReporter,
    on_error: Optional[ErrorSink],
    executor: Optional[Executor],
    path: str,
    logger: logging.Logger,
) -> Iterator[T]:
    reporter.start()
    pages = _page_source(
        fetch_page,
        degree_of_parallelism=degree_of_parallelism,
        cancellation=cancellation,
        executor=executor,
        path=path,
        logger=logger,
    )
    emitted = 0
    try:
        while not is_cancelled(cancellation):
            try:
                page = next(pages)
            except StopIteration:
                return
            except (TransientError, RequestError) as exc:
                logger.warning("Stopping %s stream after fetch failure: %s", path, exc)
                if on_error is not None:
                    on_error(exc)
                return

            for item in page.items:
                if is_cancelled(cancellation):
                    return
                emitted += 1
                reporter.advance()
                yield item
                if max_results is not None and emitted >= max_results:
                    return
    finally:
        pages.close()
