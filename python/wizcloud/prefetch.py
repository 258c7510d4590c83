from __future__ import annotations

import logging
import threading
from collections import deque
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Deque, Generic, Iterator, Optional, Tuple

from wiz_graphql.errors import PaginationError, ValidationError
from wiz_graphql.logging import get_logger

from .cursors import CancellationToken, CursorTracker, FetchPage, Page, T, is_cancelled

DEFAULT_PREFETCH_DEPTH = 2


class PrefetchWindow(Generic[T]):
    """FIFO of in-flight page fetches that runs ahead of the consumer.

    Page fetches form a chain: the cursor of page K is only known once page K
    has arrived, so each completion submits the next fetch until ``depth``
    unconsumed pages are buffered. The cursor that does not fit is parked and
    submitted as soon as the consumer takes a page off the front.
    """

    def __init__(
        self,
        fetch_page: FetchPage,
        *,
        depth: int = DEFAULT_PREFETCH_DEPTH,
        executor: Optional[Executor] = None,
        path: str = "page",
        logger: Optional[logging.Logger] = None,
    ):
        if depth < 1:
            raise ValidationError("degree_of_parallelism must be >= 1")
        self.depth = depth
        self.logger = get_logger(logger, "wizcloud")
        self._fetch = fetch_page
        self._owns_executor = executor is None
        self._executor = (
            executor
            if executor is not None
            else ThreadPoolExecutor(max_workers=depth, thread_name_prefix="wizcloud-prefetch")
        )
        # Reentrant: done-callbacks fire inside submit() when a future is already complete.
        self._lock = threading.RLock()
        self._inflight: Deque[Tuple[int, Optional[str], Future]] = deque()
        self._submitted = 0
        self._parked: Optional[str] = None
        self._finished = False
        self._closed = False
        self._chain_error: Optional[PaginationError] = None
        self._tracker = CursorTracker(path)
        self._started = False

    @property
    def buffered(self) -> int:
        with self._lock:
            return len(self._inflight)

    def start(self) -> None:
        with self._lock:
            if self._started:
                return
            self._started = True
            self._submit(None)

    def next_page(self) -> Optional[Page[T]]:
        """Block for the oldest outstanding page; None once the chain is exhausted."""
        with self._lock:
            if not self._inflight:
                if self._chain_error is not None:
                    error, self._chain_error = self._chain_error, None
                    raise error
                return None
            index, _, future = self._inflight.popleft()

        page = future.result()

        with self._lock:
            self._advance(index, page)
            if self._parked is not None and len(self._inflight) < self.depth:
                cursor, self._parked = self._parked, None
                self._submit(cursor)
        return page

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._finished = True
            self._parked = None
            pending = list(self._inflight)
            self._inflight.clear()
        for _, _, future in pending:
            future.cancel()
        if self._owns_executor:
            self._executor.shutdown(wait=False)

    def _submit(self, cursor: Optional[str]) -> None:
        if self._closed:
            return
        index = self._submitted
        self._submitted += 1
        self.logger.debug("Prefetching page %d after=%s", index, cursor)
        future = self._executor.submit(self._fetch, cursor)
        self._inflight.append((index, cursor, future))
        future.add_done_callback(lambda done, i=index: self._on_done(i, done))

    def _on_done(self, index: int, future: Future) -> None:
        if future.cancelled() or future.exception() is not None:
            return
        with self._lock:
            if self._closed:
                return
            self._advance(index, future.result())

    def _advance(self, index: int, page: Page[T]) -> None:
        # Only the newest page in the chain can extend it, and only once.
        if self._finished or self._parked is not None or index != self._submitted - 1:
            return
        try:
            cursor = self._tracker.next_cursor(page)
        except PaginationError as exc:
            self._finished = True
            self._chain_error = exc
            return
        if cursor is None:
            self._finished = True
            return
        if len(self._inflight) >= self.depth:
            self._parked = cursor
            return
        self._submit(cursor)


def prefetched_pages(
    fetch_page: FetchPage,
    *,
    depth: int = DEFAULT_PREFETCH_DEPTH,
    executor: Optional[Executor] = None,
    cancellation: Optional[CancellationToken] = None,
    path: str = "page",
    logger: Optional[logging.Logger] = None,
) -> Iterator[Page[T]]:
    """Yield pages in sequential order while up to ``depth`` fetches run ahead."""
    window: PrefetchWindow[T] = PrefetchWindow(
        fetch_page, depth=depth, executor=executor, path=path, logger=logger
    )
    try:
        window.start()
        while not is_cancelled(cancellation):
            page = window.next_page()
            if page is None:
                return
            yield page
    finally:
        window.close()
