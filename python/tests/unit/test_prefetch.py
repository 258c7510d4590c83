import threading
import time
from concurrent.futures import Executor, Future, ThreadPoolExecutor

import pytest

from wiz_graphql.errors import PaginationError, TransientError, ValidationError
from wizcloud.cursors import CancellationToken, Page
from wizcloud.prefetch import PrefetchWindow, prefetched_pages


class SyncExecutor(Executor):
    """Runs each fetch inline so the window's bookkeeping is deterministic."""

    def __init__(self):
        self.shutdown_called = False

    def submit(self, fn, *args, **kwargs):
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future

    def shutdown(self, wait=True, *, cancel_futures=False):
        self.shutdown_called = True


def _chain(count):
    pages = {}
    after = None
    for idx in range(count):
        cursor = f"c{idx + 1}" if idx < count - 1 else None
        pages[after] = Page(items=[idx], has_next_page=cursor is not None, end_cursor=cursor)
        after = cursor
    return pages


class Recorder:
    def __init__(self, pages, delay=0.0):
        self.pages = pages
        self.delay = delay
        self.calls = []
        self.active = 0
        self.max_active = 0
        self._lock = threading.Lock()

    def __call__(self, after):
        with self._lock:
            self.calls.append(after)
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                time.sleep(self.delay)
            result = self.pages[after]
            if isinstance(result, Exception):
                raise result
            return result
        finally:
            with self._lock:
                self.active -= 1


def test_window_runs_at_most_depth_pages_ahead():
    fetch = Recorder(_chain(10))
    window = PrefetchWindow(fetch, depth=2, executor=SyncExecutor())
    window.start()

    assert fetch.calls == [None, "c1"]
    assert window.buffered == 2

    assert window.next_page().items == [0]
    assert fetch.calls == [None, "c1", "c2"]
    assert window.buffered == 2
    window.close()


def test_window_delivers_pages_in_order_then_none():
    fetch = Recorder(_chain(5))
    window = PrefetchWindow(fetch, depth=3, executor=SyncExecutor())
    window.start()
    items = []
    while True:
        page = window.next_page()
        if page is None:
            break
        items.extend(page.items)
    window.close()

    assert items == [0, 1, 2, 3, 4]
    assert fetch.calls == [None, "c1", "c2", "c3", "c4"]


def test_stopping_early_issues_no_further_fetches():
    fetch = Recorder(_chain(10))
    pages = prefetched_pages(fetch, depth=2, executor=SyncExecutor())
    assert next(pages).items == [0]
    pages.close()

    assert fetch.calls == [None, "c1", "c2"]


def test_fetch_error_surfaces_in_order():
    chain = _chain(4)
    chain["c1"] = TransientError("boom")
    fetch = Recorder(chain)
    pages = prefetched_pages(fetch, depth=2, executor=SyncExecutor())

    assert next(pages).items == [0]
    with pytest.raises(TransientError):
        next(pages)


def test_repeated_cursor_surfaces_after_buffered_pages():
    fetch = Recorder(
        {
            None: Page(items=[0], has_next_page=True, end_cursor="c1"),
            "c1": Page(items=[1], has_next_page=True, end_cursor="c1"),
        }
    )
    pages = prefetched_pages(fetch, depth=2, executor=SyncExecutor())

    assert next(pages).items == [0]
    assert next(pages).items == [1]
    with pytest.raises(PaginationError):
        next(pages)


def test_cancellation_stops_iteration():
    token = CancellationToken()
    fetch = Recorder(_chain(10))
    seen = []
    for page in prefetched_pages(fetch, depth=2, executor=SyncExecutor(), cancellation=token):
        seen.extend(page.items)
        token.cancel()
    assert seen == [0]


def test_caller_executor_is_not_shut_down():
    executor = SyncExecutor()
    list(prefetched_pages(Recorder(_chain(3)), depth=2, executor=executor))
    assert not executor.shutdown_called


def test_depth_must_be_positive():
    with pytest.raises(ValidationError):
        PrefetchWindow(Recorder(_chain(1)), depth=0)


def test_thread_pool_preserves_order_and_bounds_concurrency():
    fetch = Recorder(_chain(12), delay=0.005)
    with ThreadPoolExecutor(max_workers=8) as executor:
        items = [
            item
            for page in prefetched_pages(fetch, depth=3, executor=executor)
            for item in page.items
        ]

    assert items == list(range(12))
    assert fetch.max_active <= 3
    assert fetch.calls == [None] + [f"c{i}" for i in range(1, 12)]


def test_owned_pool_is_used_when_no_executor_given():
    fetch = Recorder(_chain(6), delay=0.002)
    items = [item for page in prefetched_pages(fetch, depth=2) for item in page.items]
    assert items == list(range(6))
