from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Callable, Generic, List, Optional, Set, TypeVar

from wiz_graphql.errors import PaginationError

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T] = field(default_factory=list)
    has_next_page: bool = False
    end_cursor: Optional[str] = None


FetchPage = Callable[[Optional[str]], Page[T]]


class CancellationToken:
    """Cooperative stop flag shared between a consumer and a running stream."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


def is_cancelled(token: Optional[CancellationToken]) -> bool:
    return token is not None and token.cancelled


class CursorTracker:
    """Computes the ``after`` cursor for the next page and rejects loops."""

    def __init__(self, path: str = "page") -> None:
        self.path = path
        self._seen: Set[str] = set()

    def next_cursor(self, page: Page) -> Optional[str]:
        if not page.has_next_page:
            return None
        cursor = page.end_cursor
        if not cursor:
            raise PaginationError(f"Pagination cursor missing for {self.path}")
        if cursor in self._seen:
            raise PaginationError(
                "Pagination cursor repeated; aborting to prevent infinite loop"
            )
        self._seen.add(cursor)
        return cursor
