from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional


@dataclass(frozen=True)
class Progress:
    retrieved: int
    total: Optional[int] = None

    @property
    def fraction(self) -> Optional[float]:
        if not self.total:
            return None
        return min(self.retrieved / self.total, 1.0)


ProgressCallback = Callable[[Progress], None]


class ProgressReporter:
    """Emits monotonically increasing Progress snapshots to a callback.

    ``start`` reports ``Progress(0, total)`` once, and only when a total was
    requested. ``advance`` reports after every delivered item. Callbacks run
    synchronously on the caller's thread.
    """

    def __init__(self, callback: Optional[ProgressCallback], total: Optional[int] = None):
        if total is not None and total < 0:
            raise ValueError("total must be >= 0")
        self._callback = callback
        self.total = total
        self._retrieved = 0
        self._started = False

    @property
    def retrieved(self) -> int:
        return self._retrieved

    def start(self) -> None:
        if self._started:
            return
        self._started = True
        if self._callback is not None and self.total is not None:
            self._callback(Progress(retrieved=0, total=self.total))

    def advance(self, count: int = 1) -> None:
        if count < 0:
            raise ValueError("count must be >= 0")
        self._started = True
        self._retrieved += count
        if self._callback is not None:
            self._callback(Progress(retrieved=self._retrieved, total=self.total))
