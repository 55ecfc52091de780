from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Optional, Set

from sitecheck.core.errors import CoordinationError, CrawlAborted
from .outcomes import UrlOutcome


@dataclass(frozen=True)
class Entry:
    url: str
    origin: str


class Frontier:
    def __init__(self, workers: int, limit: Optional[int] = None):
        if workers < 1:
            raise ValueError("workers must be >= 1")
        self.workers = workers
        self.limit = limit
        self._lock = threading.Lock()
        self._work = threading.Condition(self._lock)
        self._results = threading.Condition(self._lock)
        self._pending: Deque[Entry] = deque()
        self._outcomes: Deque[UrlOutcome] = deque()
        self._in_flight = 0
        self._published = 0
        self._cancelled = False
        self._error: Optional[BaseException] = None
        self._visited_lock = threading.Lock()
        self._visited: Set[str] = set()

    def enqueue(self, url: str, origin: str) -> None:
        with self._lock:
            if self._cancelled:
                return
            self._pending.append(Entry(url, origin))
            self._work.notify()

    def _claim_locked(self) -> Optional[Entry]:
        # pop and count in flight together; the queue never looks empty mid-claim
        if self._cancelled or self._error is not None or not self._pending:
            return None
        entry = self._pending.popleft()
        self._incr_locked()
        return entry

    def try_claim(self) -> Optional[Entry]:
        with self._lock:
            return self._claim_locked()

    def claim(self) -> Optional[Entry]:
        """Block until an entry is claimed, or return None once there is no work left."""
        with self._lock:
            while True:
                entry = self._claim_locked()
                if entry is not None:
                    return entry
                if self._cancelled or self._error is not None or self._in_flight == 0:
                    return None
                self._work.wait()

    def visit(self, url: str) -> bool:
        with self._visited_lock:
            if url in self._visited:
                return False
            if self.limit is not None and len(self._visited) >= self.limit:
                return False
            self._visited.add(url)
            return True

    def _wake_all(self) -> None:
        self._work.notify_all()
        self._results.notify_all()

    def _incr_locked(self) -> None:
        if self._in_flight >= self.workers:
            raise CoordinationError(
                f"in-flight count would exceed the pool size ({self.workers})"
            )
        self._in_flight += 1

    def _decr_locked(self) -> None:
        if self._in_flight <= 0:
            raise CoordinationError("in-flight count would go negative")
        self._in_flight -= 1
        if self._in_flight == 0:
            self._wake_all()

    def mark_in_flight(self) -> None:
        with self._lock:
            self._incr_locked()

    def mark_done(self) -> None:
        with self._lock:
            self._decr_locked()

    def finish(self, outcome: Optional[UrlOutcome] = None) -> None:
        # publish before the decrement, so a drained buffer at zero in flight means done
        with self._lock:
            if outcome is not None:
                self._outcomes.append(outcome)
                self._published += 1
                self._results.notify()
            self._decr_locked()

    def _done_locked(self) -> bool:
        return self._in_flight == 0 and (self._cancelled or not self._pending)

    def is_globally_done(self) -> bool:
        with self._lock:
            return self._done_locked()

    def next_outcome(self, timeout: Optional[float] = None) -> Optional[UrlOutcome]:
        """Pop the next published outcome, waiting while work is still in progress.

        Returns None when the crawl is over and every outcome was handed out.
        With ``timeout`` set, raises TimeoutError if nothing arrives in time.
        """
        with self._lock:
            while True:
                if self._error is not None:
                    raise CrawlAborted(f"crawl aborted: {self._error}") from self._error
                if self._outcomes:
                    return self._outcomes.popleft()
                if self._done_locked():
                    return None
                if not self._results.wait(timeout):
                    raise TimeoutError("no outcome published in time")

    @property
    def cancelled(self) -> bool:
        with self._lock:
            return self._cancelled

    def cancel(self) -> None:
        with self._lock:
            self._cancelled = True
            self._pending.clear()
            self._wake_all()

    def abort(self, exc: BaseException) -> None:
        with self._lock:
            if self._error is None:
                self._error = exc
            self._wake_all()

    def stats(self) -> Dict[str, int]:
        with self._lock:
            pending, in_flight, published = len(self._pending), self._in_flight, self._published
        with self._visited_lock:
            visited = len(self._visited)
        return {
            "pending": pending,
            "in_flight": in_flight,
            "visited": visited,
            "published": published,
        }
