from __future__ import annotations

import logging
import threading
from typing import List, Optional
from urllib.parse import urlsplit

from sitecheck.core import config
from .fetcher import Getter
from .frontier import Frontier
from .links import extract_links
from .outcomes import UrlOutcome
from .urls import base_url
from .worker import Extractor, run_worker

logger = logging.getLogger(__name__)


class ResultStream:
    """Lazy, single-use iterator over the outcomes of one crawl.

    Iteration stops once nothing is queued, nothing is in flight and every
    published outcome has been handed out.
    """

    def __init__(self, frontier: Frontier, threads: List[threading.Thread]):
        self._frontier = frontier
        self._threads = threads
        self._exhausted = False

    def __iter__(self) -> "ResultStream":
        return self

    def __next__(self) -> UrlOutcome:
        if self._exhausted:
            raise StopIteration
        outcome = self._frontier.next_outcome()
        if outcome is None:
            self._exhausted = True
            logger.info("Crawl finished: %s", self._frontier.stats())
            raise StopIteration
        return outcome

    def cancel(self) -> None:
        self._frontier.cancel()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the worker threads; True if all of them exited."""
        for t in self._threads:
            t.join(timeout)
        return not any(t.is_alive() for t in self._threads)

    def stats(self):
        return self._frontier.stats()

    def __enter__(self) -> "ResultStream":
        return self

    def __exit__(self, *exc) -> bool:
        self.cancel()
        self.join()
        return False


def crawl(
    domain: str,
    start_url: str,
    *,
    workers: int = config.WORKERS,
    timeout: float = config.TIMEOUT,
    limit: Optional[int] = None,
    get: Optional[Getter] = None,
    extract: Optional[Extractor] = None,
) -> ResultStream:
    """Starting at ``start_url``, check every URL reachable inside ``domain``.

    Returns immediately; outcomes are produced by ``workers`` background
    threads and pulled from the returned stream.
    """
    domain = (domain or "").strip().lower()
    if not domain:
        raise ValueError("domain is required")
    if workers < 1:
        raise ValueError("workers must be >= 1")
    if timeout <= 0:
        raise ValueError("timeout must be > 0")
    if limit is not None and limit < 1:
        raise ValueError("limit must be >= 1")

    scheme = urlsplit(start_url).scheme or "http"
    base = base_url(domain, scheme)
    frontier = Frontier(workers, limit=limit)
    frontier.enqueue(start_url, start_url)

    threads = [
        threading.Thread(
            target=run_worker,
            args=(frontier, domain, base, extract or extract_links, get, timeout),
            name=f"linkscan-worker-{i}",
            daemon=True,
        )
        for i in range(workers)
    ]
    logger.info("Crawling %s from %s with %d workers", domain, start_url, workers)
    for t in threads:
        t.start()
    return ResultStream(frontier, threads)
