import logging
from typing import Callable, Iterable, Optional

from sitecheck.core.config import TIMEOUT
from .fetcher import Getter, fetch_with_timeout
from .frontier import Frontier
from .outcomes import Accessible
from .urls import in_domain

logger = logging.getLogger(__name__)

Extractor = Callable[[str], Iterable[str]]


def run_worker(
    frontier: Frontier,
    domain: str,
    base: str,
    extract: Extractor,
    get: Optional[Getter] = None,
    timeout: float = TIMEOUT,
) -> None:
    """Claim, dedupe, fetch, expand and publish until the frontier runs dry.

    Per-URL failures come back as outcomes. Anything else that goes wrong
    here means the crawl's bookkeeping can no longer be trusted, so it is
    handed to the frontier, which stops the crawl and re-raises it to the
    consumer.
    """
    try:
        while True:
            entry = frontier.claim()
            if entry is None:
                break
            logger.debug("Claimed %s (from %s)", entry.url, entry.origin)

            if not frontier.visit(entry.url):
                logger.debug("Skipping (visited) %s", entry.url)
                frontier.finish()
                continue

            if frontier.cancelled:
                frontier.finish()
                break

            outcome, body = fetch_with_timeout(base, entry.origin, entry.url, get=get, timeout=timeout)
            if isinstance(outcome, Accessible) and body is not None and in_domain(outcome.url, domain):
                found = 0
                for link in extract(body):
                    frontier.enqueue(link, outcome.url)
                    found += 1
                logger.debug("Expanded %s -> %d links", outcome.url, found)

            frontier.finish(outcome)
    except Exception as e:
        logger.exception("Worker failed")
        frontier.abort(e)
