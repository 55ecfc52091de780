import logging
import queue
import threading
from typing import Callable, Optional, Tuple

from sitecheck.core import http
from sitecheck.core.config import TIMEOUT
from .outcomes import Accessible, BadStatus, ConnectionFailed, Malformed, TimedOut, UrlOutcome
from .urls import MalformedUrl, build_url

logger = logging.getLogger(__name__)

Getter = Callable[[str], Tuple[int, str]]


def is_success(status: int) -> bool:
    return 200 <= status < 300


def _request(get: Getter, url: str, box: "queue.Queue") -> None:
    try:
        box.put_nowait(get(url))
    except Exception as e:  # any failure of the raw GET is a connection failure
        box.put_nowait(e)


def fetch_with_timeout(
    base: str,
    origin: str,
    raw: str,
    get: Optional[Getter] = None,
    timeout: float = TIMEOUT,
) -> Tuple[UrlOutcome, Optional[str]]:
    """Resolve ``raw`` against ``base`` and classify it with a single GET.

    The request runs on its own daemon thread and races the deadline; if the
    deadline wins, the request is left to finish on its own and whatever it
    returns is dropped. The body is only returned for Accessible outcomes.
    """
    try:
        url = build_url(base, raw)
    except MalformedUrl as e:
        logger.debug("%s", e)
        return Malformed(origin, raw), None

    box: "queue.Queue" = queue.Queue(maxsize=1)
    threading.Thread(
        target=_request, args=(get or http.get, url, box), name=f"get {url}", daemon=True
    ).start()
    try:
        result = box.get(timeout=timeout)
    except queue.Empty:
        logger.info("Timed out after %ss: %s", timeout, url)
        return TimedOut(origin, url), None

    if isinstance(result, Exception):
        logger.info("Connection failed for %s: %s", url, result)
        return ConnectionFailed(origin, url), None

    status, body = result
    if is_success(status):
        return Accessible(origin, url), body
    return BadStatus(origin, url, status), None
