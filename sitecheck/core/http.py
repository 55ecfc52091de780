from typing import Callable, Optional, Tuple
import httpx
from sitecheck.core import config
from sitecheck.core.errors import FetchError

# abandoned requests still hold a pooled connection; give them a finite life
ABANDON_FACTOR = 3

def abandon_timeout(deadline: float) -> httpx.Timeout:
    return httpx.Timeout(deadline * ABANDON_FACTOR)

def client(timeout=None, verify=True, follow_redirects=False, user_agent: Optional[str] = None):
    return httpx.Client(
        timeout=timeout,
        verify=verify,
        follow_redirects=follow_redirects,
        headers={"User-Agent": user_agent or config.user_agent()},
    )

def getter(c: httpx.Client) -> Callable[[str], Tuple[int, str]]:
    """Bind the raw GET to an existing client so a crawl reuses its connection pool."""

    def _get(url: str) -> Tuple[int, str]:
        try:
            r = c.get(url)
            return r.status_code, r.text
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(url, e) from e

    return _get

def get(url: str) -> Tuple[int, str]:
    # no timeout here: callers race the request against their own deadline
    with client() as c:
        return getter(c)(url)
