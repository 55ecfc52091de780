import sys
import threading
import time
from pathlib import Path
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sitecheck.core.errors import FetchError


class FakeSite:
    """In-memory stand-in for the raw HTTP GET.

    ``pages`` maps absolute URLs to an HTML string (served as 200), a
    ``(status, body)`` tuple, or an exception instance to raise. Unknown
    URLs fail like a refused connection.
    """

    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.delays = {}
        self.gates = {}
        self.calls = []
        self._lock = threading.Lock()

    def get(self, url):
        with self._lock:
            self.calls.append(url)
        if url in self.gates:
            self.gates[url].wait(5)
        if url in self.delays:
            time.sleep(self.delays[url])
        page = self.pages.get(url)
        if page is None:
            raise FetchError(url, ConnectionRefusedError("refused"))
        if isinstance(page, Exception):
            raise page
        if isinstance(page, str):
            return 200, page
        return page

    def count(self, url):
        with self._lock:
            return self.calls.count(url)


def links(*hrefs):
    return "<html><body>" + "".join(f'<a href="{h}">{h}</a>' for h in hrefs) + "</body></html>"


@pytest.fixture
def site():
    return FakeSite()
