"""Exceptions shared by the sitecheck services."""


class FetchError(Exception):
    """Raised when an HTTP GET fails at the transport level (DNS, refused, reset...)."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"HTTP fetch failed for {url}: {original}")


class CoordinationError(RuntimeError):
    """The in-flight bookkeeping of a crawl went out of bounds."""


class CrawlAborted(RuntimeError):
    """A crawl stopped because one of its workers failed.

    The worker's exception is attached as ``__cause__``.
    """
