import ipaddress
import re
from urllib.parse import urljoin, urlsplit

_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_FORBIDDEN = re.compile(r"[\x00-\x1f\x7f]")
_TAB_OR_NEWLINE = re.compile(r"[\t\r\n]")
# RFC 3986 reg-name (unreserved / pct-encoded / sub-delims), plus non-ASCII for IDNs
_REG_NAME = re.compile(r"^(?:[A-Za-z0-9\-._~!$&'()*+,;=]|%[0-9A-Fa-f]{2}|[^\x00-\x7f])+$")
_NEEDS_HOST = ("http", "https")


class MalformedUrl(ValueError):
    def __init__(self, raw: str, reason: str):
        self.raw = raw
        self.reason = reason
        super().__init__(f"malformed URL {raw!r}: {reason}")


def base_url(domain: str, scheme: str = "http") -> str:
    return f"{scheme}://{domain}/"


def valid_host(host: str) -> bool:
    if ":" in host:
        try:
            ipaddress.IPv6Address(host)
            return True
        except ValueError:
            return False
    return bool(_REG_NAME.match(host))


def build_url(base: str, raw: str) -> str:
    """Resolve ``raw`` (a path or an absolute URL) against ``base``.

    Raises MalformedUrl when the reference cannot be turned into a usable
    absolute URL. Tabs and newlines are dropped, as browsers do for wrapped
    href values; nothing else is normalized beyond what urljoin does.
    """
    ref = _TAB_OR_NEWLINE.sub("", raw).strip()
    if _FORBIDDEN.search(ref):
        raise MalformedUrl(raw, "contains control characters")

    # RFC 3986 4.2: a colon in the first segment only makes sense after a scheme
    head = re.split(r"[/?#]", ref, maxsplit=1)[0]
    if ":" in head and not _SCHEME.match(head.split(":", 1)[0]):
        raise MalformedUrl(raw, "invalid scheme")

    try:
        url = urljoin(base, ref)
        parts = urlsplit(url)
        _ = parts.port
    except ValueError as e:
        raise MalformedUrl(raw, str(e)) from None

    host = parts.hostname
    if parts.scheme in _NEEDS_HOST and not host:
        raise MalformedUrl(raw, "missing host")
    if host and not valid_host(host):
        raise MalformedUrl(raw, "invalid host")
    return url


def host_of(url: str):
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


def in_domain(url: str, domain: str) -> bool:
    """Exact host match; subdomains and other hosts are out of scope."""
    host = host_of(url)
    return host is not None and host == domain.strip().lower()
