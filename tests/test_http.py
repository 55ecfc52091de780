import httpx
import pytest
import respx
from sitecheck.core import http
from sitecheck.core.errors import FetchError

@respx.mock
def test_get_returns_status_and_body():
    respx.get("http://site.test/ok").mock(return_value=httpx.Response(200, text="<p>hi</p>"))
    assert http.get("http://site.test/ok") == (200, "<p>hi</p>")

@respx.mock
def test_get_does_not_follow_redirects():
    route = respx.get("http://site.test/old").mock(
        return_value=httpx.Response(301, headers={"Location": "http://site.test/new"})
    )
    target = respx.get("http://site.test/new").mock(return_value=httpx.Response(200))
    status, _ = http.get("http://site.test/old")
    assert status == 301
    assert route.called and not target.called

@respx.mock
def test_transport_errors_become_fetch_error():
    respx.get("http://down.test/").mock(side_effect=httpx.ConnectError("refused"))
    with pytest.raises(FetchError) as exc:
        http.get("http://down.test/")
    assert exc.value.url == "http://down.test/"
    assert isinstance(exc.value.original, httpx.ConnectError)

def test_unsupported_scheme_is_a_fetch_error():
    with pytest.raises(FetchError):
        http.get("mailto:someone@site.test")

@respx.mock
def test_getter_sends_user_agent():
    route = respx.get("http://site.test/").mock(return_value=httpx.Response(204))
    with http.client(user_agent="sitecheck-tests") as c:
        assert http.getter(c)("http://site.test/") == (204, "")
    assert route.calls.last.request.headers["User-Agent"] == "sitecheck-tests"

def test_abandon_timeout_is_finite_and_outlives_the_deadline():
    t = http.abandon_timeout(2.0)
    assert t.connect == t.read == t.write == t.pool == 6.0
    with http.client(timeout=t) as c:
        assert c.timeout.pool == 6.0
        assert c.timeout.read == 6.0
