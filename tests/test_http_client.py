import httpx
import pytest
from http_client import HttpClient, USER_AGENT

class FakeClient:
    """Returns a canned response (or raises) for each get()."""
    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = []
        self.closed = False

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if not self._responses:
            raise RuntimeError("No more fake responses")
        resp = self._responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        return resp

    def close(self):
        self.closed = True

def make_response(status_code: int, text: str = "") -> httpx.Response:
    return httpx.Response(status_code, text=text, request=httpx.Request("GET", "http://api.petfinder.com/pet.get"))

def test_fetch_returns_body_unmodified():
    hc = HttpClient(connect_timeout=1, read_timeout=1)
    fake = FakeClient([make_response(200, '<petfinder><pet/></petfinder>')])
    hc._client = fake

    body = hc.fetch("http://api.petfinder.com/pet.get?key=abc&format=xml&id=42")

    assert body == "<petfinder><pet/></petfinder>"
    url, kwargs = fake.calls[0]
    assert url == "http://api.petfinder.com/pet.get?key=abc&format=xml&id=42"
    assert "X-Request-Id" in kwargs["headers"]

def test_fetch_does_not_retry_server_errors(capsys):
    hc = HttpClient()
    fake = FakeClient([make_response(503), make_response(200, "ok")])
    hc._client = fake

    with pytest.raises(httpx.HTTPStatusError):
        hc.fetch("http://api.petfinder.com/pet.get?id=1")
    assert len(fake.calls) == 1
    assert "returned 503" in capsys.readouterr().err

def test_fetch_propagates_network_errors():
    hc = HttpClient()
    err = httpx.ConnectError("boom", request=httpx.Request("GET", "http://api.petfinder.com/"))
    hc._client = FakeClient([err])

    with pytest.raises(httpx.ConnectError):
        hc.fetch("http://api.petfinder.com/breed.list?animal=dog")

def test_context_manager_opens_and_closes():
    with HttpClient(user_agent="test-agent/1.0") as hc:
        assert hc._client is not None
        assert hc._client.headers["User-Agent"] == "test-agent/1.0"
    assert hc._client is None

def test_default_user_agent():
    hc = HttpClient()
    assert hc.default_headers["User-Agent"] == USER_AGENT
