# http_client.py
from __future__ import annotations
import sys, uuid
from typing import Optional
import httpx

USER_AGENT = "petfinder-client/0.1.0"

class HttpClient:
    """
    - Blocking HTTP GET fetcher for the Petfinder API:
      - httpx timeouts
      - custom User-Agent
      - no retries; any non-2xx fails fast
    """

    def __init__(
        self,
        connect_timeout: float = 5.0,
        read_timeout: float = 30.0,
        *,
        user_agent: str = USER_AGENT,
        default_headers: Optional[dict[str, str]] = None,
    ):
        self.timeout = httpx.Timeout(
            connect=connect_timeout,
            read=read_timeout,
            write=read_timeout,
            pool=read_timeout,
        )
        self.default_headers = {"User-Agent": user_agent, **(default_headers or {})}
        self._client: Optional[httpx.Client] = None

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def open(self) -> None:
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout, headers=self.default_headers)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def fetch(self, url: str, **kwargs) -> str:
        """
        GET an absolute URL and return the body text unmodified.
        Network errors propagate as httpx.RequestError, non-2xx as httpx.HTTPStatusError.
        Each request tagged with X-Request-Id for traceability.
        """
        self.open()
        assert self._client is not None

        req_id = kwargs.pop("req_id", str(uuid.uuid4()))
        headers = kwargs.pop("headers", {})
        headers.setdefault("X-Request-Id", req_id)
        kwargs["headers"] = headers

        try:
            resp = self._client.get(url, **kwargs)
        except httpx.RequestError as e:
            print(f"[req#{req_id}] [fatal] GET {url}: network error: {e}", file=sys.stderr)
            raise

        status = resp.status_code
        if not (200 <= status < 300):
            print(f"[req#{req_id}] [fatal] GET {url} returned {status}", file=sys.stderr)
            resp.raise_for_status()
        return resp.text
