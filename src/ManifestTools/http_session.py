# === NAVMAP v1 ===
# {
#   "module": "ManifestTools.http_session",
#   "purpose": "HTTP client factory with polite headers and per-operation lifetimes",
#   "sections": [
#     {
#       "id": "build-http-client",
#       "name": "build_http_client",
#       "anchor": "function-build-http-client",
#       "kind": "function"
#     },
#     {
#       "id": "client-scope",
#       "name": "client_scope",
#       "anchor": "function-client-scope",
#       "kind": "function"
#     },
#     {
#       "id": "fetch",
#       "name": "fetch",
#       "anchor": "function-fetch",
#       "kind": "function"
#     }
#   ]
# }
# === /NAVMAP ===

"""HTTP client factory for manifest retrieval.

**Purpose**
-----------
Builds HTTPX clients with:
- Polite User-Agent header
- Explicit connect/read timeouts
- Configurable redirect following and TLS verification

**Lifetime**
------------
Nothing here is process-global. Each public operation either receives a
caller-owned ``httpx.Client`` (tests inject one backed by
``httpx.MockTransport``) or opens its own through :func:`client_scope`, which
closes it on every exit path.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import httpx

from ManifestTools.config.models import HttpSettings

__all__ = ["FetchResult", "PayloadTooLarge", "build_http_client", "client_scope", "fetch"]

LOGGER = logging.getLogger(__name__)


def build_http_client(settings: Optional[HttpSettings] = None) -> httpx.Client:
    """Build a new HTTPX client from ``settings`` (defaults when omitted)."""

    cfg = settings or HttpSettings()
    timeout = httpx.Timeout(cfg.timeout_read_s, connect=cfg.timeout_connect_s)
    client = httpx.Client(
        timeout=timeout,
        verify=cfg.verify_tls,
        follow_redirects=cfg.follow_redirects,
        headers={
            "User-Agent": cfg.user_agent,
            "Accept": "text/html,application/manifest+json,application/json;q=0.9,*/*;q=0.8",
        },
    )
    LOGGER.debug(
        "HTTPX client created: follow_redirects=%s verify_tls=%s",
        cfg.follow_redirects,
        cfg.verify_tls,
    )
    return client


@contextmanager
def client_scope(
    client: Optional[httpx.Client] = None,
    settings: Optional[HttpSettings] = None,
) -> Iterator[httpx.Client]:
    """Yield ``client`` untouched, or a fresh client that is closed on exit."""

    if client is not None:
        yield client
        return
    owned = build_http_client(settings)
    try:
        yield owned
    finally:
        owned.close()


class FetchResult:
    """Body of a completed GET plus the charset the server declared, if any."""

    __slots__ = ("content", "encoding")

    def __init__(self, response: httpx.Response, content: bytes) -> None:
        self.content = content
        self.encoding = response.charset_encoding


class PayloadTooLarge(Exception):
    """Raised by :func:`fetch` when a body exceeds the configured cap."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"Response body exceeds {limit} bytes")
        self.limit = limit


def fetch(
    client: httpx.Client,
    url: str,
    *,
    max_bytes: Optional[int] = None,
) -> FetchResult:
    """Issue a single GET for ``url`` and read its body.

    The response is streamed so that ``max_bytes`` is enforced without
    buffering an oversized payload, and it is always closed before returning.

    Raises:
        httpx.RequestError: On transport failures (DNS, connect, read, protocol).
        httpx.HTTPStatusError: When the final status is outside the 2xx range.
        PayloadTooLarge: When the body is larger than ``max_bytes``.
    """

    with client.stream("GET", url) as response:
        LOGGER.debug("GET %s -> %s", url, response.status_code)
        if not response.is_success:
            raise httpx.HTTPStatusError(
                f"HTTP {response.status_code} for {url}",
                request=response.request,
                response=response,
            )
        chunks = []
        received = 0
        for chunk in response.iter_bytes():
            received += len(chunk)
            if max_bytes is not None and received > max_bytes:
                raise PayloadTooLarge(max_bytes)
            chunks.append(chunk)
        return FetchResult(response, b"".join(chunks))
