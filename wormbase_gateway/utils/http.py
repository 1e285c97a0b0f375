# wormbase_gateway/utils/http.py
from __future__ import annotations

from typing import Any, Dict

import httpx

# Fixed outbound headers. rest.wormbase.org rejects some non-browser clients.
DEFAULT_HEADERS: Dict[str, str] = {
    "Accept": "application/json",
    "Accept-Language": "en-US,en;q=0.9",
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Sec-Fetch-Dest": "empty",
    "Sec-Fetch-Mode": "cors",
    "Sec-Fetch-Site": "cross-site",
}


class UpstreamError(RuntimeError):
    """Any failure of a single outbound GET: network, non-2xx status or undecodable body."""

    def __init__(self, url: str, reason: str, status_code: int | None = None):
        super().__init__(reason)
        self.url = url
        self.status_code = status_code


def new_client() -> httpx.AsyncClient:
    # no explicit timeout: httpx defaults apply
    return httpx.AsyncClient(headers=DEFAULT_HEADERS, follow_redirects=True)


async def get_json(client: httpx.AsyncClient, url: str) -> Any:
    """Single GET, no retries. Raises UpstreamError on any failure."""
    try:
        r = await client.get(url, headers=DEFAULT_HEADERS)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise UpstreamError(url, f"GET failed for {url}: {e}") from e
    if not r.is_success:
        raise UpstreamError(url, f"HTTP {r.status_code}: {r.reason_phrase}", status_code=r.status_code)
    try:
        return r.json()
    except ValueError as e:
        raise UpstreamError(url, f"Invalid JSON from {url}: {e}", status_code=r.status_code) from e
