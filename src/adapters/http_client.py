"""httpx wrapper.

Why a wrapper:
- Standardizes timeouts and headers for every HTTP probe.
- Eases testing: callers pass an `httpx.MockTransport` instead of a network.
"""

from __future__ import annotations

import httpx

USER_AGENT = "stackready/0.1 (+http://localhost)"


def build_async_client(
    *,
    timeout_seconds: float,
    transport: httpx.AsyncBaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with probe-friendly defaults.

    Redirects are not followed: a 3xx already proves the service is up.
    """

    headers: dict[str, str] = {"User-Agent": USER_AGENT, "Accept": "*/*"}
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout_seconds),
        follow_redirects=False,
        headers=headers,
        transport=transport,
    )
