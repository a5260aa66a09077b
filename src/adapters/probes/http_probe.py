"""Probe: plain HTTP reachability.

Lenient on purpose: any status below 500 (4xx included) counts as the
service being present. Only connection failures, timeouts and 5xx are
unhealthy.
"""

from __future__ import annotations

import httpx

from adapters.http_client import build_async_client
from core.domain.errors import ProbeFailure
from core.interfaces.probe import Probe


class HttpProbe(Probe):
    def __init__(
        self,
        url: str,
        *,
        timeout_seconds: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self._timeout = timeout_seconds
        self._transport = transport

    async def check(self) -> str | None:
        try:
            async with build_async_client(timeout_seconds=self._timeout, transport=self._transport) as client:
                response = await client.get(self.url)
        except httpx.ConnectError as exc:
            raise ProbeFailure("Service not running (connection refused)") from exc
        except httpx.TimeoutException as exc:
            raise ProbeFailure("Service timeout") from exc
        except httpx.HTTPError as exc:
            raise ProbeFailure(f"HTTP error: {exc}") from exc

        if response.status_code >= 500:
            raise ProbeFailure(f"Service returned error status {response.status_code}")
        return f"HTTP {response.status_code}"
