"""Probe: cloud-service emulator health endpoint.

LocalStack answers `GET /_localstack/health` with
`{"services": {"s3": "running", "kms": "available", ...}}`.
"""

from __future__ import annotations

from typing import Any

import httpx

from adapters.http_client import build_async_client
from core.domain.errors import ProbeFailure
from core.interfaces.probe import Probe

ACCEPTED_STATES = frozenset({"available", "running"})


class EmulatorHealthProbe(Probe):
    """Healthy when the endpoint returns 200 and, optionally, every service is up.

    With `require_all_services=False` a 200 is enough; the poller uses that
    mode because services start lazily.
    """

    def __init__(
        self,
        health_url: str,
        *,
        timeout_seconds: float = 5.0,
        require_all_services: bool = True,
        accepted_states: frozenset[str] = ACCEPTED_STATES,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.health_url = health_url
        self._timeout = timeout_seconds
        self._require_all = require_all_services
        self._accepted = accepted_states
        self._transport = transport

    async def _fetch(self) -> dict[str, Any]:
        try:
            async with build_async_client(timeout_seconds=self._timeout, transport=self._transport) as client:
                response = await client.get(self.health_url)
        except httpx.ConnectError as exc:
            raise ProbeFailure("Emulator not running (connection refused)") from exc
        except httpx.TimeoutException as exc:
            raise ProbeFailure("Emulator health check timeout") from exc
        except httpx.HTTPError as exc:
            raise ProbeFailure(f"HTTP error: {exc}") from exc

        if response.status_code != 200:
            raise ProbeFailure(f"LocalStack returned status {response.status_code}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise ProbeFailure("LocalStack returned a non-JSON health payload") from exc
        if not isinstance(payload, dict):
            raise ProbeFailure("LocalStack returned an unexpected health payload")
        return payload

    async def check(self) -> str | None:
        payload = await self._fetch()
        services = payload.get("services") or {}
        if not isinstance(services, dict):
            raise ProbeFailure("LocalStack health payload has no services mapping")

        if self._require_all:
            unhealthy = [name for name, state in services.items() if str(state).lower() not in self._accepted]
            if unhealthy:
                raise ProbeFailure(f"Unhealthy LocalStack services: {', '.join(unhealthy)}")

        if not services:
            return None
        return "Services: " + ", ".join(services.keys())
