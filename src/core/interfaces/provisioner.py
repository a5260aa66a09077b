"""Provisioning contract used by the bootstrapper."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Provisioner(Protocol):
    """Executes one opaque directive (`service`, `operation`, `params`).

    Returns the raw response; raises on failure. Implementations own their
    credentials and endpoint; nothing is read from the process environment.
    """

    async def execute(self, service: str, operation: str, params: dict[str, Any]) -> Any:
        ...
