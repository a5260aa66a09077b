"""Probe contracts.

Why Protocol:
- One structural contract (duck typing) for HTTP, exec-style and emulator
  checks, so the engine and the poller stay agnostic to transport.
- Tests can pass any object with an async `check` method.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Probe(Protocol):
    """Minimal contract for a liveness/readiness check.

    Design rules:
    - `check` is async because it performs I/O (HTTP, subprocess).
    - Success returns an optional short detail (e.g. "HTTP 200").
    - Failure raises `core.domain.errors.ProbeFailure` with a readable
      diagnostic; callers also tolerate any other exception.
    """

    async def check(self) -> str | None:
        ...
