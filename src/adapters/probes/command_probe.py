"""Probe: exec-style liveness (`pg_isready`, `redis-cli ping`, ...).

Success requires exit status 0 and, when `expected_output` is set, an exact
match of the stripped stdout.
"""

from __future__ import annotations

import asyncio
import contextlib
from typing import Sequence

from core.domain.errors import ProbeFailure
from core.interfaces.probe import Probe


class CommandProbe(Probe):
    def __init__(
        self,
        argv: Sequence[str],
        *,
        expected_output: str | None = None,
        failure_message: str | None = None,
        timeout_seconds: float | None = 5.0,
    ) -> None:
        if not argv:
            raise ValueError("argv must not be empty")
        self.argv = list(argv)
        self.expected_output = expected_output
        self._failure_message = failure_message
        self._timeout = timeout_seconds
        self.process: asyncio.subprocess.Process | None = None

    async def _run(self) -> tuple[int, str, str]:
        try:
            proc = await asyncio.create_subprocess_exec(
                *self.argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise ProbeFailure(f"Command not found: {self.argv[0]}") from exc
        except OSError as exc:
            raise ProbeFailure(f"Could not start {self.argv[0]}: {exc}") from exc

        self.process = proc
        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self._timeout)
        except asyncio.TimeoutError as exc:
            await _reap(proc)
            raise ProbeFailure(f"Command timed out after {self._timeout:g}s") from exc
        except asyncio.CancelledError:
            # Reap before unwinding; no child outlives the call.
            await asyncio.shield(_reap(proc))
            raise

        return (
            proc.returncode if proc.returncode is not None else -1,
            stdout.decode("utf-8", errors="replace"),
            stderr.decode("utf-8", errors="replace"),
        )

    async def check(self) -> str | None:
        code, out, err = await self._run()
        if code != 0:
            detail = err.strip() or out.strip()
            message = self._failure_message or f"Command exited with status {code}"
            raise ProbeFailure(f"{message}: {detail}" if detail else message)

        output = out.strip()
        if self.expected_output is not None and output != self.expected_output:
            message = self._failure_message or "Unexpected output"
            raise ProbeFailure(f"{message}: {output!r}")
        return None


async def _reap(proc: asyncio.subprocess.Process) -> None:
    with contextlib.suppress(ProcessLookupError):
        proc.kill()
    await proc.wait()
