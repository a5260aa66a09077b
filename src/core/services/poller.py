"""Bounded retry poller.

One generic loop replaces per-dependency wait scripts: give it a target
name, ordered stage probes and a `RetryConfig`.

State machine: PENDING -> READY | EXHAUSTED.
- An attempt runs the stages in order and stops at the first failure; the
  stages after it are recorded as UNKNOWN (not attempted).
- READY requires every stage to pass within the same attempt.
- EXHAUSTED happens after exactly `max_attempts` failed attempts; there is
  no sleep after the last one.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Sequence

from core.domain.errors import PollerExhausted
from core.domain.models import HealthStatus, PollOutcome, ProbeSpec, RetryConfig, ServiceStatus
from core.services.probe_engine import ensure_unique_names, execute_probe

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


class PollerState(str, Enum):
    PENDING = "pending"
    READY = "ready"
    EXHAUSTED = "exhausted"


class BoundedRetryPoller:
    def __init__(
        self,
        *,
        target: str,
        stages: Sequence[ProbeSpec],
        retry: RetryConfig,
        stage_timeout_seconds: float | None = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        if not stages:
            raise ValueError("At least one stage is required")
        ensure_unique_names(stages)
        self._target = target
        self._stages = list(stages)
        self._retry = retry
        self._stage_timeout = stage_timeout_seconds
        self._sleep = sleep
        self.state = PollerState.PENDING
        self.attempts = 0
        self.last_stages: list[ServiceStatus] = []

    async def _attempt(self) -> list[ServiceStatus]:
        results: list[ServiceStatus] = []
        for index, stage in enumerate(self._stages):
            status = await execute_probe(stage, timeout_seconds=self._stage_timeout)
            results.append(status)
            if not status.healthy:
                results.extend(
                    ServiceStatus(name=s.name, status=HealthStatus.UNKNOWN, message="Not attempted", url=s.target_url)
                    for s in self._stages[index + 1 :]
                )
                break
        return results

    def _progress_message(self, stages: list[ServiceStatus]) -> str:
        passed = [s.name for s in stages if s.healthy]
        counter = f"({self.attempts}/{self._retry.max_attempts})"
        if not passed:
            return f"Waiting for {self._target}... {counter}"
        pending = next(s.name for s in stages if not s.healthy)
        return f"{', '.join(passed)} OK, waiting for {pending}... {counter}"

    async def wait(self) -> PollOutcome:
        """Block until READY or raise `PollerExhausted`."""

        logger.info("Waiting for %s to be ready...", self._target)
        while True:
            self.attempts += 1
            stages = await self._attempt()
            self.last_stages = stages

            if all(s.healthy for s in stages):
                self.state = PollerState.READY
                logger.info("%s is ready! (attempt %d/%d)", self._target, self.attempts, self._retry.max_attempts)
                for s in stages:
                    logger.info("  %s: OK%s", s.name, f" ({s.message})" if s.message else "")
                return PollOutcome(target=self._target, attempts=self.attempts, stages=stages)

            failed = next(s for s in stages if not s.healthy)
            logger.debug("Attempt %d: %s failed: %s", self.attempts, failed.name, failed.message)
            logger.info(self._progress_message(stages))

            if self.attempts >= self._retry.max_attempts:
                self.state = PollerState.EXHAUSTED
                raise PollerExhausted(target=self._target, attempts=self.attempts, stages=stages)

            await self._sleep(self._retry.wait_interval_seconds)
