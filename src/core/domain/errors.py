"""Error taxonomy.

Only `PollerExhausted` is meant to end a run; the others are absorbed by the
engine/bootstrapper and turned into statuses or warnings.
"""

from __future__ import annotations

from core.domain.models import HealthStatus, ServiceStatus


class StackReadyError(Exception):
    """Base class for orchestrator errors."""


class ProbeFailure(StackReadyError):
    """A single dependency failed its check. Becomes `UNHEALTHY`."""


class PollerExhausted(StackReadyError):
    """The retry ceiling was reached before every stage passed."""

    def __init__(self, *, target: str, attempts: int, stages: list[ServiceStatus]) -> None:
        self.target = target
        self.attempts = attempts
        self.stages = list(stages)
        summary = ", ".join(f"{s.name}: {_stage_label(s)}" for s in self.stages)
        super().__init__(
            f"{target} failed to become ready within {attempts} attempts. Status: {{{summary}}}"
        )


class ResourceProvisionFailure(StackReadyError):
    def __init__(self, resource: str, reason: str) -> None:
        self.resource = resource
        self.reason = reason
        super().__init__(f"{resource} creation failed: {reason}")


class VerificationFailure(StackReadyError):
    def __init__(self, check: str, reason: str) -> None:
        self.check = check
        self.reason = reason
        super().__init__(f"Verification '{check}' failed: {reason}")


def _stage_label(status: ServiceStatus) -> str:
    if status.healthy:
        return "OK"
    if status.status is HealthStatus.UNKNOWN:
        return "UNKNOWN"
    return "FAILED"
