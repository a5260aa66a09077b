"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation at construction time (e.g. `RetryConfig.max_attempts >= 1`)
  and self-documenting fields, without coupling the Core to any I/O library.
- `model_dump(mode="json")` gives the `--json` report for free.

Note:
- These models describe *what* a run produced, not *how* it was probed.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, computed_field
from pydantic.config import ConfigDict


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    UNKNOWN = "unknown"


class ProbeSpec(BaseModel):
    """A named check against one dependency.

    `check` is any object satisfying `core.interfaces.probe.Probe`; the model
    keeps it opaque.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., min_length=1, max_length=128)
    target_url: str | None = Field(
        default=None,
        description="Shown next to the name in reports; not used for probing.",
    )
    check: Any = Field(..., description="Probe capability: `async check() -> str | None`.")


class ServiceStatus(BaseModel):
    """Outcome of one probe in one run. Never mutated after creation."""

    model_config = ConfigDict(frozen=True)

    name: str
    status: HealthStatus
    message: str | None = None
    url: str | None = None

    @property
    def healthy(self) -> bool:
        return self.status is HealthStatus.HEALTHY


class RetryConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(..., ge=1, description="Hard ceiling of attempts.")
    wait_interval_ms: int = Field(..., ge=0, description="Sleep between failed attempts.")

    @property
    def wait_interval_seconds(self) -> float:
        return self.wait_interval_ms / 1000.0


class RunReport(BaseModel):
    """Ordered statuses of one health-check run."""

    model_config = ConfigDict(frozen=True)

    statuses: list[ServiceStatus] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_healthy(self) -> bool:
        return all(s.healthy for s in self.statuses)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def healthy_count(self) -> int:
        return sum(1 for s in self.statuses if s.healthy)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_count(self) -> int:
        return len(self.statuses)

    @property
    def unhealthy_names(self) -> list[str]:
        return [s.name for s in self.statuses if not s.healthy]


class PollOutcome(BaseModel):
    """Returned by the poller once every stage passed in one attempt."""

    model_config = ConfigDict(frozen=True)

    target: str
    attempts: int = Field(..., ge=1)
    stages: list[ServiceStatus] = Field(default_factory=list)


class ResourceSpec(BaseModel):
    """Declarative provisioning directive against the emulator.

    `service`/`operation`/`params` are opaque to the bootstrapper; only the
    provisioner interprets them (for AWS: client name, API method, kwargs).
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    service: str = Field(..., min_length=1)
    operation: str = Field(..., min_length=1)
    params: dict[str, Any] = Field(default_factory=dict)


class VerificationSpec(BaseModel):
    """Read-only listing call run after provisioning.

    `result_key` selects the list in the response, `item_key` the field
    shown for each entry (None when the list holds plain values).
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    service: str = Field(..., min_length=1)
    operation: str = Field(..., min_length=1)
    result_key: str = Field(..., min_length=1)
    item_key: str | None = None


class ResourceOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    succeeded: bool
    message: str | None = None


class BootstrapResult(BaseModel):
    """What the bootstrapper did. Completing is success; failures are warnings."""

    outcomes: list[ResourceOutcome] = Field(default_factory=list)
    verified: dict[str, list[str]] = Field(default_factory=dict)
    verification_warnings: list[str] = Field(default_factory=list)

    @property
    def failure_count(self) -> int:
        return sum(1 for o in self.outcomes if not o.succeeded)

    @property
    def failed_names(self) -> list[str]:
        return [o.name for o in self.outcomes if not o.succeeded]
