"""Probe execution engine.

Runs every probe concurrently and returns one `ServiceStatus` per probe, in
the order the probes were given. A probe can fail in any way it likes; the
engine itself only raises for duplicate names, before anything runs.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from core.domain.models import HealthStatus, ProbeSpec, RunReport, ServiceStatus

logger = logging.getLogger(__name__)


def ensure_unique_names(specs: Sequence[ProbeSpec]) -> None:
    seen: set[str] = set()
    for spec in specs:
        if spec.name in seen:
            raise ValueError(f"Duplicate probe name: {spec.name!r}")
        seen.add(spec.name)


async def execute_probe(spec: ProbeSpec, *, timeout_seconds: float | None) -> ServiceStatus:
    """Run one probe and classify it. Never raises."""

    try:
        if timeout_seconds is None:
            detail = await spec.check.check()
        else:
            detail = await asyncio.wait_for(spec.check.check(), timeout=timeout_seconds)
    except asyncio.TimeoutError:
        message = f"Timed out after {timeout_seconds:g}s"
        logger.debug("%s: %s", spec.name, message)
        return ServiceStatus(name=spec.name, status=HealthStatus.UNHEALTHY, message=message, url=spec.target_url)
    except Exception as exc:
        message = str(exc) or exc.__class__.__name__
        logger.debug("%s: %s", spec.name, message)
        return ServiceStatus(name=spec.name, status=HealthStatus.UNHEALTHY, message=message, url=spec.target_url)

    return ServiceStatus(
        name=spec.name,
        status=HealthStatus.HEALTHY,
        message=detail or None,
        url=spec.target_url,
    )


async def run_probes(specs: Sequence[ProbeSpec], *, timeout_seconds: float | None = 5.0) -> RunReport:
    """Fan out all probes, fan in their statuses.

    `asyncio.gather` keeps results aligned with the input, so completion
    order never leaks into the report.
    """

    ensure_unique_names(specs)
    statuses = await asyncio.gather(*(execute_probe(spec, timeout_seconds=timeout_seconds) for spec in specs))
    report = RunReport(statuses=list(statuses))
    logger.debug("Probe run finished: %d/%d healthy", report.healthy_count, report.total_count)
    return report
