"""Resource bootstrapper.

Precondition: the emulator already reached READY (see `poller`).

Rules:
- Resources run one at a time, in declared order, so console output stays
  deterministic.
- A failing resource is logged as a warning and the next one still runs.
- Verification is best-effort: its failures are warnings only and never
  change the result.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from core.domain.errors import ResourceProvisionFailure, VerificationFailure
from core.domain.models import BootstrapResult, ResourceOutcome, ResourceSpec, VerificationSpec
from core.interfaces.provisioner import Provisioner

logger = logging.getLogger(__name__)


class ResourceBootstrapper:
    def __init__(
        self,
        *,
        provisioner: Provisioner,
        resources: Sequence[ResourceSpec],
        verifications: Sequence[VerificationSpec] = (),
    ) -> None:
        self._provisioner = provisioner
        self._resources = list(resources)
        self._verifications = list(verifications)

    async def _provision(self, resource: ResourceSpec) -> ResourceOutcome:
        logger.info("%s...", resource.description)
        try:
            await self._provisioner.execute(resource.service, resource.operation, dict(resource.params))
        except Exception as exc:
            failure = ResourceProvisionFailure(resource.name, str(exc) or exc.__class__.__name__)
            logger.warning("%s", failure)
            return ResourceOutcome(name=resource.name, succeeded=False, message=failure.reason)

        logger.info("%s created successfully", resource.name)
        return ResourceOutcome(name=resource.name, succeeded=True)

    async def provision(self) -> list[ResourceOutcome]:
        logger.info("Setting up %d resources...", len(self._resources))
        outcomes = [await self._provision(r) for r in self._resources]
        failures = sum(1 for o in outcomes if not o.succeeded)
        if failures:
            logger.warning("Provisioning completed with %d failure(s)", failures)
        else:
            logger.info("Provisioning completed")
        return outcomes

    async def _verify_one(self, spec: VerificationSpec) -> list[str]:
        try:
            response = await self._provisioner.execute(spec.service, spec.operation, {})
            return extract_items(response, result_key=spec.result_key, item_key=spec.item_key)
        except Exception as exc:
            raise VerificationFailure(spec.name, str(exc) or exc.__class__.__name__) from exc

    async def verify(self, result: BootstrapResult) -> None:
        logger.info("Verifying emulator setup...")
        for spec in self._verifications:
            try:
                items = await self._verify_one(spec)
            except VerificationFailure as exc:
                logger.warning("%s", exc)
                result.verification_warnings.append(str(exc))
                continue
            result.verified[spec.name] = items
            logger.info("%s: %s", spec.name, ", ".join(items) if items else "(none)")
        if not result.verification_warnings:
            logger.info("Verification completed")

    async def run(self, *, verify: bool = True) -> BootstrapResult:
        result = BootstrapResult(outcomes=await self.provision())
        if verify and self._verifications:
            await self.verify(result)
        return result


def extract_items(response: Any, *, result_key: str, item_key: str | None) -> list[str]:
    """Pull display names out of a listing response.

    Tolerates odd payloads: a missing list yields `[]`, a malformed one
    raises `ValueError`.
    """

    if not isinstance(response, dict):
        raise ValueError(f"Unexpected response type: {type(response).__name__}")
    raw = response.get(result_key) or []
    if not isinstance(raw, list):
        raise ValueError(f"Expected a list under {result_key!r}")

    items: list[str] = []
    for entry in raw:
        if item_key is None:
            items.append(str(entry))
        elif isinstance(entry, dict) and entry.get(item_key) is not None:
            items.append(str(entry[item_key]))
    return items
