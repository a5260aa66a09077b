"""Report aggregation: overall health, exit codes, remediation hints."""

from __future__ import annotations

from typing import Mapping

from core.domain.models import RunReport


def exit_code_for(report: RunReport) -> int:
    return 0 if report.all_healthy else 1


def remediation_hints(report: RunReport, hints: Mapping[str, str]) -> list[str]:
    """Hints for the unhealthy services, in mapping order, without repeats.

    Several services may share one hint (e.g. the database and the cache are
    started by the same command); it is listed once.
    """

    unhealthy = set(report.unhealthy_names)
    out: list[str] = []
    for name, hint in hints.items():
        if name in unhealthy and hint not in out:
            out.append(hint)
    return out
