"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Lets the three commands share status lines and tables.
"""

from __future__ import annotations

from typing import Mapping

from rich.console import Console
from rich.table import Table
from rich.text import Text

from core.domain.models import BootstrapResult, HealthStatus, RunReport, ServiceStatus
from core.services.report import remediation_hints

_MARKERS = {
    HealthStatus.HEALTHY: "✅",
    HealthStatus.UNHEALTHY: "❌",
    HealthStatus.UNKNOWN: "❔",
}


def status_line(status: ServiceStatus) -> Text:
    """`✅ Name (url)`; plain `Text` so names are never parsed as markup."""

    text = Text(f"{_MARKERS[status.status]} ")
    text.append(status.name, style="bold" if status.healthy else "bold red")
    if status.url:
        text.append(f" ({status.url})", style="dim")
    return text


def print_service_status(console: Console, status: ServiceStatus) -> None:
    console.print(status_line(status))
    if status.message:
        console.print(Text(f"   └─ {status.message}", style="dim"))


def print_report(console: Console, report: RunReport, hints: Mapping[str, str]) -> None:
    """Per-service lines, a summary and, when needed, remediation hints."""

    for status in report.statuses:
        print_service_status(console, status)

    console.print()
    console.print(f"📊 Health Summary: {report.healthy_count}/{report.total_count} services healthy")

    if report.all_healthy:
        console.print("🎉 All systems operational!", style="green")
        return

    console.print("⚠️  Some services need attention", style="yellow")
    suggestions = remediation_hints(report, hints)
    if suggestions:
        console.print("💡 To start missing services:")
        for hint in suggestions:
            console.print(Text(f"   - {hint}"))


def build_stage_table(title: str, stages: list[ServiceStatus]) -> Table:
    table = Table(title=title)
    table.add_column("Stage", style="cyan", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    for stage in stages:
        label = {HealthStatus.HEALTHY: "OK", HealthStatus.UNHEALTHY: "FAILED"}.get(stage.status, "UNKNOWN")
        table.add_row(stage.name, label, stage.message or "")
    return table


def print_bootstrap_result(console: Console, result: BootstrapResult) -> None:
    table = Table(title="Provisioned resources")
    table.add_column("Resource", style="cyan", no_wrap=True)
    table.add_column("Result", style="white")
    table.add_column("Details", style="dim")
    for outcome in result.outcomes:
        table.add_row(outcome.name, "OK" if outcome.succeeded else "WARN", outcome.message or "")
    console.print(table)

    for name, items in result.verified.items():
        console.print(Text(f"🔍 {name}: {', '.join(items) if items else '(none)'}"))

    if result.failure_count:
        console.print(
            f"⚠️  Setup completed with {result.failure_count} failure(s): {', '.join(result.failed_names)}",
            style="yellow",
        )
    else:
        console.print("🎉 LocalStack setup completed successfully!", style="green")
