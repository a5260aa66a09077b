"""`health-check`: probe every declared service once and report."""

from __future__ import annotations

import asyncio
import json
import logging

import typer
from rich.console import Console

from cli.logging_setup import configure_logging
from cli.ui_components import print_report
from core.catalog import REMEDIATION_HINTS, health_check_probes
from core.config import AppSettings
from core.services.probe_engine import run_probes
from core.services.report import exit_code_for

app = typer.Typer(add_completion=False, help="Check the health of every local service once.")

_console = Console()
logger = logging.getLogger(__name__)


@app.command()
def run(
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        min=0.1,
        help="Per-probe timeout in seconds (default: STACKREADY_PROBE_TIMEOUT_SECONDS).",
    ),
    json_output: bool = typer.Option(False, "--json", help="Print the report as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Run all probes concurrently; exit 0 only if every service is healthy."""

    configure_logging(verbose)
    try:
        settings = AppSettings()
        if timeout is not None:
            settings = settings.model_copy(update={"probe_timeout_seconds": timeout})
        probes = health_check_probes(settings)
        if not json_output:
            _console.print("🔍 Checking system health...\n")
        report = asyncio.run(run_probes(probes, timeout_seconds=settings.probe_timeout_seconds))
    except Exception as exc:
        logger.error("Health check failed: %s", exc)
        raise typer.Exit(code=1) from exc

    if json_output:
        typer.echo(json.dumps(report.model_dump(mode="json"), ensure_ascii=False, indent=2, sort_keys=True))
    else:
        print_report(_console, report, REMEDIATION_HINTS)

    raise typer.Exit(code=exit_code_for(report))
