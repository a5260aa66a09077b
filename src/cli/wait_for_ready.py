"""`wait-for-ready`: block until PostgreSQL accepts the application user."""

from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console

from cli.logging_setup import configure_logging
from cli.ui_components import build_stage_table
from core.catalog import POSTGRES, postgres_stages
from core.config import AppSettings
from core.domain.errors import PollerExhausted
from core.domain.models import RetryConfig
from core.services.poller import BoundedRetryPoller

app = typer.Typer(add_completion=False, help="Wait for the database to be ready.")

_console = Console()
logger = logging.getLogger(__name__)


def resolve_retry(default: RetryConfig, max_attempts: int | None, interval_ms: int | None) -> RetryConfig:
    return RetryConfig(
        max_attempts=max_attempts if max_attempts is not None else default.max_attempts,
        wait_interval_ms=interval_ms if interval_ms is not None else default.wait_interval_ms,
    )


@app.command()
def run(
    max_attempts: int | None = typer.Option(None, "--max-attempts", min=1, help="Attempt ceiling."),
    interval_ms: int | None = typer.Option(None, "--interval-ms", min=0, help="Wait between attempts (ms)."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Two stages per attempt: server liveness, then a query as the dev user."""

    configure_logging(verbose)
    try:
        settings = AppSettings()
        poller = BoundedRetryPoller(
            target=POSTGRES,
            stages=postgres_stages(settings),
            retry=resolve_retry(settings.postgres_retry(), max_attempts, interval_ms),
            stage_timeout_seconds=settings.probe_timeout_seconds,
        )
        outcome = asyncio.run(poller.wait())
    except PollerExhausted as exc:
        logger.error("Error waiting for %s: %s", POSTGRES, exc)
        _console.print(build_stage_table(f"{exc.target}: last attempt", exc.stages))
        raise typer.Exit(code=1) from exc
    except Exception as exc:
        logger.error("Error waiting for %s: %s", POSTGRES, exc)
        raise typer.Exit(code=1) from exc

    _console.print(f"✅ {outcome.target} is ready! ({outcome.attempts} attempt(s))", style="green")
    _console.print("✅ Dev user connection confirmed!", style="green")
