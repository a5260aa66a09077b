"""`bootstrap`: wait for the emulator, then provision and verify resources."""

from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console

from adapters.aws_provisioner import AwsEmulatorProvisioner, EmulatorCredentials
from cli.logging_setup import configure_logging
from cli.ui_components import build_stage_table, print_bootstrap_result
from cli.wait_for_ready import resolve_retry
from core.catalog import LOCALSTACK, bootstrap_resources, bootstrap_verifications, localstack_stages
from core.config import AppSettings
from core.domain.errors import PollerExhausted
from core.domain.models import BootstrapResult
from core.interfaces.provisioner import Provisioner
from core.services.bootstrapper import ResourceBootstrapper
from core.services.poller import BoundedRetryPoller

app = typer.Typer(add_completion=False, help="Provision local cloud resources on the emulator.")

_console = Console()
logger = logging.getLogger(__name__)


def build_provisioner(settings: AppSettings) -> Provisioner:
    return AwsEmulatorProvisioner(EmulatorCredentials.from_settings(settings))


async def _bootstrap(
    settings: AppSettings,
    *,
    max_attempts: int | None,
    interval_ms: int | None,
    verify: bool,
) -> BootstrapResult:
    poller = BoundedRetryPoller(
        target=LOCALSTACK,
        stages=localstack_stages(settings),
        retry=resolve_retry(settings.localstack_retry(), max_attempts, interval_ms),
        stage_timeout_seconds=settings.probe_timeout_seconds,
    )
    await poller.wait()

    bootstrapper = ResourceBootstrapper(
        provisioner=build_provisioner(settings),
        resources=bootstrap_resources(settings),
        verifications=bootstrap_verifications(),
    )
    return await bootstrapper.run(verify=verify)


@app.command()
def run(
    max_attempts: int | None = typer.Option(None, "--max-attempts", min=1, help="Attempt ceiling for the emulator."),
    interval_ms: int | None = typer.Option(None, "--interval-ms", min=0, help="Wait between attempts (ms)."),
    skip_verify: bool = typer.Option(False, "--skip-verify", help="Skip the listing pass after provisioning."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Exit 0 once every resource was attempted, even if some failed."""

    configure_logging(verbose)
    try:
        settings = AppSettings()
        logger.info("Using emulator at %s (region %s)", settings.localstack_url, settings.aws_region)
        result = asyncio.run(
            _bootstrap(settings, max_attempts=max_attempts, interval_ms=interval_ms, verify=not skip_verify)
        )
    except PollerExhausted as exc:
        logger.error("LocalStack setup failed: %s", exc)
        _console.print(build_stage_table(f"{exc.target}: last attempt", exc.stages))
        raise typer.Exit(code=1) from exc
    except Exception as exc:
        logger.error("LocalStack setup failed: %s", exc)
        raise typer.Exit(code=1) from exc

    print_bootstrap_result(_console, result)
