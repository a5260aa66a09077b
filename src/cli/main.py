"""Umbrella CLI: `stackready <health-check|wait-for-ready|bootstrap>`.

Each mode is also installed as its own executable (see pyproject scripts).
"""

from __future__ import annotations

import typer

from cli import bootstrap, health_check, wait_for_ready

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Local environment readiness checks and emulator bootstrap.",
)

app.command(name="health-check", help="Check the health of every local service once.")(health_check.run)
app.command(name="wait-for-ready", help="Wait for the database to be ready.")(wait_for_ready.run)
app.command(name="bootstrap", help="Provision local cloud resources on the emulator.")(bootstrap.run)


def run() -> None:
    app()
