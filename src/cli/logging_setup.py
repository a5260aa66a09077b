"""Logging for the CLI entry points.

Services log through `logging.getLogger(__name__)`; this module decides where
those records go (a Rich handler on stderr) so stdout keeps only the report.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "stackready-rich"


def configure_logging(verbose: bool = False) -> None:
    """Install the Rich handler once; later calls only adjust the level."""

    level = logging.DEBUG if verbose else logging.INFO
    root = logging.getLogger()
    root.setLevel(level)

    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=verbose,
        show_path=verbose,
        markup=False,
        rich_tracebacks=verbose,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)

    # Third-party clients are chatty at DEBUG.
    for noisy in ("botocore", "aiobotocore", "boto3", "httpx", "httpcore", "asyncio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
