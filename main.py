"""Run `stackready` straight from a checkout.

Compose healthcheck hooks and package.json scripts call
`python main.py health-check` (or `wait-for-ready`, `bootstrap`) before the
project is pip-installed, so the readiness gate works on a fresh clone.
Sources sit under `src/`, which is put on `sys.path` first.
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src"


def main() -> None:
    if str(SRC_DIR) not in sys.path:
        sys.path.insert(0, str(SRC_DIR))

    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
