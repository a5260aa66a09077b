"""`python -m main` from inside `src/`.

Handy when iterating on a single mode (`python -m main bootstrap --skip-verify`)
without reinstalling the console scripts. Windows consoles get UTF-8 streams
so the status emoji in the readiness report render instead of raising.
"""

from __future__ import annotations

import sys

if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run  # noqa: E402

if __name__ == "__main__":
    run()
