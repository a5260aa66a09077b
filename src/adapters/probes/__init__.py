"""Concrete probes.

Why a package:
- Groups one module per transport (HTTP, subprocess, emulator health).
- Each module implements `core.interfaces.probe.Probe`.
"""

from adapters.probes.command_probe import CommandProbe
from adapters.probes.emulator_probe import EmulatorHealthProbe
from adapters.probes.http_probe import HttpProbe

__all__ = [
	"CommandProbe",
	"EmulatorHealthProbe",
	"HttpProbe",
]
