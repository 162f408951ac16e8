"""Errores del Core.

Por qué una jerarquía propia:
- La CLI decide el código de salida según el tipo de error, no según el texto.
- Los adaptadores (subprocess, terminal) traducen fallos de bajo nivel a estos tipos.
"""

from __future__ import annotations


class AvdRunnerError(Exception):
    """Base class for every error raised on purpose by avd-runner."""


class DiscoveryError(AvdRunnerError):
    """The AVD inventory could not be fetched or is empty."""


class SelectionError(AvdRunnerError):
    """The user tried to confirm an empty selection."""


class SpawnError(AvdRunnerError):
    """A single device could not be launched."""

    def __init__(self, device: str, reason: str) -> None:
        super().__init__(reason)
        self.device = device
        self.reason = reason


class QuitRequested(AvdRunnerError):
    """The user asked to leave the program from an interactive prompt."""


class TerminalUnavailableError(AvdRunnerError):
    """The keyboard menu needs an interactive terminal and stdin is not one."""
