"""Open a terminal window running `emulator -avd <name>`.

Commands are built as argv lists per platform and executed without a shell.
`cmd.exe /c start` re-parses its command line, so on Windows only AVD names
made of letters, digits, `.`, `_` and `-` are launched.

Platforms:
- Linux: gnome-terminal, konsole, xterm (first one that works).
- macOS: Terminal.app through `osascript`.
- Windows: `cmd.exe /c start` in a minimized window.
- Anything else (or no terminal found): the emulator itself, detached.
"""

from __future__ import annotations

import asyncio
import logging
import os
import re
import shlex
import shutil
import subprocess
import sys
from dataclasses import dataclass
from typing import Callable

from core.config import AppSettings
from core.errors import SpawnError
from core.interfaces.devices import DeviceSpawner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LaunchCommand:
    """One way of opening the emulator.

    `wait` means the opener returns quickly (it hands the window to another
    process), so its exit status is the spawn result. Otherwise the command
    keeps running with the emulator and the spawn settles once it started.
    """

    label: str
    argv: list[str]
    wait: bool = True


def _gnome_terminal(title: str, argv: list[str], keep_open: bool) -> LaunchCommand:
    if keep_open:
        inner = ["bash", "-c", '"$@"; exec bash', "bash", *argv]
    else:
        inner = list(argv)
    return LaunchCommand("gnome-terminal", ["gnome-terminal", f"--title={title}", "--", *inner])


def _konsole(title: str, argv: list[str], keep_open: bool) -> LaunchCommand:
    hold = ["--hold"] if keep_open else []
    return LaunchCommand("konsole", ["konsole", "--title", title, *hold, "-e", *argv], wait=False)


def _xterm(title: str, argv: list[str], keep_open: bool) -> LaunchCommand:
    hold = ["-hold"] if keep_open else []
    return LaunchCommand("xterm", ["xterm", "-title", title, *hold, "-e", *argv], wait=False)


LINUX_TERMINALS: dict[str, Callable[[str, list[str], bool], LaunchCommand]] = {
    "gnome-terminal": _gnome_terminal,
    "konsole": _konsole,
    "xterm": _xterm,
}

_APPLESCRIPT = (
    "on run argv",
    'tell application "Terminal" to do script (item 1 of argv)',
    "end run",
)

_SAFE_AVD_NAME = re.compile(r"[A-Za-z0-9._-]+")


class TerminalSpawner(DeviceSpawner):
    """Launch each AVD in its own terminal window."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        platform: str | None = None,
        which: Callable[[str], str | None] = shutil.which,
    ) -> None:
        self._settings = settings or AppSettings()
        self._platform = platform or sys.platform
        self._which = which
        # Fire-and-forget children (konsole, xterm, bare emulator); never waited on.
        self.detached: list[subprocess.Popen] = []

    def emulator_argv(self, device: str) -> list[str]:
        return [self._settings.emulator_binary, "-avd", device, *self._settings.emulator_args]

    def linux_terminals(self) -> list[str]:
        """Terminal emulators that will be tried, in order."""

        preferred = self._settings.terminal
        if preferred:
            return [preferred]
        return [name for name in LINUX_TERMINALS if self._which(name)]

    def build_commands(self, device: str) -> list[LaunchCommand]:
        argv = self.emulator_argv(device)
        title = f"AVD: {device}"
        keep_open = self._settings.keep_terminal_open

        if self._platform.startswith("win"):
            return [LaunchCommand("cmd", ["cmd.exe", "/c", "start", title, "/min", *argv])]

        if self._platform == "darwin":
            script: list[str] = []
            for line in _APPLESCRIPT:
                script.extend(["-e", line])
            return [LaunchCommand("osascript", ["osascript", *script, shlex.join(argv)])]

        if self._platform.startswith("linux"):
            commands: list[LaunchCommand] = []
            for name in self.linux_terminals():
                builder = LINUX_TERMINALS.get(name)
                if builder is None:
                    commands.append(LaunchCommand(name, [name, "-e", *argv], wait=False))
                else:
                    commands.append(builder(title, argv, keep_open))
            if commands:
                return commands

        return [LaunchCommand("emulator", argv, wait=False)]

    async def spawn(self, device: str) -> None:
        if self._platform.startswith("win") and not _SAFE_AVD_NAME.fullmatch(device):
            raise SpawnError(device, f"unsupported characters in AVD name {device!r}")

        last_error = "no launch command available"
        for command in self.build_commands(device):
            logger.debug("Launching %s via %s: %s", device, command.label, command.argv)
            error = await self._run(command)
            if error is None:
                return
            logger.info("%s could not launch %s: %s", command.label, device, error)
            last_error = f"{command.label}: {error}"
        raise SpawnError(device, last_error)

    async def _run(self, command: LaunchCommand) -> str | None:
        session: dict[str, bool] = {"start_new_session": True} if os.name == "posix" else {}
        try:
            if not command.wait:
                child = subprocess.Popen(
                    command.argv,
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL,
                    **session,
                )
                self.detached.append(child)
                return None

            proc = await asyncio.create_subprocess_exec(
                *command.argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
                **session,
            )
            _, stderr = await proc.communicate()
        except OSError as exc:
            return str(exc)

        if proc.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip() if stderr else ""
            return detail or f"exited with code {proc.returncode}"
        return None
