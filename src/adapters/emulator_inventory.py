"""AVD discovery via `emulator -list-avds`.

Implements `core.interfaces.devices.DeviceInventory` on top of
`asyncio.create_subprocess_exec`.
"""

from __future__ import annotations

import asyncio
import logging

from core.config import AppSettings
from core.domain.models import parse_device_list
from core.errors import DiscoveryError
from core.interfaces.devices import DeviceInventory

logger = logging.getLogger(__name__)

_MISSING_SDK_HINT = (
    "Error fetching AVDs. Make sure the Android SDK is installed and the emulator is in PATH."
)
_NO_DEVICES_HINT = "No AVDs found. Please create an AVD using Android Studio (or avdmanager) first."


class EmulatorInventory(DeviceInventory):
    """Lists the AVDs known to the Android emulator."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    @property
    def command(self) -> list[str]:
        return [self._settings.emulator_binary, "-list-avds"]

    async def fetch(self) -> list[str]:
        cmd = self.command
        logger.debug("Running discovery command: %s", cmd)
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await proc.communicate()
        except OSError as exc:
            raise DiscoveryError(f"{_MISSING_SDK_HINT}\nError: {exc}") from exc

        if proc.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            detail = detail or f"'{' '.join(cmd)}' exited with code {proc.returncode}"
            raise DiscoveryError(f"{_MISSING_SDK_HINT}\nError: {detail}")

        devices = parse_device_list(stdout.decode("utf-8", errors="replace"))
        if not devices:
            raise DiscoveryError(_NO_DEVICES_HINT)

        logger.info("Discovered %d AVD(s)", len(devices))
        return devices
