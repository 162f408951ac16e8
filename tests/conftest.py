import asyncio

import pytest

from core.config import AppSettings
from core.domain.launch_strategy import LaunchStrategy
from core.errors import SpawnError


class FakeProc:
    def __init__(self, returncode: int, stdout: str = "", stderr: str = ""):
        self.returncode = returncode
        self._stdout = stdout.encode("utf-8")
        self._stderr = stderr.encode("utf-8")

    async def communicate(self):
        return self._stdout, self._stderr


class FakeSpawner:
    """Records spawn calls; devices in `fail` raise, `delay` keeps spawns in flight."""

    def __init__(self, *, fail=(), errors=None, delay: float = 0.0, events=None):
        self.fail = set(fail)
        self.errors = errors or {}
        self.delay = delay
        self.calls: list[str] = []
        self.events = events if events is not None else []
        self.in_flight = 0
        self.max_in_flight = 0

    async def spawn(self, device: str) -> None:
        self.calls.append(device)
        self.events.append(("spawn", device))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if device in self.errors:
                raise self.errors[device]
            if device in self.fail:
                raise SpawnError(device, f"{device} exploded")
        finally:
            self.in_flight -= 1


class FakeInventory:
    def __init__(self, devices=None, error: Exception | None = None):
        self.devices = list(devices or [])
        self.error = error
        self.fetches = 0

    async def fetch(self) -> list[str]:
        self.fetches += 1
        if self.error is not None:
            raise self.error
        return list(self.devices)


class FakePrompter:
    def __init__(
        self,
        *,
        selection,
        strategy: LaunchStrategy = LaunchStrategy.PARALLEL,
        confirms=(True, False),
    ):
        self.selection = list(selection)
        self.strategy = strategy
        self.confirms = list(confirms)
        self.strategy_prompts = 0
        self.confirm_messages: list[str] = []
        self.acks: list[str] = []

    async def select_devices(self, inventory):
        return [device for device in inventory if device in self.selection]

    async def choose_strategy(self, options):
        self.strategy_prompts += 1
        return self.strategy

    async def confirm(self, message, *, default=True):
        self.confirm_messages.append(message)
        return self.confirms.pop(0)

    async def acknowledge(self, message):
        self.acks.append(message)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None)
