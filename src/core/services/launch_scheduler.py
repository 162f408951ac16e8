"""Launch scheduling for a batch of AVDs.

The scheduler turns a selection plus a `LaunchStrategy` into spawn calls and
collects one `LaunchOutcome` per device. A failing device never aborts the
batch. Printing stays out of this module: UI layers subscribe through
`LaunchHooks`.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Sequence

from core.domain.launch_strategy import LaunchStrategy
from core.domain.models import LaunchOutcome
from core.errors import SpawnError
from core.interfaces.devices import DeviceSpawner

logger = logging.getLogger(__name__)

DEFAULT_LAUNCH_DELAY_SECONDS = 3.0


@dataclass
class LaunchHooks:
    """Optional callbacks for UI layers (progress, waits)."""

    strategy_started: Callable[[LaunchStrategy, int], None] | None = None
    launch_started: Callable[[str], None] | None = None
    launch_finished: Callable[[LaunchOutcome], None] | None = None
    waiting: Callable[[float], None] | None = None


class LaunchScheduler:
    """Drive one spawn per device according to a strategy."""

    def __init__(
        self,
        spawner: DeviceSpawner,
        *,
        acknowledge: Callable[[str], Awaitable[None]],
        delay_seconds: float = DEFAULT_LAUNCH_DELAY_SECONDS,
        hooks: LaunchHooks | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._spawner = spawner
        self._acknowledge = acknowledge
        self._delay_seconds = delay_seconds
        self._hooks = hooks or LaunchHooks()
        self._sleep = sleep

    async def execute(
        self,
        selection: Sequence[str],
        strategy: LaunchStrategy,
    ) -> list[LaunchOutcome]:
        devices = list(selection)
        logger.debug("Launching %d device(s) with strategy %s", len(devices), strategy.value)
        if self._hooks.strategy_started:
            self._hooks.strategy_started(strategy, len(devices))

        if strategy is LaunchStrategy.DELAYED:
            return await self._run_delayed(devices)
        if strategy is LaunchStrategy.SEQUENTIAL:
            return await self._run_sequential(devices)
        return await self._run_parallel(devices)

    async def _run_parallel(self, devices: list[str]) -> list[LaunchOutcome]:
        return list(await asyncio.gather(*(self._launch(device) for device in devices)))

    async def _run_delayed(self, devices: list[str]) -> list[LaunchOutcome]:
        outcomes: list[LaunchOutcome] = []
        for index, device in enumerate(devices):
            outcomes.append(await self._launch(device))
            if index < len(devices) - 1:
                if self._hooks.waiting:
                    self._hooks.waiting(self._delay_seconds)
                await self._sleep(self._delay_seconds)
        return outcomes

    async def _run_sequential(self, devices: list[str]) -> list[LaunchOutcome]:
        outcomes: list[LaunchOutcome] = []
        for device in devices:
            await self._acknowledge(f"Press Enter to launch: {device}")
            outcomes.append(await self._launch(device))
        return outcomes

    async def _launch(self, device: str) -> LaunchOutcome:
        if self._hooks.launch_started:
            self._hooks.launch_started(device)

        try:
            await self._spawner.spawn(device)
        except SpawnError as exc:
            outcome = LaunchOutcome.failed(device, exc.reason)
        except Exception as exc:
            logger.debug("Unexpected spawn failure for %s", device, exc_info=True)
            outcome = LaunchOutcome.failed(device, str(exc) or exc.__class__.__name__)
        else:
            outcome = LaunchOutcome.succeeded(device)

        logger.info("Launch of %s %s", device, "succeeded" if outcome.success else "failed")
        if self._hooks.launch_finished:
            self._hooks.launch_finished(outcome)
        return outcome
