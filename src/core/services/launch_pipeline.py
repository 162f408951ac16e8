"""Interactive launch pipeline.

Inventory → selection → strategy → confirmation → scheduler, repeated while
the user asks to launch more devices. The CLI delegates the whole flow to
`LaunchPipeline.run` and only renders what the hooks report.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from core.domain.launch_strategy import LaunchStrategy
from core.domain.models import LaunchRun
from core.interfaces.devices import DeviceInventory
from core.interfaces.prompter import Prompter
from core.services.launch_scheduler import LaunchScheduler

logger = logging.getLogger(__name__)

CONFIRM_MESSAGE = "🚀 Proceed with launching the selected AVDs?"
LAUNCH_MORE_MESSAGE = "Would you like to launch more AVDs?"


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress, summaries)."""

    inventory_loaded: Callable[[list[str]], None] | None = None
    selection_made: Callable[[list[str]], None] | None = None
    cancelled: Callable[[], None] | None = None
    run_finished: Callable[[LaunchRun], None] | None = None
    restarting: Callable[[], None] | None = None


async def choose_strategy(selection: Sequence[str], prompter: Prompter) -> LaunchStrategy:
    """Pick the launch strategy; a single device never prompts."""

    if len(selection) == 1:
        return LaunchStrategy.default()
    return await prompter.choose_strategy(list(LaunchStrategy))


class LaunchPipeline:
    def __init__(
        self,
        *,
        inventory: DeviceInventory,
        prompter: Prompter,
        scheduler: LaunchScheduler,
        hooks: PipelineHooks | None = None,
    ) -> None:
        self._inventory = inventory
        self._prompter = prompter
        self._scheduler = scheduler
        self._hooks = hooks or PipelineHooks()

    async def run_once(self) -> LaunchRun:
        """One pass of the pipeline. `DiscoveryError` propagates to the caller."""

        devices = await self._inventory.fetch()
        logger.debug("Inventory: %s", devices)
        if self._hooks.inventory_loaded:
            self._hooks.inventory_loaded(devices)

        selection = await self._prompter.select_devices(devices)
        if self._hooks.selection_made:
            self._hooks.selection_made(selection)
        strategy = await choose_strategy(selection, self._prompter)

        if not await self._prompter.confirm(CONFIRM_MESSAGE, default=True):
            if self._hooks.cancelled:
                self._hooks.cancelled()
            return LaunchRun(selection=selection, strategy=strategy, confirmed=False)

        outcomes = await self._scheduler.execute(selection, strategy)
        run = LaunchRun(selection=selection, strategy=strategy, confirmed=True, outcomes=outcomes)
        if self._hooks.run_finished:
            self._hooks.run_finished(run)
        return run

    async def run(self) -> list[LaunchRun]:
        """Run passes until the user cancels or declines to launch more."""

        runs: list[LaunchRun] = []
        while True:
            run = await self.run_once()
            runs.append(run)
            if not run.confirmed:
                break
            if not await self._prompter.confirm(LAUNCH_MORE_MESSAGE, default=False):
                break
            if self._hooks.restarting:
                self._hooks.restarting()
        return runs
