"""Rich interactive UI built on questionary.

`unsafe_ask_async` is used everywhere so Ctrl-C propagates as
`KeyboardInterrupt` instead of being turned into a `None` answer.
"""

from __future__ import annotations

from typing import Sequence

import questionary
from rich.console import Console

from core.domain.launch_strategy import LaunchStrategy
from core.interfaces.prompter import Prompter


def require_selection(selected: list[str]) -> bool | str:
    if not selected:
        return "Please select at least one AVD."
    return True


class QuestionaryPrompter(Prompter):
    def __init__(self, console: Console) -> None:
        self._console = console

    async def select_devices(self, inventory: Sequence[str]) -> list[str]:
        choices = [questionary.Choice(title=f"📱 {device}", value=device) for device in inventory]
        selected = await questionary.checkbox(
            "Select AVDs to launch:",
            choices=choices,
            validate=require_selection,
        ).unsafe_ask_async()
        return list(selected)

    async def choose_strategy(self, options: Sequence[LaunchStrategy]) -> LaunchStrategy:
        choices = [questionary.Choice(title=strategy.label(), value=strategy) for strategy in options]
        return await questionary.select(
            "How would you like to launch the AVDs?",
            choices=choices,
        ).unsafe_ask_async()

    async def confirm(self, message: str, *, default: bool = True) -> bool:
        answer = await questionary.confirm(message, default=default).unsafe_ask_async()
        return bool(answer)

    async def acknowledge(self, message: str) -> None:
        await questionary.text(message).unsafe_ask_async()
