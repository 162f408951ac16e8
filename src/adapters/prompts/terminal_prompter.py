"""Minimal interactive UI: raw-keyboard checkbox menu and line prompts.

Used when questionary is not available (or `--ui plain`). Terminal reads
happen on the event loop thread; nothing else runs while a prompt is shown.
"""

from __future__ import annotations

import asyncio
from contextlib import AbstractContextManager
from typing import Awaitable, Callable, Sequence

from rich.console import Console
from rich.text import Text

from adapters.prompts.raw_keys import Key, decode_key, raw_keyboard
from core.domain.checklist import Checklist
from core.domain.launch_strategy import LaunchStrategy
from core.errors import QuitRequested, SelectionError
from core.interfaces.prompter import Prompter

EMPTY_SELECTION_PAUSE_SECONDS = 1.5


class TerminalPrompter(Prompter):
    def __init__(
        self,
        console: Console,
        *,
        keyboard: Callable[[], AbstractContextManager[Callable[[], str]]] = raw_keyboard,
        read_line: Callable[[str], str] | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._console = console
        self._keyboard = keyboard
        self._read_line = read_line or (lambda prompt: console.input(prompt, markup=False))
        self._sleep = sleep

    async def select_devices(self, inventory: Sequence[str]) -> list[str]:
        checklist = Checklist(inventory)
        with self._keyboard() as read_key:
            self._render(checklist)
            while True:
                key = decode_key(read_key())
                if key is Key.UP:
                    checklist.move_up()
                elif key is Key.DOWN:
                    checklist.move_down()
                elif key is Key.TOGGLE:
                    checklist.toggle()
                elif key is Key.CONFIRM:
                    try:
                        return checklist.confirm()
                    except SelectionError as exc:
                        self._console.print(f"\n❌ {exc}", style="red", markup=False)
                        await self._sleep(EMPTY_SELECTION_PAUSE_SECONDS)
                elif key is Key.QUIT:
                    raise QuitRequested("Selection aborted by user.")
                else:
                    continue
                self._render(checklist)

    def _render(self, checklist: Checklist) -> None:
        console = self._console
        console.clear()
        console.print("🤖 Android AVD Multi-Launcher", style="bold cyan")
        console.print("==============================\n")
        console.print("📱 Select AVDs to launch:\n")
        console.print("Use ↑↓ to navigate, Space to select/deselect, Enter to confirm\n")

        for index, (device, checked) in enumerate(zip(checklist.items, checklist.checked)):
            current = index == checklist.cursor
            row = Text("→ " if current else "  ")
            row.append(("☑️ " if checked else "☐ ") + device, style="cyan" if current else "")
            console.print(row)

        console.print(f"\n📊 Selected: {checklist.selected_count} AVD(s)")
        console.print("\n💡 Controls: ↑↓ Navigate | Space Select | Enter Confirm | q Quit")

    async def choose_strategy(self, options: Sequence[LaunchStrategy]) -> LaunchStrategy:
        self._console.print("How would you like to launch the AVDs?")
        for number, strategy in enumerate(options, start=1):
            self._console.print(f"{number}. {strategy.label()}", markup=False)

        choices = {str(number): strategy for number, strategy in enumerate(options, start=1)}
        answer = self._read_line(f"Enter your choice (1-{len(options)}): ").strip()
        strategy = choices.get(answer)
        if strategy is not None:
            return strategy

        self._console.print("Invalid choice. Using parallel launch.", style="yellow")
        return LaunchStrategy.PARALLEL

    async def confirm(self, message: str, *, default: bool = True) -> bool:
        answer = self._read_line(f"{message} (y/n): ")
        return answer.strip().lower().startswith("y")

    async def acknowledge(self, message: str) -> None:
        self._read_line(f"{message} ")
