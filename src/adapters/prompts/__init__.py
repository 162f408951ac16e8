"""Interactive prompt adapters.

Two implementations of `core.interfaces.prompter.Prompter`:
- `QuestionaryPrompter`: questionary (prompt_toolkit) menus.
- `TerminalPrompter`: raw-keyboard checkbox + plain line prompts.

`build_prompter` picks one at startup; nothing downstream checks which.
"""

from __future__ import annotations

import importlib.util
import os
import sys
from typing import Mapping, Sequence, TextIO

from rich.console import Console

from adapters.prompts.terminal_prompter import TerminalPrompter
from core.config import AppSettings, PromptUI
from core.interfaces.prompter import Prompter


def resolve_prompt_ui(
    requested: PromptUI,
    environ: Mapping[str, str] | None = None,
    *,
    streams: Sequence[TextIO] | None = None,
) -> PromptUI:
    """Turn `auto` into a concrete UI based on what the environment supports.

    questionary is only chosen when it is installed, `TERM` is not `dumb`
    and both stdin and stdout (`streams`) are terminals.
    """

    if requested is not PromptUI.AUTO:
        return requested

    environ = os.environ if environ is None else environ
    streams = (sys.stdin, sys.stdout) if streams is None else streams
    if importlib.util.find_spec("questionary") is None:
        return PromptUI.PLAIN
    if environ.get("TERM") == "dumb":
        return PromptUI.PLAIN
    if not all(stream is not None and stream.isatty() for stream in streams):
        return PromptUI.PLAIN
    return PromptUI.RICH


def build_prompter(settings: AppSettings, console: Console) -> Prompter:
    if resolve_prompt_ui(settings.prompt_ui) is PromptUI.RICH:
        from adapters.prompts.questionary_prompter import QuestionaryPrompter  # noqa: PLC0415

        return QuestionaryPrompter(console)
    return TerminalPrompter(console)


__all__ = [
    "TerminalPrompter",
    "build_prompter",
    "resolve_prompt_ui",
]
