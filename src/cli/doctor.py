"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
import shutil

import typer
from rich.console import Console
from rich.table import Table

from adapters.emulator_inventory import EmulatorInventory
from adapters.prompts import resolve_prompt_ui
from adapters.terminal_spawner import TerminalSpawner
from core.config import AppSettings, PromptUI, get_user_env_file, write_user_env_vars
from core.errors import DiscoveryError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_discovery(settings: AppSettings) -> tuple[bool, str]:
    try:
        devices = await EmulatorInventory(settings).fetch()
    except DiscoveryError as exc:
        return False, str(exc).splitlines()[-1]
    return True, f"{len(devices)} AVD(s): {', '.join(devices)}"


def _check_terminal(settings: AppSettings) -> tuple[bool, str]:
    """Describe how a window would be opened on this platform."""

    commands = TerminalSpawner(settings).build_commands("<avd>")
    labels = [command.label for command in commands]
    if labels == ["emulator"]:
        return False, "No terminal opener found; the emulator would start without its own window"
    return True, " -> ".join(labels)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="avd-runner Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    emulator_path = shutil.which(settings.emulator_binary)
    if emulator_path:
        table.add_row("Emulator binary", "OK", emulator_path)
    else:
        table.add_row("Emulator binary", "FAIL", f"'{settings.emulator_binary}' not found in PATH")

    ok_discovery, detail_discovery = asyncio.run(_check_discovery(settings))
    table.add_row("AVD discovery", "OK" if ok_discovery else "FAIL", detail_discovery)

    ok_terminal, detail_terminal = _check_terminal(settings)
    table.add_row("Terminal", "OK" if ok_terminal else "WARN", detail_terminal)

    ui = resolve_prompt_ui(settings.prompt_ui)
    table.add_row(
        "Prompt UI",
        "OK",
        "questionary" if ui is PromptUI.RICH else "raw keyboard (plain)",
    )
    table.add_row("Launch delay", "OK", f"{settings.launch_delay_seconds:g}s")
    table.add_row("User config", "OK" if get_user_env_file().exists() else "OPTIONAL", str(get_user_env_file()))

    _console.print(table)

    if not emulator_path:
        _console.print(
            "\n[yellow]Note:[/yellow] add `$ANDROID_HOME/emulator` to PATH "
            "or set AVD_RUNNER_EMULATOR_BINARY to the emulator's full path."
        )


@app.command()
def configure() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()

    emulator = typer.prompt("Emulator binary", default=settings.emulator_binary, show_default=True).strip()
    terminal = typer.prompt(
        "Preferred terminal (gnome-terminal, konsole, xterm; blank = auto)",
        default=settings.terminal or "",
        show_default=False,
    ).strip()
    delay = typer.prompt(
        "Delay between launches (seconds)",
        default=settings.launch_delay_seconds,
        type=float,
    )
    keep_open = typer.confirm(
        "Keep terminal windows open after the emulator exits?",
        default=settings.keep_terminal_open,
    )

    if not emulator:
        raise typer.BadParameter("emulator binary is required")
    if delay <= 0:
        raise typer.BadParameter("delay must be greater than 0")

    env_path = write_user_env_vars(
        {
            "AVD_RUNNER_EMULATOR_BINARY": emulator,
            "AVD_RUNNER_TERMINAL": terminal,
            "AVD_RUNNER_LAUNCH_DELAY_SECONDS": f"{delay:g}",
            "AVD_RUNNER_KEEP_TERMINAL_OPEN": "true" if keep_open else "false",
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
