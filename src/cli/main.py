"""CLI principal (Typer).

- `avd-runner`            → pipeline interactivo (selección, estrategia, lanzamiento).
- `avd-runner --list/-l`  → lista los AVDs y sale (0 = ok, 1 = fallo de descubrimiento).
- `avd-runner doctor ...` → diagnóstico y configuración.
"""

from __future__ import annotations

import asyncio
import logging
import signal
from contextlib import contextmanager
from typing import Awaitable, Iterator

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from adapters.emulator_inventory import EmulatorInventory
from adapters.prompts import build_prompter
from adapters.terminal_spawner import TerminalSpawner
from cli.doctor import app as doctor_app
from cli.ui_components import (
    FAREWELL,
    build_launch_hooks,
    build_pipeline_hooks,
    print_banner,
    print_inventory,
)
from core.config import AppSettings, PromptUI
from core.errors import DiscoveryError, QuitRequested, TerminalUnavailableError
from core.services.launch_pipeline import LaunchPipeline
from core.services.launch_scheduler import LaunchScheduler

logger = logging.getLogger(__name__)

app = typer.Typer(
    add_completion=False,
    help="Launch one or more Android Virtual Devices, each in its own terminal window.",
)
app.add_typer(doctor_app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


def _raise_interrupt(signum: int, frame: object) -> None:
    raise KeyboardInterrupt


@contextmanager
def _interrupt_handlers() -> Iterator[None]:
    """SIGINT/SIGTERM raise `KeyboardInterrupt` right away, even inside a prompt."""

    previous = {}
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            previous[sig] = signal.signal(sig, _raise_interrupt)
        except ValueError:
            # Only the main thread may install handlers.
            continue
    try:
        yield
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


def _execute(main: Awaitable[int]) -> int:
    with _interrupt_handlers():
        try:
            return asyncio.run(main)
        except (KeyboardInterrupt, QuitRequested):
            _console.print(f"\n\n{FAREWELL}")
            return 0
        except Exception as exc:
            logger.debug("Unhandled error", exc_info=True)
            _err_console.print(
                f"💥 Fatal error: {exc or exc.__class__.__name__}",
                style="bold red",
                markup=False,
            )
            return 1


async def list_devices(settings: AppSettings) -> int:
    _console.print("🔍 Fetching available AVDs...\n", style="dim")
    try:
        devices = await EmulatorInventory(settings).fetch()
    except DiscoveryError as exc:
        _err_console.print(f"❌ {exc}", style="red", markup=False)
        return 1
    print_inventory(_console, devices)
    return 0


async def launch_interactive(settings: AppSettings) -> int:
    prompter = build_prompter(settings, _console)
    scheduler = LaunchScheduler(
        TerminalSpawner(settings),
        acknowledge=prompter.acknowledge,
        delay_seconds=settings.launch_delay_seconds,
        hooks=build_launch_hooks(_console, delay_seconds=settings.launch_delay_seconds),
    )
    pipeline = LaunchPipeline(
        inventory=EmulatorInventory(settings),
        prompter=prompter,
        scheduler=scheduler,
        hooks=build_pipeline_hooks(_console),
    )

    print_banner(_console)
    try:
        await pipeline.run()
    except (DiscoveryError, TerminalUnavailableError) as exc:
        _err_console.print(f"❌ {exc}", style="red", markup=False)
        return 1
    return 0


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    list_: bool = typer.Option(
        False,
        "--list",
        "-l",
        help="List all available Android Virtual Devices (AVDs) and exit.",
    ),
    ui: PromptUI | None = typer.Option(
        None,
        "--ui",
        case_sensitive=False,
        help="Interactive UI: auto, rich (questionary) or plain (raw keyboard).",
    ),
    delay: float | None = typer.Option(
        None,
        "--delay",
        min=0.1,
        help="Seconds to wait between launches with the delayed strategy.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Pick AVDs from `emulator -list-avds` and launch them."""

    _configure_logging(verbose)
    if ctx.invoked_subcommand is not None:
        return

    overrides: dict[str, object] = {}
    if ui is not None:
        overrides["prompt_ui"] = ui
    if delay is not None:
        overrides["launch_delay_seconds"] = delay
    try:
        settings = AppSettings(**overrides)
    except ValidationError as exc:
        _err_console.print(f"💥 Invalid configuration:\n{exc}", style="bold red", markup=False)
        raise typer.Exit(1) from exc

    if list_:
        raise typer.Exit(_execute(list_devices(settings)))
    raise typer.Exit(_execute(launch_interactive(settings)))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
