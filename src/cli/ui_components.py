"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- El Core solo emite hooks; aquí se decide cómo se ven.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from core.domain.launch_strategy import LaunchStrategy
from core.domain.models import LaunchOutcome, LaunchRun
from core.services.launch_pipeline import PipelineHooks
from core.services.launch_scheduler import LaunchHooks

FAREWELL = "👋 Goodbye!"


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    console.print("🤖 Android AVD Multi-Launcher", style="bold cyan")
    console.print("==============================\n")


def print_inventory(console: Console, devices: list[str]) -> None:
    """Numbered listing used by `--list`."""

    console.print("📱 Available Android Virtual Devices:\n")
    for index, device in enumerate(devices, start=1):
        console.print(f"{index}. {device}", markup=False)
    console.print(f"\n📊 Total: {len(devices)} AVD(s)")


def print_selection(console: Console, selection: list[str]) -> None:
    console.print(f"\n✅ Selected {len(selection)} AVD(s):", style="green")
    for device in selection:
        console.print(f"   ✓ {device}", markup=False)
    console.print()


def build_outcomes_table(outcomes: list[LaunchOutcome]) -> Table:
    """Tabla Rich con un resultado por AVD."""

    table = Table(title="Launch results")
    table.add_column("AVD", style="cyan", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Error", style="red")
    for outcome in outcomes:
        status = Text("launched", style="green") if outcome.success else Text("failed", style="red")
        table.add_row(Text(outcome.device), status, Text(outcome.reason or ""))
    return table


def print_run_summary(console: Console, run: LaunchRun) -> None:
    if run.failed:
        console.print()
        console.print(build_outcomes_table(run.outcomes))
        console.print(
            f"\n⚠️  {len(run.succeeded)} of {len(run.outcomes)} AVD(s) launched; "
            f"{len(run.failed)} failed.",
            style="yellow",
        )
    else:
        console.print("\n🎉 All selected AVDs have been launched!", style="bold green")
    console.print("💡 Each AVD is running in a separate terminal window.")
    console.print("📝 Note: It may take a few moments for the emulators to fully boot up.")


def _strategy_header(strategy: LaunchStrategy, delay_seconds: float) -> str:
    if strategy is LaunchStrategy.DELAYED:
        return f"⏱️  Starting AVDs with {delay_seconds:g}-second delays...\n"
    if strategy is LaunchStrategy.SEQUENTIAL:
        return "👆 Launching AVDs one by one (press Enter to launch each)...\n"
    return "🚀 Starting all selected AVDs simultaneously...\n"


def build_launch_hooks(console: Console, *, delay_seconds: float) -> LaunchHooks:
    """Hooks del scheduler que imprimen progreso por AVD."""

    def launch_finished(outcome: LaunchOutcome) -> None:
        if outcome.success:
            console.print(f"✅ Successfully launched {outcome.device}", style="green", markup=False)
        else:
            console.print(
                f"❌ Failed to launch {outcome.device}: {outcome.reason}",
                style="red",
                markup=False,
            )

    return LaunchHooks(
        strategy_started=lambda strategy, _count: console.print(
            "\n" + _strategy_header(strategy, delay_seconds)
        ),
        launch_started=lambda device: console.print(f"📱 Launching AVD: {device}", markup=False),
        launch_finished=launch_finished,
        waiting=lambda seconds: console.print(
            f"⏳ Waiting {seconds:g} seconds before next launch...\n", style="dim"
        ),
    )


def build_pipeline_hooks(console: Console) -> PipelineHooks:
    return PipelineHooks(
        inventory_loaded=lambda devices: console.print(f"🔍 Found {len(devices)} AVD(s).\n", style="dim"),
        selection_made=lambda selection: print_selection(console, selection),
        cancelled=lambda: console.print("❌ Launch cancelled by user.", style="yellow"),
        run_finished=lambda run: print_run_summary(console, run),
        restarting=lambda: console.print("\n" + "=" * 50 + "\n"),
    )
