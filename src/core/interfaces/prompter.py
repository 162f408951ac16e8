"""Contrato de la UI interactiva.

Dos implementaciones intercambiables (questionary y teclado en crudo) cumplen
este contrato; el Core nunca pregunta cuál está activa.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from core.domain.launch_strategy import LaunchStrategy


@runtime_checkable
class Prompter(Protocol):
    async def select_devices(self, inventory: Sequence[str]) -> list[str]:
        """Return a non-empty subset of `inventory`, in inventory order."""

        ...

    async def choose_strategy(self, options: Sequence[LaunchStrategy]) -> LaunchStrategy:
        """Ask which strategy to use; never fails."""

        ...

    async def confirm(self, message: str, *, default: bool = True) -> bool:
        """Yes/no question; anything not recognised as yes is a no."""

        ...

    async def acknowledge(self, message: str) -> None:
        """Block until the user explicitly continues (Enter)."""

        ...
