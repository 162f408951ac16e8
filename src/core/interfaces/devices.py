"""Contratos para descubrir y lanzar AVDs.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite sustituir `emulator`/terminales reales por fakes en tests
  sin acoplar el Core a subprocess.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class DeviceInventory(Protocol):
    """Fuente del inventario de AVDs.

    Reglas de diseño:
    - `fetch` es asíncrono porque ejecuta un comando externo.
    - Devuelve una lista nueva en cada llamada (sin caché entre pasadas).
    """

    async def fetch(self) -> list[str]:
        """Devuelve los nombres de AVD en el orden reportado; lanza `DiscoveryError`."""

        ...


@runtime_checkable
class DeviceSpawner(Protocol):
    """Abre una ventana de terminal que ejecuta el emulador de un AVD."""

    async def spawn(self, device: str) -> None:
        """Termina cuando la llamada de lanzamiento se resuelve; lanza `SpawnError`."""

        ...
