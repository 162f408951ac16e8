"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los resultados de lanzamiento se reportan en consola y en tests con la misma forma.

Nota:
- Inventario y selección son simples `list[str]`: el nombre de un AVD es opaco.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.launch_strategy import LaunchStrategy


def parse_device_list(output: str) -> list[str]:
    """Parse the discovery command output into device names.

    Lines are stripped, blank lines dropped and the reported order kept.
    Duplicates are passed through untouched.
    """

    return [line.strip() for line in output.splitlines() if line.strip()]


class LaunchOutcome(BaseModel):
    """Resultado de lanzar un único dispositivo."""

    model_config = ConfigDict(frozen=True)

    device: str = Field(
        ...,
        min_length=1,
        description="Nombre del AVD lanzado.",
    )
    success: bool = Field(
        ...,
        description="True si la ventana/proceso se pudo abrir.",
    )
    reason: str | None = Field(
        default=None,
        description="Motivo del fallo (solo cuando success es False).",
    )

    @classmethod
    def succeeded(cls, device: str) -> "LaunchOutcome":
        return cls(device=device, success=True)

    @classmethod
    def failed(cls, device: str, reason: str) -> "LaunchOutcome":
        return cls(device=device, success=False, reason=reason or "unknown error")


class LaunchRun(BaseModel):
    """Agregado de una pasada completa del pipeline.

    Por qué un agregado:
    - El bucle "¿lanzar más?" necesita saber si la pasada se confirmó.
    - La CLI resume éxitos/fallos sin recorrer los outcomes a mano.
    """

    selection: list[str] = Field(
        default_factory=list,
        description="Dispositivos elegidos, en orden de inventario.",
    )
    strategy: LaunchStrategy = Field(
        default=LaunchStrategy.PARALLEL,
        description="Estrategia usada para esta pasada.",
    )
    confirmed: bool = Field(
        default=False,
        description="False si el usuario canceló en la confirmación.",
    )
    outcomes: list[LaunchOutcome] = Field(
        default_factory=list,
        description="Un resultado por dispositivo seleccionado.",
    )

    @property
    def succeeded(self) -> list[LaunchOutcome]:
        return [o for o in self.outcomes if o.success]

    @property
    def failed(self) -> list[LaunchOutcome]:
        return [o for o in self.outcomes if not o.success]
