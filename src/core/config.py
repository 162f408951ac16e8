"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (inventario, terminales, prompts) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PromptUI(str, Enum):
    """Which interactive UI to use."""

    AUTO = "auto"
    RICH = "rich"
    PLAIN = "plain"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "avd-runner"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "avd-runner"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "avd-runner"
    return Path.home() / ".config" / "avd-runner"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Las claves con valor `None` se ignoran; las existentes se conservan.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        try:
            existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))
        except OSError:
            existing = {}

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# avd-runner user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="AVD_RUNNER_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    emulator_binary: str = Field(
        default="emulator",
        min_length=1,
        description="Ejecutable del emulador de Android (nombre en PATH o ruta absoluta).",
    )
    emulator_args: list[str] = Field(
        default_factory=list,
        description="Argumentos extra para cada lanzamiento (p.ej. -no-snapshot-load).",
    )
    launch_delay_seconds: float = Field(
        default=3.0,
        gt=0,
        description="Espera entre lanzamientos en la estrategia 'delayed' (segundos).",
    )
    terminal: str | None = Field(
        default=None,
        description="Terminal preferida en Linux (gnome-terminal, konsole, xterm).",
    )
    keep_terminal_open: bool = Field(
        default=True,
        description="Mantener la ventana abierta cuando el emulador termina.",
    )
    prompt_ui: PromptUI = Field(
        default=PromptUI.AUTO,
        description="UI interactiva: auto, rich (questionary) o plain (teclado en crudo).",
    )
