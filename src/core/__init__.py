"""Core de avd-runner: dominio, contratos y orquestación (sin I/O directo)."""
