"""Launch strategy options for avd-runner.

This module centralizes the strategies a batch of launches can follow.
Keeping it in the domain layer allows the CLI, the prompt adapters and the
scheduler to share a single source of truth without creating circular
imports with adapters.
"""

from __future__ import annotations

from enum import Enum


class LaunchStrategy(str, Enum):
    """Timing/ordering policy used to launch the selected devices."""

    PARALLEL = "parallel"
    DELAYED = "delayed"
    SEQUENTIAL = "sequential"

    @classmethod
    def default(cls) -> "LaunchStrategy":
        """Return the strategy used when there is nothing to choose."""

        return cls.PARALLEL

    def label(self) -> str:
        """Human readable label for prompts."""

        return _LABELS[self]


_LABELS: dict[LaunchStrategy, str] = {
    LaunchStrategy.PARALLEL: "🚀 Launch all at once (faster)",
    LaunchStrategy.DELAYED: "⏱️  Launch with delay (more stable)",
    LaunchStrategy.SEQUENTIAL: "👆 Launch one by one (manual control)",
}
