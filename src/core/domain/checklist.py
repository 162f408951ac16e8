"""Checkbox menu state used by the raw-keyboard selector.

The state is kept free of terminal I/O so the navigation rules (wrap-around,
toggling, refusing an empty confirmation) can be exercised directly.
"""

from __future__ import annotations

from typing import Sequence

from core.errors import SelectionError


class Checklist:
    """Cursor index plus a parallel list of checked flags over the inventory."""

    def __init__(self, items: Sequence[str]) -> None:
        if not items:
            raise ValueError("Checklist needs at least one item")
        self.items = list(items)
        self.checked = [False] * len(self.items)
        self.cursor = 0

    def move_up(self) -> None:
        self.cursor = self.cursor - 1 if self.cursor > 0 else len(self.items) - 1

    def move_down(self) -> None:
        self.cursor = self.cursor + 1 if self.cursor < len(self.items) - 1 else 0

    def toggle(self) -> None:
        self.checked[self.cursor] = not self.checked[self.cursor]

    @property
    def selected_count(self) -> int:
        return sum(self.checked)

    def confirm(self) -> list[str]:
        """Return the checked items in inventory order.

        Raises `SelectionError` when nothing is checked.
        """

        selected = [item for item, flag in zip(self.items, self.checked) if flag]
        if not selected:
            raise SelectionError("Please select at least one AVD.")
        return selected
