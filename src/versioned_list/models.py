"""Snapshot records kept by the history store.

Both records own their ``items`` list. Copies are one level deep: the list
is fresh, the elements are shared.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Checkpoint:
    """A labelled snapshot attached to a single history entry."""

    items: list[Any] = field(default_factory=list)
    label: str | None = None

    def copy(self) -> Checkpoint:
        return Checkpoint(items=list(self.items), label=self.label)


@dataclass
class HistoryEntry:
    """One recorded state of the sequence plus its checkpoints."""

    items: list[Any]
    checkpoints: list[Checkpoint] = field(default_factory=list)

    def copy(self) -> HistoryEntry:
        return HistoryEntry(
            items=list(self.items),
            checkpoints=[cp.copy() for cp in self.checkpoints],
        )

    def find_checkpoint(self, label: str | None) -> int:
        """Index of the first checkpoint labelled *label*, or -1."""
        for idx, cp in enumerate(self.checkpoints):
            if cp.label == label:
                return idx
        return -1
