"""Snapshot history with cursor-based undo/redo and per-entry checkpoints.

The store is cursor-based: ``cursor`` always points at the entry that
matches the live items. Recording a new entry when the cursor is not at
the end truncates the redo tail, so history is strictly linear.

Checkpoints belong to the entry that was current when they were saved.
They are only visible while the cursor sits on that entry and disappear
with it when the entry is truncated, cleaned or limited away.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

from versioned_list.errors import HistoryIndexError
from versioned_list.listeners import Listener, NotificationHub
from versioned_list.models import Checkpoint, HistoryEntry
from versioned_list.sequence import ValidatedSequence
from versioned_list.serialization import entries_from_json, entries_to_csv, to_json

T = TypeVar("T")

logger = logging.getLogger(__name__)


class HistoryStore(Generic[T]):
    """Linear list of full snapshots of a :class:`ValidatedSequence`."""

    def __init__(
        self,
        sequence: ValidatedSequence[T],
        hub: NotificationHub,
        *,
        max_entries: int | None = None,
    ) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self._sequence = sequence
        self._hub = hub
        self._max_entries = max_entries
        self._entries: list[HistoryEntry] = [HistoryEntry(items=sequence.snapshot())]
        self._cursor: int = 0

    @property
    def cursor(self) -> int:
        """Index of the entry matching the live items."""
        return self._cursor

    @property
    def entries(self) -> list[HistoryEntry]:
        """Copies of all recorded entries, oldest first."""
        return [entry.copy() for entry in self._entries]

    @property
    def current(self) -> HistoryEntry:
        return self._entries[self._cursor]

    def __len__(self) -> int:
        return len(self._entries)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener* for history and mutation events."""
        return self._hub.subscribe(listener)

    # -- recording -------------------------------------------------------

    def record(self) -> None:
        """Append a snapshot of the live items, truncating any redo tail."""
        del self._entries[self._cursor + 1 :]
        self._entries.append(HistoryEntry(items=self._sequence.snapshot()))
        self._cursor = len(self._entries) - 1
        if self._max_entries is not None and len(self._entries) > self._max_entries:
            self._drop_oldest(len(self._entries) - self._max_entries)

    def _drop_oldest(self, count: int) -> None:
        del self._entries[:count]
        self._cursor = len(self._entries) - 1
        logger.debug("Dropped %d oldest history entries", count)

    # -- navigation ------------------------------------------------------

    def _move_to(self, index: int, event: str) -> list[T]:
        self._cursor = index
        self._sequence.replace(self._entries[index].items)
        items = self._sequence.snapshot()
        self._hub.broadcast(event, items)
        return items

    def _stay(self, event: str) -> list[T]:
        items = self._sequence.snapshot()
        self._hub.broadcast(event, items)
        return items

    def previous(self) -> list[T]:
        """Step back one entry if possible. Returns the live items.

        At the first entry the live items are left as they are.
        """
        if self._cursor == 0:
            return self._stay("previous")
        return self._move_to(self._cursor - 1, "previous")

    def next(self) -> list[T]:
        """Step forward one entry if possible. Returns the live items.

        At the last entry the live items are left as they are.
        """
        if self._cursor == len(self._entries) - 1:
            return self._stay("next")
        return self._move_to(self._cursor + 1, "next")

    def jump(self, offset: int) -> list[T]:
        """Move the cursor by *offset* entries.

        Raises
        ------
        HistoryIndexError
            If the target lies outside the recorded entries. The cursor and
            live items are left unchanged.
        """
        target = self._cursor + offset
        self._check_index(target)
        return self._move_to(target, "jump")

    def go_to(self, index: int) -> list[T]:
        """Move the cursor to the absolute entry *index*.

        Negative indices are out of range rather than counted from the end.
        """
        self._check_index(index)
        return self._move_to(index, "goTo")

    def undo(self, times: int = 1) -> list[T]:
        """Step back up to *times* entries, stopping at the first one."""
        return self._move_to(max(self._cursor - max(times, 0), 0), "undo")

    def redo(self, times: int = 1) -> list[T]:
        """Step forward up to *times* entries, stopping at the last one."""
        last = len(self._entries) - 1
        return self._move_to(min(self._cursor + max(times, 0), last), "redo")

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._entries):
            raise HistoryIndexError(index, len(self._entries))

    # -- maintenance -----------------------------------------------------

    def clean(self) -> None:
        """Collapse history to one entry holding the live items."""
        self._entries = [HistoryEntry(items=self._sequence.snapshot())]
        self._cursor = 0
        logger.debug("History cleaned")
        self._hub.broadcast("clean", self._entries)

    def limit(self, size: int) -> None:
        """Keep only the *size* most recent entries.

        Sizes below one keep a single entry; a history is never empty.
        The cursor moves to the newest entry and the live items follow it
        if that changes the current entry. Emits ``limit`` only if
        something was dropped.
        """
        if size < 0:
            raise ValueError(f"limit size must be non-negative, got {size}")
        size = max(size, 1)
        if size >= len(self._entries):
            return
        before = self.current
        self._drop_oldest(len(self._entries) - size)
        if self.current is not before:
            self._sequence.replace(self.current.items)
        self._hub.broadcast("limit", self._entries)

    # -- checkpoints -----------------------------------------------------

    def save_checkpoint(self, label: str | None = None) -> None:
        """Attach a snapshot of the live items to the current entry."""
        self.current.checkpoints.append(
            Checkpoint(items=self._sequence.snapshot(), label=label)
        )
        self._hub.broadcast("saveCheckpoint", self.current.checkpoints)

    def restore_checkpoint(self, label: str | None) -> bool:
        """Replace the live items with the checkpoint labelled *label*.

        History is not touched: afterwards :meth:`has_changes` reports the
        difference until the next mutation records it. Returns False, and
        does nothing, when the current entry has no such checkpoint.
        """
        idx = self.current.find_checkpoint(label)
        if idx == -1:
            return False
        checkpoint = self.current.checkpoints[idx]
        self._sequence.replace(checkpoint.items)
        self._hub.broadcast("restoreCheckpoint", checkpoint)
        return True

    def remove_checkpoint(self, label: str | None) -> bool:
        """Remove the first checkpoint labelled *label* from the current entry."""
        idx = self.current.find_checkpoint(label)
        if idx == -1:
            return False
        del self.current.checkpoints[idx]
        self._hub.broadcast("removeCheckpoint", self.current.checkpoints)
        return True

    def list_checkpoints(self) -> list[Checkpoint]:
        return [cp.copy() for cp in self.current.checkpoints]

    def has_changes(self) -> bool:
        """True if the live items differ from the current entry's snapshot."""
        live = self._sequence.snapshot()
        recorded = self.current.items
        if len(live) != len(recorded):
            return True
        return any(a is not b and a != b for a, b in zip(live, recorded))

    # -- import / export -------------------------------------------------

    def import_json(self, serialized: str | bytes) -> None:
        """Replace the whole history with *serialized* entries.

        The cursor moves to the last imported entry and the live items follow
        it. Malformed input raises :class:`ParseError` and changes nothing.
        """
        entries = entries_from_json(serialized)
        self._entries = entries
        self._cursor = len(entries) - 1
        self._sequence.replace(self.current.items)
        logger.debug("Imported %d history entries", len(entries))
        self._hub.broadcast("import", self._entries)

    def to_json(self) -> str:
        return to_json(self._entries)

    def to_csv(self, delimiter: str = ",") -> str:
        """Flatten every entry and checkpoint into one delimited line.

        Values are not quoted, so a value containing *delimiter* cannot be
        told apart from two values.
        """
        return entries_to_csv(self._entries, delimiter)
