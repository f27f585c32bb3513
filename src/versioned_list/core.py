"""Versioned list — a validated sequence wired to history and listeners.

Every mutation follows the same order: the sequence changes, the history
records a snapshot (discarding any redo tail), then listeners are told.
A listener that mutates the list from inside its callback therefore sees
history already updated while listeners after it have not yet heard of
the outer event.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, TypeVar

from versioned_list.errors import ParseError
from versioned_list.history import HistoryStore
from versioned_list.lazy import LazyChain
from versioned_list.listeners import Listener, NotificationHub
from versioned_list.sequence import ValidatedSequence, ValidationFn
from versioned_list.serialization import items_from_json, to_json

T = TypeVar("T")

logger = logging.getLogger(__name__)


class VersionedList(ValidatedSequence[T]):
    """Sequence with admission validation, undo/redo history and checkpoints.

    Parameters
    ----------
    initial : iterable, optional
        Starting elements. They become history entry 0 and are not
        validated.
    validate : callable, optional
        Admission predicate applied by :meth:`push` and :meth:`batch_push`.
    history_limit : int, optional
        Keep at most this many history entries, dropping the oldest as new
        mutations are recorded.
    """

    def __init__(
        self,
        initial: Iterable[T] = (),
        validate: ValidationFn[T] | None = None,
        *,
        history_limit: int | None = None,
    ) -> None:
        super().__init__(initial, validate, on_change=self._record_and_notify)
        self._hub = NotificationHub()
        self._history: HistoryStore[T] = HistoryStore(
            self, self._hub, max_entries=history_limit
        )

    def _record_and_notify(self, event: str) -> None:
        self._history.record()
        self._hub.broadcast(event, self._items)

    @property
    def history(self) -> HistoryStore[T]:
        """Navigation, checkpoints and import/export for this list."""
        return self._history

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Register *listener* and call it once with ``"initialize"``.

        Returns a function that removes the listener again.
        """
        return self._hub.subscribe(listener, initial=self._items)

    def lazy(self) -> LazyChain:
        """Start a deferred command chain against this list."""
        return LazyChain(self)

    def serialize(self) -> str:
        """The live items as a JSON array."""
        return to_json(self._items)

    def deserialize(self, json_string: str | bytes) -> bool:
        """Replace the live items with a JSON array.

        The items are installed as-is: no validation and no history entry.
        Malformed input is logged and leaves the list untouched.
        """
        try:
            items = items_from_json(json_string)
        except ParseError as exc:
            logger.warning("Deserialization failed: %s", exc.error)
            return False
        self.replace(items)
        self._hub.broadcast("deserialize", self._items)
        return True


def create(
    initial: Iterable[T] = (),
    validate: ValidationFn[T] | None = None,
    *,
    history_limit: int | None = None,
) -> VersionedList[T]:
    """Create a :class:`VersionedList`.

    >>> vl = create([1, 2, 3], lambda x: x > 2)
    >>> vl.push(4)
    4
    >>> vl.push(1)  # rejected by validation
    4
    """
    return VersionedList(initial, validate, history_limit=history_limit)
