"""Synchronous observer registry.

Listeners are called in registration order with an event tag and a
payload. Each listener receives its own one-level copy of the payload so
that one observer cannot alter what the next one sees; element values are
shared. Exceptions raised by a listener propagate to the caller and skip
the remaining listeners.
"""

from __future__ import annotations

from typing import Any, Callable

from versioned_list.models import Checkpoint, HistoryEntry

Listener = Callable[[str, Any], None]

_NO_INITIAL: Any = object()


def _detach(payload: Any) -> Any:
    match payload:
        case HistoryEntry() | Checkpoint():
            return payload.copy()
        case list() | tuple():
            return [_detach_member(p) for p in payload]
        case _:
            return payload


def _detach_member(value: Any) -> Any:
    # Elements are shared, only snapshot records get fresh containers.
    if isinstance(value, (HistoryEntry, Checkpoint)):
        return value.copy()
    return value


class NotificationHub:
    """Registry of listeners with ordered, synchronous broadcast."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def __len__(self) -> int:
        return len(self._listeners)

    def subscribe(
        self, listener: Listener, initial: Any = _NO_INITIAL
    ) -> Callable[[], None]:
        """Register *listener* and return a function that removes it.

        If *initial* is given, the listener is called once right away with
        ``"initialize"`` and a copy of it.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            self.unsubscribe(listener)

        if initial is not _NO_INITIAL:
            listener("initialize", _detach(initial))
        return unsubscribe

    def unsubscribe(self, listener: Listener) -> bool:
        """Remove *listener*. Returns False if it was not registered."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        return True

    def broadcast(self, event: str, payload: Any) -> None:
        """Invoke every listener with *event* and a copy of *payload*.

        The payload is captured once up front, so a listener that mutates
        the container does not change what later listeners receive for
        this event.
        """
        captured = _detach(payload)
        for listener in list(self._listeners):
            listener(event, _detach(captured))
