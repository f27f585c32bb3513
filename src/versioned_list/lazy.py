"""Deferred command chain.

Commands are recorded without being checked and replayed in order on
:meth:`LazyChain.evaluate`. An unknown operation name only fails at that
point.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from versioned_list.errors import UnknownOperationError
from versioned_list.operations import DEFAULT_REGISTRY, OperationRegistry


@dataclass
class Command:
    """One recorded call: operation name plus positional arguments."""

    method: str
    args: tuple = field(default_factory=tuple)


class LazyChain:
    """Records operations against *target* and runs them on demand.

    ``vl.lazy().then("push", 5).then("pop").evaluate()`` pushes 5, pops it
    again and returns 5.
    """

    def __init__(self, target: Any, registry: OperationRegistry = DEFAULT_REGISTRY) -> None:
        self._target = target
        self._registry = registry
        self._commands: list[Command] = []

    def __len__(self) -> int:
        return len(self._commands)

    @property
    def pending(self) -> list[Command]:
        return list(self._commands)

    def then(self, method: str, *args: Any) -> LazyChain:
        """Queue ``method(*args)`` and return the chain for further calls."""
        self._commands.append(Command(method, args))
        return self

    def evaluate(self) -> Any:
        """Run the queued commands in order and return the last result.

        With nothing queued the result is a copy of the live items. The queue
        is emptied even if a command raises.
        """
        commands, self._commands = self._commands, []
        result = self._target.get_items()
        for command in commands:
            spec = self._registry.lookup(command.method)
            if spec is None:
                raise UnknownOperationError(
                    command.method, self._registry.suggest(command.method)
                )
            result = spec.invoke(self._target, command.args)
        return result
