"""Structured operation registry — the dispatch table for deferred commands.

Each :class:`OperationSpec` binds an operation name to a plain function that
invokes it on a container, so replaying a recorded command is a table lookup
rather than attribute reflection.
"""

from __future__ import annotations

import difflib
from dataclasses import dataclass
from typing import Any, Callable

Invoker = Callable[[Any, tuple], Any]


@dataclass
class OperationSpec:
    """Specification for a single named container operation."""

    name: str
    syntax: str
    category: str
    invoke: Invoker
    description: str = ""

    @property
    def mutating(self) -> bool:
        return self.category == "mutation"


class OperationRegistry:
    """Registry of operation specifications keyed by name."""

    def __init__(self) -> None:
        self._operations: list[OperationSpec] = []
        self._map: dict[str, OperationSpec] = {}

    def register(self, spec: OperationSpec) -> None:
        """Register a single operation specification."""
        self._operations.append(spec)
        self._map[spec.name] = spec

    def register_many(self, specs: list[OperationSpec]) -> None:
        for spec in specs:
            self.register(spec)

    def lookup(self, name: str) -> OperationSpec | None:
        return self._map.get(name)

    @property
    def operations(self) -> list[OperationSpec]:
        """All registered specifications (insertion order)."""
        return list(self._operations)

    @property
    def names(self) -> list[str]:
        return [spec.name for spec in self._operations]

    def suggest(self, name: str) -> str | None:
        """Closest registered name to *name*, or None if nothing is close."""
        return suggest(name, self.names)


def suggest(input_str: str, candidates: list[str]) -> str | None:
    """Find the closest match for *input_str* among *candidates*.

    Uses difflib's SequenceMatcher for fuzzy matching. Returns the best
    match if the similarity ratio is above 0.6, otherwise None.
    """
    if not candidates:
        return None
    matches = difflib.get_close_matches(input_str, candidates, n=1, cutoff=0.6)
    return matches[0] if matches else None


def _mutation(name: str, syntax: str, invoke: Invoker) -> OperationSpec:
    return OperationSpec(name=name, syntax=syntax, category="mutation", invoke=invoke)


def _query(name: str, syntax: str, invoke: Invoker) -> OperationSpec:
    return OperationSpec(name=name, syntax=syntax, category="query", invoke=invoke)


SEQUENCE_OPERATIONS: list[OperationSpec] = [
    # Mutations
    _mutation("push", "push ITEM...", lambda c, a: c.push(*a)),
    _mutation("batch_push", "batch_push ITEMS", lambda c, a: c.batch_push(*a)),
    _mutation("pop", "pop", lambda c, a: c.pop(*a)),
    _mutation("shift", "shift", lambda c, a: c.shift(*a)),
    _mutation("unshift", "unshift ITEM...", lambda c, a: c.unshift(*a)),
    _mutation("splice", "splice START [COUNT] [ITEM...]", lambda c, a: c.splice(*a)),
    _mutation("reverse", "reverse", lambda c, a: c.reverse(*a)),
    _mutation("sort", "sort [COMPARE]", lambda c, a: c.sort(*a)),
    _mutation("fill", "fill VALUE [START] [END]", lambda c, a: c.fill(*a)),
    _mutation("copy_within", "copy_within TARGET [START] [END]", lambda c, a: c.copy_within(*a)),
    # Queries
    _query("get_items", "get_items", lambda c, a: c.get_items(*a)),
    _query("search", "search QUERY", lambda c, a: c.search(*a)),
    _query("includes", "includes VALUE", lambda c, a: c.includes(*a)),
    _query("index_of", "index_of VALUE [START]", lambda c, a: c.index_of(*a)),
    _query("last_index_of", "last_index_of VALUE", lambda c, a: c.last_index_of(*a)),
    _query("slice", "slice [START] [END]", lambda c, a: c.slice(*a)),
    _query("find", "find PREDICATE", lambda c, a: c.find(*a)),
    _query("find_index", "find_index PREDICATE", lambda c, a: c.find_index(*a)),
    _query("every", "every PREDICATE", lambda c, a: c.every(*a)),
    _query("some", "some PREDICATE", lambda c, a: c.some(*a)),
    _query("for_each", "for_each FN", lambda c, a: c.for_each(*a)),
    _query("filter", "filter PREDICATE", lambda c, a: c.filter(*a)),
    _query("reduce", "reduce FN [INITIAL]", lambda c, a: c.reduce(*a)),
    _query("reduce_right", "reduce_right FN [INITIAL]", lambda c, a: c.reduce_right(*a)),
    _query("join", "join [SEPARATOR]", lambda c, a: c.join(*a)),
    _query("concat", "concat ITEMS...", lambda c, a: c.concat(*a)),
    _query("serialize", "serialize", lambda c, a: c.serialize(*a)),
]

DEFAULT_REGISTRY = OperationRegistry()
DEFAULT_REGISTRY.register_many(SEQUENCE_OPERATIONS)
