"""JSON and CSV conversion for live items and history entries.

JSON decoding goes through msgspec with a target type, so the parsed
structure is shape-checked before anything is trusted. CSV output is a flat
delimiter-joined line with no quoting: values containing the delimiter are
ambiguous on the way back.
"""

from __future__ import annotations

from typing import Any, Iterable

import msgspec

from versioned_list.errors import ParseError
from versioned_list.models import HistoryEntry


def to_json(obj: object) -> str:
    """Encode *obj* (items or history entries) to JSON text."""
    return msgspec.json.encode(obj).decode("utf-8")


def items_from_json(data: str | bytes) -> list[Any]:
    """Decode a JSON array of elements.

    Raises
    ------
    ParseError
        If *data* is not valid JSON or not an array.
    """
    try:
        return msgspec.json.decode(data, type=list[Any])
    except msgspec.DecodeError as exc:
        raise ParseError(f"Invalid items: {exc}", raw=_raw_text(data)) from exc


def entries_from_json(data: str | bytes) -> list[HistoryEntry]:
    """Decode a JSON array of history entries.

    Each entry must be an object with an ``items`` array and an optional
    ``checkpoints`` array of ``{items, label}`` objects. An empty array is
    rejected since a history always holds at least one entry.
    """
    try:
        entries = msgspec.json.decode(data, type=list[HistoryEntry])
    except msgspec.DecodeError as exc:
        raise ParseError(f"Invalid history: {exc}", raw=_raw_text(data)) from exc
    if not entries:
        raise ParseError("History must contain at least one entry", raw=_raw_text(data))
    return entries


def deep_flatten(values: Iterable[Any]) -> list[Any]:
    """Flatten nested lists and tuples to any depth, preserving order.

    Uses an explicit stack, so nesting depth is not bounded by the
    interpreter's recursion limit.
    """
    flat: list[Any] = []
    stack = [iter(values)]
    while stack:
        for value in stack[-1]:
            if isinstance(value, (list, tuple)):
                stack.append(iter(value))
                break
            flat.append(value)
        else:
            stack.pop()
    return flat


def entries_to_csv(entries: Iterable[HistoryEntry], delimiter: str = ",") -> str:
    """Join every value held by *entries* into one delimited line.

    Each entry contributes its items followed by the items of each of its
    checkpoints.
    """
    nested: list[Any] = []
    for entry in entries:
        nested.append(entry.items)
        nested.extend(cp.items for cp in entry.checkpoints)
    return delimiter.join(_cell(v) for v in deep_flatten(nested))


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


def _raw_text(data: str | bytes) -> str:
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data
