"""Live element sequence with an optional admission predicate.

Every mutating method finishes its change and then calls the ``on_change``
hook with the method's event tag before returning. Read-only methods never
call the hook.

Index arguments follow the usual array conventions: negative values count
from the end, and anything past either end is clamped.
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")

ValidationFn = Callable[[T], bool]

_MISSING: Any = object()


def _clamp(index: int, length: int) -> int:
    if index < 0:
        return max(length + index, 0)
    return min(index, length)


class ValidatedSequence(Generic[T]):
    """Ordered, duplicate-friendly sequence of caller-defined elements."""

    def __init__(
        self,
        initial: Iterable[T] = (),
        validate: ValidationFn[T] | None = None,
        *,
        on_change: Callable[[str], None] | None = None,
    ) -> None:
        self._items: list[T] = list(initial)
        self._validate = validate
        self._on_change = on_change

    # -- internal --------------------------------------------------------

    def _changed(self, event: str) -> None:
        if self._on_change is not None:
            self._on_change(event)

    def _admit(self, items: Iterable[T]) -> list[T]:
        if self._validate is None:
            return list(items)
        return [item for item in items if self._validate(item)]

    def snapshot(self) -> list[T]:
        """Fresh copy of the live items."""
        return list(self._items)

    def replace(self, items: Iterable[T]) -> None:
        """Install a copy of *items* as the live items without notifying."""
        self._items = list(items)

    # -- admission -------------------------------------------------------

    def set_validation(self, fn: ValidationFn[T] | None) -> None:
        """Replace the admission predicate. Existing items are untouched."""
        self._validate = fn

    def push(self, *items: T) -> int:
        """Append the items that pass validation. Returns the new length."""
        self._items.extend(self._admit(items))
        self._changed("add")
        return len(self._items)

    def batch_push(self, items: Iterable[T]) -> int:
        self._items.extend(self._admit(items))
        self._changed("batchAdd")
        return len(self._items)

    # -- mutation --------------------------------------------------------

    def pop(self) -> T | None:
        """Remove and return the last element, or None when empty."""
        item = self._items.pop() if self._items else None
        self._changed("remove")
        return item

    def shift(self) -> T | None:
        """Remove and return the first element, or None when empty."""
        item = self._items.pop(0) if self._items else None
        self._changed("shift")
        return item

    def unshift(self, *items: T) -> int:
        self._items[0:0] = items
        self._changed("unshift")
        return len(self._items)

    def splice(self, start: int, delete_count: int | None = None, *items: T) -> list[T]:
        """Remove *delete_count* elements at *start* and insert *items* there.

        With ``delete_count=None`` everything from *start* on is removed.
        Returns the removed elements.
        """
        length = len(self._items)
        begin = _clamp(start, length)
        if delete_count is None:
            count = length - begin
        else:
            count = min(max(delete_count, 0), length - begin)
        removed = self._items[begin : begin + count]
        self._items[begin : begin + count] = items
        self._changed("splice")
        return removed

    def reverse(self) -> list[T]:
        self._items.reverse()
        self._changed("reverse")
        return self.snapshot()

    def sort(
        self,
        compare: Callable[[T, T], int] | None = None,
        *,
        key: Callable[[T], Any] | None = None,
        reverse: bool = False,
    ) -> list[T]:
        """Stable in-place sort.

        *compare* is a two-argument comparator returning a negative, zero or
        positive number; it takes precedence over *key*.
        """
        if compare is not None:
            key = functools.cmp_to_key(compare)
        self._items.sort(key=key, reverse=reverse)
        self._changed("sort")
        return self.snapshot()

    def fill(self, value: T, start: int = 0, end: int | None = None) -> list[T]:
        length = len(self._items)
        begin = _clamp(start, length)
        stop = length if end is None else _clamp(end, length)
        for idx in range(begin, stop):
            self._items[idx] = value
        self._changed("fill")
        return self.snapshot()

    def copy_within(self, target: int, start: int = 0, end: int | None = None) -> list[T]:
        """Copy ``[start, end)`` over the elements starting at *target*.

        The length never changes; whatever would land past the end is
        dropped.
        """
        length = len(self._items)
        to = _clamp(target, length)
        begin = _clamp(start, length)
        stop = length if end is None else _clamp(end, length)
        count = min(stop - begin, length - to)
        if count > 0:
            self._items[to : to + count] = self._items[begin : begin + count]
        self._changed("copyWithin")
        return self.snapshot()

    # -- queries ---------------------------------------------------------

    def get_items(self) -> list[T]:
        return self.snapshot()

    def search(self, query: Callable[[T], bool]) -> list[T]:
        return [item for item in self._items if query(item)]

    def includes(self, value: T) -> bool:
        return value in self._items

    def index_of(self, value: T, start: int = 0) -> int:
        """Position of the first *value* at or after *start*, or -1."""
        begin = _clamp(start, len(self._items))
        for idx in range(begin, len(self._items)):
            if self._items[idx] == value:
                return idx
        return -1

    def last_index_of(self, value: T) -> int:
        for idx in range(len(self._items) - 1, -1, -1):
            if self._items[idx] == value:
                return idx
        return -1

    def slice(self, start: int | None = None, end: int | None = None) -> list[T]:
        return self._items[start:end]

    def find(self, predicate: Callable[[T], bool]) -> T | None:
        for item in self._items:
            if predicate(item):
                return item
        return None

    def find_index(self, predicate: Callable[[T], bool]) -> int:
        for idx, item in enumerate(self._items):
            if predicate(item):
                return idx
        return -1

    def every(self, predicate: Callable[[T], bool]) -> bool:
        return all(predicate(item) for item in self._items)

    def some(self, predicate: Callable[[T], bool]) -> bool:
        return any(predicate(item) for item in self._items)

    def for_each(self, fn: Callable[[T], Any]) -> None:
        for item in self.snapshot():
            fn(item)

    def filter(self, predicate: Callable[[T], bool]) -> list[T]:
        return self.search(predicate)

    def reduce(self, fn: Callable[[Any, T], Any], initial: Any = _MISSING) -> Any:
        """Left fold. Raises TypeError on an empty sequence with no *initial*."""
        if initial is _MISSING:
            return functools.reduce(fn, self._items)
        return functools.reduce(fn, self._items, initial)

    def reduce_right(self, fn: Callable[[Any, T], Any], initial: Any = _MISSING) -> Any:
        backwards = list(reversed(self._items))
        if initial is _MISSING:
            return functools.reduce(fn, backwards)
        return functools.reduce(fn, backwards, initial)

    def join(self, separator: str = ",") -> str:
        return separator.join("" if item is None else str(item) for item in self._items)

    def concat(self, *others: Iterable[T]) -> list[T]:
        result = self.snapshot()
        for other in others:
            result.extend(other)
        return result

    # -- protocol --------------------------------------------------------

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.snapshot())

    def __contains__(self, value: object) -> bool:
        return value in self._items

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"
