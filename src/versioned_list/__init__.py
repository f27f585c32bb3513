"""Versioned list — a sequence with validation, undo/redo history and checkpoints."""

from versioned_list.core import VersionedList, create
from versioned_list.errors import (
    HistoryIndexError,
    ParseError,
    UnknownOperationError,
    VersionedListError,
)
from versioned_list.history import HistoryStore
from versioned_list.lazy import Command, LazyChain
from versioned_list.listeners import Listener, NotificationHub
from versioned_list.models import Checkpoint, HistoryEntry
from versioned_list.operations import (
    DEFAULT_REGISTRY,
    OperationRegistry,
    OperationSpec,
    suggest,
)
from versioned_list.sequence import ValidatedSequence
from versioned_list.serialization import deep_flatten, entries_to_csv

__all__ = [
    # Facade
    "VersionedList",
    "create",
    # Sequence
    "ValidatedSequence",
    # History
    "HistoryStore",
    "HistoryEntry",
    "Checkpoint",
    # Listeners
    "Listener",
    "NotificationHub",
    # Deferred chain
    "LazyChain",
    "Command",
    "OperationSpec",
    "OperationRegistry",
    "DEFAULT_REGISTRY",
    "suggest",
    # Serialization
    "deep_flatten",
    "entries_to_csv",
    # Errors
    "VersionedListError",
    "ParseError",
    "HistoryIndexError",
    "UnknownOperationError",
]
