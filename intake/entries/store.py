"""Ordered, position-addressed storage for accepted entries of one document kind."""
from __future__ import annotations

import logging
from typing import Iterator, List, Tuple

from intake.core.models import DocumentKind, Entry

logger = logging.getLogger(__name__)


class EntryListStore:
    """Holds the entries of one kind in insertion order.

    An entry has no identity beyond its current index; removing an entry
    shifts every later entry down by one.
    """

    def __init__(self, kind: DocumentKind):
        self.kind = kind
        self._entries: List[Entry] = []

    def append(self, entry: Entry) -> None:
        if entry.kind is not self.kind:
            raise TypeError(f"cannot add {entry.kind.value} entry to {self.kind.value} list")
        self._entries.append(entry)
        logger.debug("Added %s entry #%d (%s)", self.kind.value, len(self._entries) - 1, entry.file.name)

    def remove_at(self, index: int) -> Entry:
        """Remove and return the entry at ``index``.

        Raises ``IndexError`` for anything outside ``[0, size)``; negative
        indices are not accepted.
        """

        if not 0 <= index < len(self._entries):
            raise IndexError(
                f"{self.kind.value} entry index {index} out of range (size {len(self._entries)})"
            )
        removed = self._entries.pop(index)
        logger.debug("Removed %s entry #%d (%s)", self.kind.value, index, removed.file.name)
        return removed

    def size(self) -> int:
        return len(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def snapshot(self) -> Tuple[Entry, ...]:
        """Freeze the current order for a submission."""

        return tuple(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(list(self._entries))

    def __getitem__(self, index: int) -> Entry:
        return self._entries[index]
