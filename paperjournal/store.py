# -*- coding: utf-8 -*-
"""In-memory entry storage for PaperJournal.

Entries live for the lifetime of the process only. Order is purely
positional: new entries are prepended, updates keep their slot, and
nothing is ever re-sorted by date.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Tuple

from loguru import logger

from .paper import PaperConfig


# ---------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------

class StoreError(Exception):
    """Base class for entry store failures."""


class DuplicateIdError(StoreError):
    def __init__(self, entry_id: int) -> None:
        super().__init__(f"Entry {entry_id} already exists")
        self.entry_id = entry_id


class NotFoundError(StoreError):
    def __init__(self, entry_id: int) -> None:
        super().__init__(f"Entry {entry_id} not found")
        self.entry_id = entry_id


# ---------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------

@dataclass(frozen=True)
class Entry:
    """A saved journal entry with its own paper config snapshot."""

    id: int
    title: str
    content: str
    date: str
    config: PaperConfig


class EntryStore:
    """Ordered, in-memory collection of entries (newest created first)."""

    def __init__(self) -> None:
        self._entries: List[Entry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        return any(e.id == entry_id for e in self._entries)

    def _index(self, entry_id: int) -> int:
        for i, e in enumerate(self._entries):
            if e.id == entry_id:
                return i
        raise NotFoundError(entry_id)

    def create(self, entry: Entry) -> Entry:
        """Prepend *entry*; its id must be new."""
        if entry.id in self:
            raise DuplicateIdError(entry.id)
        self._entries.insert(0, entry)
        logger.info(f"Created entry {entry.id} ({len(self._entries)} total)")
        return entry

    def update(self, entry_id: int, **changes) -> Entry:
        """Replace fields of *entry_id* in place and return the new entry."""
        if "id" in changes and changes["id"] != entry_id:
            raise ValueError("Entry id cannot change")
        i = self._index(entry_id)
        updated = replace(self._entries[i], **changes)
        self._entries[i] = updated
        logger.info(f"Updated entry {entry_id} at position {i}")
        return updated

    def remove(self, entry_id: int) -> None:
        """Drop *entry_id*; absent ids are ignored."""
        before = len(self._entries)
        self._entries = [e for e in self._entries if e.id != entry_id]
        if len(self._entries) != before:
            logger.info(f"Removed entry {entry_id}")

    def get(self, entry_id: int) -> Entry:
        return self._entries[self._index(entry_id)]

    def list(self) -> Tuple[Entry, ...]:
        return tuple(self._entries)
