"""
Entry Store - the canonical list of work entries.

Architecture Decision: Observer Pattern (Qt Signals)
The store owns the in-memory list and its durable copy. It knows nothing about
the UI or the remote mirror; it emits signals when things change:

- ``changed`` after any change (UI refresh)
- ``mutated`` after a local create/update/delete only (triggers a push)

A mutation is written to disk before it becomes the in-memory state, so when
saving fails the StorageError reaches the caller and memory still matches disk.
"""

import logging
from typing import Iterable, List, Optional

from PySide6.QtCore import QObject, Signal

from worklog.domain.models import Entry
from worklog.domain.timecalc import new_entry_id
from worklog.infra.repository import EntryRepository

logger = logging.getLogger(__name__)


class EntryStore(QObject):
    """
    In-memory + durable collection of entries.
    """

    changed = Signal()
    mutated = Signal(object)  # List[Entry] after the mutation

    def __init__(self, repository: Optional[EntryRepository] = None):
        super().__init__()
        self.repository = repository or EntryRepository()
        self._entries: List[Entry] = []

    @property
    def entries(self) -> List[Entry]:
        """Snapshot of the current entries"""
        return list(self._entries)

    def get(self, entry_id: str) -> Optional[Entry]:
        return next((e for e in self._entries if e.id == entry_id), None)

    def load(self) -> bool:
        """
        Replace the in-memory list with the durable copy.

        Returns False (and keeps the current list) if there is no readable copy.
        """
        entries = self.repository.load_entries()
        if entries is None:
            return False
        self._entries = entries
        logger.debug(f"Loaded {len(entries)} entries")
        self.changed.emit()
        return True

    def persist(self) -> None:
        """Write the in-memory list; StorageError propagates"""
        self.repository.save_entries(self._entries)

    def create(self, entry: Entry) -> Entry:
        """Append with a fresh id, persist, notify"""
        taken = {e.id for e in self._entries}
        entry_id = new_entry_id()
        while entry_id in taken:
            entry_id = new_entry_id()

        created = Entry(id=entry_id, date=entry.date, from_=entry.from_, to=entry.to)
        self._commit(self._entries + [created])
        return created

    def update(self, entry_id: str, date: str, time_from: str, time_to: str) -> Optional[Entry]:
        """Replace date/from/to of an existing entry; None if the id is unknown"""
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                updated = entry.with_times(date, time_from, time_to)
                entries = list(self._entries)
                entries[index] = updated
                self._commit(entries)
                return updated
        return None

    def delete(self, entry_id: str) -> int:
        return self.delete_many([entry_id])

    def delete_many(self, entry_ids: Iterable[str]) -> int:
        """Remove all matching entries; returns how many were removed"""
        doomed = set(entry_ids)
        kept = [e for e in self._entries if e.id not in doomed]
        removed = len(self._entries) - len(kept)
        self._commit(kept)
        return removed

    def replace_all(self, entries: List[Entry]) -> None:
        """
        Overwrite everything with another collection (used by a successful pull).

        Does not emit ``mutated``: a pulled state is never pushed back.
        """
        entries = list(entries)
        self.repository.save_entries(entries)
        self._entries = entries
        self.changed.emit()

    def _commit(self, entries: List[Entry]) -> None:
        self.repository.save_entries(entries)
        self._entries = entries
        self.changed.emit()
        self.mutated.emit(self.entries)
