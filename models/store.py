"""Thread-safe in-memory record store."""

import threading
from typing import Callable, Generic, Iterable, Optional, TypeVar

from pydantic import BaseModel

RecordT = TypeVar("RecordT", bound=BaseModel)


class InMemoryStore(Generic[RecordT]):
    """Keeps records by ID and serializes writes to the same record.

    Records are stored and returned as deep copies, so callers can never
    change stored state without going through ``save`` or ``modify``.

    Args:
        not_found: Exception class raised with the record ID on missing lookups.
    """

    def __init__(self, not_found: Callable[[str], Exception]):
        self._not_found = not_found
        self._records: dict[str, RecordT] = {}
        self._lock = threading.Lock()
        self._record_locks: dict[str, threading.Lock] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def _record_lock(self, record_id: str) -> threading.Lock:
        with self._lock:
            lock = self._record_locks.get(record_id)
            if lock is None:
                lock = self._record_locks[record_id] = threading.Lock()
            return lock

    def get(self, record_id: str) -> RecordT:
        """Fetch a record by ID.

        Raises:
            The store's not-found exception if the ID is unknown.
        """
        record = self.find(record_id)
        if record is None:
            raise self._not_found(record_id)
        return record

    def find(self, record_id: str) -> Optional[RecordT]:
        """Fetch a record by ID, or None if it does not exist."""
        with self._lock:
            record = self._records.get(record_id)
        return record.model_copy(deep=True) if record is not None else None

    def all(self) -> list[RecordT]:
        """Return copies of all records in insertion order."""
        with self._lock:
            records = list(self._records.values())
        return [record.model_copy(deep=True) for record in records]

    def save(self, record: RecordT) -> RecordT:
        """Insert or replace a record, keyed by its ``id``."""
        with self._record_lock(record.id):
            with self._lock:
                self._records[record.id] = record.model_copy(deep=True)
        return record

    def insert(
        self,
        record: RecordT,
        check: Optional[Callable[[RecordT, Iterable[RecordT]], None]] = None,
    ) -> RecordT:
        """Add a record after checking it against every stored record.

        ``check`` and the write happen under the store lock, so no other
        ``insert`` or ``modify`` can slip a conflicting record in between.

        Args:
            record: The new record.
            check: Called with the record and the stored records; raises to
                refuse the insert.
        """
        with self._record_lock(record.id):
            with self._lock:
                if check is not None:
                    check(record, self._others(record.id))
                self._records[record.id] = record.model_copy(deep=True)
        return record

    def modify(
        self,
        record_id: str,
        update: Callable[[RecordT], RecordT],
        check: Optional[Callable[[RecordT, Iterable[RecordT]], None]] = None,
    ) -> RecordT:
        """Read, transform and write back one record under its lock.

        Concurrent ``modify`` calls on the same record run one after another,
        so each sees the result of the previous one.

        Args:
            record_id: ID of the record to change.
            update: Function receiving a copy of the record and returning the
                new version.
            check: Optional check run on the new version and the other stored
                records under the store lock, as in ``insert``.

        Returns:
            The stored new version.

        Raises:
            The store's not-found exception if the ID is unknown.
        """
        with self._record_lock(record_id):
            current = self.get(record_id)
            updated = update(current)
            with self._lock:
                if check is not None:
                    check(updated, self._others(record_id))
                self._records[record_id] = updated.model_copy(deep=True)
            return updated

    def _others(self, record_id: str) -> list[RecordT]:
        return [r for rid, r in self._records.items() if rid != record_id]

    def delete(self, record_id: str) -> RecordT:
        """Remove a record and return it.

        Raises:
            The store's not-found exception if the ID is unknown.
        """
        with self._record_lock(record_id):
            with self._lock:
                record = self._records.pop(record_id, None)
                self._record_locks.pop(record_id, None)
        if record is None:
            raise self._not_found(record_id)
        return record

    def clear(self) -> None:
        """Remove all records."""
        with self._lock:
            self._records.clear()
            self._record_locks.clear()
