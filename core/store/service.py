"""
Wegesa Core Store — CRUD Service Base
=======================================
Shared create / patch / delete plumbing for the plain record
engines (users, HR, finance, bookings).

Subclasses declare the collection shape and build records; this
base assigns ids, stamps created_at / updated_at from the injected
clock, and logs each write.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from datetime import datetime
from typing import Any, Callable, ClassVar, Dict, Generic, List, Mapping, Optional, Tuple, TypeVar

from core.ids import IdProvider, RandomIdProvider
from core.store.collection import EntityCollection
from core.time import Clock, SystemClock

T = TypeVar("T")


class CrudService(Generic[T]):
    """
    Class attributes set by subclasses:
        record_type:    The frozen dataclass stored.
        entity_name:    "Employee", "Invoice", ...
        id_field:       Name of the id field on the record.
        read_only:      Fields callers may never patch.
        logger_name:    Dotted logger name, e.g. "wegesa.hr".
    """

    record_type: ClassVar[type]
    entity_name: ClassVar[str] = ""
    id_field: ClassVar[str] = ""
    read_only: ClassVar[Tuple[str, ...]] = ("created_at", "updated_at")
    logger_name: ClassVar[str] = "wegesa.store"

    def __init__(
        self,
        *,
        clock: Clock | None = None,
        id_provider: IdProvider | None = None,
    ):
        self._clock = clock or SystemClock()
        self._ids = id_provider or RandomIdProvider()
        self._records: EntityCollection[T] = EntityCollection(
            self.entity_name, self.id_field, read_only=self.read_only,
        )
        self._lock = threading.RLock()
        self._logger = logging.getLogger(self.logger_name)

    # ── Hooks ─────────────────────────────────────────────────

    def _coerce_patch(self, patch: Dict[str, Any]) -> Dict[str, Any]:
        """Convert wire values (enum strings, ISO dates) to record types."""
        return patch

    def _has_field(self, name: str) -> bool:
        return any(f.name == name for f in dataclasses.fields(self.record_type))

    # ── Writes ────────────────────────────────────────────────

    def _create(self, build: Callable[[str, datetime], T]) -> T:
        """build(new_id, now) must return a fully validated record."""
        with self._lock:
            record = build(self._ids.new_id(), self._clock.now_utc())
            self._records.add(record)
            self._logger.info(
                f"{self.entity_name} {getattr(record, self.id_field)} created"
            )
            return record

    def update(self, record_id: str, patch: Mapping[str, Any]) -> T:
        """Partial patch; the patched record is re-validated."""
        changes = self._coerce_patch(dict(patch))
        with self._lock:
            extra = None
            if self._has_field("updated_at"):
                extra = {"updated_at": self._clock.now_utc()}
            record = self._records.update(record_id, changes, extra=extra)
            self._logger.info(
                f"{self.entity_name} {record_id} updated: {sorted(changes)}"
            )
            return record

    def delete(self, record_id: str) -> T:
        with self._lock:
            record = self._records.delete(record_id)
            self._logger.info(f"{self.entity_name} {record_id} deleted")
            return record

    # ── Reads ─────────────────────────────────────────────────

    def get(self, record_id: str) -> T:
        with self._lock:
            return self._records.get(record_id)

    def find(self, record_id: str) -> Optional[T]:
        with self._lock:
            return self._records.find(record_id)

    def list(self, predicate: Optional[Callable[[T], bool]] = None) -> List[T]:
        with self._lock:
            return self._records.list(predicate)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
