"""
Wegesa Core Store — Entity Collection
=======================================
Flat mapping-by-id over frozen dataclass records.

Rules:
- Records are frozen; update() swaps in a dataclasses.replace() copy,
  so the record's own __post_init__ validation runs on every edit
- Id field and any declared read-only fields cannot be patched
- Insertion order is preserved for listing
"""

from __future__ import annotations

import dataclasses
from typing import Any, Callable, Dict, Generic, Iterable, List, Mapping, Optional, TypeVar

from core.store.errors import DuplicateIdError, NotFoundError, PatchError

T = TypeVar("T")


class EntityCollection(Generic[T]):
    """
    Id-keyed store for one entity type.

    Args:
        entity:     Human-readable name used in error messages ("Item").
        id_field:   Name of the dataclass field holding the id.
        read_only:  Extra fields that update() must refuse.
    """

    def __init__(
        self,
        entity: str,
        id_field: str,
        read_only: Iterable[str] = (),
    ) -> None:
        self._entity = entity
        self._id_field = id_field
        self._read_only = frozenset(read_only) | {id_field}
        self._records: Dict[str, T] = {}

    @property
    def entity(self) -> str:
        return self._entity

    def _id_of(self, record: T) -> str:
        return getattr(record, self._id_field)

    # ── Writes ────────────────────────────────────────────────

    def add(self, record: T) -> T:
        record_id = self._id_of(record)
        if record_id in self._records:
            raise DuplicateIdError(self._entity, record_id)
        self._records[record_id] = record
        return record

    def replace(self, record: T) -> T:
        """Store a new version of an existing record."""
        record_id = self._id_of(record)
        if record_id not in self._records:
            raise NotFoundError(self._entity, record_id)
        self._records[record_id] = record
        return record

    def update(
        self,
        record_id: str,
        patch: Mapping[str, Any],
        *,
        extra: Optional[Mapping[str, Any]] = None,
    ) -> T:
        """
        Apply a partial patch and return the new record.

        `extra` carries system-set fields (e.g. updated_at) that bypass
        the read-only check.
        """
        current = self.get(record_id)
        field_names = {f.name for f in dataclasses.fields(current)}
        unknown = set(patch) - field_names
        blocked = set(patch) & self._read_only
        if unknown or blocked:
            raise PatchError(self._entity, unknown | blocked)

        changes = dict(patch)
        if extra:
            changes.update(extra)
        updated = dataclasses.replace(current, **changes)
        self._records[record_id] = updated
        return updated

    def delete(self, record_id: str) -> T:
        if record_id not in self._records:
            raise NotFoundError(self._entity, record_id)
        return self._records.pop(record_id)

    # ── Reads ─────────────────────────────────────────────────

    def get(self, record_id: str) -> T:
        try:
            return self._records[record_id]
        except KeyError:
            raise NotFoundError(self._entity, record_id) from None

    def find(self, record_id: str) -> Optional[T]:
        return self._records.get(record_id)

    def list(self, predicate: Optional[Callable[[T], bool]] = None) -> List[T]:
        if predicate is None:
            return list(self._records.values())
        return [r for r in self._records.values() if predicate(r)]

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def __len__(self) -> int:
        return len(self._records)
