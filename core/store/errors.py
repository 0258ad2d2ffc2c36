"""
Wegesa Core Store — Errors
============================
Error types for the id-keyed entity collections.
"""


class StoreError(Exception):
    """Base error for collection operations."""
    pass


class NotFoundError(StoreError):
    """No record with this id in the collection."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} '{entity_id}' not found.")


class DuplicateIdError(StoreError):
    """A record with this id already exists."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} '{entity_id}' already exists.")


class PatchError(StoreError):
    """Patch names a field the entity does not have, or one that is read-only."""

    def __init__(self, entity: str, fields):
        self.entity = entity
        self.fields = tuple(sorted(fields))
        super().__init__(
            f"Cannot patch {entity} field(s): {', '.join(self.fields)}."
        )
