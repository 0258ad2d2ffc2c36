"""
Wegesa Core Store — Public API
================================
Uniform create / patch / delete over id-keyed collections.
"""

from core.store.collection import EntityCollection
from core.store.errors import DuplicateIdError, NotFoundError, PatchError, StoreError
from core.store.service import CrudService

__all__ = [
    "EntityCollection",
    "CrudService",
    "StoreError",
    "NotFoundError",
    "DuplicateIdError",
    "PatchError",
]
