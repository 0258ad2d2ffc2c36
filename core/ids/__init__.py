"""
Wegesa Core Ids
=================
Opaque short identifiers for every stored record.
"""

from core.ids.provider import IdProvider, RandomIdProvider, SequenceIdProvider

__all__ = [
    "IdProvider",
    "RandomIdProvider",
    "SequenceIdProvider",
]
