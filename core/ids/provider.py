"""
Wegesa Core Ids — Id Providers
================================
Ids are opaque short strings. Uniqueness is assumed per store;
collections still refuse a duplicate id if one is ever produced.
"""

from __future__ import annotations

import itertools
import secrets
import string
from typing import Protocol

_ALPHABET = string.digits + string.ascii_lowercase
DEFAULT_ID_LENGTH = 8


class IdProvider(Protocol):
    def new_id(self) -> str:
        ...


class RandomIdProvider:
    """Random base36 ids, e.g. 'k3v9q0xa'."""

    def __init__(self, length: int = DEFAULT_ID_LENGTH) -> None:
        if length < 4:
            raise ValueError("id length must be at least 4.")
        self._length = length

    def new_id(self) -> str:
        return "".join(secrets.choice(_ALPHABET) for _ in range(self._length))


class SequenceIdProvider:
    """Deterministic ids for tests: '<prefix>1', '<prefix>2', ..."""

    def __init__(self, prefix: str = "id") -> None:
        self._prefix = prefix
        self._counter = itertools.count(1)

    def new_id(self) -> str:
        return f"{self._prefix}{next(self._counter)}"
