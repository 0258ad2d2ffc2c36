"""
Wegesa Users Engine — Records
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class Role(Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    OPERATION = "OPERATION"
    STORE_KEEPER = "STORE_KEEPER"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()


@dataclass(frozen=True)
class User:
    user_id: str
    name: str
    email: str
    role: Role
    is_active: bool = True

    def __post_init__(self):
        if not self.user_id or not isinstance(self.user_id, str):
            raise ValueError("user_id must be a non-empty string.")
        if not self.name or not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("name must be a non-empty string.")
        if not isinstance(self.email, str) or not _EMAIL_RE.match(self.email):
            raise ValueError(f"email '{self.email}' is not a valid address.")
        if not isinstance(self.role, Role):
            raise ValueError("role must be Role enum.")
        if not isinstance(self.is_active, bool):
            raise ValueError("is_active must be a boolean.")

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "is_active": self.is_active,
        }
