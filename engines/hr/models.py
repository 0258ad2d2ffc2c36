"""
Wegesa HR Engine — Records
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional

from core.time import ensure_aware


class Gender(Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"


@dataclass(frozen=True)
class Employee:
    """
    Contracted staff member.

    Invariant: contract_end_date >= contract_start_date.
    """
    employee_id: str
    full_name: str
    date_of_birth: date
    gender: Gender
    position: str
    mobile_contact: str
    contract_start_date: date
    contract_end_date: date
    created_at: datetime
    updated_at: datetime
    is_active: bool = True
    photo_url: Optional[str] = None

    def __post_init__(self):
        for field_name in ("employee_id", "full_name", "position", "mobile_contact"):
            value = getattr(self, field_name)
            if not value or not isinstance(value, str) or not value.strip():
                raise ValueError(f"{field_name} must be a non-empty string.")
        if not isinstance(self.gender, Gender):
            raise ValueError("gender must be Gender enum.")
        for field_name in ("date_of_birth", "contract_start_date", "contract_end_date"):
            if not isinstance(getattr(self, field_name), date):
                raise ValueError(f"{field_name} must be a date.")
        if self.contract_end_date < self.contract_start_date:
            raise ValueError("contract_end_date must not precede contract_start_date.")
        if self.date_of_birth >= self.contract_start_date:
            raise ValueError("date_of_birth must precede contract_start_date.")
        ensure_aware(self.created_at, "created_at")
        ensure_aware(self.updated_at, "updated_at")

    def contract_expires_within(self, days: int, today: date) -> bool:
        remaining = (self.contract_end_date - today).days
        return 0 <= remaining <= days

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "full_name": self.full_name,
            "date_of_birth": self.date_of_birth.isoformat(),
            "gender": self.gender.value,
            "position": self.position,
            "mobile_contact": self.mobile_contact,
            "photo_url": self.photo_url,
            "contract_start_date": self.contract_start_date.isoformat(),
            "contract_end_date": self.contract_end_date.isoformat(),
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
