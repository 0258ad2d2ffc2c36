"""
Wegesa Inventory Engine — Records
===================================
Items, dispatch movements and return records.

RULES:
- Records are frozen; the ledger swaps in validated copies
- 0 <= in_stock <= quantity holds for every Item ever constructed
- Movement lines are fixed at dispatch time and never change
- Status moves forward only: OUT → PARTIAL_RETURN → RETURNED
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from core.time import ensure_aware, is_past


# ══════════════════════════════════════════════════════════════
# ENUMS
# ══════════════════════════════════════════════════════════════

class StoreId(Enum):
    """Physical inventory locations."""
    BOBA = "BOBA"
    MIKOCHENI = "MIKOCHENI"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class MovementStatus(Enum):
    OUT = "OUT"
    PARTIAL_RETURN = "PARTIAL_RETURN"
    RETURNED = "RETURNED"


_STATUS_RANK = {
    MovementStatus.OUT: 0,
    MovementStatus.PARTIAL_RETURN: 1,
    MovementStatus.RETURNED: 2,
}


def derive_status(total_out: int, total_returned: int) -> MovementStatus:
    """Status from cumulative quantities. Nothing returned yet means OUT."""
    if total_returned <= 0:
        return MovementStatus.OUT
    if total_returned >= total_out:
        return MovementStatus.RETURNED
    return MovementStatus.PARTIAL_RETURN


def advance_status(current: MovementStatus, candidate: MovementStatus) -> MovementStatus:
    """Never move a status backwards."""
    if _STATUS_RANK[candidate] < _STATUS_RANK[current]:
        return current
    return candidate


def _require_text(value: Any, field_name: str) -> None:
    if not value or not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field_name} must be a non-empty string.")


# ══════════════════════════════════════════════════════════════
# DISPATCH LINE
# ══════════════════════════════════════════════════════════════

LineLike = Union["DispatchLine", Mapping[str, Any], Tuple[str, int]]


@dataclass(frozen=True)
class DispatchLine:
    """One (item, quantity) pair on a dispatch or a return."""
    item_id: str
    quantity: int

    def __post_init__(self):
        _require_text(self.item_id, "item_id")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError("quantity must be an integer.")
        if self.quantity < 0:
            raise ValueError("quantity must not be negative.")

    @classmethod
    def coerce(cls, value: LineLike) -> DispatchLine:
        if isinstance(value, DispatchLine):
            return value
        if isinstance(value, Mapping):
            return cls(item_id=value["item_id"], quantity=value["quantity"])
        item_id, quantity = value
        return cls(item_id=item_id, quantity=quantity)

    def to_dict(self) -> dict:
        return {"item_id": self.item_id, "quantity": self.quantity}


def coerce_lines(lines: Iterable[LineLike]) -> Tuple[DispatchLine, ...]:
    return tuple(DispatchLine.coerce(line) for line in lines)


def total_quantity(lines: Iterable[DispatchLine]) -> int:
    return sum(line.quantity for line in lines)


# ══════════════════════════════════════════════════════════════
# ITEM
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Item:
    """
    A stock-keeping unit at one store.

    Fields:
        quantity:   Total units owned.
        in_stock:   Units currently on the shelf (quantity minus units out).
    """
    item_id: str
    name: str
    quantity: int
    in_stock: int
    store: StoreId
    date_of_entry: datetime
    brand: Optional[str] = None
    item_type: Optional[str] = None

    def __post_init__(self):
        _require_text(self.item_id, "item_id")
        _require_text(self.name, "name")
        if not isinstance(self.store, StoreId):
            raise ValueError("store must be StoreId enum.")
        for field_name in ("quantity", "in_stock"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{field_name} must be an integer.")
        if self.quantity < 0:
            raise ValueError("quantity must not be negative.")
        if not 0 <= self.in_stock <= self.quantity:
            raise ValueError(
                f"in_stock must be between 0 and quantity ({self.quantity}), "
                f"got {self.in_stock}."
            )
        ensure_aware(self.date_of_entry, "date_of_entry")

    @property
    def out_quantity(self) -> int:
        return self.quantity - self.in_stock

    def to_dict(self) -> dict:
        return {
            "item_id": self.item_id,
            "name": self.name,
            "brand": self.brand,
            "item_type": self.item_type,
            "quantity": self.quantity,
            "in_stock": self.in_stock,
            "store": self.store.value,
            "date_of_entry": self.date_of_entry.isoformat(),
        }


# ══════════════════════════════════════════════════════════════
# MOVEMENT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Movement:
    """
    Record of one dispatch from a store to a customer's event.

    Fields:
        authorized_by_user_id:  Who approved the dispatch.
        issued_by_user_id:      Who handed the items out.
        responsible_person:     On-site contact at the event.
        use_location:           Where the items are used.
    """
    movement_id: str
    created_at: datetime
    store: StoreId
    lines: Tuple[DispatchLine, ...]
    authorized_by_user_id: str
    issued_by_user_id: str
    customer_name: str
    responsible_person: str
    use_location: str
    expected_return_at: datetime
    status: MovementStatus = MovementStatus.OUT

    def __post_init__(self):
        _require_text(self.movement_id, "movement_id")
        if not isinstance(self.store, StoreId):
            raise ValueError("store must be StoreId enum.")
        if not isinstance(self.lines, tuple) or not self.lines:
            raise ValueError("lines must be a non-empty tuple.")
        if not isinstance(self.status, MovementStatus):
            raise ValueError("status must be MovementStatus enum.")
        ensure_aware(self.created_at, "created_at")
        ensure_aware(self.expected_return_at, "expected_return_at")

    @property
    def total_quantity(self) -> int:
        return total_quantity(self.lines)

    def quantity_for(self, item_id: str) -> int:
        return sum(line.quantity for line in self.lines if line.item_id == item_id)

    def is_overdue(self, now: datetime) -> bool:
        """Still fully out and past its expected return date."""
        return self.status is MovementStatus.OUT and is_past(self.expected_return_at, now)

    def to_dict(self) -> dict:
        return {
            "movement_id": self.movement_id,
            "created_at": self.created_at.isoformat(),
            "store": self.store.value,
            "lines": [line.to_dict() for line in self.lines],
            "authorized_by_user_id": self.authorized_by_user_id,
            "issued_by_user_id": self.issued_by_user_id,
            "customer_name": self.customer_name,
            "responsible_person": self.responsible_person,
            "use_location": self.use_location,
            "expected_return_at": self.expected_return_at.isoformat(),
            "status": self.status.value,
        }


# ══════════════════════════════════════════════════════════════
# RETURN RECORD
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ReturnRecord:
    """One return event against a movement. Never edited or deleted."""
    return_id: str
    movement_id: str
    returned_at: datetime
    lines: Tuple[DispatchLine, ...]
    received_by_user_id: str

    def __post_init__(self):
        _require_text(self.return_id, "return_id")
        _require_text(self.movement_id, "movement_id")
        _require_text(self.received_by_user_id, "received_by_user_id")
        ensure_aware(self.returned_at, "returned_at")

    @property
    def total_quantity(self) -> int:
        return total_quantity(self.lines)

    def to_dict(self) -> dict:
        return {
            "return_id": self.return_id,
            "movement_id": self.movement_id,
            "returned_at": self.returned_at.isoformat(),
            "lines": [line.to_dict() for line in self.lines],
            "received_by_user_id": self.received_by_user_id,
        }


# ══════════════════════════════════════════════════════════════
# REQUESTS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class DispatchRequest:
    """Caller's intent to send items out. Shape checks only; stock is checked by the ledger."""
    store: StoreId
    lines: Tuple[DispatchLine, ...]
    customer_name: str
    responsible_person: str
    use_location: str
    expected_return_at: datetime
    authorized_by_user_id: str
    issued_by_user_id: str

    def __post_init__(self):
        if not isinstance(self.store, StoreId):
            raise ValueError("store must be StoreId enum.")
        if not isinstance(self.lines, tuple) or not self.lines:
            raise ValueError("lines must be a non-empty tuple.")
        for line in self.lines:
            if not isinstance(line, DispatchLine):
                raise ValueError("lines must contain DispatchLine entries.")
            if line.quantity <= 0:
                raise ValueError(
                    f"quantity for item '{line.item_id}' must be positive."
                )
        _require_text(self.customer_name, "customer_name")
        _require_text(self.responsible_person, "responsible_person")
        _require_text(self.use_location, "use_location")
        _require_text(self.authorized_by_user_id, "authorized_by_user_id")
        _require_text(self.issued_by_user_id, "issued_by_user_id")
        ensure_aware(self.expected_return_at, "expected_return_at")


@dataclass(frozen=True)
class ReturnRequest:
    """Caller's intent to book items back in against a movement."""
    movement_id: str
    received_by_user_id: str
    lines: Tuple[DispatchLine, ...]

    def __post_init__(self):
        _require_text(self.movement_id, "movement_id")
        _require_text(self.received_by_user_id, "received_by_user_id")
        if not isinstance(self.lines, tuple) or not self.lines:
            raise ValueError("lines must be a non-empty tuple.")
        if not any(line.quantity > 0 for line in self.lines):
            raise ValueError("at least one line must return a positive quantity.")

    @property
    def positive_lines(self) -> Tuple[DispatchLine, ...]:
        return tuple(line for line in self.lines if line.quantity > 0)
