"""
Wegesa HTTP API - Contracts
===========================
Framework-agnostic request/response DTOs for the inventory endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


def _require_text(value: Any, field_name: str) -> None:
    if not value or not isinstance(value, str):
        raise ValueError(f"{field_name} must be a non-empty string.")


def _optional_text(value: Any, field_name: str) -> None:
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string or None.")


def _require_lines(lines: Any) -> None:
    if not isinstance(lines, tuple):
        raise ValueError("lines must be a tuple.")
    if not lines:
        raise ValueError("lines must not be empty.")
    for line in lines:
        if not isinstance(line, tuple) or len(line) != 2:
            raise ValueError("each line must be an (item_id, quantity) pair.")
        item_id, quantity = line
        _require_text(item_id, "item_id")
        if not isinstance(quantity, int) or isinstance(quantity, bool):
            raise ValueError("quantity must be an integer.")


@dataclass(frozen=True)
class ItemListRequest:
    store: Optional[str] = None
    search: Optional[str] = None

    def __post_init__(self):
        _optional_text(self.store, "store")
        _optional_text(self.search, "search")


@dataclass(frozen=True)
class ItemCreateHttpRequest:
    name: str
    quantity: int
    store: str
    in_stock: Optional[int] = None
    brand: Optional[str] = None
    item_type: Optional[str] = None

    def __post_init__(self):
        _require_text(self.name, "name")
        _require_text(self.store, "store")
        if not isinstance(self.quantity, int) or isinstance(self.quantity, bool):
            raise ValueError("quantity must be an integer.")
        if self.in_stock is not None and (
            not isinstance(self.in_stock, int) or isinstance(self.in_stock, bool)
        ):
            raise ValueError("in_stock must be an integer or None.")
        _optional_text(self.brand, "brand")
        _optional_text(self.item_type, "item_type")


@dataclass(frozen=True)
class ItemUpdateHttpRequest:
    item_id: str
    patch: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        _require_text(self.item_id, "item_id")
        if not isinstance(self.patch, dict):
            raise ValueError("patch must be an object.")
        if not self.patch:
            raise ValueError("patch must name at least one field.")


@dataclass(frozen=True)
class ItemDeleteHttpRequest:
    item_id: str

    def __post_init__(self):
        _require_text(self.item_id, "item_id")


@dataclass(frozen=True)
class DispatchCreateHttpRequest:
    store: str
    lines: tuple[tuple[str, int], ...]
    customer_name: str
    responsible_person: str
    use_location: str
    expected_return_at: datetime
    authorized_by_user_id: str
    issued_by_user_id: str

    def __post_init__(self):
        _require_text(self.store, "store")
        _require_lines(self.lines)
        for name in (
            "customer_name",
            "responsible_person",
            "use_location",
            "authorized_by_user_id",
            "issued_by_user_id",
        ):
            _require_text(getattr(self, name), name)
        if not isinstance(self.expected_return_at, datetime):
            raise ValueError("expected_return_at must be datetime.")


@dataclass(frozen=True)
class MovementReadRequest:
    movement_id: str

    def __post_init__(self):
        _require_text(self.movement_id, "movement_id")


@dataclass(frozen=True)
class MovementListRequest:
    status: Optional[str] = None
    store: Optional[str] = None

    def __post_init__(self):
        _optional_text(self.status, "status")
        _optional_text(self.store, "store")


@dataclass(frozen=True)
class ReturnRegisterHttpRequest:
    movement_id: str
    received_by_user_id: str
    lines: tuple[tuple[str, int], ...]

    def __post_init__(self):
        _require_text(self.movement_id, "movement_id")
        _require_text(self.received_by_user_id, "received_by_user_id")
        _require_lines(self.lines)


@dataclass(frozen=True)
class ReportReadRequest:
    period: str = "MONTH"

    def __post_init__(self):
        _require_text(self.period, "period")


@dataclass(frozen=True)
class HttpApiErrorBody:
    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class HttpApiResponse:
    ok: bool
    data: Any = None
    error: Optional[HttpApiErrorBody] = None
    meta: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        if not self.ok and self.error is None:
            raise ValueError("error must be set when ok is False.")
        return {
            "ok": self.ok,
            "data": self.data,
            "error": None if self.error is None else self.error.to_dict(),
            "meta": self.meta or {},
        }
