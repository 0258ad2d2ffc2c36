"""
Wegesa Inventory Engine — Ledger
==================================
In-memory state container for items, dispatch movements and returns.

Two state transitions carry all the bookkeeping:

    create_dispatch   in_stock -= line quantity     movement: OUT
    register_return   in_stock += line quantity     movement: PARTIAL_RETURN | RETURNED

Both are all-or-nothing: every check and every new record is built
before the first write, so a rejected call leaves no trace.

Status is computed from the cumulative quantity returned over all
ReturnRecords of a movement, not from the quantity of the latest call.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from core.ids import IdProvider, RandomIdProvider
from core.store import EntityCollection, NotFoundError
from core.time import Clock, SystemClock, parse_datetime
from engines.inventory.errors import (
    ItemInUseError,
    ItemNotFoundError,
    MovementNotFoundError,
)
from engines.inventory.events import (
    INVENTORY_DISPATCH_CREATED_V1,
    INVENTORY_ITEM_ADDED_V1,
    INVENTORY_ITEM_DELETED_V1,
    INVENTORY_ITEM_UPDATED_V1,
    INVENTORY_RETURN_REGISTERED_V1,
    build_dispatch_created_payload,
    build_item_payload,
    build_item_updated_payload,
    build_return_registered_payload,
)
from engines.inventory.models import (
    DispatchLine,
    DispatchRequest,
    Item,
    LineLike,
    Movement,
    MovementStatus,
    ReturnRecord,
    ReturnRequest,
    StoreId,
    advance_status,
    coerce_lines,
    derive_status,
)
from engines.inventory.policies import dispatch_stock_policy, return_quantity_policy

logger = logging.getLogger("wegesa.inventory")


# ══════════════════════════════════════════════════════════════
# SNAPSHOT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class LedgerSnapshot:
    """Read-only view handed to reports and exports."""
    items: Tuple[Item, ...]
    movements: Tuple[Movement, ...]
    returns: Tuple[ReturnRecord, ...]
    taken_at: datetime


@dataclass(frozen=True)
class MovementView:
    """A movement with its returns and outstanding lines, read under one lock."""
    movement: Movement
    returns: Tuple[ReturnRecord, ...]
    outstanding: Tuple[DispatchLine, ...]
    is_overdue: bool

    def to_dict(self) -> dict:
        data = self.movement.to_dict()
        data["outstanding"] = [line.to_dict() for line in self.outstanding]
        data["returns"] = [record.to_dict() for record in self.returns]
        data["is_overdue"] = self.is_overdue
        return data


def _coerce_store(value) -> StoreId:
    try:
        return StoreId(value)
    except ValueError:
        raise ValueError(f"store '{value}' is not a known store.") from None


# ══════════════════════════════════════════════════════════════
# LEDGER
# ══════════════════════════════════════════════════════════════

class InventoryLedger:
    """
    Items and movements held in flat id-keyed collections.

    One re-entrant lock guards every read and write, so a single
    instance can sit behind a threaded HTTP adapter.
    """

    def __init__(
        self,
        *,
        clock: Clock | None = None,
        id_provider: IdProvider | None = None,
    ):
        self._clock = clock or SystemClock()
        self._ids = id_provider or RandomIdProvider()
        self._items: EntityCollection[Item] = EntityCollection("Item", "item_id")
        self._movements: EntityCollection[Movement] = EntityCollection(
            "Movement", "movement_id",
        )
        self._returns: EntityCollection[ReturnRecord] = EntityCollection(
            "ReturnRecord", "return_id",
        )
        self._events: List[dict] = []
        self._lock = threading.RLock()

    def _record(self, event_type: str, payload: dict) -> None:
        self._events.append({
            "event_type": event_type,
            "occurred_at": self._clock.now_utc(),
            "payload": payload,
        })

    # ── Items ─────────────────────────────────────────────────

    def add_item(
        self,
        *,
        name: str,
        quantity: int,
        store,
        in_stock: Optional[int] = None,
        brand: Optional[str] = None,
        item_type: Optional[str] = None,
        date_of_entry: Optional[datetime] = None,
    ) -> Item:
        """Register an item. in_stock defaults to the full quantity."""
        with self._lock:
            item = Item(
                item_id=self._ids.new_id(),
                name=name,
                quantity=quantity,
                in_stock=quantity if in_stock is None else in_stock,
                store=_coerce_store(store),
                date_of_entry=date_of_entry or self._clock.now_utc(),
                brand=brand,
                item_type=item_type,
            )
            self._items.add(item)
            self._record(INVENTORY_ITEM_ADDED_V1, build_item_payload(item))
            logger.info(f"Item {item.item_id} added: {item.name} x{item.quantity} at {item.store.value}")
            return item

    def update_item(self, item_id: str, patch: Mapping[str, Any]) -> Item:
        """
        Partial edit of an item.

        The patched copy goes through Item validation, so an edit that
        would break 0 <= in_stock <= quantity is refused.
        """
        changes = dict(patch)
        if "store" in changes:
            changes["store"] = _coerce_store(changes["store"])
        if isinstance(changes.get("date_of_entry"), str):
            changes["date_of_entry"] = parse_datetime(changes["date_of_entry"], "date_of_entry")
        with self._lock:
            current = self._require_item(item_id)
            if "store" in changes and changes["store"] is not current.store:
                open_movements = self._open_movement_ids(item_id)
                if open_movements:
                    logger.warning(f"Store change of item {item_id} refused: on {open_movements}")
                    raise ItemInUseError(item_id, open_movements)
            item = self._items.update(item_id, changes)
            self._record(
                INVENTORY_ITEM_UPDATED_V1,
                build_item_updated_payload(item, changes.keys()),
            )
            logger.info(f"Item {item_id} updated: {sorted(changes)}")
            return item

    def delete_item(self, item_id: str) -> Item:
        """Remove an item that is not out on any open movement."""
        with self._lock:
            self._require_item(item_id)
            open_movements = self._open_movement_ids(item_id)
            if open_movements:
                logger.warning(f"Delete of item {item_id} refused: on {open_movements}")
                raise ItemInUseError(item_id, open_movements)
            item = self._items.delete(item_id)
            self._record(INVENTORY_ITEM_DELETED_V1, build_item_payload(item))
            logger.info(f"Item {item_id} deleted")
            return item

    def _open_movement_ids(self, item_id: str) -> List[str]:
        return [
            m.movement_id
            for m in self._movements.list()
            if m.status is not MovementStatus.RETURNED
            and any(line.item_id == item_id for line in m.lines)
        ]

    def _require_item(self, item_id: str) -> Item:
        try:
            return self._items.get(item_id)
        except NotFoundError:
            raise ItemNotFoundError(item_id) from None

    def get_item(self, item_id: str) -> Item:
        with self._lock:
            return self._require_item(item_id)

    def list_items(
        self,
        *,
        store=None,
        search: Optional[str] = None,
    ) -> List[Item]:
        """Items filtered by store and a case-insensitive name/brand/type search."""
        store_id = _coerce_store(store) if store is not None else None
        needle = (search or "").strip().lower()

        def _matches(item: Item) -> bool:
            if store_id is not None and item.store is not store_id:
                return False
            if not needle:
                return True
            haystack = (item.name, item.brand or "", item.item_type or "")
            return any(needle in text.lower() for text in haystack)

        with self._lock:
            return self._items.list(_matches)

    # ── Dispatch ──────────────────────────────────────────────

    def create_dispatch(
        self,
        *,
        store,
        lines: Iterable[LineLike],
        customer_name: str,
        responsible_person: str,
        use_location: str,
        expected_return_at: datetime,
        authorized_by_user_id: str,
        issued_by_user_id: str,
    ) -> str:
        """
        Send items out of a store. Returns the new movement id.

        Raises:
            ValueError:             malformed request (empty lines, qty <= 0, ...)
            DuplicateLineError:     same item on two lines
            ItemNotFoundError:      unknown item id
            StoreMismatchError:     item held at another store
            InsufficientStockError: any line above the item's in_stock
        """
        request = DispatchRequest(
            store=_coerce_store(store),
            lines=coerce_lines(lines),
            customer_name=customer_name,
            responsible_person=responsible_person,
            use_location=use_location,
            expected_return_at=expected_return_at,
            authorized_by_user_id=authorized_by_user_id,
            issued_by_user_id=issued_by_user_id,
        )
        return self.apply_dispatch(request)

    def apply_dispatch(self, request: DispatchRequest) -> str:
        with self._lock:
            try:
                resolved = dispatch_stock_policy(request, self._require_item)
            except Exception as exc:
                logger.warning(f"Dispatch from {request.store.value} rejected: {exc}")
                raise

            updated_items = [
                dataclasses.replace(item, in_stock=item.in_stock - line.quantity)
                for item, line in resolved
            ]
            movement = Movement(
                movement_id=self._ids.new_id(),
                created_at=self._clock.now_utc(),
                store=request.store,
                lines=request.lines,
                authorized_by_user_id=request.authorized_by_user_id,
                issued_by_user_id=request.issued_by_user_id,
                customer_name=request.customer_name,
                responsible_person=request.responsible_person,
                use_location=request.use_location,
                expected_return_at=request.expected_return_at,
                status=MovementStatus.OUT,
            )

            # ── All checks passed: apply ──────────────────────
            self._movements.add(movement)
            for item in updated_items:
                self._items.replace(item)
            self._record(
                INVENTORY_DISPATCH_CREATED_V1,
                build_dispatch_created_payload(movement),
            )
            logger.info(
                f"Dispatch {movement.movement_id} created: "
                f"{movement.total_quantity} unit(s) from {movement.store.value} "
                f"for {movement.customer_name}"
            )
            return movement.movement_id

    # ── Returns ───────────────────────────────────────────────

    def register_return(
        self,
        movement_id: str,
        received_by_user_id: str,
        lines: Iterable[LineLike],
    ) -> str:
        """
        Book items back in against a movement. Returns the ReturnRecord id.

        Raises:
            MovementNotFoundError:      unknown movement id
            ValueError:                 malformed request (no positive line, ...)
            DuplicateLineError:         same item on two lines
            InvalidReturnQuantityError: item not on the movement, or more than
                                        is still outstanding
        """
        request = ReturnRequest(
            movement_id=movement_id,
            received_by_user_id=received_by_user_id,
            lines=coerce_lines(lines),
        )
        return self.apply_return(request)

    def apply_return(self, request: ReturnRequest) -> str:
        with self._lock:
            movement = self._require_movement(request.movement_id)
            try:
                return_quantity_policy(
                    movement, request.lines, self._outstanding_by_item(movement),
                )
                lines = request.positive_lines
                updated_items = []
                for line in lines:
                    item = self._require_item(line.item_id)
                    updated_items.append(
                        dataclasses.replace(item, in_stock=item.in_stock + line.quantity)
                    )
            except Exception as exc:
                logger.warning(f"Return on movement {movement.movement_id} rejected: {exc}")
                raise

            record = ReturnRecord(
                return_id=self._ids.new_id(),
                movement_id=movement.movement_id,
                returned_at=self._clock.now_utc(),
                lines=lines,
                received_by_user_id=request.received_by_user_id,
            )
            returned_total = self._returned_total(movement.movement_id) + record.total_quantity
            status = advance_status(
                movement.status,
                derive_status(movement.total_quantity, returned_total),
            )
            updated_movement = dataclasses.replace(movement, status=status)

            # ── All checks passed: apply ──────────────────────
            for item in updated_items:
                self._items.replace(item)
            self._returns.add(record)
            self._movements.replace(updated_movement)
            self._record(
                INVENTORY_RETURN_REGISTERED_V1,
                build_return_registered_payload(record, updated_movement),
            )
            logger.info(
                f"Return {record.return_id} on movement {movement.movement_id}: "
                f"{record.total_quantity} unit(s), "
                f"{movement.status.value} -> {status.value}"
            )
            return record.return_id

    # ── Movement queries ──────────────────────────────────────

    def _require_movement(self, movement_id: str) -> Movement:
        try:
            return self._movements.get(movement_id)
        except NotFoundError:
            logger.warning(f"Movement {movement_id} not found")
            raise MovementNotFoundError(movement_id) from None

    def _returned_by_item(self, movement_id: str) -> Dict[str, int]:
        returned: Dict[str, int] = defaultdict(int)
        for record in self.returns_for(movement_id):
            for line in record.lines:
                returned[line.item_id] += line.quantity
        return returned

    def _returned_total(self, movement_id: str) -> int:
        return sum(record.total_quantity for record in self.returns_for(movement_id))

    def _outstanding_by_item(self, movement: Movement) -> Dict[str, int]:
        returned = self._returned_by_item(movement.movement_id)
        return {
            line.item_id: line.quantity - returned.get(line.item_id, 0)
            for line in movement.lines
        }

    def get_movement(self, movement_id: str) -> Movement:
        with self._lock:
            return self._require_movement(movement_id)

    def list_movements(
        self,
        *,
        status=None,
        store=None,
    ) -> List[Movement]:
        status_filter = MovementStatus(status) if status is not None else None
        store_filter = _coerce_store(store) if store is not None else None
        with self._lock:
            return self._movements.list(
                lambda m: (status_filter is None or m.status is status_filter)
                and (store_filter is None or m.store is store_filter)
            )

    def recent_movements(self, limit: int = 5) -> List[Movement]:
        """Newest first."""
        with self._lock:
            movements = self._movements.list()
        ordered = sorted(movements, key=lambda m: m.created_at, reverse=True)
        return ordered[:limit]

    def returns_for(self, movement_id: str) -> List[ReturnRecord]:
        with self._lock:
            return self._returns.list(lambda r: r.movement_id == movement_id)

    def outstanding_lines(self, movement_id: str) -> Tuple[DispatchLine, ...]:
        """Per-item quantity still out, in dispatch order."""
        with self._lock:
            movement = self._require_movement(movement_id)
            return self._outstanding_tuple(movement)

    def _outstanding_tuple(self, movement: Movement) -> Tuple[DispatchLine, ...]:
        outstanding = self._outstanding_by_item(movement)
        return tuple(
            DispatchLine(item_id=line.item_id, quantity=outstanding[line.item_id])
            for line in movement.lines
        )

    def is_overdue(self, movement: Movement, now: Optional[datetime] = None) -> bool:
        """Still fully out and past its expected return date."""
        return movement.is_overdue(now or self._clock.now_utc())

    def overdue_movements(self, now: Optional[datetime] = None) -> List[Movement]:
        now = now or self._clock.now_utc()
        with self._lock:
            return [m for m in self._movements.list() if m.is_overdue(now)]

    def movement_view(self, movement_id: str, now: Optional[datetime] = None) -> MovementView:
        """Movement, returns, outstanding lines and overdue flag from one consistent read."""
        now = now or self._clock.now_utc()
        with self._lock:
            return self._view(self._require_movement(movement_id), now)

    def movement_views(
        self,
        *,
        status=None,
        store=None,
        now: Optional[datetime] = None,
    ) -> List[MovementView]:
        """Filtered views, newest first."""
        now = now or self._clock.now_utc()
        with self._lock:
            movements = self.list_movements(status=status, store=store)
            ordered = sorted(movements, key=lambda m: m.created_at, reverse=True)
            return [self._view(m, now) for m in ordered]

    def _view(self, movement: Movement, now: datetime) -> MovementView:
        return MovementView(
            movement=movement,
            returns=tuple(self.returns_for(movement.movement_id)),
            outstanding=self._outstanding_tuple(movement),
            is_overdue=movement.is_overdue(now),
        )

    # ── Snapshot ──────────────────────────────────────────────

    def snapshot(self) -> LedgerSnapshot:
        with self._lock:
            return LedgerSnapshot(
                items=tuple(self._items.list()),
                movements=tuple(self._movements.list()),
                returns=tuple(self._returns.list()),
                taken_at=self._clock.now_utc(),
            )

    @property
    def events(self) -> Tuple[dict, ...]:
        with self._lock:
            return tuple(self._events)

    @property
    def event_count(self) -> int:
        return len(self._events)
