"""
Wegesa Inventory Engine — Event Types and Payload Builders
============================================================
The ledger appends one audit event per applied operation.
Rejected operations leave no event behind.
"""

from __future__ import annotations

from engines.inventory.models import Item, Movement, ReturnRecord


# ══════════════════════════════════════════════════════════════
# EVENT TYPE CONSTANTS
# ══════════════════════════════════════════════════════════════

INVENTORY_ITEM_ADDED_V1 = "inventory.item.added.v1"
INVENTORY_ITEM_UPDATED_V1 = "inventory.item.updated.v1"
INVENTORY_ITEM_DELETED_V1 = "inventory.item.deleted.v1"
INVENTORY_DISPATCH_CREATED_V1 = "inventory.dispatch.created.v1"
INVENTORY_RETURN_REGISTERED_V1 = "inventory.return.registered.v1"

INVENTORY_EVENT_TYPES = (
    INVENTORY_ITEM_ADDED_V1,
    INVENTORY_ITEM_UPDATED_V1,
    INVENTORY_ITEM_DELETED_V1,
    INVENTORY_DISPATCH_CREATED_V1,
    INVENTORY_RETURN_REGISTERED_V1,
)


# ══════════════════════════════════════════════════════════════
# PAYLOAD BUILDERS
# ══════════════════════════════════════════════════════════════

def build_item_payload(item: Item) -> dict:
    return item.to_dict()


def build_item_updated_payload(item: Item, changed_fields) -> dict:
    payload = item.to_dict()
    payload["changed_fields"] = sorted(changed_fields)
    return payload


def build_dispatch_created_payload(movement: Movement) -> dict:
    return {
        "movement_id": movement.movement_id,
        "store": movement.store.value,
        "lines": [line.to_dict() for line in movement.lines],
        "customer_name": movement.customer_name,
        "issued_by_user_id": movement.issued_by_user_id,
        "authorized_by_user_id": movement.authorized_by_user_id,
    }


def build_return_registered_payload(
    record: ReturnRecord, movement: Movement,
) -> dict:
    return {
        "return_id": record.return_id,
        "movement_id": record.movement_id,
        "lines": [line.to_dict() for line in record.lines],
        "received_by_user_id": record.received_by_user_id,
        "movement_status": movement.status.value,
    }
