"""
Wegesa Inventory Engine
=========================
Items, dispatch movements and returns.
"""

from engines.inventory.errors import (
    DuplicateLineError,
    InsufficientStockError,
    InvalidReturnQuantityError,
    ItemInUseError,
    ItemNotFoundError,
    LedgerError,
    MovementNotFoundError,
    StoreMismatchError,
)
from engines.inventory.ledger import InventoryLedger, LedgerSnapshot, MovementView
from engines.inventory.models import (
    DispatchLine,
    DispatchRequest,
    Item,
    Movement,
    MovementStatus,
    ReturnRecord,
    ReturnRequest,
    StoreId,
)

__all__ = [
    "InventoryLedger",
    "LedgerSnapshot",
    "MovementView",
    "DispatchLine",
    "DispatchRequest",
    "Item",
    "Movement",
    "MovementStatus",
    "ReturnRecord",
    "ReturnRequest",
    "StoreId",
    "LedgerError",
    "InsufficientStockError",
    "ItemNotFoundError",
    "MovementNotFoundError",
    "StoreMismatchError",
    "DuplicateLineError",
    "InvalidReturnQuantityError",
    "ItemInUseError",
]
