"""
Wegesa Inventory Engine — Errors
==================================
Every rejection leaves ledger state exactly as it was.
"""

from core.store.errors import NotFoundError


class LedgerError(Exception):
    """Base error for inventory ledger operations."""
    pass


class InsufficientStockError(LedgerError):
    """A dispatch line asks for more than the item has in stock."""

    def __init__(self, item_id: str, item_name: str, available: int, requested: int):
        self.item_id = item_id
        self.item_name = item_name
        self.available = available
        self.requested = requested
        super().__init__(
            f"Not enough stock for {item_name}. "
            f"Available: {available}, Requested: {requested}"
        )


class ItemNotFoundError(NotFoundError, LedgerError):
    def __init__(self, item_id: str):
        super().__init__("Item", item_id)


class MovementNotFoundError(NotFoundError, LedgerError):
    def __init__(self, movement_id: str):
        super().__init__("Movement", movement_id)


class StoreMismatchError(LedgerError):
    """Dispatch line references an item held at a different store."""

    def __init__(self, item_id: str, item_store: str, dispatch_store: str):
        self.item_id = item_id
        self.item_store = item_store
        self.dispatch_store = dispatch_store
        super().__init__(
            f"Item '{item_id}' is held at {item_store}, "
            f"not at {dispatch_store}."
        )


class DuplicateLineError(LedgerError):
    """Same item listed on more than one line of a single request."""

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Item '{item_id}' appears on more than one line.")


class InvalidReturnQuantityError(LedgerError):
    """Return line exceeds what is still out on the movement."""

    def __init__(self, movement_id: str, item_id: str, outstanding: int, requested: int):
        self.movement_id = movement_id
        self.item_id = item_id
        self.outstanding = outstanding
        self.requested = requested
        super().__init__(
            f"Cannot return {requested} of item '{item_id}' on movement "
            f"'{movement_id}': only {outstanding} outstanding."
        )


class ItemInUseError(LedgerError):
    """Item is still out on an open movement."""

    def __init__(self, item_id: str, movement_ids):
        self.item_id = item_id
        self.movement_ids = tuple(movement_ids)
        super().__init__(
            f"Item '{item_id}' is on open movement(s): "
            f"{', '.join(self.movement_ids)}."
        )
