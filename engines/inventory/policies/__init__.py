"""
Wegesa Inventory Engine — Policies
====================================
Checks run before the ledger writes anything. Each check raises the
first violation it finds; a request that passes every check can be
applied without further failure.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Tuple

from engines.inventory.errors import (
    DuplicateLineError,
    InsufficientStockError,
    InvalidReturnQuantityError,
    StoreMismatchError,
)
from engines.inventory.models import DispatchLine, DispatchRequest, Item, Movement


def unique_lines_policy(lines: Iterable[DispatchLine]) -> None:
    """Reject a request that lists the same item twice."""
    seen = set()
    for line in lines:
        if line.item_id in seen:
            raise DuplicateLineError(line.item_id)
        seen.add(line.item_id)


def dispatch_stock_policy(
    request: DispatchRequest,
    item_lookup: Callable[[str], Item],
) -> List[Tuple[Item, DispatchLine]]:
    """
    Resolve every line against current stock.

    Raises on unknown item (via item_lookup), wrong store, or overdraft.
    Returns the (item, line) pairs in request order.
    """
    unique_lines_policy(request.lines)

    resolved = []
    for line in request.lines:
        item = item_lookup(line.item_id)
        if item.store is not request.store:
            raise StoreMismatchError(
                item.item_id, item.store.value, request.store.value,
            )
        if line.quantity > item.in_stock:
            raise InsufficientStockError(
                item_id=item.item_id,
                item_name=item.name,
                available=item.in_stock,
                requested=line.quantity,
            )
        resolved.append((item, line))
    return resolved


def return_quantity_policy(
    movement: Movement,
    lines: Iterable[DispatchLine],
    outstanding: Dict[str, int],
) -> None:
    """
    Reject lines for items not on the movement or above what is still out.

    outstanding: item_id → dispatched minus already returned.
    """
    lines = tuple(lines)
    unique_lines_policy(lines)

    for line in lines:
        remaining = outstanding.get(line.item_id, 0)
        if line.quantity > remaining:
            raise InvalidReturnQuantityError(
                movement_id=movement.movement_id,
                item_id=line.item_id,
                outstanding=remaining,
                requested=line.quantity,
            )
