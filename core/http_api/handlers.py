"""
Wegesa HTTP API - Framework-Agnostic Handlers
=============================================
Pure handler functions over contracts and injected dependencies.

Every handler returns an envelope dict; domain exceptions never
escape to the transport layer.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from core.http_api.contracts import (
    DispatchCreateHttpRequest,
    ItemCreateHttpRequest,
    ItemDeleteHttpRequest,
    ItemListRequest,
    ItemUpdateHttpRequest,
    MovementListRequest,
    MovementReadRequest,
    ReportReadRequest,
    ReturnRegisterHttpRequest,
)
from core.http_api.errors import exception_response, success_response

logger = logging.getLogger("wegesa.http")


def _run(call: Callable[[], Any], *, action: str) -> dict[str, Any]:
    try:
        data = call()
    except Exception as exc:
        response = exception_response(exc)
        code = response["error"]["code"]
        if code == "HANDLER_EXECUTION_FAILED":
            logger.exception(f"{action} failed")
        else:
            logger.warning(f"{action} rejected: {code} {exc}")
        return response
    return success_response(data)


def _serialize_movement(store, movement_id: str) -> dict[str, Any]:
    return store.inventory.movement_view(movement_id, store.clock.now_utc()).to_dict()


# ── Items ─────────────────────────────────────────────────────

def list_items(request: ItemListRequest, dependencies) -> dict[str, Any]:
    def _read():
        items = dependencies.store.inventory.list_items(
            store=request.store,
            search=request.search,
        )
        return {"items": [item.to_dict() for item in items], "count": len(items)}

    return _run(_read, action="Item list")


def post_item_create(request: ItemCreateHttpRequest, dependencies) -> dict[str, Any]:
    return _run(
        lambda: dependencies.store.inventory.add_item(
            name=request.name,
            quantity=request.quantity,
            store=request.store,
            in_stock=request.in_stock,
            brand=request.brand,
            item_type=request.item_type,
        ).to_dict(),
        action="Item create",
    )


def post_item_update(request: ItemUpdateHttpRequest, dependencies) -> dict[str, Any]:
    return _run(
        lambda: dependencies.store.inventory.update_item(
            request.item_id, request.patch,
        ).to_dict(),
        action=f"Item {request.item_id} update",
    )


def post_item_delete(request: ItemDeleteHttpRequest, dependencies) -> dict[str, Any]:
    return _run(
        lambda: {"deleted": dependencies.store.inventory.delete_item(request.item_id).item_id},
        action=f"Item {request.item_id} delete",
    )


# ── Movements ─────────────────────────────────────────────────

def post_dispatch_create(request: DispatchCreateHttpRequest, dependencies) -> dict[str, Any]:
    def _write():
        store = dependencies.store
        movement_id = store.inventory.create_dispatch(
            store=request.store,
            lines=request.lines,
            customer_name=request.customer_name,
            responsible_person=request.responsible_person,
            use_location=request.use_location,
            expected_return_at=request.expected_return_at,
            authorized_by_user_id=request.authorized_by_user_id,
            issued_by_user_id=request.issued_by_user_id,
        )
        return _serialize_movement(store, movement_id)

    return _run(_write, action="Dispatch")


def get_movement(request: MovementReadRequest, dependencies) -> dict[str, Any]:
    def _read():
        store = dependencies.store
        return _serialize_movement(store, request.movement_id)

    return _run(_read, action=f"Movement {request.movement_id} read")


def list_movements(request: MovementListRequest, dependencies) -> dict[str, Any]:
    def _read():
        store = dependencies.store
        views = store.inventory.movement_views(
            status=request.status,
            store=request.store,
            now=store.clock.now_utc(),
        )
        return {
            "items": [view.to_dict() for view in views],
            "count": len(views),
        }

    return _run(_read, action="Movement list")


def post_return_register(request: ReturnRegisterHttpRequest, dependencies) -> dict[str, Any]:
    def _write():
        store = dependencies.store
        return_id = store.inventory.register_return(
            request.movement_id,
            request.received_by_user_id,
            request.lines,
        )
        return {
            "return_id": return_id,
            "movement": _serialize_movement(store, request.movement_id),
        }

    return _run(_write, action=f"Return on {request.movement_id}")


# ── Reports ───────────────────────────────────────────────────

def get_dashboard_stats(dependencies) -> dict[str, Any]:
    return _run(
        lambda: dependencies.store.dashboard_stats().to_dict(),
        action="Dashboard stats",
    )


def get_period_report(request: ReportReadRequest, dependencies) -> dict[str, Any]:
    return _run(
        lambda: dependencies.store.period_report(request.period).to_dict(),
        action="Period report",
    )
