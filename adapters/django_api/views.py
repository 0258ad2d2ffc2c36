"""
Wegesa Django Adapter Views
===========================
Pass-through HTTP views over core/http_api handlers.
"""

from __future__ import annotations

import json
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.wiring import build_dependencies
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
from core.http_api.errors import error_response, status_for
from core.http_api.handlers import (
    get_dashboard_stats,
    get_movement,
    get_period_report,
    list_items,
    list_movements,
    post_dispatch_create,
    post_item_create,
    post_item_delete,
    post_item_update,
    post_return_register,
)
from core.time import parse_datetime


def _json_error(code: str, message: str, status: int = 400) -> JsonResponse:
    return JsonResponse(
        error_response(code=code, message=message, details={}),
        status=status,
    )


def _json_payload(payload: dict[str, Any]) -> JsonResponse:
    return JsonResponse(payload, status=status_for(payload))


def _method_not_allowed() -> JsonResponse:
    return _json_error(
        "METHOD_NOT_ALLOWED",
        "Method not allowed for this endpoint.",
        status=405,
    )


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _parse_lines(value: Any) -> tuple[tuple[str, int], ...]:
    """Accepts [{"item_id", "quantity"}, ...] or [[item_id, quantity], ...]."""
    if not isinstance(value, list):
        raise ValueError("lines must be a list.")
    lines = []
    for entry in value:
        if isinstance(entry, dict):
            lines.append((entry["item_id"], entry["quantity"]))
        elif isinstance(entry, list) and len(entry) == 2:
            lines.append((entry[0], entry[1]))
        else:
            raise ValueError("each line must be an object or an [item_id, quantity] pair.")
    return tuple(lines)


def _query_value(request: HttpRequest, name: str) -> str | None:
    value = request.GET.get(name)
    return value if value else None


def _dispatch(handler, contract_factory, request: HttpRequest) -> JsonResponse:
    try:
        contract = contract_factory(request)
    except (ValueError, KeyError) as exc:
        message = f"{exc.args[0]} is required." if isinstance(exc, KeyError) else str(exc)
        return _json_error("INVALID_REQUEST", message, status=400)
    return _json_payload(handler(contract, build_dependencies()))


# ── Items ─────────────────────────────────────────────────────

def _item_create_contract(request: HttpRequest) -> ItemCreateHttpRequest:
    body = _parse_json_body(request)
    return ItemCreateHttpRequest(
        name=body["name"],
        quantity=body["quantity"],
        store=body["store"],
        in_stock=body.get("in_stock"),
        brand=body.get("brand"),
        item_type=body.get("item_type"),
    )


@csrf_exempt
def items_view(request: HttpRequest) -> JsonResponse:
    if request.method == "GET":
        return _dispatch(
            list_items,
            lambda r: ItemListRequest(
                store=_query_value(r, "store"),
                search=_query_value(r, "search"),
            ),
            request,
        )
    if request.method == "POST":
        return _dispatch(post_item_create, _item_create_contract, request)
    return _method_not_allowed()


@csrf_exempt
def item_detail_view(request: HttpRequest, item_id: str) -> JsonResponse:
    if request.method == "PATCH":
        return _dispatch(
            post_item_update,
            lambda r: ItemUpdateHttpRequest(item_id=item_id, patch=_parse_json_body(r)),
            request,
        )
    if request.method == "DELETE":
        return _dispatch(
            post_item_delete,
            lambda r: ItemDeleteHttpRequest(item_id=item_id),
            request,
        )
    return _method_not_allowed()


# ── Movements ─────────────────────────────────────────────────

def _dispatch_create_contract(request: HttpRequest) -> DispatchCreateHttpRequest:
    body = _parse_json_body(request)
    return DispatchCreateHttpRequest(
        store=body["store"],
        lines=_parse_lines(body["lines"]),
        customer_name=body["customer_name"],
        responsible_person=body["responsible_person"],
        use_location=body["use_location"],
        expected_return_at=parse_datetime(body["expected_return_at"], "expected_return_at"),
        authorized_by_user_id=body["authorized_by_user_id"],
        issued_by_user_id=body["issued_by_user_id"],
    )


@csrf_exempt
def dispatch_create_view(request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()
    return _dispatch(post_dispatch_create, _dispatch_create_contract, request)


@csrf_exempt
def movements_list_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch(
        list_movements,
        lambda r: MovementListRequest(
            status=_query_value(r, "status"),
            store=_query_value(r, "store"),
        ),
        request,
    )


@csrf_exempt
def movement_detail_view(request: HttpRequest, movement_id: str) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch(
        get_movement,
        lambda r: MovementReadRequest(movement_id=movement_id),
        request,
    )


@csrf_exempt
def return_register_view(request: HttpRequest, movement_id: str) -> JsonResponse:
    if request.method != "POST":
        return _method_not_allowed()

    def _contract(r: HttpRequest) -> ReturnRegisterHttpRequest:
        body = _parse_json_body(r)
        return ReturnRegisterHttpRequest(
            movement_id=movement_id,
            received_by_user_id=body["received_by_user_id"],
            lines=_parse_lines(body["lines"]),
        )

    return _dispatch(post_return_register, _contract, request)


# ── Reports ───────────────────────────────────────────────────

@csrf_exempt
def dashboard_stats_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _json_payload(get_dashboard_stats(build_dependencies()))


@csrf_exempt
def period_report_view(request: HttpRequest) -> JsonResponse:
    if request.method != "GET":
        return _method_not_allowed()
    return _dispatch(
        get_period_report,
        lambda r: ReportReadRequest(period=(_query_value(r, "period") or "MONTH").upper()),
        request,
    )
