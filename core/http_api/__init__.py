"""
Wegesa HTTP API - Public API
============================
"""

from core.http_api.contracts import (
    DispatchCreateHttpRequest,
    HttpApiErrorBody,
    HttpApiResponse,
    ItemCreateHttpRequest,
    ItemDeleteHttpRequest,
    ItemListRequest,
    ItemUpdateHttpRequest,
    MovementListRequest,
    MovementReadRequest,
    ReportReadRequest,
    ReturnRegisterHttpRequest,
)
from core.http_api.dependencies import HttpApiDependencies
from core.http_api.errors import (
    error_response,
    exception_response,
    map_exception,
    status_for,
    success_response,
)
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

__all__ = [
    "DispatchCreateHttpRequest",
    "ItemCreateHttpRequest",
    "ItemDeleteHttpRequest",
    "ItemListRequest",
    "ItemUpdateHttpRequest",
    "MovementListRequest",
    "MovementReadRequest",
    "ReportReadRequest",
    "ReturnRegisterHttpRequest",
    "HttpApiErrorBody",
    "HttpApiResponse",
    "HttpApiDependencies",
    "error_response",
    "exception_response",
    "map_exception",
    "status_for",
    "success_response",
    "list_items",
    "post_item_create",
    "post_item_update",
    "post_item_delete",
    "post_dispatch_create",
    "get_movement",
    "list_movements",
    "post_return_register",
    "get_dashboard_stats",
    "get_period_report",
]
