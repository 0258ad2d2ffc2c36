"""
Wegesa HTTP API - Error Mapping
===============================
Stable transport error mapping for ledger rejections and handler failures.
"""

from __future__ import annotations

from typing import Any, Optional

from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse
from core.store.errors import DuplicateIdError, NotFoundError, PatchError
from engines.inventory.errors import (
    DuplicateLineError,
    InsufficientStockError,
    InvalidReturnQuantityError,
    ItemInUseError,
    StoreMismatchError,
)

ERROR_STATUS = {
    "INVALID_REQUEST": 400,
    "PATCH_REJECTED": 400,
    "DUPLICATE_LINE": 400,
    "NOT_FOUND": 404,
    "METHOD_NOT_ALLOWED": 405,
    "INSUFFICIENT_STOCK": 409,
    "STORE_MISMATCH": 409,
    "INVALID_RETURN_QUANTITY": 409,
    "ITEM_IN_USE": 409,
    "DUPLICATE_ID": 409,
    "HANDLER_EXECUTION_FAILED": 500,
}


def error_response(
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(
        ok=False,
        error=HttpApiErrorBody(
            code=code,
            message=message,
            details=details or {},
        ),
    ).to_dict()


def success_response(
    data: Any,
    *,
    meta: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(ok=True, data=data, meta=meta).to_dict()


def status_for(payload: dict[str, Any]) -> int:
    """HTTP status for an envelope; unknown error codes are a 400."""
    if payload.get("ok"):
        return 200
    code = (payload.get("error") or {}).get("code")
    return ERROR_STATUS.get(code, 400)


def map_exception(exc: Exception) -> HttpApiErrorBody:
    """
    Translate a domain exception into an error body.

    Order matters: the specific ledger errors are checked before
    their bases, and ValueError last among the expected failures.
    """
    if isinstance(exc, InsufficientStockError):
        return HttpApiErrorBody(
            code="INSUFFICIENT_STOCK",
            message=str(exc),
            details={
                "item_id": exc.item_id,
                "item_name": exc.item_name,
                "available": exc.available,
                "requested": exc.requested,
            },
        )
    if isinstance(exc, NotFoundError):
        return HttpApiErrorBody(
            code="NOT_FOUND",
            message=str(exc),
            details={"entity": exc.entity, "entity_id": exc.entity_id},
        )
    if isinstance(exc, StoreMismatchError):
        return HttpApiErrorBody(
            code="STORE_MISMATCH",
            message=str(exc),
            details={
                "item_id": exc.item_id,
                "item_store": exc.item_store,
                "dispatch_store": exc.dispatch_store,
            },
        )
    if isinstance(exc, DuplicateLineError):
        return HttpApiErrorBody(
            code="DUPLICATE_LINE",
            message=str(exc),
            details={"item_id": exc.item_id},
        )
    if isinstance(exc, InvalidReturnQuantityError):
        return HttpApiErrorBody(
            code="INVALID_RETURN_QUANTITY",
            message=str(exc),
            details={
                "movement_id": exc.movement_id,
                "item_id": exc.item_id,
                "outstanding": exc.outstanding,
                "requested": exc.requested,
            },
        )
    if isinstance(exc, ItemInUseError):
        return HttpApiErrorBody(
            code="ITEM_IN_USE",
            message=str(exc),
            details={"item_id": exc.item_id, "movement_ids": list(exc.movement_ids)},
        )
    if isinstance(exc, PatchError):
        return HttpApiErrorBody(
            code="PATCH_REJECTED",
            message=str(exc),
            details={"fields": list(exc.fields)},
        )
    if isinstance(exc, DuplicateIdError):
        return HttpApiErrorBody(
            code="DUPLICATE_ID",
            message=str(exc),
            details={"entity_id": exc.entity_id},
        )
    if isinstance(exc, ValueError):
        return HttpApiErrorBody(code="INVALID_REQUEST", message=str(exc))
    return HttpApiErrorBody(
        code="HANDLER_EXECUTION_FAILED",
        message="Failed to execute request.",
        details={"error_type": type(exc).__name__},
    )


def exception_response(exc: Exception) -> dict[str, Any]:
    mapped = map_exception(exc)
    return error_response(
        code=mapped.code,
        message=mapped.message,
        details=mapped.details,
    )
