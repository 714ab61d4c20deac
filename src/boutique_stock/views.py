from __future__ import annotations

import logging

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from .exceptions import (
    ConcurrencyConflict,
    InsufficientStock,
    LockAcquireTimeout,
    ProductNotFound,
    QuantityValidationError,
    StockError,
)
from .repository import StockRecord
from .service import StockService
from .validation import parse_stock_payload

logger = logging.getLogger(__name__)


def get_stock_service() -> StockService:
    """
    Build the service for one request.

    Settings are read here rather than at import, so changes to the
    BOUTIQUE_STOCK_* settings apply to the next request. Every instance
    shares the process-wide lock backend.
    """
    return StockService()


_STATUS_BY_ERROR: dict[type[StockError], int] = {
    QuantityValidationError: 400,
    ProductNotFound: 404,
    InsufficientStock: 400,
    ConcurrencyConflict: 409,
    LockAcquireTimeout: 409,
}


def _record(record: StockRecord) -> dict:
    return {
        "id": record.id,
        "sku": record.sku,
        "name": record.name,
        "category": record.category,
        "stockLevel": record.stock_level,
        # JSON number, as the products table stored REAL prices
        "price": float(record.price),
        "version": record.version,
    }


def _error(exc: StockError) -> JsonResponse:
    """
    Map a stock error to a 4xx response.

    Retryable errors carry `"retry": true` so clients can tell "try again"
    apart from a permanent rejection.
    """
    payload = {"success": False, "error": exc.code, "message": str(exc)}
    if isinstance(exc, InsufficientStock):
        payload["available"] = exc.available
    if isinstance(exc, LockAcquireTimeout):
        payload["productId"] = exc.product_id
    if exc.retryable:
        payload["retry"] = True
    return JsonResponse(payload, status=_STATUS_BY_ERROR.get(type(exc), 400))


@require_GET
def product_list(request: HttpRequest) -> HttpResponse:
    products = get_stock_service().get_all_products()
    return JsonResponse([_record(p) for p in products], safe=False)


@csrf_exempt  # JSON API, called without a CSRF cookie
@require_POST
def adjust_stock(request: HttpRequest, product_id: str) -> HttpResponse:
    """
    Apply a signed quantity change to one product.

    Body: ``{"quantityChange": <int>}``. Negative sells, positive restocks.
    """
    try:
        quantity_change = parse_stock_payload(request.body)
        record = get_stock_service().adjust_stock(product_id, quantity_change)
    except StockError as exc:
        logger.info("Stock adjustment for %s rejected: %s", product_id, exc.code)
        return _error(exc)

    return JsonResponse(
        {
            "success": True,
            "message": "Stock updated successfully",
            "product": _record(record),
        }
    )
