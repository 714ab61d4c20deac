from .exceptions import (
    ConcurrencyConflict,
    InsufficientStock,
    LockAcquireTimeout,
    ProductNotFound,
    QuantityValidationError,
    StockError,
)
from .locks import adjustment_lock

__all__ = [
    "adjustment_lock",
    "StockError",
    "ProductNotFound",
    "InsufficientStock",
    "ConcurrencyConflict",
    "QuantityValidationError",
    "LockAcquireTimeout",
]
