"""
Exception hierarchy for boutique_stock.

Every failure of a stock adjustment is raised as a subclass of `StockError`.
Each class carries a stable `code` so the HTTP layer (and any other caller)
can map it without parsing messages.

Callers that only care whether to try again should check `retryable`:
`ConcurrencyConflict` and `LockAcquireTimeout` are safe to retry with the same
logical change, the others are not.
"""


class StockError(Exception):
    """
    Base exception for all boutique_stock errors.

    Example
    -------
    >>> try:
    ...     service.adjust_stock("P001", -1)
    ... except StockError as exc:
    ...     report(exc.code, str(exc))
    """

    code: str = "stock_error"
    retryable: bool = False

    def __init__(self, message: str | None = None) -> None:
        if message is None:
            message = "An unspecified stock error occurred."
        super().__init__(message)


class ProductNotFound(StockError):
    """Raised when the referenced product has no stock record."""

    code: str = "product_not_found"

    def __init__(self, product_id: str) -> None:
        self.product_id = product_id
        super().__init__(f"Product not found: {product_id}")


class InsufficientStock(StockError):
    """
    Raised when a decrement would drive the stock level below zero.

    `available` is the stock level that was read before the rejected change,
    so callers can say "(only N remaining)".
    """

    code: str = "insufficient_stock"

    def __init__(self, product_id: str, available: int, requested: int) -> None:
        self.product_id = product_id
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock for {product_id} (only {available} remaining)"
        )


class ConcurrencyConflict(StockError):
    """
    Raised when the conditional update matched no row.

    Another writer committed a new version between our read and our write.
    Re-reading and reapplying the same change is safe.
    """

    code: str = "concurrency_conflict"
    retryable: bool = True

    def __init__(self, product_id: str, expected_version: int) -> None:
        self.product_id = product_id
        self.expected_version = expected_version
        super().__init__(
            "Concurrency conflict: stock updated by another transaction. "
            "Please retry."
        )


class QuantityValidationError(StockError):
    """Raised for a malformed quantity change (non-numeric or non-integer)."""

    code: str = "validation_error"


class LockAcquireTimeout(StockError):
    """
    Raised when the stock lock cannot be acquired within the timeout.

    This typically indicates that another request is adjusting stock under the
    same lock key. Nothing has been read or written when this is raised.
    """

    code: str = "lock_acquire_timeout"
    retryable: bool = True

    def __init__(self, product_id: str, key: str, timeout: float | None) -> None:
        self.product_id = product_id
        self.key = key
        self.timeout = timeout
        super().__init__(
            f"Stock for {product_id} is busy (lock '{key}' not acquired "
            f"within {timeout}s). Please retry."
        )
