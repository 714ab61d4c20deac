from __future__ import annotations

import logging
from dataclasses import replace

from .conf import get_setting
from .exceptions import ConcurrencyConflict, InsufficientStock, ProductNotFound
from .locks import LockBackend, adjustment_lock, default_backend
from .repository import StockRecord, StockRepository
from .validation import coerce_quantity_change

logger = logging.getLogger(__name__)


class StockService:
    """
    The only entry point for changing stock.

    Each adjustment runs read, validate and conditional write inside a lock,
    so two requests in this process never race on the same version token.
    The repository's conditional update is what keeps the row correct across
    processes; the lock only saves same-process callers from spurious
    conflicts.

    Parameters
    ----------
    repository : StockRepository | None
        Persistence layer. Defaults to the Django ORM repository.

    lock_backend : LockBackend | None
        Lock implementation. Defaults to the process-wide in-memory backend.

    lock_key : str | None
        Key template formatted with `product_id`. Defaults to the
        BOUTIQUE_STOCK_LOCK_KEY setting.

    lock_timeout : float | None
        Seconds to wait for the lock. Defaults to the
        BOUTIQUE_STOCK_LOCK_TIMEOUT setting.
    """

    _UNSET = object()

    def __init__(
        self,
        repository: StockRepository | None = None,
        *,
        lock_backend: LockBackend | None = None,
        lock_key: str | None = None,
        lock_timeout: float | None | object = _UNSET,
    ) -> None:
        self.repository = repository or StockRepository()
        self.lock_backend = lock_backend or default_backend()
        self.lock_key = lock_key or get_setting("BOUTIQUE_STOCK_LOCK_KEY")
        self.lock_timeout = (
            get_setting("BOUTIQUE_STOCK_LOCK_TIMEOUT")
            if lock_timeout is self._UNSET else lock_timeout
        )

    def adjust_stock(self, product_id: str, quantity_change: int) -> StockRecord:
        """
        Add `quantity_change` to the product's stock level.

        Negative values are sales, positive values are restocks. Zero is
        accepted and still bumps the version.

        Returns the record as committed by this call.

        Raises
        ------
        QuantityValidationError
            `quantity_change` is not an integer. Raised before locking.
        LockAcquireTimeout
            The lock was not acquired in time. Nothing was read or written.
        ProductNotFound
            No record for `product_id`.
        InsufficientStock
            The change would make the stock level negative.
        ConcurrencyConflict
            Another writer committed first. Safe to retry.
        """
        delta = coerce_quantity_change(quantity_change)

        with adjustment_lock(product_id, key_template=self.lock_key,
                             timeout=self.lock_timeout, backend=self.lock_backend):
            current = self.repository.find_by_id(product_id)
            if current is None:
                raise ProductNotFound(product_id)

            if current.stock_level + delta < 0:
                logger.warning(
                    "Rejected stock change %+d for %s: only %d remaining",
                    delta, product_id, current.stock_level,
                )
                raise InsufficientStock(product_id, current.stock_level, delta)

            if not self.repository.update_stock(product_id, delta, current.version):
                logger.warning(
                    "Concurrency conflict adjusting %s at version %d",
                    product_id, current.version,
                )
                raise ConcurrencyConflict(product_id, current.version)

        logger.info(
            "Adjusted stock for %s by %+d: %d -> %d (version %d)",
            product_id, delta, current.stock_level, current.stock_level + delta,
            current.version + 1,
        )
        return replace(
            current,
            stock_level=current.stock_level + delta,
            version=current.version + 1,
        )

    def get_all_products(self) -> list[StockRecord]:
        return self.repository.get_all()
