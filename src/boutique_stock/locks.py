"""
In-process serialization of stock adjustments.

`adjustment_lock` wraps the read, validate and conditional-write steps of one
`StockService.adjust_stock` call. It only coordinates threads of this
process: two workers each have their own locks, and the repository's
versioned UPDATE is what keeps the row correct between them. The lock exists
so that same-process requests queue up instead of reading the same version
and failing with `ConcurrencyConflict`.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Protocol

from .backends.thread import ThreadLockBackend
from .exceptions import LockAcquireTimeout

logger = logging.getLogger(__name__)


class LockBackend(Protocol):
    def acquire(self, key: str, timeout: float | None) -> bool: ...
    def release(self, key: str) -> None: ...


_default_backend: LockBackend = ThreadLockBackend()


def default_backend() -> LockBackend:
    """The backend shared by every `StockService` that doesn't get its own."""
    return _default_backend


def lock_key_for(product_id: str, key_template: str) -> str:
    """
    Build the lock key for a product.

    "stock" gives one lock for all products; "stock:{product_id}" gives one
    per product.
    """
    return key_template.format(product_id=product_id)


@contextmanager
def adjustment_lock(
    product_id: str,
    *,
    key_template: str = "stock",
    timeout: float | None = 3.0,
    backend: LockBackend | None = None,
) -> Iterator[str]:
    """
    Hold the adjustment lock for `product_id` for the duration of the block.

    Yields the resolved lock key. Raises `LockAcquireTimeout` carrying the
    product id and key if the lock is not acquired within `timeout` seconds
    (None waits forever); in that case the block never runs.
    """
    be = backend or _default_backend
    key = lock_key_for(product_id, key_template)

    if not be.acquire(key, timeout):
        logger.warning(
            "Timed out after %ss waiting for lock %r (product %s)",
            timeout, key, product_id,
        )
        raise LockAcquireTimeout(product_id, key, timeout)

    logger.debug("Acquired lock %r for %s", key, product_id)
    try:
        yield key
    finally:
        be.release(key)
