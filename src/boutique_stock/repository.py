from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from django.db.models import F

from .exceptions import QuantityValidationError
from .models import Product


@dataclass(frozen=True)
class StockRecord:
    """
    Read-only snapshot of a product row.

    Snapshots are never written back; the only write path is
    `StockRepository.update_stock`.
    """
    id: str
    sku: str
    name: str
    category: str
    stock_level: int
    price: Decimal
    version: int

    @classmethod
    def from_model(cls, product: Product) -> StockRecord:
        return cls(
            id=product.id,
            sku=product.sku,
            name=product.name,
            category=product.category,
            stock_level=product.stock_level,
            price=product.price,
            version=product.version,
        )


class StockRepository:
    """
    Persistence operations for stock records.

    `update_stock` is a single conditional UPDATE, so the database enforces
    the version check and the non-negative result even when no application
    lock is held.
    """

    def find_by_id(self, product_id: str) -> StockRecord | None:
        product = Product.objects.filter(pk=product_id).first()
        if product is None:
            return None
        return StockRecord.from_model(product)

    def update_stock(self, product_id: str, delta: int, expected_version: int) -> bool:
        """
        Apply `delta` if the row is still at `expected_version`.

        Equivalent SQL::

            UPDATE products
               SET stock_level = stock_level + %s, version = version + 1
             WHERE id = %s AND version = %s AND stock_level >= -%s

        Returns True if the row changed. On False, nothing changed.
        """
        changed = (
            Product.objects
            .filter(pk=product_id, version=expected_version, stock_level__gte=-delta)
            .update(stock_level=F("stock_level") + delta, version=F("version") + 1)
        )
        return changed > 0

    def get_all(self) -> list[StockRecord]:
        return [StockRecord.from_model(p) for p in Product.objects.order_by("id")]

    def create(
        self,
        product_id: str,
        *,
        sku: str,
        name: str,
        category: str,
        stock_level: int = 0,
        price: Decimal | int | str = 0,
    ) -> StockRecord:
        """Add a product to inventory at version 0."""
        if stock_level < 0:
            raise QuantityValidationError(
                f"Initial stock level must not be negative, got {stock_level}"
            )
        product = Product.objects.create(
            id=product_id,
            sku=sku,
            name=name,
            category=category,
            stock_level=stock_level,
            price=Decimal(str(price)),
            version=0,
        )
        return StockRecord.from_model(product)
