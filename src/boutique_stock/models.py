from django.db import models


class Product(models.Model):
    """
    One stock record per product.

    `stock_level` is only changed through `StockRepository.update_stock`,
    which bumps `version` in the same statement.
    """

    id = models.CharField(max_length=64, primary_key=True)
    sku = models.CharField(max_length=64, unique=True)
    name = models.CharField(max_length=255)
    category = models.CharField(max_length=64)
    stock_level = models.IntegerField(default=0)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    version = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "products"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(stock_level__gte=0),
                name="products_stock_level_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.sku} ({self.stock_level}, v{self.version})"
