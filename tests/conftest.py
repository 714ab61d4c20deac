"""
Test setup: a minimal Django project on a temporary SQLite file.

A file (not ":memory:") is used so that threads, each with their own Django
connection, see the same database. WAL mode lets readers proceed while a
writer holds the lock.
"""

import os
import tempfile

import pytest


def pytest_configure(config) -> None:
    from django.conf import settings

    if settings.configured:
        return

    db_dir = tempfile.mkdtemp(prefix="boutique-stock-")

    settings.configure(
        SECRET_KEY="test",
        INSTALLED_APPS=["boutique_stock"],
        ROOT_URLCONF="boutique_stock.urls",
        ALLOWED_HOSTS=["testserver"],
        MIDDLEWARE=[],
        DATABASES={
            "default": {
                "ENGINE": "django.db.backends.sqlite3",
                "NAME": os.path.join(db_dir, "stock.sqlite3"),
                "OPTIONS": {
                    "timeout": 20,
                    "init_command": "PRAGMA journal_mode=WAL;",
                },
            }
        },
        TIME_ZONE="UTC",
        USE_TZ=True,
    )

    import django
    from django.core.management import call_command

    django.setup()
    call_command("migrate", verbosity=0)


@pytest.fixture(autouse=True)
def _clean_products():
    """Every test starts with an empty products table."""
    from boutique_stock.models import Product

    Product.objects.all().delete()
    yield
    Product.objects.all().delete()


@pytest.fixture
def repo():
    from boutique_stock.repository import StockRepository

    return StockRepository()


@pytest.fixture
def make_product(repo):
    """Create a product at version 0 with the given stock level."""
    def _make(product_id: str = "P1", stock_level: int = 10, **fields):
        fields.setdefault("sku", f"SKU-{product_id}")
        fields.setdefault("name", f"Product {product_id}")
        fields.setdefault("category", "Saree")
        fields.setdefault("price", "1299.00")
        return repo.create(product_id, stock_level=stock_level, **fields)

    return _make


@pytest.fixture
def at_version():
    """Put a row at a given version, as if it had been mutated before."""
    from boutique_stock.models import Product

    def _set(product_id: str, version: int) -> None:
        Product.objects.filter(pk=product_id).update(version=version)

    return _set
