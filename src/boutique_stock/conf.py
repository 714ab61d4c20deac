from typing import Any

from django.conf import settings

DEFAULTS: dict[str, Any] = {
    # Lock key template, formatted with `product_id`.
    # "stock" serializes every adjustment in the process;
    # "stock:{product_id}" serializes per product.
    "BOUTIQUE_STOCK_LOCK_KEY": "stock",
    # Seconds to wait for the lock; None waits forever.
    "BOUTIQUE_STOCK_LOCK_TIMEOUT": 3.0,
}


def get_setting(name: str) -> Any:
    """Return a Django setting, falling back to the app default."""
    return getattr(settings, name, DEFAULTS[name])
