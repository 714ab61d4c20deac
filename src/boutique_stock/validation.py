from __future__ import annotations

import json
import math
from typing import Any

from .exceptions import QuantityValidationError

QUANTITY_FIELD = "quantityChange"

# Largest accepted |delta|. Keeps stock_level + delta inside a signed
# 64-bit database integer.
MAX_QUANTITY_CHANGE = 2**31 - 1


def coerce_quantity_change(value: Any) -> int:
    """
    Coerce a loosely typed quantity change into a strict int.

    Accepts ints and integral floats (JSON may send ``3.0``) whose magnitude
    is at most MAX_QUANTITY_CHANGE. Rejects bools, fractional or non-finite
    floats, out-of-range values, strings, None and everything else.
    """
    # bool is a subclass of int
    if isinstance(value, bool):
        raise QuantityValidationError(f"{QUANTITY_FIELD} must be an integer, got a boolean")

    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise QuantityValidationError(
                f"{QUANTITY_FIELD} must be a whole number, got {value!r}"
            )
        value = int(value)

    if not isinstance(value, int):
        raise QuantityValidationError(
            f"{QUANTITY_FIELD} must be a number, got {type(value).__name__}"
        )

    if abs(value) > MAX_QUANTITY_CHANGE:
        raise QuantityValidationError(
            f"{QUANTITY_FIELD} must be between -{MAX_QUANTITY_CHANGE} "
            f"and {MAX_QUANTITY_CHANGE}, got {value}"
        )

    return value


def parse_stock_payload(body: bytes) -> int:
    """Decode a ``{"quantityChange": n}`` request body into the delta."""
    try:
        payload = json.loads(body or b"null")
    except (ValueError, UnicodeDecodeError) as e:
        raise QuantityValidationError("Request body must be valid JSON") from e

    if not isinstance(payload, dict):
        raise QuantityValidationError("Request body must be a JSON object")

    if QUANTITY_FIELD not in payload:
        raise QuantityValidationError(f"{QUANTITY_FIELD} is required")

    return coerce_quantity_change(payload[QUANTITY_FIELD])
