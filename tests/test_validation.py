import json

import pytest

from boutique_stock.exceptions import QuantityValidationError
from boutique_stock.validation import (
    MAX_QUANTITY_CHANGE,
    coerce_quantity_change,
    parse_stock_payload,
)


@pytest.mark.parametrize("value, expected", [(-3, -3), (0, 0), (20, 20), (3.0, 3), (-2.0, -2)])
def test_coerce_accepts_integers(value, expected):
    result = coerce_quantity_change(value)

    assert result == expected
    assert type(result) is int


@pytest.mark.parametrize(
    "value",
    [True, False, 1.5, float("nan"), float("inf"), "3", "-1", None, [1], {"n": 1}],
)
def test_coerce_rejects_non_integers(value):
    with pytest.raises(QuantityValidationError):
        coerce_quantity_change(value)


@pytest.mark.parametrize(
    "value",
    [MAX_QUANTITY_CHANGE + 1, -MAX_QUANTITY_CHANGE - 1, 2**63, 1e19, -1e19],
)
def test_coerce_rejects_out_of_range(value):
    with pytest.raises(QuantityValidationError):
        coerce_quantity_change(value)


def test_coerce_accepts_range_limits():
    assert coerce_quantity_change(MAX_QUANTITY_CHANGE) == MAX_QUANTITY_CHANGE
    assert coerce_quantity_change(-MAX_QUANTITY_CHANGE) == -MAX_QUANTITY_CHANGE


def test_parse_payload_rejects_huge_json_integer():
    with pytest.raises(QuantityValidationError):
        parse_stock_payload(b'{"quantityChange": 9223372036854775808}')


def test_parse_payload_returns_delta():
    assert parse_stock_payload(json.dumps({"quantityChange": -4}).encode()) == -4


@pytest.mark.parametrize(
    "body",
    [b"", b"not json", b"[1, 2]", b'{"qty": 1}', b'{"quantityChange": "5"}', b"\xff\xfe"],
)
def test_parse_payload_rejects_malformed_bodies(body):
    with pytest.raises(QuantityValidationError):
        parse_stock_payload(body)
