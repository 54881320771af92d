import math

import pytest

from draft_order_service.pricing import parse_price, parse_quantity


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("43,250.00", "43250.00"),
        ("1,234.50", "1234.50"),
        ("999", "999.00"),
        ("$1,299.999", "1300.00"),
        ("12,50", "12.50"),
        ("1.234,50", "1234.50"),
        ("1,234", "1234.00"),
        ("USD 19.9", "19.90"),
        (150, "150.00"),
        (19.99, "19.99"),
        (0.005, "0.01"),
        ("1" * 30, "1" * 30 + ".00"),
        (1e300, "1" + "0" * 300 + ".00"),
        (10 ** 40, "1" + "0" * 40 + ".00"),
    ],
)
def test_parse_price_accepts_storefront_formats(raw, expected):
    assert parse_price(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [None, "", "abc", "0", "0.00", "-5", "-1,000.00", "0.001", "1.2.3", "12-5", "-", True, math.inf, math.nan],
)
def test_parse_price_rejects_unusable_values(raw):
    assert parse_price(raw) is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, 1),
        (5, 5),
        ("3", 3),
        ("3 pcs", 3),
        (2.7, 2),
        ("0", 1),
        (-2, 1),
        ("abc", 1),
        (True, 1),
        (math.inf, 1),
    ],
)
def test_parse_quantity_falls_back_to_one(raw, expected):
    assert parse_quantity(raw) == expected
