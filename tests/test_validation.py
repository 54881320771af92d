import pytest

from draft_order_service.config import ServiceConfig
from draft_order_service.errors import ValidationError
from draft_order_service.validation import parse_body, validate_request


def test_only_custom_price_is_required(config):
    order = validate_request({"customPrice": "43,250.00"}, config)

    assert order.customPrice == "43250.00"
    assert order.quantity == 1
    assert order.variantId is None
    assert order.productId is None
    assert order.properties is None


def test_full_request_is_normalized(config):
    order = validate_request(
        {
            "variantId": 4001,
            "productId": " 7001 ",
            "quantity": "2",
            "customPrice": 150,
            "customerEmail": "  buyer@example.com ",
            "note": "",
            "properties": {"Engraving": "AB"},
            "unknownField": "ignored",
        },
        config,
    )

    assert order.variantId == 4001
    assert order.productId == "7001"
    assert order.quantity == 2
    assert order.customPrice == "150.00"
    assert order.customerEmail == "buyer@example.com"
    assert order.note is None
    assert order.properties == {"Engraving": "AB"}


@pytest.mark.parametrize("body", [None, [], "customPrice=10", 42])
def test_body_must_be_an_object(config, body):
    with pytest.raises(ValidationError) as exc_info:
        validate_request(body, config)
    assert exc_info.value.code == "invalid_body"


@pytest.mark.parametrize("body", [{}, {"customPrice": None}, {"customPrice": ""}, {"variantId": 1}])
def test_missing_price(config, body):
    with pytest.raises(ValidationError) as exc_info:
        validate_request(body, config)
    assert exc_info.value.code == "missing_price"


@pytest.mark.parametrize("price", ["abc", "0", "-10", 0, False])
def test_invalid_price(config, price):
    with pytest.raises(ValidationError) as exc_info:
        validate_request({"customPrice": price}, config)
    assert exc_info.value.code == "invalid_price"
    assert exc_info.value.message == "Invalid custom price"


def test_blank_identifiers_and_odd_properties_are_dropped(config):
    order = validate_request({"customPrice": "5", "variantId": "", "productId": 0, "properties": "x"}, config)

    assert order.variantId is None
    assert order.productId is None
    assert order.properties is None


def test_strict_mode_requires_variant():
    strict = ServiceConfig(shop_domain="shop", access_token="token", require_variant_id=True)

    with pytest.raises(ValidationError) as exc_info:
        validate_request({"customPrice": "10"}, strict)
    assert exc_info.value.code == "missing_variant"

    assert validate_request({"customPrice": "10", "variantId": "4001"}, strict).variantId == "4001"


def test_parse_body():
    assert parse_body(b"") == {}
    assert parse_body(b'{"customPrice": "1"}') == {"customPrice": "1"}
    with pytest.raises(ValidationError) as exc_info:
        parse_body(b"{not json")
    assert exc_info.value.code == "invalid_body"


@pytest.mark.parametrize(
    ("price", "expected"),
    [("111111111111111111111111111111", "111111111111111111111111111111.00"), (1e300, "1" + "0" * 300 + ".00")],
)
def test_prices_beyond_default_decimal_precision(config, price, expected):
    assert validate_request({"customPrice": price}, config).customPrice == expected
