import json

import pytest
from fastapi.testclient import TestClient

from draft_order_service import main
from draft_order_service.config import ServiceConfig
from draft_order_service.main import create_app
from mock_services.mock_shopify import SHOP_DOMAIN

STOREFRONT = "https://lxryroom.com"
STOREFRONT_WWW = "https://www.lxryroom.com"


@pytest.fixture()
def client(config, mock_transport):
    with TestClient(create_app(config, transport=mock_transport)) as test_client:
        yield test_client


def test_custom_price_checkout(client, last_draft_order):
    response = client.post("/", json={"variantId": 4001, "customPrice": "43,250.00"}, headers={"Origin": STOREFRONT})

    assert response.status_code == 200
    body = response.json()
    created = last_draft_order()
    assert body == {
        "success": True,
        "draftOrderId": created["id"],
        "checkoutUrl": created["invoice_url"],
        "message": "Draft order created successfully",
    }
    line_item = created["line_items"][0]
    assert line_item["price"] == "43250.00"
    assert {"name": "Calculated Price", "value": "43250.00"} in line_item["properties"]
    assert response.headers["Access-Control-Allow-Origin"] == STOREFRONT


def test_legacy_path_is_served(client):
    response = client.post("/api/draft-order-checkout", json={"customPrice": "99"})

    assert response.status_code == 200
    assert response.json()["success"] is True


def test_checkout_url_is_synthesized_without_invoice_url(client, last_draft_order):
    response = client.post("/", json={"customPrice": "99", "customerEmail": "noinvoice_1@example.com"})

    draft_order_id = last_draft_order()["id"]
    assert response.status_code == 200
    assert response.json()["checkoutUrl"] == f"https://{SHOP_DOMAIN}/draft_orders/{draft_order_id}/checkout"


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "PATCH"])
def test_other_methods_are_not_allowed(client, method):
    response = client.request(method, "/")

    assert response.status_code == 405
    assert response.json() == {"error": "Method not allowed"}
    assert response.headers["Access-Control-Allow-Methods"] == "POST, OPTIONS"


def test_preflight(client):
    response = client.options("/", headers={"Origin": STOREFRONT_WWW, "Access-Control-Request-Method": "POST"})

    assert response.status_code == 204
    assert response.content == b""
    assert response.headers["Access-Control-Allow-Origin"] == STOREFRONT_WWW
    assert response.headers["Vary"] == "Origin"
    assert response.headers["Access-Control-Allow-Headers"] == "Content-Type, Authorization"
    assert response.headers["Access-Control-Max-Age"] == "86400"


def test_unknown_origin_gets_first_allowed_origin(client):
    response = client.post("/", json={"customPrice": "10"}, headers={"Origin": "https://evil.example"})

    assert response.headers["Access-Control-Allow-Origin"] == STOREFRONT
    assert "Access-Control-Max-Age" not in response.headers


def test_validation_errors(client):
    invalid_price = client.post("/", json={"customPrice": "free"})
    missing_price = client.post("/", json={"variantId": 4001})
    bad_json = client.post("/", content=b"{oops", headers={"Content-Type": "application/json"})

    assert invalid_price.status_code == 400
    assert invalid_price.json() == {"error": "Invalid custom price"}
    assert missing_price.status_code == 400
    assert missing_price.json() == {"error": "Missing required field: customPrice"}
    assert bad_json.status_code == 400
    assert bad_json.json() == {"error": "Invalid JSON body"}


def test_upstream_rejection_is_passed_through(client):
    response = client.post("/", json={"customPrice": "10", "customerEmail": "reject_1@example.com"})

    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "Failed to create draft order"
    assert json.loads(body["details"]) == {"errors": {"customer": ["is invalid"]}}


def test_upstream_success_without_id_is_bad_gateway(client):
    response = client.post("/", json={"customPrice": "10", "customerEmail": "noid_1@example.com"})

    assert response.status_code == 502
    assert response.json() == {"error": "Draft order created, but response was missing an ID"}


def test_missing_configuration(mock_transport):
    app = create_app(ServiceConfig(), transport=mock_transport)
    with TestClient(app) as test_client:
        response = test_client.post("/", json={"customPrice": "10"}, headers={"Origin": STOREFRONT_WWW})
        health = test_client.get("/health")

    assert response.status_code == 500
    assert response.json() == {"error": "Server not configured: missing SHOP_DOMAIN or SHOPIFY_ADMIN_TOKEN"}
    assert response.headers["Access-Control-Allow-Origin"] == STOREFRONT_WWW
    assert health.json() == {"status": "ok", "configured": False}


def test_unexpected_error_is_internal_server_error(client, monkeypatch):
    async def explode(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(main, "process_draft_order", explode)

    response = client.post("/", json={"customPrice": "10"})

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error", "message": "boom"}


def test_health(client):
    assert client.get("/health").json() == {"status": "ok", "configured": True}


def test_missing_configuration_wins_over_malformed_body(mock_transport):
    app = create_app(ServiceConfig(), transport=mock_transport)
    with TestClient(app) as test_client:
        response = test_client.post("/", content=b"{oops", headers={"Content-Type": "application/json"})

    assert response.status_code == 500
    assert response.json() == {"error": "Server not configured: missing SHOP_DOMAIN or SHOPIFY_ADMIN_TOKEN"}


@pytest.mark.parametrize(
    ("price", "expected"),
    [("111111111111111111111111111111", "111111111111111111111111111111.00"), (1e300, "1" + "0" * 300 + ".00")],
)
def test_very_large_price_is_formatted_not_internal_error(client, last_draft_order, price, expected):
    response = client.post("/", json={"customPrice": price})

    assert response.status_code == 200
    assert last_draft_order()["line_items"][0]["price"] == expected
