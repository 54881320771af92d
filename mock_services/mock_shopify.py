"""
mock_shopify.py — Mock Implementation of the Shopify Admin REST API

This module provides a simulated Shopify Admin API for testing the draft order service.
It exposes a simple FastAPI application that mimics the three endpoints the service uses,
backed by a small in-memory catalog.

Simulation Scenarios (selected by the customer email of the draft order):
    • Successful draft order creation (any other or no email)
    • Rejected draft order (HTTP 422) — email starts with "reject_"
    • Created but no id in the response — email starts with "noid_"
    • Created without an invoice URL — email starts with "noinvoice_"

Endpoints:
    POST /admin/api/{version}/draft_orders.json — Creates a draft order.
    GET  /admin/api/{version}/variants/{id}.json — Returns a catalog variant.
    GET  /admin/api/{version}/products/{id}.json — Returns a catalog product.

Port:
    Default: 8002 (HTTP)
"""

import itertools
import logging
import os

from fastapi import Body, FastAPI, Header
from fastapi.responses import JSONResponse

app = FastAPI(title="Mock Shopify Admin API")
logging.basicConfig(level=logging.INFO)

SHOP_DOMAIN = os.environ.get("MOCK_SHOP_DOMAIN", "mock-shop.myshopify.com")
ACCESS_TOKEN = os.environ.get("MOCK_SHOPIFY_TOKEN", "shpat_mock")

PRODUCTS = {
    7001: {"id": 7001, "title": "Aurora Diamond Ring"},
    7002: {"id": 7002, "title": "Classic Gold Chain"},
}
VARIANTS = {
    4001: {"id": 4001, "product_id": 7001, "title": "Size 6 / Platinum", "price": "52000.00"},
    4002: {"id": 4002, "product_id": 7002, "title": "Default Title", "price": "1800.00"},
    # Variant whose product was deleted
    4003: {"id": 4003, "product_id": 7999, "title": "Orphan", "price": "10.00"},
}

_draft_order_ids = itertools.count(900001)
# Draft orders created during this process, newest last
CREATED_DRAFT_ORDERS = []


def _unauthorized(token):
    if token != ACCESS_TOKEN:
        logging.warning("[SHOPIFY] Ungültiger Access Token.")
        return JSONResponse(status_code=401, content={"errors": "[API] Invalid API key or access token"})
    return None


def _not_found():
    return JSONResponse(status_code=404, content={"errors": "Not Found"})


@app.get("/admin/api/{version}/variants/{variant_id}.json")
def get_variant(version: str, variant_id: int, token: str = Header(None, alias="X-Shopify-Access-Token")):
    """Returns a catalog variant, 404 for unknown ids."""
    denied = _unauthorized(token)
    if denied:
        return denied
    variant = VARIANTS.get(variant_id)
    return {"variant": variant} if variant else _not_found()


@app.get("/admin/api/{version}/products/{product_id}.json")
def get_product(version: str, product_id: int, token: str = Header(None, alias="X-Shopify-Access-Token")):
    """Returns a catalog product, 404 for unknown ids."""
    denied = _unauthorized(token)
    if denied:
        return denied
    product = PRODUCTS.get(product_id)
    return {"product": product} if product else _not_found()


@app.post("/admin/api/{version}/draft_orders.json")
def create_draft_order(
        version: str,
        payload: dict = Body(...),
        token: str = Header(None, alias="X-Shopify-Access-Token")
):
    """
    Creates a draft order.

    Args:
        version (str): Admin API version from the path.
        payload (dict): Body of the form {"draft_order": {...}}.
        token (str): Admin access token from the X-Shopify-Access-Token header.

    Returns:
        dict: {"draft_order": {...}} with id, invoice_url, line_items and tags
        (HTTP 201), or the simulated failure for the scenario.
    """
    denied = _unauthorized(token)
    if denied:
        return denied

    draft_order = payload.get("draft_order") or {}
    email = (draft_order.get("customer") or {}).get("email") or ""
    logging.info(f"[SHOPIFY] Draft Order Anfrage (Kunde: {email or '-'})")

    if not draft_order.get("line_items"):
        return JSONResponse(status_code=422, content={"errors": {"line_items": ["must not be empty"]}})

    # Scenario simulation
    if email.startswith("reject_"):
        logging.warning("[SHOPIFY] Draft Order abgelehnt.")
        return JSONResponse(status_code=422, content={"errors": {"customer": ["is invalid"]}})

    if email.startswith("noid_"):
        return JSONResponse(status_code=201, content={"draft_order": {"status": "open"}})

    draft_order_id = next(_draft_order_ids)
    created = dict(draft_order, id=draft_order_id, status="open")
    if not email.startswith("noinvoice_"):
        created["invoice_url"] = f"https://{SHOP_DOMAIN}/invoices/{draft_order_id}abc"
    CREATED_DRAFT_ORDERS.append(created)

    # Success case
    logging.info(f"[SHOPIFY] Draft Order {draft_order_id} angelegt.")
    return JSONResponse(status_code=201, content={"draft_order": created})


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8002)
