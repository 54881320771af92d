"""
workflow.py — Core Logic for Custom-Price Draft Orders

This module contains the request pipeline behind the checkout endpoint.
It runs the steps strictly in sequence for a single request.

Workflow Overview:
1. Validate and normalize the storefront payload
2. Build the line item (variant-referenced or custom, with best-effort title lookup)
3. Create the draft order via the Shopify Admin API (REST)
4. Return the draft order id and checkout URL
"""

import logging
from typing import Any, Dict, Optional

from .clients import ShopifyClient
from .config import LineItemStrategy, ServiceConfig
from .errors import ConfigurationError
from .models import DraftOrderLineItem, DraftOrderResult, IncomingOrderRequest
from .properties import normalize_properties
from .validation import validate_request

log = logging.getLogger(__name__)

DEFAULT_TITLE = "Custom Item"
DRAFT_ORDER_TAGS = ["custom-pricing", "draft-order-checkout"]


def _log_prefix(order: IncomingOrderRequest) -> str:
    return f"[Variant: {order.variantId}]" if order.variantId is not None else "[Custom]"


async def build_line_item(
        order: IncomingOrderRequest,
        config: ServiceConfig,
        shopify: Optional[ShopifyClient] = None,
) -> DraftOrderLineItem:
    """
    Builds the single line item of the draft order.

    With the `variant` strategy and a known variant, the item references the catalog
    variant and Shopify applies the override price. Otherwise a custom item without a
    catalog reference is built, since Shopify does not reliably honor price overrides on
    variant lines. Its title comes from a best-effort catalog lookup and falls back to
    "Custom Item".

    Args:
        order (IncomingOrderRequest): Validated request.
        config (ServiceConfig): Strategy, title lookup and enrichment switches.
        shopify (ShopifyClient | None): Client for the title lookup, skipped if None.

    Returns:
        DraftOrderLineItem: The line item ready for the draft order payload.
    """
    properties = normalize_properties(
        order.properties,
        order.customPrice,
        product_id=order.productId,
        variant_id=order.variantId,
        enrich=config.property_enrichment,
    )

    if config.line_item_strategy == LineItemStrategy.VARIANT and order.variantId is not None:
        return DraftOrderLineItem(
            variant_id=order.variantId,
            quantity=order.quantity,
            price=order.customPrice,
            properties=properties,
        )

    title = None
    if config.title_lookup and shopify is not None and order.variantId is not None:
        title = await shopify.lookup_line_item_title(order.variantId, order.productId)
        if title is None:
            log.info(f"{_log_prefix(order)} Kein Produkttitel gefunden, verwende '{DEFAULT_TITLE}'.")

    return DraftOrderLineItem(
        title=title or DEFAULT_TITLE,
        quantity=order.quantity,
        price=order.customPrice,
        properties=properties,
        requires_shipping=True,
        taxable=False,
    )


def build_draft_order(order: IncomingOrderRequest, line_item: DraftOrderLineItem) -> Dict[str, Any]:
    """Assembles the `draft_order` object; customer and note are omitted when absent."""
    draft_order: Dict[str, Any] = {"line_items": [line_item.to_payload()]}
    if order.customerEmail:
        draft_order["customer"] = {"email": order.customerEmail}
    if order.note:
        draft_order["note"] = order.note
    draft_order["use_customer_default_address"] = True
    draft_order["tags"] = list(DRAFT_ORDER_TAGS)
    return draft_order


async def process_draft_order(body: Any, config: ServiceConfig, shopify: ShopifyClient) -> DraftOrderResult:
    """
    Executes the complete draft order pipeline for a single request.

    Args:
        body: Decoded JSON body from the storefront.
        config (ServiceConfig): Process-wide configuration.
        shopify (ShopifyClient): Open Shopify client for this request.

    Returns:
        DraftOrderResult: Draft order id and checkout URL.

    Raises:
        ConfigurationError: Shop domain or access token missing.
        ValidationError: Body invalid, price missing or not a positive amount.
        UpstreamError: Shopify rejected the order, was unreachable, or returned no id.
    """
    if not config.is_configured:
        raise ConfigurationError()

    order = validate_request(body, config)
    log_prefix = _log_prefix(order)
    log.info(f"{log_prefix} Neue Preisanfrage erhalten: {order.customPrice} x {order.quantity}.")

    # --- 1. Line Item ---
    line_item = await build_line_item(order, config, shopify)
    kind = "Custom-Artikel" if line_item.is_custom else "Varianten-Artikel"
    log.info(f"{log_prefix} {kind} erstellt (Titel: {line_item.title}).")

    # --- 2. Draft Order (REST) ---
    result = await shopify.create_draft_order(build_draft_order(order, line_item))
    log.info(f"{log_prefix} Draft Order {result.id} erfolgreich angelegt.")
    return result
