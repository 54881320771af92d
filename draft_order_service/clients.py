"""
This module provides the communication client for the Shopify Admin REST API used by
the draft order service:
- Draft order creation (POST draft_orders.json)
- Best-effort catalog lookups for line item titles (GET variants / products)
The client encapsulates the protocol logic, error translation, and connection management.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from .config import ServiceConfig
from .errors import UpstreamError
from .models import DraftOrderResult

log = logging.getLogger(__name__)

DEFAULT_VARIANT_TITLE = "Default Title"
CHECKOUT_URL_TEMPLATE = "https://{domain}/draft_orders/{draft_order_id}/checkout"


class ShopifyClient:
    """
    Async client for the Shopify Admin REST API.
    One instance is opened per request and closed when the request finishes.
    """
    def __init__(self, config: ServiceConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initializes the HTTP client against the shop's pinned Admin API version.
        Args:
            config (ServiceConfig): Configuration with shop domain and access token.
            transport (httpx.AsyncBaseTransport | None): Optional transport, e.g. the mock Shopify app.
        """
        self.config = config
        timeout_config = httpx.Timeout(config.timeout_seconds)
        self.client = httpx.AsyncClient(
            base_url=config.admin_base_url,
            timeout=timeout_config,
            transport=transport,
            headers={
                "Content-Type": "application/json",
                "X-Shopify-Access-Token": config.access_token or "",
            },
        )

    async def __aenter__(self) -> "ShopifyClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def aclose(self):
        """Closes the HTTP client session."""
        await self.client.aclose()

    async def create_draft_order(self, draft_order: Dict[str, Any]) -> DraftOrderResult:
        """
        Creates a draft order via the Shopify Admin API.
        Args:
            draft_order (dict): The `draft_order` object (line items, customer, note, tags).
        Returns:
            DraftOrderResult: Draft order id and checkout URL.
        Raises:
            UpstreamError: Non-success status (upstream status and raw body), transport
                failure (502) or a success response without a draft order id (502).
        """
        try:
            response = await self.client.post("/draft_orders.json", json={"draft_order": draft_order})
        except httpx.HTTPError as e:
            log.error(f"Shopify nicht erreichbar beim Anlegen der Draft Order: {e!r}")
            raise UpstreamError(502, "unreachable", "Failed to reach Shopify", details=str(e) or repr(e)) from e

        if not response.is_success:
            log.error(f"Draft Order abgelehnt (HTTP {response.status_code}): {response.text}")
            raise UpstreamError(
                response.status_code, "rejected", "Failed to create draft order", details=response.text
            )

        try:
            payload = response.json()
        except ValueError:
            payload = None

        created = payload.get("draft_order") if isinstance(payload, dict) else None
        draft_order_id = created.get("id") if isinstance(created, dict) else None
        if not draft_order_id:
            log.error(f"Draft Order angelegt, aber Antwort ohne ID (HTTP {response.status_code}).")
            raise UpstreamError(502, "missing_id", "Draft order created, but response was missing an ID")

        checkout_url = created.get("invoice_url") or CHECKOUT_URL_TEMPLATE.format(
            domain=self.config.shop_domain, draft_order_id=draft_order_id
        )
        return DraftOrderResult(id=draft_order_id, checkout_url=checkout_url)

    async def _get_resource(self, path: str, key: str) -> Optional[Dict[str, Any]]:
        try:
            response = await self.client.get(path)
            response.raise_for_status()
            resource = response.json().get(key)
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            log.warning(f"Lookup {path} fehlgeschlagen, verwende Standardtitel: {e!r}")
            return None
        return resource if isinstance(resource, dict) else None

    async def fetch_variant(self, variant_id) -> Optional[Dict[str, Any]]:
        """Returns the variant object, or None if it could not be fetched."""
        return await self._get_resource(f"/variants/{variant_id}.json", "variant")

    async def fetch_product(self, product_id) -> Optional[Dict[str, Any]]:
        """Returns the product object, or None if it could not be fetched."""
        return await self._get_resource(f"/products/{product_id}.json", "product")

    async def lookup_line_item_title(self, variant_id, product_id=None) -> Optional[str]:
        """
        Derives a line item title from the catalog ("Product - Variant").
        This lookup is best-effort: it never raises.
        Args:
            variant_id: Shopify variant id.
            product_id: Fallback product id if the variant does not name one.
        Returns:
            str | None: The title, or None if no product title could be determined.
        """
        variant = await self.fetch_variant(variant_id)
        if variant and variant.get("product_id"):
            product_id = variant["product_id"]
        if not product_id:
            return None

        product = await self.fetch_product(product_id)
        product_title = str((product or {}).get("title") or "").strip()
        if not product_title:
            return None

        variant_title = str((variant or {}).get("title") or "").strip()
        if variant_title and variant_title != DEFAULT_VARIANT_TITLE:
            return f"{product_title} - {variant_title}"
        return product_title
