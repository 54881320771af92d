"""
config.py — Process-wide Configuration for the Draft Order Service

The configuration is read from the environment exactly once, at process start, and
handed to the FastAPI app as an immutable `ServiceConfig` value. Request handlers never
touch `os.environ` themselves.

Environment variables:
    SHOP_DOMAIN / SHOPIFY_DOMAIN                 Shop domain, e.g. "fr8wj4-xj.myshopify.com"
    SHOPIFY_ADMIN_TOKEN / SHOPIFY_ACCESS_TOKEN   Admin REST token with draft_orders write
    SHOPIFY_API_VERSION                          Admin API version (default "2024-01")
    SHOPIFY_TIMEOUT_SECONDS                      Outbound timeout, unset means no timeout
    LINE_ITEM_STRATEGY                           "custom" (default) or "variant"
    TITLE_LOOKUP                                 Look up product titles for custom items
    PROPERTY_ENRICHMENT                          Add "Product ID" / "Variant ID" properties
    REQUIRE_VARIANT_ID                           Reject requests without a variantId
    ALLOWED_ORIGINS                              Comma-separated CORS allow-list
    CORS_MAX_AGE                                 Preflight cache in seconds (0 disables)
"""

import os
from enum import Enum
from typing import Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_API_VERSION = "2024-01"

# Storefront origins; the first one is the fallback for unknown origins.
DEFAULT_ALLOWED_ORIGINS = (
    "https://lxryroom.com",
    "https://www.lxryroom.com",
)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class LineItemStrategy(str, Enum):
    """How the draft order line item is built."""
    CUSTOM = "custom"
    VARIANT = "variant"


class ServiceConfig(BaseModel):
    """
    Immutable configuration value injected into the app at startup.

    Attributes:
        shop_domain (str | None): Shop domain without scheme.
        access_token (str | None): Admin API access token.
        api_version (str): Pinned Admin REST API version.
        timeout_seconds (float | None): Outbound request timeout, None for no timeout.
        line_item_strategy (LineItemStrategy): Variant-referenced or custom line items.
        title_lookup (bool): Whether custom items get a product title from Shopify.
        property_enrichment (bool): Whether Product ID / Variant ID properties are added.
        require_variant_id (bool): Strict input mode requiring a variantId.
        allowed_origins (tuple[str, ...]): CORS allow-list, first entry is the default.
        cors_max_age (int): Preflight cache duration, 0 to omit the header.
    """
    model_config = ConfigDict(frozen=True)

    shop_domain: Optional[str] = None
    access_token: Optional[str] = None
    api_version: str = DEFAULT_API_VERSION
    timeout_seconds: Optional[float] = Field(default=None, gt=0)
    line_item_strategy: LineItemStrategy = LineItemStrategy.CUSTOM
    title_lookup: bool = True
    property_enrichment: bool = True
    require_variant_id: bool = False
    allowed_origins: Tuple[str, ...] = Field(default=DEFAULT_ALLOWED_ORIGINS, min_length=1)
    cors_max_age: int = Field(default=86400, ge=0)

    @property
    def is_configured(self) -> bool:
        return bool(self.shop_domain and self.access_token)

    @property
    def admin_base_url(self) -> str:
        return f"https://{self.shop_domain}/admin/api/{self.api_version}"


def _first(env: Mapping[str, str], *names: str) -> Optional[str]:
    for name in names:
        value = (env.get(name) or "").strip()
        if value:
            return value
    return None


def _flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = (env.get(name) or "").strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    return default


def load_config(env: Optional[Mapping[str, str]] = None) -> ServiceConfig:
    """
    Builds the service configuration from environment variables.

    Missing shop domain or token does not raise here: the service still starts and
    every draft order request fails fast with a ConfigurationError instead.

    Args:
        env (Mapping[str, str] | None): Variables to read, defaults to `os.environ`.

    Returns:
        ServiceConfig: The frozen configuration value.

    Raises:
        pydantic.ValidationError: If a variable holds an unusable value
            (unknown strategy, negative max age, non-numeric timeout).
    """
    env = os.environ if env is None else env

    values = {
        "shop_domain": _first(env, "SHOP_DOMAIN", "SHOPIFY_DOMAIN"),
        "access_token": _first(env, "SHOPIFY_ADMIN_TOKEN", "SHOPIFY_ACCESS_TOKEN"),
        "title_lookup": _flag(env, "TITLE_LOOKUP", True),
        "property_enrichment": _flag(env, "PROPERTY_ENRICHMENT", True),
        "require_variant_id": _flag(env, "REQUIRE_VARIANT_ID", False),
    }

    api_version = _first(env, "SHOPIFY_API_VERSION")
    if api_version:
        values["api_version"] = api_version

    timeout = _first(env, "SHOPIFY_TIMEOUT_SECONDS")
    if timeout:
        values["timeout_seconds"] = timeout

    strategy = _first(env, "LINE_ITEM_STRATEGY")
    if strategy:
        values["line_item_strategy"] = strategy.lower()

    origins = _first(env, "ALLOWED_ORIGINS")
    if origins:
        values["allowed_origins"] = tuple(o.strip().rstrip("/") for o in origins.split(",") if o.strip())

    max_age = _first(env, "CORS_MAX_AGE")
    if max_age:
        values["cors_max_age"] = max_age

    return ServiceConfig.model_validate(values)
