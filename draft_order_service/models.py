"""
models.py — Data Models for Draft Order Creation

This module defines the request-scoped data structures of the service. It uses
Pydantic models to validate the incoming storefront payload and to shape the
payload sent to the Shopify Admin API.

Models:
    - IncomingOrderRequest: The JSON body posted by the storefront.
    - DraftOrderLineItem: A single line item in Shopify's draft order schema.
    - DraftOrderResult: The created draft order's id and checkout URL.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .pricing import parse_price, parse_quantity

Identifier = Union[int, str]


class IncomingOrderRequest(BaseModel):
    """
    Represents a custom-price checkout request from the storefront.

    Attributes:
        variantId (int | str | None): Shopify variant to price, optional enrichment.
        productId (int | str | None): Shopify product, informational.
        quantity (int): Number of units. Non-numeric or non-positive input becomes 1.
        customPrice (str): Unit price, normalized to two fraction digits (e.g. "43250.00").
        customerEmail (str | None): Email to attach the draft order to.
        note (str | None): Order note.
        properties (dict | list | None): Line item properties in mapping or list form.
    """
    model_config = ConfigDict(extra="ignore")

    variantId: Optional[Identifier] = None
    productId: Optional[Identifier] = None
    quantity: int = 1
    customPrice: str
    customerEmail: Optional[str] = None
    note: Optional[str] = None
    properties: Optional[Union[Dict[str, Any], List[Any]]] = None

    @field_validator("variantId", "productId", mode="before")
    @classmethod
    def _blank_id_is_missing(cls, value):
        if value is None or value == "" or value is False or value == 0:
            return None
        if isinstance(value, str):
            return value.strip() or None
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if not isinstance(value, int):
            return str(value)
        return value

    @field_validator("quantity", mode="before")
    @classmethod
    def _parse_quantity(cls, value):
        return parse_quantity(value)

    @field_validator("customPrice", mode="before")
    @classmethod
    def _parse_price(cls, value):
        price = parse_price(value)
        if price is None:
            raise ValueError("Invalid custom price")
        return price

    @field_validator("customerEmail", "note", mode="before")
    @classmethod
    def _blank_text_is_missing(cls, value):
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @field_validator("properties", mode="before")
    @classmethod
    def _ignore_unknown_property_shapes(cls, value):
        return value if isinstance(value, (dict, list)) else None


class DraftOrderLineItem(BaseModel):
    """
    A draft order line item in Shopify's schema.

    Variant-referenced items carry `variant_id`; custom items carry `title`,
    `requires_shipping` and `taxable` instead. Unset fields are left out of the payload.
    """
    title: Optional[str] = None
    variant_id: Optional[Identifier] = None
    quantity: int = Field(..., gt=0)
    price: str
    properties: List[Dict[str, str]] = Field(default_factory=list)
    requires_shipping: Optional[bool] = None
    taxable: Optional[bool] = None

    @property
    def is_custom(self) -> bool:
        return self.variant_id is None

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class DraftOrderResult(BaseModel):
    """
    The draft order created on Shopify.

    Attributes:
        id (int | str): Shopify draft order id.
        checkout_url (str): Invoice URL, or the synthesized checkout URL.
    """
    id: Identifier
    checkout_url: str
