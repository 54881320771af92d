"""
validation.py — Request Body Validation

Turns the raw JSON body posted by the storefront into an `IncomingOrderRequest`,
translating every failure into a `ValidationError` the response mapper understands.
"""

import json
from typing import Any

import pydantic

from .config import ServiceConfig
from .errors import ValidationError
from .models import IncomingOrderRequest


def parse_body(raw: bytes) -> Any:
    """Decodes the request body; an empty body counts as an empty object."""
    if not raw or not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError) as e:
        raise ValidationError("invalid_body", "Invalid JSON body") from e


def validate_request(body: Any, config: ServiceConfig) -> IncomingOrderRequest:
    """
    Validates a decoded request body.

    Args:
        body: The decoded JSON body.
        config (ServiceConfig): Service configuration (strict variant mode).

    Returns:
        IncomingOrderRequest: The validated, normalized request.

    Raises:
        ValidationError: 'invalid_body' if the body is not a JSON object,
            'missing_price' / 'invalid_price' for the custom price,
            'missing_variant' in strict mode without a variantId.
    """
    if not isinstance(body, dict):
        raise ValidationError("invalid_body", "Request body must be a JSON object")

    if body.get("customPrice") in (None, ""):
        raise ValidationError("missing_price", "Missing required field: customPrice")

    try:
        order = IncomingOrderRequest.model_validate(body)
    except pydantic.ValidationError as e:
        fields = {str(err["loc"][0]) for err in e.errors() if err.get("loc")}
        if "customPrice" in fields:
            raise ValidationError("invalid_price", "Invalid custom price") from e
        raise ValidationError("invalid_body", f"Invalid request fields: {', '.join(sorted(fields))}") from e

    if config.require_variant_id and order.variantId is None:
        raise ValidationError("missing_variant", "Missing required fields: variantId, customPrice")

    return order
