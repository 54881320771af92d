"""
pricing.py — Price and Quantity Parsing

Storefronts post prices the way they render them: "43,250.00", "$999", "12,50 €" or
plain JSON numbers. `parse_price` turns all of these into the two-decimal string
Shopify expects, or None when the value is unusable.
"""

import math
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Any, Optional

CENTS = Decimal("0.01")

_NON_PRICE_CHARS = re.compile(r"[^\d.,-]")
_DECIMAL_COMMA = re.compile(r",\d{1,2}$")
_PLAIN_NUMBER = re.compile(r"-?(\d+\.?\d*|\.\d+)")
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def _resolve_separators(text: str) -> str:
    if "," not in text:
        return text
    if "." in text:
        # "1.234,50" -> comma is the decimal separator, "1,234.50" -> thousands
        if text.rfind(",") > text.rfind("."):
            return text.replace(".", "").replace(",", ".")
        return text.replace(",", "")
    if text.count(",") == 1 and _DECIMAL_COMMA.search(text):
        return text.replace(",", ".")
    return text.replace(",", "")


def _to_decimal(value: Any) -> Optional[Decimal]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, Decimal)):
        return Decimal(value)
    if isinstance(value, float):
        return Decimal(repr(value)) if math.isfinite(value) else None

    cleaned = _resolve_separators(_NON_PRICE_CHARS.sub("", str(value)))
    if not _PLAIN_NUMBER.fullmatch(cleaned):
        return None
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return None


def parse_price(value: Any) -> Optional[str]:
    """
    Parses a customer-supplied price into a positive two-decimal string.

    Args:
        value: String or number from the request body.

    Returns:
        str | None: e.g. "43250.00", or None if the value is missing, not numeric,
        not finite, or not positive after rounding to cents.
    """
    if value is None:
        return None

    amount = _to_decimal(value)
    if amount is None or not amount.is_finite():
        return None

    # quantize fails once the result has more digits than the context precision
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + 4)
        cents = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    if cents <= 0:
        return None
    return f"{cents:.2f}"


def parse_quantity(value: Any, default: int = 1) -> int:
    """Parses an integer prefix ("3", "3 pcs", 2.7); falls back to `default` when not positive."""
    quantity = None

    if isinstance(value, bool):
        quantity = None
    elif isinstance(value, int):
        quantity = value
    elif isinstance(value, float):
        quantity = int(value) if math.isfinite(value) else None
    elif isinstance(value, str):
        match = _INT_PREFIX.match(value)
        quantity = int(match.group(1)) if match else None

    if quantity is None or quantity <= 0:
        return default
    return quantity
