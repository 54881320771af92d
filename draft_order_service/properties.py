"""
properties.py — Line Item Property Normalization

Storefronts send line item properties either as a mapping ({"Engraving": "AB"}) or
as Shopify's list form ([{"name": "Engraving", "value": "AB"}]). This module turns
both into the canonical list form, with names unique case-insensitively.
"""

import json
from typing import Any, Dict, List, Optional, Tuple

CALCULATED_PRICE = "Calculated Price"
PRODUCT_ID = "Product ID"
VARIANT_ID = "Variant ID"


def stringify(value: Any) -> str:
    """Renders a property value the way the storefront would display it."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


class LineItemProperties:
    """
    Ordered name/value pairs keyed by lower-cased name.

    The first occurrence of a name wins on insertion; `upsert` replaces an entry and
    moves it to the end.
    """

    def __init__(self):
        self._entries: Dict[str, Tuple[str, str]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._entries

    def get(self, name: str) -> Optional[str]:
        entry = self._entries.get(name.lower())
        return entry[1] if entry else None

    def add(self, name: str, value: str) -> bool:
        """Adds an entry unless the name is already present. Returns True if added."""
        key = name.lower()
        if key in self._entries:
            return False
        self._entries[key] = (name, value)
        return True

    def setdefault(self, name: str, value: str) -> str:
        self.add(name, value)
        return self._entries[name.lower()][1]

    def remove(self, name: str) -> None:
        self._entries.pop(name.lower(), None)

    def upsert(self, name: str, value: str) -> None:
        self.remove(name)
        self._entries[name.lower()] = (name, value)

    def to_list(self) -> List[Dict[str, str]]:
        return [{"name": name, "value": value} for name, value in self._entries.values()]


def collect_properties(raw: Any) -> LineItemProperties:
    """
    Reads caller-supplied properties in mapping or list form.

    Mapping form skips empty keys. List form keeps only entries that are objects with
    a string `name`. Anything else yields an empty collection.
    """
    props = LineItemProperties()

    if isinstance(raw, dict):
        for name, value in raw.items():
            if not name:
                continue
            props.add(str(name), stringify(value))
    elif isinstance(raw, list):
        for entry in raw:
            if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
                continue
            props.add(entry["name"], stringify(entry.get("value")))

    return props


def normalize_properties(
        raw: Any,
        price: str,
        product_id: Optional[Any] = None,
        variant_id: Optional[Any] = None,
        enrich: bool = True,
) -> List[Dict[str, str]]:
    """
    Builds the final property list for a draft order line item.

    Any caller-supplied "Calculated Price" (in any casing) is replaced by the
    validated price. With `enrich`, "Product ID" and "Variant ID" are appended when
    the identifiers are known and the caller did not already set them.

    Args:
        raw: Properties from the request body (mapping, list or None).
        price (str): Validated unit price, two fraction digits.
        product_id: Optional product identifier.
        variant_id: Optional variant identifier.
        enrich (bool): Whether to append the identifier properties.

    Returns:
        list[dict]: Entries of the form {"name": ..., "value": ...}.
    """
    props = collect_properties(raw)
    props.upsert(CALCULATED_PRICE, price)

    if enrich:
        if product_id is not None:
            props.setdefault(PRODUCT_ID, stringify(product_id))
        if variant_id is not None:
            props.setdefault(VARIANT_ID, stringify(variant_id))

    return props.to_list()
