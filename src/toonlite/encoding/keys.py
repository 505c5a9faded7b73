"""Abbreviations for well-known field names used by the flattener."""

from __future__ import annotations

from types import MappingProxyType

KEY_ABBREVIATIONS = MappingProxyType({
    "items": "i",
    "item": "i",
    "customer": "c",
    "quantity": "q",
    "price": "p",
    "orderId": "oid",
    "status": "st",
    "total": "t",
    "name": "n",
    "email": "e",
    # kept whole so it cannot meet "status" -> "st"
    "sku": "sku",
})

# Applied under an item prefix, where "sku" no longer competes with "status".
ITEM_KEY_ABBREVIATIONS = MappingProxyType({
    "items": "i",
    "item": "i",
    "sku": "s",
    "quantity": "q",
    "price": "p",
})


def in_item_context(context: str) -> bool:
    return "item" in context or "i" in context


def shorten_key(key: str, context: str = "") -> str:
    """Return the abbreviation for ``key`` given the accumulated prefix."""
    if in_item_context(context) and key in ITEM_KEY_ABBREVIATIONS:
        return ITEM_KEY_ABBREVIATIONS[key]
    return KEY_ABBREVIATIONS.get(key, key)
