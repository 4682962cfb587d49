"""
Item Builder

Turns a single item line into an Item: quantity, unit, brand, notes and
the must-have flag, attached to the running category and room.
"""

import re
from typing import Optional

from .config import ParsingConfig, DEFAULT_PARSING_CONFIG
from .patterns import (
    ITEM_PATTERN,
    MUST_HAVE_PATTERN,
    QUANTITY_WORDS,
    UNIT_PATTERNS,
    BRANDS,
    DEFAULT_CATEGORY,
    DEFAULT_UNIT,
)
from .rider_models import Item
from .text_normalizer import clean_item_name


def parse_quantity(value: Optional[str]) -> int:
    """
    Resolve a numeric or written quantity.

    Examples:
        "3" -> 3, "two" -> 2, "half-dozen" -> 6, "some" -> 1, None -> 1
    """
    if not value:
        return 1

    value = value.strip()
    if value.isdigit():
        quantity = int(value)
        return quantity if quantity > 0 else 1

    key = re.sub(r"[\s\-]+", " ", value.lower())
    return QUANTITY_WORDS.get(key, 1)


def detect_unit(name: str) -> str:
    """First unit keyword found in the name, else 'item'."""
    for unit, pattern in UNIT_PATTERNS:
        if pattern.search(name):
            return unit
    return DEFAULT_UNIT


def detect_brand(name: str) -> Optional[str]:
    """First listed brand contained in the name."""
    for brand in BRANDS:
        if brand in name:
            return brand
    return None


def is_must_have(line: str) -> bool:
    return MUST_HAVE_PATTERN.search(line) is not None


def parse_item(
    line: str,
    category: str = DEFAULT_CATEGORY,
    room: Optional[str] = None,
    config: ParsingConfig = DEFAULT_PARSING_CONFIG
) -> Optional[Item]:
    """
    Parse one line into an Item.

    Quantity precedence: "(N)" override, then a leading number or number
    word, then 1.

    Args:
        line: A single trimmed line of rider text
        category: Running category for the line
        room: Running room id, if any
        config: Parsing thresholds

    Returns:
        Item, or None if the line has no usable item name
    """
    match = ITEM_PATTERN.match(line)
    if not match or not match.group(3):
        return None

    name = clean_item_name(match.group(3))
    if not name or len(name) < config.min_item_length:
        return None

    notes = match.group(4).strip() if match.group(4) else None

    return Item(
        name=name,
        quantity=parse_quantity(match.group(2) or match.group(1)),
        unit=detect_unit(name),
        brand=detect_brand(name),
        room=room,
        category=category,
        notes=notes or None,
        must_have=is_must_have(line),
    )
