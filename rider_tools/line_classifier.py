"""
Line Classifier

Single forward pass over the normalized text, one line at a time. The
running context (current category, current room) is an immutable
ClassifierState threaded from line to line, so each step can be tested
in isolation:

    state = ClassifierState()
    for line in lines:
        classified = classify_line(line, state)
        state = classified.state

Headers switch the category and never produce an item. Room markers
switch the room and still fall through to item parsing. Neither is ever
reset by blank lines or later headers.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .config import ParsingConfig, DEFAULT_PARSING_CONFIG
from .item_builder import parse_item
from .patterns import (
    CATEGORY_PATTERNS,
    CATEGORY_KEYWORD_PATTERNS,
    CATEGORY_ALIASES,
    UPPERCASE_HEADER_PATTERN,
    ITEM_LINE_PREFIX_PATTERN,
    MUST_HAVE_PATTERN,
    ROOM_RULES,
    DEFAULT_CATEGORY,
)
from .rider_models import Item

logger = logging.getLogger(__name__)


class LineKind(Enum):
    """What a single line turned out to be."""
    BLANK = "blank"
    CATEGORY_HEADER = "category_header"
    ROOM_MARKER = "room_marker"
    ITEM = "item"
    UNPARSED = "unparsed"


@dataclass(frozen=True)
class ClassifierState:
    """Running context carried between lines."""
    category: str = DEFAULT_CATEGORY
    room: Optional[str] = None


@dataclass(frozen=True)
class ClassifiedLine:
    """One step of the fold: the line, its kind, the state after it, and its item."""
    line: str
    kind: LineKind
    state: ClassifierState
    item: Optional[Item] = None


def standardize_category_name(name: str) -> str:
    """
    Map a raw header to its display name.

    Examples:
        "BEVERAGES" -> "Beverages", "Toiletries:" -> "Personal Care",
        "HOT FOOD" -> "Hot food"
    """
    cleaned = name.strip().rstrip(":").strip()
    alias = CATEGORY_ALIASES.get(cleaned.upper())
    if alias:
        return alias
    lowered = cleaned.lower()
    return lowered[:1].upper() + lowered[1:]


def detect_category(line: str, config: ParsingConfig = DEFAULT_PARSING_CONFIG) -> Optional[str]:
    """
    Return the standardized category name if the line is a header, else None.

    A header is a category pattern match, a line containing a category
    keyword, or a short all-caps line. Lines that open like an item (list
    marker or quantity) are never headers, nor are mixed-case lines that
    carry a must-have keyword. An all-caps "MUST HAVE" is still a header.
    """
    if ITEM_LINE_PREFIX_PATTERN.match(line):
        return None
    if MUST_HAVE_PATTERN.search(line) and not UPPERCASE_HEADER_PATTERN.match(line):
        return None

    for pattern in CATEGORY_PATTERNS:
        if pattern.search(line):
            return standardize_category_name(line)

    for category, pattern in CATEGORY_KEYWORD_PATTERNS:
        if pattern.search(line):
            return standardize_category_name(category)

    if len(line) < config.max_category_length and UPPERCASE_HEADER_PATTERN.match(line):
        return standardize_category_name(line)

    return None


def detect_room_context(line: str) -> Optional[str]:
    """Room id named on this line, if any."""
    for rule in ROOM_RULES:
        match = rule.pattern.search(line)
        if match and match.group(1):
            return match.group(1)
    return None


def classify_line(
    line: str,
    state: ClassifierState,
    config: ParsingConfig = DEFAULT_PARSING_CONFIG
) -> ClassifiedLine:
    """Classify one line against the incoming state."""
    line = line.strip()
    if not line:
        return ClassifiedLine(line, LineKind.BLANK, state)

    category = detect_category(line, config)
    if category:
        return ClassifiedLine(
            line, LineKind.CATEGORY_HEADER,
            ClassifierState(category=category, room=state.room),
        )

    kind = LineKind.ITEM
    room = detect_room_context(line)
    if room:
        state = ClassifierState(category=state.category, room=room)
        kind = LineKind.ROOM_MARKER

    item = parse_item(line, category=state.category, room=state.room, config=config)
    if item is None and kind is LineKind.ITEM:
        kind = LineKind.UNPARSED

    return ClassifiedLine(line, kind, state, item)


def classify_lines(text: str, config: ParsingConfig = DEFAULT_PARSING_CONFIG) -> List[ClassifiedLine]:
    """Fold classify_line over every line of the text."""
    results = []
    state = ClassifierState()
    for line in text.split("\n"):
        classified = classify_line(line, state, config)
        results.append(classified)
        state = classified.state
    return results


def collect_items(
    text: str,
    config: ParsingConfig = DEFAULT_PARSING_CONFIG
) -> Tuple[List[Item], Dict[str, List[Item]]]:
    """
    Run the classifier and gather its output.

    Returns:
        (items in document order, category name -> items). Every header
        seen gets a bucket, even if no item follows it.
    """
    items: List[Item] = []
    categories: Dict[str, List[Item]] = {}

    for classified in classify_lines(text, config):
        if classified.kind is LineKind.CATEGORY_HEADER:
            categories.setdefault(classified.state.category, [])
        if classified.item is not None:
            items.append(classified.item)
            categories.setdefault(classified.item.category, []).append(classified.item)

    logger.debug(f"Classifier: {len(items)} items in {len(categories)} categories")
    return items, categories
