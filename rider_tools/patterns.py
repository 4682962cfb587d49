"""
Pattern Registry for Rider Parsing

Static matching rules consumed by every extractor: artist, room, contact,
allergy and special-requirement rules, category headers and keywords,
quantity words, unit keywords, brands and the allergen vocabulary.

Rules are tagged data (kind, pattern, handler). Extractors apply a ruleset
to the text and dispatch on the handler tag, so each ruleset can be tested
on its own. Nothing in this module executes matching logic.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Pattern, Tuple


@dataclass(frozen=True)
class PatternRule:
    """A single matching rule."""
    kind: str              # facet the rule feeds ('artist', 'room', ...)
    pattern: Pattern
    handler: str = "capture"   # how a match becomes a value


def _rule(kind: str, regex: str, handler: str = "capture", flags: int = re.IGNORECASE) -> PatternRule:
    return PatternRule(kind=kind, pattern=re.compile(regex, flags), handler=handler)


# Horizontal whitespace only; normalized text keeps line breaks meaningful
_HS = r"[^\S\n]"

# Name-like run that stays on one line
_NAME = r"[A-Z][A-Za-z &'\-.]"

DEFAULT_CATEGORY = "General"
DEFAULT_UNIT = "item"


# =============================================================================
# Facet Rules
# =============================================================================

ARTIST_RULES: List[PatternRule] = [
    # "Artist: Jane Doe", "Performer - The Band"
    _rule("artist", rf"\b(?:artist|performer|talent|act)[ :]+({_NAME}+?)(?:\n|tour|rider|dressing|management|$)"),
    # "Jane Doe Tour Rider", "The Band's Rider"
    _rule("artist", rf"({_NAME}+?)(?:'s)? +(?:tour +)?rider"),
    # "for Jane Doe", "featuring The Band", "presents Jane Doe"
    _rule("artist", rf"\b(?:for|featuring|presents?)[ :]+({_NAME}+?)(?:\n|tour|rider|$)"),
    # "Dressing Room 1 - Jane Doe"
    _rule("artist", rf"dressing +room +\d+ *[-–:] *({_NAME}+)"),
]

ROOM_RULES: List[PatternRule] = [
    # "Dressing Room 2 - Headliner", "Room A", "DR 3", "Area 1: Crew"
    _rule(
        "room",
        rf"\b(?:dressing\s+room|room|dr|d\.r\.|area){_HS}*#?{_HS}*(\d+|[A-Z])\b"
        rf"{_HS}*[-–:)]?{_HS}*([^\n]+)?",
    ),
    _rule(
        "room",
        rf"\b(?:green\s+room|backstage|production\s+office|hospitality){_HS}*#?{_HS}*(\d+|[A-Z])?\b",
    ),
    _rule(
        "room",
        rf"\b(?:artist|talent|performer)\s+(?:room|area){_HS}*#?{_HS}*(\d+|[A-Z])?\b",
    ),
]

CONTACT_NAME_RULE = _rule(
    "contact",
    r"\b(?:contact|manager|coordinator|director)[ :]+([A-Z][A-Za-z ]+?)(?=\n|phone|cell|email|@|$)",
)

EMAIL_PATTERN = re.compile(r"([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})")

PHONE_PATTERN = re.compile(r"(?:\+?1?\s*)?(?:\(?\d{3}\)?[\s.\-]?)?\d{3}[\s.\-]?\d{4}")

ALLERGY_RULES: List[PatternRule] = [
    # "Allergies: peanuts", "no shellfish", "avoid dairy"
    _rule(
        "allergy",
        r"\b(?:allerg(?:y|ic|ies)|cannot\s+have|no|avoid|restrictions?)\b[ :]*(?:(?:to|for)\b)? *([^\n.]+)",
    ),
    # "Do not provide pork"
    _rule("allergy", r"\bdo\s+not\s+(?:provide|include|serve)[ :]*([^\n.]+)"),
    # "** Peanut allergy"
    _rule("allergy", r"\*+\s*([^\n]+?)\s+(?:allergy|allergic|restriction)"),
]

MUST_HAVE_PATTERN = re.compile(
    r"\b(?:must\s+have|essential|required|mandatory|critical)\b", re.IGNORECASE
)

SPECIAL_RULES: List[PatternRule] = [
    # "68 F", "20°C"
    _rule("temperature", rf"(\d+){_HS}*°?{_HS}*([CF])\b", handler="temperature"),
    # "by 6:00 pm", "before 2 hours"
    _rule(
        "timing",
        r"\b(?:by|before|after|at)\s+(\d{1,2}:\d{2}\s*(?:am|pm)?|\d{1,2}\s*(?:hours?|hrs?|minutes?|mins?))\b",
        handler="full_match",
    ),
    _rule("must_have", MUST_HAVE_PATTERN.pattern, handler="following_text"),
]

# First run of letters/spaces after a must-have keyword
FOLLOWING_TEXT_PATTERN = re.compile(r"[A-Za-z][A-Za-z ]*")


# =============================================================================
# Line Classification Rules
# =============================================================================

CATEGORY_PATTERNS: List[Pattern] = [
    re.compile(p, re.IGNORECASE) for p in (
        r"^(?:beverages?|drinks?|alcohol|liquor|bar|spirits)\b",
        r"^(?:food|catering|meals?|snacks?|fruit|vegetables?)\b",
        r"^(?:equipment|technical|production|av|audio|video|lighting)\b",
        r"^(?:furniture|furnishings?|decor|amenities)\b",
        r"^(?:toiletries|personal\s+care|hygiene|bathroom)\b",
        r"^(?:flowers?|arrangements?|decorations?)\b",
        r"^(?:hospitality|service|staff|crew)\b",
        r"^(?:security|access|credentials|passes)\b",
        r"^(?:transportation|parking|vehicles?)\b",
        r"^(?:wardrobe|clothing|laundry|costumes?)\b",
    )
]

# Checked in order; the first category with a matching keyword wins
CATEGORY_KEYWORDS: Dict[str, List[str]] = {
    'beverages': ['water', 'soda', 'juice', 'tea', 'coffee', 'beer', 'wine', 'vodka', 'whiskey',
                  'tequila', 'rum', 'champagne', 'drinks', 'bottle', 'can', 'beverage'],
    'food': ['sandwich', 'salad', 'fruit', 'vegetable', 'snack', 'meal', 'dinner', 'lunch',
             'breakfast', 'pizza', 'chips', 'candy', 'chocolate', 'nuts', 'cheese', 'meat',
             'chicken', 'beef', 'fish'],
    'equipment': ['microphone', 'speaker', 'cable', 'stand', 'light', 'projector', 'screen',
                  'computer', 'laptop', 'printer', 'phone', 'charger', 'adapter', 'extension'],
    'furniture': ['chair', 'table', 'sofa', 'couch', 'desk', 'lamp', 'mirror', 'rug', 'carpet',
                  'stool', 'bench', 'rack', 'shelf', 'cabinet'],
    'toiletries': ['soap', 'shampoo', 'towel', 'tissue', 'toilet', 'toothbrush', 'toothpaste',
                   'deodorant', 'lotion', 'cream', 'razor', 'cotton', 'wipes'],
    'wardrobe': ['iron', 'steamer', 'hanger', 'rack', 'laundry', 'dry cleaning', 'pressing',
                 'garment', 'costume', 'outfit', 'clothing'],
    'hospitality': ['tea', 'coffee', 'sugar', 'cream', 'milk', 'honey', 'lemon', 'ice', 'napkin',
                    'plate', 'cup', 'glass', 'utensil', 'service'],
}

# Whole-word keyword matchers (plurals allowed), built once from CATEGORY_KEYWORDS
CATEGORY_KEYWORD_PATTERNS: List[Tuple[str, Pattern]] = [
    (
        category,
        re.compile(
            r"\b(?:" + "|".join(re.escape(k).replace(r"\ ", r"\s+") for k in keywords) + r")(?:e?s)?\b",
            re.IGNORECASE,
        ),
    )
    for category, keywords in CATEGORY_KEYWORDS.items()
]

CATEGORY_ALIASES: Dict[str, str] = {
    'BEVERAGES': 'Beverages',
    'DRINKS': 'Beverages',
    'FOOD': 'Food',
    'CATERING': 'Food',
    'EQUIPMENT': 'Equipment',
    'TECH': 'Equipment',
    'FURNITURE': 'Furniture',
    'TOILETRIES': 'Personal Care',
    'PERSONAL CARE': 'Personal Care',
    'HOSPITALITY': 'Hospitality',
}

# Short all-caps line such as "HOT FOOD & SNACKS"
UPPERCASE_HEADER_PATTERN = re.compile(r"^[A-Z\s&]+$")

# Lines opening with a list marker or a quantity are item lines, never headers
ITEM_LINE_PREFIX_PATTERN = re.compile(
    r"^(?:[\-•*]|\(\d+\)|\d+\b|(?:one|two|three|four|five|six|seven|eight|nine|ten|"
    r"eleven|twelve|dozen|half[\s-]dozen)\s)",
    re.IGNORECASE,
)

# Optional leading quantity, optional "(N)", the item name, optional " - note"
ITEM_PATTERN = re.compile(
    r"^[\s\-•*]*"
    r"(?:(\d+|one|two|three|four|five|six|seven|eight|nine|ten|eleven|twelve|half[\s-]dozen|dozen)\s+)?"
    r"(?:\((\d+)\)\s*)?"
    r"(.+?)"
    r"(?:\s+[-–]\s+(.+))?$",
    re.IGNORECASE,
)


# =============================================================================
# Item Vocabulary
# =============================================================================

QUANTITY_WORDS: Dict[str, int] = {
    'one': 1,
    'two': 2,
    'three': 3,
    'four': 4,
    'five': 5,
    'six': 6,
    'seven': 7,
    'eight': 8,
    'nine': 9,
    'ten': 10,
    'eleven': 11,
    'twelve': 12,
    'dozen': 12,
    'half dozen': 6,
    'case': 24,
    'pair': 2,
    'couple': 2,
    'few': 3,
    'several': 4,
    'many': 6,
}

# Ordered; first match wins. Participles (bottled, canned) count as the unit.
UNIT_PATTERNS: List[Tuple[str, Pattern]] = [
    (unit, re.compile(regex, re.IGNORECASE)) for unit, regex in (
        ('bottle', r"\bbottle[sd]?\b"),
        ('can', r"\bcan(?:s|ned)?\b"),
        ('case', r"\bcases?\b"),
        ('pack', r"\bpacks?\b"),
        ('box', r"\bbox(?:es|ed)?\b"),
        ('bag', r"\bbag(?:s|ged)?\b"),
        ('dozen', r"\bdozens?\b"),
        ('pound', r"\b(?:pounds?|lbs?)\b"),
        ('gallon', r"\bgallons?\b"),
        ('liter', r"\b(?:liters?|litres?)\b"),
    )
]

# Checked in listed order by case-sensitive containment.
# Bottled-water labels are left out so water stays a generic, substitutable item.
BRANDS: List[str] = [
    'Coca-Cola', 'Coke', 'Pepsi', 'Sprite', 'Dr Pepper',
    'Red Bull', 'Monster', 'Rockstar',
    'Hennessy', 'Grey Goose', 'Patron', 'Don Julio', 'Casamigos',
    'Dove', 'Gillette', 'Colgate', 'Crest',
]

COMMON_ALLERGENS: List[str] = [
    'nuts', 'peanuts', 'tree nuts', 'almonds', 'cashews', 'walnuts', 'pecans',
    'dairy', 'milk', 'cheese', 'lactose', 'butter', 'cream',
    'gluten', 'wheat', 'bread', 'flour',
    'shellfish', 'shrimp', 'lobster', 'crab', 'oysters',
    'eggs', 'egg',
    'soy', 'soybean',
    'fish', 'salmon', 'tuna', 'cod',
    'sesame', 'sesame seeds',
    'sulfites', 'preservatives',
]
