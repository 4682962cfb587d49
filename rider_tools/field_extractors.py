"""
Field Extractors

Independent scanners over the full normalized text. Each one applies a
ruleset from the pattern registry and returns one facet of the rider:
artists, rooms, contacts, allergies and special requirements.

The extractors are pure functions of (text, config) and do not depend on
each other, so they can run in any order.
"""

import re
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from .config import ParsingConfig, DEFAULT_PARSING_CONFIG
from .patterns import (
    PatternRule,
    ARTIST_RULES,
    ROOM_RULES,
    CONTACT_NAME_RULE,
    EMAIL_PATTERN,
    PHONE_PATTERN,
    ALLERGY_RULES,
    SPECIAL_RULES,
    FOLLOWING_TEXT_PATTERN,
    COMMON_ALLERGENS,
)
from .rider_models import Contact, Room
from .text_normalizer import clean_name, clean_phone, clean_allergy

logger = logging.getLogger(__name__)


@dataclass
class FieldExtraction:
    """Output of all field extractors for one document."""
    artists: List[str] = field(default_factory=list)
    rooms: List[Room] = field(default_factory=list)
    contacts: List[Contact] = field(default_factory=list)
    allergies: List[str] = field(default_factory=list)
    special_requirements: List[str] = field(default_factory=list)


def apply_ruleset(text: str, rules: Sequence[PatternRule]) -> Iterator[Tuple[PatternRule, re.Match]]:
    """Yield (rule, match) for every match of every rule, rule by rule."""
    for rule in rules:
        for match in rule.pattern.finditer(text):
            yield rule, match


# =============================================================================
# Match Handlers
# =============================================================================

def _capture(match: re.Match, text: str, config: ParsingConfig) -> Optional[str]:
    return match.group(1)


def _temperature(match: re.Match, text: str, config: ParsingConfig) -> Optional[str]:
    return f"Temperature: {match.group(1)}°{match.group(2).upper()}"


def _full_match(match: re.Match, text: str, config: ParsingConfig) -> Optional[str]:
    return f"Timing: {match.group(0).strip()}"


def _following_text(match: re.Match, text: str, config: ParsingConfig) -> Optional[str]:
    context = text[match.end():match.end() + config.must_have_context_length]
    item_match = FOLLOWING_TEXT_PATTERN.search(context)
    if not item_match:
        return None
    item_text = item_match.group(0).strip()
    return f"Must Have: {item_text}" if item_text else None


HANDLERS: Dict[str, Callable[[re.Match, str, ParsingConfig], Optional[str]]] = {
    "capture": _capture,
    "temperature": _temperature,
    "full_match": _full_match,
    "following_text": _following_text,
}


# =============================================================================
# Extractors
# =============================================================================

def extract_artists(text: str, config: ParsingConfig = DEFAULT_PARSING_CONFIG) -> List[str]:
    """
    Find artist / performer names.

    Results from all artist rules merge into one list in first-seen order;
    exact duplicates are suppressed.
    """
    artists: Dict[str, None] = {}
    for rule, match in apply_ruleset(text, ARTIST_RULES):
        artist = clean_name(HANDLERS[rule.handler](match, text, config))
        if artist and len(artist) >= config.min_artist_name_length:
            artists.setdefault(artist, None)
    return list(artists)


def extract_rooms(text: str) -> List[Room]:
    """
    Find rooms.

    The first occurrence of each room id wins across all room rules, so ids
    are unique within one extraction.
    """
    rooms = []
    seen = set()
    for rule, match in apply_ruleset(text, ROOM_RULES):
        room_id = HANDLERS[rule.handler](match, text, DEFAULT_PARSING_CONFIG)
        if not room_id or room_id in seen:
            continue
        seen.add(room_id)
        description = None
        if match.re.groups >= 2 and match.group(2):
            description = clean_name(match.group(2)) or None
        rooms.append(Room(id=room_id, description=description))
    return rooms


def extract_contacts(text: str, config: ParsingConfig = DEFAULT_PARSING_CONFIG) -> List[Contact]:
    """
    Find named contacts and the email / phone closest around each name.

    Email and phone are searched in a fixed window around the name, which
    can misattribute details in dense multi-contact blocks.
    """
    contacts = []
    for match in CONTACT_NAME_RULE.pattern.finditer(text):
        name = clean_name(match.group(1))
        if not name:
            continue

        window = text[
            max(0, match.start() - config.contact_window_before):
            min(len(text), match.start() + config.contact_window_after)
        ]
        email_match = EMAIL_PATTERN.search(window)
        phone_match = PHONE_PATTERN.search(window)

        contacts.append(Contact(
            name=name,
            role="Tour Manager" if "Manager" in match.group(0) else "Contact",
            email=email_match.group(1) if email_match else None,
            phone=clean_phone(phone_match.group(0)) if phone_match else None,
        ))
    return contacts


def extract_allergies(text: str, config: ParsingConfig = DEFAULT_PARSING_CONFIG) -> List[str]:
    """
    Find allergies and dietary restrictions.

    Every allergen from the vocabulary contained in a (short enough) match
    is reported; short matches are also reported verbatim.
    """
    allergies: Dict[str, None] = {}
    for rule, match in apply_ruleset(text, ALLERGY_RULES):
        allergy = clean_allergy(HANDLERS[rule.handler](match, text, config) or "")
        if not allergy or len(allergy) >= config.allergy_max_length:
            continue

        lowered = allergy.lower()
        for common in COMMON_ALLERGENS:
            if common in lowered:
                allergies.setdefault(common, None)

        if len(allergy) < config.allergy_verbatim_max_length:
            allergies.setdefault(allergy, None)
    return list(allergies)


def extract_special_requirements(text: str, config: ParsingConfig = DEFAULT_PARSING_CONFIG) -> List[str]:
    """Temperature, timing and must-have requirements, in rule order. Not deduplicated."""
    requirements = []
    for rule, match in apply_ruleset(text, SPECIAL_RULES):
        requirement = HANDLERS[rule.handler](match, text, config)
        if requirement:
            requirements.append(requirement)
    return requirements


def extract_fields(text: str, config: ParsingConfig = DEFAULT_PARSING_CONFIG) -> FieldExtraction:
    """Run every field extractor over the same text."""
    fields = FieldExtraction(
        artists=extract_artists(text, config),
        rooms=extract_rooms(text),
        contacts=extract_contacts(text, config),
        allergies=extract_allergies(text, config),
        special_requirements=extract_special_requirements(text, config),
    )
    logger.debug(
        f"Fields: {len(fields.artists)} artists, {len(fields.rooms)} rooms, "
        f"{len(fields.contacts)} contacts, {len(fields.allergies)} allergies, "
        f"{len(fields.special_requirements)} requirements"
    )
    return fields
