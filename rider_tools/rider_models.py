"""
Rider Data Model

StructuredRider is the result of one parse: artists, rooms, category
buckets, the flat item list, allergies, contacts and special requirements.
Serializes to the camelCase JSON schema shared with external extractors,
and coerces loosely-shaped external payloads back into the model.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .patterns import DEFAULT_CATEGORY, DEFAULT_UNIT

logger = logging.getLogger(__name__)


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _coerce_quantity(value: Any) -> int:
    """Positive integer quantity; anything unusable becomes 1."""
    try:
        quantity = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 1
    return quantity if quantity > 0 else 1


TRUTHY_STRINGS = {"true", "yes", "1"}


def _coerce_bool(value: Any) -> bool:
    """Strings count as true only when they spell true, yes or 1."""
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_STRINGS
    if isinstance(value, (bool, int, float)):
        return bool(value)
    return False


def _entries(value: Any) -> list:
    return value if isinstance(value, list) else []


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(v).strip() for v in value if isinstance(v, (str, int, float)) and str(v).strip()]


@dataclass(frozen=True)
class Item:
    """A single requested item."""
    name: str
    quantity: int = 1
    unit: str = DEFAULT_UNIT
    brand: Optional[str] = None
    room: Optional[str] = None          # room id, looked up at aggregation time
    category: str = DEFAULT_CATEGORY
    notes: Optional[str] = None
    must_have: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "brand": self.brand,
            "room": self.room,
            "category": self.category,
            "notes": self.notes,
            "mustHave": self.must_have,
        }

    @classmethod
    def from_dict(cls, data: Any, category: Optional[str] = None) -> Optional["Item"]:
        """
        Build an Item from an external payload entry.

        Returns None for entries that are not dicts or have no name.
        """
        if not isinstance(data, dict):
            return None
        name = _optional_str(data.get("name"))
        if not name:
            return None
        room = data.get("room")
        return cls(
            name=name,
            quantity=_coerce_quantity(data.get("quantity", 1)),
            unit=_optional_str(data.get("unit")) or DEFAULT_UNIT,
            brand=_optional_str(data.get("brand")),
            room=_optional_str(room) if room is not None else None,
            category=_optional_str(data.get("category")) or category or DEFAULT_CATEGORY,
            notes=_optional_str(data.get("notes")),
            must_have=_coerce_bool(data.get("mustHave", data.get("must_have", False))),
        )


@dataclass
class Room:
    """A room (dressing room, green room, ...) and the items assigned to it."""
    id: str
    name: str = ""
    description: Optional[str] = None
    items: List[Item] = field(default_factory=list)

    def __post_init__(self):
        if not self.name:
            self.name = f"Room {self.id}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "items": [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Room"]:
        if not isinstance(data, dict) or data.get("id") in (None, ""):
            return None
        items = [Item.from_dict(i) for i in _entries(data.get("items"))]
        return cls(
            id=str(data["id"]).strip(),
            name=_optional_str(data.get("name")) or "",
            description=_optional_str(data.get("description")),
            items=[i for i in items if i is not None],
        )


@dataclass(frozen=True)
class Contact:
    """A person named in the rider with whatever contact details sit near the name."""
    name: str
    role: str = "Contact"
    email: Optional[str] = None
    phone: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "role": self.role,
            "email": self.email,
            "phone": self.phone,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Contact"]:
        if not isinstance(data, dict):
            return None
        name = _optional_str(data.get("name"))
        if not name:
            return None
        return cls(
            name=name,
            role=_optional_str(data.get("role")) or "Contact",
            email=_optional_str(data.get("email")),
            phone=_optional_str(data.get("phone")),
        )


@dataclass
class StructuredRider:
    """
    Structured result of parsing one rider document.

    Every collection is always present (possibly empty). Items in room and
    category buckets are also reachable, by (name, category, room) equality,
    from the flat `items` list.
    """
    artists: List[str] = field(default_factory=list)
    rooms: List[Room] = field(default_factory=list)
    categories: Dict[str, List[Item]] = field(default_factory=dict)
    items: List[Item] = field(default_factory=list)
    allergies: List[str] = field(default_factory=list)
    contacts: List[Contact] = field(default_factory=list)
    special_requirements: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        """True when no facet holds anything."""
        return not any((
            self.artists, self.rooms, self.categories, self.items,
            self.allergies, self.contacts, self.special_requirements,
        ))

    def get_room(self, room_id: Optional[str]) -> Optional[Room]:
        """Look up a room by id."""
        if room_id is None:
            return None
        for room in self.rooms:
            if room.id == room_id:
                return room
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the shared camelCase schema."""
        return {
            "artists": list(self.artists),
            "rooms": [room.to_dict() for room in self.rooms],
            "categories": {
                name: [item.to_dict() for item in items]
                for name, items in self.categories.items()
            },
            "items": [item.to_dict() for item in self.items],
            "allergies": list(self.allergies),
            "contacts": [contact.to_dict() for contact in self.contacts],
            "specialRequirements": list(self.special_requirements),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "StructuredRider":
        """
        Coerce an external extraction payload into a StructuredRider.

        Missing or null fields default to empty collections and malformed
        entries are skipped.

        Raises:
            TypeError: If data is not a dict
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected a JSON object, got {type(data).__name__}")

        categories: Dict[str, List[Item]] = {}
        raw_categories = data.get("categories")
        if isinstance(raw_categories, dict):
            for name, entries in raw_categories.items():
                if not isinstance(entries, list):
                    continue
                items = [Item.from_dict(e, category=str(name)) for e in entries]
                categories[str(name)] = [i for i in items if i is not None]

        rooms = [Room.from_dict(r) for r in _entries(data.get("rooms"))]
        items = [Item.from_dict(i) for i in _entries(data.get("items"))]
        contacts = [Contact.from_dict(c) for c in _entries(data.get("contacts"))]

        skipped = sum(x is None for x in rooms + items + contacts)
        if skipped:
            logger.debug(f"Skipped {skipped} malformed entries in external payload")

        special = data.get("specialRequirements")
        if special is None:
            special = data.get("special_requirements")

        return cls(
            artists=_string_list(data.get("artists")),
            rooms=[r for r in rooms if r is not None],
            categories=categories,
            items=[i for i in items if i is not None],
            allergies=_string_list(data.get("allergies")),
            contacts=[c for c in contacts if c is not None],
            special_requirements=_string_list(special),
        )
