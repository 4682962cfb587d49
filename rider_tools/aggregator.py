"""
Aggregator

Merges field extractor output with the classifier's items into one
StructuredRider, and flattens it into a deduplicated checklist.
"""

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .field_extractors import FieldExtraction
from .rider_models import Item, Room, StructuredRider

logger = logging.getLogger(__name__)


def find_room(rooms: Sequence[Room], room_id: Optional[str]) -> Optional[Room]:
    """Look up a room by id. Items only ever reference rooms by id."""
    if room_id is None:
        return None
    for room in rooms:
        if room.id == room_id:
            return room
    return None


def attach_items_to_rooms(rooms: Sequence[Room], items: Iterable[Item]) -> List[Room]:
    """
    Return fresh Room objects carrying the items that reference them.

    Items whose room id matches no extracted room stay unattached.
    """
    attached = [replace(room, items=list(room.items)) for room in rooms]
    orphaned = 0
    for item in items:
        if item.room is None:
            continue
        room = find_room(attached, item.room)
        if room is None:
            orphaned += 1
            continue
        room.items.append(item)

    if orphaned:
        logger.debug(f"{orphaned} items reference rooms that were not extracted")
    return attached


def item_key(item: Item, with_room: bool = True) -> Tuple:
    """Identity used for deduplication: exact (name, category[, room])."""
    if with_room:
        return (item.name, item.category, item.room)
    return (item.name, item.category)


def dedupe_items(items: Iterable[Item], with_room: bool = True) -> List[Item]:
    """Keep the first occurrence of each item key, in order."""
    seen = set()
    unique = []
    for item in items:
        key = item_key(item, with_room)
        if key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique


def build_checklist(rider: StructuredRider) -> List[Item]:
    """
    Flatten a rider into one checklist.

    Room items come first, then category items not already listed by
    (name, category, room), then standalone items not already listed by
    (name, category).
    """
    checklist: List[Item] = []
    seen_with_room = set()
    seen_without_room = set()

    def add(item: Item) -> None:
        checklist.append(item)
        seen_with_room.add(item_key(item))
        seen_without_room.add(item_key(item, with_room=False))

    for room in rider.rooms:
        for item in room.items:
            if item_key(item) not in seen_with_room:
                add(item)

    for items in rider.categories.values():
        for item in items:
            if item_key(item) not in seen_with_room:
                add(item)

    for item in rider.items:
        if item_key(item, with_room=False) not in seen_without_room:
            add(item)

    return checklist


def aggregate(
    fields: FieldExtraction,
    items: Sequence[Item],
    categories: Dict[str, List[Item]]
) -> StructuredRider:
    """
    Combine every facet into a StructuredRider.

    Room and category buckets keep all classifier output; the flat `items`
    view drops later duplicates, so every bucketed item is reachable from
    it by equality.
    """
    rider = StructuredRider(
        artists=list(fields.artists),
        rooms=attach_items_to_rooms(fields.rooms, items),
        categories={name: list(bucket) for name, bucket in categories.items()},
        items=dedupe_items(items),
        allergies=list(fields.allergies),
        contacts=list(fields.contacts),
        special_requirements=list(fields.special_requirements),
    )

    logger.info(
        f"Aggregated rider: {len(rider.items)} items, {len(rider.rooms)} rooms, "
        f"{len(rider.categories)} categories"
    )
    return rider
