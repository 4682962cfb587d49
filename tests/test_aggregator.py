"""
Tests for Aggregator

Tests room attachment by id, deduplication and the checklist flattening.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from rider_tools.aggregator import (
    find_room, attach_items_to_rooms, item_key, dedupe_items, build_checklist, aggregate
)
from rider_tools.field_extractors import FieldExtraction
from rider_tools.rider_models import Item, Room, StructuredRider


@pytest.fixture
def water():
    return Item(name="bottles water", quantity=6, unit="bottle", room="2", category="Beverages")


class TestRoomAttachment:
    """Tests for id-based room lookup."""

    def test_find_room(self):
        rooms = [Room(id="1"), Room(id="2")]
        assert find_room(rooms, "2") is rooms[1]
        assert find_room(rooms, "9") is None
        assert find_room(rooms, None) is None

    def test_items_attached_by_id(self, water):
        rooms = attach_items_to_rooms([Room(id="2")], [water])
        assert rooms[0].items == [water]

    def test_unknown_room_not_attached(self):
        orphan = Item(name="towels", room="9")
        rooms = attach_items_to_rooms([Room(id="2")], [orphan])
        assert rooms[0].items == []

    def test_input_rooms_untouched(self, water):
        original = Room(id="2")
        attach_items_to_rooms([original], [water])
        assert original.items == []


class TestDedupe:
    """Tests for exact-key deduplication."""

    def test_key_with_and_without_room(self, water):
        assert item_key(water) == ("bottles water", "Beverages", "2")
        assert item_key(water, with_room=False) == ("bottles water", "Beverages")

    def test_first_occurrence_wins(self, water):
        later = Item(name="bottles water", quantity=12, room="2", category="Beverages")
        assert dedupe_items([water, later]) == [water]

    def test_room_distinguishes(self, water):
        other_room = Item(name="bottles water", room="3", category="Beverages")
        assert len(dedupe_items([water, other_room])) == 2
        assert len(dedupe_items([water, other_room], with_room=False)) == 1

    def test_near_duplicates_kept(self):
        items = [Item(name="Red Bull"), Item(name="Red Bull can")]
        assert len(dedupe_items(items)) == 2


class TestAggregate:
    """Tests for building the StructuredRider."""

    def test_item_in_room_and_category_not_duplicated(self, water):
        fields = FieldExtraction(rooms=[Room(id="2")])
        rider = aggregate(fields, [water], {"Beverages": [water]})
        assert rider.items == [water]
        assert rider.rooms[0].items == [water]
        assert rider.categories["Beverages"] == [water]
        assert build_checklist(rider) == [water]

    def test_buckets_keep_all_builder_output(self, water):
        fields = FieldExtraction(rooms=[Room(id="2")])
        rider = aggregate(fields, [water, water], {"Beverages": [water, water]})
        assert rider.items == [water]
        assert len(rider.categories["Beverages"]) == 2
        assert len(rider.rooms[0].items) == 2

    def test_every_bucketed_item_reachable_from_flat_view(self, water):
        towels = Item(name="bath towels", category="Personal Care")
        fields = FieldExtraction(rooms=[Room(id="2")])
        rider = aggregate(
            fields, [water, towels, water],
            {"Beverages": [water, water], "Personal Care": [towels]}
        )
        for bucket in list(rider.categories.values()) + [r.items for r in rider.rooms]:
            for item in bucket:
                assert item in rider.items

    def test_facets_copied(self):
        fields = FieldExtraction(artists=["Jane Doe"], allergies=["peanuts"],
                                 special_requirements=["Temperature: 68°F"])
        rider = aggregate(fields, [], {})
        assert rider.artists == ["Jane Doe"]
        assert rider.allergies == ["peanuts"]
        assert rider.special_requirements == ["Temperature: 68°F"]

    def test_empty(self):
        rider = aggregate(FieldExtraction(), [], {})
        assert rider.is_empty()


class TestBuildChecklist:
    """Tests for the room-merge flattening."""

    def test_room_items_first(self, water):
        towels = Item(name="bath towels", category="Personal Care")
        rider = StructuredRider(
            rooms=[Room(id="2", items=[water])],
            categories={"Personal Care": [towels]},
            items=[towels, water],
        )
        assert build_checklist(rider) == [water, towels]

    def test_category_item_in_other_room_kept(self, water):
        unassigned = Item(name="bottles water", category="Beverages")
        rider = StructuredRider(
            rooms=[Room(id="2", items=[water])],
            categories={"Beverages": [unassigned]},
        )
        assert build_checklist(rider) == [water, unassigned]

    def test_standalone_items_dedupe_without_room(self, water):
        unassigned = Item(name="bottles water", category="Beverages")
        rider = StructuredRider(
            rooms=[Room(id="2", items=[water])],
            items=[water, unassigned],
        )
        assert build_checklist(rider) == [water]
