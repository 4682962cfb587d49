"""
Tests for Field Extractors

Each extractor is tested on its own ruleset against small documents.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from rider_tools.config import ParsingConfig
from rider_tools.field_extractors import (
    apply_ruleset,
    extract_artists,
    extract_rooms,
    extract_contacts,
    extract_allergies,
    extract_special_requirements,
    extract_fields,
)
from rider_tools.patterns import ROOM_RULES, SPECIAL_RULES


class TestApplyRuleset:
    """Tests for the generic ruleset runner."""

    def test_yields_rule_with_match(self):
        matches = list(apply_ruleset("Room temperature 68 F", SPECIAL_RULES))
        assert len(matches) == 1
        rule, match = matches[0]
        assert rule.kind == "temperature"
        assert match.group(1) == "68"

    def test_no_match_yields_nothing(self):
        assert list(apply_ruleset("nothing to see", ROOM_RULES)) == []


class TestArtistExtractor:
    """Tests for artist extraction."""

    def test_label_and_rider_suffix_merge(self):
        """The same name from two rules is listed once."""
        text = "Artist: Jane Doe\nJane Doe Tour Rider"
        assert extract_artists(text) == ["Jane Doe"]

    def test_short_names_dropped(self):
        assert extract_artists("Artist: Al\n") == []

    def test_minimum_length_is_configurable(self):
        config = ParsingConfig(min_artist_name_length=2)
        assert extract_artists("Artist: Al\n", config) == ["Al"]

    def test_no_artist(self):
        assert extract_artists("- 24 bottles water") == []


class TestRoomExtractor:
    """Tests for room extraction."""

    def test_room_with_description(self):
        rooms = extract_rooms("Dressing Room 2 - Headliner")
        assert len(rooms) == 1
        assert rooms[0].id == "2"
        assert rooms[0].name == "Room 2"
        assert rooms[0].description == "Headliner"
        assert rooms[0].items == []

    def test_first_occurrence_of_id_wins(self):
        rooms = extract_rooms("Dressing Room 2 - Headliner\nDressing Room 2 - Support")
        assert [r.description for r in rooms] == ["Headliner"]

    def test_ids_unique_across_rules(self):
        rooms = extract_rooms("Dressing Room 2 - Headliner\nGreen Room A")
        assert [r.id for r in rooms] == ["2", "A"]

    def test_words_containing_dr_are_not_rooms(self):
        assert extract_rooms("Dried fruit platter") == []


class TestContactExtractor:
    """Tests for contact extraction."""

    @pytest.fixture
    def contact_block(self):
        return (
            "Tour Manager: Sam Rivera\n"
            "Email: sam@owls.example.com\n"
            "Phone: (555) 123-4567"
        )

    def test_manager_with_details(self, contact_block):
        contacts = extract_contacts(contact_block)
        assert len(contacts) == 1
        contact = contacts[0]
        assert contact.name == "Sam Rivera"
        assert contact.role == "Tour Manager"
        assert contact.email == "sam@owls.example.com"
        assert contact.phone == "(555) 123-4567"

    def test_generic_role(self):
        contacts = extract_contacts("Production Coordinator: Lee Park\n")
        assert [(c.name, c.role) for c in contacts] == [("Lee Park", "Contact")]
        assert contacts[0].email is None
        assert contacts[0].phone is None

    def test_details_outside_window_ignored(self):
        text = "Contact: Lee Park\n" + "x" * 300 + "\nlee@example.com"
        assert extract_contacts(text)[0].email is None


class TestAllergyExtractor:
    """Tests for allergy extraction."""

    def test_vocabulary_terms_found(self):
        allergies = extract_allergies("no peanuts or shellfish please")
        assert "peanuts" in allergies
        assert "shellfish" in allergies

    def test_short_match_kept_verbatim(self):
        allergies = extract_allergies("Allergies: Peanuts, Shellfish")
        assert "Peanuts, Shellfish" in allergies
        assert "peanuts" in allergies

    def test_long_match_ignored(self):
        text = "Allergies: " + "peanuts " * 20
        assert extract_allergies(text) == []

    def test_no_duplicates(self):
        allergies = extract_allergies("no peanuts\nno peanuts")
        assert len(allergies) == len(set(allergies))


class TestSpecialRequirements:
    """Tests for special-requirement extraction."""

    def test_all_three_kinds_in_rule_order(self):
        text = "Must have: fresh towels\nRoom temperature 68 F\nLoad in by 6:00 pm"
        assert extract_special_requirements(text) == [
            "Temperature: 68°F",
            "Timing: by 6:00 pm",
            "Must Have: fresh towels",
        ]

    def test_duplicates_kept(self):
        text = "Keep at 68 F\nStage at 68 F"
        assert extract_special_requirements(text) == ["Temperature: 68°F", "Temperature: 68°F"]

    def test_quantities_are_not_temperatures(self):
        assert extract_special_requirements("- 2 cans soda") == []


class TestExtractFields:
    """Tests for the combined extractor."""

    def test_empty_text(self):
        fields = extract_fields("")
        assert fields.artists == []
        assert fields.rooms == []
        assert fields.contacts == []
        assert fields.allergies == []
        assert fields.special_requirements == []
