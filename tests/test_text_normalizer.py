"""
Tests for Text Normalizer

Tests line-ending, whitespace and blank-line normalization plus the
fragment cleaners used by the extractors.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from rider_tools.text_normalizer import (
    normalize_text, clean_name, clean_phone, clean_allergy, clean_item_name
)


class TestNormalizeText:
    """Tests for normalize_text."""

    def test_line_endings_collapse_to_lf(self):
        assert normalize_text("a\r\nb\rc\nd") == "a\nb\nc\nd"

    def test_tabs_and_space_runs_collapse(self):
        assert normalize_text("Red\t\tBull   cans") == "Red Bull cans"

    def test_spaces_around_line_breaks_dropped(self):
        assert normalize_text("line one   \n   line two") == "line one\nline two"

    def test_excess_blank_lines_collapse(self):
        """Three or more line breaks become exactly one blank line."""
        assert normalize_text("BEVERAGES\n\n\n\n\n- water") == "BEVERAGES\n\n- water"

    def test_single_blank_line_kept(self):
        assert normalize_text("a\n\nb") == "a\n\nb"

    @pytest.mark.parametrize("raw", [
        "Artist:\tJane Doe\r\n\r\n\r\n\r\nBEVERAGES \t\n - 24 bottles water",
        "  \n \n \n  x  ",
        "\r\r\r\r",
        "",
    ])
    def test_idempotent(self, raw):
        """Normalizing normalized text changes nothing."""
        once = normalize_text(raw)
        assert normalize_text(once) == once

    def test_rejects_non_string(self):
        with pytest.raises(TypeError):
            normalize_text(None)
        with pytest.raises(TypeError):
            normalize_text(b"bytes")


class TestCleaners:
    """Tests for fragment cleaners."""

    def test_clean_name(self):
        assert clean_name("  Jane   Doe ") == "Jane Doe"
        assert clean_name("") == ""

    def test_clean_phone_keeps_separators_only(self):
        assert clean_phone("(555) 123-4567 ext") == "(555) 123-4567"
        assert clean_phone("+1 555.123.4567") == "+1 555.123.4567"

    def test_clean_allergy_strips_punctuation(self):
        assert clean_allergy("peanuts,  shellfish!!") == "peanuts, shellfish"

    def test_clean_item_name_strips_markers(self):
        assert clean_item_name("- • Red Bull") == "Red Bull"
