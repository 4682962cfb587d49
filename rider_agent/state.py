"""
Workflow State Schema for Rider Agent
Defines the state that flows through the LangGraph extraction workflow.
"""

from typing import TypedDict, List, Optional, Dict

from rider_tools.config import ParsingConfig, DEFAULT_PARSING_CONFIG
from rider_tools.field_extractors import FieldExtraction
from rider_tools.rider_models import Item, StructuredRider


class RiderState(TypedDict):
    """
    State schema for one parse.

    Each node reads from this state and returns a partial update. The two
    deterministic branches write disjoint keys so they can run in the same
    step.
    """

    # ========================
    # Input
    # ========================
    raw_text: str                              # Document text as received
    parsing_config: ParsingConfig              # Thresholds for every extractor

    # ========================
    # Intermediate Data
    # ========================
    normalized_text: Optional[str]             # From normalize_text node
    fields: Optional[FieldExtraction]          # From extract_fields node
    line_items: Optional[List[Item]]           # From classify_lines node
    line_categories: Optional[Dict[str, List[Item]]]  # From classify_lines node

    # ========================
    # Result
    # ========================
    rider: Optional[StructuredRider]           # From external_extract or aggregate
    extraction_method: Optional[str]           # Provider name or 'deterministic'

    # ========================
    # Error Handling
    # ========================
    last_error: Optional[str]                  # External path failure, if any


def create_initial_state(
    raw_text: str,
    parsing_config: Optional[ParsingConfig] = None
) -> RiderState:
    """
    Create initial state for a new parse.

    Args:
        raw_text: Document text to parse
        parsing_config: Parsing thresholds (defaults when None)

    Returns:
        Initialized RiderState
    """
    return RiderState(
        # Input
        raw_text=raw_text,
        parsing_config=parsing_config or DEFAULT_PARSING_CONFIG,

        # Intermediate
        normalized_text=None,
        fields=None,
        line_items=None,
        line_categories=None,

        # Result
        rider=None,
        extraction_method=None,

        # Error handling
        last_error=None,
    )
