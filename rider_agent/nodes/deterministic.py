"""
Nodes 3a/3b/4: Deterministic Path
Field extraction and line classification run side by side over the same
normalized text; aggregation joins their outputs.
"""

import logging
from typing import Dict, Any

from rider_tools.aggregator import aggregate
from rider_tools.field_extractors import FieldExtraction, extract_fields
from rider_tools.line_classifier import collect_items

from ..state import RiderState

logger = logging.getLogger(__name__)


def extract_fields_node(state: RiderState) -> Dict[str, Any]:
    """Run the five field extractors over the whole text."""
    fields = extract_fields(state.get("normalized_text") or "", state["parsing_config"])
    return {"fields": fields}


def classify_lines_node(state: RiderState) -> Dict[str, Any]:
    """Run the line classifier fold and collect its items."""
    items, categories = collect_items(state.get("normalized_text") or "", state["parsing_config"])
    return {"line_items": items, "line_categories": categories}


def aggregate_node(state: RiderState) -> Dict[str, Any]:
    """
    Combine both branches into the final StructuredRider.

    Returns:
        State updates with rider and extraction_method
    """
    rider = aggregate(
        state.get("fields") or FieldExtraction(),
        state.get("line_items") or [],
        state.get("line_categories") or {},
    )
    return {"rider": rider, "extraction_method": "deterministic"}
