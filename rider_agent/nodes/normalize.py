"""
Node 1: Text Normalization
Collapses line endings and whitespace before any extraction runs.
"""

import logging
from typing import Dict, Any

from rider_tools.text_normalizer import normalize_text

from ..state import RiderState

logger = logging.getLogger(__name__)


def normalize_text_node(state: RiderState) -> Dict[str, Any]:
    """
    Normalize the raw document text.

    Returns:
        State update with normalized_text
    """
    raw_text = state.get("raw_text", "")
    normalized = normalize_text(raw_text)
    logger.debug(f"Normalized {len(raw_text)} chars to {len(normalized)} chars")
    return {"normalized_text": normalized}
