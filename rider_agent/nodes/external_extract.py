"""
Node 2: External Extraction
Makes exactly one attempt at the optional external extraction source.
Any failure or empty result is recorded and left for the router to fall
back on; nothing raised by the provider escapes this node.
"""

import logging
from typing import Dict, Any, Optional

from rider_tools.llm_providers import ExtractionProvider
from rider_tools.rider_models import StructuredRider

from ..state import RiderState

logger = logging.getLogger(__name__)


def external_extract_node(
    state: RiderState,
    provider: Optional[ExtractionProvider] = None
) -> Dict[str, Any]:
    """
    Try the external provider on the normalized text.

    The provider is bound when the graph is built (functools.partial).

    Args:
        state: Current workflow state
        provider: Object with an extract(text) method, or None

    Returns:
        State updates with rider and extraction_method on success,
        otherwise last_error (or nothing when no provider is configured)
    """
    if provider is None:
        logger.debug("No external provider configured")
        return {}

    provider_name = getattr(provider, "PROVIDER_NAME", type(provider).__name__)
    text = state.get("normalized_text") or ""

    logger.info(f"Trying external extraction via {provider_name}")

    try:
        data = provider.extract(text)
        rider = StructuredRider.from_dict(data)
    except Exception as e:
        logger.warning(f"External extraction failed ({provider_name}): {e}. Falling back to deterministic parsing")
        return {"last_error": f"External extraction failed: {str(e)}"}

    if not rider.items:
        logger.warning(f"External extraction ({provider_name}) returned no items. Falling back to deterministic parsing")
        return {"last_error": "External extraction returned no items"}

    logger.info(f"External extraction found {len(rider.items)} items")
    return {
        "rider": rider,
        "extraction_method": provider_name,
        "last_error": None,
    }
