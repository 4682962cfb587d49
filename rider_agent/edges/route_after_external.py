"""
External Path Router
Conditional routing after the external extraction attempt.
"""

import logging
from typing import Literal

from ..state import RiderState

logger = logging.getLogger(__name__)


def route_after_external(state: RiderState) -> Literal["done", "fallback"]:
    """
    Route after the external extraction node.

    Decision logic:
    - A rider is already in state (external path produced items): done
    - Otherwise (no provider, failure, empty result): fallback

    Args:
        state: Current workflow state

    Returns:
        Next step: "done" or "fallback"
    """
    if state.get("rider") is not None:
        return "done"

    if state.get("last_error"):
        logger.debug(f"Routing to deterministic path after: {state['last_error']}")
    return "fallback"
