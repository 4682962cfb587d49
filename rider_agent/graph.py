"""
LangGraph Workflow Definition
Wires together nodes and edges for the rider extraction agent.
"""

import logging
from functools import partial
from typing import Optional

from langgraph.graph import StateGraph, END

from rider_tools.config import ParsingConfig
from rider_tools.llm_providers import ExtractionProvider
from rider_tools.rider_models import StructuredRider

from .state import RiderState, create_initial_state
from .nodes import (
    normalize_text_node,
    external_extract_node,
    extract_fields_node,
    classify_lines_node,
    aggregate_node,
)
from .edges import route_after_external

logger = logging.getLogger(__name__)


def create_rider_graph(provider: Optional[ExtractionProvider] = None) -> StateGraph:
    """
    Create the LangGraph workflow for rider extraction.

    Graph structure:
    ```
    normalize_text
        │
        ▼
    external_extract
        │
        ▼
    [route_after_external]
        │ done        │ fallback
        ▼             ▼
       END       deterministic
                  │         │
                  ▼         ▼
        extract_fields   classify_lines
                  │         │
                  └────┬────┘
                       ▼
                   aggregate
                       │
                       ▼
                      END
    ```

    Args:
        provider: Optional external extraction provider

    Returns:
        Compiled StateGraph
    """

    workflow = StateGraph(RiderState)

    # ========================
    # Add Nodes
    # ========================

    workflow.add_node("normalize_text", normalize_text_node)
    workflow.add_node("external_extract", partial(external_extract_node, provider=provider))

    # Fan-out point for the deterministic branches
    workflow.add_node("deterministic", lambda state: {})

    workflow.add_node("extract_fields", extract_fields_node)
    workflow.add_node("classify_lines", classify_lines_node)
    workflow.add_node("aggregate", aggregate_node)

    # ========================
    # Add Edges
    # ========================

    workflow.set_entry_point("normalize_text")
    workflow.add_edge("normalize_text", "external_extract")

    workflow.add_conditional_edges(
        "external_extract",
        route_after_external,
        {
            "done": END,
            "fallback": "deterministic"
        }
    )

    # Field extractors and the line classifier are independent
    workflow.add_edge("deterministic", "extract_fields")
    workflow.add_edge("deterministic", "classify_lines")

    # Aggregate waits for both branches
    workflow.add_edge(["extract_fields", "classify_lines"], "aggregate")
    workflow.add_edge("aggregate", END)

    return workflow.compile()


def parse_rider(
    text: str,
    provider: Optional[ExtractionProvider] = None,
    parsing_config: Optional[ParsingConfig] = None
) -> StructuredRider:
    """
    Parse one rider document into a StructuredRider.

    Tries the external provider once when one is given and falls back to
    the deterministic path on absence, failure or an empty item list.
    Never raises for text without recognizable structure.

    Args:
        text: Raw document text
        provider: Optional external extraction provider
        parsing_config: Parsing thresholds (defaults when None)

    Returns:
        StructuredRider (every collection present, possibly empty)

    Raises:
        TypeError: If text is not a string
    """
    if not isinstance(text, str):
        raise TypeError(f"Rider text must be a str, got {type(text).__name__}")

    graph = create_rider_graph(provider)
    final_state = graph.invoke(create_initial_state(text, parsing_config))

    logger.info(
        f"Parsed rider via {final_state.get('extraction_method')}: "
        f"{len(final_state['rider'].items)} items"
    )
    return final_state["rider"]


def get_workflow_visualization() -> str:
    """
    Get ASCII visualization of the workflow graph.

    Returns:
        ASCII art representation of the graph
    """
    return """
    Rider Extraction Workflow
    =========================

              ┌──────────────────┐
              │  normalize_text  │
              │     (START)      │
              └────────┬─────────┘
                       │
              ┌────────▼─────────┐
              │ external_extract │  (optional LLM provider,
              │   (one attempt)  │   exactly one try)
              └────────┬─────────┘
                       │
             ┌─────────┴──────────┐
           done                fallback
             │                    │
             ▼                    ▼
          ┌─────┐         ┌───────────────┐
          │ END │         │ deterministic │
          └─────┘         └───────┬───────┘
                                  │
                    ┌─────────────┴─────────────┐
                    ▼                           ▼
           ┌────────────────┐          ┌────────────────┐
           │ extract_fields │          │ classify_lines │
           │ (artists, rooms│          │ (category/room │
           │ contacts, ...) │          │  running state)│
           └────────┬───────┘          └────────┬───────┘
                    └─────────────┬─────────────┘
                                  ▼
                          ┌───────────────┐
                          │   aggregate   │
                          └───────┬───────┘
                                  │
                                  ▼
                               ┌─────┐
                               │ END │
                               └─────┘
    """
