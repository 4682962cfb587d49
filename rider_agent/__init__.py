# Rider Extraction Agent
from .graph import create_rider_graph, parse_rider, get_workflow_visualization
from .state import RiderState, create_initial_state

__all__ = [
    "create_rider_graph",
    "parse_rider",
    "get_workflow_visualization",
    "RiderState",
    "create_initial_state",
]
