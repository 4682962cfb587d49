# Workflow nodes
from .normalize import normalize_text_node
from .external_extract import external_extract_node
from .deterministic import extract_fields_node, classify_lines_node, aggregate_node

__all__ = [
    "normalize_text_node",
    "external_extract_node",
    "extract_fields_node",
    "classify_lines_node",
    "aggregate_node",
]
