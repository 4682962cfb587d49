# Rider parsing tools
from .config import ParsingConfig, LLMConfig, RiderConfig, load_config, apply_env_overrides
from .text_normalizer import normalize_text
from .rider_models import Item, Room, Contact, StructuredRider
from .field_extractors import FieldExtraction, extract_fields
from .item_builder import parse_item
from .line_classifier import ClassifierState, LineKind, classify_line, classify_lines, collect_items
from .aggregator import aggregate, build_checklist
from .llm_providers import (
    ExtractionProvider,
    ExtractionError,
    get_provider,
    get_available_providers,
    provider_from_config,
)
from .report import write_json_report, write_csv_checklist

__all__ = [
    "ParsingConfig",
    "LLMConfig",
    "RiderConfig",
    "load_config",
    "apply_env_overrides",
    "normalize_text",
    "Item",
    "Room",
    "Contact",
    "StructuredRider",
    "FieldExtraction",
    "extract_fields",
    "parse_item",
    "ClassifierState",
    "LineKind",
    "classify_line",
    "classify_lines",
    "collect_items",
    "aggregate",
    "build_checklist",
    "ExtractionProvider",
    "ExtractionError",
    "get_provider",
    "get_available_providers",
    "provider_from_config",
    "write_json_report",
    "write_csv_checklist",
]
