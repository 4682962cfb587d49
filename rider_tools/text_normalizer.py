"""
Text Normalization and Cleanup

Normalizes raw OCR / PDF text before extraction and provides the small
cleaners the extractors apply to captured fragments.
"""

import re

_HORIZONTAL_WS = re.compile(r"[^\S\n]+")
_SPACE_AROUND_NEWLINE = re.compile(r" ?\n ?")
_EXCESS_BLANK_LINES = re.compile(r"\n{3,}")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """
    Normalize raw document text.

    - \\r\\n and \\r become \\n
    - tabs and other horizontal whitespace runs become a single space
    - spaces touching a line break are dropped
    - runs of blank lines collapse to a single blank line

    Idempotent: normalize_text(normalize_text(t)) == normalize_text(t).

    Args:
        text: Raw text from OCR or PDF extraction

    Returns:
        Normalized text

    Raises:
        TypeError: If text is not a string
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected str, got {type(text).__name__}")

    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    normalized = normalized.replace("\t", " ")
    normalized = _HORIZONTAL_WS.sub(" ", normalized)
    normalized = _SPACE_AROUND_NEWLINE.sub("\n", normalized)
    normalized = _EXCESS_BLANK_LINES.sub("\n\n", normalized)
    return normalized


def clean_name(value: str) -> str:
    """Trim and collapse internal whitespace."""
    if not value:
        return ""
    return _WHITESPACE.sub(" ", value.strip())


def clean_phone(value: str) -> str:
    """Keep only digits and phone separators."""
    return re.sub(r"[^\d+\-().\s]", "", value).strip()


def clean_allergy(value: str) -> str:
    """Drop punctuation other than commas, collapse whitespace."""
    cleaned = re.sub(r"[^\w\s,]", "", value.strip())
    return _WHITESPACE.sub(" ", cleaned).strip()


def clean_item_name(value: str) -> str:
    """Strip list markers and collapse whitespace."""
    cleaned = re.sub(r"^[\-•*\s]+", "", value)
    return _WHITESPACE.sub(" ", cleaned).strip()
