"""
Highlight - lazy per-language syntax highlighting of code blocks.
"""

from .languages import (
    LANGUAGE_ALIASES,
    LANGUAGE_NAMES,
    SUPPORTED_LANGUAGES,
    SUPPORTED_THEMES,
    is_supported,
    normalize_language,
)
from .engine import HighlightEngine, HighlightError, StyledSpan, plain_spans

__all__ = [
    "LANGUAGE_ALIASES",
    "LANGUAGE_NAMES",
    "SUPPORTED_LANGUAGES",
    "SUPPORTED_THEMES",
    "is_supported",
    "normalize_language",
    "HighlightEngine",
    "HighlightError",
    "StyledSpan",
    "plain_spans",
]
