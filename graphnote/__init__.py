from .block import (
    Document,
    Schema,
    SchemaEntry,
    SchemaError,
    StructuralError,
    StyleSet,
    TextNode,
    MentionNode,
    compose,
    default_schema,
    serialize,
)
from .mention import Candidate, GraphEntityRef, InMemoryGraphSearch, MentionResolver, SuggestContext
from .highlight import HighlightEngine, StyledSpan, normalize_language
from .editor import EditorSession, InsertionController
from .utils import EditorConfig, configure_logging

__all__ = [
    "Document",
    "Schema",
    "SchemaEntry",
    "SchemaError",
    "StructuralError",
    "StyleSet",
    "TextNode",
    "MentionNode",
    "compose",
    "default_schema",
    "serialize",
    "Candidate",
    "GraphEntityRef",
    "InMemoryGraphSearch",
    "MentionResolver",
    "SuggestContext",
    "HighlightEngine",
    "StyledSpan",
    "normalize_language",
    "EditorSession",
    "InsertionController",
    "EditorConfig",
    "configure_logging",
]
