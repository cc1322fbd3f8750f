"""
Block - the rich-text document model.

This package provides:
- Schema / SchemaEntry / compose: the validated registry of block, inline and style types
- default_schema: the editor's composed schema
- StyleSet: the styles of one text run
- TextNode / MentionNode: inline content
- BlockNode: a structural node
- Document: the id-addressed block tree with atomic mutations
- IndexPath: a block's position in the tree
- serialize: the tree -> markdown export
"""

from .style import StyleSet
from .schema import (
    ContentKind,
    Schema,
    SchemaEntry,
    SchemaError,
    SchemaErrorReason,
    compose,
)
from .inline import MentionNode, TextNode, InlineNode, flatten_text
from .node import BlockNode
from .path import IndexPath
from .document import Document, StructuralError
from .specs import default_schema, default_entries, CALLOUT_TYPES, HIGHLIGHT_COLORS
from .markdown import serialize

__all__ = [
    "StyleSet",
    "ContentKind",
    "Schema",
    "SchemaEntry",
    "SchemaError",
    "SchemaErrorReason",
    "compose",
    "MentionNode",
    "TextNode",
    "InlineNode",
    "flatten_text",
    "BlockNode",
    "IndexPath",
    "Document",
    "StructuralError",
    "default_schema",
    "default_entries",
    "CALLOUT_TYPES",
    "HIGHLIGHT_COLORS",
    "serialize",
]
