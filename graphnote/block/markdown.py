"""
Markdown serializer - flattens a Document into the string handed to the save callback.

One pass over the top-level blocks, joined by newlines:

    heading(level=n)    "#" * n + " " + text
    paragraph           text
    bulletListItem      "- " + text
    numberedListItem    "1. " + text     (every item, no running counter)
    anything else       ""               (dropped)

Text is flattened from inline content: styles are not written and a
mention contributes only its display name. The export is therefore lossy:
mention ids and kinds, styles, and non-text blocks do not survive a save.
"""

from __future__ import annotations
from typing import Callable, Iterable

from .document import Document
from .inline import flatten_text
from .node import BlockNode
from .specs import HeadingProps


def _heading(block: BlockNode) -> str:
    level = block.props.level if isinstance(block.props, HeadingProps) else 1
    return f"{'#' * level} {flatten_text(block.content)}"


def _paragraph(block: BlockNode) -> str:
    return flatten_text(block.content)


def _bullet(block: BlockNode) -> str:
    return f"- {flatten_text(block.content)}"


def _numbered(block: BlockNode) -> str:
    return f"1. {flatten_text(block.content)}"


BLOCK_RENDERERS: dict[str, Callable[[BlockNode], str]] = {
    "heading": _heading,
    "paragraph": _paragraph,
    "bulletListItem": _bullet,
    "numberedListItem": _numbered,
}


def serialize_blocks(blocks: Iterable[BlockNode]) -> str:
    lines = []
    for block in blocks:
        render = BLOCK_RENDERERS.get(block.type)
        lines.append(render(block) if render is not None else "")
    return "\n".join(lines)


def serialize(document: Document) -> str:
    """Serialize the document's top-level blocks to markdown."""
    return serialize_blocks(document.blocks)
