"""
BlockNode - A structural node of the document.

A block carries a type tag, a props model specific to that type, and either
inline content or child blocks depending on the content kind its schema
entry declares. Nodes handed out by the Document are detached copies; the
Document itself only accepts them as input and keeps its own.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Iterator
from uuid import uuid4

from pydantic import BaseModel

from .inline import MentionNode, TextNode, flatten_text, to_inline_list
from .schema import ContentKind


def _generate_id() -> str:
    """Generate a short unique ID."""
    return uuid4().hex[:8]


@dataclass
class BlockNode:
    """
    Attributes:
        type: Block type tag, must exist in the Schema
        props: Props model instance (or a plain dict before validation)
        content: Inline nodes, for inline-kind blocks
        children: Child blocks, for blocks-kind blocks
        id: Stable identifier, the only handle valid across edits
        content_kind: Filled in from the Schema when the Document adopts the node
    """
    type: str
    props: BaseModel | dict[str, Any] | None = None
    content: list[TextNode | MentionNode] = field(default_factory=list)
    children: list[BlockNode] = field(default_factory=list)
    id: str = field(default_factory=_generate_id)
    content_kind: ContentKind | None = None

    @property
    def text(self) -> str:
        return flatten_text(self.content)

    def copy(self) -> BlockNode:
        """Deep copy; props and inline nodes are immutable and shared."""
        return BlockNode(
            type=self.type,
            props=self.props if isinstance(self.props, BaseModel) else dict(self.props or {}),
            content=list(self.content),
            children=[c.copy() for c in self.children],
            id=self.id,
            content_kind=self.content_kind,
        )

    def iter_depth_first(self) -> Iterator[BlockNode]:
        yield self
        for child in self.children:
            yield from child.iter_depth_first()

    def props_dict(self) -> dict[str, Any]:
        if isinstance(self.props, BaseModel):
            return self.props.model_dump(by_alias=True)
        return dict(self.props or {})

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form, BlockNote shaped; equal trees give equal dicts."""
        return {
            "id": self.id,
            "type": self.type,
            "props": self.props_dict(),
            "content": [n.model_dump() for n in self.content],
            "children": [c.to_dict() for c in self.children],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | BlockNode) -> BlockNode:
        """
        Build an unvalidated node from a template dict.

        ``content`` may be a string, or a list of strings / inline dicts:
            {"type": "heading", "props": {"level": 2}, "content": "Title"}
        """
        if isinstance(data, BlockNode):
            return data.copy()
        if "type" not in data:
            raise ValueError(f"block template needs a type: {data!r}")
        kwargs: dict[str, Any] = {
            "type": data["type"],
            "props": dict(data.get("props") or {}),
            "content": to_inline_list(data.get("content")),
            "children": [cls.from_dict(c) for c in data.get("children") or []],
        }
        if data.get("id"):
            kwargs["id"] = data["id"]
        return cls(**kwargs)
