"""
Inline content - the leaves of an inline-kind block.

Two node types exist:
- TextNode: a literal string with a StyleSet
- MentionNode: a reference to a graph entity (concept or document)

Offsets inside a block count one position per character of text and exactly
one position per mention, so a mention behaves as an atom when the editor
inserts or deletes around it.
"""

from __future__ import annotations
from typing import Annotated, Any, Iterable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from .style import StyleSet


MentionType = Literal["concept", "document"]


class TextNode(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["text"] = "text"
    text: str
    styles: StyleSet = Field(default_factory=StyleSet)

    @property
    def length(self) -> int:
        return len(self.text)

    def split(self, offset: int) -> tuple[TextNode, TextNode]:
        """Split at a character offset, keeping styles on both halves."""
        return (
            TextNode(text=self.text[:offset], styles=self.styles),
            TextNode(text=self.text[offset:], styles=self.styles),
        )


class MentionNode(BaseModel):
    """
    Inline link to a knowledge-graph entity.

    ``name`` is the display name cached at insertion time; it is what the
    markdown export shows. ``target_id`` must never be empty: an unresolved
    target gets a stub entity instead.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["mention"] = "mention"
    mention_type: MentionType = "concept"
    target_id: str
    name: str = ""

    @field_validator("target_id")
    @classmethod
    def _require_target(cls, v: str) -> str:
        if not v:
            raise ValueError("mention target_id must not be empty")
        return v

    @property
    def length(self) -> int:
        return 1

    @property
    def display_name(self) -> str:
        return self.name or "Unknown"


InlineNode = Annotated[Union[TextNode, MentionNode], Field(discriminator="type")]

_inline_adapter: TypeAdapter[TextNode | MentionNode] = TypeAdapter(InlineNode)


def to_inline(value: Any) -> TextNode | MentionNode:
    """
    Coerce a template value into an inline node.

    Accepts nodes, plain strings (unstyled text) and BlockNote-shaped dicts,
    where a mention may carry its fields under ``props``:
        {"type": "mention", "props": {"mentionType": "concept", "id": "c1", "name": "AI"}}
    """
    if isinstance(value, (TextNode, MentionNode)):
        return value
    if isinstance(value, str):
        return TextNode(text=value)
    if isinstance(value, dict) and value.get("type") == "mention" and "props" in value:
        props = value["props"]
        return MentionNode(
            mention_type=props.get("mentionType", props.get("mention_type", "concept")),
            target_id=props.get("id", props.get("target_id", "")),
            name=props.get("name", ""),
        )
    return _inline_adapter.validate_python(value)


def to_inline_list(values: Iterable[Any] | str | None) -> list[TextNode | MentionNode]:
    if values is None:
        return []
    if isinstance(values, str):
        return [TextNode(text=values)] if values else []
    return [to_inline(v) for v in values]


def inline_length(content: Iterable[TextNode | MentionNode]) -> int:
    return sum(node.length for node in content)


def flatten_text(content: Iterable[TextNode | MentionNode]) -> str:
    """
    Concatenate inline content into plain text.

    Styles are not reflected; a mention contributes only its cached display
    name, never its id or kind.
    """
    parts = []
    for node in content:
        if isinstance(node, TextNode):
            parts.append(node.text)
        elif isinstance(node, MentionNode):
            parts.append(node.name)
    return "".join(parts)


MENTION_PLACEHOLDER = "\ufffc"


def offset_text(content: Iterable[TextNode | MentionNode]) -> str:
    """Text in which every mention is one placeholder character, so string offsets equal inline offsets."""
    return "".join(node.text if isinstance(node, TextNode) else MENTION_PLACEHOLDER for node in content)


def plain_text(content: Iterable[TextNode | MentionNode]) -> str:
    """Text of the text nodes only; mentions are dropped."""
    return "".join(node.text for node in content if isinstance(node, TextNode))


def normalize_inline(content: Iterable[TextNode | MentionNode]) -> list[TextNode | MentionNode]:
    """Drop empty text runs and merge neighbouring runs with equal styles."""
    result: list[TextNode | MentionNode] = []
    for node in content:
        if isinstance(node, TextNode):
            if not node.text:
                continue
            prev = result[-1] if result else None
            if isinstance(prev, TextNode) and prev.styles == node.styles:
                result[-1] = TextNode(text=prev.text + node.text, styles=prev.styles)
                continue
        result.append(node)
    return result


def split_inline(
    content: list[TextNode | MentionNode],
    offset: int,
) -> tuple[list[TextNode | MentionNode], list[TextNode | MentionNode]]:
    """
    Split inline content at an offset.

    A text run spanning the offset is split in two; a mention is never split.
    """
    before: list[TextNode | MentionNode] = []
    after: list[TextNode | MentionNode] = []
    pos = 0
    for node in content:
        node_start = pos
        node_end = pos + node.length
        if node_end <= offset:
            before.append(node)
        elif node_start >= offset:
            after.append(node)
        else:
            # only text nodes can straddle the offset
            left, right = node.split(offset - node_start)
            before.append(left)
            after.append(right)
        pos = node_end
    return before, after
