"""
Default specs - the block, inline and style types of the document editor.

Each block kind has its own props model, so handling code can match on the
model type instead of poking at a loose dict. All props models forbid extra
keys: an update carrying an unknown key is rejected, not silently stored.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..highlight.languages import normalize_language
from .schema import ContentKind, Schema, SchemaEntry, compose

if TYPE_CHECKING:
    from ..utils.config import EditorConfig


TextAlignment = Literal["left", "center", "right", "justify"]

CALLOUT_TYPES: tuple[str, ...] = ("tip", "info", "warning", "success", "error", "important", "quote")
CalloutType = Literal["tip", "info", "warning", "success", "error", "important", "quote"]

HIGHLIGHT_COLORS: tuple[str, ...] = ("yellow", "green", "blue", "pink", "orange", "purple")


class BlockProps(BaseModel):
    """Base of every props model. Keys may be given in snake_case or BlockNote camelCase."""
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True, alias_generator=to_camel)


class DefaultProps(BlockProps):
    text_color: str = "default"
    background_color: str = "default"
    text_alignment: TextAlignment = "left"


class ParagraphProps(DefaultProps):
    pass


class HeadingProps(DefaultProps):
    level: Literal[1, 2, 3, 4, 5, 6] = 1
    is_toggleable: bool = False


class QuoteProps(DefaultProps):
    pass


class BulletListItemProps(DefaultProps):
    pass


class NumberedListItemProps(DefaultProps):
    start: int | None = Field(default=None, ge=1)


class CheckListItemProps(DefaultProps):
    checked: bool = False


class ToggleListItemProps(DefaultProps):
    pass


class CodeBlockProps(BlockProps):
    language: str = "typescript"


class CalloutProps(DefaultProps):
    type: CalloutType = "info"


class ColumnProps(BlockProps):
    width: float = Field(default=1.0, gt=0)


class FileProps(BlockProps):
    name: str = ""
    url: str = ""
    caption: str = ""


class ImageProps(FileProps):
    text_alignment: TextAlignment = "left"
    show_preview: bool = True
    preview_width: int | None = None


class TextProps(BlockProps):
    pass


class MentionProps(BlockProps):
    mention_type: Literal["concept", "document"] = "concept"
    id: str = ""
    name: str = ""


def default_block_entries(default_language: str = "typescript") -> list[SchemaEntry]:
    return [
        SchemaEntry.block("paragraph", ParagraphProps, content=ContentKind.INLINE),
        SchemaEntry.block("heading", HeadingProps, content=ContentKind.INLINE),
        SchemaEntry.block("quote", QuoteProps, content=ContentKind.INLINE),
        SchemaEntry.block("bulletListItem", BulletListItemProps, content=ContentKind.INLINE),
        SchemaEntry.block("numberedListItem", NumberedListItemProps, content=ContentKind.INLINE),
        SchemaEntry.block("checkListItem", CheckListItemProps, content=ContentKind.INLINE),
        SchemaEntry.block("toggleListItem", ToggleListItemProps, content=ContentKind.INLINE),
        SchemaEntry.block(
            "codeBlock",
            CodeBlockProps,
            content=ContentKind.INLINE,
            code_only=True,
            default_props={"language": normalize_language(default_language)},
        ),
        SchemaEntry.block("callout", CalloutProps, content=ContentKind.INLINE),
        SchemaEntry.block("column", ColumnProps, content=ContentKind.BLOCKS),
        SchemaEntry.block("image", ImageProps, content=ContentKind.NONE),
        SchemaEntry.block("file", FileProps, content=ContentKind.NONE),
    ]


def default_inline_entries() -> list[SchemaEntry]:
    return [
        SchemaEntry.inline("text", TextProps, content=ContentKind.STYLED),
        SchemaEntry.inline("mention", MentionProps, content=ContentKind.NONE),
    ]


def default_style_entries() -> list[SchemaEntry]:
    return [
        SchemaEntry.style("bold", "boolean"),
        SchemaEntry.style("italic", "boolean"),
        SchemaEntry.style("underline", "boolean"),
        SchemaEntry.style("strike", "boolean"),
        SchemaEntry.style("code", "boolean"),
        SchemaEntry.style("textColor", "string"),
        SchemaEntry.style("backgroundColor", "string"),
        SchemaEntry.style("smallCaps", "boolean"),
        SchemaEntry.style("colorHighlight", "string"),
        SchemaEntry.style("colorUnderline", "string"),
        SchemaEntry.style("fontSize", "string"),
    ]


def default_entries(default_language: str = "typescript") -> list[SchemaEntry]:
    return default_block_entries(default_language) + default_inline_entries() + default_style_entries()


def default_schema(config: "EditorConfig | None" = None) -> Schema:
    """Compose the editor's full schema."""
    language = config.default_code_language if config is not None else "typescript"
    return compose(default_entries(language))
