"""
Schema - The composed set of block, inline and style types.

A Schema is built once, at startup, from a flat list of SchemaEntry
declarations. Composition validates every entry and fails fast:
- tags must be unique across the block, inline and style namespaces
- every entry declares its content kind (or, for styles, a value type)
- every block/inline entry declares a props model, and its default props
  must validate against it

The resulting Schema is read-only and is consulted by the Document on every
mutation, so an unknown block type or style key can never enter the tree.

Usage:
    schema = compose([
        SchemaEntry.block("paragraph", ParagraphProps, content="inline"),
        SchemaEntry.inline("text", TextProps, content="styled"),
        SchemaEntry.style("bold", "boolean"),
    ])
    schema.block("paragraph").content   # ContentKind.INLINE
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Literal, Mapping, Type

from pydantic import BaseModel, ValidationError


class ContentKind(str, Enum):
    NONE = "none"
    INLINE = "inline"
    BLOCKS = "blocks"
    # inline-namespace kinds
    STYLED = "styled"


Namespace = Literal["block", "inline", "style"]
StyleValueType = Literal["boolean", "string"]

_CONTENT_KINDS: dict[str, set[ContentKind]] = {
    "block": {ContentKind.NONE, ContentKind.INLINE, ContentKind.BLOCKS},
    "inline": {ContentKind.NONE, ContentKind.STYLED},
}


class SchemaErrorReason(str, Enum):
    DUPLICATE_TAG = "duplicate_tag"
    INVALID_DEFAULT_PROPS = "invalid_default_props"
    MISSING_CONTENT_KIND = "missing_content_kind"
    MISSING_PROPS_VALIDATOR = "missing_props_validator"
    UNKNOWN_TAG = "unknown_tag"
    INVALID_STYLE = "invalid_style"
    UNKNOWN_NAMESPACE = "unknown_namespace"


def _by_field_name(model: Type[BaseModel], data: Mapping[str, Any]) -> dict[str, Any]:
    """Rewrite alias keys (e.g. camelCase) to field names; unknown keys are kept."""
    aliases = {f.alias: name for name, f in model.model_fields.items() if f.alias}
    return {aliases.get(key, key): value for key, value in data.items()}


class SchemaError(Exception):
    """Raised when a schema cannot be composed or a value does not fit it."""

    def __init__(self, reason: SchemaErrorReason, tag: str, message: str = ""):
        self.reason = reason
        self.tag = tag
        super().__init__(f"{reason.value}: {tag!r}" + (f" - {message}" if message else ""))


@dataclass(frozen=True)
class SchemaEntry:
    """
    Declaration of one block, inline or style type.

    Attributes:
        tag: Unique type name (e.g. "paragraph", "mention", "bold")
        namespace: "block", "inline" or "style"
        props: Pydantic model describing the props shape (block/inline only)
        default_props: Props applied when a node is created without them
        content: Declared content kind
        renderer: Capability marker naming the renderer the host binds to
        code_only: Inline content restricted to unstyled text (code blocks)
        value_type: Style value type, "boolean" or "string" (styles only)
    """
    tag: str
    namespace: Namespace
    props: Type[BaseModel] | None = None
    default_props: Mapping[str, Any] = field(default_factory=dict)
    content: ContentKind | None = None
    renderer: str | None = None
    code_only: bool = False
    value_type: StyleValueType | None = None

    def __post_init__(self):
        if isinstance(self.content, str) and not isinstance(self.content, ContentKind):
            try:
                object.__setattr__(self, "content", ContentKind(self.content))
            except ValueError:
                object.__setattr__(self, "content", None)

    @classmethod
    def block(
        cls,
        tag: str,
        props: Type[BaseModel],
        *,
        content: ContentKind | str,
        default_props: Mapping[str, Any] | None = None,
        renderer: str | None = None,
        code_only: bool = False,
    ) -> SchemaEntry:
        return cls(
            tag=tag,
            namespace="block",
            props=props,
            default_props=dict(default_props or {}),
            content=ContentKind(content),
            renderer=renderer or tag,
            code_only=code_only,
        )

    @classmethod
    def inline(
        cls,
        tag: str,
        props: Type[BaseModel],
        *,
        content: ContentKind | str,
        default_props: Mapping[str, Any] | None = None,
        renderer: str | None = None,
    ) -> SchemaEntry:
        return cls(
            tag=tag,
            namespace="inline",
            props=props,
            default_props=dict(default_props or {}),
            content=ContentKind(content),
            renderer=renderer or tag,
        )

    @classmethod
    def style(cls, tag: str, value_type: StyleValueType, *, renderer: str | None = None) -> SchemaEntry:
        return cls(tag=tag, namespace="style", value_type=value_type, renderer=renderer or tag)

    def make_props(self, values: Mapping[str, Any] | None = None) -> BaseModel:
        """Validate ``values`` layered over the default props."""
        if self.props is None:
            raise SchemaError(SchemaErrorReason.MISSING_PROPS_VALIDATOR, self.tag)
        data = _by_field_name(self.props, self.default_props)
        data.update(_by_field_name(self.props, values or {}))
        return self.props.model_validate(data)


class Schema:
    """
    Immutable, validated registry of type definitions keyed by tag.

    Do not construct directly - use ``compose``.
    """

    __slots__ = ["_blocks", "_inlines", "_styles"]

    def __init__(
        self,
        blocks: Mapping[str, SchemaEntry],
        inlines: Mapping[str, SchemaEntry],
        styles: Mapping[str, SchemaEntry],
    ):
        self._blocks = MappingProxyType(dict(blocks))
        self._inlines = MappingProxyType(dict(inlines))
        self._styles = MappingProxyType(dict(styles))

    def __setattr__(self, name: str, value: Any) -> None:
        if hasattr(self, name):
            raise AttributeError("Schema is immutable")
        super().__setattr__(name, value)

    def __repr__(self) -> str:
        return f"Schema(blocks={list(self._blocks)}, inlines={list(self._inlines)}, styles={list(self._styles)})"

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    @property
    def blocks(self) -> Mapping[str, SchemaEntry]:
        return self._blocks

    @property
    def inlines(self) -> Mapping[str, SchemaEntry]:
        return self._inlines

    @property
    def styles(self) -> Mapping[str, SchemaEntry]:
        return self._styles

    @property
    def tags(self) -> set[str]:
        return set(self._blocks) | set(self._inlines) | set(self._styles)

    def has_block(self, tag: str) -> bool:
        return tag in self._blocks

    def block(self, tag: str) -> SchemaEntry:
        try:
            return self._blocks[tag]
        except KeyError:
            raise SchemaError(SchemaErrorReason.UNKNOWN_TAG, tag, "unknown block type") from None

    def inline(self, tag: str) -> SchemaEntry:
        try:
            return self._inlines[tag]
        except KeyError:
            raise SchemaError(SchemaErrorReason.UNKNOWN_TAG, tag, "unknown inline type") from None

    def style(self, tag: str) -> SchemaEntry:
        try:
            return self._styles[tag]
        except KeyError:
            raise SchemaError(SchemaErrorReason.UNKNOWN_TAG, tag, "unknown style") from None

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate_props(self, tag: str, props: Mapping[str, Any] | BaseModel | None = None) -> BaseModel:
        """Build the props model for block ``tag`` from defaults plus ``props``."""
        entry = self.block(tag)
        if isinstance(props, BaseModel):
            props = props.model_dump()
        return entry.make_props(props)

    def merge_props(self, tag: str, current: BaseModel, patch: Mapping[str, Any]) -> BaseModel:
        """Apply ``patch`` over ``current``; unknown keys fail validation."""
        entry = self.block(tag)
        data = current.model_dump()
        data.update(_by_field_name(entry.props, patch))
        return entry.props.model_validate(data)

    def validate_styles(self, styles: Mapping[str, Any]) -> None:
        for key, value in styles.items():
            entry = self.style(key)
            if entry.value_type == "boolean" and value is not True:
                raise SchemaError(SchemaErrorReason.INVALID_STYLE, key, f"expected boolean, got {value!r}")
            if entry.value_type == "string" and not isinstance(value, str):
                raise SchemaError(SchemaErrorReason.INVALID_STYLE, key, f"expected string, got {value!r}")


def _check_entry(entry: SchemaEntry) -> None:
    if entry.namespace not in ("block", "inline", "style"):
        raise SchemaError(SchemaErrorReason.UNKNOWN_NAMESPACE, entry.tag, f"got {entry.namespace!r}")
    if entry.namespace == "style":
        if entry.value_type not in ("boolean", "string"):
            raise SchemaError(SchemaErrorReason.MISSING_CONTENT_KIND, entry.tag, "style needs a value type")
        return
    if entry.content is None or entry.content not in _CONTENT_KINDS[entry.namespace]:
        raise SchemaError(SchemaErrorReason.MISSING_CONTENT_KIND, entry.tag, f"got {entry.content!r}")
    if entry.props is None:
        raise SchemaError(SchemaErrorReason.MISSING_PROPS_VALIDATOR, entry.tag)
    if entry.code_only and entry.content != ContentKind.INLINE:
        raise SchemaError(SchemaErrorReason.MISSING_CONTENT_KIND, entry.tag, "code_only requires inline content")
    try:
        entry.make_props()
    except ValidationError as e:
        raise SchemaError(SchemaErrorReason.INVALID_DEFAULT_PROPS, entry.tag, str(e)) from e


def compose(entries: Iterable[SchemaEntry]) -> Schema:
    """
    Compose schema entries into an immutable Schema.

    Raises:
        SchemaError: on a duplicate tag (in any namespace), an unknown
            namespace, a missing content kind or props model, or default
            props that fail validation.
    """
    buckets: dict[str, dict[str, SchemaEntry]] = {"block": {}, "inline": {}, "style": {}}
    seen: set[str] = set()
    for entry in entries:
        if entry.tag in seen:
            raise SchemaError(SchemaErrorReason.DUPLICATE_TAG, entry.tag)
        _check_entry(entry)
        seen.add(entry.tag)
        buckets[entry.namespace][entry.tag] = entry
    return Schema(buckets["block"], buckets["inline"], buckets["style"])
