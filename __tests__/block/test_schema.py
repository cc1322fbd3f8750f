import pytest
from pydantic import BaseModel, ValidationError

from graphnote.block import ContentKind, SchemaEntry, SchemaError, SchemaErrorReason, compose, default_schema
from graphnote.block.specs import CodeBlockProps, HeadingProps, ParagraphProps, TextProps, default_entries


class StrictProps(BaseModel):
    level: int


# =============================================================================
# compose
# =============================================================================

class TestCompose:
    """Tests for building a Schema from entries."""

    def test_default_schema_composes(self):
        """The editor's own entries compose without errors."""
        schema = default_schema()
        assert schema.has_block("paragraph")
        assert schema.has_block("codeBlock")
        assert "mention" in schema.inlines
        assert "colorHighlight" in schema.styles

    def test_content_kinds(self):
        schema = default_schema()
        assert schema.block("paragraph").content == ContentKind.INLINE
        assert schema.block("column").content == ContentKind.BLOCKS
        assert schema.block("image").content == ContentKind.NONE
        assert schema.block("codeBlock").code_only

    def test_duplicate_block_tag(self):
        """Two block entries with the same tag are rejected."""
        entries = [
            SchemaEntry.block("paragraph", ParagraphProps, content="inline"),
            SchemaEntry.block("paragraph", ParagraphProps, content="inline"),
        ]
        with pytest.raises(SchemaError) as exc:
            compose(entries)
        assert exc.value.reason == SchemaErrorReason.DUPLICATE_TAG
        assert exc.value.tag == "paragraph"

    def test_duplicate_tag_across_namespaces(self):
        """A style may not reuse a block tag."""
        entries = [
            SchemaEntry.block("code", ParagraphProps, content="inline"),
            SchemaEntry.style("code", "boolean"),
        ]
        with pytest.raises(SchemaError) as exc:
            compose(entries)
        assert exc.value.reason == SchemaErrorReason.DUPLICATE_TAG

    def test_invalid_default_props(self):
        """Default props that fail the props model are rejected at compose time."""
        entry = SchemaEntry.block("heading", HeadingProps, content="inline", default_props={"level": 9})
        with pytest.raises(SchemaError) as exc:
            compose([entry])
        assert exc.value.reason == SchemaErrorReason.INVALID_DEFAULT_PROPS

    def test_required_prop_without_default(self):
        """A props model with a required field needs it in default_props."""
        with pytest.raises(SchemaError) as exc:
            compose([SchemaEntry.block("strict", StrictProps, content="inline")])
        assert exc.value.reason == SchemaErrorReason.INVALID_DEFAULT_PROPS
        schema = compose([SchemaEntry.block("strict", StrictProps, content="inline", default_props={"level": 1})])
        assert schema.validate_props("strict").level == 1

    def test_missing_content_kind(self):
        entry = SchemaEntry(tag="broken", namespace="block", props=ParagraphProps, content="sideways")
        assert entry.content is None
        with pytest.raises(SchemaError) as exc:
            compose([entry])
        assert exc.value.reason == SchemaErrorReason.MISSING_CONTENT_KIND

    def test_inline_kind_not_valid_for_block(self):
        """The styled kind belongs to the inline namespace only."""
        with pytest.raises(SchemaError) as exc:
            compose([SchemaEntry.block("odd", ParagraphProps, content="styled")])
        assert exc.value.reason == SchemaErrorReason.MISSING_CONTENT_KIND

    def test_missing_props_model(self):
        entry = SchemaEntry(tag="bare", namespace="inline", content=ContentKind.NONE)
        with pytest.raises(SchemaError) as exc:
            compose([entry])
        assert exc.value.reason == SchemaErrorReason.MISSING_PROPS_VALIDATOR

    def test_code_only_requires_inline(self):
        entry = SchemaEntry(tag="code", namespace="block", props=CodeBlockProps, content=ContentKind.BLOCKS, code_only=True)
        with pytest.raises(SchemaError):
            compose([entry])

    def test_style_needs_value_type(self):
        entry = SchemaEntry(tag="glow", namespace="style")
        with pytest.raises(SchemaError) as exc:
            compose([entry])
        assert exc.value.reason == SchemaErrorReason.MISSING_CONTENT_KIND


# =============================================================================
# Lookup and validation
# =============================================================================

class TestSchemaLookup:
    """Tests for reading from a composed Schema."""

    def test_unknown_block(self):
        schema = default_schema()
        with pytest.raises(SchemaError) as exc:
            schema.block("table")
        assert exc.value.reason == SchemaErrorReason.UNKNOWN_TAG

    def test_schema_is_immutable(self):
        schema = default_schema()
        with pytest.raises(AttributeError):
            schema._blocks = {}
        with pytest.raises(TypeError):
            schema.blocks["table"] = schema.block("paragraph")

    def test_tags_cover_all_namespaces(self):
        schema = compose(default_entries())
        assert {"paragraph", "text", "mention", "bold"} <= schema.tags

    def test_validate_props_applies_defaults(self):
        schema = default_schema()
        props = schema.validate_props("heading", {"level": 3})
        assert props.level == 3
        assert props.text_color == "default"

    def test_validate_props_accepts_camel_case(self):
        schema = default_schema()
        props = schema.validate_props("heading", {"textAlignment": "center", "isToggleable": True})
        assert props.text_alignment == "center"
        assert props.is_toggleable is True

    def test_validate_props_rejects_unknown_key(self):
        schema = default_schema()
        with pytest.raises(ValidationError):
            schema.validate_props("paragraph", {"level": 1})

    def test_code_language_default_follows_argument(self):
        schema = compose(default_entries("python"))
        assert schema.validate_props("codeBlock").language == "python"

    def test_merge_props(self):
        schema = default_schema()
        current = schema.validate_props("heading", {"level": 1, "textColor": "red"})
        merged = schema.merge_props("heading", current, {"level": 2})
        assert merged.level == 2
        assert merged.text_color == "red"

    def test_validate_styles(self):
        schema = default_schema()
        schema.validate_styles({"bold": True, "colorHighlight": "yellow", "fontSize": "18px"})
        with pytest.raises(SchemaError) as exc:
            schema.validate_styles({"blink": True})
        assert exc.value.reason == SchemaErrorReason.UNKNOWN_TAG
        with pytest.raises(SchemaError) as exc:
            schema.validate_styles({"fontSize": True})
        assert exc.value.reason == SchemaErrorReason.INVALID_STYLE

    def test_text_inline_is_styled(self):
        schema = compose([SchemaEntry.inline("text", TextProps, content="styled")])
        assert schema.inline("text").content == ContentKind.STYLED

    def test_unknown_namespace(self):
        entry = SchemaEntry(tag="odd", namespace="widget", props=ParagraphProps, content=ContentKind.INLINE)
        with pytest.raises(SchemaError) as exc:
            compose([entry])
        assert exc.value.reason == SchemaErrorReason.UNKNOWN_NAMESPACE

    def test_code_language_default_is_normalized(self):
        schema = compose(default_entries("ts"))
        assert schema.validate_props("codeBlock").language == "typescript"
