from graphnote.block import Document, serialize


class TestSerialize:
    """Tests for the markdown export."""

    def test_basic_blocks(self, doc):
        assert serialize(doc) == "## Title\nhello\n- a\n- b"

    def test_deterministic(self, doc):
        assert serialize(doc) == serialize(doc)

    def test_numbered_items_all_render_as_one(self, schema):
        doc = Document.from_template(schema, [
            {"type": "numberedListItem", "content": "first"},
            {"type": "numberedListItem", "content": "second"},
        ])
        assert serialize(doc) == "1. first\n1. second"

    def test_unrendered_blocks_become_empty_lines(self, schema):
        doc = Document.from_template(schema, [
            {"type": "paragraph", "content": "before"},
            {"type": "codeBlock", "content": "x = 1"},
            {"type": "callout", "content": "careful"},
            {"type": "paragraph", "content": "after"},
        ])
        assert serialize(doc) == "before\n\n\nafter"

    def test_styles_are_not_written(self, schema):
        doc = Document.from_template(schema, [{"type": "paragraph", "content": [
            {"type": "text", "text": "bold", "styles": {"bold": True}},
            {"type": "text", "text": " text"},
        ]}])
        assert serialize(doc) == "bold text"

    def test_mention_writes_name_only(self, schema):
        doc = Document.from_template(schema, [{"type": "paragraph", "content": [
            "see ",
            {"type": "mention", "props": {"mentionType": "document", "id": "d7", "name": "프로젝트 개요"}},
        ]}])
        markdown = serialize(doc)
        assert markdown == "see 프로젝트 개요"
        assert "d7" not in markdown

    def test_heading_levels(self, schema):
        doc = Document.from_template(schema, [
            {"type": "heading", "props": {"level": level}, "content": f"h{level}"}
            for level in range(1, 7)
        ])
        assert serialize(doc).split("\n")[5] == "###### h6"

    def test_children_are_not_walked(self, schema):
        doc = Document.from_template(schema, [
            {"type": "column", "children": [{"type": "paragraph", "content": "nested"}]},
        ])
        assert serialize(doc) == ""

    def test_empty_document(self, schema):
        assert serialize(Document(schema)) == ""
