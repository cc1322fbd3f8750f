import asyncio

import pytest

from graphnote.block import StructuralError
from graphnote.editor import EditorSession
from graphnote.highlight import HighlightEngine
from graphnote.mention import InMemoryGraphSearch, MentionResolver, sample_candidates
from graphnote.utils import EditorConfig


@pytest.fixture
def changes():
    return []


class TestChangeCallback:
    """Tests for the markdown handed to the save callback."""

    def test_edits_produce_markdown(self, changes):
        session = EditorSession.from_template([{"id": "p", "type": "paragraph"}], changes.append)
        doc = session.document
        doc.replace_block_type("p", "heading", {"level": 2})
        doc.insert_inline_content("p", 0, "Title")
        para = doc.insert_block("p", {"type": "paragraph", "content": "hello"}, "after")
        a = doc.insert_block(para, {"type": "bulletListItem", "content": "a"}, "after")
        doc.insert_block(a, {"type": "bulletListItem", "content": "b"}, "after")
        assert changes[-1] == "## Title\nhello\n- a\n- b"
        assert session.markdown == changes[-1]
        assert len(changes) == 5

    def test_initial_markdown(self):
        session = EditorSession.from_markdown("## Title\nhello")
        assert session.markdown == "## Title\nhello"

    def test_close_stops_notifications(self, changes):
        session = EditorSession.from_markdown("hello", changes.append)
        session.close()
        session.document.insert_inline_content(session.document.ids()[0], 5, "!")
        assert changes == []


# =============================================================================
# Gestures
# =============================================================================

class TestCodeFenceGesture:
    """Tests for Enter on a ``` paragraph."""

    def test_alias_becomes_canonical_language(self, changes):
        session = EditorSession.from_template([{"id": "p", "type": "paragraph", "content": "```rs"}], changes.append)
        assert session.handle_enter("p") is True
        block = session.document.get_block("p")
        assert block.type == "codeBlock"
        assert block.props.language == "rust"
        assert block.content == []
        assert len(changes) == 1

    def test_bare_fence_uses_default_language(self):
        config = EditorConfig(default_code_language="python")
        session = EditorSession.from_template([{"id": "p", "type": "paragraph", "content": "```"}], config=config)
        session.handle_enter("p")
        assert session.document.get_block("p").props.language == "python"

    def test_unknown_language_kept(self):
        session = EditorSession.from_template([{"id": "p", "type": "paragraph", "content": "```cobol"}])
        session.handle_enter("p")
        assert session.document.get_block("p").props.language == "cobol"

    @pytest.mark.parametrize("text", ["```rs x", "x```", "", "hello"])
    def test_other_text_not_consumed(self, text):
        session = EditorSession.from_template([{"id": "p", "type": "paragraph", "content": text}])
        assert session.handle_enter("p") is False
        assert session.document.get_block("p").type == "paragraph"

    def test_only_paragraphs(self):
        session = EditorSession.from_template([{"id": "h", "type": "heading", "content": "```py"}])
        assert session.handle_enter("h") is False


class TestCalloutBackspace:
    """Tests for Backspace in an emptied callout."""

    @pytest.mark.parametrize("text", ["", "x", " "])
    def test_empty_callout_becomes_paragraph(self, text):
        session = EditorSession.from_template([{"id": "c", "type": "callout", "props": {"type": "tip"}, "content": text}])
        assert session.handle_backspace("c") is True
        block = session.document.get_block("c")
        assert block.type == "paragraph"
        assert block.content == []

    def test_callout_with_text_kept(self):
        session = EditorSession.from_template([{"id": "c", "type": "callout", "content": "ok"}])
        assert session.handle_backspace("c") is False
        assert session.document.get_block("c").type == "callout"

    def test_other_blocks_ignored(self):
        session = EditorSession.from_template([{"id": "p", "type": "paragraph"}])
        assert session.handle_backspace("p") is False


# =============================================================================
# Highlighting
# =============================================================================

class TestHighlightBlock:
    """Tests for highlighting code blocks in a session."""

    @pytest.mark.asyncio
    async def test_highlight_code_block(self):
        session = EditorSession.from_template([
            {"id": "code", "type": "codeBlock", "props": {"language": "py"}, "content": "print('hi')"},
        ])
        spans = await session.highlight_block("code")
        assert "".join(s.text for s in spans) == "print('hi')"

    @pytest.mark.asyncio
    async def test_not_a_code_block(self):
        session = EditorSession.from_markdown("hello")
        with pytest.raises(StructuralError):
            await session.highlight_block(session.document.ids()[0])

    @pytest.mark.asyncio
    async def test_superseded_request_returns_none(self):
        session = EditorSession.from_template(
            [{"id": "code", "type": "codeBlock", "props": {"language": "ts"}, "content": "let x = 1"}],
            highlighter=HighlightEngine(),
        )
        first, second = await asyncio.gather(
            session.highlight_block("code"),
            session.highlight_block("code", theme="dark-plus"),
        )
        assert first is None
        assert second is not None


# =============================================================================
# Stubs and configured defaults
# =============================================================================

class TestSessionStubs:
    """Tests that stubs created in one session are found from another."""

    @pytest.mark.asyncio
    async def test_created_stub_is_searchable(self):
        search = InMemoryGraphSearch(sample_candidates())
        first = EditorSession.from_template([{"id": "p", "type": "paragraph"}], search=search)
        other = EditorSession.from_template([{"id": "q", "type": "paragraph"}], search=search)

        doc = first.document
        for i, char in enumerate("@Zeta"):
            doc.insert_inline_content("p", i, char)
            items = await first.insertion.on_input("p", i + 1)
        create = next(c for c in items if c.is_create and c.kind == "concept")
        first.insertion.commit(create)
        stub = first.resolver.stubs[0]

        items = await other.resolver.suggest("Zet")
        linked = [c for c in items if not c.is_create]
        assert [c.id for c in linked] == [stub.id]
        assert linked[0].action == "link"
        assert linked[0].entity.origin == "stub"

    def test_custom_resolver_is_left_alone(self):
        resolver = MentionResolver(InMemoryGraphSearch())
        session = EditorSession.from_markdown("hello", resolver=resolver)
        assert session.resolver is resolver
        assert resolver.on_stub is None


class TestConfiguredLanguage:

    def test_alias_default_is_normalized(self):
        config = EditorConfig(default_code_language="ts")
        session = EditorSession.from_template([{"id": "p", "type": "paragraph", "content": "```"}], config=config)
        session.handle_enter("p")
        assert session.document.get_block("p").props.language == "typescript"
        code = session.document.insert_block("p", {"type": "codeBlock"}, "after")
        assert session.document.get_block(code).props.language == "typescript"
