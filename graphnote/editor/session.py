"""
EditorSession - one local editing session around a Document.

The session owns the document for its lifetime and wires its change
notification to the markdown serializer: after every committed mutation the
``on_change`` callback receives the full markdown export. It also carries
the keyboard gestures that restructure blocks:

- Enter on a paragraph containing exactly "```" or "```lang" turns it into
  an empty code block with the normalized language
- Backspace in an empty (or one-character) callout turns it back into an
  empty paragraph
"""

from __future__ import annotations
import logging
import re
from typing import Any, Callable, Iterable, Mapping

from ..block.document import Document, StructuralError
from ..block.inline import plain_text
from ..block.markdown import serialize
from ..block.schema import Schema
from ..block.specs import CodeBlockProps, default_schema
from ..highlight.engine import HighlightEngine, StyledSpan
from ..highlight.languages import normalize_language
from ..mention.models import GraphEntityRef
from ..mention.resolver import MentionResolver
from ..mention.search import GraphSearch, InMemoryGraphSearch
from ..utils.config import EditorConfig
from .insertion import InsertionController
from .slash_menu import default_slash_items


logger = logging.getLogger(__name__)

ChangeCallback = Callable[[str], None]

_CODE_FENCE_RE = re.compile(r"^```(\w*)$")


class EditorSession:

    def __init__(
        self,
        document: Document,
        on_change: ChangeCallback | None = None,
        *,
        search: GraphSearch | None = None,
        resolver: MentionResolver | None = None,
        highlighter: HighlightEngine | None = None,
        config: EditorConfig | None = None,
        doc_lang: str | None = None,
    ):
        self.config = config or EditorConfig()
        self.document = document
        self.on_change = on_change
        self.doc_lang = doc_lang
        if resolver is None:
            search = search if search is not None else InMemoryGraphSearch()
            resolver = MentionResolver(
                search,
                timeout=self.config.search_timeout,
                on_stub=self._stub_registrar(search),
            )
        self.resolver = resolver
        self.highlighter = highlighter or HighlightEngine()
        self.insertion = InsertionController(
            document,
            self.resolver,
            slash_items=default_slash_items(self.config.default_code_language),
            doc_lang=doc_lang,
        )
        self.markdown = serialize(document)
        self._highlight_generation: dict[str, int] = {}
        self._unsubscribe = document.subscribe(self._on_document_change)

    @classmethod
    def from_markdown(cls, text: str, on_change: ChangeCallback | None = None, *, schema: Schema | None = None, **kwargs: Any) -> EditorSession:
        config = kwargs.get("config")
        document = Document.from_markdown(schema or default_schema(config), text)
        return cls(document, on_change, **kwargs)

    @classmethod
    def from_template(
        cls,
        blocks: Iterable[Mapping[str, Any]],
        on_change: ChangeCallback | None = None,
        *,
        schema: Schema | None = None,
        **kwargs: Any,
    ) -> EditorSession:
        config = kwargs.get("config")
        document = Document.from_template(schema or default_schema(config), blocks)
        return cls(document, on_change, **kwargs)

    def _stub_registrar(self, search: GraphSearch) -> Callable[[GraphEntityRef], None] | None:
        """Make stubs created here findable by later ``@`` queries on an in-memory search."""
        if not isinstance(search, InMemoryGraphSearch):
            return None

        def register(stub: GraphEntityRef) -> None:
            search.add(stub, lang=self.doc_lang)
            logger.debug("registered stub %s with the graph search", stub.id)
        return register

    def close(self) -> None:
        self.insertion.close()
        self._unsubscribe()

    def _on_document_change(self, document: Document) -> None:
        self.markdown = serialize(document)
        if self.on_change is not None:
            self.on_change(self.markdown)

    # -------------------------------------------------------------------------
    # Gestures
    # -------------------------------------------------------------------------

    def handle_enter(self, block_id: str) -> bool:
        """Convert a "```lang" paragraph into a code block; True if the key was consumed."""
        block = self.document.get_block(block_id)
        if block.type != "paragraph":
            return False
        text = plain_text(block.content)
        if not text:
            return False
        match = _CODE_FENCE_RE.match(text)
        if match is None:
            return False
        language = normalize_language(match.group(1) or self.config.default_code_language)
        self.document.replace_block_type(block_id, "codeBlock", {"language": language}, content=[])
        logger.debug("converted block %s to %s code block", block_id, language)
        return True

    def handle_backspace(self, block_id: str) -> bool:
        """Turn an emptied callout into a paragraph; True if the key was consumed."""
        block = self.document.get_block(block_id)
        if block.type != "callout":
            return False
        text = block.text.strip()
        if len(text) > 1:
            return False
        self.document.replace_block_type(block_id, "paragraph", {}, content=[])
        return True

    # -------------------------------------------------------------------------
    # Highlighting
    # -------------------------------------------------------------------------

    async def highlight_block(self, block_id: str, theme: str | None = None) -> list[StyledSpan] | None:
        """
        Highlight a code block's text.

        Returns None if another highlight of the same block was requested
        before this one finished.
        """
        block = self.document.get_block(block_id)
        if not isinstance(block.props, CodeBlockProps):
            raise StructuralError(f"block {block_id!r} ({block.type}) is not a code block")
        generation = self._highlight_generation.get(block_id, 0) + 1
        self._highlight_generation[block_id] = generation
        spans = await self.highlighter.highlight(
            plain_text(block.content),
            block.props.language,
            theme or self.config.highlight_theme,
        )
        if self._highlight_generation.get(block_id) != generation:
            return None
        return spans
