"""
InsertionController - the slash / mention insertion protocol.

The host reports every keystroke with ``on_input(block_id, cursor)`` after
applying it to the document. The controller opens a menu when ``/`` or ``@``
is typed, keeps the query in sync, requests candidates (mention resolver for
``@``, the static item list for ``/``) and, on ``commit``, replaces the
trigger span in a single atomic document operation.

Usage:
    controller = InsertionController(doc, resolver)
    doc.insert_inline_content(block_id, 0, "@")
    await controller.on_input(block_id, 1)
    doc.insert_inline_content(block_id, 1, "api")
    items = await controller.on_input(block_id, 4)
    controller.commit(items[0])     # mention + trailing space
"""

from __future__ import annotations
import logging
from typing import Any

from ..block.document import Document
from ..block.inline import MentionNode
from ..mention.models import Candidate, SuggestContext
from ..mention.resolver import MentionResolver
from .menu import SuggestionMenu
from .slash_menu import SlashMenuItem, default_slash_items, filter_slash_items
from .triggers import MENTION_TRIGGER, SLASH_TRIGGER, TriggerMatch, detect_trigger, track_trigger


logger = logging.getLogger(__name__)


class InsertionError(Exception):
    pass


class InsertionController:

    def __init__(
        self,
        document: Document,
        resolver: MentionResolver,
        slash_items: list[SlashMenuItem] | None = None,
        doc_lang: str | None = None,
    ):
        self.document = document
        self.resolver = resolver
        self.doc_lang = doc_lang
        self.slash_items = slash_items if slash_items is not None else default_slash_items()
        self.mention_menu: SuggestionMenu[Candidate] = SuggestionMenu(MENTION_TRIGGER, self._suggest_mentions)
        self.slash_menu: SuggestionMenu[SlashMenuItem] = SuggestionMenu(SLASH_TRIGGER, self._filter_slash)
        self.active: TriggerMatch | None = None
        self.block_id: str | None = None

    @property
    def menu(self) -> SuggestionMenu | None:
        """The open menu, if any."""
        if self.active is None:
            return None
        return self.mention_menu if self.active.char == MENTION_TRIGGER else self.slash_menu

    # -------------------------------------------------------------------------
    # Input tracking
    # -------------------------------------------------------------------------

    async def on_input(self, block_id: str, cursor: int) -> list[Any] | None:
        """
        Track the cursor after an edit of ``block_id``.

        Returns the menu items for the current query, or None when no menu is
        open or the response was superseded by a newer keystroke.
        """
        text = self.document.inline_text(block_id)
        if self.active is not None and block_id == self.block_id:
            self.active = track_trigger(self.active, text, cursor)
        else:
            self.active = None
        if self.active is None:
            self._close_menus()
            self.active = detect_trigger(text, cursor)
            self.block_id = block_id if self.active is not None else None
            if self.active is None:
                return None
        return await self.menu.update(self.active.query)

    def close(self) -> None:
        self.active = None
        self.block_id = None
        self._close_menus()

    def _close_menus(self) -> None:
        if self.mention_menu.is_open:
            self.mention_menu.close()
        if self.slash_menu.is_open:
            self.slash_menu.close()

    # -------------------------------------------------------------------------
    # Providers
    # -------------------------------------------------------------------------

    def linked_ids(self) -> frozenset[str]:
        """Ids of every entity already mentioned in the document."""
        ids = set()
        for block in self.document.iter_blocks():
            ids.update(n.target_id for n in block.content if isinstance(n, MentionNode))
        return frozenset(ids)

    async def _suggest_mentions(self, query: str) -> list[Candidate]:
        context = SuggestContext(doc_lang=self.doc_lang, exclude_ids=self.linked_ids())
        return await self.resolver.suggest(query, context)

    async def _filter_slash(self, query: str) -> list[SlashMenuItem]:
        return filter_slash_items(self.slash_items, query)

    # -------------------------------------------------------------------------
    # Commit
    # -------------------------------------------------------------------------

    def commit(self, item: Candidate | SlashMenuItem) -> int:
        """
        Replace the trigger span with the chosen item; returns the new cursor offset.

        A mention is followed by a single space so typing continues outside it.
        """
        if self.active is None or self.block_id is None:
            raise InsertionError("no suggestion menu is open")
        match, block_id = self.active, self.block_id

        if isinstance(item, Candidate):
            if match.char != MENTION_TRIGGER:
                raise InsertionError("mention candidates can only be committed from the @ menu")
            if item.is_create and not item.name.strip():
                raise InsertionError("cannot create an entity without a name")
            # a create candidate allocates a stub on resolve, so the edit is checked first
            pending = MentionNode(mention_type=item.kind, target_id=item.id or "pending", name=item.name)
            self.document.check_inline_range(block_id, match.start, match.end, [pending, " "])
            entity = self.resolver.resolve(item)
            mention = MentionNode(mention_type=entity.kind, target_id=entity.id, name=entity.name)
            self.document.replace_inline_range(block_id, match.start, match.end, [mention, " "])
            cursor = match.start + 2
        elif isinstance(item, SlashMenuItem):
            if match.char != SLASH_TRIGGER:
                raise InsertionError("block items can only be committed from the / menu")
            with self.document.transaction():
                self.document.delete_inline_range(block_id, match.start, match.end)
                item.apply(self.document, block_id)
            cursor = min(match.start, len(self.document.inline_text(block_id)))
        else:
            raise TypeError(f"cannot commit {type(item).__name__}")

        logger.debug("committed %r at %s in block %s", item, match.span, block_id)
        self.close()
        return cursor
