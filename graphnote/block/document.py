"""
Document - The in-memory block tree of one editing session.

The Document exclusively owns its nodes. Every operation takes and returns
block ids; whatever is read back is a detached copy, so a caller can never
hold a reference that goes stale across an edit.

Every mutation runs inside a transaction: either it completes and the tree
is schema-valid, or it raises and the tree is exactly as before. Listeners
registered with ``subscribe`` are called after each committed mutation.

Usage:
    doc = Document.from_template(schema, [
        {"type": "heading", "props": {"level": 2}, "content": "Title"},
        {"type": "paragraph", "content": "hello"},
    ])
    pid = doc.insert_block(doc.ids()[-1], {"type": "paragraph"}, "after")
    doc.insert_inline_content(pid, 0, ["more text"])
"""

from __future__ import annotations
import logging
import re
from contextlib import contextmanager
from typing import Any, Callable, Iterable, Iterator, Literal, Mapping

from pydantic import BaseModel, ValidationError

from .inline import (
    MentionNode,
    TextNode,
    flatten_text,
    inline_length,
    normalize_inline,
    offset_text,
    plain_text,
    split_inline,
    to_inline_list,
)
from .node import BlockNode, _generate_id
from .path import IndexPath
from .schema import ContentKind, Schema, SchemaEntry, SchemaError


logger = logging.getLogger(__name__)

Position = Literal["before", "after", "first_child"]
BlockInput = BlockNode | Mapping[str, Any]
InlineInput = TextNode | MentionNode | str | Mapping[str, Any]
Listener = Callable[["Document"], None]


class StructuralError(Exception):
    """A mutation would break the schema or the tree structure; nothing was changed."""
    pass


_HEADING_RE = re.compile(r"^(#{1,6}) (.*)$")
_BULLET_RE = re.compile(r"^[-*+] (.*)$")
_NUMBERED_RE = re.compile(r"^(\d+)\. (.*)$")


class Document:

    def __init__(self, schema: Schema):
        self._schema = schema
        self._roots: list[BlockNode] = []
        self._index: dict[str, BlockNode] = {}
        self._parents: dict[str, str | None] = {}
        self._listeners: list[Listener] = []
        self._in_transaction = False

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_template(cls, schema: Schema, blocks: Iterable[BlockInput]) -> Document:
        """Create a document from BlockNote-shaped block dicts (or BlockNodes)."""
        doc = cls(schema)
        with doc._transaction(notify=False):
            for block in blocks:
                doc._roots.append(doc._adopt(block))
                doc._reindex()
        return doc

    @classmethod
    def from_markdown(cls, schema: Schema, text: str) -> Document:
        """
        Load saved markdown, one block per line.

        Only the line shapes the serializer writes are recognized: headings,
        ``- `` bullets and ``N. `` numbered items. Every other line becomes a
        plain paragraph; inline markdown is kept as literal text.
        """
        blocks: list[dict[str, Any]] = []
        for line in text.split("\n"):
            if m := _HEADING_RE.match(line):
                blocks.append({"type": "heading", "props": {"level": len(m.group(1))}, "content": m.group(2)})
            elif m := _BULLET_RE.match(line):
                blocks.append({"type": "bulletListItem", "content": m.group(1)})
            elif m := _NUMBERED_RE.match(line):
                blocks.append({"type": "numberedListItem", "content": m.group(2)})
            else:
                blocks.append({"type": "paragraph", "content": line})
        return cls.from_template(schema, blocks)

    # -------------------------------------------------------------------------
    # Read side
    # -------------------------------------------------------------------------

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def blocks(self) -> list[BlockNode]:
        """Detached copies of the top-level blocks."""
        return [b.copy() for b in self._roots]

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, block_id: object) -> bool:
        return block_id in self._index

    def ids(self) -> list[str]:
        """Ids of all blocks in document order."""
        return [b.id for b in self._iter_nodes()]

    def top_level_ids(self) -> list[str]:
        return [b.id for b in self._roots]

    def get_block(self, block_id: str) -> BlockNode:
        return self._require(block_id).copy()

    def block_text(self, block_id: str) -> str:
        return flatten_text(self._require(block_id).content)

    def inline_text(self, block_id: str) -> str:
        """Block text with one placeholder character per mention (offset-aligned)."""
        return offset_text(self._require(block_id).content)

    def parent_id(self, block_id: str) -> str | None:
        self._require(block_id)
        return self._parents[block_id]

    def path(self, block_id: str) -> IndexPath:
        indices: list[int] = []
        current: str | None = block_id
        self._require(block_id)
        while current is not None:
            siblings = self._siblings(current)
            indices.append(next(i for i, b in enumerate(siblings) if b.id == current))
            current = self._parents[current]
        return IndexPath(tuple(reversed(indices)))

    def iter_blocks(self) -> Iterator[BlockNode]:
        """Depth-first copies of every block."""
        for node in self._iter_nodes():
            yield node.copy()

    def snapshot(self) -> list[dict[str, Any]]:
        """Plain nested dicts of the whole tree; two snapshots compare equal iff the trees do."""
        return [b.to_dict() for b in self._roots]

    def to_template(self) -> list[dict[str, Any]]:
        return self.snapshot()

    # -------------------------------------------------------------------------
    # Change notification
    # -------------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called after every committed mutation; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    # -------------------------------------------------------------------------
    # Block mutations
    # -------------------------------------------------------------------------

    def insert_block(self, anchor_id: str | None, block: BlockInput, position: Position = "after") -> str:
        """
        Insert a block relative to ``anchor_id`` and return its id.

        ``first_child`` requires the anchor to be a blocks-kind block. With
        ``anchor_id=None`` the block is appended at the top level (or
        prepended for ``before``/``first_child``).
        """
        with self._transaction():
            node = self._adopt(block)
            self._place(node, anchor_id, position)
            return node.id

    def update_block_props(self, block_id: str, patch: Mapping[str, Any]) -> None:
        with self._transaction():
            node = self._require(block_id)
            try:
                node.props = self._schema.merge_props(node.type, node.props, patch)
            except ValidationError as e:
                raise StructuralError(f"invalid props for {node.type!r}: {e}") from e

    def replace_block_type(
        self,
        block_id: str,
        new_type: str,
        new_props: Mapping[str, Any] | None = None,
        content: Iterable[InlineInput] | str | None = None,
    ) -> None:
        """
        Change a block's type in place, keeping its id.

        Without explicit ``content`` the existing content is carried over:
        into a code-only block the text is flattened and mentions are dropped;
        into a none-kind block the content is discarded. Child blocks can
        only be carried into another blocks-kind block.
        """
        with self._transaction():
            node = self._require(block_id)
            entry = self._entry(new_type)
            props = self._validate_props(new_type, new_props)

            if content is not None:
                new_content = self._check_content(entry, self._to_inline(content))
            elif entry.content == ContentKind.INLINE:
                if entry.code_only:
                    text = plain_text(node.content)
                    new_content = [TextNode(text=text)] if text else []
                else:
                    new_content = list(node.content)
            else:
                new_content = []
            if new_content and entry.content != ContentKind.INLINE:
                raise StructuralError(f"{new_type!r} blocks cannot hold inline content")

            if node.children and entry.content != ContentKind.BLOCKS:
                raise StructuralError(f"{new_type!r} blocks cannot hold the child blocks of {block_id!r}")

            node.type = new_type
            node.props = props
            node.content = normalize_inline(new_content)
            node.content_kind = entry.content

    def delete_block(self, block_id: str) -> None:
        with self._transaction():
            self._require(block_id)
            siblings = self._siblings(block_id)
            siblings[:] = [b for b in siblings if b.id != block_id]

    def move_block(self, block_id: str, anchor_id: str | None, position: Position = "after") -> None:
        with self._transaction():
            node = self._require(block_id)
            if anchor_id is not None:
                self._require(anchor_id)
                if self.path(block_id).is_ancestor_of(self.path(anchor_id)):
                    raise StructuralError(f"cannot move {block_id!r} relative to itself or its descendant")
            siblings = self._siblings(block_id)
            siblings[:] = [b for b in siblings if b.id != block_id]
            self._reindex()
            self._place(node, anchor_id, position)

    # -------------------------------------------------------------------------
    # Inline mutations
    # -------------------------------------------------------------------------

    def insert_inline_content(self, block_id: str, offset: int, content: Iterable[InlineInput] | str) -> None:
        self.replace_inline_range(block_id, offset, offset, content)

    def delete_inline_range(self, block_id: str, start: int, end: int) -> None:
        self.replace_inline_range(block_id, start, end, [])

    def replace_inline_range(self, block_id: str, start: int, end: int, content: Iterable[InlineInput] | str) -> None:
        """
        Replace the inline range [start, end) with ``content``.

        Only legal inside an inline-kind block. Offsets count characters of
        text and one position per mention.
        """
        with self._transaction():
            node = self._require(block_id)
            new_nodes = self.check_inline_range(block_id, start, end, content)
            before, rest = split_inline(node.content, start)
            _, after = split_inline(rest, end - start)
            node.content = normalize_inline(before + new_nodes + after)

    def check_inline_range(
        self,
        block_id: str,
        start: int,
        end: int,
        content: Iterable[InlineInput] | str,
    ) -> list[TextNode | MentionNode]:
        """Validate a ``replace_inline_range`` call without applying it; returns the coerced nodes."""
        node = self._require(block_id)
        entry = self._entry(node.type)
        if entry.content != ContentKind.INLINE:
            raise StructuralError(
                f"block {block_id!r} ({node.type}) has content kind {entry.content.value}, not inline"
            )
        length = inline_length(node.content)
        if not 0 <= start <= end <= length:
            raise StructuralError(f"range [{start}, {end}) outside block of length {length}")
        return self._check_content(entry, self._to_inline(content))

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def transaction(self):
        """
        Group several mutations into one atomic change with a single notification.

        Usage:
            with doc.transaction():
                doc.delete_inline_range(block_id, 0, 1)
                doc.replace_block_type(block_id, "heading", {"level": 1})
        """
        return self._transaction()

    @contextmanager
    def _transaction(self, notify: bool = True):
        # nested scopes roll back on their own, so a caller may catch an inner failure and go on
        outermost = not self._in_transaction
        saved = [b.copy() for b in self._roots]
        self._in_transaction = True
        try:
            yield
        except Exception as e:
            self._roots = saved
            self._reindex()
            logger.debug("mutation rolled back: %s", e)
            raise
        finally:
            if outermost:
                self._in_transaction = False
        self._reindex()
        if outermost and notify:
            self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("change listener %r failed", listener)

    def _iter_nodes(self) -> Iterator[BlockNode]:
        for root in self._roots:
            yield from root.iter_depth_first()

    def _reindex(self) -> None:
        self._index = {}
        self._parents = {}

        def visit(nodes: list[BlockNode], parent: str | None):
            for n in nodes:
                self._index[n.id] = n
                self._parents[n.id] = parent
                visit(n.children, n.id)
        visit(self._roots, None)

    def _require(self, block_id: str) -> BlockNode:
        try:
            return self._index[block_id]
        except KeyError:
            raise StructuralError(f"no block with id {block_id!r}") from None

    def _siblings(self, block_id: str) -> list[BlockNode]:
        parent = self._parents[block_id]
        return self._roots if parent is None else self._index[parent].children

    def _entry(self, tag: str) -> SchemaEntry:
        try:
            return self._schema.block(tag)
        except SchemaError as e:
            raise StructuralError(str(e)) from e

    def _validate_props(self, tag: str, props: Mapping[str, Any] | BaseModel | None) -> BaseModel:
        try:
            return self._schema.validate_props(tag, props)
        except ValidationError as e:
            raise StructuralError(f"invalid props for {tag!r}: {e}") from e

    def _to_inline(self, content: Iterable[InlineInput] | str) -> list[TextNode | MentionNode]:
        try:
            return to_inline_list(content)
        except (ValidationError, ValueError, TypeError) as e:
            raise StructuralError(f"invalid inline content: {e}") from e

    def _check_content(self, entry: SchemaEntry, content: list[TextNode | MentionNode]) -> list[TextNode | MentionNode]:
        for item in content:
            try:
                self._schema.inline(item.type)
                if isinstance(item, TextNode):
                    self._schema.validate_styles(item.styles)
            except SchemaError as e:
                raise StructuralError(str(e)) from e
            if entry.code_only and not (isinstance(item, TextNode) and not item.styles):
                raise StructuralError(f"{entry.tag!r} only accepts unstyled text")
        return content

    def _adopt(self, block: BlockInput) -> BlockNode:
        """Validate a block (and its subtree) against the schema and give it fresh ownership."""
        try:
            node = BlockNode.from_dict(block)
        except (ValidationError, ValueError, TypeError) as e:
            raise StructuralError(f"invalid block: {e}") from e
        seen: set[str] = set()
        for n in node.iter_depth_first():
            if n.id in self._index or n.id in seen:
                n.id = self._fresh_id(seen)
            seen.add(n.id)
            entry = self._entry(n.type)
            n.props = self._validate_props(n.type, n.props)
            n.content_kind = entry.content
            if entry.content == ContentKind.INLINE:
                if n.children:
                    raise StructuralError(f"{n.type!r} holds inline content, not child blocks")
                n.content = normalize_inline(self._check_content(entry, n.content))
            elif entry.content == ContentKind.BLOCKS:
                if n.content:
                    raise StructuralError(f"{n.type!r} holds child blocks, not inline content")
            else:
                if n.content or n.children:
                    raise StructuralError(f"{n.type!r} has no content")
        return node

    def _fresh_id(self, reserved: set[str]) -> str:
        while True:
            block_id = _generate_id()
            if block_id not in self._index and block_id not in reserved:
                return block_id

    def _place(self, node: BlockNode, anchor_id: str | None, position: Position) -> None:
        if position not in ("before", "after", "first_child"):
            raise StructuralError(f"unknown position {position!r}")
        if anchor_id is None:
            if position == "after":
                self._roots.append(node)
            else:
                self._roots.insert(0, node)
            return
        anchor = self._require(anchor_id)
        if position == "first_child":
            if anchor.content_kind != ContentKind.BLOCKS:
                raise StructuralError(f"{anchor.type!r} block {anchor_id!r} does not accept child blocks")
            anchor.children.insert(0, node)
            return
        siblings = self._siblings(anchor_id)
        idx = next(i for i, b in enumerate(siblings) if b.id == anchor_id)
        siblings.insert(idx if position == "before" else idx + 1, node)
