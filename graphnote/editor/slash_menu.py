"""
Slash menu items - the block-insertion menu opened by ``/``.

Each item converts the block the menu was opened in. Text-style conversions
(headings, lists, quote) keep the block's text; code blocks and callouts
start empty.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable

from ..block.document import Document
from ..block.specs import CALLOUT_TYPES
from ..highlight.languages import normalize_language


BlockAction = Callable[[Document, str], None]


@dataclass(frozen=True)
class SlashMenuItem:
    title: str
    action: BlockAction
    subtext: str = ""
    aliases: tuple[str, ...] = ()
    group: str = "Basic blocks"

    def matches(self, query: str) -> bool:
        q = query.lower()
        return q in self.title.lower() or any(q in alias.lower() for alias in self.aliases)

    def apply(self, document: Document, block_id: str) -> None:
        self.action(document, block_id)


def convert_to(block_type: str, props: dict[str, Any] | None = None, *, clear: bool = False) -> BlockAction:
    def action(document: Document, block_id: str) -> None:
        document.replace_block_type(block_id, block_type, props, content=[] if clear else None)
    return action


def _heading(level: int) -> SlashMenuItem:
    return SlashMenuItem(
        title=f"Heading {level}",
        action=convert_to("heading", {"level": level}),
        subtext=f"Level {level} heading",
        aliases=(f"h{level}", "heading", "title"),
        group="Headings",
    )


def default_slash_items(default_language: str = "typescript") -> list[SlashMenuItem]:
    items = [
        _heading(1),
        _heading(2),
        _heading(3),
        SlashMenuItem("Quote", convert_to("quote"), "Quote or excerpt", ("quote", "blockquote")),
        SlashMenuItem("Numbered List", convert_to("numberedListItem"), "List with ordered items", ("ol", "li", "list", "numbered")),
        SlashMenuItem("Bullet List", convert_to("bulletListItem"), "List with unordered items", ("ul", "li", "list", "bullet")),
        SlashMenuItem("Check List", convert_to("checkListItem"), "List with checkboxes", ("ul", "li", "list", "checklist", "todo")),
        SlashMenuItem("Toggle List", convert_to("toggleListItem"), "Toggleable list item", ("li", "list", "toggle", "collapsible")),
        SlashMenuItem("Paragraph", convert_to("paragraph"), "The body of your document", ("p", "paragraph", "text")),
        SlashMenuItem(
            "Code Block",
            convert_to("codeBlock", {"language": normalize_language(default_language)}, clear=True),
            "코드 블록 (Syntax Highlighting)",
            ("code", "코드", "```"),
            group="Other",
        ),
        SlashMenuItem(
            "Callout",
            convert_to("callout", {"type": "info"}, clear=True),
            "콜아웃 블록 추가",
            ("callout", "콜아웃", "alert"),
            group="Other",
        ),
    ]
    for callout_type in CALLOUT_TYPES[:4]:
        title = callout_type.capitalize()
        items.append(SlashMenuItem(
            f"{title} Callout",
            convert_to("callout", {"type": callout_type}, clear=True),
            f"{title} 콜아웃 블록",
            (callout_type, f"callout-{callout_type}"),
            group="Callouts",
        ))
    return items


def filter_slash_items(items: list[SlashMenuItem], query: str) -> list[SlashMenuItem]:
    return [item for item in items if item.matches(query)]
