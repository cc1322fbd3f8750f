"""
Trigger detection for the suggestion menus.

A trigger character opens a menu when it is typed at the start of a block or
right after whitespace. While the menu is open the query is the text between
the trigger and the cursor, recomputed on every keystroke; the menu closes
when the cursor moves back over the trigger, the trigger character is
deleted, or a line break enters the query.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Iterable


SLASH_TRIGGER = "/"
MENTION_TRIGGER = "@"
DEFAULT_TRIGGERS = (SLASH_TRIGGER, MENTION_TRIGGER)


@dataclass(frozen=True)
class TriggerMatch:
    """
    An open trigger span ``[start, end)`` in a block's offset text.

    ``start`` is the trigger character's offset, ``end`` the cursor.
    """
    char: str
    start: int
    end: int
    query: str

    @property
    def span(self) -> tuple[int, int]:
        return self.start, self.end


def detect_trigger(text: str, cursor: int, triggers: Iterable[str] = DEFAULT_TRIGGERS) -> TriggerMatch | None:
    """Match the character just typed before ``cursor`` against the triggers."""
    if cursor <= 0 or cursor > len(text):
        return None
    char = text[cursor - 1]
    if char not in triggers:
        return None
    if cursor >= 2 and not text[cursor - 2].isspace():
        return None
    return TriggerMatch(char=char, start=cursor - 1, end=cursor, query="")


def track_trigger(match: TriggerMatch, text: str, cursor: int) -> TriggerMatch | None:
    """Recompute an open trigger after an edit; None once it is closed."""
    if cursor <= match.start or match.start >= len(text) or cursor > len(text):
        return None
    if text[match.start] != match.char:
        return None
    query = text[match.start + 1:cursor]
    if "\n" in query:
        return None
    return replace(match, end=cursor, query=query)
