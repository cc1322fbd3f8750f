"""
Editor - the interaction layer on top of the document model.

- EditorSession: document + markdown change callback + keyboard gestures
- InsertionController: the ``/`` and ``@`` insertion protocol
- SuggestionMenu: generation-guarded async suggestion lists
- SlashMenuItem: block conversion entries of the slash menu
"""

from .triggers import MENTION_TRIGGER, SLASH_TRIGGER, TriggerMatch, detect_trigger, track_trigger
from .menu import SuggestionMenu
from .slash_menu import SlashMenuItem, default_slash_items, filter_slash_items
from .insertion import InsertionController, InsertionError
from .session import EditorSession

__all__ = [
    "MENTION_TRIGGER",
    "SLASH_TRIGGER",
    "TriggerMatch",
    "detect_trigger",
    "track_trigger",
    "SuggestionMenu",
    "SlashMenuItem",
    "default_slash_items",
    "filter_slash_items",
    "InsertionController",
    "InsertionError",
    "EditorSession",
]
