"""
HighlightEngine - lazy per-language code highlighting for code blocks.

Grammars (Pygments lexers) and themes (Pygments styles) are loaded on first
use and cached for the lifetime of the engine; concurrent requests for the
same language share a single load. Highlighting never raises: an unknown
language, an unknown theme or a failed load yields one unstyled span that
covers the whole text.

Usage:
    engine = HighlightEngine()
    spans = await engine.highlight("const x = 1", "ts", "light-plus")
    "".join(s.text for s in spans) == "const x = 1"
"""

from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Mapping

from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.style import Style
from pygments.styles import get_style_by_name
from pygments.token import Text

from .languages import SUPPORTED_LANGUAGES, SUPPORTED_THEMES, normalize_language


logger = logging.getLogger(__name__)


class HighlightError(Exception):
    pass


@dataclass(frozen=True)
class StyledSpan:
    """
    A run of code text with its resolved style.

    ``start``/``end`` are character offsets into the highlighted text.
    """
    start: int
    end: int
    text: str
    token: str = str(Text)
    color: str | None = None
    background: str | None = None
    bold: bool = False
    italic: bool = False
    underline: bool = False

    @property
    def is_plain(self) -> bool:
        return self.color is None and not (self.bold or self.italic or self.underline)


def plain_spans(code: str) -> list[StyledSpan]:
    return [StyledSpan(start=0, end=len(code), text=code)]


class HighlightEngine:

    def __init__(
        self,
        languages: Mapping[str, str] | None = None,
        themes: Mapping[str, str] | None = None,
    ):
        self._languages = dict(languages if languages is not None else SUPPORTED_LANGUAGES)
        self._themes = dict(themes if themes is not None else SUPPORTED_THEMES)
        self._grammar_tasks: dict[str, asyncio.Task] = {}
        self._theme_tasks: dict[str, asyncio.Task] = {}
        self.load_counts: dict[str, int] = {}

    @property
    def languages(self) -> list[str]:
        return list(self._languages)

    @property
    def themes(self) -> list[str]:
        return list(self._themes)

    def loaded_languages(self) -> list[str]:
        return [lang for lang, task in self._grammar_tasks.items() if task.done() and not task.cancelled() and task.exception() is None]

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    async def load_grammar(self, language: str) -> Lexer | None:
        """Lexer for ``language`` (alias or canonical), or None if unavailable."""
        canonical = normalize_language(language)
        if canonical not in self._languages:
            logger.debug("no grammar for language %r", language)
            return None
        task = self._grammar_tasks.get(canonical)
        if task is None:
            task = asyncio.ensure_future(self._load_lexer(canonical))
            self._grammar_tasks[canonical] = task
        try:
            return await asyncio.shield(task)
        except HighlightError as e:
            logger.warning("grammar %r unavailable: %s", canonical, e)
            return None

    async def load_theme(self, theme: str) -> type[Style] | None:
        if theme not in self._themes:
            logger.warning("unknown highlight theme %r", theme)
            return None
        task = self._theme_tasks.get(theme)
        if task is None:
            task = asyncio.ensure_future(self._load_style(theme))
            self._theme_tasks[theme] = task
        try:
            return await asyncio.shield(task)
        except HighlightError as e:
            logger.warning("theme %r unavailable: %s", theme, e)
            return None

    async def _load_lexer(self, canonical: str) -> Lexer:
        self.load_counts[canonical] = self.load_counts.get(canonical, 0) + 1
        name = self._languages[canonical]
        try:
            return await asyncio.to_thread(get_lexer_by_name, name, stripnl=False, ensurenl=False)
        except Exception as e:
            raise HighlightError(f"cannot load lexer {name!r}: {e}") from e

    async def _load_style(self, theme: str) -> type[Style]:
        name = self._themes[theme]
        try:
            return await asyncio.to_thread(get_style_by_name, name)
        except Exception as e:
            raise HighlightError(f"cannot load style {name!r}: {e}") from e

    # -------------------------------------------------------------------------
    # Highlighting
    # -------------------------------------------------------------------------

    async def highlight(self, code: str, language: str, theme: str) -> list[StyledSpan]:
        lexer = await self.load_grammar(language)
        style = await self.load_theme(theme)
        if lexer is None or style is None:
            return plain_spans(code)
        try:
            return self._tokenize(code, lexer, style)
        except Exception as e:
            logger.warning("highlighting %r failed, rendering plain: %s", language, e)
            return plain_spans(code)

    def _tokenize(self, code: str, lexer: Lexer, style: type[Style]) -> list[StyledSpan]:
        spans: list[StyledSpan] = []
        for start, ttype, value in lexer.get_tokens_unprocessed(code):
            if not value:
                continue
            spans.append(_styled(start, value, ttype, style.style_for_token(ttype)))
        if "".join(s.text for s in spans) != code:
            raise HighlightError("tokens do not cover the input")
        return spans


def _styled(start: int, value: str, ttype: Any, token_style: Mapping[str, Any]) -> StyledSpan:
    color = token_style.get("color")
    background = token_style.get("bgcolor")
    return StyledSpan(
        start=start,
        end=start + len(value),
        text=value,
        token=str(ttype),
        color=f"#{color}" if color else None,
        background=f"#{background}" if background else None,
        bold=bool(token_style.get("bold")),
        italic=bool(token_style.get("italic")),
        underline=bool(token_style.get("underline")),
    )
