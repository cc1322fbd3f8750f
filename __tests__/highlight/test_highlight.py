import asyncio

import pytest

from graphnote.highlight import (
    LANGUAGE_ALIASES,
    SUPPORTED_LANGUAGES,
    HighlightEngine,
    is_supported,
    normalize_language,
    plain_spans,
)


class TestLanguages:
    """Tests for alias normalization."""

    @pytest.mark.parametrize("alias,canonical", [
        ("ts", "typescript"),
        ("js", "javascript"),
        ("py", "python"),
        ("sh", "shellscript"),
        ("bash", "shellscript"),
        ("rs", "rust"),
        ("yml", "yaml"),
        ("TS", "typescript"),
        ("python", "python"),
    ])
    def test_aliases(self, alias, canonical):
        assert normalize_language(alias) == canonical

    def test_unknown_passes_through(self):
        assert normalize_language("cobol") == "cobol"
        assert not is_supported("cobol")

    def test_every_alias_targets_a_supported_language(self):
        assert set(LANGUAGE_ALIASES.values()) <= set(SUPPORTED_LANGUAGES)


class TestHighlightEngine:
    """Tests for lazy loading and highlighting."""

    @pytest.mark.asyncio
    async def test_spans_cover_text(self):
        engine = HighlightEngine()
        code = "const answer: number = 42;\n// done"
        spans = await engine.highlight(code, "ts", "light-plus")
        assert "".join(s.text for s in spans) == code
        assert spans[0].start == 0
        assert spans[-1].end == len(code)
        assert any(not s.is_plain for s in spans)

    @pytest.mark.asyncio
    async def test_span_offsets_are_contiguous(self):
        engine = HighlightEngine()
        spans = await engine.highlight("def f(x):\n    return x\n", "python", "dark-plus")
        for prev, cur in zip(spans, spans[1:]):
            assert prev.end == cur.start

    @pytest.mark.asyncio
    async def test_unknown_language_is_plain(self):
        engine = HighlightEngine()
        spans = await engine.highlight("IDENTIFICATION DIVISION.", "cobol", "light-plus")
        assert spans == plain_spans("IDENTIFICATION DIVISION.")
        assert engine.load_counts == {}

    @pytest.mark.asyncio
    async def test_unknown_theme_is_plain(self):
        engine = HighlightEngine()
        spans = await engine.highlight("x = 1", "python", "solarized")
        assert len(spans) == 1
        assert spans[0].is_plain

    @pytest.mark.asyncio
    async def test_failed_grammar_load_is_plain(self):
        engine = HighlightEngine(languages={"klingon": "no-such-lexer"})
        spans = await engine.highlight("qapla'", "klingon", "light-plus")
        assert spans == plain_spans("qapla'")
        assert engine.loaded_languages() == []

    @pytest.mark.asyncio
    async def test_grammar_loaded_once(self):
        """Concurrent requests for one language share a single load."""
        engine = HighlightEngine()
        await asyncio.gather(
            engine.highlight("let a = 1", "ts", "light-plus"),
            engine.highlight("let b = 2", "typescript", "light-plus"),
            engine.highlight("let c = 3", "mts", "dark-plus"),
        )
        await engine.highlight("let d = 4", "ts", "light-plus")
        assert engine.load_counts == {"typescript": 1}
        assert engine.loaded_languages() == ["typescript"]

    @pytest.mark.asyncio
    async def test_empty_code(self):
        engine = HighlightEngine()
        spans = await engine.highlight("", "python", "light-plus")
        assert "".join(s.text for s in spans) == ""
