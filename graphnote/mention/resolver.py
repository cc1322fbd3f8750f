"""
MentionResolver - ranks graph entities for an ``@`` query and allocates stubs.

suggest(query, context):
1. empty query -> only the two "create" candidates
2. ask the graph search (bounded by a timeout; failures count as no results)
3. keep case-insensitive substring matches on the name, minus excluded ids
4. rank per kind: document language first, then prefix matches, then recency
5. keep the top MAX_CANDIDATES_PER_KIND per kind (concepts, then documents)
6. append the two "create" candidates (concept, document) seeded with the query
"""

from __future__ import annotations
import asyncio
import logging
from typing import Callable, Iterable
from uuid import uuid4

from .models import Candidate, EntityKind, GraphEntityRef, SuggestContext
from .search import GraphSearch


logger = logging.getLogger(__name__)

MAX_CANDIDATES_PER_KIND = 5
ENTITY_KINDS: tuple[EntityKind, ...] = ("concept", "document")

StubListener = Callable[[GraphEntityRef], None]


def _generate_stub_id() -> str:
    return f"stub-{uuid4().hex[:12]}"


def rank_candidates(candidates: Iterable[Candidate], query: str, doc_lang: str | None) -> list[Candidate]:
    """
    Order candidates of one kind.

    Sort keys, most significant first: language matches ``doc_lang``,
    name starts with ``query``, newer ``updated_at``. Candidates without a
    timestamp sort after dated ones and otherwise keep their source order.
    """
    needle = query.lower()
    ordered = sorted(
        candidates,
        key=lambda c: c.updated_at.timestamp() if c.updated_at is not None else float("-inf"),
        reverse=True,
    )
    # python's sort is stable, so the recency order survives as the tiebreak
    return sorted(
        ordered,
        key=lambda c: (
            doc_lang is None or c.lang != doc_lang,
            not c.name.lower().startswith(needle),
        ),
    )


class MentionResolver:
    """
    Example:
        resolver = MentionResolver(InMemoryGraphSearch(sample_candidates()))
        items = await resolver.suggest("api", SuggestContext(doc_lang="ko"))
        entity = resolver.resolve(items[0])
    """

    def __init__(
        self,
        search: GraphSearch,
        *,
        timeout: float = 2.0,
        on_stub: StubListener | None = None,
    ):
        self.search = search
        self.timeout = timeout
        self.on_stub = on_stub
        self.stubs: list[GraphEntityRef] = []

    async def suggest(self, query: str, context: SuggestContext | None = None) -> list[Candidate]:
        context = context or SuggestContext()
        create = [Candidate.create(kind, query) for kind in ENTITY_KINDS]
        if not query.strip():
            return create

        results = await self._search(query, context.doc_lang)
        needle = query.lower()
        matches = [
            c for c in results
            if not c.is_create
            and needle in c.name.lower()
            and c.id not in context.exclude_ids
        ]

        suggestions: list[Candidate] = []
        for kind in ENTITY_KINDS:
            of_kind = [c for c in matches if c.kind == kind]
            suggestions.extend(rank_candidates(of_kind, query, context.doc_lang)[:MAX_CANDIDATES_PER_KIND])
        return suggestions + create

    async def _search(self, query: str, lang: str | None) -> list[Candidate]:
        try:
            return list(await asyncio.wait_for(self.search.search(query, lang), timeout=self.timeout))
        except asyncio.TimeoutError:
            logger.warning("graph search timed out after %.1fs for query %r", self.timeout, query)
        except Exception as e:
            logger.warning("graph search failed for query %r: %s", query, e)
        return []

    def create_stub(self, kind: EntityKind, name: str) -> GraphEntityRef:
        """
        Allocate a stub entity with a fresh id.

        Never deduplicates: two calls with the same name give two entities.
        """
        stub = GraphEntityRef(id=_generate_stub_id(), name=name, kind=kind, origin="stub")
        self.stubs.append(stub)
        logger.info("created %s stub %s (%r)", kind, stub.id, name)
        if self.on_stub is not None:
            self.on_stub(stub)
        return stub

    def resolve(self, candidate: Candidate) -> GraphEntityRef:
        """Entity for a chosen candidate; a create candidate allocates a stub."""
        if candidate.is_create or candidate.entity is None:
            return self.create_stub(candidate.kind, candidate.name)
        return candidate.entity
