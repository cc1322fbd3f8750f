"""
Mention - linking document text to knowledge-graph entities.

- GraphEntityRef: a concept or document entity (resolved or stub)
- Candidate: one suggestion menu entry
- GraphSearch: the search service boundary
- MentionResolver: ranking, truncation and stub allocation
"""

from .models import Candidate, EntityKind, GraphEntityRef, SuggestContext
from .search import GraphSearch, InMemoryGraphSearch, sample_candidates
from .resolver import MAX_CANDIDATES_PER_KIND, MentionResolver, rank_candidates

__all__ = [
    "Candidate",
    "EntityKind",
    "GraphEntityRef",
    "SuggestContext",
    "GraphSearch",
    "InMemoryGraphSearch",
    "sample_candidates",
    "MAX_CANDIDATES_PER_KIND",
    "MentionResolver",
    "rank_candidates",
]
