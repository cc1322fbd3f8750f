"""Models for graph entities and mention suggestions."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


EntityKind = Literal["concept", "document"]
EntityOrigin = Literal["resolved", "stub"]


class GraphEntityRef(BaseModel):
    """
    Reference to a knowledge-graph entity.

    Stub entities are allocated locally with a durable id before the backend
    knows about them; they have the exact same shape as resolved ones.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Entity id")
    name: str = Field(..., description="Display name (concept name or document title)")
    kind: EntityKind = Field(..., description="concept or document")
    origin: EntityOrigin = Field(default="resolved", description="resolved or stub")


class Candidate(BaseModel):
    """
    One entry of the mention suggestion menu.

    ``action="link"`` candidates carry a real entity. ``action="create"``
    candidates are the synthetic "create a stub" entries: they carry only the
    kind and the query text, and get an entity when committed.
    """
    model_config = ConfigDict(frozen=True)

    kind: EntityKind
    name: str
    action: Literal["link", "create"] = "link"
    entity: GraphEntityRef | None = None
    lang: str | None = Field(default=None, description="Language of the entity's content")
    description: str | None = None
    updated_at: datetime | None = Field(default=None, description="Recency, used as ranking tiebreak")

    @property
    def id(self) -> str | None:
        return self.entity.id if self.entity is not None else None

    @property
    def is_create(self) -> bool:
        return self.action == "create"

    @classmethod
    def for_entity(
        cls,
        entity: GraphEntityRef,
        *,
        lang: str | None = None,
        description: str | None = None,
        updated_at: datetime | None = None,
    ) -> "Candidate":
        return cls(
            kind=entity.kind,
            name=entity.name,
            entity=entity,
            lang=lang,
            description=description,
            updated_at=updated_at,
        )

    @classmethod
    def create(cls, kind: EntityKind, query: str) -> "Candidate":
        return cls(kind=kind, name=query, action="create")


class SuggestContext(BaseModel):
    doc_lang: str | None = Field(default=None, description="Language of the document being edited")
    exclude_ids: frozenset[str] = Field(default_factory=frozenset, description="Entity ids already linked")
