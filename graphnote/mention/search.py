"""
Graph search - the service boundary the mention resolver queries.

The real implementation lives in the host application (a REST client) and
may be slow or fail; the resolver guards every call. InMemoryGraphSearch
serves a fixed list of entities and is what tests and demos run against.
"""

from __future__ import annotations
from datetime import datetime
from typing import Iterable, Protocol, runtime_checkable

from .models import Candidate, GraphEntityRef


@runtime_checkable
class GraphSearch(Protocol):

    async def search(self, query: str, lang: str | None = None) -> list[Candidate]:
        ...


class InMemoryGraphSearch:
    """
    Case-insensitive substring search over an in-memory entity list.

    Results come back in insertion order; ranking is the resolver's job.
    """

    def __init__(self, candidates: Iterable[Candidate] | None = None):
        self._candidates: list[Candidate] = list(candidates or [])
        self.calls: list[tuple[str, str | None]] = []

    def add(self, entity: GraphEntityRef, *, lang: str | None = None, description: str | None = None) -> None:
        self._candidates.append(
            Candidate.for_entity(entity, lang=lang, description=description, updated_at=datetime.now())
        )

    def __len__(self) -> int:
        return len(self._candidates)

    async def search(self, query: str, lang: str | None = None) -> list[Candidate]:
        self.calls.append((query, lang))
        needle = query.lower()
        return [c for c in self._candidates if needle in c.name.lower()]


def _concept(id: str, name: str, description: str, updated: str, lang: str = "ko") -> Candidate:
    return Candidate.for_entity(
        GraphEntityRef(id=id, name=name, kind="concept"),
        lang=lang,
        description=description,
        updated_at=datetime.fromisoformat(updated),
    )


def _document(id: str, title: str, updated: str, lang: str = "ko") -> Candidate:
    return Candidate.for_entity(
        GraphEntityRef(id=id, name=title, kind="document"),
        lang=lang,
        updated_at=datetime.fromisoformat(updated),
    )


def sample_candidates() -> list[Candidate]:
    """Seed entities for local development."""
    return [
        _concept("c1", "Web3 Data API", "블록체인 데이터 조회 API", "2024-01-15", lang="en"),
        _concept("c2", "API Key", "API 인증을 위한 고유 키", "2024-01-14", lang="en"),
        _concept("c3", "Endpoint", "API 요청을 받는 URL 경로", "2024-01-13", lang="en"),
        _concept("c4", "Event Log", "블록체인에서 발생한 이벤트 기록", "2024-01-12", lang="en"),
        _concept("c5", "SDK", "소프트웨어 개발 키트", "2024-01-11", lang="en"),
        _concept("c6", "Smart Contract", "블록체인 스마트 계약", "2024-01-10", lang="en"),
        _concept("c7", "BNB Chain", "바이낸스 스마트 체인", "2024-01-09", lang="en"),
        _concept("c8", "Token", "블록체인 토큰", "2024-01-08", lang="en"),
        _document("d1", "API 인증 가이드", "2024-01-15"),
        _document("d2", "시작하기", "2024-01-14"),
        _document("d3", "REST API 개요", "2024-01-13"),
        _document("d4", "Web3 통합 가이드", "2024-01-12"),
        _document("d5", "블록체인 기초", "2024-01-11"),
        _document("d6", "SDK 설치", "2024-01-10"),
        _document("d7", "프로젝트 개요", "2024-01-09"),
    ]
