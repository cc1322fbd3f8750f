"""
SuggestionMenu - async candidate lists guarded by a generation counter.

Every request takes the next generation number. When its response arrives
it is applied only if no newer request (or close) happened meanwhile;
otherwise it is dropped. Nothing is aborted in flight: a late response is
simply ignored.
"""

from __future__ import annotations
import logging
from typing import Awaitable, Callable, Generic, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")


class SuggestionMenu(Generic[T]):

    def __init__(self, trigger: str, provider: Callable[[str], Awaitable[list[T]]]):
        self.trigger = trigger
        self.provider = provider
        self.items: list[T] = []
        self.query: str | None = None
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_open(self) -> bool:
        return self.query is not None

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def update(self, query: str) -> list[T] | None:
        """
        Request items for ``query``.

        Returns the applied items, or None when the response went stale
        before it arrived.
        """
        self._generation += 1
        generation = self._generation
        self.query = query
        items = await self.provider(query)
        if not self.is_current(generation):
            logger.debug("dropping stale %r response for %r (generation %d < %d)", self.trigger, query, generation, self._generation)
            return None
        self.items = list(items)
        return self.items

    def close(self) -> None:
        """Close the menu; responses still in flight will be discarded."""
        self._generation += 1
        self.query = None
        self.items = []
